# state.py
import itertools
import json

from log import logger
from values import check_value, copy_value, format_value, values_equal


_copy_ids = itertools.count()


def _copy_vars(data):
    return {var: {arg: copy_value(v) for arg, v in args.items()} for var, args in data.items()}


class State:
    """
    World state for planning: a two-level map var -> arg -> value.

    An absent (var, arg) pair means "undefined", which is different from a
    stored None. Actions receive a private copy of the state, so the only
    place a State is ever mutated is through set/remove on that copy.
    """

    def __init__(self, name="state", variables=None):
        self.name = name
        self.data = {}
        if variables:
            for var, args in variables.items():
                for arg, value in args.items():
                    self.set(var, arg, value)

    def set(self, var, arg, value):
        self.data.setdefault(var, {})[arg] = check_value(value)

    def get(self, var, arg, default=None):
        args = self.data.get(var)
        if args is None or arg not in args:
            return default
        return args[arg]

    def has(self, var):
        return var in self.data

    def has_arg(self, var, arg):
        return arg in self.data.get(var, {})

    def remove(self, var, arg):
        args = self.data.get(var)
        if args is None or arg not in args:
            return None
        value = args.pop(arg)
        if not args:
            del self.data[var]
        return value

    def var_names(self):
        return list(self.data)

    def var_args(self, var):
        args = self.data.get(var)
        return list(args) if args is not None else None

    def items(self):
        for var, args in self.data.items():
            for arg, value in args.items():
                yield var, arg, value

    def copy(self, new_name=None):
        """Return a deep copy; unnamed copies are labelled '<name>_copy_<n>'."""
        if new_name is None:
            new_name = f"{self.name}_copy_{next(_copy_ids)}"
        clone = State(new_name)
        clone.data = _copy_vars(self.data)
        return clone

    def satisfies_unigoal(self, var, arg, value):
        if not self.has_arg(var, arg):
            return False
        return values_equal(self.data[var][arg], value)

    def satisfies_multigoal(self, goal):
        for var, arg, value in goal.items():
            if not self.satisfies_unigoal(var, arg, value):
                return False
        return True

    def unsatisfied_goals(self, goal):
        unsatisfied = {}
        for var, arg, value in goal.items():
            if not self.satisfies_unigoal(var, arg, value):
                unsatisfied.setdefault(var, {})[arg] = copy_value(value)
        return unsatisfied

    def apply_changes(self, other):
        for var, arg, value in other.items():
            self.set(var, arg, copy_value(value))

    def to_dict(self):
        return {"name": self.name, "variables": _copy_vars(self.data)}

    @classmethod
    def from_dict(cls, data):
        return cls(data.get("name", "state"), data.get("variables", {}))

    def to_json(self, indent=2):
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text):
        return cls.from_dict(json.loads(text))

    def display(self, heading="State"):
        logger.info(describe_vars(f"{heading} {self.name}:", self.data, "(no state variables)"))

    def __eq__(self, other):
        if not isinstance(other, State):
            return NotImplemented
        if self.data.keys() != other.data.keys():
            return False
        return all(values_equal(self.data[var], other.data[var]) for var in self.data)

    __hash__ = None

    def __repr__(self):
        return f"<State {self.name}>"


def describe_vars(title, data, empty_text):
    """Multi-line dump of a var -> arg -> value map, shared with Multigoal."""
    lines = [title, "-" * len(title)]
    if not data:
        lines.append(f"  {empty_text}")
    for var, args in data.items():
        if not args:
            lines.append(f"  - {var} = {{}}")
            continue
        lines.append(f"  - {var} = {{")
        for arg, value in args.items():
            lines.append(f"      '{arg}': {format_value(value)},")
        lines.append("    }")
    return "\n".join(lines)
