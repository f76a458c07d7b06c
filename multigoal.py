# multigoal.py
import itertools

from log import logger
from state import describe_vars
from values import check_value, copy_value, values_equal

_copy_ids = itertools.count()


class Multigoal:
    """
    A conjunctive goal: every (var, arg, value) triple must hold in the state.

    Entries that are absent from the goal impose no constraint.
    """

    def __init__(self, name="goal", goals=None):
        self.name = name
        self.goals = {}
        if goals:
            for var, args in goals.items():
                for arg, value in args.items():
                    self.set_goal(var, arg, value)

    def set_goal(self, var, arg, value):
        self.goals.setdefault(var, {})[arg] = check_value(value)

    def get_goal(self, var, arg, default=None):
        args = self.goals.get(var)
        if args is None or arg not in args:
            return default
        return args[arg]

    def has_goal_var(self, var):
        return var in self.goals

    def has_goal_arg(self, var, arg):
        return arg in self.goals.get(var, {})

    def remove_goal(self, var, arg):
        args = self.goals.get(var)
        if args is None or arg not in args:
            return None
        value = args.pop(arg)
        if not args:
            del self.goals[var]
        return value

    def goal_var_names(self):
        return list(self.goals)

    def goal_args(self, var):
        args = self.goals.get(var)
        return list(args) if args is not None else None

    def items(self):
        for var, args in self.goals.items():
            for arg, value in args.items():
                yield var, arg, value

    def goal_count(self):
        return sum(len(args) for args in self.goals.values())

    def is_empty(self):
        return self.goal_count() == 0

    def copy(self, new_name=None):
        if new_name is None:
            new_name = f"{self.name}_copy_{next(_copy_ids)}"
        clone = Multigoal(new_name)
        clone.goals = {var: {arg: copy_value(v) for arg, v in args.items()}
                       for var, args in self.goals.items()}
        return clone

    def is_satisfied_by(self, state):
        return state.satisfies_multigoal(self)

    def unsatisfied_goals(self, state):
        return state.unsatisfied_goals(self)

    def to_unigoals(self):
        from plan_items import Unigoal
        return [Unigoal(var, arg, value) for var, arg, value in self.items()]

    @classmethod
    def from_unigoals(cls, name, triples):
        goal = cls(name)
        for var, arg, value in triples:
            goal.set_goal(var, arg, value)
        return goal

    def to_dict(self):
        return {"name": self.name,
                "goals": {var: {arg: copy_value(v) for arg, v in args.items()}
                          for var, args in self.goals.items()}}

    @classmethod
    def from_dict(cls, data):
        return cls(data.get("name", "goal"), data.get("goals", {}))

    def display(self, heading="Multigoal"):
        logger.info(describe_vars(f"{heading} {self.name}:", self.goals, "(no goal variables)"))

    def __eq__(self, other):
        if not isinstance(other, Multigoal):
            return NotImplemented
        if self.goals.keys() != other.goals.keys():
            return False
        return all(values_equal(self.goals[var], other.goals[var]) for var in self.goals)

    __hash__ = None

    def __repr__(self):
        return f"<Multigoal {self.name}>"
