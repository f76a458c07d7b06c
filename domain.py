# domain.py
import itertools

from errors import InvalidDomainConfiguration
from log import logger
from plan_items import MultigoalItem, Unigoal

_copy_ids = itertools.count()


def _check_name(kind, name):
    if not isinstance(name, str) or not name:
        raise InvalidDomainConfiguration(f"{kind} name must be a non-empty string, got {name!r}")


def _check_callable(kind, name, fn):
    if not callable(fn):
        raise InvalidDomainConfiguration(f"{kind} '{name}' must be callable, got {fn!r}")


class Domain:
    """
    Registry of actions, commands and methods for one planning domain.

    Declaration order is the order in which the planner tries methods, so two
    domains with the same methods declared in a different order can yield
    different (still valid) plans. Actions and commands hold one function per
    name (the last declaration wins); methods accumulate.

    Call contracts:
        action / command:  fn(state, *args) -> State or None
        task method:       fn(state, *args) -> list of plan items or None
        unigoal method:    fn(state, arg, value) -> list of plan items or None
        multigoal method:  fn(state, multigoal) -> list of plan items or None
    """

    def __init__(self, name):
        _check_name("Domain", name)
        self.name = name
        self._actions = {}
        self._commands = {}
        self._task_methods = {}
        self._unigoal_methods = {}
        self._multigoal_methods = []
        self._task_goals = {}

    # --- declarations -----------------------------------------------------

    def declare_action(self, name, fn):
        _check_name("Action", name)
        _check_callable("Action", name, fn)
        self._actions[name] = fn
        return fn

    def declare_actions(self, *fns):
        for fn in fns:
            self.declare_action(getattr(fn, "__name__", None), fn)

    def declare_command(self, name, fn):
        _check_name("Command", name)
        _check_callable("Command", name, fn)
        self._commands[name] = fn
        return fn

    def declare_commands(self, *fns):
        for fn in fns:
            self.declare_command(getattr(fn, "__name__", None), fn)

    def declare_task_method(self, task_name, fn):
        _check_name("Task", task_name)
        _check_callable("Task method", task_name, fn)
        self._task_methods.setdefault(task_name, []).append(fn)
        return fn

    def declare_task_methods(self, task_name, *fns):
        for fn in fns:
            self.declare_task_method(task_name, fn)

    def declare_unigoal_method(self, var_name, fn):
        _check_name("State variable", var_name)
        _check_callable("Unigoal method", var_name, fn)
        self._unigoal_methods.setdefault(var_name, []).append(fn)
        return fn

    def declare_unigoal_methods(self, var_name, *fns):
        for fn in fns:
            self.declare_unigoal_method(var_name, fn)

    def declare_multigoal_method(self, fn):
        _check_callable("Multigoal method", getattr(fn, "__name__", "?"), fn)
        self._multigoal_methods.append(fn)
        return fn

    def declare_multigoal_methods(self, *fns):
        for fn in fns:
            self.declare_multigoal_method(fn)

    def declare_task_goal(self, task_name, predicate):
        """Record the intended effect of a task, checked when goal verification is on."""
        _check_name("Task", task_name)
        _check_callable("Task goal", task_name, predicate)
        self._task_goals[task_name] = predicate
        return predicate

    # --- lookups ----------------------------------------------------------

    def get_action(self, name):
        return self._actions.get(name)

    def get_command(self, name):
        return self._commands.get(name)

    def get_task_methods(self, task_name):
        return tuple(self._task_methods.get(task_name, ()))

    def get_unigoal_methods(self, var_name):
        return tuple(self._unigoal_methods.get(var_name, ()))

    def get_multigoal_methods(self):
        return tuple(self._multigoal_methods)

    def get_task_goal(self, task_name):
        return self._task_goals.get(task_name)

    def has_action(self, name):
        return name in self._actions

    def has_command(self, name):
        return name in self._commands

    def has_task_methods(self, task_name):
        return bool(self._task_methods.get(task_name))

    def has_unigoal_methods(self, var_name):
        return bool(self._unigoal_methods.get(var_name))

    def action_names(self):
        return list(self._actions)

    def command_names(self):
        return list(self._commands)

    def task_names(self):
        return list(self._task_methods)

    def unigoal_var_names(self):
        return list(self._unigoal_methods)

    # --- misc -------------------------------------------------------------

    def copy(self, new_name=None):
        """Copy the registries; the registered functions themselves are shared."""
        if new_name is None:
            new_name = f"{self.name}_copy_{next(_copy_ids)}"
        clone = Domain(new_name)
        clone._actions = dict(self._actions)
        clone._commands = dict(self._commands)
        clone._task_methods = {k: list(v) for k, v in self._task_methods.items()}
        clone._unigoal_methods = {k: list(v) for k, v in self._unigoal_methods.items()}
        clone._multigoal_methods = list(self._multigoal_methods)
        clone._task_goals = dict(self._task_goals)
        return clone

    def describe(self):
        def names(fns):
            return ", ".join(getattr(fn, "__name__", repr(fn)) for fn in fns)

        lines = [f"Domain name: {self.name}",
                 f"-- Actions: {', '.join(self._actions) or '(none)'}",
                 f"-- Commands: {', '.join(self._commands) or '(none)'}"]
        if self._task_methods:
            lines.append("-- Task methods:")
            lines.extend(f"   {task}: {names(fns)}" for task, fns in self._task_methods.items())
        if self._unigoal_methods:
            lines.append("-- Unigoal methods:")
            lines.extend(f"   {var}: {names(fns)}" for var, fns in self._unigoal_methods.items())
        if self._multigoal_methods:
            lines.append(f"-- Multigoal methods: {names(self._multigoal_methods)}")
        return "\n".join(lines)

    def display(self):
        logger.info(self.describe())

    def __repr__(self):
        return f"<Domain {self.name}>"


def m_split_multigoal(state, goal):
    """
    Stock multigoal method: achieve the unachieved unigoals one at a time, in
    the multigoal's order, then come back to the multigoal itself in case a
    later goal undid an earlier one.
    """
    pending = [Unigoal(var, arg, value) for var, arg, value in goal.items()
               if not state.satisfies_unigoal(var, arg, value)]
    if not pending:
        return []
    return pending + [MultigoalItem(goal)]
