"""
Items that make up todo lists and plans.

A todo list mixes the four kinds below; a plan returned by find_plan holds
Action items only.
"""

from dataclasses import dataclass, field

from multigoal import Multigoal
from values import check_value, format_value, values_equal


def _args_equal(a, b):
    return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))


@dataclass(frozen=True, eq=False)
class Action:
    """A primitive step, applied through the domain's action function."""
    name: str
    args: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(check_value(a) for a in self.args))

    def __eq__(self, other):
        if not isinstance(other, Action):
            return NotImplemented
        return self.name == other.name and _args_equal(self.args, other.args)

    __hash__ = None

    def __str__(self):
        return "(" + " ".join([self.name] + [format_value(a) for a in self.args]) + ")"


@dataclass(frozen=True, eq=False)
class Task:
    """An abstract step, refined by the domain's task methods."""
    name: str
    args: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(check_value(a) for a in self.args))

    def __eq__(self, other):
        if not isinstance(other, Task):
            return NotImplemented
        return self.name == other.name and _args_equal(self.args, other.args)

    __hash__ = None

    def __str__(self):
        return "(" + " ".join([self.name] + [format_value(a) for a in self.args]) + ")"


@dataclass(frozen=True, eq=False)
class Unigoal:
    """Goal that state variable var[arg] has the given value."""
    var: str
    arg: str
    value: object = None

    def __post_init__(self):
        object.__setattr__(self, "value", check_value(self.value))

    def __eq__(self, other):
        if not isinstance(other, Unigoal):
            return NotImplemented
        return (self.var, self.arg) == (other.var, other.arg) and values_equal(self.value, other.value)

    __hash__ = None

    def __str__(self):
        return f"({self.var} {self.arg} {format_value(self.value)})"


@dataclass(frozen=True, eq=False)
class MultigoalItem:
    """Todo-list wrapper around a Multigoal; owns its own copy of the goal."""
    goal: Multigoal = field(default_factory=Multigoal)

    def __post_init__(self):
        object.__setattr__(self, "goal", self.goal.copy(self.goal.name))

    def __eq__(self, other):
        if not isinstance(other, MultigoalItem):
            return NotImplemented
        return self.goal.name == other.goal.name and self.goal == other.goal

    __hash__ = None

    def __str__(self):
        return repr(self.goal)


PLAN_ITEM_TYPES = (Action, Task, Unigoal, MultigoalItem)


def action(name, *args):
    return Action(name, args)


def task(name, *args):
    return Task(name, args)


def unigoal(var, arg, value):
    return Unigoal(var, arg, value)


def multigoal(goal):
    return MultigoalItem(goal)


def format_todo_list(items):
    return "[" + ", ".join(str(item) for item in items) + "]"
