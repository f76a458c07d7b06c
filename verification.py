"""
Goal verification.

When verification is on, the search appends one of the items below after the
subitems of a successful unigoal, multigoal or (goal-annotated) task
decomposition. Reaching the item means the decomposition is fully resolved;
the item then re-checks the intended condition against the resulting state.
A failed check is returned as an error object, never raised: the search
treats it as a dead end and carries on with the next candidate method.
"""

from dataclasses import dataclass

from errors import MethodVerificationFailed, MultigoalVerificationFailed
from multigoal import Multigoal
from values import format_value


def method_name(fn):
    return getattr(fn, "__name__", repr(fn))


@dataclass(frozen=True, eq=False)
class VerifyUnigoal:
    method: str
    var: str
    arg: str
    value: object
    depth: int

    def __str__(self):
        return f"(_verify_g {self.method} {self.var} {self.arg} {format_value(self.value)} {self.depth})"


@dataclass(frozen=True, eq=False)
class VerifyMultigoal:
    method: str
    goal: Multigoal
    depth: int

    def __str__(self):
        return f"(_verify_mg {self.method} {self.goal!r} {self.depth})"


@dataclass(frozen=True, eq=False)
class VerifyTask:
    method: str
    name: str
    args: tuple
    predicate: object
    depth: int

    def __str__(self):
        args = " ".join(format_value(a) for a in self.args)
        return f"(_verify_task {self.method} ({self.name} {args}) {self.depth})"


VERIFICATION_TYPES = (VerifyUnigoal, VerifyMultigoal, VerifyTask)


def verify_unigoal(state, method, var, arg, value, depth):
    if state.satisfies_unigoal(var, arg, value):
        return None
    return MethodVerificationFailed(method, f"{var}[{arg}] = {format_value(value)}", depth)


def verify_multigoal(state, method, goal, depth):
    if state.satisfies_multigoal(goal):
        return None
    return MultigoalVerificationFailed(method, repr(goal), depth)


def verify_task(state, method, name, args, predicate, depth):
    if predicate(state, *args):
        return None
    args_text = " ".join(format_value(a) for a in args)
    return MethodVerificationFailed(method, f"({name} {args_text})", depth)


def check(item, state):
    """Run the check an item stands for; None on success, else the failure."""
    if isinstance(item, VerifyUnigoal):
        return verify_unigoal(state, item.method, item.var, item.arg, item.value, item.depth)
    if isinstance(item, VerifyMultigoal):
        return verify_multigoal(state, item.method, item.goal, item.depth)
    return verify_task(state, item.method, item.name, item.args, item.predicate, item.depth)
