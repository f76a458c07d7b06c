"""
Depth-first decomposition search.

Two engines share the same expansion rules and explore choice points in the
same order, so they return identical plans for identical inputs:

    RecursiveSearch  - one Python frame per expansion step
    IterativeSearch  - explicit stack of ChoicePoint records, no recursion

A choice point is opened for every Task, unresolved Unigoal and unresolved
Multigoal. Its candidate methods are called lazily, in declaration order;
when the continuation of a candidate fails, the next candidate is tried from
the state and todo list saved in the choice point.
"""

from errors import Generic, InvalidItemType
from log import logger
from plan_items import Action, MultigoalItem, Task, Unigoal, format_todo_list
from state import State
from verification import (
    VERIFICATION_TYPES, VerifyMultigoal, VerifyTask, VerifyUnigoal, check, method_name,
)

STEP = "step"
FAIL = "fail"
CHOOSE = "choose"


class SearchContext:
    """Read-only configuration handed to a search engine for one find_plan call."""

    def __init__(self, domain, verify_goals=True, verbose_level=0):
        self.domain = domain
        self.verify_goals = verify_goals
        self.verbose_level = verbose_level

    def is_verbose(self, level):
        return self.verbose_level >= level

    def log(self, level, message, depth=0):
        if self.verbose_level >= level:
            logger.info("  " * depth + message)


class _Search:
    def __init__(self, context):
        self.context = context
        self.domain = context.domain

    def seek_plan(self, state, todo_list):
        raise NotImplementedError

    # --- expansion rules shared by both engines ---------------------------

    def expand(self, item, state, depth):
        """
        Look at the item at the front of the todo list.

        Returns:
            (STEP, (new_state, emitted_action_or_None)) when the item resolves directly,
            (FAIL, None) when this branch is a dead end,
            (CHOOSE, methods) when a choice point has to be opened.
        """
        ctx = self.context
        if isinstance(item, Action):
            new_state = self.apply_action(item, state, depth)
            if new_state is None:
                return FAIL, None
            return STEP, (new_state, item)

        if isinstance(item, Task):
            methods = self.domain.get_task_methods(item.name)
            ctx.log(3, f"depth {depth} task {item}: {len(methods)} methods", depth)
            if not methods:
                return FAIL, None
            return CHOOSE, methods

        if isinstance(item, Unigoal):
            if state.satisfies_unigoal(item.var, item.arg, item.value):
                ctx.log(3, f"depth {depth} goal {item} already achieved", depth)
                return STEP, (state, None)
            methods = self.domain.get_unigoal_methods(item.var)
            ctx.log(3, f"depth {depth} goal {item}: {len(methods)} methods", depth)
            if not methods:
                return FAIL, None
            return CHOOSE, methods

        if isinstance(item, MultigoalItem):
            if state.satisfies_multigoal(item.goal):
                ctx.log(3, f"depth {depth} multigoal {item} already achieved", depth)
                return STEP, (state, None)
            methods = self.domain.get_multigoal_methods()
            ctx.log(3, f"depth {depth} multigoal {item}: {len(methods)} methods", depth)
            if not methods:
                return FAIL, None
            return CHOOSE, methods

        if isinstance(item, VERIFICATION_TYPES):
            failure = check(item, state)
            if failure is not None:
                ctx.log(3, f"depth {depth} {failure}", depth)
                return FAIL, None
            ctx.log(3, f"depth {depth} verified {item}", depth)
            return STEP, (state, None)

        raise InvalidItemType(item, depth)

    def apply_action(self, item, state, depth):
        fn = self.domain.get_action(item.name)
        if fn is None:
            self.context.log(3, f"depth {depth} action {item}: no such action", depth)
            return None
        result = fn(state.copy(), *item.args)
        if result is None or result is False:
            self.context.log(3, f"depth {depth} action {item}: not applicable", depth)
            return None
        if not isinstance(result, State):
            raise Generic(f"Action '{item.name}' returned {result!r}; expected a State or None")
        self.context.log(3, f"depth {depth} action {item}: applied", depth)
        return result

    def refine(self, item, method, state, depth):
        """Call one candidate method; return its subitems (plus verification) or None.

        The method works on copies, so the snapshot held for the remaining
        candidates and the goal checked by verification stay as they were.
        """
        scratch = state.copy(state.name)
        if isinstance(item, Task):
            subitems = method(scratch, *item.args)
        elif isinstance(item, Unigoal):
            subitems = method(scratch, item.arg, item.value)
        else:
            subitems = method(scratch, item.goal.copy(item.goal.name))

        name = method_name(method)
        if subitems is None or subitems is False:
            self.context.log(3, f"depth {depth} method {name}: not applicable", depth)
            return None
        if not isinstance(subitems, (list, tuple)):
            raise Generic(f"Method '{name}' returned {subitems!r}; expected a list of plan items or None")

        subitems = tuple(subitems)
        if self.context.is_verbose(3):
            self.context.log(3, f"depth {depth} method {name}: {format_todo_list(subitems)}", depth)
        if self.context.verify_goals:
            check_item = self.verification_item(item, name, depth)
            if check_item is not None:
                subitems += (check_item,)
        return subitems

    def verification_item(self, item, name, depth):
        if isinstance(item, Unigoal):
            return VerifyUnigoal(name, item.var, item.arg, item.value, depth)
        if isinstance(item, MultigoalItem):
            return VerifyMultigoal(name, item.goal, depth)
        predicate = self.domain.get_task_goal(item.name)
        if predicate is None:
            return None
        return VerifyTask(name, item.name, item.args, predicate, depth)


class RecursiveSearch(_Search):
    """Backtracking through the Python call stack."""

    def seek_plan(self, state, todo_list):
        try:
            plan = self._seek(state, tuple(todo_list), (), 0)
        except RecursionError as exc:
            raise Generic("Recursion limit reached during search; use the iterative strategy") from exc
        return list(plan) if plan is not None else None

    def _seek(self, state, todo, plan, depth):
        if self.context.is_verbose(2):
            self.context.log(2, f"depth {depth} todo_list {format_todo_list(todo)}", depth)
        if not todo:
            self.context.log(3, f"depth {depth} no more tasks or goals, return plan", depth)
            return plan

        item, rest = todo[0], todo[1:]
        outcome, payload = self.expand(item, state, depth)
        if outcome == STEP:
            new_state, emitted = payload
            if emitted is not None:
                plan = plan + (emitted,)
            return self._seek(new_state, rest, plan, depth + 1)
        if outcome == FAIL:
            return None

        for method in payload:
            subitems = self.refine(item, method, state, depth)
            if subitems is None:
                continue
            result = self._seek(state, subitems + rest, plan, depth + 1)
            if result is not None:
                return result
        self.context.log(3, f"depth {depth} could not resolve {item}", depth)
        return None


class ChoicePoint:
    """An open choice point: the snapshot to restore and the next method to try."""

    __slots__ = ("item", "state", "rest", "plan", "depth", "methods", "next_index")

    def __init__(self, item, state, rest, plan, depth, methods):
        self.item = item
        self.state = state
        self.rest = rest
        self.plan = plan
        self.depth = depth
        self.methods = methods
        self.next_index = 0

    def has_next(self):
        return self.next_index < len(self.methods)

    def next_method(self):
        method = self.methods[self.next_index]
        self.next_index += 1
        return method


class IterativeSearch(_Search):
    """Backtracking with an explicit stack of choice points."""

    def seek_plan(self, state, todo_list):
        choice_points = []
        current = (state, tuple(todo_list), (), 0)

        while True:
            if current is None:
                current = self._backtrack(choice_points)
                if current is None:
                    return None

            state, todo, plan, depth = current
            if self.context.is_verbose(2):
                self.context.log(2, f"depth {depth} todo_list {format_todo_list(todo)}", depth)
            if not todo:
                self.context.log(3, f"depth {depth} no more tasks or goals, return plan", depth)
                return list(plan)

            item, rest = todo[0], todo[1:]
            outcome, payload = self.expand(item, state, depth)
            if outcome == STEP:
                new_state, emitted = payload
                if emitted is not None:
                    plan = plan + (emitted,)
                current = (new_state, rest, plan, depth + 1)
            elif outcome == FAIL:
                current = None
            else:
                choice_points.append(ChoicePoint(item, state, rest, plan, depth, payload))
                current = None

    def _backtrack(self, choice_points):
        """Resume the innermost choice point that still has an applicable method."""
        while choice_points:
            point = choice_points[-1]
            while point.has_next():
                method = point.next_method()
                subitems = self.refine(point.item, method, point.state, point.depth)
                if subitems is not None:
                    return point.state, subitems + point.rest, point.plan, point.depth + 1
            self.context.log(3, f"depth {point.depth} could not resolve {point.item}", point.depth)
            choice_points.pop()
        return None
