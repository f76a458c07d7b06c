"""
Plan / execute / replan loop, after run_lazy_lookahead in Ghallab, Nau and
Traverso, "Automated Planning and Acting" (2016):

    loop up to max_tries times:
        plan = find_plan(state, todo_list)
        if there is no plan, or the plan is empty: return state
        for each action in plan:
            execute the matching command ("c_<action>", else the action itself)
            if it fails: replan from the state reached so far
"""

from errors import Generic
from log import logger
from plan_items import format_todo_list
from state import State

COMMAND_PREFIX = "c_"


def _ordinal(n):
    if 10 <= n % 100 <= 20:
        return f"{n}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def resolve_command(domain, action_name):
    """Return (name, fn) of what to execute for an action, or (name, None)."""
    command_name = COMMAND_PREFIX + action_name
    command = domain.get_command(command_name)
    if command is not None:
        return command_name, command
    return action_name, domain.get_action(action_name)


def execute_plan(planner, state, plan):
    """
    Execute plan actions in order until one fails.

    Returns:
        tuple: (state reached, True if every action succeeded)
    """
    verbose = planner.verbose_level
    for step in plan:
        name, fn = resolve_command(planner.domain, step.name)
        if fn is None:
            if verbose >= 1:
                logger.info(f"RLL> WARNING: no command or action {step.name}; will call find_plan.")
            return state, False
        if verbose >= 1:
            if name == step.name:
                logger.info(f"RLL> {COMMAND_PREFIX}{step.name} not defined, using {step.name} instead")
            logger.info(f"RLL> Command: {name} {list(step.args)}")

        new_state = fn(state.copy(), *step.args)
        if new_state is None or new_state is False:
            if verbose >= 1:
                logger.info(f"RLL> WARNING: command {name} failed; will call find_plan.")
            return state, False
        if not isinstance(new_state, State):
            raise Generic(f"Command '{name}' returned {new_state!r}; expected a State or None")
        if verbose >= 2:
            new_state.display()
        state = new_state
    return state, True


def run_lazy_lookahead(planner, state, todo_list, max_tries):
    """
    Interleave planning and acting until the todo list is done or max_tries runs out.

    Args:
        planner (HTNPlanner): Planner whose domain supplies actions and commands.
        state (State): Current world state; it is not modified.
        todo_list (list): Tasks, goals and actions to accomplish.
        max_tries (int): Upper bound on the number of find_plan calls.

    Returns:
        State: The state reached. Errors raised by find_plan propagate unchanged.
    """
    if isinstance(max_tries, bool) or not isinstance(max_tries, int) or max_tries < 0:
        raise Generic(f"max_tries must be a non-negative integer, got {max_tries!r}")
    if not isinstance(state, State):
        raise Generic(f"run_lazy_lookahead needs a State, got {state!r}")

    verbose = planner.verbose_level
    todo_list = list(todo_list)
    if verbose >= 1:
        logger.info(f"RLL> run_lazy_lookahead, verbose = {verbose}, max_tries = {max_tries}")
        logger.info(f"RLL> initial state: {state.name}")
        logger.info(f"RLL> To do: {format_todo_list(todo_list)}")

    for tries in range(1, max_tries + 1):
        if verbose >= 1:
            logger.info(f"RLL> {_ordinal(tries)} call to find_plan:")
        plan = planner.find_plan(state, todo_list)
        if plan is None:
            if verbose >= 1:
                logger.info("RLL> find_plan has failed; returning the current state.")
            return state
        if not plan:
            if verbose >= 1:
                logger.info(f"RLL> Empty plan => success after {tries} calls to find_plan.")
            if verbose >= 2:
                state.display("RLL> final state")
            return state

        state, completed = execute_plan(planner, state, plan)
        if completed and verbose >= 1:
            logger.info("RLL> Plan ended; will call find_plan again.")

    if verbose >= 1:
        logger.info("RLL> Too many tries, giving up.")
    if verbose >= 2:
        state.display("RLL> final state")
    return state
