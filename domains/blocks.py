# domains/blocks.py
"""
Blocks world with a single hand.

State variables:
    pos[b]       - 'table', 'hand' or the block b sits on
    clear[b]     - True if nothing is on b
    holding[hand] - the block in the hand, or False

The goal-driven side follows the block-stacking algorithm of Gupta and Nau
(1992): repeatedly move a clear block to its final place if that place is
ready, otherwise move a waiting block out of the way to the table. The same
choice of move backs both the multigoal method m_moveblocks and the
'move_blocks' task method, so the HGN and HTN formulations produce the same
plans.
"""

from domain import Domain
from multigoal import Multigoal
from plan_items import action, multigoal, task, unigoal
from state import State

DONE = "done"
INACCESSIBLE = "inaccessible"
MOVE_TO_TABLE = "move-to-table"
MOVE_TO_BLOCK = "move-to-block"
WAITING = "waiting"


def make_state(name, positions):
    """
    Build a blocks state from a {block: support} map with the hand empty.

    Args:
        name (str): State name.
        positions (dict): Where each block sits: 'table' or another block.

    Returns:
        State: pos, clear and holding filled in consistently.
    """
    state = State(name)
    supports = set(positions.values())
    for block, support in positions.items():
        state.set("pos", block, support)
    for block in positions:
        state.set("clear", block, block not in supports)
    state.set("holding", "hand", False)
    return state


def sussman_state(name="sussman"):
    return make_state(name, {"a": "table", "b": "table", "c": "a"})


def sussman_goal(name="sussman"):
    return Multigoal(name, {"pos": {"a": "b", "b": "c"}})


def tower_state(name="tower"):
    return make_state(name, {"a": "b", "b": "table", "c": "table"})


def tower_goal(name="reverse_tower"):
    return Multigoal(name, {"pos": {"c": "b", "b": "a", "a": "table"}})


# --- actions ---------------------------------------------------------------

def pickup(state, x):
    if state.get("pos", x) == "table" and state.get("clear", x) is True \
            and state.get("holding", "hand") is False:
        state.set("pos", x, "hand")
        state.set("clear", x, False)
        state.set("holding", "hand", x)
        return state


def unstack(state, b, c):
    if state.get("pos", b) == c and c != "table" and state.get("clear", b) is True \
            and state.get("holding", "hand") is False:
        state.set("pos", b, "hand")
        state.set("clear", b, False)
        state.set("holding", "hand", b)
        state.set("clear", c, True)
        return state


def putdown(state, b):
    if state.get("pos", b) == "hand":
        state.set("pos", b, "table")
        state.set("clear", b, True)
        state.set("holding", "hand", False)
        return state


def stack(state, b, c):
    if state.get("pos", b) == "hand" and state.get("clear", c) is True:
        state.set("pos", b, c)
        state.set("clear", b, True)
        state.set("holding", "hand", False)
        state.set("clear", c, False)
        return state


# --- helpers ---------------------------------------------------------------

def all_clear_blocks(state):
    return [b for b in state.var_args("clear") or [] if state.get("clear", b) is True]


def is_done(b, state, goal):
    """True if b and everything under it are where the goal wants them."""
    while b != "table":
        wanted = goal.get_goal("pos", b)
        if wanted is not None and wanted != state.get("pos", b):
            return False
        if state.get("pos", b) == "table":
            return True
        b = state.get("pos", b)
    return True


def status(b, state, goal):
    if is_done(b, state, goal):
        return DONE
    if state.get("clear", b) is not True:
        return INACCESSIBLE
    wanted = goal.get_goal("pos", b)
    if wanted is None or wanted == "table":
        return MOVE_TO_TABLE
    if is_done(wanted, state, goal) and state.get("clear", wanted) is True:
        return MOVE_TO_BLOCK
    return WAITING


def next_move(state, goal):
    """Return (block, destination) for the next move, or None if no move helps."""
    clear_blocks = all_clear_blocks(state)
    for b in clear_blocks:
        s = status(b, state, goal)
        if s == MOVE_TO_TABLE:
            return b, "table"
        if s == MOVE_TO_BLOCK:
            return b, goal.get_goal("pos", b)
    # nothing can go to its final place yet; unblock by clearing a waiting block
    for b in clear_blocks:
        if status(b, state, goal) == WAITING and state.get("pos", b) != "table":
            return b, "table"
    return None


# --- task methods ----------------------------------------------------------

def m_take(state, b):
    if state.get("clear", b) is True and state.get("holding", "hand") is False:
        support = state.get("pos", b)
        if support == "table":
            return [action("pickup", b)]
        return [action("unstack", b, support)]


def m_put(state, b, dest):
    if state.get("holding", "hand") == b:
        if dest == "table":
            return [action("putdown", b)]
        if state.get("clear", dest) is True:
            return [action("stack", b, dest)]


def m_move_one(state, b, dest):
    return [task("take", b), task("put", b, dest)]


# --- unigoal methods for 'pos' ---------------------------------------------

def m_pos_move(state, b, dest):
    if dest == "hand" or state.get("clear", b) is not True:
        return None
    if dest != "table" and state.get("clear", dest) is not True:
        return None
    return [task("take", b), task("put", b, dest)]


def m_pos_take(state, b, dest):
    if dest == "hand":
        return [task("take", b)]


# --- multigoal method ------------------------------------------------------

def m_moveblocks(state, goal):
    move = next_move(state, goal)
    if move is None:
        return None
    b, dest = move
    return [unigoal("pos", b, dest), multigoal(goal)]


def make_domain(name="blocks", goals=None):
    """
    Build the blocks domain.

    Args:
        name (str): Domain name.
        goals (dict): Multigoals by id, reachable through the 'move_blocks'
            task, which takes a goal id as its only argument.
    """
    goals = dict(goals or {})

    def m_move_blocks(state, goal_id):
        goal = goals.get(goal_id)
        if goal is None:
            return None
        move = next_move(state, goal)
        if move is None:
            return None
        b, dest = move
        return [task("move_one", b, dest), task("move_blocks", goal_id)]

    def m_blocks_in_place(state, goal_id):
        goal = goals.get(goal_id)
        if goal is not None and state.satisfies_multigoal(goal):
            return []

    def blocks_in_place(state, goal_id):
        goal = goals.get(goal_id)
        return goal is not None and state.satisfies_multigoal(goal)

    domain = Domain(name)
    domain.declare_actions(pickup, unstack, putdown, stack)
    domain.declare_task_methods("take", m_take)
    domain.declare_task_methods("put", m_put)
    domain.declare_task_methods("move_one", m_move_one)
    domain.declare_task_methods("move_blocks", m_blocks_in_place, m_move_blocks)
    domain.declare_task_goal("move_blocks", blocks_in_place)
    domain.declare_unigoal_methods("pos", m_pos_move, m_pos_take)
    domain.declare_multigoal_method(m_moveblocks)
    return domain
