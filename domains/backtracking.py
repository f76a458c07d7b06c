# domains/backtracking.py
"""
Small domain whose only purpose is to force backtracking.

put_it sets the flag, need0 / need1 require a value, need01 / need10 accept
either value but try them in opposite orders. The first put_it method always
fails, and which of the other two survives depends on what comes next in the
todo list.
"""

from domain import Domain
from plan_items import action
from state import State


def initial_state(name="state0"):
    state = State(name)
    state.set("flag", "value", -1)
    return state


def putv(state, flag_val):
    state.set("flag", "value", flag_val)
    return state


def getv(state, flag_val):
    if state.get("flag", "value") == flag_val:
        return state


def m_err(state):
    return [action("putv", 0), action("getv", 1)]


def m0(state):
    return [action("putv", 0), action("getv", 0)]


def m1(state):
    return [action("putv", 1), action("getv", 1)]


def m_need0(state):
    return [action("getv", 0)]


def m_need1(state):
    return [action("getv", 1)]


def make_domain(name="backtracking"):
    domain = Domain(name)
    domain.declare_actions(putv, getv)
    domain.declare_task_methods("put_it", m_err, m0, m1)
    domain.declare_task_methods("need0", m_need0)
    domain.declare_task_methods("need1", m_need1)
    domain.declare_task_methods("need01", m_need0, m_need1)
    domain.declare_task_methods("need10", m_need1, m_need0)
    return domain
