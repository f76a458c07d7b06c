# domains/simple_htn.py
"""
Travel by foot or by taxi, written as an HTN: the 'travel' task is refined by
task methods into walk / call_taxi / ride_taxi / pay_driver actions.

Rigid facts (object types and distances) never change, so they live in this
module rather than in the State.
"""

from domain import Domain
from log import logger
from plan_items import action
from state import State

TYPES = {
    "person": ["alice", "bob"],
    "location": ["home_a", "home_b", "park", "station"],
    "taxi": ["taxi1", "taxi2"],
}

DIST = {
    ("home_a", "park"): 8,
    ("home_b", "park"): 2,
    ("station", "home_a"): 1,
    ("station", "home_b"): 7,
    ("home_a", "home_b"): 7,
    ("station", "park"): 9,
}


def is_a(obj, kind):
    return obj in TYPES.get(kind, ())


def distance(x, y):
    """Symmetric lookup in DIST; None for pairs with no known distance."""
    return DIST.get((x, y), DIST.get((y, x)))


def taxi_rate(dist):
    return 1.5 + 0.5 * dist


def initial_state(name="state0"):
    state = State(name)
    state.set("loc", "alice", "home_a")
    state.set("loc", "bob", "home_b")
    state.set("loc", "taxi1", "park")
    state.set("loc", "taxi2", "station")
    state.set("cash", "alice", 20)
    state.set("cash", "bob", 15)
    state.set("owe", "alice", 0)
    state.set("owe", "bob", 0)
    return state


# --- actions ---------------------------------------------------------------

def walk(state, p, x, y):
    if is_a(p, "person") and is_a(x, "location") and is_a(y, "location") and x != y:
        if state.get("loc", p) == x:
            state.set("loc", p, y)
            return state


def call_taxi(state, p, x):
    if is_a(p, "person") and is_a(x, "location"):
        state.set("loc", "taxi1", x)
        state.set("loc", p, "taxi1")
        return state


def ride_taxi(state, p, y):
    taxi = state.get("loc", p)
    if is_a(p, "person") and is_a(taxi, "taxi") and is_a(y, "location"):
        x = state.get("loc", taxi)
        if is_a(x, "location") and x != y:
            state.set("loc", taxi, y)
            state.set("owe", p, taxi_rate(distance(x, y)))
            return state


def pay_driver(state, p, y):
    if is_a(p, "person") and is_a(y, "location"):
        if state.get("cash", p) >= state.get("owe", p):
            state.set("cash", p, state.get("cash", p) - state.get("owe", p))
            state.set("owe", p, 0)
            state.set("loc", p, y)
            return state


# --- methods ---------------------------------------------------------------
# The same four functions serve as 'travel' task methods here and as 'loc'
# unigoal methods in simple_hgn: both are called as fn(state, p, y).

def do_nothing(state, p, y):
    if is_a(p, "person") and is_a(y, "location"):
        if state.get("loc", p) == y:
            return []


def travel_by_foot(state, p, y):
    if is_a(p, "person") and is_a(y, "location"):
        x = state.get("loc", p)
        if is_a(x, "location") and x != y and distance(x, y) <= 2:
            return [action("walk", p, x, y)]


def travel_by_taxi(state, p, y):
    if is_a(p, "person") and is_a(y, "location"):
        x = state.get("loc", p)
        if is_a(x, "location") and x != y and state.get("cash", p) >= taxi_rate(distance(x, y)):
            return [action("call_taxi", p, x), action("ride_taxi", p, y), action("pay_driver", p, y)]


def finish_taxi_ride(state, p, y):
    """Someone already sitting in a taxi: ride on if needed, then pay."""
    if is_a(p, "person") and is_a(y, "location"):
        taxi = state.get("loc", p)
        if not is_a(taxi, "taxi"):
            return None
        if state.get("loc", taxi) == y:
            return [action("pay_driver", p, y)]
        return [action("ride_taxi", p, y), action("pay_driver", p, y)]


TRAVEL_METHODS = (do_nothing, travel_by_foot, travel_by_taxi, finish_taxi_ride)


# --- commands --------------------------------------------------------------

def flaky(name, command, failures):
    """
    Wrap a command so it fails a set number of times before it starts working.

    Args:
        name (str): Command name, e.g. 'c_ride_taxi'.
        command (callable): The working command.
        failures (dict): Remaining failure counts by command name; updated in place.
    """
    def run(state, *args):
        if failures.get(name, 0) > 0:
            failures[name] -= 1
            logger.info(f"{name} {list(args)}: command failed")
            return None
        return command(state, *args)

    run.__name__ = name
    return run


def make_domain(name="simple_htn", failures=None):
    """
    Build the travel HTN domain.

    Args:
        name (str): Domain name.
        failures (dict): Optional {command name: number of times it fails first},
            used to exercise replanning in run_lazy_lookahead.
    """
    failures = failures if failures is not None else {}
    domain = Domain(name)
    domain.declare_actions(walk, call_taxi, ride_taxi, pay_driver)
    for act in (walk, call_taxi, ride_taxi, pay_driver):
        command_name = "c_" + act.__name__
        domain.declare_command(command_name, flaky(command_name, act, failures))
    domain.declare_task_methods("travel", *TRAVEL_METHODS)
    domain.declare_task_goal("travel", arrived)
    return domain


def arrived(state, p, y):
    return state.get("loc", p) == y
