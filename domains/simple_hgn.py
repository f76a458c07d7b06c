# domains/simple_hgn.py
"""
The travel world of simple_htn driven by goals instead of tasks: the travel
methods are declared as unigoal methods for 'loc', and multigoals are split
into their unachieved unigoals.
"""

from domain import Domain, m_split_multigoal
from domains import simple_htn
from multigoal import Multigoal

initial_state = simple_htn.initial_state


def everyone_at(location, people=("alice", "bob"), name="everyone_at"):
    goal = Multigoal(name)
    for p in people:
        goal.set_goal("loc", p, location)
    return goal


def make_domain(name="simple_hgn"):
    domain = Domain(name)
    domain.declare_actions(simple_htn.walk, simple_htn.call_taxi,
                           simple_htn.ride_taxi, simple_htn.pay_driver)
    domain.declare_unigoal_methods("loc", simple_htn.travel_by_foot, simple_htn.travel_by_taxi,
                                   simple_htn.finish_taxi_ride)
    domain.declare_multigoal_method(m_split_multigoal)
    return domain
