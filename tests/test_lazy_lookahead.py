"""
Lazy lookahead (plan, act, replan) tests.
"""

import logging

import pytest

from domains import backtracking, simple_htn
from errors import Generic, InvalidItemType
from lazy_lookahead import _ordinal, execute_plan, resolve_command, run_lazy_lookahead
from plan_items import action, task


def record_calls(planner):
    """Make planner log the state of every find_plan call into the returned list."""
    states = []
    original = planner.find_plan

    def find_plan(state, todo_list):
        states.append(state.copy(state.name))
        return original(state, todo_list)

    planner.find_plan = find_plan
    return states


class TestRunLazyLookahead:

    def test_zero_tries(self, planner_for, travel_domain, travel_state):
        planner = planner_for(travel_domain)
        calls = record_calls(planner)
        final = planner.run_lazy_lookahead(travel_state, [task("travel", "alice", "park")], max_tries=0)
        assert final == travel_state
        assert calls == []

    def test_plan_executed_then_confirmed(self, planner_for, travel_domain, travel_state):
        planner = planner_for(travel_domain)
        calls = record_calls(planner)
        final = planner.run_lazy_lookahead(travel_state, [task("travel", "alice", "park")])
        assert final.get("loc", "alice") == "park"
        assert final.get("cash", "alice") == 14.5
        assert len(calls) == 2
        assert travel_state.get("loc", "alice") == "home_a"

    def test_replans_from_state_reached(self, planner_for, travel_state):
        planner = planner_for(simple_htn.make_domain(failures={"c_ride_taxi": 1}))
        calls = record_calls(planner)
        final = planner.run_lazy_lookahead(travel_state, [task("travel", "alice", "park")])
        assert len(calls) == 3
        # call_taxi went through before ride_taxi failed
        assert calls[1].get("loc", "alice") == "taxi1"
        assert calls[1].get("loc", "taxi1") == "home_a"
        assert final.get("loc", "alice") == "park"
        assert final.get("owe", "alice") == 0

    @pytest.mark.parametrize("max_tries", [1, 3])
    def test_bounded_by_max_tries(self, planner_for, travel_state, max_tries):
        planner = planner_for(simple_htn.make_domain(failures={"c_walk": 100}))
        calls = record_calls(planner)
        final = planner.run_lazy_lookahead(travel_state, [task("travel", "bob", "park")], max_tries=max_tries)
        assert len(calls) == max_tries
        assert final.get("loc", "bob") == "home_b"

    def test_no_plan_returns_current_state(self, planner_for, travel_domain, travel_state):
        travel_state.set("cash", "alice", 1)
        planner = planner_for(travel_domain)
        calls = record_calls(planner)
        final = planner.run_lazy_lookahead(travel_state, [task("travel", "alice", "park")])
        assert final == travel_state
        assert len(calls) == 1

    def test_actions_stand_in_for_missing_commands(self, planner_for, backtracking_domain):
        planner = planner_for(backtracking_domain)
        final = planner.run_lazy_lookahead(backtracking.initial_state(), [task("put_it"), task("need1")])
        assert final.get("flag", "value") == 1

    def test_errors_propagate(self, planner_for, travel_domain, travel_state):
        planner = planner_for(travel_domain)
        with pytest.raises(InvalidItemType):
            planner.run_lazy_lookahead(travel_state, [("travel", "alice", "park")])

    @pytest.mark.parametrize("max_tries", [-1, True, "3", 2.0])
    def test_invalid_max_tries(self, planner_for, travel_domain, travel_state, max_tries):
        with pytest.raises(Generic):
            run_lazy_lookahead(planner_for(travel_domain), travel_state, [], max_tries)

    def test_needs_a_state(self, planner_for, travel_domain):
        with pytest.raises(Generic):
            run_lazy_lookahead(planner_for(travel_domain), None, [], 3)

    def test_verbose_output(self, travel_domain, travel_state, build_planner, caplog):
        planner = build_planner(travel_domain, verbose_level=1)
        with caplog.at_level(logging.INFO, logger="htn"):
            planner.run_lazy_lookahead(travel_state, [task("travel", "bob", "park")])
        assert "RLL> 1st call to find_plan:" in caplog.text
        assert "RLL> Command: c_walk" in caplog.text
        assert "RLL> Empty plan => success after 2 calls to find_plan." in caplog.text


class TestExecutePlan:

    def test_prefers_commands(self, travel_domain):
        name, fn = resolve_command(travel_domain, "walk")
        assert name == "c_walk"
        assert fn is travel_domain.get_command("c_walk")

    def test_falls_back_to_actions(self, backtracking_domain):
        name, fn = resolve_command(backtracking_domain, "putv")
        assert name == "putv"
        assert fn is backtracking.putv

    def test_unknown_action(self, planner_for, backtracking_domain):
        assert resolve_command(backtracking_domain, "teleport") == ("teleport", None)
        state = backtracking.initial_state()
        reached, completed = execute_plan(planner_for(backtracking_domain), state,
                                          [action("putv", 1), action("teleport")])
        assert completed is False
        assert reached.get("flag", "value") == 1

    def test_command_must_return_state(self, planner_for, backtracking_domain):
        backtracking_domain.declare_command("c_putv", lambda state, v: "done")
        with pytest.raises(Generic):
            execute_plan(planner_for(backtracking_domain), backtracking.initial_state(), [action("putv", 1)])


@pytest.mark.parametrize("n, text", [
    (1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"),
    (13, "13th"), (21, "21st"), (22, "22nd"), (111, "111th"),
])
def test_ordinal(n, text):
    assert _ordinal(n) == text
