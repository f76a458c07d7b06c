"""
Planner and PlannerBuilder tests.
"""

import logging

import pytest

from domains import backtracking
from errors import Generic, InvalidDomainConfiguration, InvalidItemType, InvalidVerboseLevel
from htn_planner import HTNPlanner, PlannerBuilder, PlanningStrategy, pyhop
from multigoal import Multigoal
from plan_items import action, task
from state import State


class TestPlannerBuilder:

    def test_domain_required(self):
        with pytest.raises(InvalidDomainConfiguration):
            PlannerBuilder().build()

    @pytest.mark.parametrize("level", [4, -1, True, "2"])
    def test_invalid_verbose_level(self, level):
        with pytest.raises(InvalidVerboseLevel):
            PlannerBuilder().with_verbose_level(level)

    def test_defaults(self, backtracking_domain):
        planner = PlannerBuilder().with_domain(backtracking_domain).build()
        assert planner.strategy is PlanningStrategy.ITERATIVE
        assert planner.verbose_level == 0
        assert planner.verify_goals is True

    def test_options(self, backtracking_domain):
        planner = (PlannerBuilder()
                   .with_domain(backtracking_domain)
                   .with_strategy("recursive")
                   .with_verbose_level(2)
                   .with_goal_verification(False)
                   .build())
        assert planner.strategy is PlanningStrategy.RECURSIVE
        assert planner.verbose_level == 2
        assert planner.verify_goals is False

    def test_unknown_strategy(self):
        with pytest.raises(Generic):
            PlannerBuilder().with_strategy("breadth_first")

    def test_multigoals_registered_by_id(self, blocks_domain):
        goal = Multigoal("sussman", {"pos": {"a": "b"}})
        planner = PlannerBuilder().with_domain(blocks_domain).with_multigoals([goal]).build()
        stored = planner.get_multigoal("goal_sussman")
        assert stored == goal
        assert stored is not goal
        assert planner.get_multigoal("goal_other") is None

    def test_planner_needs_a_domain(self):
        with pytest.raises(InvalidDomainConfiguration):
            HTNPlanner("not a domain")


class TestPlanner:

    def test_with_options_leaves_original(self, backtracking_domain):
        planner = PlannerBuilder().with_domain(backtracking_domain).build()
        other = planner.with_options(strategy="recursive", verbose_level=1)
        assert planner.strategy is PlanningStrategy.ITERATIVE
        assert other.strategy is PlanningStrategy.RECURSIVE
        assert other.verbose_level == 1
        assert other.domain is backtracking_domain

    def test_with_options_rejects_unknown(self, backtracking_domain):
        planner = PlannerBuilder().with_domain(backtracking_domain).build()
        with pytest.raises(Generic):
            planner.with_options(depth_limit=3)

    def test_empty_todo_list(self, planner_for, backtracking_domain):
        planner = planner_for(backtracking_domain)
        assert planner.find_plan(backtracking.initial_state(), []) == []

    def test_state_is_not_modified(self, planner_for, backtracking_domain):
        planner = planner_for(backtracking_domain)
        state = backtracking.initial_state()
        before = state.copy()
        planner.find_plan(state, [task("put_it"), task("need1")])
        assert state == before

    def test_find_plan_needs_a_state(self, planner_for, backtracking_domain):
        with pytest.raises(Generic):
            planner_for(backtracking_domain).find_plan({"flag": {"value": 0}}, [])

    def test_invalid_item(self, planner_for, backtracking_domain):
        planner = planner_for(backtracking_domain)
        with pytest.raises(InvalidItemType):
            planner.find_plan(backtracking.initial_state(), [("putv", 0)])

    def test_planner_is_reusable(self, planner_for, backtracking_domain):
        planner = planner_for(backtracking_domain)
        state = backtracking.initial_state()
        first = planner.find_plan(state, [task("put_it"), task("need1")])
        second = planner.find_plan(state, [task("put_it"), task("need1")])
        assert first == second

    def test_verbose_output(self, backtracking_domain, caplog):
        planner = PlannerBuilder().with_domain(backtracking_domain).with_verbose_level(3).build()
        with caplog.at_level(logging.INFO, logger="htn"):
            planner.find_plan(backtracking.initial_state(), [task("put_it"), task("need1")])
        assert "FP> find_plan" in caplog.text
        assert "FP> result = [(putv 1), (getv 1), (getv 1)]" in caplog.text
        assert "method m_err" in caplog.text

    def test_silent_at_level_zero(self, backtracking_domain, caplog):
        planner = PlannerBuilder().with_domain(backtracking_domain).build()
        with caplog.at_level(logging.INFO, logger="htn"):
            planner.find_plan(backtracking.initial_state(), [task("put_it")])
        assert caplog.text == ""


class TestPyhop:

    def test_module_function(self, backtracking_domain):
        with pytest.deprecated_call():
            plan = pyhop(backtracking_domain, backtracking.initial_state(), [task("put_it"), task("need0")])
        assert plan == [action("putv", 0), action("getv", 0), action("getv", 0)]

    def test_planner_method(self, backtracking_domain):
        planner = PlannerBuilder().with_domain(backtracking_domain).build()
        with pytest.deprecated_call():
            plan = planner.pyhop(backtracking.initial_state(), [task("put_it")])
        assert plan == [action("putv", 0), action("getv", 0)]

    def test_notice_logged_when_verbose(self, backtracking_domain, caplog):
        with caplog.at_level(logging.INFO, logger="htn"), pytest.deprecated_call():
            pyhop(backtracking_domain, State("empty"), [], verbose_level=1)
        assert "backward compatibility" in caplog.text
