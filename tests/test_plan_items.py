"""
Plan item tests.
"""

import pytest

from errors import InvalidValueError
from multigoal import Multigoal
from plan_items import (
    Action, MultigoalItem, Task, Unigoal, action, format_todo_list, multigoal, task, unigoal,
)


class TestPlanItems:

    def test_helpers_build_items(self):
        assert action("walk", "alice", "home", "park") == Action("walk", ("alice", "home", "park"))
        assert task("travel", "alice", "park") == Task("travel", ("alice", "park"))
        assert unigoal("loc", "alice", "park") == Unigoal("loc", "alice", "park")

    def test_action_and_task_differ(self):
        assert action("travel", "alice") != task("travel", "alice")

    def test_args_compared_strictly(self):
        assert action("getv", 1) != action("getv", True)
        assert action("getv", 1) != action("getv", 1.0)

    def test_args_validated(self):
        with pytest.raises(InvalidValueError):
            action("walk", object())

    def test_str(self):
        assert str(action("putv", 0)) == "(putv 0)"
        assert str(task("put_it")) == "(put_it)"
        assert str(unigoal("pos", "a", "table")) == "(pos a table)"
        assert format_todo_list([action("putv", 0), task("need1")]) == "[(putv 0), (need1)]"

    def test_multigoal_item_owns_a_copy(self):
        goal = Multigoal("g", {"pos": {"a": "b"}})
        item = multigoal(goal)
        goal.set_goal("pos", "b", "c")
        assert not item.goal.has_goal_arg("pos", "b")
        assert item.goal.name == "g"

    def test_multigoal_item_equality_uses_name(self):
        first = MultigoalItem(Multigoal("g", {"pos": {"a": "b"}}))
        assert first == MultigoalItem(Multigoal("g", {"pos": {"a": "b"}}))
        assert first != MultigoalItem(Multigoal("h", {"pos": {"a": "b"}}))

    def test_items_are_frozen(self):
        item = action("walk", "alice")
        with pytest.raises(AttributeError):
            item.name = "run"
