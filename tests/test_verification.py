"""
Verification item tests.
"""

from errors import MethodVerificationFailed, MultigoalVerificationFailed
from multigoal import Multigoal
from state import State
from verification import VerifyMultigoal, VerifyTask, VerifyUnigoal, check, method_name


class TestChecks:

    def setup_method(self):
        self.state = State("s", {"loc": {"alice": "park"}})

    def test_unigoal_holds(self):
        assert check(VerifyUnigoal("m", "loc", "alice", "park", 2), self.state) is None

    def test_unigoal_failure_is_returned(self):
        failure = check(VerifyUnigoal("m_walk", "loc", "alice", "home", 2), self.state)
        assert isinstance(failure, MethodVerificationFailed)
        assert failure.method == "m_walk"
        assert failure.depth == 2
        assert "loc[alice] = home" in str(failure)

    def test_multigoal_failure_is_returned(self):
        goal = Multigoal("g", {"loc": {"alice": "park", "bob": "park"}})
        failure = check(VerifyMultigoal("m_split", goal, 0), self.state)
        assert isinstance(failure, MultigoalVerificationFailed)
        assert failure.multigoal == "<Multigoal g>"

    def test_task_predicate(self):
        def arrived(state, p, y):
            return state.get("loc", p) == y

        assert check(VerifyTask("m", "travel", ("alice", "park"), arrived, 1), self.state) is None
        failure = check(VerifyTask("m", "travel", ("alice", "home"), arrived, 1), self.state)
        assert isinstance(failure, MethodVerificationFailed)
        assert failure.goal == "(travel alice home)"

    def test_str(self):
        assert str(VerifyUnigoal("m", "loc", "alice", None, 3)) == "(_verify_g m loc alice null 3)"

    def test_method_name(self):
        def m_walk(state):
            return []

        assert method_name(m_walk) == "m_walk"
