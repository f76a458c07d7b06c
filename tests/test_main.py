"""
Driver tests.
"""

import pytest

import main


class TestMain:

    def test_all_scenarios_pass(self, tmp_path, capsys):
        code = main.main(["--log-file", str(tmp_path / "planner.log")])
        out = capsys.readouterr().out
        assert code == 0, out
        assert f"All {len(main.SCENARIOS)} scenarios passed." in out

    @pytest.mark.parametrize("strategy", ["recursive", "iterative"])
    def test_selected_scenarios(self, tmp_path, capsys, strategy):
        code = main.main(["sussman", "backtracking", "--strategy", strategy,
                          "--log-file", str(tmp_path / "planner.log")])
        out = capsys.readouterr().out
        assert code == 0
        assert "sussman: ok" in out
        assert "[(unstack c a), (putdown c), (pickup b), (stack b c), (pickup a), (stack a b)]" in out

    def test_unknown_scenario(self, capsys):
        assert main.main(["nope"]) == 2
        assert "Unknown scenarios: nope" in capsys.readouterr().out

    @pytest.mark.parametrize("level", ["high", "5", "-1"])
    def test_bad_verbose_level(self, level):
        with pytest.raises(SystemExit):
            main.parse_args(["--verbose", level])

    def test_out_of_range_verbose_is_a_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main.main(["sussman", "--verbose", "5"])
        assert exc.value.code == 2
        assert "invalid choice" in capsys.readouterr().err
