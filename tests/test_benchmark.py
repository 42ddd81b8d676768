"""Tests for the benchmark harness."""

import pytest

from dictmatch.benchmark import garbage_bag, main, make_grid_rules, time_find
from dictmatch.matching import LinearScan, Rule


class TestMakeGridRules:
    """Tests for the synthetic rule grid."""

    def test_default_size(self):
        """Test the default grid has 10**3 - 1 rules."""
        assert len(make_grid_rules()) == 999

    def test_skips_unconstrained_rule(self):
        """Test no grid rule is empty and zeros are left unconstrained."""
        rules = make_grid_rules(3)
        assert len(rules) == 26
        assert all(len(rule) > 0 for rule in rules)
        assert rules[0] == Rule({"c": "1"})
        assert rules[-1] == Rule({"a": "2", "b": "2", "c": "2"})

    def test_custom_keys(self):
        """Test the grid spans the given keys."""
        rules = make_grid_rules(2, keys=("x", "y"))
        assert rules == [Rule({"y": "1"}), Rule({"x": "1"}), Rule({"x": "1", "y": "1"})]


class TestTiming:
    """Tests for timing helpers."""

    def test_garbage_bag(self):
        """Test every key maps to the garbage value."""
        assert garbage_bag(("a", "b")) == {"a": "garbage", "b": "garbage"}

    def test_time_find(self):
        """Test timing returns a non-negative mean."""
        seconds = time_find(LinearScan([{"a": "1"}]), {"a": "2"}, iterations=10)
        assert seconds >= 0

    def test_main(self, capsys):
        """Test the CLI prints a line per strategy."""
        assert main(["--width", "3", "--iterations", "5"]) == 0
        out = capsys.readouterr().out
        assert "26 rules over keys a, b, c" in out
        assert "linear_no_match:" in out
        assert "tree_no_match:" in out


class TestArgumentValidation:
    """Tests for rejecting out-of-range benchmark parameters."""

    def test_time_find_zero_iterations(self):
        """Test zero iterations raises ValueError instead of dividing by zero."""
        with pytest.raises(ValueError, match="iterations must be at least 1"):
            time_find(LinearScan([]), {}, iterations=0)

    def test_negative_width(self):
        """Test a negative grid width raises ValueError."""
        with pytest.raises(ValueError, match="width must be non-negative"):
            make_grid_rules(-1)

    def test_zero_width(self):
        """Test a zero width grid has no rules."""
        assert make_grid_rules(0) == []

    @pytest.mark.parametrize("argv", [
        ["--iterations", "0"],
        ["--iterations", "-5"],
        ["--width", "-1"],
        ["--width", "ten"],
    ])
    def test_main_rejects_bad_arguments(self, argv, capsys):
        """Test the CLI exits with an argument error for invalid values."""
        with pytest.raises(SystemExit) as exc:
            main(argv)
        assert exc.value.code == 2
        assert "argument --" in capsys.readouterr().err
