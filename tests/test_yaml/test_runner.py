"""Tests for the YAML rule runner and CLI."""

import pytest

from dictmatch.matching import MatchStrategy
from dictmatch.yaml import main, run_yaml


REFERENCE_YAML = """
rules:
  - {a: "1", b: "2"}
  - a: "1"
  - b: "2"
"""


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text(REFERENCE_YAML)
    return path


class TestRunYAML:
    """Tests for run_yaml."""

    def test_reference_scenario(self, rules_file):
        """Test each bag gets its first matching rule."""
        results = run_yaml(rules_file, [
            {"a": "1", "b": "2", "c": "3"},
            {"a": "1", "b": "garbage", "c": "3"},
            {"a": "garbage", "b": "2", "c": "3"},
            {"a": "garbage", "b": "garbage", "c": "3"},
        ])
        assert results == [0, 1, 2, None]

    def test_strategy_from_config(self, tmp_path, capsys):
        """Test config.strategy selects the matcher."""
        path = tmp_path / "rules.yaml"
        path.write_text("config: {strategy: linear}\n" + REFERENCE_YAML)

        assert run_yaml(path, [{"b": "2"}], verbose=True) == [2]
        out = capsys.readouterr().out
        assert "Loaded 3 rule(s)" in out
        assert "Using linear matcher" in out

    def test_strategy_override(self, tmp_path, capsys):
        """Test an explicit strategy overrides config."""
        path = tmp_path / "rules.yaml"
        path.write_text("config: {strategy: linear}\n" + REFERENCE_YAML)

        run_yaml(path, [], strategy=MatchStrategy.TREE, verbose=True)
        assert "Using tree matcher" in capsys.readouterr().out

    def test_verbose_key_universe(self, rules_file, capsys):
        """Test verbose tree runs report the sorted key universe."""
        run_yaml(rules_file, [], verbose=True)
        assert "Key universe: a, b" in capsys.readouterr().out

    def test_verbose_key_universe_empty(self, tmp_path, capsys):
        """Test a rule file with no constrained keys reports none."""
        path = tmp_path / "rules.yaml"
        path.write_text("rules:\n  - {}\n")
        run_yaml(path, [{}], verbose=True)
        assert "Key universe: (none)" in capsys.readouterr().out

    def test_verbose_linear_omits_key_universe(self, rules_file, capsys):
        """Test the linear matcher has no key universe to report."""
        run_yaml(rules_file, [], strategy=MatchStrategy.LINEAR, verbose=True)
        assert "Key universe" not in capsys.readouterr().out


class TestMain:
    """Tests for the command line entry point."""

    def test_queries(self, rules_file, capsys):
        """Test each query prints its result on its own line."""
        code = main([
            str(rules_file),
            "-q", "a=1,b=2",
            "-q", "a=1",
            "--query", "a=x,b=y",
        ])
        assert code == 0
        assert capsys.readouterr().out.splitlines() == ["0", "1", "no match"]

    def test_strategy_flag(self, rules_file, capsys):
        """Test --strategy is accepted."""
        assert main([str(rules_file), "-s", "linear", "-q", "b=2"]) == 0
        assert capsys.readouterr().out.strip() == "2"

    def test_missing_file(self, tmp_path, capsys):
        """Test a missing file exits with 1 and reports on stderr."""
        assert main([str(tmp_path / "missing.yaml"), "-q", "a=1"]) == 1
        assert "Rule file not found" in capsys.readouterr().err

    def test_invalid_file(self, tmp_path, capsys):
        """Test an invalid rule file exits with 1."""
        path = tmp_path / "bad.yaml"
        path.write_text("rules: 5\n")
        assert main([str(path)]) == 1
        assert "'rules' must be a list" in capsys.readouterr().err

    def test_help_names_module_command(self, capsys):
        """Test --help shows the python -m invocation."""
        with pytest.raises(SystemExit) as exc:
            main(["--help"])
        assert exc.value.code == 0
        assert capsys.readouterr().out.startswith("usage: python -m dictmatch.yaml")

    def test_malformed_query(self, rules_file):
        """Test a query without '=' is an argument error."""
        with pytest.raises(SystemExit) as exc:
            main([str(rules_file), "-q", "a"])
        assert exc.value.code == 2
