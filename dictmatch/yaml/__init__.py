"""YAML rule files for dictmatch.

This module loads an ordered rule list, plus a small config section,
from a YAML document.

Example rules.yaml:
    config:
      strategy: tree

    rules:
      - {a: "1", b: "2"}
      - a: "1"
      - b: "2"

Usage:
    from dictmatch.yaml import parse_yaml_file
    rule_file = parse_yaml_file('rules.yaml')

CLI:
    python -m dictmatch.yaml rules.yaml -q a=1,b=2
"""

from .parser import parse_yaml_file, parse_yaml_string, RuleFile, RuleParseError
from .runner import run_yaml, main

__all__ = [
    'parse_yaml_file',
    'parse_yaml_string',
    'RuleFile',
    'RuleParseError',
    'run_yaml',
    'main',
]
