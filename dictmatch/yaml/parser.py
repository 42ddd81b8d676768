"""YAML parsing and validation for rule files.

This module handles parsing rule files and validating their structure.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from dictmatch.matching.protocols import MatchStrategy, Rule


@dataclass
class RuleFile:
    """Parsed rule file."""
    config: Dict[str, Any] = field(default_factory=dict)
    rules: List[Rule] = field(default_factory=list)


class RuleParseError(Exception):
    """Error parsing or validating a rule file."""
    pass


def parse_yaml_file(path: Union[str, Path]) -> RuleFile:
    """Parse and validate a rule file.

    Args:
        path: Path to the YAML file

    Returns:
        RuleFile with parsed configuration and rules

    Raises:
        RuleParseError: If the file is invalid or malformed
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rule file not found: {path}")

    with open(path) as f:
        return _load(f)


def parse_yaml_string(content: str) -> RuleFile:
    """Parse rule file content from a string.

    Args:
        content: YAML content as string

    Returns:
        RuleFile with parsed configuration and rules
    """
    return _load(content)


def _load(stream) -> RuleFile:
    try:
        data = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        raise RuleParseError(f"Invalid YAML syntax: {e}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise RuleParseError("YAML root must be a mapping")

    return _validate_yaml_data(data)


def _validate_yaml_data(data: Dict[str, Any]) -> RuleFile:
    """Validate parsed YAML data structure.

    Args:
        data: Parsed YAML dictionary

    Returns:
        Validated RuleFile

    Raises:
        RuleParseError: If validation fails
    """
    config = data.get('config', {})
    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise RuleParseError("'config' must be a mapping")

    if 'strategy' in config:
        try:
            MatchStrategy.from_name(str(config['strategy']))
        except ValueError as e:
            raise RuleParseError(f"config: {e}")

    rules = data.get('rules', [])
    if rules is None:
        rules = []
    if not isinstance(rules, list):
        raise RuleParseError("'rules' must be a list")

    return RuleFile(
        config=config,
        rules=[_validate_rule(rule, i) for i, rule in enumerate(rules)],
    )


def _validate_rule(rule: Any, index: int) -> Rule:
    """Validate a single rule definition.

    Args:
        rule: Rule mapping (None stands for an empty rule)
        index: Index in rules list (for error messages)

    Returns:
        Rule with every value converted to a string

    Raises:
        RuleParseError: If validation fails
    """
    if rule is None:
        return Rule()

    if not isinstance(rule, dict):
        raise RuleParseError(f"Rule {index} must be a mapping")

    constraints: Dict[str, str] = {}
    for key, value in rule.items():
        if not isinstance(key, str):
            raise RuleParseError(f"Rule {index}: key {key!r} must be a string")
        constraints[key] = _scalar_to_str(value, index, key)
    return Rule(constraints)


def _scalar_to_str(value: Any, index: int, key: str) -> str:
    """Convert a YAML scalar to the string a bag value is compared against.

    Raises:
        RuleParseError: If value is null or a collection
    """
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (str, int, float)):
        return str(value)
    raise RuleParseError(
        f"Rule {index}: value for '{key}' must be a string or number, "
        f"got {type(value).__name__}"
    )
