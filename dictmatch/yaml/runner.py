"""Rule file runner.

This module provides the main entry point for answering queries
against rules loaded from a YAML file.
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from dictmatch.matching import LowCardinalityTree, MatchStrategy, build_matcher
from .parser import RuleParseError, parse_yaml_file


def run_yaml(
    yaml_path: Union[str, Path],
    bags: Sequence[Dict[str, str]],
    strategy: Optional[MatchStrategy] = None,
    verbose: bool = False,
) -> List[Optional[int]]:
    """Load rules from a YAML file and match each bag against them.

    Args:
        yaml_path: Path to the YAML file
        bags: Inputs to match, in order
        strategy: Override the strategy from config (default: tree)
        verbose: Print progress information

    Returns:
        Matching rule index (or None) for each bag

    Example:
        results = run_yaml('rules.yaml', [{'a': '1'}])
    """
    yaml_path = Path(yaml_path)
    rule_file = parse_yaml_file(yaml_path)

    if strategy is None:
        strategy = MatchStrategy.from_name(
            str(rule_file.config.get('strategy', MatchStrategy.TREE.value))
        )

    matcher = build_matcher(rule_file.rules, strategy)

    if verbose:
        print(f"Loaded {len(rule_file.rules)} rule(s) from {yaml_path}")
        print(f"Using {strategy.value} matcher")
        if isinstance(matcher, LowCardinalityTree):
            print(f"Key universe: {', '.join(matcher.keys) or '(none)'}")

    results = []
    for bag in bags:
        index = matcher.find(bag)
        if verbose:
            print(f"  {bag} -> {_format_result(index)}")
        results.append(index)
    return results


def _format_result(index: Optional[int]) -> str:
    return 'no match' if index is None else str(index)


def _parse_query(text: str) -> Dict[str, str]:
    """Parse 'key=value,key=value' into a bag."""
    bag: Dict[str, str] = {}
    for pair in text.split(','):
        if not pair:
            continue
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise argparse.ArgumentTypeError(
                f"invalid query '{text}': expected key=value pairs"
            )
        bag[key] = value
    return bag


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for rule file errors)
    """
    parser = argparse.ArgumentParser(
        prog='python -m dictmatch.yaml',
        description='Find the first rule in a YAML rule file matching each query',
    )
    parser.add_argument(
        'yaml_file',
        help='Path to YAML rule file',
    )
    parser.add_argument(
        '-q', '--query',
        action='append',
        default=[],
        type=_parse_query,
        metavar='KEY=VALUE[,KEY=VALUE...]',
        help='Input bag to match (repeatable)',
    )
    parser.add_argument(
        '-s', '--strategy',
        choices=[s.value for s in MatchStrategy],
        default=None,
        help='Matcher to use (overrides config.strategy)',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Print progress information',
    )

    args = parser.parse_args(argv)

    strategy = MatchStrategy(args.strategy) if args.strategy else None

    try:
        results = run_yaml(
            args.yaml_file,
            args.query,
            strategy=strategy,
            verbose=args.verbose,
        )
    except (RuleParseError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for index in results:
        print(_format_result(index))
    return 0
