"""Throughput benchmark comparing LinearScan and LowCardinalityTree.

The rule set is a grid over a few attributes where every rule
constrains a different combination of them. Queries use values no rule
requires, so the linear scan must check every rule before giving up.

Usage:
    python -m dictmatch.benchmark
    python -m dictmatch.benchmark --width 5 --iterations 1000
"""

import argparse
import itertools
import time
from typing import Dict, List, Optional, Sequence

from dictmatch.matching import Bag, Matcher, MatchStrategy, Rule, build_matcher

DEFAULT_KEYS = ('a', 'b', 'c')


def make_grid_rules(width: int = 10, keys: Sequence[str] = DEFAULT_KEYS) -> List[Rule]:
    """Build one rule per combination of values 0..width-1 over keys.

    A 0 leaves the key unconstrained, any other number constrains it to
    that number as a string. The all-zero combination is left out, so
    the result has width ** len(keys) - 1 rules.

    Raises:
        ValueError: If width is negative.
    """
    if width < 0:
        raise ValueError(f"width must be non-negative, got {width}")
    rules = []
    for combo in itertools.islice(
        itertools.product(range(width), repeat=len(keys)), 1, None
    ):
        rules.append(Rule({k: str(v) for k, v in zip(keys, combo) if v > 0}))
    return rules


def garbage_bag(keys: Sequence[str] = DEFAULT_KEYS) -> Dict[str, str]:
    """Return a bag that satisfies none of the grid rules."""
    return {key: 'garbage' for key in keys}


def time_find(matcher: Matcher, bag: Bag, iterations: int = 10000) -> float:
    """Return the mean wall-clock seconds per matcher.find(bag) call.

    Raises:
        ValueError: If iterations is less than 1.
    """
    if iterations < 1:
        raise ValueError(f"iterations must be at least 1, got {iterations}")
    find = matcher.find
    start = time.perf_counter()
    for _ in range(iterations):
        find(bag)
    return (time.perf_counter() - start) / iterations


def _int_at_least(minimum: int):
    """Build an argparse type accepting integers >= minimum."""
    def parse(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer: '{text}'")
        if value < minimum:
            raise argparse.ArgumentTypeError(
                f"must be at least {minimum}, got {value}"
            )
        return value
    return parse


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Returns:
        Exit code (0 for success; argument errors exit with 2)
    """
    parser = argparse.ArgumentParser(
        prog='python -m dictmatch.benchmark',
        description='Time no-match queries against a synthetic rule grid',
    )
    parser.add_argument('--width', type=_int_at_least(0), default=10,
                        help='Values per key in the rule grid (default: 10)')
    parser.add_argument('--iterations', type=_int_at_least(1), default=10000,
                        help='Queries per matcher (default: 10000)')
    args = parser.parse_args(argv)

    rules = make_grid_rules(args.width)
    bag = garbage_bag()
    print(f"{len(rules)} rules over keys {', '.join(DEFAULT_KEYS)}")

    for strategy in MatchStrategy:
        matcher = build_matcher(rules, strategy)
        seconds = time_find(matcher, bag, args.iterations)
        print(f"{strategy.value}_no_match: {seconds * 1e6:.3f} us/query")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
