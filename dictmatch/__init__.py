"""dictmatch: first-match lookup of attribute rules.

See dictmatch.matching for the indexes and dictmatch.yaml for loading
rules from YAML files.
"""

from .matching import (
    Bag,
    LinearScan,
    LowCardinalityTree,
    MatchStrategy,
    Matcher,
    Rule,
    RuleTable,
    build_matcher,
)

__all__ = [
    'Bag',
    'LinearScan',
    'LowCardinalityTree',
    'MatchStrategy',
    'Matcher',
    'Rule',
    'RuleTable',
    'build_matcher',
]
