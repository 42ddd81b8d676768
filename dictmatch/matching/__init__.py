"""First-match rule indexes.

Given rules in priority order, each constraining some attributes to
exact values, find the lowest-index rule satisfied by an input bag:

- LinearScan: O(n) scan of every rule (reference oracle)
- LowCardinalityTree: tree keyed by attribute, fast when few distinct
  attributes are referenced across all rules

Example:
    from dictmatch.matching import RuleTable

    table = RuleTable([
        {"a": "1", "b": "2"},
        {"a": "1"},
        {"b": "2"},
    ])

    table.find({"a": "1", "b": "garbage"})  # Returns 1
"""

from .protocols import Bag, MatchStrategy, Matcher, Rule, as_rule
from .tree import Branch, Leaf, LowCardinalityTree, Node
from .indexes import LinearScan
from .engine import RuleTable, build_matcher

__all__ = [
    # Protocols and types
    'Bag',
    'MatchStrategy',
    'Matcher',
    'Rule',
    'as_rule',
    # Tree nodes
    'Branch',
    'Leaf',
    'Node',
    # Indexes
    'LinearScan',
    'LowCardinalityTree',
    # Main entry points
    'RuleTable',
    'build_matcher',
]
