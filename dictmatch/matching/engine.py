"""Rule table that owns a rule list and the matcher built from it.

Matchers are immutable, so changing rules means building a new one.
RuleTable does that rebuild and swaps the new matcher in as a single
reference assignment, so readers never see a half-built index.
"""

from typing import Iterable, NamedTuple, Optional, Tuple

from .indexes import LinearScan
from .protocols import Bag, Matcher, MatchStrategy, Rule, RuleLike, as_rule
from .tree import LowCardinalityTree


def build_matcher(
    rules: Iterable[RuleLike],
    strategy: MatchStrategy = MatchStrategy.TREE,
) -> Matcher:
    """Build a matcher of the given strategy from rules.

    Args:
        rules: Rules in priority order.
        strategy: Which index to build.

    Returns:
        A matcher answering first-match queries over rules.
    """
    if strategy == MatchStrategy.LINEAR:
        return LinearScan(rules)
    elif strategy == MatchStrategy.TREE:
        return LowCardinalityTree(rules)
    raise ValueError(f"Unsupported match strategy: {strategy}")


class _Snapshot(NamedTuple):
    rules: Tuple[Rule, ...]
    matcher: Matcher


class RuleTable:
    """Ordered rule list with a first-match index kept in sync.

    Example:
        table = RuleTable([{"env": "prod"}, {}])
        table.find({"env": "prod"})   # Returns 0
        table.find({"env": "dev"})    # Returns 1

        table.replace([{"env": "dev"}])
        table.find({"env": "prod"})   # Returns None
    """

    def __init__(
        self,
        rules: Iterable[RuleLike] = (),
        strategy: MatchStrategy = MatchStrategy.TREE,
    ):
        """Build the initial index.

        Args:
            rules: Rules in priority order.
            strategy: Index used for this table and every rebuild.
        """
        self._strategy = strategy
        self._snapshot = self._build(rules)

    def _build(self, rules: Iterable[RuleLike]) -> _Snapshot:
        frozen = tuple(as_rule(r) for r in rules)
        return _Snapshot(frozen, build_matcher(frozen, self._strategy))

    def replace(self, rules: Iterable[RuleLike]) -> None:
        """Replace the rule list, rebuilding the index.

        The new index is fully built before it becomes visible.

        Args:
            rules: New rules in priority order.
        """
        self._snapshot = self._build(rules)

    def find(self, bag: Bag) -> Optional[int]:
        """Return the index of the first rule satisfied by bag, or None."""
        return self._snapshot.matcher.find(bag)

    def find_rule(self, bag: Bag) -> Optional[Rule]:
        """Return the first rule satisfied by bag, or None."""
        snapshot = self._snapshot
        index = snapshot.matcher.find(bag)
        if index is None:
            return None
        return snapshot.rules[index]

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """Current rules in priority order."""
        return self._snapshot.rules

    @property
    def strategy(self) -> MatchStrategy:
        """Index strategy used by this table."""
        return self._strategy

    def __len__(self) -> int:
        """Return number of rules in the table."""
        return len(self._snapshot.rules)
