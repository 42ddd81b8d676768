"""Linear scan index used as the reference matcher.

LinearScan evaluates every rule in order and is O(rules x attributes)
per query. It has no build cost and serves as the oracle the tree index
is validated and benchmarked against.
"""

from typing import Iterable, List, Optional, Tuple

from .protocols import Bag, Rule, RuleLike, as_rule


class LinearScan:
    """O(n) first-match lookup over rules in priority order.

    Example:
        scan = LinearScan([{"a": "1"}, {}])
        scan.find({"a": "1"})   # Returns 0
        scan.find({"a": "2"})   # Returns 1 (unconstrained rule)
    """

    def __init__(self, rules: Iterable[RuleLike] = ()):
        self._rules: Tuple[Rule, ...] = tuple(as_rule(r) for r in rules)

    def find(self, bag: Bag) -> Optional[int]:
        """Find the first rule satisfied by bag.

        Args:
            bag: Attribute values to match against.

        Returns:
            Index of the first satisfied rule, or None.
        """
        for index, rule in enumerate(self._rules):
            if rule.matches(bag):
                return index
        return None

    def find_all(self, bag: Bag) -> List[int]:
        """Find every rule satisfied by bag.

        Args:
            bag: Attribute values to match against.

        Returns:
            Indexes of all satisfied rules, in ascending order.
        """
        return [i for i, rule in enumerate(self._rules) if rule.matches(bag)]

    def __len__(self) -> int:
        """Return number of rules scanned."""
        return len(self._rules)
