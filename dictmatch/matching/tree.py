"""Low-cardinality tree index for first-match rule lookup.

This module provides a tree keyed by attribute name, one level per
distinct attribute referenced by any rule. It pays off when the number
of distinct attributes is small even if the number of rules is large.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .protocols import Bag, Rule, RuleLike, as_rule


@dataclass
class Leaf:
    """Terminal node holding the index of the rule whose path ends here.

    Attributes:
        index: Position of the rule in the original rule list.
    """
    index: int


@dataclass
class Branch:
    """Interior node for one attribute of the key universe.

    Attributes:
        wildcard: Child for rules that leave this attribute unconstrained.
        values: Children keyed by the value rules require for this attribute.
    """
    wildcard: Optional['Node'] = None
    values: Dict[str, 'Node'] = field(default_factory=dict)


Node = Union[Leaf, Branch]


def _lowest(a: Optional[int], b: Optional[int]) -> Optional[int]:
    """Return the smaller index, treating None as no match."""
    if a is None:
        return b
    if b is None:
        return a
    return a if a < b else b


class LowCardinalityTree:
    """Tree index answering first-match queries over an ordered rule list.

    Supports:
    - Build once from rules; the tree is never modified afterwards
    - Lowest-index-wins lookup exploring wildcard and exact branches
    - O(number of inserted wildcard/value combinations) lookup

    Example:
        tree = LowCardinalityTree([
            {"a": "1", "b": "2"},
            {"a": "1"},
            {"b": "2"},
        ])

        tree.find({"a": "1", "b": "2"})          # Returns 0
        tree.find({"a": "1", "b": "garbage"})    # Returns 1
        tree.find({"a": "garbage", "b": "2"})    # Returns 2
        tree.find({"a": "x", "b": "y"})          # Returns None
    """

    def __init__(self, rules: Iterable[RuleLike] = ()):
        """Build the key universe and the tree from rules.

        Args:
            rules: Rules in priority order; position is the returned index.
        """
        self._rules: Tuple[Rule, ...] = tuple(as_rule(r) for r in rules)
        self._keys: Tuple[str, ...] = tuple(
            sorted({key for rule in self._rules for key in rule})
        )
        self._root: Optional[Node] = None
        for index, rule in enumerate(self._rules):
            self._insert(rule, index)

    @property
    def keys(self) -> Tuple[str, ...]:
        """Sorted attribute names referenced by any rule (the key universe)."""
        return self._keys

    @property
    def depth(self) -> int:
        """Number of branch levels between the root and a leaf."""
        return len(self._keys)

    def _insert(self, rule: Rule, index: int) -> None:
        """Walk rule down the tree in key order and place its leaf.

        Args:
            rule: Rule to insert.
            index: Position of the rule in the original list.
        """
        if not self._keys:
            # No attribute is constrained anywhere: a single leaf
            self._root = self._place_leaf(self._root, index)
            return

        if self._root is None:
            self._root = Branch()
        node = self._root
        last = len(self._keys) - 1

        for depth, key in enumerate(self._keys):
            if key in rule:
                child = node.values.get(rule[key])
            else:
                child = node.wildcard

            if depth == last:
                child = self._place_leaf(child, index)
            elif child is None:
                child = Branch()

            if key in rule:
                node.values[rule[key]] = child
            else:
                node.wildcard = child
            node = child

    @staticmethod
    def _place_leaf(existing: Optional[Node], index: int) -> Leaf:
        """Return the leaf to store where a rule's path ends.

        Two rules with the same constraints end at the same position.
        The earlier (lower) index must survive.
        """
        if isinstance(existing, Leaf) and existing.index < index:
            return existing
        return Leaf(index)

    def find(self, bag: Bag) -> Optional[int]:
        """Find the lowest index of a rule satisfied by bag.

        Args:
            bag: Attribute values to match against.

        Returns:
            Index of the first satisfied rule, or None if no rule matches.
        """
        if self._root is None:
            return None
        return self._search(self._root, bag, 0)

    def _search(self, node: Node, bag: Bag, depth: int) -> Optional[int]:
        """Return the lowest leaf index reachable from node for bag.

        A wildcard child is searched regardless of the bag's value; the
        explicit child is searched only for the value the bag supplies.
        """
        if isinstance(node, Leaf):
            return node.index

        key = self._keys[depth]
        result: Optional[int] = None

        if node.wildcard is not None:
            result = self._search(node.wildcard, bag, depth + 1)

        if key in bag:
            child = node.values.get(bag[key])
            if child is not None:
                result = _lowest(result, self._search(child, bag, depth + 1))

        return result

    def node_count(self) -> int:
        """Count every node (branches and leaves) in the tree."""
        if self._root is None:
            return 0
        count = 0
        stack: List[Node] = [self._root]
        while stack:
            node = stack.pop()
            count += 1
            if isinstance(node, Branch):
                if node.wildcard is not None:
                    stack.append(node.wildcard)
                stack.extend(node.values.values())
        return count

    def __len__(self) -> int:
        """Return number of rules the tree was built from."""
        return len(self._rules)
