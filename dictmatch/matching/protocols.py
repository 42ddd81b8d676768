"""Protocols, enums and the Rule type for the matching system.

This module defines the core abstractions shared by every matching
strategy: the immutable Rule, the input Bag and the Matcher protocol.
"""

from collections import abc
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Protocol, Union, runtime_checkable

# Attribute name -> value assignment supplied at query time.
Bag = Mapping[str, str]


class MatchStrategy(Enum):
    """Which index a matcher uses to answer queries."""
    LINEAR = "linear"   # Scan every rule in order (reference oracle)
    TREE = "tree"       # Low-cardinality tree keyed by attribute name

    @classmethod
    def from_name(cls, name: str) -> 'MatchStrategy':
        """Parse a strategy name, ignoring case.

        Raises:
            ValueError: If the name is not a known strategy.
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = ', '.join(s.value for s in cls)
            raise ValueError(
                f"Unknown match strategy '{name}'. Valid strategies: {valid}"
            ) from None


@dataclass(frozen=True)
class Rule(abc.Mapping):
    """Partial constraint set: attribute name -> required value.

    An attribute missing from the rule is unconstrained and matches any
    value. Rules are immutable; the constraints are copied into a
    read-only mapping on creation.

    Example:
        rule = Rule({"region": "eu", "tier": "gold"})
        rule.matches({"region": "eu", "tier": "gold", "plan": "x"})  # True
        rule.matches({"region": "us", "tier": "gold"})               # False
    """
    constraints: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, 'constraints', MappingProxyType(dict(self.constraints))
        )

    def matches(self, bag: Bag) -> bool:
        """Return True if every constrained attribute equals the bag's value."""
        for key, value in self.constraints.items():
            if key not in bag or bag[key] != value:
                return False
        return True

    def __getitem__(self, key: str) -> str:
        return self.constraints[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.constraints)

    def __len__(self) -> int:
        return len(self.constraints)

    def __eq__(self, other) -> bool:
        # Compare as mappings so a Rule equals a dict with the same items
        return abc.Mapping.__eq__(self, other)

    def __hash__(self) -> int:
        return hash(frozenset(self.constraints.items()))

    def __repr__(self) -> str:
        return f"Rule({dict(self.constraints)!r})"


RuleLike = Union[Rule, Mapping[str, str]]


def as_rule(rule: RuleLike) -> Rule:
    """Wrap a plain mapping in a Rule; Rules are returned unchanged."""
    if isinstance(rule, Rule):
        return rule
    return Rule(rule)


@runtime_checkable
class Matcher(Protocol):
    """Protocol for first-match rule indexes.

    A matcher is built once from an ordered rule list and then answers
    repeated queries without modifying itself, so a single instance can
    be shared between threads.
    """

    def find(self, bag: Bag) -> Optional[int]:
        """Return the lowest index of a rule satisfied by bag.

        Returns:
            Index into the rule list the matcher was built from,
            or None if no rule is satisfied.
        """
        ...

    def __len__(self) -> int:
        """Return the number of rules the matcher was built from."""
        ...
