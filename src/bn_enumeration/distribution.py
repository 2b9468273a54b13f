"""
Variable Domain Tables (conditional probability tables).

A ConditionalDistribution holds, for one variable:

- the ordered parent names (this order is the key order of the table)
- the finite value domain
- a mapping ``(value, parent_1_value, ..., parent_k_value) -> probability``

Nothing is validated on construction: rows are not required to sum to one and
keys are not checked against the domain. A missing key only surfaces when a
query enumerates that exact combination.

Example:
    >>> rain = (
    ...     ConditionalDistribution.builder("Rain")
    ...     .values("true", "false")
    ...     .probability(0.2, "true")
    ...     .probability(0.8, "false")
    ...     .build()
    ... )
    >>> rain.lookup(("true",))
    0.2
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Sequence, Tuple

from .errors import MissingProbabilityEntryError
from .formatting import cpd_to_ascii_table


@dataclass(frozen=True)
class ConditionalDistribution:
    variable: str
    parents: Tuple[str, ...]
    values: Tuple[Hashable, ...]
    probabilities: Mapping[Tuple[Hashable, ...], float] = field(repr=False)

    def __post_init__(self):
        # Freeze the containers so the table cannot be mutated after build.
        object.__setattr__(self, "parents", tuple(self.parents))
        object.__setattr__(self, "values", tuple(dict.fromkeys(self.values)))
        object.__setattr__(
            self,
            "probabilities",
            MappingProxyType({tuple(k): float(p) for k, p in dict(self.probabilities).items()}),
        )

    @property
    def domain(self) -> frozenset:
        return frozenset(self.values)

    def lookup(self, key: Sequence[Hashable]) -> float:
        """Return P(variable=key[0] | parents=key[1:]).

        Raises:
            MissingProbabilityEntryError: if the exact key was never recorded.
        """
        key = tuple(key)
        try:
            return self.probabilities[key]
        except KeyError:
            raise MissingProbabilityEntryError(self.variable, key, self.parents) from None

    def to_ascii_table(self) -> str:
        return cpd_to_ascii_table(self)

    @staticmethod
    def builder(variable: str) -> "ConditionalDistributionBuilder":
        return ConditionalDistributionBuilder(variable)

    @classmethod
    def from_table(
        cls,
        variable: str,
        parents: Sequence[str],
        rows: Mapping[Tuple[Hashable, ...], Mapping[Hashable, float]],
    ) -> "ConditionalDistribution":
        """Build a table from ``{parent_values: {value: probability}}`` rows.

        The domain is collected from the rows in first-seen order. Root
        variables use the empty tuple as their only row key.

        Example:
            >>> wet = ConditionalDistribution.from_table(
            ...     "WetGrass", ["Rain"],
            ...     {("true",): {"true": 0.9, "false": 0.1},
            ...      ("false",): {"true": 0.1, "false": 0.9}},
            ... )
        """
        values: List[Hashable] = []
        probabilities: Dict[Tuple[Hashable, ...], float] = {}
        for parent_values, row in rows.items():
            parent_values = tuple(parent_values)
            for value, prob in row.items():
                if value not in values:
                    values.append(value)
                probabilities[(value,) + parent_values] = prob
        return cls(variable, tuple(parents), tuple(values), probabilities)


class ConditionalDistributionBuilder:
    """Mutable accumulator that finalizes into a ConditionalDistribution."""

    def __init__(self, variable: str):
        self._variable = variable
        self._parents: List[str] = []
        self._values: List[Hashable] = []
        self._probabilities: Dict[Tuple[Hashable, ...], float] = {}

    def parents(self, *names: str) -> "ConditionalDistributionBuilder":
        self._parents = list(names)
        return self

    def values(self, *values: Hashable) -> "ConditionalDistributionBuilder":
        self._values = list(values)
        return self

    def probability(self, prob: float, value: Hashable, *parent_values: Hashable) -> "ConditionalDistributionBuilder":
        """Record P(variable=value | parents=parent_values), parents in declared order."""
        self._probabilities[(value,) + tuple(parent_values)] = prob
        return self

    def probabilities(self, entries: Iterable[Tuple[Sequence[Any], float]]) -> "ConditionalDistributionBuilder":
        for key, prob in entries:
            self._probabilities[tuple(key)] = prob
        return self

    def build(self) -> ConditionalDistribution:
        return ConditionalDistribution(
            variable=self._variable,
            parents=tuple(self._parents),
            values=tuple(self._values),
            probabilities=dict(self._probabilities),
        )


__all__ = ["ConditionalDistribution", "ConditionalDistributionBuilder"]
