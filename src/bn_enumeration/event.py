"""
Boolean events over network variables, kept in disjunctive normal form.

- Condition: one constraint on a variable (``EQUAL v`` or ``NOT_EQUAL v``)
- AndClause: variable -> conditions, all of which must hold
- Event: ordered AndClauses, any of which may hold

An Event with no clauses is the impossible event; an Event holding a single
empty clause is the certain event.

Example:
    >>> wet = Event.equal("WetGrass", "true")
    >>> not_rain = Event.not_equal("Rain", "true")
    >>> str(wet & not_rain)
    'WetGrass=true, Rain!=true'
    >>> str(wet | not_rain)
    'WetGrass=true OR Rain!=true'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Hashable, Iterable, List, Mapping, Tuple, Union

from .formatting import format_and_clause, format_event


class ConditionType(Enum):
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"


@dataclass(frozen=True)
class Condition:
    type: ConditionType
    value: Hashable

    def negated(self) -> "Condition":
        if self.type is ConditionType.EQUAL:
            return Condition(ConditionType.NOT_EQUAL, self.value)
        return Condition(ConditionType.EQUAL, self.value)


@dataclass(frozen=True)
class AndClause:
    conditions: Mapping[str, Tuple[Condition, ...]] = field(default_factory=dict)

    def __post_init__(self):
        frozen = {var: tuple(conds) for var, conds in dict(self.conditions).items() if conds}
        object.__setattr__(self, "conditions", MappingProxyType(frozen))

    def __hash__(self) -> int:
        return hash(frozenset(self.conditions.items()))

    @classmethod
    def of(cls, variable: str, condition: Condition) -> "AndClause":
        return cls({variable: (condition,)})

    @property
    def variables(self) -> FrozenSet[str]:
        """Names of the variables this clause constrains."""
        return frozenset(self.conditions)

    def conjoin(self, other: "AndClause") -> "AndClause":
        """Clause requiring both ``self`` and ``other``; conditions are concatenated per variable."""
        merged: Dict[str, List[Condition]] = {var: list(conds) for var, conds in self.conditions.items()}
        for var, conds in other.conditions.items():
            merged.setdefault(var, []).extend(conds)
        return AndClause(merged)

    def __str__(self) -> str:
        return format_and_clause(self)


@dataclass(frozen=True)
class Event:
    and_clauses: Tuple[AndClause, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "and_clauses", tuple(self.and_clauses))

    # ------------------------------
    # Factories
    # ------------------------------

    @classmethod
    def condition(cls, variable: str, type: ConditionType, value: Hashable) -> "Event":
        return cls((AndClause.of(variable, Condition(type, value)),))

    @classmethod
    def equal(cls, variable: str, value: Hashable) -> "Event":
        return cls.condition(variable, ConditionType.EQUAL, value)

    @classmethod
    def not_equal(cls, variable: str, value: Hashable) -> "Event":
        return cls.condition(variable, ConditionType.NOT_EQUAL, value)

    @classmethod
    def assignment(cls, values: Mapping[str, Hashable]) -> "Event":
        """Conjunction of ``variable = value`` for every item of ``values``."""
        return cls((AndClause({var: (Condition(ConditionType.EQUAL, v),) for var, v in values.items()}),))

    @classmethod
    def impossible(cls) -> "Event":
        return cls(())

    @classmethod
    def certain(cls) -> "Event":
        return cls((AndClause(),))

    @classmethod
    def from_and_clauses(cls, clauses: Union[AndClause, Iterable[AndClause]]) -> "Event":
        if isinstance(clauses, AndClause):
            return cls((clauses,))
        return cls(tuple(clauses))

    # ------------------------------
    # Combinators
    # ------------------------------

    @staticmethod
    def and_(left: "Event", right: "Event") -> "Event":
        """Cross-conjunction: one clause ``l AND r`` per pair of clauses."""
        return Event(tuple(l.conjoin(r) for l in left.and_clauses for r in right.and_clauses))

    @staticmethod
    def or_(*events: "Event") -> "Event":
        return Event(tuple(clause for event in events for clause in event.and_clauses))

    def negate(self) -> "Event":
        """Complement of this event, expanded back into DNF via De Morgan.

        The expansion multiplies clause counts, so keep negated events small.
        """
        result = Event.certain()
        for clause in self.and_clauses:
            negated_clause = Event(
                tuple(
                    AndClause.of(var, cond.negated())
                    for var, conds in clause.conditions.items()
                    for cond in conds
                )
            )
            result = Event.and_(result, negated_clause)
        return result

    def __and__(self, other: "Event") -> "Event":
        return Event.and_(self, other)

    def __or__(self, other: "Event") -> "Event":
        return Event.or_(self, other)

    def __invert__(self) -> "Event":
        return self.negate()

    def __len__(self) -> int:
        return len(self.and_clauses)

    def __str__(self) -> str:
        return format_event(self)


equal = Event.equal
not_equal = Event.not_equal
and_ = Event.and_
or_ = Event.or_
from_and_clauses = Event.from_and_clauses


__all__ = [
    "ConditionType",
    "Condition",
    "AndClause",
    "Event",
    "equal",
    "not_equal",
    "and_",
    "or_",
    "from_and_clauses",
]
