"""
Exact inference over a discrete Bayesian network by brute-force enumeration.

A BayesNetwork is an ordered, immutable collection of ConditionalDistributions,
one per variable. Probabilities of DNF events are computed in three layers:

1. ``query_probability`` reduces a disjunction of clauses with the two-term
   inclusion-exclusion identity ``P(A or R) = P(A) + P(R) - P(A and R)``.
2. ``_probability_for_and_clause`` narrows each constrained variable to its
   allowed values and marginalizes over the rest by enumerating every
   consistent complete assignment.
3. ``joint_probability`` scores one complete assignment as the product of CPT
   lookups, in registration order.

Complexity:
    Inclusion-exclusion is exponential in the number of clauses (each level
    evaluates the first clause against all remaining ones), and enumeration is
    exponential in the number of free variables of a clause. Results are not
    memoized. This engine is meant for small, teaching-scale networks; bound
    the size of networks and events before calling it.

Thread-safety:
    Networks are immutable and every query allocates its own working state,
    so one network can be queried from several threads at once.

Example:
    >>> net = (
    ...     BayesNetwork.builder()
    ...     .add(rain)       # P(Rain)
    ...     .add(wet_grass)  # P(WetGrass | Rain)
    ...     .build()
    ... )
    >>> round(net.query_probability(Event.equal("WetGrass", "true")), 4)
    0.26
"""

from __future__ import annotations

import logging
import math
from itertools import product
from types import MappingProxyType
from typing import Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from .config import EngineSettings, ZeroEvidencePolicy
from .distribution import ConditionalDistribution
from .errors import UnknownVariableError, UnsupportedConditionError, ZeroEvidenceError
from .event import AndClause, Condition, ConditionType, Event
from .formatting import format_probability_query
from .validation import validate_distributions

logger = logging.getLogger(__name__)

Assignment = Mapping[str, Hashable]


class BayesNetwork:
    """Immutable collection of CPTs answering exact probability queries."""

    def __init__(
        self,
        distributions: Iterable[ConditionalDistribution] = (),
        settings: Optional[EngineSettings] = None,
    ):
        self._distributions: Tuple[ConditionalDistribution, ...] = tuple(distributions)
        self._settings = settings or EngineSettings()
        # Name index; on duplicate names the first registration wins, like a linear scan would.
        index: Dict[str, ConditionalDistribution] = {}
        for dist in self._distributions:
            index.setdefault(dist.variable, dist)
        self._index: Mapping[str, ConditionalDistribution] = MappingProxyType(index)
        self._variables: Tuple[str, ...] = tuple(d.variable for d in self._distributions)

    @staticmethod
    def builder(settings: Optional[EngineSettings] = None) -> "BayesNetworkBuilder":
        return BayesNetworkBuilder(settings)

    # ------------------------------
    # Accessors
    # ------------------------------

    @property
    def distributions(self) -> Tuple[ConditionalDistribution, ...]:
        return self._distributions

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def variables(self) -> Tuple[str, ...]:
        """Variable names in registration order (the joint-probability multiplication order)."""
        return self._variables

    def get_variables(self) -> Tuple[str, ...]:
        return self._variables

    def get_distribution(self, variable: str) -> ConditionalDistribution:
        try:
            return self._index[variable]
        except KeyError:
            raise UnknownVariableError(variable) from None

    def get_values(self, variable: str) -> Tuple[Hashable, ...]:
        return self.get_distribution(variable).values

    def nuisance_variables(self, clause: AndClause) -> List[str]:
        """Network variables the clause does not constrain, in registration order, without repeats."""
        constrained = clause.variables
        return [var for var in dict.fromkeys(self._variables) if var not in constrained]

    def __contains__(self, variable: object) -> bool:
        return variable in self._index

    def __len__(self) -> int:
        return len(self._distributions)

    def __repr__(self) -> str:
        return f"BayesNetwork(variables={list(self._variables)})"

    # ------------------------------
    # Queries
    # ------------------------------

    def query_probability_with_evidence(self, query: Event, evidence: Event) -> float:
        """P(query | evidence) = P(query and evidence) / P(evidence).

        Zero-probability evidence returns NaN, or raises ZeroEvidenceError when
        the settings select ``ZeroEvidencePolicy.RAISE``.
        """
        evidence_probability = self.query_probability(evidence)
        joint = self.query_probability(Event.and_(query, evidence))
        if evidence_probability == 0.0:
            text = format_probability_query(query, evidence)
            if self._settings.zero_evidence is ZeroEvidencePolicy.RAISE:
                raise ZeroEvidenceError(f"Cannot compute {text}: evidence has probability 0")
            logger.warning("Conditioning on zero-probability evidence in %s; result is NaN", text)
            return math.nan
        return joint / evidence_probability

    def query_probability(self, event: Event) -> float:
        """Probability of a DNF event, via inclusion-exclusion over its clauses."""
        clauses = event.and_clauses
        if not clauses:
            return 0.0
        if len(clauses) == 1:
            return self._probability_for_and_clause(clauses[0])

        logger.debug("Inclusion-exclusion over %d clauses", len(clauses))
        first = Event.from_and_clauses(clauses[0])
        rest = Event.from_and_clauses(clauses[1:])
        return (
            self.query_probability(first)
            + self.query_probability(rest)
            - self.query_probability(Event.and_(first, rest))
        )

    def _probability_for_and_clause(self, clause: AndClause) -> float:
        partial_assignment: Dict[str, Hashable] = {}
        free: List[Tuple[str, Tuple[Hashable, ...]]] = []

        for variable, conditions in clause.conditions.items():
            allowed = self._allowed_values(variable, conditions)
            if not allowed:
                # Contradictory clause; nothing to enumerate.
                return 0.0
            if len(allowed) == 1:
                partial_assignment[variable] = allowed[0]
            else:
                free.append((variable, allowed))

        for variable in self.nuisance_variables(clause):
            free.append((variable, self.get_values(variable)))

        logger.debug(
            "Clause %s: %d fixed, %d free variable(s)", clause, len(partial_assignment), len(free)
        )
        return self._sum_over_assignments(partial_assignment, free)

    def _allowed_values(self, variable: str, conditions: Sequence[Condition]) -> Tuple[Hashable, ...]:
        allowed = list(self.get_values(variable))
        for condition in conditions:
            if condition.type is ConditionType.EQUAL:
                allowed = [v for v in allowed if v == condition.value]
            elif condition.type is ConditionType.NOT_EQUAL:
                allowed = [v for v in allowed if v != condition.value]
            else:
                raise UnsupportedConditionError(f"Unhandled condition type {condition.type!r}")
        return tuple(allowed)

    def _sum_over_assignments(
        self,
        partial_assignment: Mapping[str, Hashable],
        free: Sequence[Tuple[str, Sequence[Hashable]]],
    ) -> float:
        """Marginalize over ``free`` by summing the joint of every completion of ``partial_assignment``."""
        return math.fsum(
            self.joint_probability(assignment)
            for assignment in _complete_assignments(partial_assignment, free)
        )

    def joint_probability(self, assignment: Assignment) -> float:
        """Product of CPT entries for a complete assignment, in registration order.

        Raises:
            UnknownVariableError: a variable or one of its parents is not assigned.
            MissingProbabilityEntryError: a CPT lacks the needed entry.
        """
        result = 1.0
        # A name registered twice contributes its first table twice.
        for variable in self._variables:
            dist = self._index[variable]
            key = (
                _assigned(assignment, dist.variable),
                *(_assigned(assignment, parent) for parent in dist.parents),
            )
            result *= dist.lookup(key)
        return result


def _assigned(assignment: Assignment, variable: str) -> Hashable:
    try:
        return assignment[variable]
    except KeyError:
        raise UnknownVariableError(variable) from None


def _complete_assignments(
    partial_assignment: Mapping[str, Hashable],
    free: Sequence[Tuple[str, Sequence[Hashable]]],
) -> Iterator[Dict[str, Hashable]]:
    """Yield every completion of ``partial_assignment`` over the free variables' candidates."""
    names = [name for name, _ in free]
    for values in product(*(candidates for _, candidates in free)):
        assignment = dict(partial_assignment)
        assignment.update(zip(names, values))
        yield assignment


class BayesNetworkBuilder:
    """Mutable accumulator of CPTs; ``build()`` freezes them into a BayesNetwork."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        self._settings = settings or EngineSettings()
        self._distributions: List[ConditionalDistribution] = []

    def add(self, distribution: ConditionalDistribution) -> "BayesNetworkBuilder":
        self._distributions.append(distribution)
        return self

    def add_all(self, distributions: Iterable[ConditionalDistribution]) -> "BayesNetworkBuilder":
        self._distributions.extend(distributions)
        return self

    def build(self) -> BayesNetwork:
        if self._settings.validate_on_build:
            validate_distributions(self._distributions, self._settings.tolerance)
        logger.debug("Built network with %d variable(s)", len(self._distributions))
        return BayesNetwork(self._distributions, self._settings)


__all__ = ["BayesNetwork", "BayesNetworkBuilder"]
