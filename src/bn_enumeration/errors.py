"""
Exceptions raised by the enumeration engine.

Every error is fatal for the query that triggered it. The network itself is
immutable, so a failed query leaves nothing to clean up.
"""

from __future__ import annotations

from typing import Any, Sequence, Tuple


class BayesNetworkError(Exception):
    """Base class for all errors raised by bn_enumeration."""


class UnknownVariableError(BayesNetworkError, KeyError):
    """A clause, assignment or parent reference names an unregistered variable."""

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"Could not find distribution for variable named '{variable}'")

    def __str__(self) -> str:
        return self.args[0]


class MissingProbabilityEntryError(BayesNetworkError, KeyError):
    """A CPT has no entry for the requested (value, parent values...) key."""

    def __init__(self, variable: str, key: Tuple[Any, ...], parents: Sequence[str] = ()):
        self.variable = variable
        self.key = tuple(key)
        self.parents = tuple(parents)
        super().__init__(
            f"No CPT entry for variable '{variable}' with key {self.key!r} "
            f"(key order: {(variable,) + self.parents})"
        )

    def __str__(self) -> str:
        return self.args[0]


class UnsupportedConditionError(BayesNetworkError, AssertionError):
    """A Condition carries an operator outside the closed EQUAL / NOT_EQUAL set."""


class ZeroEvidenceError(BayesNetworkError, ZeroDivisionError):
    """Conditioning on evidence whose probability is zero (raise policy only)."""


class NetworkValidationError(BayesNetworkError, ValueError):
    """Raised by the opt-in validator; ``problems`` lists every finding."""

    def __init__(self, problems: Sequence[str]):
        self.problems = list(problems)
        summary = "; ".join(self.problems)
        super().__init__(f"Invalid Bayesian network ({len(self.problems)} problem(s)): {summary}")


__all__ = [
    "BayesNetworkError",
    "UnknownVariableError",
    "MissingProbabilityEntryError",
    "UnsupportedConditionError",
    "ZeroEvidenceError",
    "NetworkValidationError",
]
