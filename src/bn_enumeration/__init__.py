"""
bn_enumeration: exact inference over small discrete Bayesian networks.

Core API:
    - ConditionalDistribution: one variable's CPT
    - Event / AndClause / Condition: DNF queries over variable values
    - BayesNetwork: builder plus query_probability / query_probability_with_evidence

The pgmpy / networkx / pandas bridges live in ``bn_enumeration.interop`` and
batch evaluation in ``bn_enumeration.sweep``.
"""

from .config import EngineSettings, ZeroEvidencePolicy, load_settings
from .distribution import ConditionalDistribution, ConditionalDistributionBuilder
from .errors import (
    BayesNetworkError,
    MissingProbabilityEntryError,
    NetworkValidationError,
    UnknownVariableError,
    UnsupportedConditionError,
    ZeroEvidenceError,
)
from .event import AndClause, Condition, ConditionType, Event, and_, equal, from_and_clauses, not_equal, or_
from .network import BayesNetwork, BayesNetworkBuilder
from .validation import validate_network

__version__ = "0.1.0"

__all__ = [
    "AndClause",
    "BayesNetwork",
    "BayesNetworkBuilder",
    "BayesNetworkError",
    "Condition",
    "ConditionType",
    "ConditionalDistribution",
    "ConditionalDistributionBuilder",
    "EngineSettings",
    "Event",
    "MissingProbabilityEntryError",
    "NetworkValidationError",
    "UnknownVariableError",
    "UnsupportedConditionError",
    "ZeroEvidenceError",
    "ZeroEvidencePolicy",
    "and_",
    "equal",
    "from_and_clauses",
    "load_settings",
    "not_equal",
    "or_",
    "validate_network",
]
