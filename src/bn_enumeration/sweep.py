"""
Batch evaluation of probability queries.

Runs a list of QuerySpecs against one network and collects the exact answers in
a DataFrame, one row per query, with the formatted ``P(... | ...)`` text next
to the probability.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
from tqdm import tqdm

from .event import Event
from .formatting import format_probability_query
from .network import BayesNetwork

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ("query", "num_clauses", "has_evidence", "probability")


@dataclass
class QuerySpec:
    query: Event
    # None means an unconditioned query
    evidence: Optional[Event] = None
    meta: Dict[str, Any] = field(default_factory=dict)


def evaluate_query(network: BayesNetwork, spec: QuerySpec) -> float:
    if spec.evidence is None:
        return network.query_probability(spec.query)
    return network.query_probability_with_evidence(spec.query, spec.evidence)


def run_queries(
    network: BayesNetwork,
    specs: Sequence[QuerySpec],
    progress: bool = False,
) -> pd.DataFrame:
    """Evaluate every QuerySpec and return the results as a DataFrame.

    Columns are ``query``, ``num_clauses``, ``has_evidence``, ``probability``,
    followed by any ``meta`` keys.

    Meta keys may not reuse a result column name. Errors from individual
    queries propagate; there is no best-effort mode.
    """
    clashes = sorted({key for spec in specs for key in spec.meta if key in RESULT_COLUMNS})
    if clashes:
        raise ValueError(f"QuerySpec meta keys {clashes} collide with result columns {list(RESULT_COLUMNS)}")

    rows: List[Dict[str, Any]] = []
    for spec in tqdm(specs, desc="Queries", disable=not progress):
        probability = evaluate_query(network, spec)
        rows.append({
            "query": format_probability_query(spec.query, spec.evidence),
            "num_clauses": len(spec.query.and_clauses),
            "has_evidence": spec.evidence is not None,
            "probability": probability,
            **spec.meta,
        })

    logger.info("Evaluated %d queries on %d-variable network", len(rows), len(network))
    return pd.DataFrame(rows, columns=_columns(rows))


def _columns(rows: List[Dict[str, Any]]) -> List[str]:
    columns = list(RESULT_COLUMNS)
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)
    return columns


__all__ = ["QuerySpec", "evaluate_query", "run_queries"]
