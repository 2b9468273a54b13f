"""
Opt-in structural and numeric checks for a set of CPTs.

The engine never calls these on its own: unless ``validate_on_build`` is set in
EngineSettings, a network with dangling parents, cycles or rows that do not sum
to one is accepted and only misbehaves when a query reaches the broken part.
"""

from __future__ import annotations

from itertools import product
from typing import Any, Dict, Iterable, List, Sequence

import networkx as nx
import numpy as np

from .distribution import ConditionalDistribution
from .errors import NetworkValidationError


def parent_graph(distributions: Iterable[ConditionalDistribution]) -> nx.DiGraph:
    """Directed parent -> child graph; dangling parents appear as extra nodes."""
    G = nx.DiGraph()
    for dist in distributions:
        G.add_node(dist.variable)
        G.add_edges_from((parent, dist.variable) for parent in dist.parents)
    return G


def _row_problems(
    dist: ConditionalDistribution,
    domains: Dict[str, Sequence[Any]],
    tolerance: float,
) -> List[str]:
    problems: List[str] = []

    for key in dist.probabilities:
        if key[0] not in dist.domain:
            problems.append(f"'{dist.variable}' has an entry for value {key[0]!r} outside its domain")
        if len(key) != len(dist.parents) + 1:
            problems.append(f"'{dist.variable}' has key {key!r} of the wrong length")

    parent_domains = [domains[p] for p in dist.parents]
    for assign in product(*parent_domains):
        keys = [(value,) + tuple(assign) for value in dist.values]
        missing = [k for k in keys if k not in dist.probabilities]
        if missing:
            problems.append(f"'{dist.variable}' is missing entries {missing}")
            continue
        row = np.array([dist.probabilities[k] for k in keys], dtype=float)
        if np.any(row < 0.0) or np.any(row > 1.0):
            problems.append(f"'{dist.variable}' has probabilities outside [0, 1] for parents {assign}")
        total = float(row.sum())
        if not np.isclose(total, 1.0, rtol=0.0, atol=tolerance):
            problems.append(f"'{dist.variable}' row for parents {assign} sums to {total:.6g}, not 1")
    return problems


def validate_distributions(distributions: Sequence[ConditionalDistribution], tolerance: float = 1e-9) -> None:
    """Check registration, acyclicity and row sums of a set of CPTs.

    Raises:
        NetworkValidationError: listing every problem found.
    """
    problems: List[str] = []

    names = [d.variable for d in distributions]
    seen = set()
    for name in names:
        if name in seen:
            problems.append(f"variable '{name}' is registered more than once")
        seen.add(name)

    domains = {d.variable: d.values for d in distributions}
    resolvable = []
    for dist in distributions:
        dangling = [p for p in dist.parents if p not in domains]
        if dangling:
            problems.append(f"'{dist.variable}' references unregistered parent(s) {dangling}")
        else:
            resolvable.append(dist)
        if not dist.values:
            problems.append(f"'{dist.variable}' has an empty domain")

    G = parent_graph(distributions)
    if not nx.is_directed_acyclic_graph(G):
        cycle = [u for u, _ in nx.find_cycle(G)]
        problems.append(f"parent relation contains a cycle: {' -> '.join(cycle + cycle[:1])}")

    for dist in resolvable:
        problems.extend(_row_problems(dist, domains, tolerance))

    if problems:
        raise NetworkValidationError(problems)


def validate_network(network: Any, tolerance: float = 1e-9) -> None:
    """Validate the CPTs of an already built BayesNetwork."""
    validate_distributions(network.distributions, tolerance)


__all__ = ["parent_graph", "validate_distributions", "validate_network"]
