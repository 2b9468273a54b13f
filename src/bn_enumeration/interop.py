"""
Bridges between BayesNetwork and the wider PyData stack.

- from_pgmpy(): convert a pgmpy DiscreteBayesianNetwork (TabularCPDs with state
  names) into a BayesNetwork
- to_networkx(): parent -> child DiGraph of a network
- joint_distribution(): full joint table as a pandas DataFrame

Example:
    >>> from pgmpy.models import DiscreteBayesianNetwork
    >>> model = DiscreteBayesianNetwork([("A", "B")])
    >>> model.add_cpds(cpd_a, cpd_b)
    >>> net = from_pgmpy(model)
    >>> joint_distribution(net).head()
"""

from __future__ import annotations

from itertools import product
from typing import Any, Dict, List, Optional, Sequence, Tuple

import networkx as nx
import pandas as pd
from pgmpy.factors.discrete import TabularCPD
from pgmpy.models import DiscreteBayesianNetwork

from .config import EngineSettings
from .distribution import ConditionalDistribution
from .network import BayesNetwork
from .validation import parent_graph


def distribution_from_cpd(cpd: TabularCPD) -> ConditionalDistribution:
    """Convert one TabularCPD into a ConditionalDistribution.

    Parent order follows ``cpd.variables[1:]``, which is also the axis order of
    ``cpd.values``.
    """
    var = cpd.variable
    var_states = list(cpd.state_names[var])
    parents = list(cpd.variables[1:])

    parent_state_to_idx = {
        p: {name: idx for idx, name in enumerate(cpd.state_names[p])}
        for p in parents
    }
    domains = [list(cpd.state_names[p]) for p in parents]

    probabilities: Dict[Tuple[Any, ...], float] = {}
    for s_idx, s in enumerate(var_states):
        for assign in product(*domains):
            idx_tuple = tuple(parent_state_to_idx[p][v] for p, v in zip(parents, assign))
            # Full index over all axes: (var_state, parent1, parent2, ...)
            probabilities[(s,) + tuple(assign)] = float(cpd.values[(s_idx,) + idx_tuple])

    return ConditionalDistribution(var, tuple(parents), tuple(var_states), probabilities)


def from_pgmpy(model: DiscreteBayesianNetwork, settings: Optional[EngineSettings] = None) -> BayesNetwork:
    """Build a BayesNetwork from a pgmpy model, registering CPDs in topological order."""
    cpds = {cpd.variable: cpd for cpd in model.get_cpds()}
    missing = [n for n in model.nodes() if n not in cpds]
    if missing:
        raise ValueError(f"Model has no CPD for node(s) {missing}")

    builder = BayesNetwork.builder(settings)
    for node in nx.topological_sort(model):
        builder.add(distribution_from_cpd(cpds[node]))
    return builder.build()


def to_networkx(network: BayesNetwork) -> nx.DiGraph:
    """Parent -> child graph of the network, with each node's domain as ``values``."""
    G = parent_graph(network.distributions)
    for dist in network.distributions:
        G.nodes[dist.variable]["values"] = list(dist.values)
    return G


def joint_distribution(network: BayesNetwork, variables: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """One row per complete assignment with its joint probability.

    Args:
        network: the network to tabulate
        variables: column order, a permutation of the network's variables;
            defaults to registration order

    Returns:
        DataFrame with one column per variable plus ``probability``.
    """
    columns = list(variables) if variables is not None else list(network.variables)
    if sorted(columns) != sorted(network.variables):
        raise ValueError(f"variables must be a permutation of {list(network.variables)}, got {columns}")
    domains = [network.get_values(v) for v in columns]

    rows: List[Dict[str, Any]] = []
    for values in product(*domains):
        assignment = dict(zip(columns, values))
        rows.append({**assignment, "probability": network.joint_probability(assignment)})

    return pd.DataFrame(rows, columns=columns + ["probability"])


__all__ = ["distribution_from_cpd", "from_pgmpy", "to_networkx", "joint_distribution"]
