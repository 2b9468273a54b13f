"""Shared networks for the test suite."""

import pytest

from bn_enumeration import BayesNetwork, ConditionalDistribution


def build_rain_distributions():
    """Rain -> WetGrass, binary true/false states."""
    rain = (
        ConditionalDistribution.builder("Rain")
        .values("true", "false")
        .probability(0.2, "true")
        .probability(0.8, "false")
        .build()
    )
    wet_grass = ConditionalDistribution.from_table(
        "WetGrass",
        ["Rain"],
        {
            ("true",): {"true": 0.9, "false": 0.1},
            ("false",): {"true": 0.1, "false": 0.9},
        },
    )
    return rain, wet_grass


def build_chain_distributions():
    """A -> B -> C with binary states yes/no."""
    a = ConditionalDistribution.from_table("A", [], {(): {"yes": 0.3, "no": 0.7}})
    b = ConditionalDistribution.from_table(
        "B",
        ["A"],
        {
            ("yes",): {"yes": 0.8, "no": 0.2},
            ("no",): {"yes": 0.2, "no": 0.8},
        },
    )
    c = ConditionalDistribution.from_table(
        "C",
        ["B"],
        {
            ("yes",): {"yes": 0.7, "no": 0.3},
            ("no",): {"yes": 0.1, "no": 0.9},
        },
    )
    return a, b, c


@pytest.fixture
def rain_network():
    return BayesNetwork.builder().add_all(build_rain_distributions()).build()


@pytest.fixture
def chain_network():
    return BayesNetwork.builder().add_all(build_chain_distributions()).build()
