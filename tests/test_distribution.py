import pytest

from bn_enumeration import ConditionalDistribution, MissingProbabilityEntryError

from conftest import build_rain_distributions


class TestLookup:

    def test_lookup_root(self):
        rain, _ = build_rain_distributions()
        assert rain.lookup(("true",)) == 0.2
        assert rain.lookup(["false"]) == 0.8

    def test_lookup_uses_declared_parent_order(self):
        dist = (
            ConditionalDistribution.builder("Z")
            .parents("X", "Y")
            .values("on", "off")
            .probability(0.25, "on", "x1", "y0")
            .build()
        )
        assert dist.lookup(("on", "x1", "y0")) == 0.25
        with pytest.raises(MissingProbabilityEntryError):
            dist.lookup(("on", "y0", "x1"))

    def test_missing_entry_details(self):
        _, wet = build_rain_distributions()
        with pytest.raises(MissingProbabilityEntryError, match="WetGrass") as exc_info:
            wet.lookup(("true", "maybe"))
        assert exc_info.value.key == ("true", "maybe")
        assert exc_info.value.parents == ("Rain",)


class TestConstruction:

    def test_builder_collects_fields(self):
        dist = (
            ConditionalDistribution.builder("Alarm")
            .parents("Burglary")
            .values("yes", "no")
            .probabilities([(("yes", "b"), 0.9), (("no", "b"), 0.1)])
            .build()
        )
        assert dist.variable == "Alarm"
        assert dist.parents == ("Burglary",)
        assert dist.domain == frozenset({"yes", "no"})
        assert dist.lookup(("no", "b")) == pytest.approx(0.1)

    def test_from_table_collects_domain(self):
        _, wet = build_rain_distributions()
        assert wet.values == ("true", "false")
        assert wet.parents == ("Rain",)
        assert len(wet.probabilities) == 4

    def test_domain_duplicates_are_collapsed(self):
        dist = ConditionalDistribution("X", (), ("a", "b", "a"), {("a",): 1.0})
        assert dist.values == ("a", "b")

    def test_no_validation_on_build(self):
        dist = ConditionalDistribution.from_table("X", [], {(): {"a": 0.9, "b": 0.9}})
        assert sum(dist.probabilities.values()) == pytest.approx(1.8)

    def test_table_is_read_only(self):
        rain, _ = build_rain_distributions()
        with pytest.raises(TypeError):
            rain.probabilities[("true",)] = 0.5

    def test_fields_are_frozen(self):
        rain, _ = build_rain_distributions()
        with pytest.raises(AttributeError):
            rain.variable = "Snow"

    def test_source_mapping_is_copied(self):
        table = {("a",): 1.0}
        dist = ConditionalDistribution("X", (), ("a",), table)
        table[("a",)] = 0.0
        assert dist.lookup(("a",)) == 1.0


class TestAsciiTable:

    def test_root_table(self):
        rain, _ = build_rain_distributions()
        text = rain.to_ascii_table()
        assert "Node(Value)" in text
        assert "Rain(true)" in text
        assert "0.2000" in text

    def test_conditional_table_has_parent_header(self):
        _, wet = build_rain_distributions()
        lines = wet.to_ascii_table().splitlines()
        assert "Rain(true)" in lines[1]
        assert "Rain(false)" in lines[1]
        assert "WetGrass(true)" in lines[3]
        assert "0.9000" in lines[3]

    def test_missing_entries_are_dashed(self):
        dist = ConditionalDistribution("X", ("P",), ("a", "b"), {("a", "p"): 1.0})
        row_b = [line for line in dist.to_ascii_table().splitlines() if "X(b)" in line][0]
        assert "| -" in row_b
