"""Tests for category taxonomies."""

import pytest

from checklister.exceptions import TaxonomyError
from checklister.taxonomy import (
    AISLES_TAXONOMY,
    DEFAULT_TAXONOMY,
    UAE_TAXONOMY,
    CategoryRule,
    Taxonomy,
    get_taxonomy,
    load_taxonomy,
    taxonomy_from_dict,
)


class TestBuiltinTaxonomies:
    """Tests for the shipped taxonomies."""

    def test_default_is_uae(self):
        assert DEFAULT_TAXONOMY is UAE_TAXONOMY
        assert len(UAE_TAXONOMY.categories) == 25
        assert UAE_TAXONOMY.categories[-1] == "Unrecognized"
        assert UAE_TAXONOMY.sentinel == "Unrecognized"

    def test_aisles_sentinel(self):
        assert AISLES_TAXONOMY.sentinel == "Other / Miscellaneous"
        assert AISLES_TAXONOMY.categories[0] == "Produce"

    def test_rules_reference_known_categories(self):
        for taxonomy in (UAE_TAXONOMY, AISLES_TAXONOMY):
            for rule in taxonomy.rules:
                assert taxonomy.is_known(rule.category)

    def test_get_taxonomy(self):
        assert get_taxonomy("UAE") is UAE_TAXONOMY
        assert get_taxonomy("aisles") is AISLES_TAXONOMY

    def test_get_unknown_taxonomy(self):
        with pytest.raises(TaxonomyError, match="Unknown taxonomy"):
            get_taxonomy("martian")


class TestTaxonomyModel:
    """Tests for taxonomy validation."""

    def test_sentinel_appended(self):
        taxonomy = Taxonomy(name="t", sentinel="Misc", categories=["A"])
        assert taxonomy.categories == ["A", "Misc"]

    def test_keywords_lowercased(self):
        rule = CategoryRule(category="A", keywords=["Milk", " "])
        assert rule.keywords == ["milk"]

    def test_unknown_rule_category(self):
        with pytest.raises(TaxonomyError):
            taxonomy_from_dict(
                {
                    "name": "t",
                    "sentinel": "Misc",
                    "categories": ["A"],
                    "rules": [{"category": "B", "keywords": ["x"]}],
                }
            )

    def test_position(self, small_taxonomy):
        assert small_taxonomy.position("Dairy") == 1
        assert small_taxonomy.position("Custom") is None


class TestLoadTaxonomy:
    """Tests for TOML taxonomy files."""

    def test_load(self, tmp_path):
        path = tmp_path / "store.toml"
        path.write_text(
            """
name = "corner-shop"
version = 2
sentinel = "Misc"
categories = ["Fruit", "Dairy"]

[[rules]]
category = "Dairy"
keywords = ["milk"]
"""
        )
        taxonomy = load_taxonomy(path)
        assert taxonomy.name == "corner-shop"
        assert taxonomy.version == 2
        assert taxonomy.categories == ["Fruit", "Dairy", "Misc"]
        assert taxonomy.rules[0].keywords == ["milk"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(TaxonomyError):
            load_taxonomy(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("name = ")
        with pytest.raises(TaxonomyError):
            load_taxonomy(path)
