"""Tests for the rule-based fallback categorizer."""

import pytest

from checklister.categorizer import RuleBasedCategorizer, dedupe_items
from checklister.models import ChecklistItem
from checklister.taxonomy import AISLES_TAXONOMY


@pytest.fixture
def categorizer():
    return RuleBasedCategorizer()


class TestCategorize:
    """Tests for single-item categorization with the default taxonomy."""

    @pytest.mark.parametrize(
        ("name", "category"),
        [
            ("Milk", "Dairy, Laban & Cheese"),
            ("frozen peas", "Frozen Foods"),
            ("Khubz", "Bakery & Khubz"),
            ("lauki", "Fresh Vegetables & Herbs"),
            ("chicken breast", "Meat & Poultry"),
            ("orange juice", "Beverages & Juices"),
            ("tomato paste", "Sauces, Pastes & Condiments"),
            ("toothpaste", "Personal Care"),
            ("dish soap", "Household & Cleaning"),
            ("peanut butter", "Breakfast & Cereals"),
            ("steak", "Meat & Poultry"),
            ("watermelon", "Fresh Fruits"),
            ("eggplant", "Fresh Vegetables & Herbs"),
            ("basmati rice", "Rice, Atta, Flours & Grains"),
        ],
    )
    def test_known_items(self, categorizer, name, category):
        assert categorizer.categorize(name) == category

    def test_unknown_goes_to_sentinel(self, categorizer):
        assert categorizer.categorize("flux capacitor") == "Unrecognized"

    def test_case_and_spacing_insensitive(self, categorizer):
        assert categorizer.categorize("  FROZEN   Peas ") == "Frozen Foods"

    def test_other_taxonomy(self):
        categorizer = RuleBasedCategorizer(AISLES_TAXONOMY)
        assert categorizer.categorize("bananas") == "Produce"
        assert categorizer.categorize("flux capacitor") == "Other / Miscellaneous"


class TestCategorizeItems:
    """Tests for batch categorization."""

    def test_dedupes_and_keeps_first_casing(self, categorizer):
        items = categorizer.categorize_items(["Apples", "apples", "  APPLES ", "Milk"])
        assert [item.name for item in items] == ["Apples", "Milk"]

    def test_display_names_untouched(self, categorizer):
        items = categorizer.categorize_items(["2 kg Basmati Rice"])
        assert items[0].name == "2 kg Basmati Rice"

    def test_blank_names_skipped(self, categorizer):
        assert categorizer.categorize_items(["", "   "]) == []


class TestBuildResponse:
    """Tests for the service-shaped fallback payload."""

    def test_shape_and_order(self, small_taxonomy):
        categorizer = RuleBasedCategorizer(small_taxonomy)
        payload = categorizer.build_response(["bread", "milk", "widget", "apple"])

        assert payload["source"] == "fallback"
        names = [group["name"] for group in payload["categories"]]
        assert names == ["Produce", "Dairy", "Bakery", "Other"]

    def test_item_fields(self, small_taxonomy):
        categorizer = RuleBasedCategorizer(small_taxonomy)
        payload = categorizer.build_response(["2 l milk"])
        entry = payload["categories"][0]["items"][0]

        assert entry["display_name"] == "2 l milk"
        assert entry["qty"] == 2
        assert entry["unit"] == "l"
        assert entry["notes"] == "milk"
        assert entry["source_line"] == "2 l milk"

    def test_duplicates_collapsed(self, small_taxonomy):
        categorizer = RuleBasedCategorizer(small_taxonomy)
        payload = categorizer.build_response(["Milk", "milk"])
        assert len(payload["categories"][0]["items"]) == 1


class TestDedupeItems:
    """Tests for item deduplication."""

    def test_same_name_different_category_kept(self):
        items = [
            ChecklistItem(name="Corn", category="Produce"),
            ChecklistItem(name="corn", category="Frozen"),
        ]
        assert len(dedupe_items(items)) == 2

    def test_same_key_collapsed(self):
        items = [
            ChecklistItem(name="Corn", category="Produce"),
            ChecklistItem(name="corn ", category="Produce"),
        ]
        assert [item.name for item in dedupe_items(items)] == ["Corn"]


class TestFishKeywords:
    """Fish aisle keywords."""

    def test_local_fish(self, categorizer):
        assert categorizer.categorize("shaari fillet") == "Fish & Seafood"

    def test_sherry_is_not_fish(self, categorizer):
        assert categorizer.categorize("sherry") != "Fish & Seafood"
