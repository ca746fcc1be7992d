"""Tests for response normalization."""

from checklister.models import ResponseStatus
from checklister.normalizer import (
    NO_RECIPE_NOTICE,
    normalize_response,
    parse_aisles_shape,
    parse_categories_shape,
    parse_items_shape,
)


def _pairs(response):
    return [(item.name, item.category) for item in response.items]


EXPECTED = [("Milk", "Dairy"), ("Cheese", "Dairy"), ("Bread", "Bakery")]


class TestShapes:
    """All three response shapes flatten to the same items."""

    def test_categories_shape(self, categories_payload):
        assert _pairs(normalize_response(categories_payload)) == EXPECTED

    def test_items_shape(self, items_payload):
        assert _pairs(normalize_response(items_payload)) == EXPECTED

    def test_aisles_shape(self, aisles_payload):
        assert _pairs(normalize_response(aisles_payload)) == EXPECTED

    def test_parsers_reject_other_shapes(self, categories_payload, aisles_payload):
        assert parse_items_shape(categories_payload) is None
        assert parse_categories_shape(aisles_payload) is None
        assert parse_aisles_shape({"foo": 1}) is None

    def test_fresh_checklist_items(self, categories_payload):
        response = normalize_response(categories_payload)
        assert all(not item.checked and item.amount is None for item in response.items)
        assert len({item.id for item in response.items}) == len(response.items)


class TestSentinel:
    """Uncategorized entries land in the sentinel category."""

    def test_uncategorized_list(self):
        payload = {"aisles": {}, "uncategorized": ["Widget"]}
        response = normalize_response(payload, sentinel="Other")
        assert _pairs(response) == [("Widget", "Other")]

    def test_missing_category(self):
        payload = {"items": [{"input": "Widget"}]}
        assert _pairs(normalize_response(payload)) == [("Widget", "Unrecognized")]

    def test_unnamed_items_dropped(self):
        payload = {"categories": [{"name": "Dairy", "items": [{"qty": 2}, {"name": "Milk"}]}]}
        assert _pairs(normalize_response(payload)) == [("Milk", "Dairy")]


class TestEdgeCases:
    """Tests for unusual payloads."""

    def test_unknown_shape_is_empty(self):
        response = normalize_response({"something": "else"})
        assert response.items == []
        assert response.status == ResponseStatus.OK

    def test_non_object(self):
        assert normalize_response(["milk"]).items == []
        assert normalize_response(None).items == []

    def test_duplicates_collapsed(self):
        payload = {"items": [{"input": "Milk", "category": "Dairy"}, {"input": "milk", "category": "Dairy"}]}
        assert _pairs(normalize_response(payload)) == [("Milk", "Dairy")]

    def test_no_recipe_found(self):
        response = normalize_response({"status": "no_recipe_found"})
        assert response.status == ResponseStatus.NO_RECIPE_FOUND
        assert response.notice == NO_RECIPE_NOTICE
        assert response.items == []

    def test_no_recipe_found_custom_notice(self):
        response = normalize_response({"status": "no_recipe_found", "notice": "Page had no recipe"})
        assert response.notice == "Page had no recipe"

    def test_source_carried(self, categories_payload):
        categories_payload["source"] = "fallback"
        assert normalize_response(categories_payload).source == "fallback"
