"""Tests for data models."""

from uuid import UUID

import pytest
from pydantic import ValidationError

from checklister.models import ChecklistItem, IngestResult, ParsedQuantity, Progress


class TestChecklistItem:
    """Tests for ChecklistItem model."""

    def test_defaults(self):
        item = ChecklistItem(name="Milk", category="Dairy")
        assert isinstance(item.id, UUID)
        assert item.checked is False
        assert item.amount is None

    def test_unique_ids(self):
        a = ChecklistItem(name="Milk", category="Dairy")
        b = ChecklistItem(name="Milk", category="Dairy")
        assert a.id != b.id

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            ChecklistItem(name="   ", category="Dairy")

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            ChecklistItem(name="Milk", category="Dairy", checked=True, amount=0)

    def test_aisle_alias(self):
        item = ChecklistItem.model_validate({"name": "Milk", "aisle": "Dairy"})
        assert item.category == "Dairy"

    def test_amount_only_when_checked(self):
        item = ChecklistItem(name="Milk", category="Dairy", amount=4.0)
        assert item.amount is None
        item = ChecklistItem(name="Milk", category="Dairy", checked=True, amount=4.0)
        assert item.amount == 4.0


class TestProgress:
    """Tests for Progress model."""

    def test_empty(self):
        progress = Progress()
        assert progress.percentage == 0.0
        assert progress.is_complete is False

    def test_percentage(self):
        assert Progress(checked_count=1, total_count=3).percentage == 33.3

    def test_single_item_never_complete(self):
        assert Progress(checked_count=1, total_count=1).is_complete is False

    def test_complete(self):
        assert Progress(checked_count=2, total_count=2).is_complete is True


class TestSmallModels:
    """Tests for defaults of result models."""

    def test_parsed_quantity_defaults(self):
        parsed = ParsedQuantity()
        assert (parsed.quantity, parsed.unit, parsed.display_notes) == (1.0, "", "")

    def test_ingest_result_defaults(self):
        result = IngestResult()
        assert result.replaced is False
        assert result.source == "fallback"
        assert result.skipped_urls == []


class TestItemIdentity:
    """Item IDs never change."""

    def test_id_is_frozen(self):
        item = ChecklistItem(name="Milk", category="Dairy")
        with pytest.raises(ValidationError):
            item.id = UUID(int=0)
