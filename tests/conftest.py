"""Shared test fixtures for Checklister."""

import pytest

from checklister.checklist_store import ChecklistStore
from checklister.data_store import JSONFileStore, MemoryStore
from checklister.taxonomy import CategoryRule, Taxonomy


@pytest.fixture
def temp_data_dir(tmp_path):
    """Create a temporary data directory."""
    data_dir = tmp_path / "test_data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def missing_config(tmp_path):
    """Path to a config file that does not exist, so defaults apply."""
    return tmp_path / "no-config.toml"


@pytest.fixture
def json_store(temp_data_dir):
    """Create a JSONFileStore with temporary directory."""
    return JSONFileStore(data_dir=temp_data_dir)


@pytest.fixture
def memory_store():
    """Create an empty in-memory storage slot."""
    return MemoryStore()


@pytest.fixture
def small_taxonomy():
    """A compact taxonomy with Dairy declared before Bakery."""
    return Taxonomy(
        name="test",
        version=1,
        sentinel="Other",
        categories=["Produce", "Dairy", "Bakery", "Frozen", "Other"],
        rules=[
            CategoryRule(category="Frozen", keywords=["frozen"]),
            CategoryRule(category="Produce", keywords=["apple", "banana", "peas"]),
            CategoryRule(category="Dairy", keywords=["milk", "cheese"]),
            CategoryRule(category="Bakery", keywords=["bread"]),
        ],
    )


@pytest.fixture
def checklist_store(memory_store, small_taxonomy):
    """Create a ChecklistStore backed by memory."""
    return ChecklistStore(memory_store, taxonomy=small_taxonomy)


@pytest.fixture
def stocked_store(checklist_store):
    """A store holding milk, bread and apples."""
    checklist_store.add_item("Milk")
    checklist_store.add_item("Bread")
    checklist_store.add_item("Apples")
    return checklist_store


@pytest.fixture
def categories_payload():
    """Newest response shape."""
    return {
        "categories": [
            {
                "name": "Dairy",
                "items": [
                    {"display_name": "Milk", "qty": 1, "unit": "", "notes": ""},
                    {"name": "Cheese"},
                ],
            },
            {"name": "Bakery", "items": [{"display_name": "Bread"}]},
        ]
    }


@pytest.fixture
def items_payload():
    """Legacy flat response shape."""
    return {
        "items": [
            {"input": "Milk", "category": "Dairy"},
            {"display_name": "Cheese", "aisle": "Dairy"},
            {"name": "Bread", "category": "Bakery"},
        ]
    }


@pytest.fixture
def aisles_payload():
    """Oldest map response shape."""
    return {
        "aisles": {"Dairy": ["Milk", "Cheese"], "Bakery": ["Bread"]},
        "uncategorized": [],
    }
