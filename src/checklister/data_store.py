"""Checklist persistence.

The checklist lives in a single named storage slot holding the JSON-serialized
item array. ``JSONFileStore`` keeps that slot as a file under the data
directory; ``MemoryStore`` keeps it in memory for tests and embedding.
Stored data that cannot be read back as a list of items is treated as absent.
"""

import json
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from .log import get_logger
from .models import ChecklistItem

logger = get_logger(__name__)

DEFAULT_SLOT = "checklister-current"

_ITEMS_ADAPTER = TypeAdapter(list[ChecklistItem])


class PersistenceAdapter(Protocol):
    """Protocol defining checklist persistence."""

    def load(self) -> list[ChecklistItem] | None: ...
    def save(self, items: list[ChecklistItem]) -> None: ...


def serialize_items(items: list[ChecklistItem]) -> str:
    """Serialize items to the stored JSON text."""
    return json.dumps(
        [item.model_dump(mode="json", exclude_none=True) for item in items], indent=2
    )


def deserialize_items(text: str) -> list[ChecklistItem] | None:
    """Parse stored JSON text back into items.

    Returns:
        List of items, or None when the text is not a valid item array
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring unreadable checklist data: %s", e)
        return None

    if not isinstance(data, list):
        logger.warning("Ignoring stored checklist of unexpected type %s", type(data).__name__)
        return None

    try:
        return _ITEMS_ADAPTER.validate_python(data)
    except ValidationError as e:
        logger.warning("Ignoring incompatible stored checklist: %d errors", e.error_count())
        return None


class JSONFileStore:
    """Manages JSON file persistence for the checklist."""

    def __init__(self, data_dir: Path | None = None, slot: str = DEFAULT_SLOT):
        """Initialize data store.

        Args:
            data_dir: Directory for data files. Defaults to ./data
            slot: Storage slot name; the file is ``<slot>.json``
        """
        self.data_dir = data_dir or Path.cwd() / "data"
        self.slot = slot

    @property
    def path(self) -> Path:
        """Path to the slot file."""
        return self.data_dir / f"{self.slot}.json"

    def load(self) -> list[ChecklistItem] | None:
        """Load the stored checklist.

        Returns:
            Stored items, or None if nothing usable is stored
        """
        path = self.path
        if not path.exists():
            return None

        with open(path, encoding="utf-8") as f:
            text = f.read()
        return deserialize_items(text)

    def save(self, items: list[ChecklistItem]) -> None:
        """Write the whole checklist to the slot file."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(serialize_items(items))


class MemoryStore:
    """In-memory storage slot."""

    def __init__(self, text: str | None = None):
        self.text = text
        self.save_count = 0

    def load(self) -> list[ChecklistItem] | None:
        if self.text is None:
            return None
        return deserialize_items(self.text)

    def save(self, items: list[ChecklistItem]) -> None:
        self.text = serialize_items(items)
        self.save_count += 1
