"""The active checklist and its derived views."""

import math
from typing import Callable, Iterable
from uuid import UUID

from .categorizer import RuleBasedCategorizer
from .data_store import MemoryStore, PersistenceAdapter
from .exceptions import InvalidAmountError, InvalidCategoryError, ItemNotFoundError
from .log import get_logger
from .models import CategoryGroup, ChecklistItem, Progress, ToggleOutcome
from .taxonomy import DEFAULT_TAXONOMY, Taxonomy

logger = get_logger(__name__)

CompletionListener = Callable[[Progress], None]


def parse_amount(raw: float | str) -> float:
    """Parse a user-entered amount.

    Raises:
        InvalidAmountError: If the value is not a finite number greater than zero
    """
    if isinstance(raw, bool):
        raise InvalidAmountError(raw)
    try:
        value = float(str(raw).strip())
    except ValueError:
        raise InvalidAmountError(raw) from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidAmountError(raw)
    return value


def _clean_category(category: str) -> str:
    cleaned = category.strip()
    if not cleaned:
        raise InvalidCategoryError("Category name must not be empty")
    return cleaned


class ChecklistStore:
    """Owns the checklist items for the current session.

    Every mutation writes the whole collection through the persistence
    adapter. Storage failures are logged and otherwise ignored; the in-memory
    items stay authoritative.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter | None = None,
        taxonomy: Taxonomy | None = None,
    ):
        """Initialize the store and load any saved checklist.

        Args:
            adapter: Persistence adapter. Defaults to an in-memory slot.
            taxonomy: Taxonomy used for ordering and manual categorization
        """
        self.adapter = adapter or MemoryStore()
        self.taxonomy = taxonomy or DEFAULT_TAXONOMY
        self.items: list[ChecklistItem] = self._load()
        self.pending_amount_id: UUID | None = None
        self._listeners: list[CompletionListener] = []
        self._was_complete = self.progress().is_complete

    def _load(self) -> list[ChecklistItem]:
        try:
            items = self.adapter.load()
        except (OSError, ValueError) as e:
            logger.warning("Could not load saved checklist, starting empty: %s", e)
            return []
        return items or []

    def _persist(self) -> None:
        try:
            self.adapter.save(self.items)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not save checklist: %s", e)

    def _commit(self) -> None:
        self._persist()
        progress = self.progress()
        complete = progress.is_complete
        if complete and not self._was_complete:
            logger.info("All %d items checked", progress.total_count)
            for listener in list(self._listeners):
                listener(progress)
        self._was_complete = complete

    # --- Lookup ---

    def get_item(self, item_id: UUID | str) -> ChecklistItem:
        """Get a specific item by ID.

        Raises:
            ItemNotFoundError: If item not found
        """
        if isinstance(item_id, str):
            try:
                item_id = UUID(item_id)
            except ValueError:
                raise ItemNotFoundError(item_id) from None

        for item in self.items:
            if item.id == item_id:
                return item
        raise ItemNotFoundError(item_id)

    def resolve_id(self, ref: UUID | str) -> UUID:
        """Resolve a full ID or a unique ID prefix to an item ID.

        Raises:
            ItemNotFoundError: If nothing or more than one item matches
        """
        if isinstance(ref, UUID):
            return self.get_item(ref).id

        ref = ref.strip().lower()
        matches = [item.id for item in self.items if str(item.id).startswith(ref)]
        if not ref or len(matches) != 1:
            raise ItemNotFoundError(ref)
        return matches[0]

    # --- Mutations ---

    def on_complete(self, listener: CompletionListener) -> None:
        """Register a callback fired when the list becomes fully checked."""
        self._listeners.append(listener)

    def replace_all(self, items: Iterable[ChecklistItem]) -> None:
        """Replace the whole checklist with freshly categorized items."""
        self.items = list(items)
        self.pending_amount_id = None
        self._commit()

    def reset(self) -> None:
        """Start a new, empty list."""
        self.replace_all([])

    def add_item(self, name: str, category: str | None = None) -> ChecklistItem:
        """Add one item by hand.

        Args:
            name: Item name as typed
            category: Category; guessed from the taxonomy rules when omitted

        Raises:
            ValueError: If the name is blank
        """
        if category is None:
            category = RuleBasedCategorizer(self.taxonomy).categorize(name)
        item = ChecklistItem(name=name.strip(), category=_clean_category(category))
        self.items.append(item)
        self._commit()
        return item

    def toggle_check(self, item_id: UUID | str) -> ToggleOutcome:
        """Toggle an item's check box.

        Checking needs an amount first, so an unchecked item is only marked
        as pending; call ``confirm_amount`` to finish. A checked item is
        unchecked immediately and loses its amount.
        """
        item = self.get_item(item_id)
        if not item.checked:
            self.pending_amount_id = item.id
            return ToggleOutcome.AMOUNT_REQUIRED

        self.uncheck(item.id)
        return ToggleOutcome.UNCHECKED

    def confirm_amount(self, item_id: UUID | str, amount: float | str) -> ChecklistItem:
        """Check an item off with the price paid.

        Raises:
            InvalidAmountError: If the amount is not a positive number; the
                item is left unchanged
        """
        item = self.get_item(item_id)
        value = parse_amount(amount)
        item.checked = True
        item.amount = value
        if self.pending_amount_id == item.id:
            self.pending_amount_id = None
        self._commit()
        return item

    def cancel_pending(self) -> None:
        """Abandon a pending amount entry."""
        self.pending_amount_id = None

    def uncheck(self, item_id: UUID | str) -> ChecklistItem:
        """Uncheck an item and clear its amount."""
        item = self.get_item(item_id)
        item.checked = False
        item.amount = None
        self._commit()
        return item

    def move_to_category(self, item_id: UUID | str, new_category: str) -> ChecklistItem:
        """Reassign an item's category; check state and amount are kept."""
        return self.move_many([item_id], new_category)[0]

    def move_many(self, item_ids: Iterable[UUID | str], new_category: str) -> list[ChecklistItem]:
        """Reassign several items at once.

        All IDs are looked up before anything changes.

        Raises:
            ItemNotFoundError: If any ID is unknown
            InvalidCategoryError: If the category name is blank
        """
        category = _clean_category(new_category)
        targets = [self.get_item(item_id) for item_id in item_ids]
        for item in targets:
            item.category = category
        self._commit()
        return targets

    def rename_category(self, old_category: str, new_category: str) -> int:
        """Move every item of one category into another.

        Returns:
            Number of items moved
        """
        category = _clean_category(new_category)
        moved = 0
        for item in self.items:
            if item.category == old_category:
                item.category = category
                moved += 1
        if moved:
            self._commit()
        return moved

    def delete_many(self, item_ids: Iterable[UUID | str]) -> list[ChecklistItem]:
        """Remove items entirely.

        Raises:
            ItemNotFoundError: If any ID is unknown; nothing is removed
        """
        doomed = {self.get_item(item_id).id for item_id in item_ids}
        removed = [item for item in self.items if item.id in doomed]
        self.items = [item for item in self.items if item.id not in doomed]
        if self.pending_amount_id in doomed:
            self.pending_amount_id = None
        self._commit()
        return removed

    # --- Derived views ---

    def _ordered_categories(self, present: Iterable[str]) -> list[str]:
        present = set(present)
        known = [c for c in self.taxonomy.categories if c in present]
        custom = sorted(
            (c for c in present if not self.taxonomy.is_known(c)),
            key=lambda c: (c.lower(), c),
        )
        return known + custom

    def grouped_view(self) -> list[CategoryGroup]:
        """Items grouped by category.

        Taxonomy categories come first in taxonomy order, then any other
        category in case-insensitive alphabetical order.
        """
        groups: dict[str, list[ChecklistItem]] = {}
        for item in self.items:
            groups.setdefault(item.category, []).append(item)

        return [
            CategoryGroup(category=category, items=groups[category])
            for category in self._ordered_categories(groups)
        ]

    def categories(self) -> list[str]:
        """Every category an item can be moved to: the taxonomy plus custom ones in use."""
        return self._ordered_categories(
            list(self.taxonomy.categories) + [item.category for item in self.items]
        )

    def unrecognized_items(self) -> list[ChecklistItem]:
        """Items sitting in the taxonomy's sentinel category."""
        return [item for item in self.items if item.category == self.taxonomy.sentinel]

    def progress(self) -> Progress:
        """Checked count, total count and the sum of entered amounts."""
        checked = [item for item in self.items if item.checked]
        total_amount = sum(item.amount for item in checked if item.amount is not None)
        return Progress(
            checked_count=len(checked),
            total_count=len(self.items),
            total_amount=round(total_amount, 2),
        )
