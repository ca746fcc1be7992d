"""Flattening categorization responses into checklist items.

The categorization service has returned three incompatible shapes over time,
probed here newest first:

1. ``{"categories": [{"name": ..., "items": [{"display_name" | "name": ...}]}]}``
2. ``{"items": [{"input" | "display_name" | "name": ..., "category" | "aisle": ...}]}``
3. ``{"aisles": {category: [names]}, "uncategorized": [names]}``

Each shape has its own parser returning a list of items, or None when the
payload is not of that shape. Payloads matching none of them yield no items.
Normalization never raises.
"""

from typing import Any, Callable

from .categorizer import dedupe_items
from .log import get_logger
from .models import ChecklistItem, NormalizedResponse, ResponseStatus
from .taxonomy import DEFAULT_TAXONOMY

logger = get_logger(__name__)

DEFAULT_SENTINEL = DEFAULT_TAXONOMY.sentinel
NO_RECIPE_NOTICE = "No recipe items found in the provided content"


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _make_item(name: str, category: str, sentinel: str) -> ChecklistItem | None:
    if not name:
        logger.warning("Dropping unnamed item in category '%s'", category or sentinel)
        return None
    return ChecklistItem(name=name, category=category or sentinel)


def parse_categories_shape(
    payload: dict[str, Any], sentinel: str = DEFAULT_SENTINEL
) -> list[ChecklistItem] | None:
    """Parse ``{"categories": [{"name", "items": [...]}]}``."""
    categories = payload.get("categories")
    if not isinstance(categories, list):
        return None

    items = []
    for group in categories:
        if not isinstance(group, dict):
            continue
        category = _text(group.get("name"))
        entries = group.get("items")
        if not isinstance(entries, list):
            continue
        for entry in entries:
            if isinstance(entry, dict):
                name = _text(entry.get("display_name")) or _text(entry.get("name"))
            else:
                name = _text(entry)
            item = _make_item(name, category, sentinel)
            if item is not None:
                items.append(item)
    return items


def parse_items_shape(
    payload: dict[str, Any], sentinel: str = DEFAULT_SENTINEL
) -> list[ChecklistItem] | None:
    """Parse the legacy flat ``{"items": [{"input", "category"}]}`` form."""
    entries = payload.get("items")
    if not isinstance(entries, list):
        return None

    items = []
    for entry in entries:
        if isinstance(entry, dict):
            name = (
                _text(entry.get("input"))
                or _text(entry.get("display_name"))
                or _text(entry.get("name"))
            )
            category = _text(entry.get("category")) or _text(entry.get("aisle"))
        else:
            name, category = _text(entry), ""
        item = _make_item(name, category, sentinel)
        if item is not None:
            items.append(item)
    return items


def parse_aisles_shape(
    payload: dict[str, Any], sentinel: str = DEFAULT_SENTINEL
) -> list[ChecklistItem] | None:
    """Parse the oldest ``{"aisles": {...}, "uncategorized": [...]}`` map form."""
    aisles = payload.get("aisles")
    uncategorized = payload.get("uncategorized")
    if not isinstance(aisles, dict) and not isinstance(uncategorized, list):
        return None

    items = []
    if isinstance(aisles, dict):
        for category, names in aisles.items():
            if not isinstance(names, list):
                continue
            for name in names:
                item = _make_item(_text(name), _text(category), sentinel)
                if item is not None:
                    items.append(item)

    if isinstance(uncategorized, list):
        for name in uncategorized:
            item = _make_item(_text(name), sentinel, sentinel)
            if item is not None:
                items.append(item)
    return items


SHAPE_PARSERS: list[Callable[[dict[str, Any], str], list[ChecklistItem] | None]] = [
    parse_categories_shape,
    parse_items_shape,
    parse_aisles_shape,
]


def normalize_response(payload: Any, sentinel: str = DEFAULT_SENTINEL) -> NormalizedResponse:
    """Convert a categorization response into a flat, deduplicated item list.

    Args:
        payload: Decoded JSON returned by the service (or the fallback)
        sentinel: Category assigned to items the response left uncategorized

    Returns:
        NormalizedResponse; empty when the payload matches no known shape
    """
    if not isinstance(payload, dict):
        logger.warning("Categorization response is not an object: %s", type(payload).__name__)
        return NormalizedResponse()

    source = payload.get("source") if isinstance(payload.get("source"), str) else None

    if payload.get("status") == ResponseStatus.NO_RECIPE_FOUND.value:
        notice = _text(payload.get("notice")) or NO_RECIPE_NOTICE
        return NormalizedResponse(
            status=ResponseStatus.NO_RECIPE_FOUND, notice=notice, source=source
        )

    for parser in SHAPE_PARSERS:
        items = parser(payload, sentinel)
        if items is not None:
            logger.debug("Parsed %d items with %s", len(items), parser.__name__)
            return NormalizedResponse(items=dedupe_items(items), source=source)

    logger.warning("Categorization response matched no known shape: keys=%s", sorted(payload))
    return NormalizedResponse(source=source)
