"""Rule-based fallback categorizer.

Used when the remote categorization service is unavailable. Items are matched
against a taxonomy's keyword rules in declared order; the first rule with a
keyword contained in the item name wins, and items matching nothing land in
the taxonomy's sentinel category. Display names are never rewritten.
"""

from typing import Any, Iterable

from .models import CategorizationSource, ChecklistItem
from .quantity import extract_quantity
from .taxonomy import DEFAULT_TAXONOMY, Taxonomy
from .tokenizer import normalize_name


def dedupe_items(items: Iterable[ChecklistItem]) -> list[ChecklistItem]:
    """Collapse items sharing a category and normalized name.

    The first occurrence (and its original casing) is kept.
    """
    seen: set[tuple[str, str]] = set()
    unique = []
    for item in items:
        key = (item.category, normalize_name(item.name))
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


class RuleBasedCategorizer:
    """Assigns categories from a taxonomy's keyword rules."""

    def __init__(self, taxonomy: Taxonomy | None = None):
        """Initialize categorizer.

        Args:
            taxonomy: Taxonomy to categorize against. Defaults to the built-in one.
        """
        self.taxonomy = taxonomy or DEFAULT_TAXONOMY

    def categorize(self, name: str) -> str:
        """Return the category for one item name."""
        key = normalize_name(name)
        for rule in self.taxonomy.rules:
            if any(keyword in key for keyword in rule.keywords):
                return rule.category
        return self.taxonomy.sentinel

    def categorize_items(self, names: Iterable[str]) -> list[ChecklistItem]:
        """Categorize a batch of names into deduplicated checklist items."""
        items = [
            ChecklistItem(name=name.strip(), category=self.categorize(name))
            for name in names
            if name.strip()
        ]
        return dedupe_items(items)

    def build_response(self, names: Iterable[str]) -> dict[str, Any]:
        """Categorize names into a payload shaped like the service's newest schema.

        The result can be fed through the response normalizer like any
        service response.
        """
        grouped: dict[str, list[dict[str, Any]]] = {}
        seen: set[tuple[str, str]] = set()

        for raw in names:
            name = raw.strip()
            if not name:
                continue
            category = self.categorize(name)
            key = (category, normalize_name(name))
            if key in seen:
                continue
            seen.add(key)

            parsed = extract_quantity(name)
            grouped.setdefault(category, []).append(
                {
                    "display_name": name,
                    "qty": parsed.quantity,
                    "unit": parsed.unit,
                    "notes": parsed.display_notes,
                    "source_line": raw,
                }
            )

        ordered = sorted(grouped, key=self.taxonomy.position)
        return {
            "categories": [{"name": c, "items": grouped[c]} for c in ordered],
            "source": CategorizationSource.FALLBACK.value,
        }
