"""Checklister - paste a grocery list, get a checklist sorted by aisle."""

from .ai_client import CategorizationClient
from .categorizer import RuleBasedCategorizer, dedupe_items
from .checklist_store import ChecklistStore
from .config import ConfigManager
from .data_store import JSONFileStore, MemoryStore, PersistenceAdapter
from .exceptions import (
    CategorizationServiceError,
    ChecklistError,
    EmptyInputError,
    InvalidAmountError,
    InvalidCategoryError,
    ItemNotFoundError,
    OCRError,
    TaxonomyError,
)
from .ingest import ListIngestor
from .models import (
    CategorizationSource,
    CategoryGroup,
    ChecklistItem,
    IngestResult,
    NormalizedResponse,
    ParsedQuantity,
    Progress,
    ResponseStatus,
    ToggleOutcome,
)
from .normalizer import normalize_response
from .quantity import extract_quantity
from .taxonomy import DEFAULT_TAXONOMY, Taxonomy, get_taxonomy, load_taxonomy
from .tokenizer import extract_urls, tokenize

__version__ = "0.1.0"

__all__ = [
    "CategorizationClient",
    "CategorizationServiceError",
    "CategorizationSource",
    "CategoryGroup",
    "ChecklistError",
    "ChecklistItem",
    "ChecklistStore",
    "ConfigManager",
    "DEFAULT_TAXONOMY",
    "dedupe_items",
    "EmptyInputError",
    "extract_quantity",
    "extract_urls",
    "get_taxonomy",
    "IngestResult",
    "InvalidAmountError",
    "InvalidCategoryError",
    "ItemNotFoundError",
    "JSONFileStore",
    "ListIngestor",
    "load_taxonomy",
    "MemoryStore",
    "normalize_response",
    "NormalizedResponse",
    "OCRError",
    "ParsedQuantity",
    "PersistenceAdapter",
    "Progress",
    "ResponseStatus",
    "RuleBasedCategorizer",
    "Taxonomy",
    "TaxonomyError",
    "tokenize",
    "ToggleOutcome",
]
