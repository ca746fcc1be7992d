"""Core data models for Checklister."""

from enum import Enum
from uuid import UUID, uuid4

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator


class CategorizationSource(str, Enum):
    """Where a categorization came from."""

    SERVICE = "service"
    FALLBACK = "fallback"


class ResponseStatus(str, Enum):
    """Outcome signalled by a categorization response."""

    OK = "ok"
    NO_RECIPE_FOUND = "no_recipe_found"


class ToggleOutcome(str, Enum):
    """Result of toggling an item's check box."""

    AMOUNT_REQUIRED = "amount_required"
    UNCHECKED = "unchecked"


class ChecklistItem(BaseModel):
    """A single shopping-list entry."""

    id: UUID = Field(default_factory=uuid4, frozen=True)
    name: str
    category: str = Field(validation_alias=AliasChoices("category", "aisle"))
    checked: bool = False
    amount: float | None = Field(default=None, gt=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Item name must not be empty")
        return v

    @model_validator(mode="after")
    def drop_amount_when_unchecked(self) -> "ChecklistItem":
        # amount only exists for checked items
        if not self.checked:
            self.amount = None
        return self


class CategoryGroup(BaseModel):
    """Items sharing one category, as shown in the checklist."""

    category: str
    items: list[ChecklistItem] = Field(default_factory=list)


class Progress(BaseModel):
    """Shopping progress over the current checklist."""

    checked_count: int = 0
    total_count: int = 0
    total_amount: float = 0.0

    @property
    def percentage(self) -> float:
        """Share of checked items, 0-100."""
        if self.total_count == 0:
            return 0.0
        return round(self.checked_count / self.total_count * 100, 1)

    @property
    def is_complete(self) -> bool:
        """True when every item of a multi-item list is checked."""
        return self.total_count > 1 and self.checked_count == self.total_count


class ParsedQuantity(BaseModel):
    """Quantity and unit pulled out of a raw item string."""

    quantity: float = 1.0
    unit: str = ""
    display_notes: str = ""


class NormalizedResponse(BaseModel):
    """A categorization response flattened into checklist items."""

    items: list[ChecklistItem] = Field(default_factory=list)
    status: ResponseStatus = ResponseStatus.OK
    notice: str | None = None
    source: str | None = None


class IngestResult(BaseModel):
    """Outcome of turning raw input into a checklist."""

    item_count: int = 0
    source: CategorizationSource = CategorizationSource.FALLBACK
    replaced: bool = False
    notice: str | None = None
    skipped_urls: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
