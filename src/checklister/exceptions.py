"""Exception types raised by Checklister."""

from uuid import UUID


class ChecklistError(Exception):
    """Base class for all Checklister errors."""


class ItemNotFoundError(ChecklistError):
    """Raised when an item is not found."""

    def __init__(self, item_id: UUID | str):
        self.item_id = item_id
        super().__init__(f"Item with ID '{item_id}' not found")


class InvalidAmountError(ChecklistError, ValueError):
    """Raised when an entered amount is not a positive number."""

    def __init__(self, raw_amount: object):
        self.raw_amount = raw_amount
        super().__init__(f"Please enter a valid amount (got {raw_amount!r})")


class InvalidCategoryError(ChecklistError, ValueError):
    """Raised when a category name is blank."""


class EmptyInputError(ChecklistError):
    """Raised when there is nothing to categorize."""


class CategorizationServiceError(ChecklistError):
    """Raised when the remote categorization service cannot be used."""


class OCRError(ChecklistError):
    """Raised when text could not be extracted from an image."""


class TaxonomyError(ChecklistError):
    """Raised when a taxonomy definition is invalid or unknown."""
