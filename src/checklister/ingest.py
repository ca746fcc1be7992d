"""Turning pasted or photographed lists into a categorized checklist."""

from pathlib import Path

from .ai_client import CategorizationClient
from .categorizer import RuleBasedCategorizer
from .checklist_store import ChecklistStore
from .exceptions import CategorizationServiceError, EmptyInputError
from .log import get_logger
from .models import CategorizationSource, IngestResult, ResponseStatus
from .normalizer import normalize_response
from .ocr import OCRBackend, ProgressCallback, TesseractOCR
from .tokenizer import extract_urls, tokenize

logger = get_logger(__name__)

NO_ITEMS_NOTICE = "No items found"


class ListIngestor:
    """Categorizes raw list input and loads it into the checklist store."""

    def __init__(
        self,
        store: ChecklistStore,
        client: CategorizationClient | None = None,
        ocr: OCRBackend | None = None,
    ):
        """Initialize ingestor.

        Args:
            store: Checklist store receiving the results
            client: Remote categorization client. Without one, the local
                rule-based categorizer is always used.
            ocr: OCR backend for images. Defaults to Tesseract.
        """
        self.store = store
        self.client = client
        self.ocr = ocr or TesseractOCR()
        self.categorizer = RuleBasedCategorizer(store.taxonomy)

    def ingest_text(self, text: str) -> IngestResult:
        """Categorize pasted text and replace the checklist with the result.

        URLs in the text are passed to the service for it to read; the rest
        is split into items.

        Raises:
            EmptyInputError: If the text holds no items and no URLs
        """
        if not text.strip():
            raise EmptyInputError("Nothing to sort: the list is empty")

        urls, remaining = extract_urls(text)
        items = tokenize(remaining) if remaining else []
        return self.ingest_items(items, urls)

    def ingest_image(
        self, image_path: Path, progress: ProgressCallback | None = None
    ) -> IngestResult:
        """Extract text from an image, then categorize it.

        Raises:
            EmptyInputError: If the image is missing or yields no items
            OCRError: If text extraction fails
        """
        if not image_path.is_file():
            raise EmptyInputError(f"Choose an image first: {image_path} not found")

        text = self.ocr.extract_text(image_path, progress)
        items = tokenize(text)
        if not items:
            raise EmptyInputError(f"No text found in {image_path.name}")
        return self.ingest_items(items)

    def ingest_items(self, items: list[str], urls: list[str] | None = None) -> IngestResult:
        """Categorize already tokenized items (and URLs).

        Falls back to the rule-based categorizer when no service is
        configured or the service call fails. The checklist is only replaced
        when at least one item comes back.

        Raises:
            EmptyInputError: If both items and urls are empty
        """
        urls = urls or []
        if not items and not urls:
            raise EmptyInputError("Nothing to sort: no items or URLs found")

        skipped_urls: list[str] = []
        source = CategorizationSource.SERVICE
        payload = None

        if self.client is not None:
            try:
                payload = self.client.categorize(items, urls)
            except CategorizationServiceError as e:
                logger.warning("Categorization service unavailable, using local rules: %s", e)

        if payload is None:
            source = CategorizationSource.FALLBACK
            skipped_urls = urls
            if skipped_urls:
                logger.warning("Skipping %d URLs that need the categorization service", len(urls))
            payload = self.categorizer.build_response(items)

        response = normalize_response(payload, sentinel=self.store.taxonomy.sentinel)
        if response.source == CategorizationSource.FALLBACK.value:
            source = CategorizationSource.FALLBACK

        if response.status == ResponseStatus.NO_RECIPE_FOUND:
            return IngestResult(source=source, notice=response.notice, skipped_urls=skipped_urls)

        if not response.items:
            return IngestResult(source=source, notice=NO_ITEMS_NOTICE, skipped_urls=skipped_urls)

        self.store.replace_all(response.items)
        categories = [group.category for group in self.store.grouped_view()]
        logger.info("Checklist ready: %d items in %d categories", len(response.items), len(categories))
        return IngestResult(
            item_count=len(response.items),
            source=source,
            replaced=True,
            skipped_urls=skipped_urls,
            categories=categories,
        )
