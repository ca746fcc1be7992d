"""Text extraction from photographed shopping lists."""

from pathlib import Path
from typing import Callable, Protocol

import pytesseract
from PIL import Image, UnidentifiedImageError

from .exceptions import OCRError
from .log import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[float], None]


class OCRBackend(Protocol):
    """Anything that turns an image into text."""

    def extract_text(self, image_path: Path, progress: ProgressCallback | None = None) -> str: ...


class TesseractOCR:
    """OCR backed by the Tesseract engine."""

    def __init__(self, lang: str = "eng", config: str = "--psm 6"):
        """Initialize OCR backend.

        Args:
            lang: Tesseract language code
            config: Extra Tesseract options; psm 6 reads a single block of text
        """
        self.lang = lang
        self.config = config

    def extract_text(self, image_path: Path, progress: ProgressCallback | None = None) -> str:
        """Extract text from an image file.

        Args:
            image_path: Path to the image
            progress: Called with fractions from 0 to 1 as work proceeds

        Raises:
            OCRError: If the image cannot be read or Tesseract fails
        """
        report = progress or (lambda fraction: None)
        report(0.0)

        try:
            with Image.open(image_path) as img:
                img = img.convert("L")
                report(0.2)
                text = pytesseract.image_to_string(img, lang=self.lang, config=self.config)
        except (UnidentifiedImageError, OSError) as e:
            raise OCRError(f"Could not read image {image_path}: {e}") from e
        except pytesseract.TesseractError as e:
            raise OCRError(f"OCR failed for {image_path}: {e}") from e

        report(1.0)
        logger.info("Extracted %d characters from %s", len(text), image_path)
        return text
