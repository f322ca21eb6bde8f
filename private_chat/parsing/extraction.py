"""Text extraction from uploaded files.

Dispatches on the declared content type:
    - image/*          -> OCR with Tesseract
    - application/pdf  -> per-page text layer via pypdf
    - audio/video/font -> rejected as unsupported
    - anything else    -> decoded as UTF-8 text

Extraction is all-or-nothing. Every failure surfaces as an ExtractionError
carrying one of three failure kinds.
"""

import asyncio
import io
import logging
from enum import Enum

import pytesseract
from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel

from private_chat.config import AppConfig, get_app_config
from private_chat.parsing.pdf_parser import PDFParseError, parse_pdf

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
_UNSUPPORTED_PREFIXES = ("audio/", "video/", "font/")


class ExtractionFailure(str, Enum):
    """Why a file could not be turned into text."""

    UNSUPPORTED_TYPE = "unsupported-type"
    DECODE_ERROR = "decode-error"
    TIMEOUT = "timeout"


class ExtractionError(Exception):
    """Raised when a file cannot be extracted.

    Attributes:
        kind: Failure category.
    """

    def __init__(self, kind: ExtractionFailure, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class ExtractedText(BaseModel):
    """Text extracted from one file.

    Attributes:
        name: Original file name.
        content_type: Declared content type used for dispatch.
        text: Extracted text, unbounded.
    """

    name: str
    content_type: str
    text: str


def _normalize_content_type(content_type: str | None) -> str:
    return (content_type or "").split(";", 1)[0].strip().lower()


def _ocr_image(data: bytes, timeout: float) -> str:
    try:
        with Image.open(io.BytesIO(data)) as img:
            if img.mode not in ("RGB", "L"):
                img = img.convert("RGB")
            return pytesseract.image_to_string(img, timeout=timeout) or ""
    except UnidentifiedImageError as e:
        raise ExtractionError(ExtractionFailure.DECODE_ERROR, f"Unreadable image: {e}") from e
    except pytesseract.TesseractNotFoundError as e:
        # Subclass of OSError, so it must be matched first
        raise ExtractionError(
            ExtractionFailure.UNSUPPORTED_TYPE, "OCR is not available (Tesseract not installed)"
        ) from e
    except (OSError, Image.DecompressionBombError) as e:
        raise ExtractionError(ExtractionFailure.DECODE_ERROR, f"Corrupt image: {e}") from e
    except pytesseract.TesseractError as e:
        raise ExtractionError(ExtractionFailure.DECODE_ERROR, f"OCR failed: {e}") from e
    except RuntimeError as e:
        # pytesseract kills Tesseract and raises a bare RuntimeError on timeout
        raise ExtractionError(ExtractionFailure.TIMEOUT, f"OCR stopped: {e}") from e


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ExtractionError(
            ExtractionFailure.DECODE_ERROR, f"File is not valid UTF-8 text: {e.reason}"
        ) from e


class TextExtractor:
    """Turns uploaded files into plain text for file-grounded turns."""

    def __init__(self, config: AppConfig | None = None) -> None:
        """Initialize the extractor.

        Args:
            config: Optional application configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_app_config()

    def _extract_sync(self, content_type: str, data: bytes) -> str:
        try:
            return self._dispatch(content_type, data)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                ExtractionFailure.DECODE_ERROR, f"Unexpected extraction error: {e}"
            ) from e

    def _dispatch(self, content_type: str, data: bytes) -> str:
        if not data:
            raise ExtractionError(ExtractionFailure.DECODE_ERROR, "Empty file provided")

        if len(data) > self._config.max_file_size:
            size_mb = len(data) / (1024 * 1024)
            raise ExtractionError(
                ExtractionFailure.DECODE_ERROR,
                f"File size ({size_mb:.1f}MB) exceeds maximum allowed",
            )

        if content_type.startswith("image/"):
            text = _ocr_image(data, timeout=self._config.extraction_timeout)
        elif content_type == PDF_CONTENT_TYPE:
            try:
                text = parse_pdf(data, max_size=self._config.max_file_size).text
            except PDFParseError as e:
                raise ExtractionError(ExtractionFailure.DECODE_ERROR, str(e)) from e
        elif content_type.startswith(_UNSUPPORTED_PREFIXES):
            raise ExtractionError(
                ExtractionFailure.UNSUPPORTED_TYPE, f"Unsupported file type: {content_type}"
            )
        else:
            text = _decode_text(data)

        if not text.strip():
            raise ExtractionError(ExtractionFailure.DECODE_ERROR, "No text could be extracted")
        return text

    async def extract(self, name: str, content_type: str | None, data: bytes) -> ExtractedText:
        """Extract text from a file.

        The blocking work runs in a worker thread, bounded by the configured
        extraction timeout. On timeout the caller is released at once, but a
        PDF parse already in progress keeps running in its thread until it
        finishes. OCR is passed the same timeout so Tesseract itself is stopped.

        Args:
            name: Original file name.
            content_type: Declared MIME type of the file.
            data: Raw file bytes.

        Returns:
            ExtractedText with the full extracted text.

        Raises:
            ExtractionError: If the type is unsupported, decoding fails,
                or extraction times out.
        """
        kind = _normalize_content_type(content_type)
        try:
            text = await asyncio.wait_for(
                asyncio.to_thread(self._extract_sync, kind, data),
                timeout=self._config.extraction_timeout,
            )
        except TimeoutError as e:
            logger.warning(f"Extraction timed out for {name}")
            raise ExtractionError(
                ExtractionFailure.TIMEOUT,
                f"Extraction took longer than {self._config.extraction_timeout:.0f}s",
            ) from e
        except ExtractionError as e:
            logger.warning(f"Extraction failed for {name} ({e.kind.value}): {e}")
            raise

        logger.info(f"Extracted {len(text)} characters from {name} ({kind or 'unknown type'})")
        return ExtractedText(name=name, content_type=kind, text=text)
