"""PDF parsing module using pypdf.

Extracts the text layer page by page, marking page boundaries.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Page texts in order, each preceded by a page marker.
        pages: Total number of pages in the document.
    """

    text: str
    pages: int = Field(ge=0)


class PDFParseError(Exception):
    """Raised when PDF parsing fails."""

    pass


def page_marker(number: int) -> str:
    """Return the boundary marker placed before page ``number`` (1-based)."""
    return f"--- Page {number} ---"


def _validate_pdf_bytes(file_content: bytes, max_size: int) -> None:
    """Validate PDF file content before parsing.

    Raises:
        PDFParseError: If validation fails.
    """
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > max_size:
        size_mb = len(file_content) / (1024 * 1024)
        limit_mb = max_size / (1024 * 1024)
        raise PDFParseError(
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:.0f}MB)"
        )

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def parse_pdf(file_content: bytes, max_size: int = MAX_FILE_SIZE) -> PDFContent:
    """Parse a PDF file and extract its text content.

    Extraction is all-or-nothing: if any page fails, the whole file fails.

    Args:
        file_content: Raw bytes of the PDF file.
        max_size: Largest accepted file in bytes.

    Returns:
        PDFContent with marked page text and page count.

    Raises:
        PDFParseError: If the file is invalid, too large, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content, max_size)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFParseError("PDF contains no pages")

    page_texts: list[str] = []
    for i, page in enumerate(reader.pages, start=1):
        try:
            page_texts.append((page.extract_text() or "").strip())
        except Exception as e:
            raise PDFParseError(f"Failed to extract text from page {i}: {e}") from e

    if not any(page_texts):
        raise PDFParseError("PDF contains no extractable text (may be scanned/image-based)")

    text = "\n\n".join(
        f"{page_marker(i)}\n{page_text}" for i, page_text in enumerate(page_texts, start=1)
    )
    logger.debug(f"Extracted {len(text)} characters from {pages} pages")

    return PDFContent(text=text, pages=pages)
