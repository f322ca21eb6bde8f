"""Text extraction for file-grounded turns.

Responsibilities:
    - PDF text-layer extraction with pypdf, page by page
    - OCR for images with pytesseract and Pillow
    - Plain-text decoding for everything else
    - A single failure type with unsupported-type, decode-error and timeout kinds
"""

from private_chat.parsing.extraction import (
    ExtractedText,
    ExtractionError,
    ExtractionFailure,
    TextExtractor,
)
from private_chat.parsing.pdf_parser import PDFContent, PDFParseError, parse_pdf

__all__ = [
    "ExtractedText",
    "ExtractionError",
    "ExtractionFailure",
    "PDFContent",
    "PDFParseError",
    "TextExtractor",
    "parse_pdf",
]
