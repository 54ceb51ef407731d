"""Plain-text extraction from PDF and DOCX files."""

import asyncio
import os
from abc import ABC, abstractmethod
from typing import Dict

import docx
from pypdf import PdfReader

from ...infrastructure.logging import get_logger
from ..common.exceptions import ExtractionError, UnsupportedFormatError

logger = get_logger(__name__)

MIME_TYPES: Dict[str, str] = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".doc": "application/msword",
}
DEFAULT_MIME_TYPE = "application/octet-stream"


class TextExtractor(ABC):
    """Reads a file and returns its text without formatting."""

    extension: str

    @abstractmethod
    def extract(self, file_path: str) -> str:
        """Extract the full text of the file. Blocking; run it off the event loop."""
        pass


class PDFExtractor(TextExtractor):
    """Concatenates page texts in document order.

    Page boundaries are not marked in the output, so chunks built from it carry
    no page number.
    """

    extension = ".pdf"

    def extract(self, file_path: str) -> str:
        reader = PdfReader(file_path)
        return "\n".join(page.extract_text() or "" for page in reader.pages)


class DocxExtractor(TextExtractor):
    """Joins paragraph texts, discarding styling."""

    extension = ".docx"

    def extract(self, file_path: str) -> str:
        document = docx.Document(file_path)
        return "\n".join(paragraph.text for paragraph in document.paragraphs)


EXTRACTORS: Dict[str, TextExtractor] = {
    extractor.extension: extractor for extractor in (PDFExtractor(), DocxExtractor())
}


def get_extension(file_path: str) -> str:
    """Lower-cased extension of ``file_path`` including the dot, or ``""``."""
    return os.path.splitext(file_path)[1].lower()


def get_mime_type(extension: str) -> str:
    """MIME type for an extension such as ``".pdf"``."""
    return MIME_TYPES.get(extension.lower(), DEFAULT_MIME_TYPE)


def get_extractor(file_path: str) -> TextExtractor:
    """Pick the extractor for a file by extension.

    Raises:
        UnsupportedFormatError: No extractor handles the extension.
    """
    extension = get_extension(file_path)
    extractor = EXTRACTORS.get(extension)
    if extractor is None:
        raise UnsupportedFormatError(extension)
    return extractor


async def extract_text(file_path: str) -> str:
    """Extract the plain text of a PDF or DOCX file.

    Parsing runs in a worker thread. Any parser failure (corrupt archive,
    encrypted PDF, ...) is re-raised as ``ExtractionError`` with the original
    exception chained.

    Raises:
        UnsupportedFormatError: The extension is neither ``.pdf`` nor ``.docx``.
        ExtractionError: The parser could not read the file.
    """
    extractor = get_extractor(file_path)

    try:
        text = await asyncio.to_thread(extractor.extract, file_path)
    except Exception as e:
        raise ExtractionError(f"Failed to extract text from {os.path.basename(file_path)}: {e}") from e

    logger.debug(
        "Extracted text",
        extra={"file_name": os.path.basename(file_path), "extractor": type(extractor).__name__, "characters": len(text)},
    )
    return text
