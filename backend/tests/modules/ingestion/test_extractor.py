"""Tests for PDF and DOCX text extraction."""

from unittest.mock import MagicMock, patch

import pytest

from interview_rag.modules.common.exceptions import ExtractionError, UnsupportedFormatError
from interview_rag.modules.ingestion.extractor import extract_text, get_extension, get_mime_type


class TestExtractText:
    """Test suite for extract_text."""

    @pytest.mark.asyncio
    async def test_docx_paragraphs_in_order(self, make_docx):
        path = make_docx(["Usability testing basics.", "Recruit five participants."])

        text = await extract_text(path)

        assert text.index("Usability testing basics.") < text.index("Recruit five participants.")

    @pytest.mark.asyncio
    async def test_uppercase_extension(self, make_docx):
        path = make_docx(["Affinity mapping."], name="NOTES.DOCX")

        assert "Affinity mapping." in await extract_text(path)

    @pytest.mark.asyncio
    async def test_pdf_pages_concatenated_in_order(self, tmp_path):
        path = tmp_path / "handbook.pdf"
        path.write_bytes(b"%PDF-1.4")

        pages = [MagicMock(), MagicMock(), MagicMock()]
        pages[0].extract_text.return_value = "Page one."
        pages[1].extract_text.return_value = None
        pages[2].extract_text.return_value = "Page three."

        with patch("interview_rag.modules.ingestion.extractor.PdfReader") as mock_reader:
            mock_reader.return_value.pages = pages
            text = await extract_text(str(path))

        mock_reader.assert_called_once_with(str(path))
        assert text == "Page one.\n\nPage three."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["notes.txt", "slides.pptx", "legacy.doc", "README"])
    async def test_unsupported_extension(self, tmp_path, name):
        path = tmp_path / name
        path.write_text("plain text")

        with pytest.raises(UnsupportedFormatError) as exc_info:
            await extract_text(str(path))

        assert exc_info.value.extension == get_extension(name)

    @pytest.mark.asyncio
    async def test_corrupt_docx_raises_extraction_error(self, tmp_path):
        path = tmp_path / "broken.docx"
        path.write_bytes(b"this is not a zip archive")

        with pytest.raises(ExtractionError, match="broken.docx"):
            await extract_text(str(path))

    @pytest.mark.asyncio
    async def test_corrupt_pdf_raises_extraction_error(self, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"garbage bytes without any pdf structure")

        with pytest.raises(ExtractionError) as exc_info:
            await extract_text(str(path))

        assert exc_info.value.__cause__ is not None


class TestMimeTypes:
    """Test suite for extension helpers."""

    @pytest.mark.parametrize(
        "extension,expected",
        [
            (".pdf", "application/pdf"),
            (".docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
            (".doc", "application/msword"),
            (".PDF", "application/pdf"),
            (".txt", "application/octet-stream"),
            ("", "application/octet-stream"),
        ],
    )
    def test_get_mime_type(self, extension, expected):
        assert get_mime_type(extension) == expected

    def test_get_extension(self):
        assert get_extension("/data/Guide.PDF") == ".pdf"
        assert get_extension("/data/archive.tar.docx") == ".docx"
        assert get_extension("/data/README") == ""
