"""Tests for mapping domain errors to HTTP exceptions."""

import logging
import warnings

import pytest
from fastapi import HTTPException

from interview_rag.modules.common.exceptions import (
    DimensionMismatchError,
    DocumentNotFoundError,
    EmbeddingProviderError,
    ExtractionError,
    UnsupportedFormatError,
    ValidationError,
)
from interview_rag.modules.common.utils.error_handler import handle_exception, to_http_exception


class TestToHttpException:
    """Test suite for to_http_exception."""

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (DocumentNotFoundError("Document abc not found"), 404),
            (UnsupportedFormatError(".txt"), 415),
            (DimensionMismatchError(expected=3, actual=2), 409),
            (ValidationError("bad input"), 422),
            (ExtractionError("corrupt file"), 422),
            (EmbeddingProviderError("quota exceeded"), 502),
        ],
    )
    def test_domain_errors(self, error, status_code):
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            http_exception = to_http_exception(error)

        assert http_exception.status_code == status_code
        assert http_exception.detail == str(error)

    def test_http_exception_passes_through(self):
        original = HTTPException(status_code=403, detail="forbidden")

        assert to_http_exception(original) is original

    def test_unknown_error_is_logged_as_internal_error(self, caplog):
        with caplog.at_level(logging.ERROR, logger="interview_rag.modules.common.utils.error_handler"):
            http_exception = to_http_exception(RuntimeError("connection reset"))

        assert http_exception.status_code == 500
        assert http_exception.detail == "Internal server error"
        assert any(getattr(record, "error_type", None) == "RuntimeError" for record in caplog.records)

    def test_handle_exception_ignores_unknown_errors(self):
        assert handle_exception(RuntimeError("boom")) is None
