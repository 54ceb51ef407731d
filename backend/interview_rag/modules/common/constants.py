"""Common constants used across the application."""

from typing import Callable, Dict, Type

from fastapi import HTTPException, status

from .exceptions import (
    DimensionMismatchError,
    DomainError,
    EmbeddingProviderError,
    ExtractionError,
    MalformedEmbeddingError,
    ResourceNotFoundError,
    UnsupportedFormatError,
    ValidationError,
)

# More specific classes first: lookup stops at the first isinstance match.
EXCEPTION_MAPPING: Dict[Type[DomainError], Callable[[str], HTTPException]] = {
    ResourceNotFoundError: lambda message: HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message),
    UnsupportedFormatError: lambda message: HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=message),
    DimensionMismatchError: lambda message: HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message),
    ValidationError: lambda message: HTTPException(status_code=422, detail=message),
    ExtractionError: lambda message: HTTPException(status_code=422, detail=message),
    EmbeddingProviderError: lambda message: HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=message),
    MalformedEmbeddingError: lambda message: HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message),
}

EMBEDDING_PENDING = "[]"
"""Stored embedding value of a chunk whose vector has not been computed yet."""
