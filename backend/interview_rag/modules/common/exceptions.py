"""Domain exception classes for business logic errors."""


class DomainError(Exception):
    """Base class for all domain-specific errors."""

    pass


class ResourceNotFoundError(DomainError):
    """Raised when a requested resource cannot be found."""

    pass


class ValidationError(DomainError):
    """Raised when data validation fails."""

    pass


class DocumentNotFoundError(ResourceNotFoundError):
    """Raised when a document cannot be found."""

    pass


class UnsupportedFormatError(ValidationError):
    """Raised when a file extension has no text extractor."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Unsupported file type: {extension or '<none>'}")


class ExtractionError(DomainError):
    """Raised when a parser fails to pull text out of a file (corrupt, encrypted, ...)."""

    pass


class EmbeddingProviderError(DomainError):
    """Raised when the embedding provider call fails or returns unusable vectors."""

    pass


class DimensionMismatchError(ValidationError):
    """Raised when two vectors compared during search have different lengths.

    Usually means stored embeddings come from a different model than the query.
    """

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Embedding dimension {actual} does not match expected dimension {expected}")


class MalformedEmbeddingError(DomainError):
    """Raised when a stored embedding cannot be parsed into a vector."""

    def __init__(self, chunk_id: str, reason: str):
        self.chunk_id = chunk_id
        super().__init__(f"Malformed embedding for chunk {chunk_id}: {reason}")
