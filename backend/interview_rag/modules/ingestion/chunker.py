"""Sentence-based splitting of normalized text into overlapping chunks."""

import re
from dataclasses import dataclass
from typing import List, Optional

from ..common.utils.token_estimator import estimate_tokens

DEFAULT_MAX_CHUNK_SIZE = 1000
DEFAULT_OVERLAP = 100

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


@dataclass
class ProcessedChunk:
    """A chunk ready to be persisted, before it has an embedding."""

    content: str
    source: str
    chunk_index: int
    token_count: int
    page: Optional[int] = None
    section: Optional[str] = None


def chunk_text(
    text: str,
    source: str,
    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> List[ProcessedChunk]:
    """Split text into chunks of whole sentences.

    The text is cut at runs of ``.``, ``!`` and ``?``; each sentence is
    re-terminated with ``". "``, so ``!`` and ``?`` come back as periods.
    Sentences are appended to a buffer until the next one would push it past
    ``max_chunk_size`` characters. The buffer is then emitted and the next
    buffer starts with its last ``overlap`` characters, which may begin
    mid-word. A single sentence longer than ``max_chunk_size`` becomes a
    chunk of its own.

    Args:
        text: Normalized document text
        source: ID of the owning document
        max_chunk_size: Character limit a chunk may reach before being emitted
        overlap: Number of trailing characters carried into the next chunk

    Returns:
        Chunks with contiguous indices starting at 0; empty for blank text
    """
    sentences = [unit.strip() + ". " for unit in _SENTENCE_BOUNDARY.split(text) if unit.strip()]

    chunks: List[ProcessedChunk] = []
    buffer = ""

    for sentence in sentences:
        if len(buffer + sentence) > max_chunk_size and buffer:
            chunks.append(_make_chunk(buffer, source, len(chunks)))
            buffer = (buffer[-overlap:] if overlap > 0 else "") + sentence
        else:
            buffer += sentence

    if buffer.strip():
        chunks.append(_make_chunk(buffer, source, len(chunks)))

    return chunks


def _make_chunk(buffer: str, source: str, chunk_index: int) -> ProcessedChunk:
    content = buffer.strip()
    return ProcessedChunk(
        content=content,
        source=source,
        chunk_index=chunk_index,
        token_count=estimate_tokens(content),
    )
