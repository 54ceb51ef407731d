"""Turning source files into persisted-ready text chunks."""

from .chunker import ProcessedChunk, chunk_text
from .extractor import extract_text, get_extension, get_mime_type
from .normalizer import normalize_text

__all__ = ["ProcessedChunk", "chunk_text", "extract_text", "get_extension", "get_mime_type", "normalize_text"]
