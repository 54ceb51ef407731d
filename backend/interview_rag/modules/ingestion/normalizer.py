"""Whitespace and punctuation cleanup applied before chunking."""

import re

_WHITESPACE_RUN = re.compile(r"\s+")
_NEWLINE_RUN = re.compile(r"\n{3,}")
_DISALLOWED_CHARS = re.compile(r"[^\w\s.,!?;:()-]")
_SPACE_BEFORE_PUNCTUATION = re.compile(r"\s+([.,!?;:])")


def normalize_text(text: str) -> str:
    """Clean extracted text for chunking.

    Steps, in order:

    1. collapse every whitespace run, newlines included, to one space
    2. collapse runs of 3+ newlines to two
    3. trim
    4. drop characters other than word characters, whitespace and ``.,!?;:()-``
    5. remove whitespace right before ``.,!?;:``

    Step 2 never matches after step 1, so paragraph breaks are not kept.
    The order is kept as is so chunk boundaries stay stable across re-ingestion.
    """
    text = _WHITESPACE_RUN.sub(" ", text)
    text = _NEWLINE_RUN.sub("\n\n", text)
    text = text.strip()
    text = _DISALLOWED_CHARS.sub("", text)
    return _SPACE_BEFORE_PUNCTUATION.sub(r"\1", text)
