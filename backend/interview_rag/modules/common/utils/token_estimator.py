"""Token estimation for document chunks.

No tokenizer is loaded: chunk sizes only need a stable, cheap estimate to
report per-document token totals.
"""

import math

CHARS_PER_TOKEN = 0.75


def estimate_tokens(text: str) -> int:
    """Estimate the token count of a text as ``ceil(len(text) / 0.75)``.

    The count is taken over the raw string, whitespace included.

    Example:
        >>> estimate_tokens("abc")
        4
        >>> estimate_tokens("")
        0
    """
    return math.ceil(len(text) / CHARS_PER_TOKEN)
