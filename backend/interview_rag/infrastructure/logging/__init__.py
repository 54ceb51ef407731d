"""Centralized logging infrastructure.

Usage:
    ```python
    from interview_rag.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Backfill started", extra={"pending": 42})
    ```
"""

from .config import configure_testing_logging, setup_logging_configuration
from .factory import configure_logging, get_logger

__all__ = [
    "get_logger",
    "configure_logging",
    "configure_testing_logging",
    "setup_logging_configuration",
]
