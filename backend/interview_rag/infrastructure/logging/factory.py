"""Logger factory that configures logging once on first use."""

import logging
from threading import Lock
from typing import Optional, Union

from ..config.settings import get_settings
from .config import setup_logging_configuration

_logging_configured = False
_configuration_lock = Lock()


def get_logger(name: Optional[str] = None, **extra_context) -> Union[logging.Logger, logging.LoggerAdapter]:
    """Get a logger, configuring the logging system if it is not yet configured.

    Args:
        name: Logger name, typically ``__name__``. Defaults to the package logger.
        **extra_context: Context merged into every record of the returned adapter.

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Document processed", extra={"document_id": document.id})

        backfill_logger = get_logger(__name__, component="backfill")
        ```
    """
    _ensure_logging_configured()

    base_logger = logging.getLogger(name or "interview_rag")

    if extra_context:
        return logging.LoggerAdapter(base_logger, extra_context)
    return base_logger


def configure_logging() -> None:
    """Explicitly configure logging; safe to call more than once."""
    global _logging_configured

    with _configuration_lock:
        if _logging_configured:
            return

        setup_logging_configuration()
        _logging_configured = True

        settings = get_settings()
        logging.getLogger(__name__).info(
            f"Logging configured for {settings.ENVIRONMENT.value} environment",
            extra={
                "log_level": settings.LOG_LEVEL,
                "console_enabled": settings.LOG_CONSOLE_ENABLED,
                "file_enabled": settings.LOG_FILE_ENABLED,
            },
        )


def _ensure_logging_configured() -> None:
    if not _logging_configured:
        configure_logging()
