"""Environment-aware logging setup.

- Development / local: coloured detailed console output
- Staging: structured key=value console output
- Production: JSON console output with noisy third-party loggers quieted
- Testing: a null handler at ERROR level, see ``configure_testing_logging``
"""

import logging

from ..config.settings import EnvironmentOption, Settings, get_settings
from .handlers import create_console_handler, create_file_handler

NOISY_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "openai": logging.WARNING,
    "asyncpg": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "sentence_transformers": logging.WARNING,
    "pypdf": logging.ERROR,
}


def setup_logging_configuration() -> None:
    """Configure the root logger from application settings.

    Should be called once during application startup; ``get_logger`` does it
    lazily on first use.
    """
    settings = get_settings()

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    for handler in _build_handlers(settings):
        root_logger.addHandler(handler)

    root_logger.setLevel(settings.LOG_LEVEL_INT)

    if settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
        for logger_name, level in NOISY_LOGGERS.items():
            logging.getLogger(logger_name).setLevel(level)


def _build_handlers(settings: Settings) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if settings.LOG_CONSOLE_ENABLED:
        if settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
            level = logging.WARNING if settings.LOG_PRODUCTION_OPTIMIZE else settings.LOG_LEVEL_INT
            handlers.append(create_console_handler(format_type="json", level=level, use_colors=False))
        elif settings.ENVIRONMENT == EnvironmentOption.STAGING:
            handlers.append(create_console_handler(format_type="structured", level=settings.LOG_LEVEL_INT, use_colors=False))
        else:
            level = logging.DEBUG if settings.LOG_DEVELOPMENT_VERBOSE else settings.LOG_LEVEL_INT
            handlers.append(create_console_handler(format_type="detailed", level=level, use_colors=True))

    # production ships logs from stdout, so no file handler there
    if settings.LOG_FILE_ENABLED and settings.ENVIRONMENT != EnvironmentOption.PRODUCTION:
        handlers.append(
            create_file_handler(
                filepath=settings.LOG_FILE_PATH,
                format_type="structured",
                level=logging.DEBUG,
                max_bytes=settings.LOG_FILE_MAX_SIZE,
                backup_count=settings.LOG_FILE_BACKUP_COUNT,
            )
        )

    return handlers


def configure_testing_logging() -> None:
    """Configure minimal logging for test runs.

    Can be called from test fixtures to override the normal configuration.
    Records still propagate, so pytest's ``caplog`` keeps working.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(logging.NullHandler())
    root_logger.setLevel(logging.ERROR)

    for logger_name in ("sqlalchemy.engine", "asyncpg", "httpx"):
        logging.getLogger(logger_name).setLevel(logging.ERROR)


def reconfigure_logger_level(logger_name: str, level: int) -> None:
    """Change one logger's level without touching the rest of the configuration."""
    logging.getLogger(logger_name).setLevel(level)
    logging.getLogger(__name__).info(f"Logger level changed: {logger_name} -> {logging.getLevelName(level)}")
