"""Logging configuration for the TaskEasy core.

The library modules only create loggers; they never configure handlers.
An application embedding the core calls ``setup_logging(settings)`` once at
startup, before building a ``TaskBoard``.
"""

import copy
import logging
import logging.handlers
import sys

from ..config import Settings


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Format log record with colors for console output."""
        # Other handlers share the record.
        record = copy.copy(record)
        if record.levelname in self.COLORS:
            record.levelname = (
                f"{self.COLORS[record.levelname]}{record.levelname}"
                f"{self.COLORS['RESET']}"
            )

        return super().format(record)


def _level(settings: Settings) -> int:
    return getattr(logging, settings.log_level.upper(), logging.INFO)


def setup_logging(settings: Settings) -> None:
    """Setup logging for the application.

    Args:
        settings: Application settings containing logging configuration
    """
    level = _level(settings)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    # Console handler with colors
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger.addHandler(console_handler)

    if settings.log_to_file:
        log_dir = settings.log_dir
        log_dir.mkdir(parents=True, exist_ok=True)

        file_formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # File handler for all logs
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / "taskeasy.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

        # Error file handler for errors and above
        error_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / "error.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(file_formatter)
        root_logger.addHandler(error_handler)

    configure_module_loggers(settings)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured with level: {settings.log_level.upper()}")
    if settings.log_to_file:
        logger.info(f"Log files will be written to: {settings.log_dir.absolute()}")


def configure_module_loggers(settings: Settings) -> None:
    """Configure logging levels for the package's modules.

    Args:
        settings: Application settings
    """
    level = _level(settings)

    app_loggers = [
        'taskeasy.services',
        'taskeasy.stores',
        'taskeasy.deps',
    ]

    for logger_name in app_loggers:
        logging.getLogger(logger_name).setLevel(level)

    # Storage round-trips are chatty at DEBUG
    if settings.environment == "production":
        logging.getLogger('taskeasy.stores').setLevel(max(level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


__all__ = [
    'ColoredFormatter',
    'setup_logging',
    'configure_module_loggers',
    'get_logger',
]
