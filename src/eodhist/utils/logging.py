"""
Logging configuration and utilities for eodhist.

This module provides a centralized logging setup with:
- Console output with colored level names on a TTY
- Optional rotating file output
- Redaction of API tokens in request URLs
"""

import logging
import logging.handlers
import re
from pathlib import Path
import sys

_TOKEN_PATTERN = re.compile(r'(api_token=)[^&\s]+')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def redact_token(text: str) -> str:
    """
    Replace the value of any api_token query parameter with ***.

    Args:
        text: URL or message that may contain an API token

    Returns:
        Text with the token value masked
    """
    return _TOKEN_PATTERN.sub(r'\1***', str(text))


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m'  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        """Format the log record with colors for console output."""
        if hasattr(sys.stderr, 'isatty') and sys.stderr.isatty():
            levelname = record.levelname
            if levelname in self.COLORS:
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        return super().format(record)


def setup_logger(
    name: str,
    log_dir: str = "logs",
    log_level: str = "WARNING",
    console_output: bool = True,
    file_output: bool = False,
    max_bytes: int = 10_000_000,  # 10MB
    backup_count: int = 5
) -> logging.Logger:
    """
    Set up a logger with console and file handlers.

    Args:
        name: Logger name (typically __name__ of the module)
        log_dir: Directory for log files
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
                   unknown names fall back to WARNING
        console_output: Whether to output to console
        file_output: Whether to output to a rotating file in log_dir
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep

    Returns:
        Configured logger instance

    Example:
        >>> from eodhist.utils.logging import setup_logger
        >>> logger = setup_logger('eodhist', log_level='DEBUG')
        >>> logger.debug("GET https://eodhistoricaldata.com/api/eod/AAPL.US")
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers if logger already configured
    if logger.handlers:
        return logger

    level = logging.getLevelName(str(log_level).strip().upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logger.setLevel(level)

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    colored_formatter = ColoredFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(colored_formatter)
        logger.addHandler(console_handler)

    if file_output:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        # Sanitize logger name for filename
        safe_name = name.replace('.', '_')
        file_handler = logging.handlers.RotatingFileHandler(
            log_path / f"{safe_name}.log",
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setLevel(logging.DEBUG)  # File gets all levels
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger under the package logger.

    Modules log through 'eodhist.*' children and rely on propagation to
    the package logger, which is configured once from settings.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def configure_package_logger() -> logging.Logger:
    """
    Configure the 'eodhist' package logger from the current settings.

    Returns:
        The package logger
    """
    from ..config import get_settings

    config = get_settings().logging
    return setup_logger(
        'eodhist',
        log_dir=config.log_dir,
        log_level=config.log_level,
        console_output=config.console_output,
        file_output=config.file_output,
        max_bytes=config.max_bytes,
        backup_count=config.backup_count
    )
