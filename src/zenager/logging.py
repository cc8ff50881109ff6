"""Logging setup for Zenager.

All package modules log through ``logging.getLogger(__name__)``, so a single
set of handlers on the ``zenager`` logger covers the providers, the sync
cycle and the API. Every record is passed through :func:`sanitize_for_log`
on its way out, which keeps tracker API keys out of the log file even when
an error message quotes a request.
"""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "zenager.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_REDACTIONS = [
    (re.compile(r"gh[po]_[a-zA-Z0-9]{36}"), "[GITHUB_TOKEN]"),
    (re.compile(r"github_pat_[a-zA-Z0-9_]{82}"), "[GITHUB_TOKEN]"),
    (re.compile(r"glpat-[a-zA-Z0-9_\-]{20,}"), "[GITLAB_TOKEN]"),
    (re.compile(r"Bearer [a-zA-Z0-9._-]+"), "Bearer [REDACTED]"),
    (re.compile(r"Authorization: token [a-zA-Z0-9._-]+"), "Authorization: token [REDACTED]"),
    (re.compile(r"(private_token|access_token|token)=[a-zA-Z0-9._-]+"), r"\1=[REDACTED]"),
]


class RedactingFormatter(logging.Formatter):
    """Formatter that strips credentials from the rendered record, traceback included."""

    def format(self, record: logging.LogRecord) -> str:
        return sanitize_for_log(super().format(record))


def setup_logging(
    log_dir: str | Path = DEFAULT_LOG_DIR,
    level: str = DEFAULT_LOG_LEVEL,
    *,
    console: bool = True,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> logging.Logger:
    """Attach a rotating file handler (and optionally stderr) to the zenager logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        log_dir: Directory for log files, created if missing. Usually Settings.log_dir.
        level: Level name such as DEBUG or WARNING. Unknown names fall back to INFO.
        console: Also log to stderr.
        log_file: File name inside log_dir.
        max_bytes: Size at which the file is rotated.
        backup_count: Rotated files to keep.

    Returns:
        The ``zenager`` logger.
    """
    log_path = Path(log_dir) / log_file
    log_path.parent.mkdir(parents=True, exist_ok=True)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("zenager")
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = RedactingFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("Zenager logging initialized (level=%s, file=%s)", level, log_path)
    return logger


def truncate_output(output: str, max_length: int = 500) -> str:
    """Shorten a tracker error body before it goes into a FetchError message."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"\n... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Replace GitHub and GitLab tokens and auth headers with placeholders."""
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text
