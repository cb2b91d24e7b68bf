"""Logging setup for TicketBridge.

Console logging is always on; a rotating file log is added when a log
directory is configured. Credentials never reach a handler: known token
shapes are masked by pattern and the configured API tokens by value.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE = "ticketbridge.log"
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"
MAX_BODY_LENGTH = 2000

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Atlassian API tokens, Monday JWTs and HTTP auth headers
_CREDENTIAL_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"ATATT[a-zA-Z0-9_\-=]{20,}"), "[JIRA_TOKEN]"),
    (re.compile(r"eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+"), "[MONDAY_TOKEN]"),
    (re.compile(r"Basic [a-zA-Z0-9+/=]+"), "Basic [REDACTED]"),
    (re.compile(r"Bearer [a-zA-Z0-9._-]+"), "Bearer [REDACTED]"),
)


def sanitize_for_log(text: str) -> str:
    """Mask credential-shaped substrings."""
    for pattern, replacement in _CREDENTIAL_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def loggable_body(body: str, max_length: int = MAX_BODY_LENGTH) -> str:
    """Prepare an upstream response body for logs and error messages.

    Long bodies are cut to ``max_length`` with a marker, then sanitized.
    """
    if len(body) > max_length:
        body = body[:max_length] + f"... [{len(body) - max_length} more chars]"
    return sanitize_for_log(body)


class SecretFilter(logging.Filter):
    """Replaces known secret values in every record passing a handler."""

    def __init__(self, secrets: Iterable[str]) -> None:
        super().__init__()
        self.secrets = tuple(s for s in secrets if s)

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        for secret in self.secrets:
            message = message.replace(secret, "[REDACTED]")
        record.msg = sanitize_for_log(message)
        record.args = None
        return True


def setup_logging(
    level: str | None = None,
    log_dir: str | Path | None = None,
    secrets: Iterable[str] = (),
) -> logging.Logger:
    """Configure the ``ticketbridge`` logger.

    Args:
        level: Log level name. Falls back to ``TICKETBRIDGE_LOG_LEVEL``, then INFO.
        log_dir: Directory for the rotating log file. Falls back to
            ``TICKETBRIDGE_LOG_DIR``; without either, only the console is used.
        secrets: Literal values (API tokens) to redact from every record.

    Returns:
        The ``ticketbridge`` logger.
    """
    level = level or os.environ.get("TICKETBRIDGE_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)
    if log_dir is None:
        log_dir = os.environ.get("TICKETBRIDGE_LOG_DIR") or None

    logger = logging.getLogger("ticketbridge")
    logger.setLevel(log_level)

    # Repeated setup (CLI + server reload) must not stack handlers
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_path = None
    if log_dir is not None:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = Path(log_dir) / LOG_FILE
        handlers.append(
            RotatingFileHandler(
                log_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
            )
        )

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    secret_filter = SecretFilter(secrets)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler.addFilter(secret_filter)
        logger.addHandler(handler)

    logger.debug("Logging initialized (level=%s, file=%s)", level, log_path or "none")
    return logger
