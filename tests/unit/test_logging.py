"""Unit tests for TicketBridge logging setup and redaction."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from ticketbridge.logging import loggable_body, sanitize_for_log, setup_logging


def _read_log(log_dir: Path) -> str:
    for handler in logging.getLogger("ticketbridge").handlers:
        handler.flush()
    return (log_dir / "ticketbridge.log").read_text()


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_only_without_log_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TICKETBRIDGE_LOG_DIR", raising=False)

        logger = setup_logging()

        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], RotatingFileHandler)

    def test_file_log_in_configured_dir(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "nested"

        setup_logging(log_dir=log_dir)
        logging.getLogger("ticketbridge.orchestrator").info("Item 101 linked to DOM2-7")

        content = _read_log(log_dir)
        assert "| INFO     | ticketbridge.orchestrator | Item 101 linked to DOM2-7" in content

    def test_log_dir_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TICKETBRIDGE_LOG_DIR", str(tmp_path))

        setup_logging()

        assert (tmp_path / "ticketbridge.log").exists()

    def test_level_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TICKETBRIDGE_LOG_LEVEL", "WARNING")

        assert setup_logging().level == logging.WARNING

    def test_explicit_level_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TICKETBRIDGE_LOG_LEVEL", "WARNING")

        assert setup_logging(level="debug").level == logging.DEBUG

    def test_repeated_setup_replaces_handlers(self, tmp_path: Path) -> None:
        setup_logging(log_dir=tmp_path)
        logger = setup_logging(log_dir=tmp_path)

        assert len(logger.handlers) == 2

    def test_configured_secrets_are_redacted(self, tmp_path: Path) -> None:
        setup_logging(log_dir=tmp_path, secrets=("monday-secret-value", ""))
        logging.getLogger("ticketbridge.board").warning(
            "Request failed with token %s", "monday-secret-value"
        )

        content = _read_log(tmp_path)
        assert "monday-secret-value" not in content
        assert "Request failed with token [REDACTED]" in content

    def test_credential_patterns_redacted_in_records(self, tmp_path: Path) -> None:
        setup_logging(log_dir=tmp_path)
        logging.getLogger("ticketbridge.tracker").error(
            "Jira said: %s", "Authorization: Basic dXNlcjpzZWNyZXQ="
        )

        assert "dXNlcjpzZWNyZXQ" not in _read_log(tmp_path)


@pytest.mark.unit
class TestLoggableBody:
    """Tests for loggable_body."""

    def test_short_body_unchanged(self) -> None:
        assert loggable_body('{"errors": {}}') == '{"errors": {}}'

    def test_long_body_cut(self) -> None:
        result = loggable_body("x" * 200, max_length=100)
        assert result == "x" * 100 + "... [100 more chars]"

    def test_body_is_sanitized(self) -> None:
        assert loggable_body("echo Bearer abc.def") == "echo Bearer [REDACTED]"


@pytest.mark.unit
class TestSanitize:
    """Tests for sanitize_for_log."""

    def test_redacts_jira_token(self) -> None:
        result = sanitize_for_log("token ATATT3xFfGF0abcdefghijklmnopqrstuvwxyz")
        assert result == "token [JIRA_TOKEN]"

    def test_redacts_monday_jwt(self) -> None:
        text = "Authorization: eyJhbGciOiJIUzI1NiJ9.eyJ0aWQiOjF9.c2lnbmF0dXJl"
        assert sanitize_for_log(text) == "Authorization: [MONDAY_TOKEN]"

    def test_safe_text_unchanged(self) -> None:
        text = "Item 101 moved to Jira Created"
        assert sanitize_for_log(text) == text
