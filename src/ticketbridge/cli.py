"""CLI entry point for TicketBridge.

- run: one batch pass over the board (suitable for cron)
- serve: HTTP server for interactive ticket creation
"""

from __future__ import annotations

import logging
import sys

import click

from ticketbridge.board import MondayAdapter
from ticketbridge.config import Settings
from ticketbridge.exceptions import ConfigurationError
from ticketbridge.logging import setup_logging
from ticketbridge.orchestrator import CreationStrategy, ItemStatus, RunReport, SyncOrchestrator
from ticketbridge.tracker import JiraClient

logger = logging.getLogger("ticketbridge.cli")


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _secrets(settings: Settings) -> tuple[str, str]:
    return settings.board_token, settings.tracker_token


def echo_report(report: RunReport) -> None:
    """Print a run summary followed by per-item details."""
    if report.fatal_error:
        click.echo(f"Fatal error: {report.fatal_error}", err=True)

    click.echo("\nSummary:")
    click.echo(f"  Processed: {report.processed}")
    click.echo(f"  Skipped:   {report.skipped}")
    click.echo(f"  Errors:    {report.errored}")

    for result in report.items:
        match result.status:
            case ItemStatus.SUCCESS:
                line = f"  [ok]    {result.item_name} -> {result.ticket_key}"
                if result.reason:
                    line += f" ({result.reason})"
            case ItemStatus.SKIPPED:
                line = f"  [skip]  {result.item_name}: {result.reason}"
            case ItemStatus.ERROR:
                line = f"  [error] {result.item_name}: {result.error}"
        click.echo(line)


@click.group()
@click.version_option(package_name="ticketbridge")
def main() -> None:
    """TicketBridge - create tracker tickets from board items."""
    pass


@main.command()
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in CreationStrategy], case_sensitive=False),
    default=CreationStrategy.DIRECT.value,
    help="Create tickets directly, or request them from the board automation",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
def run(strategy: str, verbose: bool) -> None:
    """Create tickets for every ready item on the board.

    Exits 0 when every item was processed or skipped, 1 otherwise.
    """
    settings = _load_settings()
    setup_logging(level="DEBUG" if verbose else None, secrets=_secrets(settings))

    board = MondayAdapter(token=settings.board_token)
    tracker = JiraClient(
        base_url=settings.tracker_base_url,
        email=settings.tracker_email,
        api_token=settings.tracker_token,
    )
    try:
        orchestrator = SyncOrchestrator.from_settings(settings, board=board, tracker=tracker)
        click.echo(f"Syncing board {settings.board_id} ({strategy})...")
        report = orchestrator.run(CreationStrategy(strategy.lower()))
    finally:
        board.close()
        tracker.close()

    logger.info("Run finished with exit code %d", report.exit_code)
    echo_report(report)
    sys.exit(report.exit_code)


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
def serve(host: str, port: int) -> None:
    """Start the HTTP API server."""
    import uvicorn  # noqa: PLC0415

    settings = _load_settings()
    setup_logging(secrets=_secrets(settings))

    from ticketbridge.api import create_app  # noqa: PLC0415

    uvicorn.run(create_app(settings), host=host, port=port)
