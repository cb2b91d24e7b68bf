"""Completion Waiter - Bounded polling for results produced elsewhere."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

import httpx

from ticketbridge.exceptions import TransportError

if TYPE_CHECKING:
    from ticketbridge.board import Column

logger = logging.getLogger("ticketbridge.waiter")

T = TypeVar("T")

DEFAULT_INTERVAL = 3.0
DEFAULT_TIMEOUT = 120.0

_HTTPS_URL_RE = re.compile(r"https://[^\s]+")


def extract_link_url(column: Column | None) -> str | None:
    """Get a URL out of a link column.

    The structured link value wins; otherwise the first ``https://`` token
    of the display text (e.g. "DOM2-6747 - https://...") is used.
    """
    if column is None:
        return None
    if column.link_url:
        return column.link_url
    match = _HTTPS_URL_RE.search(column.text or "")
    return match.group(0) if match else None


def url_contains(marker: str) -> Callable[[str], bool]:
    """Acceptance predicate: the value contains ``marker``."""

    def accept(value: str) -> bool:
        return marker in value

    return accept


class CompletionWaiter:
    """Polls a lookup until it yields an accepted value or time runs out.

    The first lookup happens immediately, then one every ``interval``
    seconds. Once more than ``timeout`` seconds have passed since the first
    attempt, ``wait`` returns None. Timing out is an expected outcome, not
    an error.
    """

    def __init__(
        self,
        interval: float = DEFAULT_INTERVAL,
        timeout: float = DEFAULT_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the Completion Waiter.

        Args:
            interval: Seconds between lookups.
            timeout: Seconds after which waiting stops.
            clock: Monotonic time source.
            sleep: Blocking sleep function.
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        if timeout < 0:
            raise ValueError("timeout must not be negative")
        self.interval = interval
        self.timeout = timeout
        self.clock = clock
        self.sleep = sleep

    def wait(
        self,
        lookup: Callable[[], T | None],
        accept: Callable[[T], bool] | None = None,
    ) -> T | None:
        """Poll ``lookup`` until it returns an accepted value.

        Transport failures raised by ``lookup`` are logged and treated as
        "not yet available".

        Args:
            lookup: Zero-argument callable returning a value or None.
            accept: Predicate a non-None value must satisfy. Defaults to
                accepting any non-None value.

        Returns:
            The accepted value, or None on timeout.
        """
        start = self.clock()
        attempt = 0
        while True:
            attempt += 1
            value: T | None = None
            try:
                value = lookup()
            except (TransportError, httpx.HTTPError) as e:
                logger.warning("Poll %d failed: %s", attempt, e)

            if value is not None and (accept is None or accept(value)):
                logger.info("Poll %d: result available", attempt)
                return value

            elapsed = self.clock() - start
            if elapsed > self.timeout:
                logger.warning(
                    "Gave up after %d poll(s) (%.1fs > %.1fs)", attempt, elapsed, self.timeout
                )
                return None

            logger.debug("Poll %d: not ready, waiting %.1fs", attempt, self.interval)
            self.sleep(self.interval)
