"""Waiter - Bounded polling for asynchronously created tickets."""

from ticketbridge.waiter.waiter import (
    DEFAULT_INTERVAL,
    DEFAULT_TIMEOUT,
    CompletionWaiter,
    extract_link_url,
    url_contains,
)

__all__ = [
    "DEFAULT_INTERVAL",
    "DEFAULT_TIMEOUT",
    "CompletionWaiter",
    "extract_link_url",
    "url_contains",
]
