"""Protocols for the pipeline stages.

Receivers authenticate an inbound request and hand back the raw body;
transformations turn a body into another body. Both are built once from a
descriptor and are safe to share across concurrent requests.

Every stage checks ``cancel`` once on entry. When it is already set the stage
returns ``None``: no result and no error.
"""

from __future__ import annotations

from typing import Protocol

from starlette.requests import Request


class Cancellation(Protocol):
    """Anything with an ``is_set()`` flag, e.g. ``asyncio.Event`` or ``threading.Event``."""

    def is_set(self) -> bool: ...


class Receiver(Protocol):
    """Protocol for authenticating an inbound webhook request."""

    async def receive(self, request: Request, cancel: Cancellation | None = None) -> bytes | None:
        """Validate the request and return its raw body.

        Raises a ``WebhookError`` subclass when the request is rejected.
        """
        ...


class Transformation(Protocol):
    """Protocol for turning an authenticated body into output bytes."""

    def transform(self, body: bytes, cancel: Cancellation | None = None) -> bytes | None:
        """Transform ``body``; raises a ``WebhookError`` subclass on failure."""
        ...


def is_cancelled(cancel: Cancellation | None) -> bool:
    return cancel is not None and cancel.is_set()
