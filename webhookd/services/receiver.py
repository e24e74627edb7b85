"""GitHub webhook receiver with HMAC signature verification.

Checks are applied in a fixed order and the first failure wins:
method, event header, signature header, ping, body read, signature,
and finally the optional ref filter.
"""

from __future__ import annotations

from starlette.requests import ClientDisconnect, Request

from webhookd.errors import (
    AuthenticationError,
    ErrorCode,
    FilterRejection,
    InternalError,
    InvalidRequestError,
    NoOpEvent,
)
from webhookd.schemas.descriptors import ReceiverConfig
from webhookd.schemas.events import parse_push_event
from webhookd.services import signature
from webhookd.services.base import Cancellation, is_cancelled

EVENT_HEADER = "X-GitHub-Event"
SIGNATURE_HEADER = "X-Hub-Signature"
PING_EVENT = "ping"


class GitHubReceiver:
    """Authenticate GitHub webhook deliveries.

    Configured by ``github://?secret={SECRET}&ref={REF}``. Both parameters are
    optional; without a secret no real signature will verify, and without a
    ref no branch filtering is done.
    """

    def __init__(self, config: ReceiverConfig) -> None:
        self._config = config

    @classmethod
    def from_uri(cls, uri: str) -> GitHubReceiver:
        return cls(ReceiverConfig.from_uri(uri))

    @property
    def config(self) -> ReceiverConfig:
        return self._config

    async def receive(self, request: Request, cancel: Cancellation | None = None) -> bytes | None:
        """Validate a GitHub delivery and return its raw, unmodified body.

        Returns:
            The body bytes, or None if ``cancel`` was already set on entry.

        Raises:
            InvalidRequestError: Wrong method or missing ``X-GitHub-Event``.
            AuthenticationError: Missing or mismatched ``X-Hub-Signature``.
            NoOpEvent: The delivery is a ``ping``.
            InternalError: The body could not be read.
            PayloadParseError: A ref filter is set and the body is not a push event.
            FilterRejection: A ref filter is set and the event's ref differs.
        """
        if is_cancelled(cancel):
            return None

        if request.method != "POST":
            raise InvalidRequestError(ErrorCode.METHOD_NOT_ALLOWED, "Method not allowed")

        event_type = request.headers.get(EVENT_HEADER, "")
        if not event_type:
            raise InvalidRequestError(
                ErrorCode.MISSING_EVENT_HEADER,
                f"Bad Request - Missing {EVENT_HEADER} Header",
            )

        presented = request.headers.get(SIGNATURE_HEADER, "")
        if not presented:
            raise AuthenticationError(
                ErrorCode.MISSING_SIGNATURE_HEADER,
                f"Missing {SIGNATURE_HEADER} required for HMAC verification",
            )

        if event_type == PING_EVENT:
            raise NoOpEvent()

        try:
            body = await request.body()
        except (OSError, ClientDisconnect) as exc:
            raise InternalError(ErrorCode.BODY_READ_FAILED, str(exc) or type(exc).__name__) from exc

        if not signature.verify(body, self._config.secret, presented):
            raise AuthenticationError(ErrorCode.SIGNATURE_MISMATCH, "HMAC verification failed")

        if self._config.ref:
            event = parse_push_event(body)
            if event.require_ref() != self._config.ref:
                raise FilterRejection(ErrorCode.REF_MISMATCH, "Invalid ref for commit")

        return body
