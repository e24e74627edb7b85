"""Error taxonomy shared by the receiver and transformations.

Every rejection carries a stable ``ErrorCode`` plus a human-readable message.
Mapping codes to HTTP status codes is the job of the HTTP layer
(see ``webhookd.routers.webhooks``).
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable classification for every way a webhook can be turned away."""

    METHOD_NOT_ALLOWED = "method_not_allowed"
    MISSING_EVENT_HEADER = "missing_event_header"
    MISSING_SIGNATURE_HEADER = "missing_signature_header"
    NO_OP = "no_op"
    SIGNATURE_MISMATCH = "signature_mismatch"
    BODY_READ_FAILED = "body_read_failed"
    PARSE_ERROR = "parse_error"
    REF_MISMATCH = "ref_mismatch"
    HALT = "halt"


class WebhookError(Exception):
    """Base class for classified webhook rejections."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r})"


class InvalidRequestError(WebhookError):
    """Client-caused request problem: wrong method or a missing header."""


class AuthenticationError(WebhookError):
    """The request could not be authenticated against the shared secret."""


class NoOpEvent(WebhookError):
    """Authentic message that needs no further action (GitHub ``ping``)."""

    def __init__(self, message: str = "ping message is a no-op") -> None:
        super().__init__(ErrorCode.NO_OP, message)


class PayloadParseError(WebhookError):
    """Payload is not JSON or does not match the push event schema."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.PARSE_ERROR, message)


class FilterRejection(WebhookError):
    """Authentic, well-formed event excluded by policy."""


class HaltEvent(FilterRejection):
    """A configured halt condition matched; stop processing this event."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.HALT, message)


class InternalError(WebhookError):
    """Server-side failure, e.g. the request body could not be read."""


class ConfigurationError(ValueError):
    """Raised when a receiver or transformation descriptor is invalid."""
