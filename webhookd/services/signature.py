"""HMAC signing and verification for GitHub webhook payloads.

GitHub signs the raw request body with the shared webhook secret and sends
the result as ``X-Hub-Signature`` (``sha1=<hex>``) and, on newer hooks,
``X-Hub-Signature-256`` (``sha256=<hex>``).
"""

import hashlib
import hmac

SUPPORTED_ALGORITHMS: dict[str, str] = {
    "sha1": "sha1",
    "sha256": "sha256",
}


def sign(payload: bytes, secret: str, algorithm: str = "sha1") -> str:
    """Compute the GitHub-style signature for a payload.

    Args:
        payload: Raw request body bytes.
        secret: Shared webhook secret.
        algorithm: ``"sha1"`` (default) or ``"sha256"``.

    Returns:
        Lowercase hex digest prefixed with the algorithm tag, e.g. ``"sha1=3f9d..."``.

    Raises:
        ValueError: If the algorithm is not supported.
    """
    try:
        digestmod = SUPPORTED_ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(f"Unsupported signature algorithm: {algorithm}") from None

    digest = hmac.new(
        secret.encode("utf-8"),
        msg=payload,
        digestmod=digestmod,
    ).hexdigest()
    return f"{algorithm}={digest}"


def verify(
    payload: bytes,
    secret: str,
    presented_signature: str,
    algorithm: str = "sha1",
) -> bool:
    """Check a presented signature against the payload using a constant-time comparison."""
    expected = sign(payload, secret, algorithm)
    return hmac.compare_digest(
        expected.encode("utf-8"),
        presented_signature.encode("utf-8"),
    )
