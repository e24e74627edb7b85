"""Centralized FastAPI dependencies for use with Depends()."""

from webhookd.config import settings
from webhookd.services.pipeline import WebhookPipeline, build_pipeline

_pipeline: WebhookPipeline | None = None


def init_pipeline(receiver_uri: str, transformation_uris: list[str]) -> WebhookPipeline:
    """Build the webhook pipeline from descriptors and install it.

    Called once from the application lifespan so that descriptor errors
    surface at startup rather than on the first request.
    """
    global _pipeline  # noqa: PLW0603

    _pipeline = build_pipeline(receiver_uri, transformation_uris)
    return _pipeline


def get_pipeline() -> WebhookPipeline:
    """Return the application pipeline, building it from settings on first use."""
    if _pipeline is None:
        return init_pipeline(settings.receiver_uri, settings.transformation_uri_list)
    return _pipeline


__all__ = [
    "get_pipeline",
    "init_pipeline",
]
