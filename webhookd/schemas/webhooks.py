"""Pydantic response models for the webhook endpoint."""

from pydantic import BaseModel


class WebhookErrorResponse(BaseModel):
    """Body returned when a delivery is rejected."""

    detail: str
    code: str


class WebhookSkippedResponse(BaseModel):
    """Body returned when an authentic event is excluded by policy."""

    status: str = "skipped"
    code: str
    detail: str
