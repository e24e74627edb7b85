"""Receiver plus an ordered chain of transformations."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from starlette.requests import Request

from webhookd.services.base import Cancellation, Receiver, Transformation
from webhookd.services.registry import (
    ReceiverFactory,
    TransformationFactory,
    default_receivers,
    default_transformations,
    new_receiver,
    new_transformation,
)


@dataclass(frozen=True)
class WebhookPipeline:
    """Authenticate a request, then run each transformation on the previous output."""

    receiver: Receiver
    transformations: tuple[Transformation, ...] = field(default_factory=tuple)

    async def run(self, request: Request, cancel: Cancellation | None = None) -> bytes | None:
        """Return the final output, or None if any stage was cancelled."""
        body = await self.receiver.receive(request, cancel)
        if body is None:
            return None

        for transformation in self.transformations:
            body = transformation.transform(body, cancel)
            if body is None:
                return None

        return body


def build_pipeline(
    receiver_uri: str,
    transformation_uris: Sequence[str] = (),
    *,
    receivers: Mapping[str, ReceiverFactory] | None = None,
    transformations: Mapping[str, TransformationFactory] | None = None,
) -> WebhookPipeline:
    """Resolve descriptors through the factory tables into a pipeline.

    Raises:
        ConfigurationError: On an unknown scheme or invalid descriptor.
    """
    receivers = default_receivers() if receivers is None else receivers
    transformations = default_transformations() if transformations is None else transformations

    return WebhookPipeline(
        receiver=new_receiver(receiver_uri, receivers),
        transformations=tuple(new_transformation(uri, transformations) for uri in transformation_uris),
    )
