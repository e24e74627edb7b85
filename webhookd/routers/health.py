"""Health check endpoint reporting the configured pipeline."""

from fastapi import APIRouter

from webhookd.config import settings
from webhookd.schemas.descriptors import split_descriptor
from webhookd.schemas.health import HealthResponse

router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    """Report liveness and the descriptor schemes in use.

    Only schemes are reported; query parameters may carry the shared secret.
    """
    receiver_scheme, _ = split_descriptor(settings.receiver_uri)
    schemes = [split_descriptor(uri)[0] for uri in settings.transformation_uri_list]
    return HealthResponse(status="ok", receiver=receiver_scheme, transformations=schemes)
