"""GitHub webhook router: runs the configured pipeline for each delivery."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from webhookd.dependencies import get_pipeline
from webhookd.errors import ErrorCode, FilterRejection, NoOpEvent, WebhookError
from webhookd.schemas.webhooks import WebhookErrorResponse, WebhookSkippedResponse
from webhookd.services.pipeline import WebhookPipeline
from webhookd.services.receiver import EVENT_HEADER

logger = structlog.get_logger()

router = APIRouter(prefix="/webhooks", tags=["webhooks"])

DELIVERY_HEADER = "X-GitHub-Delivery"

STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.METHOD_NOT_ALLOWED: status.HTTP_405_METHOD_NOT_ALLOWED,
    ErrorCode.MISSING_EVENT_HEADER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_SIGNATURE_HEADER: status.HTTP_403_FORBIDDEN,
    ErrorCode.NO_OP: status.HTTP_204_NO_CONTENT,
    ErrorCode.SIGNATURE_MISMATCH: status.HTTP_403_FORBIDDEN,
    ErrorCode.BODY_READ_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.PARSE_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.REF_MISMATCH: status.HTTP_202_ACCEPTED,
    ErrorCode.HALT: status.HTTP_202_ACCEPTED,
}


def error_response(exc: WebhookError) -> Response:
    """Convert a classified rejection into an HTTP response.

    Pings get an empty 204, policy exclusions a 202 "skipped" body, and
    everything else a JSON error with the classification code.
    """
    status_code = STATUS_CODES.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, NoOpEvent):
        return Response(status_code=status_code)

    if isinstance(exc, FilterRejection):
        body = WebhookSkippedResponse(code=exc.code.value, detail=exc.message)
        return JSONResponse(status_code=status_code, content=body.model_dump())

    body = WebhookErrorResponse(detail=exc.message, code=exc.code.value)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.api_route("/github", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def github_webhook(
    request: Request,
    pipeline: Annotated[WebhookPipeline, Depends(get_pipeline)],
) -> Response:
    """Receive a GitHub delivery, transform it, and return the output.

    The method check belongs to the receiver, so every method is routed here.
    The transformed output is logged and returned as ``text/plain``.
    """
    log = logger.bind(
        event=request.headers.get(EVENT_HEADER, ""),
        delivery=request.headers.get(DELIVERY_HEADER, ""),
    )

    try:
        output = await pipeline.run(request)
    except WebhookError as exc:
        if isinstance(exc, NoOpEvent | FilterRejection):
            log.info("webhook_skipped", code=exc.code.value, reason=exc.message)
        else:
            log.warning("webhook_rejected", code=exc.code.value, reason=exc.message)
        return error_response(exc)

    if output is None:
        log.info("webhook_cancelled")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    log.info("webhook_dispatched", bytes=len(output))
    return PlainTextResponse(output)
