"""HTTP error mapping shared by every router.

Validation problems become 400s with the field errors, missing records 404s,
unavailable delivery a 404 carrying an address-change hint, and upstream
failures a generic 502 the client may retry.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers

from delivery.exceptions import DeliveryUnavailable
from shared.exceptions import UpstreamServiceError

logger = structlog.get_logger(__name__)

GENERIC_UPSTREAM_MESSAGE = "Something went wrong. Please try again."


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"errors": exc.messages})


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": "Not found"})


async def _delivery_unavailable(request: Request, exc: DeliveryUnavailable) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"detail": exc.message, "postal_code": exc.postal_code, "action": "change_address"},
    )


async def _upstream_error(request: Request, exc: UpstreamServiceError) -> JSONResponse:
    logger.error("Upstream service failed", service=exc.service, path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=502, content={"detail": GENERIC_UPSTREAM_MESSAGE, "retryable": True})


def register_exception_handlers(app: FastAPI) -> None:
    """Install protean's handlers, then the ZapCart-specific mappings on top."""
    register_protean_handlers(app)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(DeliveryUnavailable, _delivery_unavailable)
    app.add_exception_handler(UpstreamServiceError, _upstream_error)
