"""Error Handlers - global exception handlers for anything escaping the pipeline.

Invariants:
    - ConduitError -> its own to_http() rendering (same shape the dispatcher uses)
    - RequestValidationError -> 400 with the structured field-error list
    - Exception (catch-all) -> 500 with an empty body, logged with traceback; the
      process keeps serving

Design Decisions:
    - Three-layer handler: domain (ConduitError), validation (FastAPI), catch-all
    - The dispatcher renders its own failures; these handlers are the backstop for
      middleware and framework errors
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response

from conduit.core.domain_types import FieldError
from conduit.core.errors import ConduitError, RequestValidationFailed
from conduit.server.dispatcher import to_starlette

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_conduit_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_conduit_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ConduitError)
    async def conduit_error_handler(request: Request, exc: ConduitError):
        """Handle pipeline errors raised outside the dispatcher."""
        logger.error(
            f"ConduitError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return to_starlette(exc.to_http())


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle FastAPI request validation errors with the pipeline's shape."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        errors = tuple(
            FieldError(
                field=".".join(str(loc) for loc in e["loc"]),
                constraint=e["type"],
                message=e["msg"],
            )
            for e in exc.errors()
        )
        return to_starlette(RequestValidationFailed(errors).to_http())


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

