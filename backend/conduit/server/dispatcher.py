"""Route Dispatcher - the one generic pipeline every Conduit endpoint runs through.

Invariants:
    - Per request: auth (if the route declares it) -> extract -> validate -> handler -> map
    - Required auth with no claims answers 401 (empty body) before any parameter work
    - Extraction errors answer 400 with the raw decoder text; validation errors answer
      400 with every field error; neither reaches the handler
    - The handler operation is awaited exactly once per request, never retried
    - A handler that raises, or returns an outcome outside its route's declared set,
      answers 500 with an empty body and is logged with its traceback
    - Nothing unexpected escapes run(): any other failure answers an empty 500
    - No shared mutable state: the handler map is built once at bind time and only read
    - A client disconnect before the response is built cancels the pipeline; nothing is sent

Design Decisions:
    - Handler map as an explicit dict resolved at bind time: a missing operation fails
      at startup (ContractError), not on the first request that needs it
    - Validation and serialization offloaded with run_in_threadpool; on cancellation the
      thread call is awaited to completion so no worker is leaked
    - Disconnect watcher in an anyio task group next to the pipeline, after the body has
      been fully read (the watcher then only ever sees http.disconnect)
"""

import logging
from typing import Any, Awaitable, Callable, Iterable

import anyio
from fastapi import APIRouter, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from conduit.apis.contract import ConduitApi
from conduit.apis.outcomes import Outcome
from conduit.core.domain_types import AuthRequirement, HttpResponse, ParameterSet
from conduit.core.errors import (
    ConduitError, ContractError, ErrorContext, ErrorSeverity,
    HandlerContractViolation, PipelineFailure, Unauthorized,
)
from conduit.server.auth import resolve_claims
from conduit.server.extractors import extract
from conduit.server.response_mapper import map_outcome
from conduit.server.routes import ROUTE_TABLE, Route
from conduit.server.validation import validate

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


class AbandonedResponse(Response):
    """Returned when the client went away mid-pipeline: writes nothing at all."""

    def __init__(self):
        super().__init__(status_code=499)

    async def __call__(self, scope, receive, send) -> None:
        return None


class RequestDispatcher:
    """Runs the request pipeline for any Route against one API implementation."""

    def __init__(
        self,
        api_impl: ConduitApi[Any],
        auth_header_name: str = "Authorization",
        routes: Iterable[Route] = ROUTE_TABLE,
    ):
        self._api = api_impl
        self._auth_header_name = auth_header_name
        self._routes = tuple(routes)
        self._handlers = _resolve_handlers(api_impl, self._routes)

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    def endpoint(self, route: Route) -> Callable[[Request], Awaitable[Response]]:
        """FastAPI endpoint bound to one route."""
        async def endpoint(request: Request) -> Response:
            return await self.handle(route, request)

        endpoint.__name__ = route.operation
        endpoint.__doc__ = route.summary
        return endpoint

    async def handle(self, route: Route, request: Request) -> Response:
        """Read the body, run the pipeline, abandon it if the client goes away."""
        raw_body = await request.body()
        result: HttpResponse | None = None

        async with anyio.create_task_group() as tg:
            async def run_pipeline() -> None:
                nonlocal result
                result = await self.run(route, request, raw_body)
                tg.cancel_scope.cancel()

            tg.start_soon(_cancel_on_disconnect, request, tg.cancel_scope)
            tg.start_soon(run_pipeline)

        if result is None:
            logger.info(
                f"Client disconnected before {route.operation} completed",
                extra={"operation": route.operation, "path": request.url.path},
            )
            return AbandonedResponse()
        return to_starlette(result)

    async def run(
        self, route: Route, request: Request, raw_body: bytes,
    ) -> HttpResponse:
        """The pipeline proper. Every terminal failure is rendered, never raised."""
        context = ErrorContext(
            operation=route.operation, method=route.method,
            path=request.url.path,
        )
        try:
            claims = await self._authenticate(route, request, context)
            raw = extract(
                route, request.path_params, request.query_params,
                raw_body, context,
            )
            params = await run_in_threadpool(validate, route, raw, context)
            outcome = await self._invoke(route, request, claims, params, context)
            response = await map_outcome(outcome, context)
        except ConduitError as e:
            _log_failure(e)
            return e.to_http()
        except Exception as e:
            logger.error(
                f"Unexpected {type(e).__name__} in {route.operation} pipeline: {e}",
                exc_info=True,
                extra={"operation": route.operation, "error_code": "PIPELINE_FAILURE"},
            )
            return PipelineFailure(str(e), context).to_http()
        logger.debug(
            f"{route.method} {request.url.path} -> {response.status_code}",
            extra={"operation": route.operation, "status_code": response.status_code},
        )
        return response

    async def _authenticate(
        self, route: Route, request: Request, context: ErrorContext,
    ) -> Any:
        if route.auth is AuthRequirement.NONE:
            return None
        claims = await resolve_claims(
            self._api, request.headers, self._auth_header_name,
        )
        if claims is None and route.auth is AuthRequirement.REQUIRED:
            raise Unauthorized(context)
        return claims

    async def _invoke(
        self,
        route: Route,
        request: Request,
        claims: Any,
        params: ParameterSet,
        context: ErrorContext,
    ) -> Outcome:
        kwargs: dict[str, Any] = {
            "method": request.method,
            "host": request.headers.get("host") or request.url.netloc,
            "cookies": dict(request.cookies),
        }
        if route.auth is not AuthRequirement.NONE:
            kwargs["claims"] = claims
        kwargs.update(params.as_kwargs())

        handler = self._handlers[route.operation]
        try:
            outcome = await handler(**kwargs)
        except Exception as e:
            logger.error(
                f"Handler {route.operation} raised {type(e).__name__}: {e}",
                exc_info=True,
                extra={"operation": route.operation, "error_code": "HANDLER_RAISED"},
            )
            raise HandlerContractViolation(
                f"{route.operation} raised {type(e).__name__}", context,
            ) from e
        if not route.declares(outcome):
            raise HandlerContractViolation(
                f"{route.operation} returned undeclared outcome "
                f"{type(outcome).__name__}",
                context,
            )
        return outcome


def build_router(
    api_impl: ConduitApi[Any],
    auth_header_name: str = "Authorization",
    routes: Iterable[Route] = ROUTE_TABLE,
) -> APIRouter:
    """Bind every route onto a FastAPI router served by one dispatcher."""
    dispatcher = RequestDispatcher(api_impl, auth_header_name, routes)
    router = APIRouter()
    for route in dispatcher.routes:
        router.add_api_route(
            route.path,
            dispatcher.endpoint(route),
            methods=[route.method],
            name=route.operation,
            summary=route.summary or None,
            response_class=Response,
            responses={
                code: {"description": description}
                for code, description in route.status_codes.items()
            },
        )
    return router


def to_starlette(response: HttpResponse) -> Response:
    return Response(
        content=response.body,
        status_code=response.status_code,
        headers=dict(response.headers),
    )


def _resolve_handlers(
    api_impl: Any, routes: tuple[Route, ...],
) -> dict[str, Callable[..., Awaitable[Outcome]]]:
    """operation name -> bound coroutine function. Raises ContractError if any is missing."""
    handlers = {}
    missing = []
    for route in routes:
        handler = getattr(api_impl, route.operation, None)
        if not callable(handler):
            missing.append(route.operation)
            continue
        handlers[route.operation] = handler
    if missing:
        raise ContractError(missing)
    return handlers


async def _cancel_on_disconnect(request: Request, scope: anyio.CancelScope) -> None:
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            scope.cancel()
            return


def _log_failure(error: ConduitError) -> None:
    logger.log(
        _LOG_LEVELS[error.severity],
        f"{error.code} on {error.context.method} {error.context.path}: {error.message}",
        extra=error.log_extra(),
    )
