"""Typed Parameter Extractors - decode path, query and body into RawParameters.

Invariants:
    - Path and query values are coerced to each field's bare declared type only;
      range constraints are left for the validation layer
    - Undeclared query keys are ignored; absent optional query fields are omitted
    - A body that is not valid JSON, or is nested too deep to decode, fails
      immediately with the decoder's message; no partial value is passed on
    - Extraction never calls the domain handler and never touches claims

Design Decisions:
    - One TypeAdapter per bare scalar type, cached: extraction runs on every request
    - Coercion uses pydantic lax mode so "10" -> 10 exactly as validation would read it
"""

import json
import types
from functools import lru_cache
from typing import Any, Mapping, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

from conduit.core.domain_types import RawParameters
from conduit.core.errors import ErrorContext, ExtractionError
from conduit.server.routes import Route


def extract(
    route: Route,
    path_params: Mapping[str, str],
    query_params: Mapping[str, str],
    raw_body: bytes,
    context: ErrorContext | None = None,
) -> RawParameters:
    """Decode one request's raw inputs according to the route's parameter schema."""
    path: dict[str, Any] = {}
    query: dict[str, Any] = {}
    body: Any = None
    if route.path_params is not None:
        path = _coerce_fields(
            route.path_params, path_params, "Invalid URL", context,
        )
    if route.query_params is not None:
        query = _coerce_fields(
            route.query_params, query_params,
            "Failed to deserialize query string", context,
        )
    if route.body is not None:
        body = decode_json_body(raw_body, context)
    return RawParameters(path=path, query=query, body=body)


def decode_json_body(raw_body: bytes, context: ErrorContext | None = None) -> Any:
    """Decode a JSON request body into a plain value tree."""
    if not raw_body:
        raise ExtractionError(
            "Failed to parse the request body as JSON: EOF while parsing a value",
            context,
        )
    try:
        return json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise ExtractionError(
            f"Failed to parse the request body as JSON: {e}", context,
        ) from e


def _coerce_fields(
    model: type[BaseModel],
    raw: Mapping[str, str],
    prefix: str,
    context: ErrorContext | None,
) -> dict[str, Any]:
    """Coerce each declared field present in raw to its bare scalar type."""
    coerced: dict[str, Any] = {}
    for name, info in model.model_fields.items():
        key = info.alias or name
        if key not in raw:
            continue
        value = raw[key]
        try:
            coerced[key] = _adapter(_bare_type(info.annotation)).validate_python(value)
        except ValidationError as e:
            reason = e.errors()[0]["msg"] if e.errors() else str(e)
            raise ExtractionError(f"{prefix}: {key}: {reason}", context) from e
    return coerced


def _bare_type(annotation: Any) -> Any:
    """Strip Optional[...] so `int | None` coerces as `int`."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)
