"""Validation Layer - evaluate every declared constraint and build the typed ParameterSet.

Invariants:
    - Never short-circuits: path, query and body are all validated, and pydantic
      reports every failing field inside each, so one response lists every problem
    - Errors are ordered path -> query -> body, then in pydantic's field order
    - Field paths are dotted wire names relative to their location (article.title, offset)
    - Missing required fields carry constraint "missing"
    - Pure and synchronous: no shared state, safe to run in any worker thread

Design Decisions:
    - Pydantic model_validate over hand-written checks: ge/le bounds, nested models
      and presence are declared once on the wire models
    - The pydantic error "type" is surfaced verbatim as the constraint name
"""

from typing import Any

from pydantic import BaseModel, ValidationError

from conduit.core.domain_types import (
    FieldError, ParameterSet, ParamLocation, RawParameters,
)
from conduit.core.errors import ErrorContext, RequestValidationFailed
from conduit.server.routes import Route


def validate(
    route: Route, raw: RawParameters, context: ErrorContext | None = None,
) -> ParameterSet:
    """Validate all declared parameter models. Raises RequestValidationFailed."""
    errors: list[FieldError] = []
    path = _validate_part(route.path_params, raw.path, ParamLocation.PATH, errors)
    query = _validate_part(route.query_params, raw.query, ParamLocation.QUERY, errors)
    body = _validate_part(route.body, raw.body, ParamLocation.BODY, errors)
    if errors:
        raise RequestValidationFailed(tuple(errors), context)
    return ParameterSet(path_params=path, query_params=query, body=body)


def _validate_part(
    model: type[BaseModel] | None,
    value: Any,
    location: ParamLocation,
    errors: list[FieldError],
) -> BaseModel | None:
    if model is None:
        return None
    try:
        return model.model_validate(value)
    except ValidationError as e:
        errors.extend(to_field_errors(e, location))
        return None


def to_field_errors(
    exc: ValidationError, location: ParamLocation | None = None,
) -> list[FieldError]:
    """Flatten a pydantic ValidationError into FieldError triples."""
    result = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        if not loc:
            # Whole-value failure, e.g. a JSON array where an object was expected
            loc = location.value if location else "__root__"
        result.append(FieldError(
            field=loc, constraint=err["type"], message=err["msg"],
        ))
    return result
