"""Response Mapper - turn a handler Outcome into an HttpResponse.

Invariants:
    - Status comes from the Outcome class, never from the handler's payload
    - Body-less outcomes produce an empty body and no content-type
    - Payload outcomes set content-type application/json before encoding
    - Encoding runs in the threadpool, never on the event loop
    - A payload that cannot be encoded raises ResponseSerializationError (500),
      it is never dropped or sent half-written

Design Decisions:
    - The payload must be an instance of the declared model before anything is
      encoded: a handler returning the wrong model is a 500, never a silent "{}"
    - TypeAdapter of the declared payload type with warnings="error" for the
      values nested inside it
    - Wire names (by_alias) and omitted unset optionals (exclude_none)
"""

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError
from starlette.concurrency import run_in_threadpool

from conduit.apis.outcomes import JsonOutcome, Outcome
from conduit.core.domain_types import HttpResponse
from conduit.core.errors import ErrorContext, ResponseSerializationError


async def map_outcome(
    outcome: Outcome, context: ErrorContext | None = None,
) -> HttpResponse:
    """Map one Outcome variant to its fixed status and encoded body."""
    if not isinstance(outcome, JsonOutcome):
        return HttpResponse.empty(outcome.status_code)
    body = await run_in_threadpool(
        encode_payload, outcome.payload_type, outcome.payload, context,
    )
    return HttpResponse.json(outcome.status_code, body)


def encode_payload(
    payload_type: Any, payload: Any, context: ErrorContext | None = None,
) -> bytes:
    """Serialize a payload as JSON bytes using its declared type."""
    if isinstance(payload_type, type) and not isinstance(payload, payload_type):
        raise ResponseSerializationError(
            f"Expected {payload_type.__name__} payload, "
            f"got {type(payload).__name__}",
            context,
        )
    try:
        return _adapter(payload_type).dump_json(
            payload, by_alias=True, exclude_none=True, warnings="error",
        )
    except (PydanticSerializationError, ValueError, TypeError) as e:
        raise ResponseSerializationError(str(e), context) from e


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)
