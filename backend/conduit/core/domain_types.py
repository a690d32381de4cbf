"""Domain Types - request-scoped values that flow through the dispatch pipeline.

Invariants:
    - Every value here is immutable once constructed (frozen dataclasses, tuples)
    - HttpResponse.body is always bytes; an empty body is b"" (never None)
    - FieldError.field is a dotted path relative to its parameter location
    - ParameterSet only ever holds models that passed validation

Design Decisions:
    - Frozen dataclasses over pydantic models: these never cross the wire themselves
    - Claims is a bare TypeVar: the pipeline never looks inside it
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel


Claims = TypeVar("Claims")

JSON_CONTENT_TYPE = "application/json"


# ─── Enums ───────────────────────────────────────────────────────

class AuthRequirement(str, Enum):
    """How a route treats the Authorization header."""
    NONE = "none"
    OPTIONAL = "optional"
    REQUIRED = "required"


class ParamLocation(str, Enum):
    """Where a declared parameter model is read from."""
    PATH = "path"
    QUERY = "query"
    BODY = "body"


# ─── Validation results ──────────────────────────────────────────

@dataclass(frozen=True)
class FieldError:
    """One failed constraint: (field path, constraint kind, human message)."""
    field: str
    constraint: str
    message: str

    def to_dict(self) -> dict:
        return {
            "field": self.field,
            "constraint": self.constraint,
            "message": self.message,
        }


ValidationErrors = tuple[FieldError, ...]


# ─── Pipeline values ─────────────────────────────────────────────

@dataclass(frozen=True)
class RawParameters:
    """Extractor output: scalars coerced to their declared types, body as a JSON tree."""
    path: dict[str, Any] = field(default_factory=dict)
    query: dict[str, Any] = field(default_factory=dict)
    body: Any = None


@dataclass(frozen=True)
class ParameterSet:
    """Validated, typed parameters for exactly one request."""
    path_params: BaseModel | None = None
    query_params: BaseModel | None = None
    body: BaseModel | None = None

    def as_kwargs(self) -> dict[str, BaseModel]:
        """Only the declared parts, keyed by handler argument name."""
        kwargs: dict[str, BaseModel] = {}
        if self.path_params is not None:
            kwargs["path_params"] = self.path_params
        if self.query_params is not None:
            kwargs["query_params"] = self.query_params
        if self.body is not None:
            kwargs["body"] = self.body
        return kwargs


@dataclass(frozen=True)
class HttpResponse:
    """Transport-neutral response: status, headers and encoded body."""
    status_code: int
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes = b""

    @classmethod
    def empty(cls, status_code: int) -> "HttpResponse":
        return cls(status_code=status_code)

    @classmethod
    def json(cls, status_code: int, body: bytes) -> "HttpResponse":
        return cls(
            status_code=status_code,
            headers=(("content-type", JSON_CONTENT_TYPE),),
            body=body,
        )

    @classmethod
    def text(cls, status_code: int, message: str) -> "HttpResponse":
        return cls(
            status_code=status_code,
            headers=(("content-type", "text/plain; charset=utf-8"),),
            body=message.encode("utf-8"),
        )

    def header(self, name: str) -> str | None:
        name = name.lower()
        for key, value in self.headers:
            if key.lower() == name:
                return value
        return None
