"""Outcome Variants - the tagged results a domain handler may return.

Invariants:
    - Each variant class is bound to exactly one HTTP status (status_code ClassVar)
    - Body-less variants render an empty body; JsonOutcome variants render their payload as JSON
    - JsonOutcome.payload_type is the declared type of `body`, read once at class creation
    - Per-operation closed sets are Union aliases in the resource modules (apis/articles.py, ...)

Design Decisions:
    - Frozen dataclasses + Union aliases over one Enum per operation: variants that
      share a status and payload (e.g. Status401Unauthorized) are declared once
    - The status lives on the class, not the instance: a handler cannot pick a status
      outside the table
"""

import inspect
from dataclasses import dataclass
from typing import Any, ClassVar

from conduit import models


@dataclass(frozen=True)
class Outcome:
    """Base of every handler result."""
    status_code: ClassVar[int]
    description: ClassVar[str] = ""

    @property
    def payload(self) -> Any:
        return None


@dataclass(frozen=True)
class JsonOutcome(Outcome):
    """Outcome carrying a JSON payload in `body`."""
    body: Any
    payload_type: ClassVar[Any] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        declared = inspect.get_annotations(cls).get("body")
        if declared is not None:
            cls.payload_type = declared

    @property
    def payload(self) -> Any:
        return self.body


# ─── Body-less variants ──────────────────────────────────────────

@dataclass(frozen=True)
class Status200NoContent(Outcome):
    status_code: ClassVar[int] = 200
    description: ClassVar[str] = "No content"


@dataclass(frozen=True)
class Status401Unauthorized(Outcome):
    status_code: ClassVar[int] = 401
    description: ClassVar[str] = "Unauthorized"


# ─── Payload variants ────────────────────────────────────────────

@dataclass(frozen=True)
class Status200SingleArticle(JsonOutcome):
    body: models.SingleArticleResponse
    status_code: ClassVar[int] = 200
    description: ClassVar[str] = "Single article"


@dataclass(frozen=True)
class Status201SingleArticle(JsonOutcome):
    body: models.SingleArticleResponse
    status_code: ClassVar[int] = 201
    description: ClassVar[str] = "Single article"


@dataclass(frozen=True)
class Status200MultipleArticles(JsonOutcome):
    body: models.MultipleArticlesResponse
    status_code: ClassVar[int] = 200
    description: ClassVar[str] = "Multiple articles"


@dataclass(frozen=True)
class Status200SingleComment(JsonOutcome):
    body: models.SingleCommentResponse
    status_code: ClassVar[int] = 200
    description: ClassVar[str] = "Single comment"


@dataclass(frozen=True)
class Status200MultipleComments(JsonOutcome):
    body: models.MultipleCommentsResponse
    status_code: ClassVar[int] = 200
    description: ClassVar[str] = "Multiple comments"


@dataclass(frozen=True)
class Status200Profile(JsonOutcome):
    body: models.ProfileResponse
    status_code: ClassVar[int] = 200
    description: ClassVar[str] = "Profile"


@dataclass(frozen=True)
class Status200Tags(JsonOutcome):
    body: models.TagsResponse
    status_code: ClassVar[int] = 200
    description: ClassVar[str] = "Tags"


@dataclass(frozen=True)
class Status200User(JsonOutcome):
    body: models.Login200Response
    status_code: ClassVar[int] = 200
    description: ClassVar[str] = "User"


@dataclass(frozen=True)
class Status201User(JsonOutcome):
    body: models.Login200Response
    status_code: ClassVar[int] = 201
    description: ClassVar[str] = "User"


@dataclass(frozen=True)
class Status422UnexpectedError(JsonOutcome):
    body: models.GenericErrorModel
    status_code: ClassVar[int] = 422
    description: ClassVar[str] = "Unexpected error"
