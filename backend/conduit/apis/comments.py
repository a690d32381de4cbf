"""Comments - handler contract for article comments."""

from typing import Protocol

from conduit import models
from conduit.core.domain_types import Claims
from conduit.apis.outcomes import (
    Status200MultipleComments,
    Status200NoContent,
    Status200SingleComment,
    Status401Unauthorized,
    Status422UnexpectedError,
)


CreateArticleCommentResponse = (
    Status200SingleComment | Status401Unauthorized | Status422UnexpectedError
)
DeleteArticleCommentResponse = (
    Status200NoContent | Status401Unauthorized | Status422UnexpectedError
)
GetArticleCommentsResponse = (
    Status200MultipleComments | Status401Unauthorized | Status422UnexpectedError
)


class Comments(Protocol[Claims]):
    """Comments resource."""

    async def create_article_comment(
        self, *, method: str, host: str, cookies: dict[str, str],
        claims: Claims, path_params: models.SlugPathParams,
        body: models.CreateArticleCommentRequest,
    ) -> CreateArticleCommentResponse:
        """Create a comment for an article. POST /api/articles/{slug}/comments"""
        ...

    async def delete_article_comment(
        self, *, method: str, host: str, cookies: dict[str, str],
        claims: Claims, path_params: models.CommentPathParams,
    ) -> DeleteArticleCommentResponse:
        """Delete a comment for an article. DELETE /api/articles/{slug}/comments/{id}"""
        ...

    async def get_article_comments(
        self, *, method: str, host: str, cookies: dict[str, str],
        path_params: models.SlugPathParams,
    ) -> GetArticleCommentsResponse:
        """Get comments for an article. GET /api/articles/{slug}/comments"""
        ...
