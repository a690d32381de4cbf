"""Articles - handler contract for article CRUD and listings.

Invariants:
    - get_articles and get_article never receive claims (public routes)
    - Every other operation receives the resolved claims, never None
"""

from typing import Protocol

from conduit import models
from conduit.core.domain_types import Claims
from conduit.apis.outcomes import (
    Status200MultipleArticles,
    Status200NoContent,
    Status200SingleArticle,
    Status201SingleArticle,
    Status401Unauthorized,
    Status422UnexpectedError,
)


CreateArticleResponse = (
    Status201SingleArticle | Status401Unauthorized | Status422UnexpectedError
)
DeleteArticleResponse = (
    Status200NoContent | Status401Unauthorized | Status422UnexpectedError
)
GetArticleResponse = Status200SingleArticle | Status422UnexpectedError
GetArticlesResponse = (
    Status200MultipleArticles | Status401Unauthorized | Status422UnexpectedError
)
GetArticlesFeedResponse = (
    Status200MultipleArticles | Status401Unauthorized | Status422UnexpectedError
)
UpdateArticleResponse = (
    Status200SingleArticle | Status401Unauthorized | Status422UnexpectedError
)


class Articles(Protocol[Claims]):
    """Articles resource."""

    async def create_article(
        self, *, method: str, host: str, cookies: dict[str, str],
        claims: Claims, body: models.CreateArticleRequest,
    ) -> CreateArticleResponse:
        """Create an article. POST /api/articles"""
        ...

    async def delete_article(
        self, *, method: str, host: str, cookies: dict[str, str],
        claims: Claims, path_params: models.SlugPathParams,
    ) -> DeleteArticleResponse:
        """Delete an article. DELETE /api/articles/{slug}"""
        ...

    async def get_article(
        self, *, method: str, host: str, cookies: dict[str, str],
        path_params: models.SlugPathParams,
    ) -> GetArticleResponse:
        """Get an article. GET /api/articles/{slug}"""
        ...

    async def get_articles(
        self, *, method: str, host: str, cookies: dict[str, str],
        query_params: models.GetArticlesQueryParams,
    ) -> GetArticlesResponse:
        """Get recent articles globally. GET /api/articles"""
        ...

    async def get_articles_feed(
        self, *, method: str, host: str, cookies: dict[str, str],
        claims: Claims, query_params: models.GetArticlesFeedQueryParams,
    ) -> GetArticlesFeedResponse:
        """Get recent articles from users you follow. GET /api/articles/feed"""
        ...

    async def update_article(
        self, *, method: str, host: str, cookies: dict[str, str],
        claims: Claims, path_params: models.SlugPathParams,
        body: models.UpdateArticleRequest,
    ) -> UpdateArticleResponse:
        """Update an article. PUT /api/articles/{slug}"""
        ...
