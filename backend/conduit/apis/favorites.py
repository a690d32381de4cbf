"""Favorites - handler contract for favoriting articles."""

from typing import Protocol

from conduit import models
from conduit.core.domain_types import Claims
from conduit.apis.outcomes import (
    Status200SingleArticle,
    Status401Unauthorized,
    Status422UnexpectedError,
)


CreateArticleFavoriteResponse = (
    Status200SingleArticle | Status401Unauthorized | Status422UnexpectedError
)
DeleteArticleFavoriteResponse = (
    Status200SingleArticle | Status401Unauthorized | Status422UnexpectedError
)


class Favorites(Protocol[Claims]):
    """Favorites resource."""

    async def create_article_favorite(
        self, *, method: str, host: str, cookies: dict[str, str],
        claims: Claims, path_params: models.SlugPathParams,
    ) -> CreateArticleFavoriteResponse:
        """Favorite an article. POST /api/articles/{slug}/favorite"""
        ...

    async def delete_article_favorite(
        self, *, method: str, host: str, cookies: dict[str, str],
        claims: Claims, path_params: models.SlugPathParams,
    ) -> DeleteArticleFavoriteResponse:
        """Unfavorite an article. DELETE /api/articles/{slug}/favorite"""
        ...
