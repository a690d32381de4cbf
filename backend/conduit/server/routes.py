"""Route Table - one immutable descriptor per (method, path) of the Conduit API.

Invariants:
    - ROUTE_TABLE is a tuple of frozen Route values, built once at import, never mutated
    - Every route names exactly one handler operation and its closed outcome set
    - Static segments are registered before templated siblings
      (/api/articles/feed before /api/articles/{slug})
    - (method, path) pairs are unique

Design Decisions:
    - Explicit table over decorators scattered across modules: every mapping is
      visible in one place, adding an endpoint means editing this tuple
    - outcomes derived from the operation's Union alias with typing.get_args, so
      the contract module stays the single source of truth
"""

from dataclasses import dataclass, field
from typing import get_args

from pydantic import BaseModel

from conduit import models
from conduit.apis import articles, comments, favorites, profile, tags
from conduit.apis import user_and_authentication as users
from conduit.apis.outcomes import Outcome
from conduit.core.domain_types import AuthRequirement


@dataclass(frozen=True)
class Route:
    """Static binding of method + path template to a handler operation."""
    method: str
    path: str
    operation: str
    outcomes: tuple[type[Outcome], ...]
    auth: AuthRequirement = AuthRequirement.NONE
    path_params: type[BaseModel] | None = None
    query_params: type[BaseModel] | None = None
    body: type[BaseModel] | None = None
    summary: str = field(default="", compare=False)

    @property
    def status_codes(self) -> dict[int, str]:
        """status -> description table, for docs and route introspection."""
        return {o.status_code: o.description for o in self.outcomes}

    def declares(self, outcome: object) -> bool:
        return type(outcome) in self.outcomes


def _route(
    method: str, path: str, operation: str, response_union: object, **kwargs,
) -> Route:
    return Route(
        method=method, path=path, operation=operation,
        outcomes=tuple(get_args(response_union)), **kwargs,
    )


_REQUIRED = AuthRequirement.REQUIRED

ROUTE_TABLE: tuple[Route, ...] = (
    # Articles
    _route(
        "GET", "/api/articles/feed", "get_articles_feed",
        articles.GetArticlesFeedResponse, auth=_REQUIRED,
        query_params=models.GetArticlesFeedQueryParams,
        summary="Get recent articles from users you follow",
    ),
    _route(
        "GET", "/api/articles", "get_articles", articles.GetArticlesResponse,
        query_params=models.GetArticlesQueryParams,
        summary="Get recent articles globally",
    ),
    _route(
        "POST", "/api/articles", "create_article",
        articles.CreateArticleResponse, auth=_REQUIRED,
        body=models.CreateArticleRequest, summary="Create an article",
    ),
    _route(
        "GET", "/api/articles/{slug}", "get_article",
        articles.GetArticleResponse,
        path_params=models.SlugPathParams, summary="Get an article",
    ),
    _route(
        "PUT", "/api/articles/{slug}", "update_article",
        articles.UpdateArticleResponse, auth=_REQUIRED,
        path_params=models.SlugPathParams, body=models.UpdateArticleRequest,
        summary="Update an article",
    ),
    _route(
        "DELETE", "/api/articles/{slug}", "delete_article",
        articles.DeleteArticleResponse, auth=_REQUIRED,
        path_params=models.SlugPathParams, summary="Delete an article",
    ),

    # Comments
    _route(
        "GET", "/api/articles/{slug}/comments", "get_article_comments",
        comments.GetArticleCommentsResponse,
        path_params=models.SlugPathParams,
        summary="Get comments for an article",
    ),
    _route(
        "POST", "/api/articles/{slug}/comments", "create_article_comment",
        comments.CreateArticleCommentResponse, auth=_REQUIRED,
        path_params=models.SlugPathParams,
        body=models.CreateArticleCommentRequest,
        summary="Create a comment for an article",
    ),
    _route(
        "DELETE", "/api/articles/{slug}/comments/{id}", "delete_article_comment",
        comments.DeleteArticleCommentResponse, auth=_REQUIRED,
        path_params=models.CommentPathParams,
        summary="Delete a comment for an article",
    ),

    # Favorites
    _route(
        "POST", "/api/articles/{slug}/favorite", "create_article_favorite",
        favorites.CreateArticleFavoriteResponse, auth=_REQUIRED,
        path_params=models.SlugPathParams, summary="Favorite an article",
    ),
    _route(
        "DELETE", "/api/articles/{slug}/favorite", "delete_article_favorite",
        favorites.DeleteArticleFavoriteResponse, auth=_REQUIRED,
        path_params=models.SlugPathParams, summary="Unfavorite an article",
    ),

    # Profile
    _route(
        "GET", "/api/profiles/{username}", "get_profile_by_username",
        profile.GetProfileByUsernameResponse,
        path_params=models.UsernamePathParams, summary="Get a profile",
    ),
    _route(
        "POST", "/api/profiles/{username}/follow", "follow_user_by_username",
        profile.FollowUserByUsernameResponse, auth=_REQUIRED,
        path_params=models.UsernamePathParams, summary="Follow a user",
    ),
    _route(
        "DELETE", "/api/profiles/{username}/follow", "unfollow_user_by_username",
        profile.UnfollowUserByUsernameResponse, auth=_REQUIRED,
        path_params=models.UsernamePathParams, summary="Unfollow a user",
    ),

    # Tags
    _route(
        "GET", "/api/tags", "get_tags", tags.GetTagsResponse,
        summary="Get tags",
    ),

    # User and Authentication
    _route(
        "GET", "/api/user", "get_current_user",
        users.GetCurrentUserResponse, auth=_REQUIRED,
        summary="Get current user",
    ),
    _route(
        "PUT", "/api/user", "update_current_user",
        users.UpdateCurrentUserResponse, auth=_REQUIRED,
        body=models.UpdateCurrentUserRequest, summary="Update current user",
    ),
    _route(
        "POST", "/api/users", "create_user", users.CreateUserResponse,
        body=models.CreateUserRequest, summary="Register a user",
    ),
    _route(
        "POST", "/api/users/login", "login", users.LoginResponse,
        body=models.LoginRequest, summary="Existing user login",
    ),
)


def find_route(method: str, path: str) -> Route | None:
    """Look up a route by its exact (method, path template) pair."""
    for route in ROUTE_TABLE:
        if route.method == method.upper() and route.path == path:
            return route
    return None
