"""Wire Models - Pydantic models for every Conduit request, response and parameter set.

Invariants:
    - Wire names are camelCase (tagList, createdAt, favoritesCount); Python names are snake_case
    - Models accept either name on input (populate_by_name) and always emit the wire name
    - Optional fields are omitted from output when unset (exclude_none at serialization)
    - Numeric lower bounds live on the parameter models, never in the extractors

Design Decisions:
    - Field(alias=...) per camelCase field over a global alias generator: the wire
      names are irregular enough (id, body) that explicit is clearer
    - Request envelopes ({"article": {...}}) are their own models so nested paths
      read "article.title" in validation errors
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# Integer parameters are 32-bit signed on the wire
I32_MIN = -(2**31)
I32_MAX = 2**31 - 1


class WireModel(BaseModel):
    """Base for all Conduit models: alias-aware in both directions."""
    model_config = ConfigDict(populate_by_name=True)


# ─── Path parameters ─────────────────────────────────────────────

class SlugPathParams(WireModel):
    slug: str


class CommentPathParams(WireModel):
    slug: str
    id: int = Field(ge=I32_MIN, le=I32_MAX)


class UsernamePathParams(WireModel):
    username: str


# ─── Query parameters ────────────────────────────────────────────

class GetArticlesQueryParams(WireModel):
    """Filters for GET /api/articles. All optional."""
    tag: str | None = None
    author: str | None = None
    favorited: str | None = None
    offset: int | None = Field(None, ge=0, le=I32_MAX)
    limit: int | None = Field(None, ge=1, le=I32_MAX)


class GetArticlesFeedQueryParams(WireModel):
    offset: int | None = Field(None, ge=0, le=I32_MAX)
    limit: int | None = Field(None, ge=1, le=I32_MAX)


# ─── Domain objects ──────────────────────────────────────────────

class Profile(WireModel):
    username: str
    bio: str
    image: str
    following: bool


class Article(WireModel):
    slug: str
    title: str
    description: str
    body: str
    tag_list: list[str] = Field(default_factory=list, alias="tagList")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    favorited: bool
    favorites_count: int = Field(alias="favoritesCount")
    author: Profile


class ArticleListItem(WireModel):
    """Article as it appears in listings: everything except the body."""
    slug: str
    title: str
    description: str
    tag_list: list[str] = Field(default_factory=list, alias="tagList")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    favorited: bool
    favorites_count: int = Field(alias="favoritesCount")
    author: Profile


class Comment(WireModel):
    id: int
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    body: str
    author: Profile


class User(WireModel):
    email: str
    token: str
    username: str
    bio: str
    image: str


# ─── Request bodies ──────────────────────────────────────────────

class NewArticle(WireModel):
    title: str
    description: str
    body: str
    tag_list: list[str] | None = Field(None, alias="tagList")


class UpdateArticle(WireModel):
    title: str | None = None
    description: str | None = None
    body: str | None = None


class NewComment(WireModel):
    body: str


class NewUser(WireModel):
    username: str
    email: str
    password: str


class LoginUser(WireModel):
    email: str
    password: str


class UpdateUser(WireModel):
    email: str | None = None
    password: str | None = None
    username: str | None = None
    bio: str | None = None
    image: str | None = None


class CreateArticleRequest(WireModel):
    article: NewArticle


class UpdateArticleRequest(WireModel):
    article: UpdateArticle


class CreateArticleCommentRequest(WireModel):
    comment: NewComment


class CreateUserRequest(WireModel):
    user: NewUser


class LoginRequest(WireModel):
    user: LoginUser


class UpdateCurrentUserRequest(WireModel):
    user: UpdateUser


# ─── Response envelopes ──────────────────────────────────────────

class SingleArticleResponse(WireModel):
    article: Article


class MultipleArticlesResponse(WireModel):
    articles: list[ArticleListItem]
    articles_count: int = Field(alias="articlesCount")


class SingleCommentResponse(WireModel):
    comment: Comment


class MultipleCommentsResponse(WireModel):
    comments: list[Comment]


class ProfileResponse(WireModel):
    profile: Profile


class TagsResponse(WireModel):
    tags: list[str]


class Login200Response(WireModel):
    """User envelope returned by register, login, get and update current user."""
    user: User


class GenericErrorModelErrors(WireModel):
    body: list[str]


class GenericErrorModel(WireModel):
    """Declared business error (422): {"errors": {"body": ["..."]}}."""
    errors: GenericErrorModelErrors

    @classmethod
    def of(cls, *messages: str) -> "GenericErrorModel":
        return cls(errors=GenericErrorModelErrors(body=list(messages)))
