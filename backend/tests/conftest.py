"""Root conftest - shared test configuration and a call-counting stub API.

Invariants:
    - StubApi satisfies the whole ConduitApi contract; every call is recorded
    - "Authorization: Token valid-token" resolves to claims, anything else to None
    - Outcomes are configurable per operation (value, callable, or exception)
"""

import os
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient

from conduit import models
from conduit.apis import outcomes
from conduit.config import Settings
from conduit.main import create_app

os.environ.setdefault("CONDUIT_LOG_FORMAT", "text")
os.environ.setdefault("CONDUIT_LOG_LEVEL", "DEBUG")

VALID_TOKEN = "valid-token"
AUTH_HEADERS = {"Authorization": f"Token {VALID_TOKEN}"}
CLAIMS = {"sub": "jake"}
FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


# ─── Sample payloads ─────────────────────────────────────────────

def make_profile(username: str = "jake") -> models.Profile:
    return models.Profile(
        username=username, bio="I work at statefarm",
        image="https://i.stack.imgur.com/xHWG8.jpg", following=False,
    )


def make_article(slug: str = "how-to-train-your-dragon", **overrides) -> models.Article:
    fields = dict(
        slug=slug, title="How to train your dragon",
        description="Ever wonder how?", body="You have to believe",
        tag_list=["dragons", "training"], created_at=FIXED_TIME,
        updated_at=FIXED_TIME, favorited=False, favorites_count=0,
        author=make_profile(),
    )
    fields.update(overrides)
    return models.Article(**fields)


def make_list_item(slug: str = "how-to-train-your-dragon") -> models.ArticleListItem:
    article = make_article(slug)
    return models.ArticleListItem(**article.model_dump(exclude={"body"}))


def make_comment(comment_id: int = 1) -> models.Comment:
    return models.Comment(
        id=comment_id, created_at=FIXED_TIME, updated_at=FIXED_TIME,
        body="It takes a Jacobian", author=make_profile(),
    )


def make_user(username: str = "jake", email: str = "jake@jake.jake") -> models.User:
    return models.User(
        email=email, token="jwt.token.here", username=username,
        bio="I work at statefarm", image="",
    )


def default_outcomes() -> dict:
    single_article = models.SingleArticleResponse(article=make_article())
    many_articles = models.MultipleArticlesResponse(
        articles=[make_list_item()], articles_count=1,
    )
    profile = models.ProfileResponse(profile=make_profile("celeb"))
    user = models.Login200Response(user=make_user())
    return {
        "create_article": outcomes.Status201SingleArticle(single_article),
        "delete_article": outcomes.Status200NoContent(),
        "get_article": outcomes.Status200SingleArticle(single_article),
        "get_articles": outcomes.Status200MultipleArticles(many_articles),
        "get_articles_feed": outcomes.Status200MultipleArticles(many_articles),
        "update_article": outcomes.Status200SingleArticle(single_article),
        "create_article_comment": outcomes.Status200SingleComment(
            models.SingleCommentResponse(comment=make_comment()),
        ),
        "delete_article_comment": outcomes.Status200NoContent(),
        "get_article_comments": outcomes.Status200MultipleComments(
            models.MultipleCommentsResponse(comments=[make_comment(1), make_comment(2)]),
        ),
        "create_article_favorite": outcomes.Status200SingleArticle(single_article),
        "delete_article_favorite": outcomes.Status200SingleArticle(single_article),
        "follow_user_by_username": outcomes.Status200Profile(profile),
        "get_profile_by_username": outcomes.Status200Profile(profile),
        "unfollow_user_by_username": outcomes.Status200Profile(profile),
        "get_tags": outcomes.Status200Tags(models.TagsResponse(tags=["dragons", "training"])),
        "create_user": outcomes.Status201User(user),
        "get_current_user": outcomes.Status200User(user),
        "login": outcomes.Status200User(user),
        "update_current_user": outcomes.Status200User(user),
    }


# ─── Stub implementation ─────────────────────────────────────────

class StubApi:
    """In-memory ConduitApi: records calls, returns configured outcomes."""

    def __init__(self):
        self.calls: list[tuple[str, dict]] = []
        self.auth_calls: list[str] = []
        self.outcomes = default_outcomes()

    def calls_to(self, operation: str) -> list[dict]:
        return [kwargs for name, kwargs in self.calls if name == operation]

    async def _respond(self, operation: str, **kwargs):
        self.calls.append((operation, kwargs))
        outcome = self.outcomes[operation]
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return outcome(**kwargs)
        return outcome

    async def extract_claims_from_header(self, headers, key):
        self.auth_calls.append(key)
        value = headers.get(key)
        if value == f"Token {VALID_TOKEN}":
            return CLAIMS
        return None

    # Articles
    async def create_article(self, **kwargs):
        return await self._respond("create_article", **kwargs)

    async def delete_article(self, **kwargs):
        return await self._respond("delete_article", **kwargs)

    async def get_article(self, **kwargs):
        return await self._respond("get_article", **kwargs)

    async def get_articles(self, **kwargs):
        return await self._respond("get_articles", **kwargs)

    async def get_articles_feed(self, **kwargs):
        return await self._respond("get_articles_feed", **kwargs)

    async def update_article(self, **kwargs):
        return await self._respond("update_article", **kwargs)

    # Comments
    async def create_article_comment(self, **kwargs):
        return await self._respond("create_article_comment", **kwargs)

    async def delete_article_comment(self, **kwargs):
        return await self._respond("delete_article_comment", **kwargs)

    async def get_article_comments(self, **kwargs):
        return await self._respond("get_article_comments", **kwargs)

    # Favorites
    async def create_article_favorite(self, **kwargs):
        return await self._respond("create_article_favorite", **kwargs)

    async def delete_article_favorite(self, **kwargs):
        return await self._respond("delete_article_favorite", **kwargs)

    # Profile
    async def follow_user_by_username(self, **kwargs):
        return await self._respond("follow_user_by_username", **kwargs)

    async def get_profile_by_username(self, **kwargs):
        return await self._respond("get_profile_by_username", **kwargs)

    async def unfollow_user_by_username(self, **kwargs):
        return await self._respond("unfollow_user_by_username", **kwargs)

    # Tags
    async def get_tags(self, **kwargs):
        return await self._respond("get_tags", **kwargs)

    # User and Authentication
    async def create_user(self, **kwargs):
        return await self._respond("create_user", **kwargs)

    async def get_current_user(self, **kwargs):
        return await self._respond("get_current_user", **kwargs)

    async def login(self, **kwargs):
        return await self._respond("login", **kwargs)

    async def update_current_user(self, **kwargs):
        return await self._respond("update_current_user", **kwargs)


@pytest.fixture
def stub_api():
    return StubApi()


@pytest.fixture
def auth_headers():
    return dict(AUTH_HEADERS)


@pytest.fixture
def samples():
    """Payload builders, for tests that configure their own outcomes."""
    return SimpleNamespace(
        profile=make_profile, article=make_article, list_item=make_list_item,
        comment=make_comment, user=make_user, time=FIXED_TIME,
    )


@pytest.fixture
async def client(stub_api):
    """ASGI test client for create_app(stub_api)."""
    app = create_app(stub_api, Settings(log_format="text"))
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
