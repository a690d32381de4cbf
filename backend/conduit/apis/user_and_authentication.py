"""User and Authentication - handler contract for registration, login and the current user.

Invariants:
    - create_user and login are public: they run before a token exists
    - Token issuance and password checks happen behind this contract, never in the pipeline
"""

from typing import Protocol

from conduit import models
from conduit.core.domain_types import Claims
from conduit.apis.outcomes import (
    Status200User,
    Status201User,
    Status401Unauthorized,
    Status422UnexpectedError,
)


CreateUserResponse = Status201User | Status422UnexpectedError
GetCurrentUserResponse = (
    Status200User | Status401Unauthorized | Status422UnexpectedError
)
LoginResponse = Status200User | Status401Unauthorized | Status422UnexpectedError
UpdateCurrentUserResponse = (
    Status200User | Status401Unauthorized | Status422UnexpectedError
)


class UserAndAuthentication(Protocol[Claims]):
    """User and authentication resource."""

    async def create_user(
        self, *, method: str, host: str, cookies: dict[str, str],
        body: models.CreateUserRequest,
    ) -> CreateUserResponse:
        """Register a user. POST /api/users"""
        ...

    async def get_current_user(
        self, *, method: str, host: str, cookies: dict[str, str],
        claims: Claims,
    ) -> GetCurrentUserResponse:
        """Get current user. GET /api/user"""
        ...

    async def login(
        self, *, method: str, host: str, cookies: dict[str, str],
        body: models.LoginRequest,
    ) -> LoginResponse:
        """Existing user login. POST /api/users/login"""
        ...

    async def update_current_user(
        self, *, method: str, host: str, cookies: dict[str, str],
        claims: Claims, body: models.UpdateCurrentUserRequest,
    ) -> UpdateCurrentUserResponse:
        """Update current user. PUT /api/user"""
        ...
