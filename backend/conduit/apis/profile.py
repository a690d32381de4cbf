"""Profile - handler contract for profiles and the follow graph."""

from typing import Protocol

from conduit import models
from conduit.core.domain_types import Claims
from conduit.apis.outcomes import (
    Status200Profile,
    Status401Unauthorized,
    Status422UnexpectedError,
)


FollowUserByUsernameResponse = (
    Status200Profile | Status401Unauthorized | Status422UnexpectedError
)
GetProfileByUsernameResponse = (
    Status200Profile | Status401Unauthorized | Status422UnexpectedError
)
UnfollowUserByUsernameResponse = (
    Status200Profile | Status401Unauthorized | Status422UnexpectedError
)


class Profile(Protocol[Claims]):
    """Profile resource."""

    async def follow_user_by_username(
        self, *, method: str, host: str, cookies: dict[str, str],
        claims: Claims, path_params: models.UsernamePathParams,
    ) -> FollowUserByUsernameResponse:
        """Follow a user. POST /api/profiles/{username}/follow"""
        ...

    async def get_profile_by_username(
        self, *, method: str, host: str, cookies: dict[str, str],
        path_params: models.UsernamePathParams,
    ) -> GetProfileByUsernameResponse:
        """Get a profile. GET /api/profiles/{username}"""
        ...

    async def unfollow_user_by_username(
        self, *, method: str, host: str, cookies: dict[str, str],
        claims: Claims, path_params: models.UsernamePathParams,
    ) -> UnfollowUserByUsernameResponse:
        """Unfollow a user. DELETE /api/profiles/{username}/follow"""
        ...
