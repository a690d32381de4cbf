"""Tags - handler contract for the tag cloud. No claims: tags are public."""

from typing import Protocol

from conduit.apis.outcomes import Status200Tags, Status422UnexpectedError


GetTagsResponse = Status200Tags | Status422UnexpectedError


class Tags(Protocol):
    """Tags resource."""

    async def get_tags(
        self, *, method: str, host: str, cookies: dict[str, str],
    ) -> GetTagsResponse:
        """Get tags. GET /api/tags"""
        ...
