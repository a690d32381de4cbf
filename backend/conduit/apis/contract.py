"""Server Contract - the single capability aggregate the dispatcher depends on.

Invariants:
    - One Claims type is shared by every resource and by the auth provider
    - Any object structurally satisfying ConduitApi can be served; no base class required

Design Decisions:
    - Aggregate Protocol over passing six handler objects around: the router binds to
      one implementation, the way one app state is bound per process
"""

from typing import Mapping, Protocol, runtime_checkable

from conduit.core.domain_types import Claims
from conduit.apis.articles import Articles
from conduit.apis.comments import Comments
from conduit.apis.favorites import Favorites
from conduit.apis.profile import Profile
from conduit.apis.tags import Tags
from conduit.apis.user_and_authentication import UserAndAuthentication


class ApiKeyAuthHeader(Protocol[Claims]):
    """API key authentication read from a request header."""

    async def extract_claims_from_header(
        self, headers: Mapping[str, str], key: str,
    ) -> Claims | None:
        """Return claims for a valid credential in headers[key], else None. Never raises."""
        ...


@runtime_checkable
class ConduitApi(
    Articles[Claims],
    Comments[Claims],
    Favorites[Claims],
    Profile[Claims],
    Tags,
    UserAndAuthentication[Claims],
    ApiKeyAuthHeader[Claims],
    Protocol[Claims],
):
    """Everything the server needs from a domain implementation."""
