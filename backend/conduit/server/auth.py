"""Authentication Resolver - turn request headers into optional, opaque claims.

Invariants:
    - resolve_claims never raises: a provider failure is logged and reads as "no claims"
    - Claims are returned untouched; the pipeline never inspects them
    - Nothing about why claims were rejected reaches the client

Design Decisions:
    - The provider is the API implementation itself (ApiKeyAuthHeader), so a deployment
      swaps auth by swapping one method
    - TokenHeaderAuth covers the common "Token <jwt>" / "Bearer <jwt>" header and
      delegates the actual decode, keeping token policy out of this package
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Generic, Mapping

from conduit.apis.contract import ApiKeyAuthHeader
from conduit.core.domain_types import Claims

logger = logging.getLogger(__name__)

DEFAULT_SCHEMES = ("token", "bearer")


async def resolve_claims(
    provider: ApiKeyAuthHeader[Claims],
    headers: Mapping[str, str],
    scheme_name: str,
) -> Claims | None:
    """Ask the provider for claims; any failure means no claims."""
    try:
        return await provider.extract_claims_from_header(headers, scheme_name)
    except Exception as e:
        logger.warning(
            f"Auth provider failed on header '{scheme_name}': {e}",
            exc_info=True, extra={"error_code": "AUTH_PROVIDER_ERROR"},
        )
        return None


def parse_authorization(
    value: str | None, schemes: tuple[str, ...] = DEFAULT_SCHEMES,
) -> str | None:
    """Return the credential from "<Scheme> <credential>", or None if malformed."""
    raw = (value or "").strip()
    if not raw:
        return None
    parts = raw.split(" ", 1)
    if len(parts) != 2:
        return None
    scheme, credential = parts[0].strip().lower(), parts[1].strip()
    if scheme not in schemes or not credential:
        return None
    return credential


class TokenHeaderAuth(Generic[Claims]):
    """ApiKeyAuthHeader built from a decode callable (sync or async).

    decode(credential) returns claims, or None for a credential it rejects.
    Raising inside decode is treated as a rejection.
    """

    def __init__(
        self,
        decode: Callable[[str], Claims | None | Awaitable[Claims | None]],
        schemes: tuple[str, ...] = DEFAULT_SCHEMES,
    ):
        self._decode = decode
        self._schemes = tuple(s.lower() for s in schemes)

    async def extract_claims_from_header(
        self, headers: Mapping[str, str], key: str,
    ) -> Claims | None:
        credential = parse_authorization(_get_header(headers, key), self._schemes)
        if credential is None:
            return None
        try:
            claims: Any = self._decode(credential)
            if inspect.isawaitable(claims):
                claims = await claims
        except Exception as e:
            logger.info(f"Rejected credential in '{key}' header: {e}")
            return None
        return claims


def _get_header(headers: Mapping[str, str], key: str) -> str | None:
    value = headers.get(key)
    if value is None:
        value = headers.get(key.lower())
    return value
