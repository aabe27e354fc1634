"""
Identity resolution — turn a bearer credential into a caller identity.

The catalog trusts the edge (API gateway / load balancer) to have
authenticated the caller, so :class:`UnverifiedTokenResolver` only
*decodes* the JWT and reads its ``sub`` claim.  The signature is not
checked.  Callers depend on the :class:`IdentityResolver` protocol, so a
verifying resolver can be dropped in without touching the operations.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import jwt

from book_catalog.core.errors import InvalidCredentialError, MissingCredentialError

_BEARER_PREFIX = "bearer "


@dataclass(frozen=True, slots=True)
class Identity:
    """Caller identity derived from a decoded credential.

    Attributes:
        sub: Subject identifier; compared against a book's ``user_id``.
        claims: All decoded claims (informational only).
    """

    sub: str
    claims: dict[str, Any] = field(default_factory=dict)


class IdentityResolver(Protocol):
    """Anything that can turn a raw credential into an :class:`Identity`."""

    def resolve(self, raw_credential: str | None) -> Identity: ...


def extract_credential(
    headers: Mapping[str, str],
    cookies: Mapping[str, str],
    cookie_name: str = "token",
) -> str | None:
    """Pick the raw credential from a request.

    The ``Authorization`` header wins over the cookie.  Empty values count
    as absent.
    """
    header = headers.get("authorization") or headers.get("Authorization")
    if header:
        return header
    return cookies.get(cookie_name) or None


class UnverifiedTokenResolver:
    """Decode-only JWT resolver.

    Raises:
        MissingCredentialError: ``raw_credential`` is ``None`` or blank.
        InvalidCredentialError: the token does not decode, or has no
            usable ``sub`` claim.
    """

    def resolve(self, raw_credential: str | None) -> Identity:
        if raw_credential is None or not raw_credential.strip():
            raise MissingCredentialError("Authorization token missing")

        token = raw_credential.strip()
        if token.lower().startswith(_BEARER_PREFIX):
            token = token[len(_BEARER_PREFIX):].strip()

        try:
            claims = jwt.decode(
                token,
                options={"verify_signature": False},
                algorithms=["HS256", "RS256", "ES256"],
            )
        except jwt.PyJWTError as exc:
            raise InvalidCredentialError("Invalid token", cause=exc) from exc

        sub = claims.get("sub") if isinstance(claims, dict) else None
        if not isinstance(sub, str) or not sub:
            raise InvalidCredentialError("Invalid token: no subject claim")

        return Identity(sub=sub, claims=claims)
