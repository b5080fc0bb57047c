# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Authorization policy for protected requests.

Every protected request walks the same states::

    UNAUTHENTICATED → TOKEN_PRESENTED → TOKEN_VERIFIED → ALLOWED | FORBIDDEN

* No header, or not ``Bearer <token>``: stops at UNAUTHENTICATED.
* Token present but bad signature / expired: stops at TOKEN_PRESENTED.
* Verified token: the subject is compared with the record's owner wherever
  ownership applies (chirp update / delete).
"""

import enum
from datetime import datetime
from typing import Optional

from core.errors import AuthInvalidError, ForbiddenError, UnauthenticatedError
from core.logger import logger
from core.security import TokenClaims, TokenService


class AuthState(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    TOKEN_PRESENTED = "token_presented"
    TOKEN_VERIFIED = "token_verified"
    ALLOWED = "allowed"
    FORBIDDEN = "forbidden"


def parse_bearer(header: Optional[str], scheme: str = "Bearer") -> str:
    """
    Split ``"<scheme> <token>"`` and return the token.

    The scheme is compared case-insensitively; anything else, such as
    ``Basic <token>``, is rejected.
    """
    if not header:
        raise UnauthenticatedError("Missing Authorization header")
    parts = header.split(" ")
    if len(parts) != 2 or not parts[1]:
        raise UnauthenticatedError("Invalid Authorization header")
    if parts[0].lower() != scheme.lower():
        raise UnauthenticatedError(f"Expected {scheme} authorization")
    return parts[1]


def ensure_owner(requester_id: Optional[int], owner_id: Optional[int]) -> AuthState:
    """
    Return ALLOWED if *requester_id* owns the record, else raise
    ForbiddenError.  A record without an owner belongs to nobody.
    """
    if owner_id is None or requester_id != owner_id:
        logger.info(
            "auth %s: user_id=%s is not owner %s",
            AuthState.FORBIDDEN.value, requester_id, owner_id,
        )
        raise ForbiddenError("Access denied")
    return AuthState.ALLOWED


class AuthorizationPolicy:
    def __init__(self, tokens: TokenService) -> None:
        self.tokens = tokens

    def authenticate(self, header: Optional[str], now: Optional[datetime] = None) -> TokenClaims:
        state = AuthState.UNAUTHENTICATED
        try:
            token = parse_bearer(header)
            state = AuthState.TOKEN_PRESENTED
            claims = self.tokens.verify_token(token, now=now)
        except AuthInvalidError as exc:
            logger.info("auth rejected at %s: %s", state.value, exc)
            raise
        logger.debug("auth %s for user_id=%d", AuthState.TOKEN_VERIFIED.value, claims.subject)
        return claims

