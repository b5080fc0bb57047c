# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Central security module.  All cryptographic primitives and auth guards live
here.  No other module should touch raw crypto directly.

Responsibilities
----------------
1. Password hashing / verification          (passlib pbkdf2_sha256)
2. JWT creation / verification              (PyJWT / HS256)
3. FastAPI dependency guards                (get_current_claims)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt as _jwt        # PyJWT
from passlib.hash import pbkdf2_sha256 as _pbkdf2  # pure Python, no binary deps
from fastapi import Header, Request

from core.errors import AuthInvalidError, TokenConfigError

# ---------------------------------------------------------------------------
# 1.  pbkdf2_sha256 – password hashing
# ---------------------------------------------------------------------------
# The salt is embedded inside the hash string (passlib convention), so a
# single string column is all the user record needs.  The round count is the
# work factor; Settings.password_hash_rounds supplies it.
# ---------------------------------------------------------------------------

DEFAULT_ROUNDS = 600_000


def hash_password(plain: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """
    Hash a plaintext password with PBKDF2-SHA256.

    Returns the full passlib hash string, e.g. ``"$pbkdf2-sha256$600000$..."``.
    """
    return _pbkdf2.using(rounds=rounds).hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of a plaintext password against a hash
    produced by :func:`hash_password`.  A malformed hash verifies as False.
    """
    try:
        return _pbkdf2.verify(plain, stored_hash)
    except (ValueError, TypeError):
        return False


# ---------------------------------------------------------------------------
# 2.  JWT – session tokens
# ---------------------------------------------------------------------------

TOKEN_LIFETIME = timedelta(hours=24)
_ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    issuer: str
    subject: int          # user id
    email: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """
    Issues and verifies HS256 session tokens bound to one shared secret.

    *now* is injectable on both operations so expiry can be checked against
    an explicit clock.
    """

    def __init__(self, secret: str, issuer: str = "chirpy") -> None:
        self._secret = secret
        self.issuer = issuer

    def issue_token(self, user_id: int, email: str, now: Optional[datetime] = None) -> str:
        if not self._secret:
            raise TokenConfigError("JWT secret is not configured")
        now = now or datetime.now(timezone.utc)
        payload = {
            "iss": self.issuer,
            "sub": str(user_id),
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int((now + TOKEN_LIFETIME).timestamp()),
        }
        return _jwt.encode(payload, self._secret, algorithm=_ALGORITHM)

    def verify_token(self, token: str, now: Optional[datetime] = None) -> TokenClaims:
        """
        Return the token's claims, or raise :class:`AuthInvalidError` for a
        bad signature, wrong issuer, missing claim, malformed token, or
        ``now >= exp``.
        """
        if not self._secret:
            raise AuthInvalidError("JWT secret is not configured")
        now = now or datetime.now(timezone.utc)
        try:
            # Expiry is checked below against *now*, not the wall clock
            payload = _jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                issuer=self.issuer,
                options={
                    "require": ["iss", "sub", "iat", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
            subject = int(payload["sub"])
            issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (_jwt.InvalidTokenError, KeyError, TypeError, ValueError, OverflowError) as exc:
            raise AuthInvalidError("Invalid token") from exc

        if now >= expires_at:
            raise AuthInvalidError("Token expired")

        return TokenClaims(
            issuer=payload["iss"],
            subject=subject,
            email=str(payload.get("email", "")),
            issued_at=issued_at,
            expires_at=expires_at,
        )


# ---------------------------------------------------------------------------
# 3.  FastAPI dependency guards
# ---------------------------------------------------------------------------


def get_current_claims(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> TokenClaims:
    """
    Dependency: run the Authorization header through the app's policy.

    Raises AuthInvalidError (→ 401) when the header is missing, malformed,
    or carries an invalid / expired token.
    """
    return request.app.state.policy.authenticate(authorization)
