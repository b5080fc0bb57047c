# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""User record as it lives in memory and on disk."""

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    id: int
    name: str = ""
    email: str
    # pbkdf2_sha256 hash string; the salt is embedded (passlib convention).
    # The plaintext password is never assigned to a User.
    password_hash: str
    is_chirpy_premium: bool = False
