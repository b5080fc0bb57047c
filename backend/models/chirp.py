# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Chirp record as it lives in memory and on disk."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_CHIRP_LENGTH = 140


class Chirp(BaseModel):
    # Strict + forbid: a stored file with an unexpected field or type is
    # corrupt, not something to coerce.  Frozen: updates replace the record.
    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    id: int
    body: str = Field(max_length=MAX_CHIRP_LENGTH)
    author: Optional[int] = None  # user id of the creator
