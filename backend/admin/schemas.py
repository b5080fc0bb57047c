# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic response models for the admin endpoints."""

from pydantic import BaseModel


class ResetResponse(BaseModel):
    hits: int
