# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the chirp endpoints."""

from typing import List, Optional

from pydantic import BaseModel


# -- Requests --------------------------------------------------------------


class ChirpBody(BaseModel):
    # Length is checked by the router so it can answer "Chirp too long"
    body: str


# -- Responses -------------------------------------------------------------


class ChirpResponse(BaseModel):
    id: int
    body: str
    author: Optional[int] = None

    model_config = {"from_attributes": True}


class ChirpListResponse(BaseModel):
    chirps: List[ChirpResponse]


class ValidateChirpResponse(BaseModel):
    cleaned_body: str
