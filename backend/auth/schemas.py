# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth endpoints."""

from pydantic import BaseModel


# -- Requests --------------------------------------------------------------


class RegisterRequest(BaseModel):
    email: str
    password: str
    name: str = ""


class LoginRequest(BaseModel):
    email: str
    password: str


# -- Responses -------------------------------------------------------------


class LoginResponse(BaseModel):
    id: int
    email: str
    token: str
    is_chirpy_premium: bool
