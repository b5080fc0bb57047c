# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the user endpoints."""

from typing import List, Optional

from pydantic import BaseModel


# -- Requests --------------------------------------------------------------


class CreateUserRequest(BaseModel):
    email: str
    password: str
    name: str = ""


class UpdateUserRequest(BaseModel):
    # Only fields that are explicitly provided (non-None) are changed
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


# -- Responses -------------------------------------------------------------


class UserResponse(BaseModel):
    """Public view of a user.  The password hash is never included."""

    id: int
    name: str
    email: str
    is_chirpy_premium: bool

    model_config = {"from_attributes": True}


class UserListResponse(BaseModel):
    users: List[UserResponse]
