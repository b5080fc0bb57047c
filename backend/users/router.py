# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
User endpoints.  All of them require a valid bearer token; responses never
carry password hashes.
"""

from fastapi import APIRouter, Depends, Request, status

from core.security import TokenClaims, get_current_claims, hash_password
from database import Database, get_db
from users.schemas import (
    CreateUserRequest,
    UpdateUserRequest,
    UserListResponse,
    UserResponse,
)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UserListResponse)
def list_users(
    _claims: TokenClaims = Depends(get_current_claims),
    db: Database = Depends(get_db),
):
    return UserListResponse(users=db.list_users())


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: CreateUserRequest,
    _claims: TokenClaims = Depends(get_current_claims),
    db: Database = Depends(get_db),
):
    return db.create_user(body.email, body.password, name=body.name)


@router.put("", response_model=UserResponse)
def update_me(
    body: UpdateUserRequest,
    request: Request,
    claims: TokenClaims = Depends(get_current_claims),
    db: Database = Depends(get_db),
):
    """
    Update the caller's own profile.  Only fields that are explicitly
    provided are changed; a new password is re-hashed.
    """
    changes = {}
    if body.email is not None:
        changes["email"] = body.email
    if body.name is not None:
        changes["name"] = body.name
    if body.password is not None:
        changes["password_hash"] = hash_password(
            body.password, request.app.state.settings.password_hash_rounds
        )

    return db.patch_user(claims.subject, **changes)
