# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Chirp endpoints – public reads, authenticated writes, and the stand-alone
body validator.

Security invariants enforced by every mutating handler
------------------------------------------------------
* A valid bearer token is required (via ``get_current_claims``).
* New chirps are authored by the token's subject; the client cannot choose
  the author.
* Update and delete pass the caller's id into the store, which checks
  ownership under the table's write lock.  A non-owner gets 403.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from core.security import TokenClaims, get_current_claims
from database import Database, get_db
from chirps.profanity import clean_body
from chirps.schemas import (
    ChirpBody,
    ChirpListResponse,
    ChirpResponse,
    ValidateChirpResponse,
)
from models.chirp import MAX_CHIRP_LENGTH

router = APIRouter(prefix="/api", tags=["chirps"])


def _checked_body(body: str) -> str:
    """Reject over-long bodies with 400, then mask profanity."""
    if len(body) > MAX_CHIRP_LENGTH:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Chirp too long")
    return clean_body(body)


# ---------------------------------------------------------------------------
# POST /api/validate_chirp
# ---------------------------------------------------------------------------


@router.post("/validate_chirp", response_model=ValidateChirpResponse)
def validate_chirp(body: ChirpBody):
    return ValidateChirpResponse(cleaned_body=_checked_body(body.body))


# ---------------------------------------------------------------------------
# GET /api/chirp  – list
# ---------------------------------------------------------------------------


@router.get("/chirp", response_model=ChirpListResponse)
def list_chirps(
    author_id: Optional[int] = None,
    sort: Literal["asc", "desc"] = Query("asc"),
    db: Database = Depends(get_db),
):
    chirps = sorted(db.list_chirps(author=author_id), key=lambda c: c.id, reverse=(sort == "desc"))
    return ChirpListResponse(chirps=chirps)


# ---------------------------------------------------------------------------
# GET /api/chirp/{id}
# ---------------------------------------------------------------------------


@router.get("/chirp/{chirp_id}", response_model=ChirpResponse)
def get_chirp(chirp_id: int, db: Database = Depends(get_db)):
    return db.get_chirp(chirp_id)


# ---------------------------------------------------------------------------
# POST /api/chirp  – create
# ---------------------------------------------------------------------------


@router.post("/chirp", response_model=ChirpResponse, status_code=status.HTTP_201_CREATED)
def create_chirp(
    body: ChirpBody,
    claims: TokenClaims = Depends(get_current_claims),
    db: Database = Depends(get_db),
):
    return db.create_chirp(_checked_body(body.body), author=claims.subject)


# ---------------------------------------------------------------------------
# PUT /api/chirp/{id}  – replace body (owner only)
# ---------------------------------------------------------------------------


@router.put("/chirp/{chirp_id}", response_model=ChirpResponse)
def update_chirp(
    chirp_id: int,
    body: ChirpBody,
    claims: TokenClaims = Depends(get_current_claims),
    db: Database = Depends(get_db),
):
    return db.update_chirp(chirp_id, _checked_body(body.body), requester_id=claims.subject)


# ---------------------------------------------------------------------------
# DELETE /api/chirp/{id}  (owner only)
# ---------------------------------------------------------------------------


@router.delete("/chirp/{chirp_id}")
def delete_chirp(
    chirp_id: int,
    claims: TokenClaims = Depends(get_current_claims),
    db: Database = Depends(get_db),
):
    db.delete_chirp(chirp_id, requester_id=claims.subject)
    return {"result": "success"}
