# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – registration and login.

Security notes
--------------
* Login returns the *same* error message whether the email doesn't exist or
  the password is wrong.  This prevents user-enumeration attacks.
* For an unknown email the password is still checked against a decoy hash
  of the same cost, so both failure paths take about as long.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from core.errors import NotFoundError
from core.logger import logger
from core.security import verify_password
from database import Database, get_db
from auth.schemas import LoginRequest, LoginResponse, RegisterRequest
from users.schemas import UserResponse

router = APIRouter(prefix="/api", tags=["auth"])

# Generic message used for both "no such email" and "wrong password"
_LOGIN_FAIL = "Invalid email or password"


# ---------------------------------------------------------------------------
# POST /api/register
# ---------------------------------------------------------------------------


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Database = Depends(get_db)):
    """Create an account.  409 if the email is already registered."""
    return db.create_user(body.email, body.password, name=body.name)


# ---------------------------------------------------------------------------
# POST /api/login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, request: Request, db: Database = Depends(get_db)):
    """Authenticate and return a signed JWT."""
    try:
        user = db.get_user_by_email(body.email)
    except NotFoundError:
        verify_password(body.password, request.app.state.decoy_hash)
        logger.info("login failed: unknown email")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=_LOGIN_FAIL)

    if not verify_password(body.password, user.password_hash):
        logger.info("login failed: bad password for user_id=%d", user.id)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=_LOGIN_FAIL)

    token = request.app.state.tokens.issue_token(user.id, user.email)
    logger.info("user_id=%d logged in", user.id)
    return LoginResponse(
        id=user.id,
        email=user.email,
        token=token,
        is_chirpy_premium=user.is_chirpy_premium,
    )
