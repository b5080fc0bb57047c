# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Polka webhook – flips a user to premium after a successful payment.

Polka authenticates with ``Authorization: ApiKey <key>``; the key is compared
in constant time against Settings.polka_key.  Events other than
``user.upgraded`` are acknowledged and ignored.
"""

import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from core.errors import UnauthenticatedError
from core.logger import logger
from core.policy import parse_bearer
from database import Database, get_db
from webhooks.schemas import PolkaWebhook

router = APIRouter(prefix="/api/polka", tags=["webhooks"])

_UPGRADED = "user.upgraded"


def _require_polka_key(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> None:
    expected = request.app.state.settings.polka_key
    try:
        presented = parse_bearer(authorization, scheme="ApiKey")
    except UnauthenticatedError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    if not expected or not secrets.compare_digest(presented.encode(), expected.encode()):
        logger.warning("polka webhook rejected: bad key")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


@router.post("/webhooks", dependencies=[Depends(_require_polka_key)])
def polka_webhook(body: PolkaWebhook, db: Database = Depends(get_db)):
    if body.event == _UPGRADED:
        user = db.patch_user(body.data.user_id, is_chirpy_premium=True)
        logger.info("user_id=%d upgraded to premium", user.id)
    return body
