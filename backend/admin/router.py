# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Admin / ops endpoints – readiness probe and the /app hit counter.

The counter lives on ``app.state.hits`` and is incremented by the request
middleware in ``main.py`` for every request under /app.
"""

import threading

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from admin.schemas import ResetResponse
from core.logger import logger

router = APIRouter(tags=["admin"])


class HitCounter:
    """Thread-safe integer counter."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> None:
        with self._lock:
            self._value += 1

    def reset(self) -> None:
        with self._lock:
            self._value = 0


_METRICS_PAGE = """<html>
<body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
</body>
</html>"""


@router.get("/api/healthz", response_class=PlainTextResponse)
def healthz():
    return "OK"


@router.get("/admin/metrics", response_class=HTMLResponse)
def metrics(request: Request):
    return _METRICS_PAGE.format(hits=request.app.state.hits.value)


@router.post("/api/reset", response_model=ResetResponse)
def reset(request: Request):
    request.app.state.hits.reset()
    logger.info("hit counter reset")
    return ResetResponse(hits=0)
