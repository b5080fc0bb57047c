# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
FastAPI application factory.

Responsibilities
----------------
* Build Settings, the TokenService, the AuthorizationPolicy and the
  Database exactly once, and hang them on ``app.state``.
* Load both tables from disk.  Corrupt data aborts startup.
* Register CORS and request-logging middleware.
* Translate core errors into HTTP status codes (the only place that does).
* Mount the feature routers and the /app static files.

Run with:
    uvicorn main:create_app --factory --app-dir backend --port 8080
"""

import time
from functools import partial
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware

from admin.router import HitCounter, router as admin_router
from auth.router import router as auth_router
from chirps.router import router as chirps_router
from users.router import router as users_router
from webhooks.router import router as webhooks_router
from core.config import Settings
from core.errors import (
    AuthInvalidError,
    ChirpyError,
    ConflictError,
    ForbiddenError,
    InvalidRecordError,
    NotFoundError,
    PersistenceError,
    TokenConfigError,
)
from core.logger import logger, setup_logging
from core.policy import AuthorizationPolicy
from core.security import TokenService, hash_password
from database import Database

# Most specific class first; the first isinstance match wins.
_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ConflictError, 409),
    (ForbiddenError, 403),
    (InvalidRecordError, 400),
    (AuthInvalidError, 401),
    (PersistenceError, 500),
    (TokenConfigError, 500),
)


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Logs every inbound request: method, path, client IP, status, latency.
# Request bodies are never echoed, so passwords and tokens stay out of logs.
# Also counts hits on the static /app mount for /admin/metrics.


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path == "/app" or path.startswith("/app/"):
            request.app.state.hits.increment()

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            client_ip,
            response.status_code,
            elapsed_ms,
        )
        return response


async def _chirpy_error_handler(request: Request, exc: ChirpyError) -> JSONResponse:
    code = next((c for cls, c in _STATUS_BY_ERROR if isinstance(exc, cls)), 500)
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        detail = "Internal server error"
    else:
        detail = str(exc)
    return JSONResponse(status_code=code, content={"detail": detail})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.log_file)

    tokens = TokenService(settings.jwt_secret, issuer=settings.token_issuer)
    hasher = partial(hash_password, rounds=settings.password_hash_rounds)
    db = Database(
        settings.chirps_path,
        settings.users_path,
        password_hasher=hasher,
        enforce_ownership=settings.enforce_chirp_ownership,
    )
    # FormatError propagates: the service must not start on corrupt data
    db.load()

    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set – login will fail until it is configured")

    app = FastAPI(title="Chirpy", version="1.0.0")
    app.state.settings = settings
    app.state.db = db
    app.state.tokens = tokens
    app.state.policy = AuthorizationPolicy(tokens)
    app.state.hits = HitCounter()
    # Same cost as real hashes so unknown-email logins take as long as bad passwords
    app.state.decoy_hash = hasher("decoy-password-for-timing")

    # -----------------------------------------------------------------------
    # CORS
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )
    app.add_middleware(_RequestLogMiddleware)

    app.add_exception_handler(ChirpyError, _chirpy_error_handler)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    app.include_router(admin_router)
    app.include_router(auth_router)
    app.include_router(chirps_router)
    app.include_router(users_router)
    app.include_router(webhooks_router)

    # -----------------------------------------------------------------------
    # Static files – /app
    # -----------------------------------------------------------------------
    if settings.static_dir.is_dir():
        app.mount("/app", StaticFiles(directory=str(settings.static_dir), html=True), name="app")

    logger.info("Chirpy service ready (data_dir=%s)", settings.data_dir)
    return app
