# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Shared fixtures: isolated settings, store, token service and app client."""

from functools import partial

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.security import TokenService, hash_password
from database import Database
from main import create_app

SECRET = "test-secret-that-is-long-enough-for-hs256-keys"
POLKA_KEY = "f271c81ff7084ee5b99a5091b42d486e"
# Low work factor keeps the suite fast; production uses 600 000
ROUNDS = 1000


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        data_dir=tmp_path / "data",
        jwt_secret=SECRET,
        polka_key=POLKA_KEY,
        password_hash_rounds=ROUNDS,
        static_dir=tmp_path / "static",
        log_file=tmp_path / "log" / "app.log",
    )


@pytest.fixture
def db(settings):
    database = Database(
        settings.chirps_path,
        settings.users_path,
        password_hasher=partial(hash_password, rounds=ROUNDS),
    )
    database.load()
    return database


@pytest.fixture
def tokens():
    return TokenService(SECRET)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


def register_and_login(client, email, password="secret1"):
    """Register *email* and return ``(user_id, auth_headers)``."""
    r = client.post("/api/register", json={"email": email, "password": password})
    assert r.status_code == 201, r.text
    r = client.post("/api/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    body = r.json()
    return body["id"], {"Authorization": f"Bearer {body['token']}"}
