# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
from datetime import datetime, timedelta, timezone

import pytest

from core.errors import AuthInvalidError, ForbiddenError, UnauthenticatedError
from core.policy import AuthorizationPolicy, AuthState, ensure_owner, parse_bearer

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer a b", "Bearer "])
def test_missing_or_malformed_header_is_unauthenticated(header):
    with pytest.raises(UnauthenticatedError):
        parse_bearer(header)


def test_parse_bearer_returns_token():
    assert parse_bearer("Bearer abc.def.ghi") == "abc.def.ghi"


def test_authenticate_valid_token(tokens):
    policy = AuthorizationPolicy(tokens)
    token = tokens.issue_token(3, "c@example.com", now=NOW)
    claims = policy.authenticate(f"Bearer {token}", now=NOW)
    assert claims.subject == 3


def test_authenticate_expired_token(tokens):
    policy = AuthorizationPolicy(tokens)
    token = tokens.issue_token(3, "c@example.com", now=NOW)
    with pytest.raises(AuthInvalidError) as info:
        policy.authenticate(f"Bearer {token}", now=NOW + timedelta(hours=25))
    assert not isinstance(info.value, UnauthenticatedError)


def test_authenticate_without_header(tokens):
    with pytest.raises(UnauthenticatedError):
        AuthorizationPolicy(tokens).authenticate(None)


def test_ensure_owner():
    assert ensure_owner(1, 1) is AuthState.ALLOWED
    with pytest.raises(ForbiddenError):
        ensure_owner(2, 1)
    with pytest.raises(ForbiddenError):
        ensure_owner(1, None)


@pytest.mark.parametrize("header", ["Basic abc.def.ghi", "Token abc.def.ghi", "ApiKey abc"])
def test_other_schemes_are_unauthenticated(header):
    with pytest.raises(UnauthenticatedError):
        parse_bearer(header)


def test_scheme_is_case_insensitive():
    assert parse_bearer("bearer abc.def.ghi") == "abc.def.ghi"
    assert parse_bearer("apikey k1", scheme="ApiKey") == "k1"
