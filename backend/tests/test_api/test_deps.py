"""Tests for request dependencies: token verification and wiring."""

import asyncio
from unittest.mock import patch

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError, jwt

from teamtasks.api.deps import build_resolver, decode_identity_token, get_identity_claims
from teamtasks.api.resolver import OperationResolver
from teamtasks.core.config import settings
from teamtasks.core.permissions import ALL_OPERATIONS
from tests.mocks.mongodb import create_mock_db


def _credentials(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestDecodeIdentityToken:
    def test_returns_claims(self):
        token = jwt.encode({"sub": "alice", "email": "a@example.com"}, settings.SECRET_KEY, algorithm="HS256")
        assert decode_identity_token(token)["email"] == "a@example.com"

    def test_rejects_wrong_key(self):
        token = jwt.encode({"sub": "alice"}, "wrong", algorithm="HS256")
        with pytest.raises(JWTError):
            decode_identity_token(token)

    def test_checks_audience_when_configured(self):
        token = jwt.encode({"sub": "alice", "aud": "other"}, settings.SECRET_KEY, algorithm="HS256")
        with patch.object(settings, "TOKEN_AUDIENCE", "team-tasks"):
            with pytest.raises(JWTError):
                decode_identity_token(token)


class TestGetIdentityClaims:
    def test_missing_credentials(self):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(get_identity_claims(None))
        assert exc_info.value.status_code == 401

    def test_invalid_token(self):
        with pytest.raises(HTTPException):
            asyncio.run(get_identity_claims(_credentials("not-a-jwt")))

    def test_valid_token(self):
        token = jwt.encode({"username": "alice"}, settings.SECRET_KEY, algorithm="HS256")
        assert asyncio.run(get_identity_claims(_credentials(token))) == {"username": "alice"}


class TestBuildResolver:
    def test_routes_every_operation(self):
        resolver = build_resolver(create_mock_db())

        assert isinstance(resolver, OperationResolver)
        assert sorted(resolver.routes) == sorted(ALL_OPERATIONS)
