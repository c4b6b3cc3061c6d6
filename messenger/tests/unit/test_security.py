# messenger/tests/unit/test_security.py
from datetime import timedelta

import pytest

from messenger.config import AppConfig
from messenger.infrastructure.security import SecurityService


@pytest.fixture
def security_service():
    config = AppConfig(
        SECRET_KEY="test_secret",
        ALGORITHM="HS256",
        REFRESH_SECRET_KEY="test_refresh_secret",
    )
    return SecurityService(config)


def test_password_hashing(security_service):
    password = "testpassword"
    hashed = security_service.get_password_hash(password)
    assert hashed != password
    assert security_service.verify_password(password, hashed)
    assert not security_service.verify_password("wrongpassword", hashed)


def test_token_decoding(security_service):
    access_token, _ = security_service.create_access_token("42")
    refresh_token, _ = security_service.create_refresh_token("42")

    assert security_service.decode_access_token(access_token) == "42"
    assert security_service.decode_refresh_token(refresh_token) == "42"


def test_tokens_are_not_interchangeable(security_service):
    access_token, _ = security_service.create_access_token("42")
    refresh_token, _ = security_service.create_refresh_token("42")

    assert security_service.decode_refresh_token(access_token) is None
    assert security_service.decode_access_token(refresh_token) is None


def test_tokens_issued_together_differ(security_service):
    first, _ = security_service.create_access_token("42")
    second, _ = security_service.create_access_token("42")

    assert first != second


def test_expired_token(security_service):
    token, _ = security_service.create_access_token(
        "42", expires_delta=timedelta(seconds=-1)
    )

    assert security_service.decode_access_token(token) is None


def test_garbage_token(security_service):
    assert security_service.decode_access_token("not-a-token") is None
