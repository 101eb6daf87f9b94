"""
Tests del servicio de tokens (PyJWT, 7 días).
"""
import time
from datetime import datetime, timedelta, timezone

import pytest

from hdnotes.core.config import settings
from hdnotes.core.exceptions import DependencyError, InvalidTokenError
from hdnotes.services import token_service


def test_issued_token_verifies_to_user_id():
    token = token_service.issue_token("65f000000000000000000001")
    assert token_service.verify_token(token) == "65f000000000000000000001"


def test_token_valid_just_before_seven_days():
    issued = datetime.now(timezone.utc) - timedelta(days=7) + timedelta(minutes=1)
    token = token_service.issue_token("u1", now=issued)
    assert token_service.verify_token(token) == "u1"


def test_token_rejected_at_expiry():
    # exp coincide con el segundo actual: ya no es válido
    issued = datetime.fromtimestamp(int(time.time()), timezone.utc) - timedelta(days=7)
    token = token_service.issue_token("u1", now=issued)
    with pytest.raises(InvalidTokenError):
        token_service.verify_token(token)


def test_token_rejected_after_seven_days():
    issued = datetime.now(timezone.utc) - timedelta(days=7, seconds=5)
    token = token_service.issue_token("u1", now=issued)
    with pytest.raises(InvalidTokenError):
        token_service.verify_token(token)


def test_token_rejected_with_different_secret(monkeypatch):
    token = token_service.issue_token("u1")
    monkeypatch.setattr(settings, "jwt_secret", "another-secret-not-real-0123456789abcdef")
    with pytest.raises(InvalidTokenError):
        token_service.verify_token(token)


def test_malformed_token_rejected():
    with pytest.raises(InvalidTokenError):
        token_service.verify_token("not.a.jwt")


def test_missing_secret_is_dependency_error(monkeypatch):
    monkeypatch.setattr(settings, "jwt_secret", None)
    with pytest.raises(DependencyError):
        token_service.issue_token("u1")
