# tests/services/test_tokens.py
"""Tests for issuing and verifying access and refresh tokens."""

from datetime import timedelta

import pytest
from jose import jwt

from linkboard.core.errors import AuthenticationError, ConfigurationError
from linkboard.db.time import utcnow
from linkboard.services.tokens import TokenCodec


def test_access_token_round_trips_subject(codec) -> None:
    issued = codec.issue_access(42)
    assert codec.verify_access(issued.token) == 42


def test_refresh_token_round_trips_subject(codec) -> None:
    issued = codec.issue_refresh(7)
    assert codec.verify_refresh(issued.token) == 7


def test_expiry_follows_configured_lifetimes(codec, test_settings) -> None:
    before = utcnow()
    access = codec.issue_access(1)
    refresh = codec.issue_refresh(1)

    expected_access = timedelta(minutes=test_settings.access_token_expire_minutes)
    expected_refresh = timedelta(days=test_settings.refresh_token_expire_days)
    assert before + expected_access <= access.expires_at <= utcnow() + expected_access
    assert before + expected_refresh <= refresh.expires_at <= utcnow() + expected_refresh


def test_tokens_for_same_subject_are_distinct(codec) -> None:
    """Two refresh tokens issued back to back must not collide in the session store."""
    assert codec.issue_refresh(1).token != codec.issue_refresh(1).token


def test_claims_carry_type_and_string_subject(codec, test_settings) -> None:
    token = codec.issue_access(5).token
    claims = jwt.decode(
        token,
        test_settings.access_token_secret,
        algorithms=[test_settings.jwt_algorithm],
    )
    assert claims["sub"] == "5"
    assert claims["type"] == "access"
    assert "jti" in claims


class TestCrossKindRejection:
    """A token of one kind never verifies as the other."""

    def test_refresh_token_rejected_as_access(self, codec) -> None:
        token = codec.issue_refresh(1).token
        with pytest.raises(AuthenticationError, match="Invalid access token"):
            codec.verify_access(token)

    def test_access_token_rejected_as_refresh(self, codec) -> None:
        token = codec.issue_access(1).token
        with pytest.raises(AuthenticationError, match="Invalid refresh token"):
            codec.verify_refresh(token)

    def test_type_claim_checked_when_secrets_are_shared(self, test_settings) -> None:
        shared = test_settings.model_copy(
            update={"access_token_secret": "same", "refresh_token_secret": "same"}
        )
        codec = TokenCodec(shared)
        with pytest.raises(AuthenticationError):
            codec.verify_access(codec.issue_refresh(1).token)


class TestInvalidTokens:
    def test_expired_access_token(self, test_settings) -> None:
        codec = TokenCodec(test_settings.model_copy(update={"access_token_expire_minutes": -1}))
        token = codec.issue_access(1).token
        with pytest.raises(AuthenticationError, match="Access token has expired"):
            codec.verify_access(token)

    def test_expired_refresh_token(self, test_settings) -> None:
        codec = TokenCodec(test_settings.model_copy(update={"refresh_token_expire_days": -1}))
        token = codec.issue_refresh(1).token
        with pytest.raises(AuthenticationError, match="Refresh token has expired"):
            codec.verify_refresh(token)

    def test_garbage_token(self, codec) -> None:
        with pytest.raises(AuthenticationError):
            codec.verify_access("not-a-jwt")

    def test_token_signed_with_other_secret(self, codec, test_settings) -> None:
        forged = jwt.encode(
            {"sub": "1", "type": "access", "exp": utcnow() + timedelta(minutes=5)},
            "some-other-secret",
            algorithm=test_settings.jwt_algorithm,
        )
        with pytest.raises(AuthenticationError):
            codec.verify_access(forged)

    def test_non_numeric_subject(self, codec, test_settings) -> None:
        token = jwt.encode(
            {"sub": "alice", "type": "access", "exp": utcnow() + timedelta(minutes=5)},
            test_settings.access_token_secret,
            algorithm=test_settings.jwt_algorithm,
        )
        with pytest.raises(AuthenticationError, match="Invalid access token"):
            codec.verify_access(token)


class TestMissingSecrets:
    def test_issue_without_access_secret(self, test_settings) -> None:
        codec = TokenCodec(test_settings.model_copy(update={"access_token_secret": None}))
        with pytest.raises(ConfigurationError, match="ACCESS_TOKEN_SECRET"):
            codec.issue_access(1)

    def test_ensure_configured_names_missing_refresh_secret(self, test_settings) -> None:
        codec = TokenCodec(test_settings.model_copy(update={"refresh_token_secret": ""}))
        with pytest.raises(ConfigurationError, match="REFRESH_TOKEN_SECRET"):
            codec.ensure_configured()

    def test_ensure_configured_passes_with_both_secrets(self, codec) -> None:
        codec.ensure_configured()
