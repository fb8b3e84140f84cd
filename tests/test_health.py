# tests/test_health.py
"""Tests for the health, root and error-mapping behaviour of the app."""

import asyncio

import pytest
from fastapi import status

from linkboard.core.errors import ConfigurationError
from linkboard.core.settings import settings
from linkboard.main import on_startup


def test_health_check(client) -> None:
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root_endpoint(client) -> None:
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["name"] == "Linkboard API"
    assert body["docs"] == "/docs"


def test_domain_errors_map_to_status_and_detail(client) -> None:
    response = client.get("/api/v1/posts/9999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Post not found"}


def test_startup_fails_without_signing_secret(monkeypatch) -> None:
    monkeypatch.setattr(settings, "refresh_token_secret", None)
    with pytest.raises(ConfigurationError, match="REFRESH_TOKEN_SECRET"):
        asyncio.run(on_startup())
