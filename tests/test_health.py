"""Tests for the emulator pre-flight check."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from article_review.health import check_emulators


def _settings(endpoint: str) -> SimpleNamespace:
    return SimpleNamespace(cosmos=SimpleNamespace(endpoint=endpoint))


def _client(get: AsyncMock) -> MagicMock:
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    client.get = get
    return client


async def test_missing_endpoint_fails() -> None:
    """Verify an unset endpoint fails the check."""
    assert await check_emulators(_settings("")) is False


async def test_https_endpoint_is_not_probed() -> None:
    """Verify cloud endpoints are trusted without a probe."""
    with patch("article_review.health.httpx.AsyncClient") as client_cls:
        assert await check_emulators(_settings("https://acct.documents.azure.com")) is True
    client_cls.assert_not_called()


async def test_reachable_emulator_passes() -> None:
    """Verify a reachable emulator passes."""
    get = AsyncMock()
    with patch("article_review.health.httpx.AsyncClient", return_value=_client(get)):
        assert await check_emulators(_settings("http://localhost:8081")) is True
    get.assert_awaited_once_with("http://localhost:8081/")


async def test_unreachable_emulator_fails() -> None:
    """Verify connection errors fail the check."""
    get = AsyncMock(side_effect=httpx.ConnectError("refused"))
    with patch("article_review.health.httpx.AsyncClient", return_value=_client(get)):
        assert await check_emulators(_settings("http://localhost:8081")) is False
