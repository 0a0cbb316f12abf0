"""Shared fixtures for article review tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def articles_repo() -> AsyncMock:
    """Article repository whose writes echo the document back."""
    repo = AsyncMock()
    repo.create.side_effect = lambda doc: doc
    repo.update.side_effect = lambda doc: doc
    return repo


@pytest.fixture
def revisions_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = lambda doc: doc
    return repo


@pytest.fixture
def users_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get.return_value = None
    return repo


@pytest.fixture
def mock_database() -> MagicMock:
    """Cosmos database proxy whose containers are async mocks."""
    database = MagicMock()
    database.get_container_client.return_value = AsyncMock()
    return database
