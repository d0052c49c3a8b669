"""Shared fixtures for pagerest tests (no network required)."""

from unittest.mock import AsyncMock

import pytest

from pagerest.client.transport import TransportResponse


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def transport():
    """Transport double whose ``get`` returns an empty list page by default."""
    mock = AsyncMock()
    mock.get = AsyncMock(return_value=TransportResponse(status_code=200, headers={}, body=[]))
    return mock
