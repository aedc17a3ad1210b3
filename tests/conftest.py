"""Pytest configuration and fixtures for VMT tests."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from vmt.models.outcome import ApiResponse
from vmt.models.vessel import Vessel


@pytest.fixture
def mock_settings():
    """Mock settings for testing without requiring environment variables."""
    settings = MagicMock()
    settings.api_base_url = "http://registry.test"
    settings.request_timeout = 5.0
    settings.search_strategy = "fuzzy_range_or"
    settings.range_span = 2.0
    settings.min_search_name_length = 3
    settings.form_defaults = {"width": 10, "length": 50, "draft": 10}
    settings.allow_concurrent_operations = False
    settings.log_level = "WARNING"
    return settings


@pytest.fixture
def orion():
    """A persisted vessel."""
    return Vessel(uuid="abc123", name="Orion", width=10, length=50, draft=10)


@pytest.fixture
def sample_vessels():
    """Three persisted vessels for listings."""
    return [
        Vessel(uuid="v1", name="Nordic Star", width=32, length=180, draft=11),
        Vessel(uuid="v2", name="Ocean Queen", width=44, length=250, draft=15),
        Vessel(uuid="v3", name="Maran Canopus", width=60, length=330, draft=21),
    ]


@pytest.fixture
def mock_client():
    """Create a mock VesselsClient answering every call with an empty 200."""
    client = MagicMock()
    client.load = AsyncMock(return_value=ApiResponse(status_code=200, body={}))
    client.create = AsyncMock(return_value=ApiResponse(status_code=201))
    client.update = AsyncMock(return_value=ApiResponse(status_code=200))
    client.search = AsyncMock(return_value=ApiResponse(status_code=200, body=[]))
    client.delete = AsyncMock(return_value=ApiResponse(status_code=200))
    client.close = AsyncMock()
    return client


@pytest.fixture
def recorded_requests():
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def make_http_client(recorded_requests):
    """Build an httpx.AsyncClient backed by a MockTransport.

    The handler receives the request and returns an httpx.Response; every
    request is also appended to `recorded_requests`.
    """

    def factory(handler):
        def recording_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        return httpx.AsyncClient(
            base_url="http://registry.test",
            transport=httpx.MockTransport(recording_handler),
        )

    return factory
