"""Pytest configuration and shared fixtures for catalog-client-core tests."""

import httpx
import pytest

from catalog_client_core.config import ClientSettings
from catalog_client_core.testing import RecordingTransport, version_document
from catalog_client_core.transport import Session

COMPUTE_ENDPOINT = "https://compute.example.com/v2.1"


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing settings resolution.
    """
    import os

    test_prefixes = ("TEST_", "CATALOG_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def settings():
    return ClientSettings(
        endpoints={"compute": COMPUTE_ENDPOINT},
        token="test-token",
        poll_interval=0.001,
        wait_timeout=1.0,
    )


@pytest.fixture
def transport():
    """Transport serving a compute root advertising versions 2.1 to 2.79."""
    return RecordingTransport(
        {
            ("GET", "/v2.1"): httpx.Response(
                200, json=version_document("2.79", "2.1", root_url=COMPUTE_ENDPOINT + "/")
            ),
        }
    )


@pytest.fixture
def session(settings, transport):
    with Session(settings, transport=transport) as session:
        yield session
