"""Tests for the fake transport used by the test suite."""

import httpx
import pytest

from catalog_client_core.testing import RecordingTransport, fault_response


@pytest.mark.unit
def test_list_routes_are_consumed_in_order_and_last_repeats():
    transport = RecordingTransport(
        {("GET", "/status"): [httpx.Response(200, text="first"), httpx.Response(200, text="second")]}
    )

    with httpx.Client(transport=transport, base_url="https://example.com") as client:
        texts = [client.get("/status").text for _ in range(3)]

    assert texts == ["first", "second", "second"]
    assert len(transport.calls("GET", "/status")) == 3


@pytest.mark.unit
def test_caller_route_list_is_left_intact():
    responses = [fault_response(503, "computeFault", "busy"), httpx.Response(200, text="ok")]
    routes = {("GET", "/status"): responses}

    first = RecordingTransport(routes)
    with httpx.Client(transport=first, base_url="https://example.com") as client:
        client.get("/status")
        client.get("/status")

    assert len(responses) == 2

    second = RecordingTransport(routes)
    with httpx.Client(transport=second, base_url="https://example.com") as client:
        assert client.get("/status").status_code == 503


@pytest.mark.unit
def test_unrouted_request_is_not_found():
    transport = RecordingTransport()

    with httpx.Client(transport=transport, base_url="https://example.com") as client:
        response = client.get("/missing")

    assert response.status_code == 404
    assert "itemNotFound" in response.json()
