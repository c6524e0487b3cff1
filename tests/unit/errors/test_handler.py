"""Tests for error handling utilities."""

import pytest
from httpx import Response

from catalog_client_core.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
)
from catalog_client_core.errors.handler import raise_for_status


@pytest.mark.unit
def test_raise_for_status_success_response():
    """Test raise_for_status doesn't raise for successful responses."""
    raise_for_status(Response(status_code=200))
    raise_for_status(Response(status_code=202))
    raise_for_status(Response(status_code=204))


@pytest.mark.unit
def test_raise_for_status_400_bad_request():
    """Test raise_for_status raises BadRequestError for 400."""
    response = Response(
        status_code=400,
        headers={"content-type": "text/plain"},
        text="Bad request",
    )

    with pytest.raises(BadRequestError) as exc_info:
        raise_for_status(response)

    assert exc_info.value.status_code == 400
    assert exc_info.value.response == response
    assert "400" in str(exc_info.value)


@pytest.mark.unit
@pytest.mark.parametrize(
    "status_code, exc_class",
    [
        (401, UnauthorizedError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (409, ConflictError),
        (418, ClientError),
        (500, ServerError),
        (503, ServerError),
    ],
)
def test_raise_for_status_maps_status_codes(status_code, exc_class):
    """Test raise_for_status picks the exception class by status code."""
    response = Response(status_code=status_code, text="Failure")

    with pytest.raises(exc_class) as exc_info:
        raise_for_status(response)

    assert type(exc_info.value) is exc_class
    assert exc_info.value.status_code == status_code


@pytest.mark.unit
@pytest.mark.parametrize("status_code", [413, 429])
def test_raise_for_status_over_limit(status_code):
    """Test raise_for_status raises RateLimitError for 413 and 429."""
    response = Response(
        status_code=status_code,
        headers={"retry-after": "60"},
        json={"overLimit": {"message": "Quota exceeded", "code": status_code}},
    )

    with pytest.raises(RateLimitError) as exc_info:
        raise_for_status(response)

    assert exc_info.value.status_code == status_code
    assert exc_info.value.retry_after == 60
    assert "Quota exceeded" in str(exc_info.value)


@pytest.mark.unit
def test_raise_for_status_429_without_retry_after():
    """Test raise_for_status handles 429 without retry-after header."""
    response = Response(status_code=429, text="Too many requests")

    with pytest.raises(RateLimitError) as exc_info:
        raise_for_status(response)

    assert exc_info.value.retry_after is None


@pytest.mark.unit
def test_raise_for_status_429_with_invalid_retry_after():
    """Test raise_for_status ignores a non-integer retry-after header."""
    response = Response(status_code=429, headers={"retry-after": "soon"}, text="Slow down")

    with pytest.raises(RateLimitError) as exc_info:
        raise_for_status(response)

    assert exc_info.value.retry_after is None


@pytest.mark.unit
def test_raise_for_status_unknown_status():
    """Test raise_for_status raises APIError for non-success codes outside 4xx/5xx."""
    response = Response(status_code=302, text="")

    with pytest.raises(APIError) as exc_info:
        raise_for_status(response)

    assert type(exc_info.value) is APIError
    assert str(exc_info.value) == "HTTP 302"


@pytest.mark.unit
def test_raise_for_status_with_fault():
    """Test raise_for_status uses the fault body for the message."""
    response = Response(
        status_code=404,
        json={"itemNotFound": {"message": "Instance abc could not be found.", "code": 404}},
    )

    with pytest.raises(NotFoundError) as exc_info:
        raise_for_status(response)

    assert exc_info.value.fault is not None
    assert exc_info.value.fault.name == "itemNotFound"
    assert "Instance abc could not be found." in str(exc_info.value)


@pytest.mark.unit
def test_raise_for_status_plain_text_error():
    """Test raise_for_status handles plain text errors."""
    response = Response(
        status_code=500,
        headers={"content-type": "text/plain"},
        text="Internal Server Error",
    )

    with pytest.raises(ServerError) as exc_info:
        raise_for_status(response)

    assert exc_info.value.fault is None
    assert "500" in str(exc_info.value)
    assert "Internal Server Error" in str(exc_info.value)
