"""Fault body models for service error responses."""

import json
from dataclasses import dataclass
from typing import Any

import httpx

REQUEST_ID_HEADERS = ("x-openstack-request-id", "x-compute-request-id")


@dataclass
class FaultDetail:
    """Error body returned by a service.

    Services wrap their errors in a single-key envelope naming the fault,
    e.g. ``{"itemNotFound": {"message": "...", "code": 404}}``. Some services
    return the fields at the top level instead.
    """

    name: str | None = None  # Envelope key, e.g. "itemNotFound"
    message: str | None = None
    code: int | None = None
    details: str | None = None
    request_id: str | None = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "FaultDetail | None":
        """Parse a fault from an HTTP response.

        Args:
            response: HTTP response object

        Returns:
            FaultDetail object or None if the body carries no fault
        """
        request_id = None
        for header in REQUEST_ID_HEADERS:
            if header in response.headers:
                request_id = response.headers[header]
                break

        try:
            data = response.json()
        except (ValueError, TypeError, AttributeError):
            # JSON decode errors, type errors, or missing .json() method
            return None

        if not isinstance(data, dict) or not data:
            return None

        # Single-key envelope
        if len(data) == 1:
            name, body = next(iter(data.items()))
            if isinstance(body, dict) and ("message" in body or "code" in body):
                return cls(
                    name=name,
                    message=body.get("message"),
                    code=_as_int(body.get("code")),
                    details=body.get("details") or body.get("detail"),
                    request_id=request_id,
                )

        # Flat body, possibly with a JSON-encoded error_message
        if "error_message" in data:
            inner = data["error_message"]
            if isinstance(inner, str):
                try:
                    inner = json.loads(inner)
                except ValueError:
                    return cls(message=inner, request_id=request_id)
            if isinstance(inner, dict):
                return cls(
                    message=inner.get("faultstring"),
                    details=inner.get("debuginfo"),
                    request_id=request_id,
                )

        message = data.get("message") or data.get("faultstring")
        if message is None:
            return None

        return cls(
            message=message,
            code=_as_int(data.get("code")),
            details=data.get("details") or data.get("detail"),
            request_id=request_id,
        )

    def to_exception_message(self) -> str:
        """Convert the fault to an exception message."""
        lines = []

        if self.name and self.message:
            lines.append(f"{self.name}: {self.message}")
        elif self.message:
            lines.append(self.message)
        elif self.name:
            lines.append(self.name)

        if self.details and self.details != self.message:
            lines.append(self.details)

        if self.request_id:
            lines.append(f"Request ID: {self.request_id}")

        return "\n".join(lines) if lines else "Unknown API error"


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
