"""API versions and the policies used to request one.

A version request is one of four closed shapes:

- ``Minimum()``: the lowest version the service advertises
- ``Latest()``: the current version the service advertises
- ``Exact(version)``: this version or nothing
- ``Choice(versions)``: one of the candidates, see
  :meth:`~catalog_client_core.versioning.service.ServiceInfo.pick_api_version`

Example:
    ```python
    from catalog_client_core.versioning import ApiVersion, Choice

    request = Choice([ApiVersion(2, 2), ApiVersion(2, 35)])
    ```
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

_VERSION_RE = re.compile(r"^v?(\d+)(?:\.(\d+))?$")


@dataclass(frozen=True, order=True)
class ApiVersion:
    """API version as a (major, minor) pair, ordered lexicographically."""

    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    @classmethod
    def parse(cls, text: str) -> "ApiVersion":
        """Parse ``"2.1"``, ``"v2.1"`` or a bare major such as ``"v2"``.

        Raises:
            ValueError: If the text is not a version.
        """
        match = _VERSION_RE.match(text.strip())
        if match is None:
            raise ValueError(f"Invalid API version: {text!r}")
        major, minor = match.groups()
        return cls(int(major), int(minor or 0))


@dataclass(frozen=True)
class Minimum:
    """Request the minimum version advertised by the service."""


@dataclass(frozen=True)
class Latest:
    """Request the current version advertised by the service."""


@dataclass(frozen=True)
class Exact:
    """Request exactly this version."""

    version: ApiVersion


@dataclass(frozen=True, init=False)
class Choice:
    """Request one of several candidate versions."""

    versions: tuple[ApiVersion, ...]

    def __init__(self, versions: Iterable[ApiVersion]):
        object.__setattr__(self, "versions", tuple(versions))


ApiVersionRequest = Minimum | Latest | Exact | Choice
