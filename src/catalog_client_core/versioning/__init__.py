"""API version negotiation.

Example:
    ```python
    from catalog_client_core.versioning import ApiVersion, Exact, ServiceInfo

    info = ServiceInfo(
        root_url="https://compute.example.com/v2.1",
        minimum_version=ApiVersion(2, 1),
        current_version=ApiVersion(2, 79),
    )
    info.pick_api_version(Exact(ApiVersion(2, 35)))  # ApiVersion(2, 35)
    ```
"""

from catalog_client_core.versioning.service import ServiceInfo, ServiceType
from catalog_client_core.versioning.versions import (
    ApiVersion,
    ApiVersionRequest,
    Choice,
    Exact,
    Latest,
    Minimum,
)

__all__ = [
    "ApiVersion",
    "ApiVersionRequest",
    "Choice",
    "Exact",
    "Latest",
    "Minimum",
    "ServiceInfo",
    "ServiceType",
]
