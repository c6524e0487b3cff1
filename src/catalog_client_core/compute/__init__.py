"""Compute service managers.

Example:
    ```python
    from catalog_client_core.compute import ServerManager
    from catalog_client_core.transport import Session

    session = Session(settings)
    servers = ServerManager(session)
    server = servers.get("8a1c355b-2e1e-440a-8aa8-f272df72bc32")
    ```
"""

from catalog_client_core.compute.managers import (
    API_VERSION_FLAVOR_DESCRIPTION,
    API_VERSION_FLAVOR_EXTRA_SPECS,
    API_VERSION_KEYPAIR_PAGINATION,
    API_VERSION_KEYPAIR_TYPE,
    API_VERSION_SERVER_DESCRIPTION,
    COMPUTE,
    FlavorManager,
    KeyPairManager,
    ServerManager,
)

__all__ = [
    "API_VERSION_FLAVOR_DESCRIPTION",
    "API_VERSION_FLAVOR_EXTRA_SPECS",
    "API_VERSION_KEYPAIR_PAGINATION",
    "API_VERSION_KEYPAIR_TYPE",
    "API_VERSION_SERVER_DESCRIPTION",
    "COMPUTE",
    "FlavorManager",
    "KeyPairManager",
    "ServerManager",
]
