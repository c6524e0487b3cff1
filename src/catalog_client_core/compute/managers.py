"""Managers for servers, flavors and key pairs of the Compute service."""

import logging
from typing import Any

from catalog_client_core.client import ResourceManager
from catalog_client_core.resources.lookup import exactly_one, get_by_id_or_name
from catalog_client_core.resources.pagination import ResourceIterator, marker_fetch
from catalog_client_core.resources.waiter import DeletionWaiter
from catalog_client_core.versioning.service import ServiceType
from catalog_client_core.versioning.versions import ApiVersion

logger = logging.getLogger(__name__)

COMPUTE = ServiceType("compute", major_version=2, version_header="X-OpenStack-Nova-API-Version")

API_VERSION_KEYPAIR_TYPE = ApiVersion(2, 2)
API_VERSION_SERVER_DESCRIPTION = ApiVersion(2, 19)
API_VERSION_KEYPAIR_PAGINATION = ApiVersion(2, 35)
API_VERSION_FLAVOR_DESCRIPTION = ApiVersion(2, 55)
API_VERSION_FLAVOR_EXTRA_SPECS = ApiVersion(2, 61)

Resource = dict[str, Any]


class ServerManager(ResourceManager):
    """Servers.

    Example:
        ```python
        servers = ServerManager(session)
        server = servers.get("web-1")
        servers.delete(server["id"]).wait()
        ```
    """

    service = COMPUTE

    def list(self, limit: int | None = None, **filters: Any) -> ResourceIterator[Resource]:
        """Lazily list servers with details."""
        version = self._best_version(API_VERSION_SERVER_DESCRIPTION)
        return self._paginate(["servers", "detail"], "servers", params=filters, limit=limit, api_version=version)

    def get(self, id_or_name: str) -> Resource:
        return get_by_id_or_name(id_or_name, self.get_by_id, self.get_by_name)

    def get_by_id(self, server_id: str) -> Resource:
        version = self._best_version(API_VERSION_SERVER_DESCRIPTION)
        server = self.session.get_json(self.service, ["servers", server_id], api_version=version)["server"]
        logger.debug(f"Received server {server_id}")
        return server

    def get_by_name(self, name: str) -> Resource:
        # The name filter is a regular expression, so also match exactly here
        servers = self._paginate(["servers"], "servers", params={"name": name})
        items = (item for item in servers if item["name"] == name)
        item = exactly_one(items, "Server with given name or ID not found", "Too many servers found with given name")
        return self.get_by_id(item["id"])

    def create(self, **body: Any) -> Resource:
        """Request creation of a server; returns the reference with its ID."""
        logger.debug(f"Creating a server with {body}")
        server = self.session.post_json(self.service, ["servers"], {"server": body})["server"]
        logger.debug(f"Requested creation of server {server.get('id')}")
        return server

    def delete(self, server_id: str) -> DeletionWaiter:
        """Request deletion of a server.

        Returns:
            Waiter confirming the deletion; call ``wait()`` to block until the
            server is gone. Deletion continues on the server side either way.
        """
        self.session.delete(self.service, ["servers", server_id])
        logger.debug(f"Successfully requested deletion of server {server_id}")
        return self._deletion_waiter(lambda: self.get_by_id(server_id), f"server {server_id}")

    def action(self, server_id: str, action: str, args: Any = None) -> None:
        """Run a server action such as ``reboot`` or ``os-start``."""
        logger.debug(f"Running {action} on server {server_id} with args {args}")
        self.session.request(self.service, "POST", ["servers", server_id, "action"], json={action: args})
        logger.debug(f"Successfully ran {action} on server {server_id}")


class FlavorManager(ResourceManager):
    """Flavors."""

    service = COMPUTE

    def _version(self) -> ApiVersion | None:
        return self._best_version(API_VERSION_FLAVOR_DESCRIPTION, API_VERSION_FLAVOR_EXTRA_SPECS)

    def list(self, limit: int | None = None, **filters: Any) -> ResourceIterator[Resource]:
        """Lazily list flavors with details.

        Only API version 2.61 is requested here; older services get no
        version header.
        """
        version = self._best_version(API_VERSION_FLAVOR_EXTRA_SPECS)
        return self._paginate(["flavors", "detail"], "flavors", params=filters, limit=limit, api_version=version)

    def get(self, id_or_name: str) -> Resource:
        return get_by_id_or_name(id_or_name, self.get_by_id, self.get_by_name)

    def get_by_id(self, flavor_id: str) -> Resource:
        return self.session.get_json(self.service, ["flavors", flavor_id], api_version=self._version())["flavor"]

    def get_by_name(self, name: str) -> Resource:
        items = (item for item in self._paginate(["flavors"], "flavors") if item["name"] == name)
        item = exactly_one(items, "Flavor with given name or ID not found", "Too many flavors found with given name")
        return self.get_by_id(item["id"])

    def extra_specs(self, flavor_id: str) -> dict[str, str]:
        return self.session.get_json(self.service, ["flavors", flavor_id, "os-extra_specs"])["extra_specs"]


class KeyPairManager(ResourceManager):
    """Key pairs, identified by name."""

    service = COMPUTE

    def list(self, limit: int | None = None) -> ResourceIterator[Resource]:
        """Lazily list key pairs.

        Pagination needs API version 2.35; older services return everything
        in one page.
        """
        version = self._best_version(API_VERSION_KEYPAIR_TYPE, API_VERSION_KEYPAIR_PAGINATION)
        if version is None or version < API_VERSION_KEYPAIR_PAGINATION:
            limit = None
        elif limit is None:
            limit = self.session.settings.page_size

        def list_items(query: dict[str, str]) -> list[Resource]:
            items = self.session.get_json(self.service, ["os-keypairs"], params=query, api_version=version)
            return [item["keypair"] for item in items["keypairs"]]

        return ResourceIterator(marker_fetch(list_items, limit=limit, marker_of=lambda keypair: keypair["name"]))

    def get(self, name: str) -> Resource:
        version = self._best_version(API_VERSION_KEYPAIR_TYPE)
        return self.session.get_json(self.service, ["os-keypairs", name], api_version=version)["keypair"]

    def create(self, name: str, public_key: str | None = None, key_type: str | None = None) -> Resource:
        """Create or import a key pair.

        Raises:
            VersionMismatchError: If ``key_type`` is given and the service
                does not support API version 2.2.
        """
        version = self._require_version(API_VERSION_KEYPAIR_TYPE) if key_type is not None else None
        body: dict[str, Any] = {"name": name}
        if public_key is not None:
            body["public_key"] = public_key
        if key_type is not None:
            body["type"] = key_type

        logger.debug(f"Creating key pair {name}")
        keypair = self.session.post_json(self.service, ["os-keypairs"], {"keypair": body}, api_version=version)
        return keypair["keypair"]

    def delete(self, name: str) -> None:
        self.session.delete(self.service, ["os-keypairs", name])
        logger.debug(f"Key pair {name} was deleted")
