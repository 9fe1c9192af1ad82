"""
Client entry point.

    with PrestashopClient().configure("https://shop.example.com", "/api", key) as shop:
        order = shop.resource("orders").find(12)
"""

from prestaclient.connection import Connection
from prestaclient.resources.facade import Resource
from prestaclient.resources.registry import get_descriptor


class PrestashopClient:
    """Hands out Resource facades bound to one shared connection."""

    def __init__(self, connection: Connection | None = None) -> None:
        self.connection = connection or Connection()

    def configure(
        self,
        base_url: str,
        endpoint_path: str,
        token: str,
        shop_id: int | None = None,
    ) -> "PrestashopClient":
        """Configure the shop to talk to."""
        self.connection.configure(base_url, endpoint_path, token, shop_id)
        return self

    def store(
        self,
        base_url: str,
        endpoint_path: str,
        token: str,
        shop_id: int | None = None,
    ) -> "PrestashopClient":
        """Alias for configure()."""
        return self.configure(base_url, endpoint_path, token, shop_id)

    def resource(self, name: str) -> Resource:
        """
        Start a query on a registered resource.

        Each call returns a fresh facade with empty builder state.

        Raises:
            UnknownResourceError: If the name is not registered
        """
        return Resource(self.connection, get_descriptor(name))

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> "PrestashopClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
