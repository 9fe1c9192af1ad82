from unittest.mock import MagicMock

import httpx
import pytest
import respx

from prestaclient import PrestashopClient
from prestaclient.connection import Connection
from prestaclient.errors import UnknownResourceError
from prestaclient.resources import Resource

BASE_URL = "https://shop.example.com"
TOKEN = "WEBSERVICEKEY"


class TestPrestashopClient:
    def test_configure_delegates_to_connection(self) -> None:
        client = PrestashopClient()

        assert client.configure(BASE_URL, "/api", TOKEN, 1) is client
        assert client.connection.config.base_url == BASE_URL
        assert client.connection.config.shop_id == 1

    def test_store_is_alias(self) -> None:
        client = PrestashopClient().store(BASE_URL, "/api", TOKEN)
        assert client.connection.config.token == TOKEN

    def test_resource_is_fresh_each_time(self) -> None:
        client = PrestashopClient()

        first = client.resource("products").where("id", 1)
        second = client.resource("products")

        assert isinstance(second, Resource)
        assert first is not second
        assert second.query.has_filters is False
        assert second.connection is client.connection

    def test_unknown_resource(self) -> None:
        with pytest.raises(UnknownResourceError):
            PrestashopClient().resource("spaceships")

    def test_close_closes_connection(self) -> None:
        connection = MagicMock(spec=Connection)

        with PrestashopClient(connection):
            pass

        connection.close.assert_called_once()

    @respx.mock
    def test_end_to_end_query(self) -> None:
        route = respx.get(f"{BASE_URL}/api/orders").mock(
            return_value=httpx.Response(
                200,
                json={"orders": [{"id": 1, "reference": "A"}, {"id": 2, "reference": "B"}]},
            )
        )

        with PrestashopClient().configure(BASE_URL, "/api", TOKEN) as shop:
            orders = shop.resource("orders").where("current_state", "OR", [2, 3]).get()

        assert [o["reference"] for o in orders] == ["A", "B"]
        assert route.calls.last.request.url.params["filter[current_state]"] == "[2|3]"
