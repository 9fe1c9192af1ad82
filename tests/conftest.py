import os

import pytest

from prestaclient.connection import Connection
from prestaclient.resources import Resource, get_descriptor

BASE_URL = "https://shop.example.com"
API_URL = f"{BASE_URL}/api"
TOKEN = "WEBSERVICEKEY"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep PRESTASHOP_* variables and any local .env out of the tests."""
    for name in list(os.environ):
        if name.startswith("PRESTASHOP_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def connection():
    conn = Connection().configure(BASE_URL, "/api", TOKEN)
    yield conn
    conn.close()


@pytest.fixture
def products(connection: Connection) -> Resource:
    return Resource(connection, get_descriptor("products"))
