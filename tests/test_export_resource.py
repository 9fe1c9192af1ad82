import json
from unittest.mock import MagicMock

import httpx
import pytest
import respx

from prestaclient.connection import Connection
from prestaclient.jobs.export_resource import apply_filter, apply_sort, build_parser, main
from prestaclient.resources import Resource, get_descriptor

BASE_URL = "https://shop.example.com"


@pytest.fixture
def resource() -> Resource:
    return Resource(MagicMock(spec=Connection), get_descriptor("products"))


class TestApplyFilter:
    @pytest.mark.parametrize(
        ("expression", "key", "expected"),
        [
            ("active=1", "filter[active]", "[1]"),
            ("name:BEGIN:Shirt", "filter[name]", "[Shirt]%"),
            ("name:contains:irt", "filter[name]", "%[irt]%"),
            ("id:OR:1,2,3", "filter[id]", "[1|2|3]"),
            ("price:INTERVAL:10,20", "filter[price]", "[10,20]"),
            ("id_category:INNER:3", "id_category", "3"),
        ],
    )
    def test_expressions(
        self, resource: Resource, expression: str, key: str, expected: str
    ) -> None:
        apply_filter(resource, expression)
        assert resource.query.serialize()[key] == expected

    @pytest.mark.parametrize("expression", ["active", "name:BEGIN", ":BEGIN:x"])
    def test_invalid_expression(self, resource: Resource, expression: str) -> None:
        with pytest.raises(ValueError):
            apply_filter(resource, expression)

    def test_sort(self, resource: Resource) -> None:
        apply_sort(resource, "price:desc")
        apply_sort(resource, "name")

        assert resource.query.serialize()["sort"] == "[price_DESC,name_ASC]"


class TestMain:
    def test_parser_defaults(self) -> None:
        args = build_parser().parse_args(["products"])

        assert args.filter == []
        assert args.sort == []
        assert args.limit is None

    @respx.mock
    def test_exports_json(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("PRESTASHOP_SHOP_URL", BASE_URL)
        monkeypatch.setenv("PRESTASHOP_TOKEN", "KEY")
        route = respx.get(f"{BASE_URL}/api/products").mock(
            return_value=httpx.Response(
                200, json={"products": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]}
            )
        )

        code = main(
            ["products", "--display", "id,name", "--filter", "active=1", "--limit", "2"]
        )

        assert code == 0
        assert json.loads(capsys.readouterr().out) == [
            {"id": 1, "name": "A"},
            {"id": 2, "name": "B"},
        ]
        assert dict(route.calls.last.request.url.params) == {
            "display": "[id,name]",
            "limit": "2",
            "filter[active]": "[1]",
        }

    def test_offset_requires_limit(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["products", "--offset", "20"])

        assert exc_info.value.code == 2
        assert "--offset requires --limit" in capsys.readouterr().err

    def test_missing_configuration_fails(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["products"]) == 1
        assert capsys.readouterr().out == ""

    def test_unknown_resource_fails(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRESTASHOP_SHOP_URL", BASE_URL)
        monkeypatch.setenv("PRESTASHOP_TOKEN", "KEY")

        assert main(["spaceships"]) == 1

    def test_bad_filter_fails(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRESTASHOP_SHOP_URL", BASE_URL)
        monkeypatch.setenv("PRESTASHOP_TOKEN", "KEY")

        assert main(["products", "--filter", "broken"]) == 1
