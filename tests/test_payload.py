from xml.etree.ElementTree import fromstring

from prestaclient.payload import to_xml


class TestToXml:
    def test_root_and_fields(self) -> None:
        root = fromstring(to_xml("product", {"name": "Shirt", "price": 19.9}))

        assert root.tag == "product"
        assert root.find("name").text == "Shirt"
        assert root.find("price").text == "19.9"

    def test_declaration_and_encoding(self) -> None:
        document = to_xml("product", {"name": "Café"})

        assert document.startswith(b"<?xml")
        assert "Café".encode() in document

    def test_id_comes_first(self) -> None:
        root = fromstring(to_xml("product", {"name": "Shirt", "id": 7}))

        assert [child.tag for child in root] == ["id", "name"]

    def test_missing_id_is_omitted(self) -> None:
        root = fromstring(to_xml("product", {"id": None, "name": "Shirt"}))

        assert root.find("id") is None

    def test_none_and_booleans(self) -> None:
        root = fromstring(to_xml("product", {"reference": None, "active": True, "on_sale": False}))

        assert root.find("reference").text is None
        assert root.find("active").text == "1"
        assert root.find("on_sale").text == "0"

    def test_special_characters_are_escaped(self) -> None:
        root = fromstring(to_xml("product", {"name": "Salt & <Pepper>"}))

        assert root.find("name").text == "Salt & <Pepper>"

    def test_language_values(self) -> None:
        fields = {"name": [{"id": "1", "value": "Shirt"}, {"id": "2", "value": "Chemise"}]}

        languages = fromstring(to_xml("product", fields)).find("name").findall("language")

        assert [(lang.get("id"), lang.text) for lang in languages] == [
            ("1", "Shirt"),
            ("2", "Chemise"),
        ]

    def test_nested_mapping(self) -> None:
        fields = {"associations": {"categories": {"category": {"id": 3}}}}

        root = fromstring(to_xml("product", fields))

        assert root.find("associations/categories/category/id").text == "3"

    def test_fillable_restricts_fields(self) -> None:
        fields = {"id": 4, "id_carrier": 2, "delimiter1": 0, "delimiter2": 10, "extra": "x"}

        root = fromstring(
            to_xml("price_range", fields, ("id_carrier", "delimiter1", "delimiter2"))
        )

        assert [child.tag for child in root] == ["id", "id_carrier", "delimiter1", "delimiter2"]

    def test_list_of_mappings(self) -> None:
        fields = {"id": 1, "associations": {"categories": [{"id": "2"}, {"id": "3"}]}}

        root = fromstring(to_xml("product", fields))

        categories = root.find("associations/categories")
        assert [child.tag for child in categories] == ["category", "category"]
        assert [c.find("id").text for c in categories] == ["2", "3"]
        assert b"{" not in to_xml("product", fields)

    def test_list_of_scalars(self) -> None:
        root = fromstring(to_xml("product", {"tags": ["summer", "sale"]}))

        assert [(child.tag, child.text) for child in root.find("tags")] == [
            ("tag", "summer"),
            ("tag", "sale"),
        ]

    def test_irregular_item_names(self) -> None:
        fields = {"associations": {"accessories": [{"id": "8"}], "taxes": [{"id": "1"}]}}

        root = fromstring(to_xml("product", fields))

        assert root.find("associations/accessories/product/id").text == "8"
        assert root.find("associations/taxes/tax/id").text == "1"
