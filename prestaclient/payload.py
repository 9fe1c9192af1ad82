"""
XML write payloads.

The webservice reads create/update bodies as XML: one root element named
after the resource's xml root, one child element per field. List fields
(associations) get one child per item, named after the singular of the
list: {"categories": [{"id": 2}]} -> <categories><category><id>2</id>...
"""

from collections.abc import Iterable, Mapping
from typing import Any
from xml.etree.ElementTree import Element, SubElement, tostring


def _is_language_list(value: Any) -> bool:
    """Multilingual fields arrive as [{"id": "1", "value": "..."}, ...]."""
    return (
        isinstance(value, list)
        and bool(value)
        and all(isinstance(item, Mapping) and "id" in item and "value" in item for item in value)
    )


# List fields whose items are not named after the singular of the list
_ITEM_TAGS = {
    "accessories": "product",
    "addresses": "address",
    "product_bundle": "product",
    "taxes": "tax",
}


def _item_tag(name: str) -> str:
    """Element name for one item of a list field, e.g. categories -> category."""
    if name in _ITEM_TAGS:
        return _ITEM_TAGS[name]
    if name.endswith("ies"):
        return name[:-3] + "y"
    if name.endswith("s"):
        return name[:-1]
    return name


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _append_field(parent: Element, name: str, value: Any) -> None:
    child = SubElement(parent, name)
    if _is_language_list(value):
        for item in value:
            language = SubElement(child, "language", id=_text(item["id"]))
            language.text = _text(item["value"])
    elif isinstance(value, Mapping):
        for key, nested in value.items():
            _append_field(child, str(key), nested)
    elif isinstance(value, (list, tuple)):
        tag = _item_tag(name)
        for item in value:
            _append_field(child, tag, item)
    else:
        child.text = _text(value)


def to_xml(xml_root: str, fields: Mapping[str, Any], fillable: Iterable[str] = ()) -> bytes:
    """
    Serialize record fields to an XML document.

    Args:
        xml_root: Root element name (e.g. "price_range")
        fields: Field name -> value
        fillable: When non-empty, only "id" and these fields are written

    Returns:
        UTF-8 encoded document including the XML declaration
    """
    allowed = set(fillable)
    root = Element(xml_root)

    if fields.get("id") is not None:
        _append_field(root, "id", fields["id"])

    for name, value in fields.items():
        if name == "id":
            continue
        if allowed and name not in allowed:
            continue
        _append_field(root, name, value)

    return tostring(root, encoding="utf-8", xml_declaration=True)
