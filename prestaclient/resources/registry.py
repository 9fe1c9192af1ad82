"""
Resource registry.

Maps every resource the webservice exposes to its descriptor. Lookups of
unregistered names fail with UnknownResourceError.
"""

from dataclasses import dataclass

from prestaclient.errors import UnknownResourceError


@dataclass(frozen=True, slots=True)
class ResourceDescriptor:
    """
    Static metadata for one resource.

    Attributes:
        name: Resource name as used in responses (e.g. "price_ranges")
        path: Endpoint path below the webservice root
        xml_root: Root element of XML write payloads
        fillable: Fields written on save; empty means every field
    """

    name: str
    path: str
    xml_root: str
    fillable: tuple[str, ...] = ()


# name -> xml root element
_XML_ROOTS: dict[str, str] = {
    "addresses": "address",
    "carriers": "carrier",
    "cart_rules": "cart_rule",
    "carts": "cart",
    "categories": "category",
    "combinations": "combination",
    "configurations": "configuration",
    "contacts": "contact",
    "content_management_system": "content",
    "countries": "country",
    "currencies": "currency",
    "customer_messages": "customer_message",
    "customer_threads": "customer_thread",
    "customers": "customer",
    "customizations": "customization",
    "deliveries": "delivery",
    "employees": "employee",
    "groups": "group",
    "guests": "guest",
    "image_types": "image_type",
    "images": "image",
    "languages": "language",
    "manufacturers": "manufacturer",
    "messages": "message",
    "order_carriers": "order_carrier",
    "order_details": "order_detail",
    "order_histories": "order_history",
    "order_invoices": "order_invoice",
    "order_payments": "order_payment",
    "order_slip": "order_slip",
    "order_states": "order_state",
    "orders": "order",
    "price_ranges": "price_range",
    "product_customization_fields": "customization_field",
    "product_feature_values": "product_feature_value",
    "product_features": "product_feature",
    "product_option_values": "product_option_value",
    "product_options": "product_option",
    "product_suppliers": "product_supplier",
    "products": "product",
    "search": "search",
    "shop_groups": "shop_group",
    "shop_urls": "shop_url",
    "shops": "shop",
    "specific_price_rules": "specific_price_rule",
    "specific_prices": "specific_price",
    "states": "state",
    "stock_availables": "stock_available",
    "stock_movement_reasons": "stock_movement_reason",
    "stock_movements": "stock_mvt",
    "stocks": "stock",
    "stores": "store",
    "suppliers": "supplier",
    "supply_order_details": "supply_order_detail",
    "supply_order_histories": "supply_order_history",
    "supply_order_receipt_histories": "supply_order_receipt_history",
    "supply_order_states": "supply_order_state",
    "supply_orders": "supply_order",
    "tags": "tag",
    "tax_rule_groups": "tax_rule_group",
    "tax_rules": "tax_rule",
    "taxes": "tax",
    "translated_configurations": "translated_configuration",
    "warehouse_product_locations": "warehouse_product_location",
    "warehouses": "warehouse",
    "weight_ranges": "weight_range",
    "zones": "zone",
}

# Resources whose writable fields are declared explicitly
_FILLABLE: dict[str, tuple[str, ...]] = {
    "price_ranges": ("id_carrier", "delimiter1", "delimiter2"),
}

RESOURCES: frozenset[str] = frozenset(_XML_ROOTS)

_registry: dict[str, ResourceDescriptor] = {
    name: ResourceDescriptor(
        name=name,
        path=name,
        xml_root=xml_root,
        fillable=_FILLABLE.get(name, ()),
    )
    for name, xml_root in _XML_ROOTS.items()
}


def get_descriptor(name: str) -> ResourceDescriptor:
    """
    Look up a resource by name (case-insensitive).

    Raises:
        UnknownResourceError: If the resource is not registered
    """
    try:
        return _registry[name.lower()]
    except KeyError:
        raise UnknownResourceError(name) from None


def register_resource(descriptor: ResourceDescriptor) -> ResourceDescriptor:
    """Add or replace a descriptor, e.g. for a module-provided resource."""
    _registry[descriptor.name.lower()] = descriptor
    return descriptor


def registered_names() -> list[str]:
    return sorted(_registry)
