from prestaclient.resources.facade import Resource
from prestaclient.resources.iterator import iter_records
from prestaclient.resources.record import Record
from prestaclient.resources.registry import (
    RESOURCES,
    ResourceDescriptor,
    get_descriptor,
    register_resource,
    registered_names,
)

__all__ = [
    "RESOURCES",
    "Record",
    "Resource",
    "ResourceDescriptor",
    "get_descriptor",
    "iter_records",
    "register_resource",
    "registered_names",
]
