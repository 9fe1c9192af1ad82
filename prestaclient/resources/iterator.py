"""
Record collection iterator.

Turns an already-fetched payload into Record instances one at a time. No
network calls happen during iteration, and the generator is single pass.
"""

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from prestaclient.errors import ServiceConnectionError
from prestaclient.normalizer import NormalizedResult, normalize
from prestaclient.resources.record import Record
from prestaclient.resources.registry import ResourceDescriptor

if TYPE_CHECKING:
    from prestaclient.connection import Connection


def iter_records(
    connection: "Connection",
    descriptor: ResourceDescriptor,
    payload: Any,
) -> Iterator[Record]:
    """
    Yield one Record per row of a raw or normalized payload.

    A lone record is yielded as a one-element collection.

    Args:
        connection: Connection the records are bound to
        descriptor: Resource the payload belongs to
        payload: Decoded JSON body or a NormalizedResult

    Raises:
        ServiceConnectionError: If a row is not a field mapping
    """
    if isinstance(payload, NormalizedResult):
        result = payload
    else:
        result = normalize(descriptor.name, payload)

    for row in result.rows():
        if not isinstance(row, Mapping):
            raise ServiceConnectionError(f"Unexpected {descriptor.name} row: {row!r}")
        yield Record(connection, descriptor, row)
