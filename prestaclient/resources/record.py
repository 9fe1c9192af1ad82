"""
Record: one resource instance bound to concrete field values.

A record keeps a non-owning reference to the connection it came from so it
can be saved or deleted later. Records have no query-building methods; use
a Resource for that.
"""

import logging
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from prestaclient.errors import MissingIdentifierError, ServiceConnectionError
from prestaclient.normalizer import normalize
from prestaclient.payload import to_xml
from prestaclient.resources.registry import ResourceDescriptor

if TYPE_CHECKING:
    from prestaclient.connection import Connection

logger = logging.getLogger(__name__)


class Record:
    """A resource row with field access, setters and persistence."""

    def __init__(
        self,
        connection: "Connection",
        descriptor: ResourceDescriptor,
        fields: Mapping[str, Any] | None = None,
    ) -> None:
        self._connection = connection
        self.descriptor = descriptor
        self._fields: dict[str, Any] = dict(fields or {})

    # -------------------------------------------------------------------------
    # Field access
    # -------------------------------------------------------------------------

    @property
    def fields(self) -> dict[str, Any]:
        """Copy of the current field values."""
        return dict(self._fields)

    @property
    def id(self) -> Any:
        return self._fields.get("id")

    @property
    def exists(self) -> bool:
        """True when the record carries a server-assigned identifier."""
        return self.id not in (None, "", 0, "0")

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self._fields[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def get(self, name: str, default: Any = None) -> Any:
        return self._fields.get(name, default)

    def fill(self, **fields: Any) -> "Record":
        """Set several fields at once."""
        self._fields.update(fields)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.descriptor.name == other.descriptor.name and self._fields == other._fields

    def __repr__(self) -> str:
        return f"Record({self.descriptor.name!r}, {self._fields!r})"

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def to_xml(self) -> bytes:
        """Write payload for this record."""
        return to_xml(self.descriptor.xml_root, self._fields, self.descriptor.fillable)

    def save(self) -> "Record":
        """
        Persist the record.

        Creates the resource when it has no id, updates it otherwise.

        Returns:
            A new Record built from the webservice's response

        Raises:
            ConfigurationError: If the connection is not configured
            ServiceConnectionError: If the webservice call fails
        """
        body = self.to_xml()
        if self.exists:
            raw = self._connection.update(f"{self.descriptor.path}/{self.id}", body)
        else:
            raw = self._connection.create(self.descriptor.path, body)

        persisted = normalize(self.descriptor.name, raw).first()
        if persisted is None:
            logger.debug("Empty %s save response, keeping local fields", self.descriptor.name)
            return Record(self._connection, self.descriptor, self._fields)
        if not isinstance(persisted, Mapping):
            raise ServiceConnectionError(
                f"Unexpected {self.descriptor.name} save response: {persisted!r}"
            )
        return Record(self._connection, self.descriptor, persisted)

    def delete(self) -> None:
        """
        Delete this record on the webservice.

        Raises:
            MissingIdentifierError: If the record has no id
            RemoteServiceError: If the webservice rejects the delete
        """
        if not self.exists:
            raise MissingIdentifierError(self.descriptor.name, "delete")
        self._connection.remove(self.descriptor.path, self.id)
