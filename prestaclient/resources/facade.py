"""
Resource facade: fluent query building plus lifecycle operations.

    products = Resource(connection, get_descriptor("products"))
    cheap = products.where("price", "INTERVAL", [0, 10]).sort_by("name").get()

A Resource only builds queries and dispatches them. Every row it returns is
a Record, which is the bound role (concrete field values, save/delete).
Builder state is an immutable QueryState replaced on each call, so the
state handed to a fetch is never changed afterwards.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from prestaclient.errors import ConflictingQueryError, ServiceConnectionError
from prestaclient.normalizer import normalize
from prestaclient.query import Filter, QueryState, SortDirection, make_filter
from prestaclient.resources.iterator import iter_records
from prestaclient.resources.record import Record
from prestaclient.resources.registry import ResourceDescriptor

if TYPE_CHECKING:
    from prestaclient.connection import Connection

logger = logging.getLogger(__name__)

BLANK_SCHEMA = "synopsis"


class Resource:
    """Query builder and lifecycle operations for one resource."""

    def __init__(
        self,
        connection: "Connection",
        descriptor: ResourceDescriptor,
        query: QueryState | None = None,
    ) -> None:
        self.connection = connection
        self.descriptor = descriptor
        self._query = query or QueryState()

    @property
    def query(self) -> QueryState:
        """Current builder state."""
        return self._query

    # -------------------------------------------------------------------------
    # Builder
    # -------------------------------------------------------------------------

    def where(self, field: str, operator_or_value: Any, value: Any = None) -> "Resource":
        """
        Add a filter.

        where("id", 5) filters on equality; where("name", "BEGIN", "Foo")
        names the operator.

        Raises:
            InvalidFilterOperatorError: If the operator is not recognized
        """
        self._query = self._query.with_filter(make_filter(field, operator_or_value, value))
        return self

    def filter(self, field: str, operator_or_value: Any, value: Any = None) -> "Resource":
        """Alias for where()."""
        return self.where(field, operator_or_value, value)

    def sort_by(self, field: str) -> "Resource":
        self._query = self._query.with_sort(field, SortDirection.ASC)
        return self

    def sort_by_desc(self, field: str) -> "Resource":
        self._query = self._query.with_sort(field, SortDirection.DESC)
        return self

    order_by = sort_by
    order_by_desc = sort_by_desc

    def select(self, fields: str | Sequence[str]) -> "Resource":
        """Restrict the fields returned per record."""
        self._query = self._query.with_display(fields)
        return self

    display = select

    def limit(self, count: int, offset: int | None = None) -> "Resource":
        self._query = self._query.with_limit(count, offset)
        return self

    def shop(self, shop_id: int | None) -> "Resource":
        self._query = self._query.with_shop(shop_id)
        return self

    def clear(self) -> "Resource":
        """Drop all accumulated constraints."""
        self._query = QueryState()
        return self

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find(self, id: int | str) -> Record | None:
        """
        Fetch one record by id.

        Returns:
            The record, or None when the webservice returns no rows

        Raises:
            ConflictingQueryError: If filters were already added
        """
        if self._query.has_filters:
            raise ConflictingQueryError()

        query = self._query.with_filters([Filter.equals("id", id)])
        raw = self.connection.fetch(self.descriptor.path, query)
        return self._record_from(normalize(self.descriptor.name, raw).first())

    def first(self) -> Record | None:
        """Fetch with the current constraints and return the first record."""
        raw = self.connection.fetch(self.descriptor.path, self._query)
        return self._record_from(normalize(self.descriptor.name, raw).first())

    def iter(self, params: Mapping[str, Any] | None = None) -> Iterator[Record]:
        """
        Fetch with the current constraints and iterate the records lazily.

        The payload is fetched eagerly; records are built one per step.

        Args:
            params: Extra raw query parameters sent as-is
        """
        query = self._query
        for name, value in (params or {}).items():
            query = query.with_filter(Filter.inner(name, value))

        raw = self.connection.fetch(self.descriptor.path, query)
        return iter_records(self.connection, self.descriptor, raw)

    def get(self, params: Mapping[str, Any] | None = None) -> list[Record]:
        """Fetch with the current constraints and return every record."""
        return list(self.iter(params))

    def get_blank(self) -> Record:
        """
        Fetch the resource's blank schema as an unsaved record.

        The returned record lists every field with an empty value, ready to
        be filled and saved.
        """
        query = self._query.with_filters([Filter.schema_only(BLANK_SCHEMA)])
        raw = self.connection.fetch(self.descriptor.path, query)
        record = self._record_from(normalize(self.descriptor.name, raw).first())
        return record or self.new()

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def new(self, **fields: Any) -> Record:
        """Build an unsaved record."""
        return Record(self.connection, self.descriptor, fields)

    def create(self, fields: Mapping[str, Any]) -> Record:
        """
        Create a record and reset accumulated filters.

        Returns:
            The persisted record as returned by the webservice
        """
        try:
            return self.new(**fields).save()
        finally:
            self._query = self._query.without_filters()

    def delete(self, id: int | str) -> None:
        """
        Delete a record by id.

        Raises:
            RemoteServiceError: If the webservice rejects the delete
        """
        logger.info("Deleting %s %s", self.descriptor.name, id)
        self.connection.remove(self.descriptor.path, id)

    def _record_from(self, row: Any) -> Record | None:
        if row is None:
            return None
        if not isinstance(row, Mapping):
            raise ServiceConnectionError(f"Unexpected {self.descriptor.name} row: {row!r}")
        return Record(self.connection, self.descriptor, row)

    def __repr__(self) -> str:
        return f"Resource({self.descriptor.name!r}, {self._query!r})"
