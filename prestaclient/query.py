"""
Query builder for the webservice's filter mini-language.

A QueryState is an immutable value: every mutator returns a new state, so a
state can be handed to a connection call and reused safely afterwards.

Wire syntax produced by QueryState.serialize():

    display=full | [id,name]
    limit=10 | 20, 10                 (offset, count)
    filter[id]=[5]                    equals / literal
    filter[id]=[1|5]                  OR
    filter[price]=[10,20]             interval
    filter[name]=[Foo]%  %[Foo]  %[Foo]%   begin / end / contains
    date=1                            any filtered field containing "date"
    sort=[name_ASC,id_DESC]
    id_shop=2
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from prestaclient.errors import InvalidFilterOperatorError, InvalidSortDirectionError

FULL_DISPLAY = "full"


class FilterOperator(str, Enum):
    """Filter operators understood by the webservice."""

    EQUALS = "="
    OR = "OR"
    INTERVAL = "INTERVAL"
    LITERAL = "LITERAL"
    BEGIN = "BEGIN"
    END = "END"
    CONTAINS = "CONTAINS"
    INNER = "INNER"
    SCHEMA = "SCHEMA"


# Accepted spellings -> operator. SCHEMA is not user-selectable.
OPERATOR_ALIASES: dict[str, FilterOperator] = {
    "=": FilterOperator.EQUALS,
    "|": FilterOperator.OR,
    "OR": FilterOperator.OR,
    ",": FilterOperator.INTERVAL,
    "INTERVAL": FilterOperator.INTERVAL,
    "LITERAL": FilterOperator.LITERAL,
    "BEGIN": FilterOperator.BEGIN,
    "END": FilterOperator.END,
    "CONTAINS": FilterOperator.CONTAINS,
    "INNER": FilterOperator.INNER,
}

_MULTI_VALUE_OPERATORS = frozenset({FilterOperator.OR, FilterOperator.INTERVAL})


def parse_operator(operator: str) -> FilterOperator:
    """
    Resolve an operator spelling.

    Raises:
        InvalidFilterOperatorError: If the spelling is not recognized
    """
    try:
        return OPERATOR_ALIASES[str(operator).strip().upper()]
    except KeyError:
        raise InvalidFilterOperatorError(str(operator)) from None


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


@dataclass(frozen=True, slots=True)
class Filter:
    """A single read constraint."""

    field: str
    operator: FilterOperator
    value: Any

    def __post_init__(self) -> None:
        if not isinstance(self.operator, FilterOperator):
            object.__setattr__(self, "operator", parse_operator(self.operator))

    @classmethod
    def equals(cls, field: str, value: Any) -> "Filter":
        return cls(field, FilterOperator.EQUALS, value)

    @classmethod
    def one_of(cls, field: str, values: Sequence[Any]) -> "Filter":
        return cls(field, FilterOperator.OR, tuple(values))

    @classmethod
    def interval(cls, field: str, low: Any, high: Any) -> "Filter":
        return cls(field, FilterOperator.INTERVAL, (low, high))

    @classmethod
    def literal(cls, field: str, value: Any) -> "Filter":
        return cls(field, FilterOperator.LITERAL, value)

    @classmethod
    def begins(cls, field: str, value: Any) -> "Filter":
        return cls(field, FilterOperator.BEGIN, value)

    @classmethod
    def ends(cls, field: str, value: Any) -> "Filter":
        return cls(field, FilterOperator.END, value)

    @classmethod
    def contains(cls, field: str, value: Any) -> "Filter":
        return cls(field, FilterOperator.CONTAINS, value)

    @classmethod
    def inner(cls, field: str, value: Any) -> "Filter":
        return cls(field, FilterOperator.INNER, value)

    @classmethod
    def schema_only(cls, name: str) -> "Filter":
        return cls("schema", FilterOperator.SCHEMA, name)

    def encode(self) -> str:
        """Encode the value in the bracket syntax for this operator."""
        op = self.operator
        if op in _MULTI_VALUE_OPERATORS:
            separator = "|" if op is FilterOperator.OR else ","
            return "[" + separator.join(_format_value(v) for v in self.value) + "]"

        value = _format_value(self.value)
        if op is FilterOperator.BEGIN:
            return f"[{value}]%"
        if op is FilterOperator.END:
            return f"%[{value}]"
        if op is FilterOperator.CONTAINS:
            return f"%[{value}]%"
        if op in (FilterOperator.INNER, FilterOperator.SCHEMA):
            return value
        return f"[{value}]"


def make_filter(field: str, operator_or_value: Any, value: Any = None) -> Filter:
    """
    Build a filter from where()-style arguments.

    where("id", 5) is an equality filter; where("id", "OR", [1, 5]) names the
    operator explicitly.

    Raises:
        InvalidFilterOperatorError: If the operator is not recognized
    """
    if value is None:
        return Filter.equals(field, operator_or_value)

    operator = parse_operator(operator_or_value)
    if operator in _MULTI_VALUE_OPERATORS:
        values = tuple(value) if isinstance(value, (list, tuple)) else (value,)
        return Filter(field, operator, values)
    return Filter(field, operator, value)


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True, slots=True)
class SortSpec:
    field: str
    direction: SortDirection = SortDirection.ASC

    def encode(self) -> str:
        return f"{self.field}_{self.direction.value}"


@dataclass(frozen=True, slots=True)
class LimitSpec:
    """Either a plain count or an (offset, count) window."""

    count: int
    offset: int | None = None

    def encode(self) -> int | str:
        if self.offset is None:
            return self.count
        return f"{self.offset}, {self.count}"


@dataclass(frozen=True)
class QueryState:
    """
    Immutable set of read constraints for one request.

    Attributes:
        display: Fields to return; empty means the "full" sentinel
        filters: Filters in insertion order
        sort: Sort entries in insertion order
        limit: Optional limit/offset window
        shop_id: Optional shop scope
    """

    display: tuple[str, ...] = ()
    filters: tuple[Filter, ...] = ()
    sort: tuple[SortSpec, ...] = ()
    limit: LimitSpec | None = None
    shop_id: int | None = None

    @property
    def has_filters(self) -> bool:
        return bool(self.filters)

    def with_display(self, fields: str | Sequence[str]) -> "QueryState":
        if isinstance(fields, str):
            fields = [fields]
        display = tuple(f for f in fields if f != FULL_DISPLAY)
        return replace(self, display=display)

    def with_filter(self, filter_: Filter) -> "QueryState":
        return replace(self, filters=self.filters + (filter_,))

    def with_filters(self, filters: Sequence[Filter]) -> "QueryState":
        """Replace all filters."""
        return replace(self, filters=tuple(filters))

    def without_filters(self) -> "QueryState":
        return replace(self, filters=())

    def with_sort(
        self, field: str, direction: SortDirection | str = SortDirection.ASC
    ) -> "QueryState":
        if not isinstance(direction, SortDirection):
            try:
                direction = SortDirection(str(direction).strip().upper())
            except ValueError:
                raise InvalidSortDirectionError(str(direction)) from None
        entry = SortSpec(field, direction)
        return replace(self, sort=self.sort + (entry,))

    def with_limit(self, count: int, offset: int | None = None) -> "QueryState":
        return replace(self, limit=LimitSpec(count, offset))

    def with_shop(self, shop_id: int | None) -> "QueryState":
        return replace(self, shop_id=shop_id)

    def serialize(self) -> dict[str, Any]:
        """
        Render the state as URL query parameters.

        Keys appear in rule order (display, limit, filters, date, sort,
        id_shop). A schema filter replaces everything accumulated before it;
        once one is present the sort key is no longer emitted.

        Returns:
            Ordered mapping of parameter name to value (not percent-encoded)
        """
        query: dict[str, Any] = {
            "display": "[" + ",".join(self.display) + "]" if self.display else FULL_DISPLAY,
        }

        if self.limit is not None:
            query["limit"] = self.limit.encode()

        schema_requested = False
        for filter_ in self.filters:
            if filter_.operator is FilterOperator.SCHEMA:
                schema_requested = True
                query = {"schema": filter_.encode()}
                continue

            if filter_.operator is FilterOperator.INNER:
                query[filter_.field] = filter_.encode()
            else:
                query[f"filter[{filter_.field}]"] = filter_.encode()

            # Date fields are omitted by the service unless asked for
            if "date" in filter_.field:
                query["date"] = 1

        if self.sort and not schema_requested:
            query["sort"] = "[" + ",".join(s.encode() for s in self.sort) + "]"

        if self.shop_id is not None:
            query["id_shop"] = self.shop_id

        return query
