"""
Response envelope normalization.

The webservice wraps payloads inconsistently: sometimes under the resource
name ({"products": [...]}), sometimes under a singular key
({"product": {...}}), sometimes bare. normalize() resolves every shape to
either one record (a mapping) or many records (a list).

Classification order matters and must stay as is:
1. unwrap raw[resource_name] when present
2. two or more entries -> returned as-is
3. associative -> the first-keyed value when it is itself a mapping,
   otherwise the mapping itself
4. one-element list -> its sole element when that is a record; a sole
   scalar stays a one-element collection ([5]) so rows are always a list
5. empty -> no records
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedResult:
    """
    Canonical response shape.

    Attributes:
        data: A single record mapping, or a list of rows
        single: True when data is one record
    """

    data: Any

    @property
    def single(self) -> bool:
        return isinstance(self.data, Mapping)

    def rows(self) -> list[Any]:
        """Rows as a list; a lone record becomes a one-element list."""
        if self.single:
            return [self.data]
        return list(self.data)

    def first(self) -> Any | None:
        """The record itself, or the first row of a collection."""
        if self.single:
            return self.data
        return self.data[0] if self.data else None


def _unwrap(resource_name: str, raw: Any) -> Any:
    if isinstance(raw, Mapping) and resource_name in raw:
        return raw[resource_name]
    return raw


def normalize(resource_name: str, raw: Any) -> NormalizedResult:
    """
    Resolve a decoded payload to one record or many records.

    Args:
        resource_name: Active resource (e.g. "products")
        raw: Decoded JSON body; None is treated as empty

    Returns:
        NormalizedResult
    """
    data = _unwrap(resource_name, raw)

    if data is None:
        return NormalizedResult([])

    if not isinstance(data, (Mapping, list, tuple)):
        # Scalar under the resource key, e.g. {"products": ""} for no rows
        return NormalizedResult([] if data == "" else [data])

    if len(data) >= 2:
        return NormalizedResult(dict(data) if isinstance(data, Mapping) else list(data))

    if isinstance(data, Mapping) and data:
        first_value = next(iter(data.values()))
        if isinstance(first_value, Mapping):
            return NormalizedResult(dict(first_value))
        return NormalizedResult(dict(data))

    if len(data) == 1:
        sole = data[0]
        if isinstance(sole, (list, tuple)):
            # A lone nested list could be one list-shaped record or a list of
            # scalars; it is treated as a collection.
            logger.warning(
                "Ambiguous %s response: single element is itself a sequence", resource_name
            )
            return NormalizedResult(list(sole))
        if isinstance(sole, Mapping):
            return NormalizedResult(dict(sole))
        return NormalizedResult([sole])

    return NormalizedResult([])
