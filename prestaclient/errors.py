"""
Typed failures for the webservice client.

Every failure that reaches a caller is one of the classes below. Transport
library exceptions (httpx) are translated at the connection boundary and
never escape it.

Failure kinds:
- Configuration: client setup is incomplete (never retried)
- Invalid filter: unrecognized filter operator (programmer error)
- Invalid sort: unrecognized sort direction
- Conflicting query: find() combined with accumulated filters
- Unknown resource: resource name missing from the registry
- Missing identifier: record operation that needs an id it does not have
- Remote service: the webservice answered with a 4xx/5xx status
- Connection: any other transport failure (DNS, timeout, bad payload)
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError


class FailureKind(str, Enum):
    """Classification of failure types."""

    CONFIGURATION = "configuration"
    INVALID_FILTER = "invalid_filter"
    INVALID_SORT = "invalid_sort"
    CONFLICTING_QUERY = "conflicting_query"
    UNKNOWN_RESOURCE = "unknown_resource"
    MISSING_IDENTIFIER = "missing_identifier"
    REMOTE_SERVICE = "remote_service"
    CONNECTION = "connection"


class FailureDetail(BaseModel):
    """Detailed information about a failure, suitable for logging or display."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="Explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the caller",
    )
    status_code: int | None = Field(
        default=None,
        description="HTTP status returned by the webservice, if any",
    )


class RemoteErrorItem(BaseModel):
    """One entry of the webservice's JSON error envelope."""

    code: int | None = None
    message: str = ""


class PrestashopError(Exception):
    """
    Base class for all client failures.

    Subclass this for errors where the client knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    @property
    def status_code(self) -> int | None:
        return None

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
            status_code=self.status_code,
        )


class ConfigurationError(PrestashopError):
    """Raised before any network call when the client cannot execute."""

    def __init__(self, missing: str, message: str):
        self.missing = missing
        super().__init__(
            kind=FailureKind.CONFIGURATION,
            message=message,
            detail=f"Missing: {missing}",
            suggestion="Call configure() or set the PRESTASHOP_* environment variables.",
        )


class InvalidFilterOperatorError(PrestashopError):
    """Raised when a filter is built with an unrecognized operator."""

    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(
            kind=FailureKind.INVALID_FILTER,
            message="Invalid filter operator",
            detail=f"Operator {operator!r} is not recognized",
        )


class InvalidSortDirectionError(PrestashopError):
    """Raised when a sort direction is neither ASC nor DESC."""

    def __init__(self, direction: str):
        self.direction = direction
        super().__init__(
            kind=FailureKind.INVALID_SORT,
            message="Invalid sort direction",
            detail=f"Direction {direction!r} is not ASC or DESC",
        )


class ConflictingQueryError(PrestashopError):
    """Raised when find() is called while filters are already accumulated."""

    def __init__(self, message: str = "You can not use find method along with filters"):
        super().__init__(
            kind=FailureKind.CONFLICTING_QUERY,
            message=message,
            suggestion="Use where(...).first() or clear() the query before find().",
        )


class UnknownResourceError(PrestashopError):
    """Raised when a resource name is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            kind=FailureKind.UNKNOWN_RESOURCE,
            message=f"Unknown resource: {name}",
            suggestion="Register a ResourceDescriptor for it first.",
        )


class MissingIdentifierError(PrestashopError):
    """Raised when a record operation needs an id the record does not carry."""

    def __init__(self, resource: str, operation: str):
        self.resource = resource
        self.operation = operation
        super().__init__(
            kind=FailureKind.MISSING_IDENTIFIER,
            message=f"Cannot {operation} a {resource} record without an id",
            suggestion="Save the record first or set its id.",
        )


class RemoteServiceError(PrestashopError):
    """
    Raised when the webservice answers with a 4xx/5xx status.

    The raw response body is preserved verbatim; it usually carries the
    service's own error code and message.
    """

    def __init__(self, status_code: int, body: str):
        self._status_code = status_code
        self.body = body
        super().__init__(
            kind=FailureKind.REMOTE_SERVICE,
            message=body,
            detail=f"HTTP {status_code}",
        )

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def errors(self) -> list[RemoteErrorItem]:
        """
        Parse the body as the service's JSON error envelope.

        Returns:
            Error entries, or an empty list when the body is not the
            expected {"errors": [{"code": .., "message": ..}]} shape.
        """
        try:
            payload: Any = json.loads(self.body)
        except (json.JSONDecodeError, TypeError):
            return []

        if not isinstance(payload, dict) or not isinstance(payload.get("errors"), list):
            return []

        try:
            return [RemoteErrorItem.model_validate(item) for item in payload["errors"]]
        except ValidationError:
            return []


class ServiceConnectionError(PrestashopError):
    """
    Raised for transport failures and at the read/write verb boundary.

    When it wraps a remote rejection, status_code and body are carried over
    from the underlying RemoteServiceError.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        self._status_code = status_code
        self.body = body
        super().__init__(
            kind=FailureKind.CONNECTION,
            message=message,
            detail=f"HTTP {status_code}" if status_code is not None else None,
        )

    @property
    def status_code(self) -> int | None:
        return self._status_code
