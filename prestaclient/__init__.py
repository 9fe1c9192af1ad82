from prestaclient.client import PrestashopClient
from prestaclient.connection import Connection, ConnectionConfig
from prestaclient.errors import (
    ConfigurationError,
    ConflictingQueryError,
    FailureDetail,
    FailureKind,
    InvalidFilterOperatorError,
    InvalidSortDirectionError,
    MissingIdentifierError,
    PrestashopError,
    RemoteErrorItem,
    RemoteServiceError,
    ServiceConnectionError,
    UnknownResourceError,
)
from prestaclient.normalizer import NormalizedResult, normalize
from prestaclient.query import (
    Filter,
    FilterOperator,
    LimitSpec,
    QueryState,
    SortDirection,
    SortSpec,
    make_filter,
)
from prestaclient.resources import (
    Record,
    Resource,
    ResourceDescriptor,
    get_descriptor,
    iter_records,
    register_resource,
)

__all__ = [
    "ConfigurationError",
    "ConflictingQueryError",
    "Connection",
    "ConnectionConfig",
    "FailureDetail",
    "FailureKind",
    "Filter",
    "FilterOperator",
    "InvalidFilterOperatorError",
    "InvalidSortDirectionError",
    "LimitSpec",
    "MissingIdentifierError",
    "NormalizedResult",
    "PrestashopClient",
    "PrestashopError",
    "QueryState",
    "Record",
    "RemoteErrorItem",
    "RemoteServiceError",
    "Resource",
    "ResourceDescriptor",
    "ServiceConnectionError",
    "SortDirection",
    "SortSpec",
    "UnknownResourceError",
    "get_descriptor",
    "iter_records",
    "make_filter",
    "normalize",
    "register_resource",
]
