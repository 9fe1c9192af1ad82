"""
Webservice connection.

Combines a QueryState with an authenticated HTTP call and decodes the JSON
body. The connection holds configuration only; query constraints are passed
in per call, so one connection can serve many query chains.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any

import httpx
from pydantic import ValidationError

from prestaclient.config import FORMAT_HEADERS, XML_CONTENT_TYPE, Settings, get_settings
from prestaclient.errors import ConfigurationError, RemoteServiceError, ServiceConnectionError
from prestaclient.query import QueryState

logger = logging.getLogger(__name__)

VERBS = frozenset({"get", "post", "put", "delete"})


@dataclass(frozen=True)
class ConnectionConfig:
    """
    Session configuration. Unset values fall back to Settings at call time.

    Attributes:
        base_url: Shop URL, e.g. https://shop.example.com
        endpoint_path: Webservice path appended to base_url (default /api)
        token: Webservice key, sent as the basic-auth username
        shop_id: Optional shop scope for multistore installs
    """

    base_url: str | None = None
    endpoint_path: str | None = None
    token: str | None = None
    shop_id: int | None = None

    def resolve(self, settings: Settings) -> "ConnectionConfig":
        """Fill unset values from settings."""
        return ConnectionConfig(
            base_url=self.base_url or settings.shop_url or None,
            endpoint_path=(
                self.endpoint_path if self.endpoint_path is not None else settings.endpoint
            ),
            token=self.token or settings.token or None,
            shop_id=self.shop_id if self.shop_id is not None else settings.shop_id,
        )

    def api_url(self, resource_path: str) -> str:
        parts = [(self.base_url or "").rstrip("/")]
        endpoint = (self.endpoint_path or "").strip("/")
        if endpoint:
            parts.append(endpoint)
        parts.append(resource_path.strip("/"))
        return "/".join(parts)


def _load_settings() -> Settings:
    """
    Read settings, reporting malformed PRESTASHOP_* values as configuration errors.

    Raises:
        ConfigurationError: If an environment or .env value fails validation
    """
    try:
        return get_settings()
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) for error in exc.errors()
        )
        raise ConfigurationError(fields, f"Invalid settings: {fields}") from exc


class Connection:
    """
    Client for the webservice's four verbs.

    Error boundary:
    - fetch/create/update raise ServiceConnectionError for any transport or
      remote failure (status code and body are kept on the exception)
    - remove raises RemoteServiceError for remote rejections
    - every verb raises ConfigurationError before any network call when
      the base URL or token cannot be resolved, or a setting is malformed
    """

    def __init__(
        self,
        http: httpx.Client | None = None,
        config: ConnectionConfig | None = None,
    ) -> None:
        """
        Initialize the connection.

        Args:
            http: Optional httpx client for connection reuse. When omitted a
                client is created on first use and owned by this connection.
            config: Initial configuration
        """
        self._http = http
        self._owns_http = http is None
        self.config = config or ConnectionConfig()

    def configure(
        self,
        base_url: str,
        endpoint_path: str,
        token: str,
        shop_id: int | None = None,
    ) -> "Connection":
        """Set the session configuration."""
        self.config = ConnectionConfig(base_url, endpoint_path, token, shop_id)
        return self

    def store(
        self,
        base_url: str,
        endpoint_path: str,
        token: str,
        shop_id: int | None = None,
    ) -> "Connection":
        """Alias for configure()."""
        return self.configure(base_url, endpoint_path, token, shop_id)

    def with_config(self, **overrides: Any) -> "Connection":
        """Copy sharing the HTTP client, with some config values replaced."""
        return Connection(self._http, replace(self.config, **overrides))

    # -------------------------------------------------------------------------
    # Verbs
    # -------------------------------------------------------------------------

    def fetch(
        self,
        resource_path: str,
        query: QueryState | None = None,
        *,
        config: ConnectionConfig | None = None,
    ) -> Any:
        """
        Read a resource.

        Returns:
            Decoded JSON body ({} for an empty body)

        Raises:
            ConfigurationError: If base URL or token is missing
            ServiceConnectionError: If the call fails for any other reason
        """
        try:
            return self._call("get", resource_path, query=query, config=config)
        except RemoteServiceError as exc:
            raise ServiceConnectionError(exc.message, exc.status_code, exc.body) from exc

    def create(
        self,
        resource_path: str,
        body: bytes | str,
        query: QueryState | None = None,
        *,
        config: ConnectionConfig | None = None,
    ) -> Any:
        """
        Create a resource from an XML body.

        Filters are a read-only concept and are never sent with a create.
        """
        query = (query or QueryState()).without_filters()
        try:
            return self._call("post", resource_path, query=query, body=body, config=config)
        except RemoteServiceError as exc:
            raise ServiceConnectionError(exc.message, exc.status_code, exc.body) from exc

    def update(
        self,
        resource_path: str,
        body: bytes | str,
        query: QueryState | None = None,
        *,
        config: ConnectionConfig | None = None,
    ) -> Any:
        """Replace a resource with an XML body."""
        try:
            return self._call("put", resource_path, query=query, body=body, config=config)
        except RemoteServiceError as exc:
            raise ServiceConnectionError(exc.message, exc.status_code, exc.body) from exc

    def remove(
        self,
        resource_path: str,
        id: int | str,
        *,
        config: ConnectionConfig | None = None,
    ) -> Any:
        """
        Delete a resource by id.

        Raises:
            ConfigurationError: If base URL or token is missing
            RemoteServiceError: If the webservice rejects the delete
            ServiceConnectionError: On transport failure
        """
        return self._call("delete", resource_path, params={"id": f"[{id}]"}, config=config)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _check_can_execute(self, method: str, config: ConnectionConfig) -> None:
        if method not in VERBS:
            raise ConfigurationError("method", "You need to define a method.")
        if not config.base_url:
            raise ConfigurationError("base_url", "No endpoint/ URL defined.")
        if not config.token:
            raise ConfigurationError("token", "Token is not configured")

    def _call(
        self,
        method: str,
        resource_path: str,
        *,
        query: QueryState | None = None,
        params: dict[str, Any] | None = None,
        body: bytes | str | None = None,
        config: ConnectionConfig | None = None,
    ) -> Any:
        settings = _load_settings()
        resolved = (config or self.config).resolve(settings)
        self._check_can_execute(method, resolved)

        if params is None:
            state = query or QueryState()
            if state.shop_id is None and resolved.shop_id is not None:
                state = state.with_shop(resolved.shop_id)
            params = state.serialize()

        headers = dict(FORMAT_HEADERS)
        if method == "post":
            headers["Content-Type"] = XML_CONTENT_TYPE

        url = resolved.api_url(resource_path)
        logger.debug("%s %s params=%s", method.upper(), url, params)

        try:
            response = self._client(settings).request(
                method.upper(),
                url,
                auth=(resolved.token or "", ""),
                headers=headers,
                params=params,
                content=body,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "%s %s rejected: HTTP %d", method.upper(), url, exc.response.status_code
            )
            raise RemoteServiceError(exc.response.status_code, exc.response.text) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("%s %s failed: %s", method.upper(), url, exc)
            raise ServiceConnectionError(f"Error calling the webservice: {exc}") from exc

        return self._decode(response)

    def _decode(self, response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ServiceConnectionError(
                f"Invalid JSON response: {response.text[:200]}",
                response.status_code,
                response.text,
            ) from exc

    def _client(self, settings: Settings) -> httpx.Client:
        if self._http is None:
            self._http = httpx.Client(follow_redirects=True, timeout=settings.timeout)
            self._owns_http = True
        return self._http

    def close(self) -> None:
        """Close the HTTP client if this connection created it."""
        if self._http is not None and self._owns_http:
            self._http.close()
            self._http = None

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
