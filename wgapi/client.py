"""Client for the Wargaming World of Tanks public API."""

from __future__ import annotations

import logging
import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import ValidationError

from .config import Settings, get_settings
from .errors import InvalidArgument, InvalidConfiguration, TransportError
from .params import clamp_limit, encode_params, join_values, optional_params, require_ids, require_text
from .regions import Region

logger = logging.getLogger(__name__)

__version__ = "0.1.0"

API_URL_FORMAT = "api.worldoftanks.{tld}/wot/{category}/{action}/"
USER_AGENT = f"wgapi/{__version__} (+httpx)"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
METHODS = ("GET", "POST")


@dataclass(frozen=True)
class PreparedRequest:
    """Everything needed to send one API call."""

    method: str
    url: str
    endpoint: str
    action: str
    content: str | None = None
    headers: dict[str, str] = field(default_factory=dict)


def _check_flag(name: str, value: Any, error: type[Exception]) -> bool:
    if not isinstance(value, bool):
        raise error(f"{name} must be a bool, got {type(value).__name__}")
    return value


def _check_timeout(value: Any, error: type[Exception]) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise error(f"timeout must be a number of seconds or None, got {type(value).__name__}")
    if not math.isfinite(value) or value <= 0:
        raise error(f"timeout must be a positive finite number of seconds, got {value!r}")
    return float(value)


def _log_start(prepared: PreparedRequest) -> None:
    # Never log prepared.url: on GET it carries the application id
    logger.debug(
        f"API request started: {prepared.action}",
        extra={
            "props": {
                "event": "api_request_start",
                "action": prepared.action,
                "method": prepared.method,
                "endpoint": prepared.endpoint,
            }
        },
    )


def _log_end(prepared: PreparedRequest, response: httpx.Response, duration: float) -> None:
    logger.debug(
        f"API request completed: {prepared.action}",
        extra={
            "props": {
                "event": "api_request_end",
                "action": prepared.action,
                "status_code": response.status_code,
                "bytes": len(response.content),
                "duration_seconds": round(duration, 4),
            }
        },
    )


class BaseWGAPI(ABC):
    """
    Configuration, parameter validation and request assembly shared by the
    blocking and asyncio clients.

    Instances are not synchronized. Changing configuration on an instance
    while one of its requests is in flight is undefined; use one client per
    concurrent caller or leave the configuration alone after construction.
    """

    def __init__(
        self,
        api_key: str,
        region: str,
        *,
        use_https: bool = False,
        verify_ssl: bool = True,
        timeout: float | None = None,
        transport: Any = None,
    ):
        """
        Args:
            api_key: Your application's id from the Wargaming developer room.
            region: Server to send requests to: NA, RU, EU, SEA or ASIA (any case).
            use_https: Use https instead of http.
            verify_ssl: Verify the server certificate. Turning this off is an explicit opt-in.
            timeout: Request timeout in seconds. None keeps the httpx default.
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests.

        Raises:
            InvalidConfiguration: If any argument is unusable. Nothing is stored in that case.
        """
        if not api_key or not isinstance(api_key, str):
            raise InvalidConfiguration("api_key may not be empty and must be a string")
        resolved_region = Region.from_code(region)
        use_https = _check_flag("use_https", use_https, InvalidConfiguration)
        verify_ssl = _check_flag("verify_ssl", verify_ssl, InvalidConfiguration)
        timeout = _check_timeout(timeout, InvalidConfiguration)

        self._api_key = api_key
        self._region = resolved_region
        self._language = "en"
        self._method = "GET"
        self._use_https = use_https
        self._verify_ssl = verify_ssl
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any):
        """
        Build a client from environment based settings (WGAPI_* variables or .env).

        Keyword arguments (use_https, verify_ssl, timeout, transport) override
        the values taken from settings.

        Raises:
            InvalidConfiguration: If no application id is configured or a value is invalid.
        """
        if settings is None:
            try:
                settings = get_settings()
            except ValidationError as e:
                raise InvalidConfiguration(f"invalid WGAPI_* environment: {e}") from e
        if not settings.application_id:
            raise InvalidConfiguration(
                "WGAPI_APPLICATION_ID is required. Set it via environment variable or .env file."
            )

        options: dict[str, Any] = {
            "use_https": settings.use_https,
            "verify_ssl": settings.verify_ssl,
            "timeout": settings.timeout,
        }
        options.update(kwargs)
        client = cls(settings.application_id, settings.region, **options)
        try:
            client.set_locale(settings.language)
            client.set_method(settings.method)
        except InvalidArgument as e:
            raise InvalidConfiguration(str(e)) from e
        return client

    def __repr__(self) -> str:
        scheme = "https" if self._use_https else "http"
        return f"{type(self).__name__}(region={self._region.value!r}, method={self._method!r}, scheme={scheme!r})"

    # Configuration

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def region(self) -> Region:
        return self._region

    @property
    def tld(self) -> str:
        return self._region.tld

    @property
    def language(self) -> str:
        return self._language

    @property
    def method(self) -> str:
        return self._method

    @property
    def use_https(self) -> bool:
        return self._use_https

    @property
    def verify_ssl(self) -> bool:
        return self._verify_ssl

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def set_locale(self, locale: str) -> None:
        """Set the language responses are localized to."""
        if not locale or not isinstance(locale, str):
            raise InvalidArgument("locale parameter may not be empty and must be a string")
        self._language = locale

    set_language = set_locale

    def set_method(self, method: str) -> None:
        """Set the HTTP method used for API calls. Must be exactly "GET" or "POST"."""
        if method not in METHODS:
            raise InvalidArgument("invalid method specified - must be POST or GET")
        self._method = method

    def set_https(self, enabled: bool) -> None:
        self._use_https = _check_flag("enabled", enabled, InvalidArgument)

    def set_verify_ssl(self, enabled: bool) -> None:
        self._verify_ssl = _check_flag("enabled", enabled, InvalidArgument)

    def set_timeout(self, seconds: float | None) -> None:
        self._timeout = _check_timeout(seconds, InvalidArgument)

    # Account

    def account_list(
        self,
        search: str,
        limit: int | None = None,
        search_type: str = "",
        fields: list[str] | None = None,
    ):
        """
        Search players by the first characters of their nickname.

        Args:
            search: Nickname or its beginning.
            limit: Number of returned entries. Invalid values or values above 100 become 100.
            search_type: "startswith" or "exact".
            fields: Response fields to return.
        """
        params: dict[str, Any] = {"search": require_text("search", search)}
        if limit is not None:
            params["limit"] = clamp_limit(limit)
        params.update(optional_params(type=search_type, fields=fields))
        return self._request("account", "list", params)

    def account_info(
        self,
        account_id: int | str | list[int | str],
        access_token: str = "",
        extra: list[str] | None = None,
        fields: list[str] | None = None,
    ):
        """
        Get details of one or more players.

        Args:
            account_id: A single account id or a list of them.
            access_token: Token from the OpenID login, needed for private data.
            extra: Extra response fields such as "private.grouped_contacts".
            fields: Response fields to return.
        """
        params: dict[str, Any] = {"account_id": require_ids("account_id", account_id)}
        params.update(optional_params(access_token=access_token, extra=join_values(extra), fields=fields))
        return self._request("account", "info", params)

    # Clans

    def clan_list(
        self,
        search: str,
        limit: int | None = None,
        order_by: str = "",
        fields: list[str] | None = None,
    ):
        """
        Get a partial list of clans filtered by name or tag.

        Args:
            search: Initial characters of the clan name or tag.
            limit: Number of returned entries. Invalid values or values above 100 become 100.
                Left out of the request when None.
            order_by: Sorting, see the developer docs for valid values.
            fields: Response fields to return.

        Returns:
            The raw response body from the API.

        Raises:
            InvalidArgument: If search is empty.
            TransportError: If the request could not be completed.
        """
        params: dict[str, Any] = {"search": require_text("search", search)}
        if limit is not None:
            params["limit"] = clamp_limit(limit)
        params.update(optional_params(order_by=order_by, fields=fields))
        return self._request("clan", "list", params)

    def clan_info(
        self,
        clan_id: int | str | list[int | str],
        access_token: str = "",
        fields: list[str] | None = None,
    ):
        """
        Get details of one or more clans.

        Args:
            clan_id: A single clan id or a list of them.
            access_token: Token from the OpenID login.
            fields: Response fields to return.

        Raises:
            InvalidArgument: If clan_id is missing.
            TransportError: If the request could not be completed.
        """
        params: dict[str, Any] = {"clan_id": require_ids("clan_id", clan_id)}
        params.update(optional_params(access_token=access_token, fields=fields))
        return self._request("clan", "info", params)

    # Encyclopedia

    def encyclopedia_vehicles(
        self,
        tank_id: int | list[int] | None = None,
        nation: str = "",
        tier: int | None = None,
        vehicle_type: str = "",
        fields: list[str] | None = None,
    ):
        """List vehicles, optionally filtered by id, nation, tier or type."""
        params = optional_params(
            tank_id=join_values(tank_id),
            nation=nation,
            tier=tier,
            type=vehicle_type,
            fields=fields,
        )
        return self._request("encyclopedia", "vehicles", params)

    # Ratings

    def ratings_types(self, rating_type: str = "", battle_type: str = "", fields: list[str] | None = None):
        """List available rating periods and the rating fields for each."""
        params = optional_params(type=rating_type, battle_type=battle_type, fields=fields)
        return self._request("ratings", "types", params)

    # Generic

    def call(self, category: str, action: str, params: dict[str, Any] | None = None, *, force_https: bool = False):
        """
        Call an endpoint that has no dedicated method.

        Args:
            category: Resource category, e.g. "tanks".
            action: Action within the category, e.g. "stats".
            params: Request parameters. application_id and language are always
                replaced with the client's own values.
            force_https: Use https for this call even if the client is set to http.
        """
        require_text("category", category)
        require_text("action", action)
        return self._request(category, action, dict(params or {}), force_https=force_https)

    # Request assembly

    def _prepare(
        self, category: str, action: str, params: dict[str, Any], force_https: bool = False
    ) -> PreparedRequest:
        prefix = "https://" if self._use_https or force_https else "http://"

        data = dict(params)
        data["application_id"] = self._api_key
        data["language"] = self._language
        if isinstance(data.get("fields"), (list, tuple)):
            data["fields"] = join_values(data["fields"])

        query = encode_params(data)
        endpoint = prefix + API_URL_FORMAT.format(tld=self.tld, category=category, action=action)

        if self._method == "POST":
            return PreparedRequest(
                method="POST",
                url=endpoint,
                endpoint=endpoint,
                action=f"{category}/{action}",
                content=query,
                headers={"Content-Type": FORM_CONTENT_TYPE},
            )
        return PreparedRequest(
            method="GET",
            url=f"{endpoint}?{query}",
            endpoint=endpoint,
            action=f"{category}/{action}",
        )

    def _client_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "follow_redirects": True,
            "verify": self._verify_ssl,
            "headers": {"User-Agent": USER_AGENT},
        }
        if self._timeout is not None:
            options["timeout"] = self._timeout
        if self._transport is not None:
            options["transport"] = self._transport
        return options

    @abstractmethod
    def _request(self, category: str, action: str, params: dict[str, Any], force_https: bool = False):
        """Send one API call and return the raw body (or an awaitable of it)."""


class WGAPI(BaseWGAPI):
    """Blocking client. Every operation returns the raw response body as text."""

    def _request(self, category: str, action: str, params: dict[str, Any], force_https: bool = False) -> str:
        prepared = self._prepare(category, action, params, force_https=force_https)
        _log_start(prepared)
        start_time = time.time()

        try:
            with httpx.Client(**self._client_options()) as client:
                response = client.request(
                    prepared.method, prepared.url, content=prepared.content, headers=prepared.headers
                )
        except httpx.RequestError as e:
            raise TransportError(type(e).__name__, str(e) or repr(e)) from e

        _log_end(prepared, response, time.time() - start_time)
        return response.text


class AsyncWGAPI(BaseWGAPI):
    """
    asyncio client with the same operations as WGAPI.

    Operations validate their arguments immediately and return a coroutine
    that performs the single HTTP call when awaited.
    """

    async def _request(
        self, category: str, action: str, params: dict[str, Any], force_https: bool = False
    ) -> str:
        prepared = self._prepare(category, action, params, force_https=force_https)
        _log_start(prepared)
        start_time = time.time()

        try:
            async with httpx.AsyncClient(**self._client_options()) as client:
                response = await client.request(
                    prepared.method, prepared.url, content=prepared.content, headers=prepared.headers
                )
        except httpx.RequestError as e:
            raise TransportError(type(e).__name__, str(e) or repr(e)) from e

        _log_end(prepared, response, time.time() - start_time)
        return response.text
