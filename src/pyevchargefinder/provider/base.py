"""Provider base class and shared behavior."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import aiohttp

from ..exceptions import (
    NetworkError,
    NotFoundError,
    ProviderError,
    SourceUnavailableError,
    ValidationError,
)
from ..models import ChargingStation, FilterSettings, ProviderInfo
from ..util import require_text, validate_coordinates, validate_filters, validate_radius
from .loader import ProviderManifest

_LOGGER = logging.getLogger(__name__)
_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=30)


class BaseProvider(ABC):
    """Base class for station catalog implementations.

    A catalog may use the filter hints passed to ``find_stations`` to reduce
    the amount of data it returns, but callers must not rely on it applying
    them exactly.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        manifest: ProviderManifest,
        *,
        base_url: str | None = None,
        api_uri: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        if session is None:
            raise ValidationError("Session is required.")
        self._session = session
        self._manifest = manifest
        self._base_url = self._normalize_base_url(base_url)
        self._api_uri = self._normalize_api_uri(api_uri)
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)

    @property
    def provider_id(self) -> str:
        return self._manifest.id

    @property
    def provider_name(self) -> str:
        return self._manifest.name

    @property
    def stable_ids(self) -> bool:
        return self._manifest.stable_ids

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(id=self._manifest.id, stable_ids=self._manifest.stable_ids)

    async def find_stations(
        self,
        latitude: float,
        longitude: float,
        radius: float,
        filters: FilterSettings | None = None,
    ) -> list[ChargingStation]:
        """Return candidate stations within ``radius`` miles of the origin."""
        latitude, longitude = validate_coordinates(latitude, longitude)
        radius = validate_radius(radius)
        if filters is not None:
            filters = validate_filters(filters)
        _LOGGER.debug("Provider %s find_stations started", self.provider_id)
        stations = await self._fetch_stations(latitude, longitude, radius, filters)
        _LOGGER.debug(
            "Provider %s find_stations completed with %s stations",
            self.provider_id,
            len(stations),
        )
        return stations

    async def get_station(self, station_id: str) -> ChargingStation:
        """Return a single station by id."""
        station_id_value = require_text(station_id, "station_id")
        _LOGGER.debug("Provider %s get_station started", self.provider_id)
        station = await self._fetch_station(station_id_value)
        _LOGGER.debug("Provider %s get_station completed", self.provider_id)
        return station

    @abstractmethod
    async def _fetch_stations(
        self,
        latitude: float,
        longitude: float,
        radius: float,
        filters: FilterSettings | None,
    ) -> list[ChargingStation]:
        """Fetch candidates for an already validated query."""

    @abstractmethod
    async def _fetch_station(self, station_id: str) -> ChargingStation:
        """Fetch one station; raise NotFoundError when it does not exist."""

    def _build_url(self, path: str) -> str:
        if not isinstance(path, str) or not path:
            raise ValidationError("Path must be a non-empty string.")
        if path.startswith("http://") or path.startswith("https://"):
            raise ValidationError("Use relative paths when building provider requests.")
        if self._base_url is None:
            raise ValidationError("base_url is required to build provider requests.")
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{self._api_uri}{normalized_path}"

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._build_url(path)
        return await self._request(method, url, **kwargs)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        retries = self._retry_count if method.upper() == "GET" else 0
        attempts = retries + 1
        timeout = kwargs.pop("timeout", None) or self._timeout
        for attempt in range(attempts):
            try:
                async with self._session.request(
                    method,
                    url,
                    timeout=timeout,
                    ssl=True,
                    **kwargs,
                ) as response:
                    self._raise_for_status(response)
                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as exc:
                        raise ProviderError("Response did not contain valid JSON.") from exc
            except (aiohttp.ClientError, TimeoutError) as exc:
                if attempt >= attempts - 1:
                    raise NetworkError("Network request failed.") from exc
                _LOGGER.warning(
                    "Provider %s request failed, retrying (%s/%s)",
                    self.provider_id,
                    attempt + 1,
                    retries,
                )
        raise NetworkError("Network request failed.")

    def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if 200 <= response.status < 300:
            return
        if response.status in (401, 403):
            raise ProviderError("Authentication failed.", error_code="auth_error")
        if response.status == 404:
            raise NotFoundError("Provider resource not found.")
        if response.status == 429 or response.status >= 500:
            raise SourceUnavailableError(
                f"Provider unavailable with status {response.status}."
            )
        raise ProviderError(f"Provider request failed with status {response.status}.")

    def _normalize_base_url(self, base_url: str | None) -> str | None:
        if base_url is None:
            return None
        if not isinstance(base_url, str) or not base_url.strip():
            raise ValidationError("base_url must be a non-empty string.")
        return base_url.strip().rstrip("/")

    def _normalize_api_uri(self, api_uri: str | None) -> str:
        if api_uri is None:
            return ""
        if not isinstance(api_uri, str):
            raise ValidationError("api_uri must be a string.")
        normalized = api_uri.strip().strip("/")
        if not normalized:
            return ""
        return f"/{normalized}"

    def _coerce_response_id(self, value: Any, field: str) -> str:
        if value is None:
            raise ProviderError(f"Provider response missing {field}.")
        text = str(value).strip()
        if not text:
            raise ProviderError(f"Provider response missing {field}.")
        return text
