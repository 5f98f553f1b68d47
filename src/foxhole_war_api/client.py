"""Foxhole War API clients.

Thin wrappers that build an endpoint URL against the configured shard,
issue a single GET and decode the JSON body into a response model.
There is no retry, caching or rate limiting: every call is one
independent request-response exchange.

Examples:
    >>> with WarApiClient() as client:
    ...     war = client.war_data()
    ...     names = client.map_names()
    ...     static = client.map_data_static("TheFingersHex")
    ...     dynamic = client.map_data_dynamic("TheFingersHex")
"""

import logging
from typing import Optional, TypeVar
from urllib.parse import quote

import httpx

from .config import ClientConfig, Shard
from .exceptions import TransportError
from .models import MapData, MapNameList, WarData, decode

logger = logging.getLogger(__name__)

T = TypeVar("T")

WAR_DATA = "/worldconquest/war"
MAP_NAMES = "/worldconquest/maps"


def static_map_endpoint(map_name: str) -> str:
    return f"{MAP_NAMES}/{quote(map_name, safe='')}/static"


def dynamic_map_endpoint(map_name: str) -> str:
    return f"{MAP_NAMES}/{quote(map_name, safe='')}/dynamic/public"


class _WarApiClientBase:
    """URL building and response handling shared by the sync and async clients."""

    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()
        self._base_url = self.config.resolved_base_url()

    @property
    def shard(self) -> Shard:
        return self.config.shard

    @property
    def base_url(self) -> str:
        return self._base_url

    def build_url(self, endpoint: str) -> str:
        """Join ``endpoint`` onto the resolved base URL."""
        return f"{self._base_url}{endpoint}"

    def _default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }

    @staticmethod
    def _transport_failure(url: str, error: httpx.HTTPError) -> TransportError:
        logger.error(f"HTTP error fetching {url}: {error}")
        return TransportError(f"GET {url} failed: {error}", url=url)

    @staticmethod
    def _handle_response(response: httpx.Response, url: str, target: type[T]) -> T:
        if not response.is_success:
            logger.error(f"GET {url} returned HTTP {response.status_code}")
            raise TransportError(
                f"GET {url} returned HTTP {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        return decode(target, response.content, url=url)


class WarApiClient(_WarApiClientBase):
    """Synchronous client for the War API.

    The underlying ``httpx.Client`` pools connections, so one instance
    per process is usually enough. Shard selection is fixed at
    construction.

    Args:
        config: Client configuration (defaults to the primary shard)
        http_client: Pre-built ``httpx.Client``; left open on ``close()``
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        http_client: Optional[httpx.Client] = None,
    ):
        super().__init__(config)
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.Client(
            timeout=self.config.timeout,
            headers=self._default_headers(),
            follow_redirects=True,
        )

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - close HTTP client."""
        self.close()

    def close(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self.http_client.close()

    def _get(self, endpoint: str, target: type[T]) -> T:
        url = self.build_url(endpoint)
        logger.debug(f"GET {url}")

        try:
            response = self.http_client.get(url)
        except httpx.HTTPError as e:
            raise self._transport_failure(url, e) from e

        return self._handle_response(response, url, target)

    def war_data(self) -> WarData:
        """Retrieve the status of the current war.

        Raises:
            TransportError: On connection failure, timeout or non-2xx status
            DecodeError: If the body does not match ``WarData``
        """
        return self._get(WAR_DATA, WarData)

    def map_names(self) -> MapNameList:
        """Retrieve the names of all maps present on the shard."""
        return self._get(MAP_NAMES, MapNameList)

    def map_data_static(self, map_name: str) -> MapData:
        """Retrieve map data that never changes over the course of a war.

        This covers map text labels and resource node locations.
        ``map_name`` is sent as-is and not checked against ``map_names()``.
        """
        return self._get(static_map_endpoint(map_name), MapData)

    def map_data_dynamic(self, map_name: str) -> MapData:
        """Retrieve public map data that can change during a war.

        This covers relic bases and town halls that can change team
        ownership. Private data such as player built fortifications is not
        served.
        """
        return self._get(dynamic_map_endpoint(map_name), MapData)


class AsyncWarApiClient(_WarApiClientBase):
    """Asynchronous client for the War API.

    Calls are independent coroutines and may be awaited concurrently on
    the same instance; no ordering between them is guaranteed.

    Args:
        config: Client configuration (defaults to the primary shard)
        http_client: Pre-built ``httpx.AsyncClient``; left open on ``aclose()``
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(config)
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=self.config.timeout,
            headers=self._default_headers(),
            follow_redirects=True,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.http_client.aclose()

    async def _get(self, endpoint: str, target: type[T]) -> T:
        url = self.build_url(endpoint)
        logger.debug(f"GET {url}")

        try:
            response = await self.http_client.get(url)
        except httpx.HTTPError as e:
            raise self._transport_failure(url, e) from e

        return self._handle_response(response, url, target)

    async def war_data(self) -> WarData:
        return await self._get(WAR_DATA, WarData)

    async def map_names(self) -> MapNameList:
        return await self._get(MAP_NAMES, MapNameList)

    async def map_data_static(self, map_name: str) -> MapData:
        return await self._get(static_map_endpoint(map_name), MapData)

    async def map_data_dynamic(self, map_name: str) -> MapData:
        return await self._get(dynamic_map_endpoint(map_name), MapData)
