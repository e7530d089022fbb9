"""
Tolerant Socrata fetcher.

Provides async HTTP operations against the NYC Open Data host. Every failure
(timeout, connection error, non-2xx, malformed payload) is turned into a failed
DatasetResult instead of an exception, so one bad source never fails a lookup.
"""

import asyncio
import logging
from typing import Optional, Dict, Any, Iterable

import aiohttp

from building_health.config import AggregatorSettings, DEFAULT_SETTINGS, DatasetConfig, get_dataset
from building_health.fetchers.soql import within_circle
from building_health.models.results import DatasetResult
from building_health.utils.geo import Point

logger = logging.getLogger(__name__)


class SocrataFetcher:
    """
    Async fetcher for Socrata resource endpoints.

    Supports SoQL queries ($where, $limit, $order, $select and column
    equality filters) with per-call timeouts and proximity searches with
    geometry-field fallback.
    """

    def __init__(self, settings: AggregatorSettings = DEFAULT_SETTINGS):
        """
        Initialize fetcher.

        Args:
            settings: Aggregator settings (host, timeouts, app token)
        """
        self.settings = settings

    def _build_resource_url(self, dataset_id: str) -> str:
        """Build resource URL for a dataset."""
        return f"{self.settings.api_base}/resource/{dataset_id}.json"

    def get_headers(self) -> Dict[str, str]:
        """Get default HTTP headers."""
        headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        }
        if self.settings.app_token:
            headers["X-App-Token"] = self.settings.app_token
        return headers

    def timeout_for(self, dataset: DatasetConfig, timeout: Optional[float] = None) -> aiohttp.ClientTimeout:
        """Per-call timeout: explicit value, else core or default timeout."""
        if timeout is None:
            timeout = self.settings.core_timeout if dataset.core else self.settings.default_timeout
        return aiohttp.ClientTimeout(total=timeout)

    async def fetch(
        self,
        session: aiohttp.ClientSession,
        key: str,
        params: Dict[str, Any],
        timeout: Optional[float] = None,
    ) -> DatasetResult:
        """
        Query a dataset.

        Args:
            session: aiohttp session
            key: Semantic dataset key (see config.datasets)
            params: SoQL query parameters
            timeout: Override timeout in seconds

        Returns:
            DatasetResult with records, or a failed result on any error
        """
        dataset = get_dataset(key)
        url = self._build_resource_url(dataset.dataset_id)
        query = {name: str(value) for name, value in params.items()}

        try:
            async with session.get(
                url,
                params=query,
                headers=self.get_headers(),
                timeout=self.timeout_for(dataset, timeout),
            ) as resp:
                if resp.status != 200:
                    logger.warning(f"{key}: HTTP {resp.status}")
                    return DatasetResult.failed(key, f"HTTP {resp.status}")

                data = await resp.json(content_type=None)

        except asyncio.TimeoutError:
            logger.warning(f"{key}: request timeout")
            return DatasetResult.failed(key, "Request timeout")
        except (aiohttp.ClientError, ValueError) as e:
            logger.warning(f"{key}: {type(e).__name__}: {e}")
            return DatasetResult.failed(key, str(e) or type(e).__name__)

        # Socrata reports query errors as a JSON object
        if not isinstance(data, list):
            message = data.get("message", "Unexpected payload") if isinstance(data, dict) else "Unexpected payload"
            logger.warning(f"{key}: {message}")
            return DatasetResult.failed(key, message)

        # Reducers read rows as objects
        if not all(isinstance(row, dict) for row in data):
            logger.warning(f"{key}: non-object rows in payload")
            return DatasetResult.failed(key, "Unexpected payload")

        logger.debug(f"{key}: {len(data)} records")
        return DatasetResult(dataset=key, records=data)

    async def fetch_nearby(
        self,
        session: aiohttp.ClientSession,
        key: str,
        point: Optional[Point],
        radius_m: int,
        fallback_params: Dict[str, Any],
        geo_fields: Optional[Iterable[str]] = None,
        limit: int = 300,
    ) -> DatasetResult:
        """
        Proximity query that tolerates differing geometry column names.

        Tries within_circle on each candidate geometry field in order and
        returns the first attempt with rows. Falls back to a plain query when
        every spatial attempt is empty or no point is available.

        Args:
            session: aiohttp session
            key: Semantic dataset key
            point: (lat, lng) of the building, or None
            radius_m: Search radius in meters
            fallback_params: Non-spatial query used when spatial attempts fail
            geo_fields: Candidate geometry columns (defaults to the dataset's)
            limit: Row limit for spatial attempts

        Returns:
            DatasetResult from the first productive attempt
        """
        if point is not None:
            fields = tuple(geo_fields) if geo_fields is not None else get_dataset(key).geo_fields
            for field in fields:
                result = await self.fetch(session, key, {
                    "$where": within_circle(field, point[0], point[1], radius_m),
                    "$limit": limit,
                })
                if result.rows:
                    return result
                logger.debug(f"{key}: no rows via {field}, trying next field")

        return await self.fetch(session, key, fallback_params)

    def create_connector(self) -> aiohttp.TCPConnector:
        """Create a TCP connector sized for a full fan-out."""
        return aiohttp.TCPConnector(limit=self.settings.max_connections)

    def create_session(self) -> aiohttp.ClientSession:
        """Create a client session for one or many lookups."""
        return aiohttp.ClientSession(connector=self.create_connector())
