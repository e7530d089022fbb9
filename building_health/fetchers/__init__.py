"""Async HTTP fetchers for NYC Open Data."""

from building_health.fetchers.base import SocrataFetcher
from building_health.fetchers.fanout import gather_keyed

__all__ = [
    "SocrataFetcher",
    "gather_keyed",
]
