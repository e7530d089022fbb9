"""Data models for the building lookup."""

from building_health.models.bbl import BBL, normalize_bbl, parse_bbl
from building_health.models.results import DatasetResult
from building_health.models.report import (
    RiskCounts,
    HealthScore,
    CategoryScore,
    RedFlag,
    TimelineEvent,
    Contact,
)

__all__ = [
    "BBL",
    "normalize_bbl",
    "parse_bbl",
    "DatasetResult",
    "RiskCounts",
    "HealthScore",
    "CategoryScore",
    "RedFlag",
    "TimelineEvent",
    "Contact",
]
