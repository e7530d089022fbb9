"""Storage modules for building reports."""

from building_health.storage.exporter import ReportExporter

__all__ = [
    "ReportExporter",
]
