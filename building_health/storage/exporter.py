"""
Report export utilities.

Writes building reports to JSON and the per-source fetch status to CSV.
"""

import csv
import json
from pathlib import Path
from typing import Dict, Optional

from building_health.utils.logging import get_logger

logger = get_logger()

SOURCE_COLUMNS = ["dataset", "status", "count", "error"]


class ReportExporter:
    """Exports building reports to files."""

    def __init__(self, output_dir: Path):
        """
        Initialize report exporter.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = output_dir

    def report_path(self, report: Dict) -> Path:
        bbl = (report.get("building") or {}).get("bbl") or "unknown"
        return self.output_dir / f"building_{bbl}.json"

    def export_report(self, report: Dict, path: Optional[Path] = None) -> Path:
        """Export a building report to JSON."""
        path = path or self.report_path(report)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._write_json(path, report)
        logger.info(f"Exported report to {path}")
        return path

    def export_sources_csv(self, report: Dict, path: Optional[Path] = None) -> Path:
        """Export the fetch status of every source to CSV."""
        path = path or self.report_path(report).with_name(self.report_path(report).stem + "_sources.csv")
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=SOURCE_COLUMNS)
            writer.writeheader()
            for source in report.get("sources", {}).values():
                writer.writerow({c: source.get(c, "") for c in SOURCE_COLUMNS})
        return path

    def _write_json(self, path: Path, data: Dict) -> None:
        """Write data to JSON file."""
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
