"""
Dataset fetch result model.

Wraps the outcome of one upstream query so the degrade-to-empty policy is
explicit: callers read `rows`, which is always a list.
"""

from dataclasses import dataclass, field


@dataclass
class DatasetResult:
    """
    Result of a single open data query.

    Contains the returned records and metadata about the fetch.
    """

    dataset: str
    records: list = field(default_factory=list)

    # Errors
    success: bool = True
    error: str = ""

    # Query not issued (e.g. no coordinates for a proximity search)
    skipped: bool = False

    @property
    def rows(self) -> list:
        """Records on success, an empty list on failure."""
        return self.records if self.success else []

    @classmethod
    def failed(cls, dataset: str, error: str) -> "DatasetResult":
        return cls(dataset=dataset, success=False, error=error)

    @classmethod
    def skip(cls, dataset: str) -> "DatasetResult":
        return cls(dataset=dataset, skipped=True)

    def status(self) -> str:
        """Short status label: 'ok', 'empty', 'skipped' or 'error'."""
        if self.skipped:
            return "skipped"
        if not self.success:
            return "error"
        return "ok" if self.records else "empty"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization (without records)."""
        return {
            "dataset": self.dataset,
            "status": self.status(),
            "count": len(self.rows),
            "error": self.error,
        }
