"""
Report-related data models.

Contains dataclasses for the scored parts of a building report: the risk
counts that feed the score, the score itself, category sub-scores, red flags,
timeline events and landlord contacts.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RiskCounts:
    """
    Risk signal counts extracted from the aggregated datasets.

    All counts are non-negative; they default to 0 when a source is empty.
    """

    class_c: int = 0              # Open HPD Class C violations
    class_b: int = 0              # Open HPD Class B violations
    class_a: int = 0              # Open HPD Class A violations
    hpd_open: int = 0             # All open HPD violations
    dob_open: int = 0             # Open DOB violations
    ecb_open: int = 0             # Open ECB violations
    heat_complaints: int = 0      # HPD heat/hot water complaints, past year
    open_litigations: int = 0     # Open HPD litigations
    evictions_3y: int = 0         # Executed evictions, past 3 years
    rodent_failures: int = 0      # Failed rodent inspections
    bedbugs: int = 0              # Bedbug filings


@dataclass
class HealthScore:
    """Composite 0-100 building health score."""

    overall: int
    grade: str
    label: str
    breakdown: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "overall": self.overall,
            "grade": self.grade,
            "label": self.label,
            "breakdown": self.breakdown,
        }


@dataclass
class CategoryScore:
    """Display-only sub-score for one category."""

    name: str
    score: int
    detail: str = ""

    def to_dict(self) -> dict:
        return {"name": self.name, "score": self.score, "detail": self.detail}


@dataclass
class RedFlag:
    """A notable risk surfaced to the reader."""

    severity: str  # "critical", "warning" or "info"
    title: str
    description: str = ""

    def to_dict(self) -> dict:
        return {"severity": self.severity, "title": self.title, "description": self.description}


@dataclass
class TimelineEvent:
    """A dated event on the unified building timeline."""

    date: str
    type: str  # "violation", "complaint" or "sale"
    source: str
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "type": self.type,
            "source": self.source,
            "description": self.description,
        }


@dataclass
class Contact:
    """A landlord registration contact."""

    name: str = "Unknown"
    title: str = ""
    corporation: str = ""
    address: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "title": self.title,
            "corporation": self.corporation,
            "address": self.address,
        }
