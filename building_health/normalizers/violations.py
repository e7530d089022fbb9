"""
HPD, DOB and ECB violation reducers.
"""

from typing import List

from building_health.normalizers.base import first_text, lower, record_id, to_number
from building_health.normalizers.classify import categorize
from building_health.normalizers.histograms import count_by, count_by_year
from building_health.utils.dates import sort_key, year_of

RECENT_HPD_LIMIT = 40
RECENT_DOB_LIMIT = 25
RECENT_MERGED_LIMIT = 50

# HPD yearly histogram starts here
FIRST_HISTORY_YEAR = 2010


def is_open_hpd(violation: dict) -> bool:
    """Open when the status mentions 'open' or there is no status date."""
    return "open" in lower(violation, "currentstatus") or not violation.get("currentstatusdate")


def is_open_dob(violation: dict) -> bool:
    """Open when issued and not yet disposed."""
    return bool(violation.get("issue_date")) and not violation.get("disposition_date")


def is_open_ecb(violation: dict) -> bool:
    """Open unless the ECB status reads resolved or dismissed."""
    status = lower(violation, "ecb_violation_status")
    return "resolve" not in status and "dismiss" not in status


def hpd_by_year(violations: List[dict]) -> dict:
    """Per-year totals and per-class counts since 2010."""
    by_year = {}
    for v in violations:
        year = year_of(first_text(v, "inspectiondate", "novissueddate"))
        if not year.isdigit() or int(year) < FIRST_HISTORY_YEAR:
            continue
        bucket = by_year.setdefault(year, {"total": 0, "a": 0, "b": 0, "c": 0})
        bucket["total"] += 1
        violation_class = v.get("class")
        if violation_class in ("A", "B", "C"):
            bucket[violation_class.lower()] += 1
    return by_year


def summarize_hpd(violations: List[dict]) -> dict:
    """HPD violation totals, open counts by class and histograms."""
    open_violations = [v for v in violations if is_open_hpd(v)]
    return {
        "total": len(violations),
        "open": len(open_violations),
        "classA": sum(1 for v in open_violations if v.get("class") == "A"),
        "classB": sum(1 for v in open_violations if v.get("class") == "B"),
        "classC": sum(1 for v in open_violations if v.get("class") == "C"),
        "byYear": hpd_by_year(violations),
        "byCategory": count_by(violations, lambda v: categorize(first_text(v, "novdescription"))),
    }


def recent_hpd(violations: List[dict], limit: int = RECENT_HPD_LIMIT) -> List[dict]:
    return [
        {
            "id": record_id(v, "violationid", "HPD", i),
            "source": "HPD",
            "date": first_text(v, "inspectiondate", "novissueddate"),
            "class": first_text(v, "class", default="A"),
            "type": first_text(v, "novtype"),
            "description": first_text(v, "novdescription", default="No description"),
            "status": "Open" if "open" in lower(v, "currentstatus") else "Closed",
            "unit": first_text(v, "apartment"),
            "story": first_text(v, "story"),
            "category": categorize(first_text(v, "novdescription")),
        }
        for i, v in enumerate(violations[:limit])
    ]


def summarize_dob(violations: List[dict]) -> dict:
    return {
        "total": len(violations),
        "open": sum(1 for v in violations if is_open_dob(v)),
        "byYear": count_by_year(violations, "issue_date"),
    }


def recent_dob(violations: List[dict], limit: int = RECENT_DOB_LIMIT) -> List[dict]:
    return [
        {
            "id": record_id(v, "isn_dob_bis_extract", "DOB", i),
            "source": "DOB",
            "date": first_text(v, "issue_date"),
            "type": first_text(v, "violation_type"),
            "description": first_text(v, "description", "violation_type_description"),
            "status": "Closed" if v.get("disposition_date") else "Open",
            "category": categorize(first_text(v, "description")),
        }
        for i, v in enumerate(violations[:limit])
    ]


def summarize_ecb(violations: List[dict]) -> dict:
    return {
        "total": len(violations),
        "open": sum(1 for v in violations if is_open_ecb(v)),
        "penaltiesOwed": sum(to_number(v.get("penalty_balance_due")) for v in violations),
    }


def merge_recent(*groups: List[dict], limit: int) -> List[dict]:
    """Concatenate recent samples and keep the newest `limit` by date."""
    merged = [item for group in groups for item in group]
    merged.sort(key=lambda item: sort_key(item.get("date")), reverse=True)
    return merged[:limit]


def build_violations_section(hpd: List[dict], dob: List[dict], ecb: List[dict], safety: List[dict]) -> dict:
    """Assemble the report's `violations` section."""
    return {
        "hpd": summarize_hpd(hpd),
        "dob": summarize_dob(dob),
        "ecb": summarize_ecb(ecb),
        "safety": {"total": len(safety)},
        "recent": merge_recent(recent_hpd(hpd), recent_dob(dob), limit=RECENT_MERGED_LIMIT),
    }
