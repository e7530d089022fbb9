"""
HPD, DOB and 311 complaint reducers.
"""

from datetime import date
from typing import List

from building_health.normalizers.base import first_text, record_id
from building_health.normalizers.classify import (
    HEAT,
    NOISE,
    categorize,
    classify_311,
    classify_hpd_complaint,
)
from building_health.normalizers.histograms import count_by, count_by_year, percentage_breakdown, top_counts
from building_health.normalizers.violations import merge_recent
from building_health.utils.dates import on_or_after

RECENT_HPD_LIMIT = 25
RECENT_DOB_LIMIT = 15
RECENT_311_LIMIT = 15
RECENT_MERGED_LIMIT = 40
CATEGORY_LIMIT = 8
NOISE_TYPE_LIMIT = 10


def hpd_complaint_type(complaint: dict) -> str:
    return first_text(complaint, "complainttype", "majorcategory")


def heat_complaints(complaints: List[dict], since: date) -> int:
    """HPD heat/hot water complaints received on or after `since`."""
    return sum(
        1
        for c in complaints
        if on_or_after(c.get("receiveddate"), since) and classify_hpd_complaint(hpd_complaint_type(c)) == HEAT
    )


def recent_hpd_complaints(complaints: List[dict], limit: int = RECENT_HPD_LIMIT) -> List[dict]:
    return [
        {
            "id": record_id(c, "complaintid", "HPD", i),
            "source": "HPD",
            "date": first_text(c, "receiveddate"),
            "type": hpd_complaint_type(c) or "Unknown",
            "status": first_text(c, "status", default="Unknown"),
            "unit": first_text(c, "apartment"),
        }
        for i, c in enumerate(complaints[:limit])
    ]


def recent_dob_complaints(complaints: List[dict], limit: int = RECENT_DOB_LIMIT) -> List[dict]:
    return [
        {
            "id": record_id(c, "complaint_number", "DOB", i),
            "source": "DOB",
            "date": first_text(c, "date_entered"),
            "type": first_text(c, "complaint_category", default="DOB"),
            "status": first_text(c, "status", default="Unknown"),
        }
        for i, c in enumerate(complaints[:limit])
    ]


def recent_311(requests: List[dict], limit: int = RECENT_311_LIMIT) -> List[dict]:
    return [
        {
            "id": record_id(r, "unique_key", "311", i),
            "source": "311",
            "date": first_text(r, "created_date"),
            "type": first_text(r, "complaint_type"),
            "descriptor": first_text(r, "descriptor"),
            "status": first_text(r, "status"),
        }
        for i, r in enumerate(requests[:limit])
    ]


def build_complaints_section(hpd: List[dict], dob: List[dict], sr311: List[dict], since: date) -> dict:
    """
    Assemble the report's `complaints` section.

    Args:
        hpd: HPD complaint records
        dob: DOB complaint records
        sr311: 311 service requests
        since: Start of the "recent year" window
    """
    by_category = count_by(hpd, lambda c: categorize(hpd_complaint_type(c)))
    return {
        "hpd": {
            "total": len(hpd),
            "recentYear": sum(1 for c in hpd if on_or_after(c.get("receiveddate"), since)),
            "heatHotWater": heat_complaints(hpd, since),
            "byYear": count_by_year(hpd, "receiveddate"),
        },
        "dob": {
            "total": len(dob),
            "recentYear": sum(1 for c in dob if on_or_after(c.get("date_entered"), since)),
        },
        "sr311": {
            "total": len(sr311),
            "byType": count_by(sr311, lambda r: first_text(r, "complaint_type", default="Other")),
        },
        "recent": merge_recent(
            recent_hpd_complaints(hpd),
            recent_dob_complaints(dob),
            recent_311(sr311),
            limit=RECENT_MERGED_LIMIT,
        ),
        "byCategory": percentage_breakdown(by_category, CATEGORY_LIMIT),
    }


def build_noise_section(sr311: List[dict]) -> dict:
    """311 noise requests grouped by descriptor."""
    noise = [r for r in sr311 if classify_311(r.get("complaint_type"), r.get("descriptor")) == NOISE]
    by_type = count_by(noise, lambda r: first_text(r, "descriptor", "complaint_type", default="Noise"))
    return {"total": len(noise), "byType": top_counts(by_type, NOISE_TYPE_LIMIT)}

