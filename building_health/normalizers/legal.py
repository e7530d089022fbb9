"""
Litigation, charge, eviction and housing court reducers.
"""

from datetime import date
from typing import List

from building_health.normalizers.base import first_text, lower, record_id, to_number
from building_health.normalizers.histograms import count_by, count_by_year
from building_health.utils.dates import on_or_after

RECENT_LIMIT = 15


def is_open_litigation(litigation: dict) -> bool:
    return "closed" not in lower(litigation, "casestatus")


def build_litigations_section(litigations: List[dict]) -> dict:
    return {
        "total": len(litigations),
        "open": sum(1 for lit in litigations if is_open_litigation(lit)),
        "totalPenalties": sum(to_number(lit.get("penalty")) for lit in litigations),
        "byType": count_by(litigations, lambda lit: first_text(lit, "casetype", default="Other")),
        "recent": [
            {
                "id": record_id(lit, "litigationid", "LIT", i),
                "caseType": lit.get("casetype"),
                "caseOpenDate": lit.get("caseopendate"),
                "caseStatus": lit.get("casestatus"),
                "penalty": to_number(lit.get("penalty")) if lit.get("penalty") else None,
                "findingDate": lit.get("findingdate"),
            }
            for i, lit in enumerate(litigations[:RECENT_LIMIT])
        ],
    }


def build_charges_section(charges: List[dict]) -> dict:
    return {
        "total": len(charges),
        "totalAmount": sum(to_number(c.get("charge")) for c in charges),
    }


def build_evictions_section(evictions: List[dict], filings: List[dict], since: date) -> dict:
    """
    Assemble the report's `evictions` section.

    Args:
        evictions: Executed marshal evictions
        filings: Housing court filings
        since: Start of the three-year window
    """
    return {
        "total": len(evictions),
        "last3Years": sum(1 for e in evictions if on_or_after(e.get("executed_date"), since)),
        "byYear": count_by_year(evictions, "executed_date"),
        "recent": [
            {
                "id": record_id(e, "unique_id", "EVICT", i),
                "executedDate": e.get("executed_date"),
                "type": e.get("residential_commercial"),
                "marshal": e.get("marshal_last_name"),
            }
            for i, e in enumerate(evictions[:RECENT_LIMIT])
        ],
        "filings": {
            "total": len(filings),
            "last3Years": sum(1 for f in filings if on_or_after(f.get("fileddate"), since)),
            "byYear": count_by_year(filings, "fileddate"),
            "recent": [
                {
                    "id": record_id(f, "index_number", "COURT", i),
                    "filedDate": f.get("fileddate"),
                    "caseType": first_text(f, "casetype", "classification") or None,
                    "status": f.get("status"),
                    "courtType": first_text(f, "court", default="Housing Court"),
                }
                for i, f in enumerate(filings[:RECENT_LIMIT])
            ],
        },
    }
