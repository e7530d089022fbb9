"""
Red flags and the unified building timeline.
"""

from typing import List, Optional

from building_health.models.report import RedFlag, RiskCounts, TimelineEvent
from building_health.utils.dates import format_money, sort_key

TIMELINE_LIMIT = 100

HEAT_FLAG_THRESHOLD = 5
BEDBUG_FLAG_THRESHOLD = 2


def build_red_flags(
    counts: RiskCounts,
    programs: dict,
    flood: dict,
    tax_liens: Optional[dict] = None,
) -> List[RedFlag]:
    """
    Rule-based red flags, in display order.

    Args:
        counts: Risk counts for the building
        programs: The report's `programs` section
        flood: The report's `flood` section
        tax_liens: The report's `taxLiens` section
    """
    flags = []
    if counts.class_c > 0:
        flags.append(RedFlag("critical", f"{counts.class_c} Class C Violations", "Immediately hazardous conditions."))
    if programs.get("aep"):
        flags.append(RedFlag("critical", "Alternative Enforcement Program", "HPD worst buildings list."))
    if counts.heat_complaints >= HEAT_FLAG_THRESHOLD:
        flags.append(RedFlag("critical", f"{counts.heat_complaints} Heat Complaints", "Chronic heat/hot water issues."))
    if counts.bedbugs >= BEDBUG_FLAG_THRESHOLD:
        flags.append(RedFlag("critical", f"{counts.bedbugs} Bedbug Reports", "Multiple bedbug filings."))
    if flood.get("inFloodZone"):
        flags.append(RedFlag("warning", f"Flood Zone {flood.get('floodZoneType')}", "FEMA flood risk area."))
    if flood.get("inHurricaneZone"):
        flags.append(RedFlag("info", f"Hurricane Zone {flood.get('hurricaneZone')}", "Evacuation zone during hurricanes."))
    if programs.get("vacateOrder"):
        flags.append(RedFlag("critical", "Vacate Order", "HPD or DOB ordered all or part of the building vacated."))
    if tax_liens and tax_liens.get("count"):
        flags.append(RedFlag("warning", "Tax Lien Sale", "City sold a lien on unpaid property charges."))
    return flags


def build_timeline(
    hpd_violations: List[dict],
    dob_violations: List[dict],
    hpd_complaints: List[dict],
    sales: List[dict],
    limit: int = TIMELINE_LIMIT,
) -> List[TimelineEvent]:
    """
    Merge recent violations, complaints and sales into one dated timeline.

    Items without a date are dropped; the rest are sorted newest first.
    """
    events = []
    for v in hpd_violations:
        if v.get("date"):
            events.append(TimelineEvent(v["date"], "violation", f"HPD {v.get('class')}", v.get("description", "")))
    for v in dob_violations:
        if v.get("date"):
            events.append(TimelineEvent(v["date"], "violation", "DOB", v.get("description", "")))
    for c in hpd_complaints:
        if c.get("date"):
            events.append(TimelineEvent(c["date"], "complaint", "HPD", f"{c.get('type')} complaint"))
    for s in sales:
        if s.get("date"):
            events.append(TimelineEvent(s["date"], "sale", "ACRIS", f"Sold for {format_money(s.get('amount', 0))}"))

    events.sort(key=lambda e: sort_key(e.date), reverse=True)
    return events[:limit]
