"""
Activity signals for the building page chart.

Counts dated violations, complaints, permit filings and 311 requests over
trailing windows (30 days, 90 days, 1 year, 3 years) and lays the same events
out as daily, weekly and monthly series.
"""

from datetime import date, timedelta
from typing import Callable, List, Optional, Tuple

from building_health.normalizers.classify import SIGNAL_KEYS, classify_311, classify_hpd_complaint
from building_health.normalizers.complaints import hpd_complaint_type
from building_health.utils.dates import parse_date

WINDOWS = (("30d", 30), ("90d", 90), ("1y", 365), ("3y", 1095))
KINDS = ("violations", "complaints", "permits", "sr311")

DAILY_DAYS = 30
WEEKLY_WEEKS = 13
MONTHLY_MONTHS = 36

# (day, kind, heat/pests/noise/other or None)
Event = Tuple[date, str, Optional[str]]


def _day(value) -> Optional[date]:
    parsed = parse_date(value)
    return parsed.date() if parsed else None


def collect_events(
    hpd_violations: List[dict],
    dob_violations: List[dict],
    hpd_complaints: List[dict],
    dob_complaints: List[dict],
    permits: List[dict],
    sr311: List[dict],
) -> List[Event]:
    """Flatten every dated record into (day, kind, signal) events."""
    raw = []
    raw += [(v.get("inspectiondate") or v.get("novissueddate"), "violations", None) for v in hpd_violations]
    raw += [(v.get("issue_date"), "violations", None) for v in dob_violations]
    raw += [
        (c.get("receiveddate"), "complaints", classify_hpd_complaint(hpd_complaint_type(c)))
        for c in hpd_complaints
    ]
    raw += [(c.get("date_entered"), "complaints", None) for c in dob_complaints]
    raw += [(p.get("filing_date"), "permits", None) for p in permits]
    raw += [
        (r.get("created_date"), "sr311", classify_311(r.get("complaint_type"), r.get("descriptor")))
        for r in sr311
    ]

    events = []
    for value, kind, signal in raw:
        day = _day(value)
        if day is not None:
            events.append((day, kind, signal))
    return events


def window_counts(events: List[Event], today: date, days: int) -> dict:
    """Per-kind totals on or after `days` days ago, with the signal split."""
    since = today - timedelta(days=days)
    counts = dict.fromkeys(KINDS, 0)
    by_signal = dict.fromkeys(SIGNAL_KEYS, 0)
    for day, kind, signal in events:
        if day < since:
            continue
        counts[kind] += 1
        if signal:
            by_signal[signal] += 1
    counts["bySignal"] = by_signal
    return counts


def bucket_series(events: List[Event], labels: List[str], bucket_of: Callable[[date], Optional[str]]) -> List[dict]:
    """One point per label, oldest first, counting events by kind."""
    points = {label: dict(date=label, **dict.fromkeys(KINDS, 0)) for label in labels}
    for day, kind, _ in events:
        label = bucket_of(day)
        if label in points:
            points[label][kind] += 1
    return list(points.values())


def _month_label(today: date, months_back: int) -> str:
    year, month = divmod(today.year * 12 + today.month - 1 - months_back, 12)
    return f"{year:04d}-{month + 1:02d}"


def _week_start(today: date, day: date) -> Optional[str]:
    age = (today - day).days
    if age < 0:
        return None
    return (today - timedelta(days=(age // 7) * 7 + 6)).isoformat()


def build_signals_section(
    hpd_violations: List[dict],
    dob_violations: List[dict],
    hpd_complaints: List[dict],
    dob_complaints: List[dict],
    permits: List[dict],
    sr311: List[dict],
    today: date,
) -> dict:
    """
    Assemble the report's `signals` section.

    Returns:
        {'windows': {'30d'|'90d'|'1y'|'3y': counts},
         'series': {'daily30': [...], 'weekly90': [...], 'monthly36': [...]}}
        Series points carry a `date` label (day, week start or YYYY-MM).
    """
    events = collect_events(hpd_violations, dob_violations, hpd_complaints, dob_complaints, permits, sr311)

    days = [(today - timedelta(days=i)).isoformat() for i in range(DAILY_DAYS - 1, -1, -1)]
    weeks = [(today - timedelta(days=i * 7 + 6)).isoformat() for i in range(WEEKLY_WEEKS - 1, -1, -1)]
    months = [_month_label(today, i) for i in range(MONTHLY_MONTHS - 1, -1, -1)]

    return {
        "windows": {name: window_counts(events, today, n) for name, n in WINDOWS},
        "series": {
            "daily30": bucket_series(events, days, lambda d: d.isoformat()),
            "weekly90": bucket_series(events, weeks, lambda d: _week_start(today, d)),
            "monthly36": bucket_series(events, months, lambda d: f"{d.year:04d}-{d.month:02d}"),
        },
    }
