"""
Date helpers for lookback windows and loosely formatted upstream dates.

Open data sources mix ISO timestamps ('2024-01-05T00:00:00.000'), compact
dates ('20240105') and US dates ('01/05/2024').
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Windows:
    """Lookback cutoffs: first day of the current month N years ago."""

    today: date
    y1: date
    y2: date
    y3: date
    y5: date

    @classmethod
    def for_day(cls, today: date) -> "Windows":
        return cls(
            today=today,
            y1=years_back(today, 1),
            y2=years_back(today, 2),
            y3=years_back(today, 3),
            y5=years_back(today, 5),
        )


def years_back(today: date, years: int) -> date:
    """First day of today's month, `years` years earlier."""
    return date(today.year - years, today.month, 1)


def parse_date(value) -> Optional[datetime]:
    """
    Parse an upstream date value.

    Returns:
        datetime, or None when missing or unparseable
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()

    if len(text) == 8 and text.isdigit():
        fmt = "%Y%m%d"
    elif len(text) >= 19 and text[4] == "-" and text[10] == "T":
        text = text[:19]
        fmt = "%Y-%m-%dT%H:%M:%S"
    elif len(text) >= 10 and text[4] == "-":
        text = text[:10]
        fmt = "%Y-%m-%d"
    elif len(text) >= 10 and text[2] == "/":
        text = text[:10]
        fmt = "%m/%d/%Y"
    else:
        return None

    try:
        return datetime.strptime(text, fmt)
    except ValueError:
        return None


def on_or_after(value, cutoff: date) -> bool:
    """True when value parses to a date on or after cutoff."""
    parsed = parse_date(value)
    return parsed is not None and parsed.date() >= cutoff


def sort_key(value) -> datetime:
    """Sort key that places missing or unparseable dates last when sorting descending."""
    return parse_date(value) or datetime.min


def year_of(value) -> str:
    """First four characters of a date field (its year), or ''."""
    if not value or not isinstance(value, str):
        return ""
    return value[:4]


def format_money(amount: float) -> str:
    """Compact dollar label: $1.2M, $450K, $900."""
    if amount >= 1e6:
        return f"${amount / 1e6:.1f}M"
    if amount >= 1e3:
        return f"${amount / 1e3:.0f}K"
    if float(amount).is_integer():
        return f"${int(amount)}"
    return f"${amount}"


def format_short_date(value) -> str:
    """Format a date like 'Jan 5, 2024', or '' when unparseable."""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return f"{parsed:%b} {parsed.day}, {parsed.year}"
