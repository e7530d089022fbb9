"""Pure frequency reductions over record lists."""

from collections import Counter
from typing import Callable, Iterable, List

from building_health.utils.dates import year_of


def count_by(records: Iterable[dict], key_fn: Callable[[dict], str]) -> dict:
    """Frequency map of key_fn(record), skipping empty keys."""
    counts = Counter()
    for record in records:
        key = key_fn(record)
        if key:
            counts[key] += 1
    return dict(counts)


def count_by_year(records: Iterable[dict], *date_fields: str) -> dict:
    """Frequency map by year of the first present date field."""
    def year(record: dict) -> str:
        for field in date_fields:
            if record.get(field):
                return year_of(record[field])
        return ""
    return count_by(records, year)


def top_counts(counts: dict, limit: int, key_name: str = "type") -> List[dict]:
    """Entries sorted by count descending, as [{key_name: k, 'count': n}]."""
    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [{key_name: k, "count": n} for k, n in ordered[:limit]]


def percentage_breakdown(counts: dict, limit: int, key_name: str = "category") -> List[dict]:
    """Top entries with their integer share of the total (0 when empty)."""
    total = sum(counts.values())
    return [
        {
            key_name: entry[key_name],
            "count": entry["count"],
            "pct": int(entry["count"] / total * 100 + 0.5) if total else 0,
        }
        for entry in top_counts(counts, limit, key_name)
    ]
