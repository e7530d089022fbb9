"""
Building health score engine.

The overall score starts at 100 and subtracts a capped penalty per risk
signal. Category sub-scores are a separate display breakdown and do not
add up to the overall score.
"""

import math
from typing import List

from building_health.models.report import CategoryScore, HealthScore, RiskCounts
from building_health.normalizers.base import js_round

# (field, points per item, max penalty)
PENALTIES = [
    ("class_c", 15, 45),
    ("class_b", 5, 25),
    ("class_a", 1, 10),
    ("hpd_open", 1, 10),
    ("dob_open", 3, 15),
    ("ecb_open", 2, 10),
    ("heat_complaints", 4, 16),
    ("open_litigations", 6, 18),
    ("evictions_3y", 4, 12),
    ("rodent_failures", 3, 9),
    ("bedbugs", 5, 15),
]

# (minimum score, grade, label), highest first
GRADES = [
    (90, "A", "Excellent"),
    (80, "B", "Good"),
    (70, "C", "Fair"),
    (55, "D", "Poor"),
]
FAILING = ("F", "Critical")

CRIME_LEVELS = [
    (70, "LOW"),
    (50, "MODERATE"),
    (30, "HIGH"),
]
WORST_CRIME_LEVEL = "VERY HIGH"


def compute_score(counts: RiskCounts) -> int:
    """Overall 0-100 score from risk counts."""
    score = 100
    for field, points, cap in PENALTIES:
        score -= min(getattr(counts, field) * points, cap)
    return max(0, min(100, score))


def grade_for(score: int) -> str:
    for minimum, grade, _ in GRADES:
        if score >= minimum:
            return grade
    return FAILING[0]


def label_for(score: int) -> str:
    for minimum, _, label in GRADES:
        if score >= minimum:
            return label
    return FAILING[1]


def build_health_score(counts: RiskCounts, complaints_1y: int = 0) -> HealthScore:
    """
    Score, grade and label along with the breakdown shown next to them.

    Args:
        counts: Risk counts for the building
        complaints_1y: HPD complaints received in the past year
    """
    overall = compute_score(counts)
    return HealthScore(
        overall=overall,
        grade=grade_for(overall),
        label=label_for(overall),
        breakdown={
            "hpdViolations": counts.hpd_open,
            "dobViolations": counts.dob_open,
            "ecbViolations": counts.ecb_open,
            "complaints": complaints_1y,
            "litigations": counts.open_litigations,
            "evictions": counts.evictions_3y,
            "pests": counts.rodent_failures + counts.bedbugs,
        },
    )


def crime_score(total: int, violent: int) -> int:
    """Neighborhood safety score from incident counts within 500 m."""
    return max(0, js_round(100 - math.log10(total + 1) * 25 - violent * 3))


def crime_level(score: int) -> str:
    for minimum, level in CRIME_LEVELS:
        if score >= minimum:
            return level
    return WORST_CRIME_LEVEL


def category_scores(counts: RiskCounts, crime: int, crime_total: int) -> List[CategoryScore]:
    """Display-only sub-scores, each floored at 0."""
    return [
        CategoryScore(
            "Heat Reliability",
            max(0, 100 - counts.heat_complaints * 12),
            f"{counts.heat_complaints} heat complaints/yr",
        ),
        CategoryScore(
            "Pest Control",
            max(0, 100 - counts.rodent_failures * 10 - counts.bedbugs * 15),
            f"{counts.rodent_failures} rodent fails, {counts.bedbugs} bedbugs",
        ),
        CategoryScore(
            "Maintenance",
            max(0, 100 - counts.hpd_open * 3 - counts.dob_open * 4),
            f"{counts.hpd_open + counts.dob_open} open violations",
        ),
        CategoryScore(
            "Safety",
            max(0, 100 - counts.class_c * 20),
            f"{counts.class_c} Class C violations",
        ),
        CategoryScore(
            "Landlord",
            max(0, 100 - counts.open_litigations * 15),
            f"{counts.open_litigations} legal cases",
        ),
        CategoryScore(
            "Stability",
            max(0, 100 - counts.evictions_3y * 12),
            f"{counts.evictions_3y} evictions (3yr)",
        ),
        CategoryScore("Crime", crime, f"{crime_total} incidents nearby"),
    ]


def neighborhood_score(crime: int, in_flood_zone: bool, in_hurricane_zone: bool) -> int:
    """Half crime score plus up to 50 points each for staying out of flood and hurricane zones."""
    return js_round(crime * 0.5 + (25 if in_flood_zone else 50) + (25 if in_hurricane_zone else 50))


FINANCIAL_LEVELS = [
    (70, "HEALTHY"),
    (50, "FAIR"),
]
WORST_FINANCIAL_LEVEL = "DISTRESSED"


def financial_level(score: int) -> str:
    for minimum, level in FINANCIAL_LEVELS:
        if score >= minimum:
            return level
    return WORST_FINANCIAL_LEVEL


def financial_health(tax_liens: int, hpd_charges: int, ecb_penalties_owed: float) -> dict:
    """
    Owner financial distress summary.

    Args:
        tax_liens: Tax lien sale list appearances (30 points each, up to 60)
        hpd_charges: HPD emergency repair charges billed (5 points each, up to 20)
        ecb_penalties_owed: Unpaid ECB penalty balance (10 points when any is owed)
    """
    score = 100 - min(tax_liens * 30, 60) - min(hpd_charges * 5, 20) - (10 if ecb_penalties_owed > 0 else 0)
    score = max(0, score)
    return {"score": score, "taxLiens": tax_liens, "level": financial_level(score)}
