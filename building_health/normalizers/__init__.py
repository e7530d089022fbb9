"""
Per-domain reducers turning raw open data records into report sections.

Every function here is pure: lists of record dicts in, JSON-ready dicts out.
"""

from building_health.normalizers.classify import categorize, classify_311, classify_hpd_complaint
from building_health.normalizers.histograms import count_by, count_by_year, percentage_breakdown, top_counts
from building_health.normalizers.violations import build_violations_section, is_open_dob, is_open_ecb, is_open_hpd
from building_health.normalizers.complaints import (
    build_complaints_section,
    build_noise_section,
    heat_complaints,
)
from building_health.normalizers.signals import build_signals_section
from building_health.normalizers.legal import (
    build_charges_section,
    build_evictions_section,
    build_litigations_section,
    is_open_litigation,
)
from building_health.normalizers.landlord import build_landlord_section, format_contact, partition_contacts

__all__ = [
    # Classification
    "categorize",
    "classify_311",
    "classify_hpd_complaint",
    # Histograms
    "count_by",
    "count_by_year",
    "percentage_breakdown",
    "top_counts",
    # Violations
    "build_violations_section",
    "is_open_dob",
    "is_open_ecb",
    "is_open_hpd",
    # Complaints
    "build_complaints_section",
    "build_noise_section",
    "heat_complaints",
    # Signals
    "build_signals_section",
    # Legal
    "build_charges_section",
    "build_evictions_section",
    "build_litigations_section",
    "is_open_litigation",
    # Landlord
    "build_landlord_section",
    "format_contact",
    "partition_contacts",
]
