"""
Landlord section: HPD registration, contacts and the owner's portfolio.
"""

import re
from typing import List, Optional, Tuple

from building_health.config.reference import BOROUGH_CODES
from building_health.models.report import Contact
from building_health.normalizers.base import first_text, lower
from building_health.utils.dates import format_short_date

PORTFOLIO_LIMIT = 20

OWNER_WORDS = ("owner", "head", "corporate")
AGENT_WORDS = ("agent", "manag", "site")
SITE_WORDS = ("site",)


def _join(*parts: str) -> str:
    return re.sub(r"\s+", " ", " ".join(parts)).strip()


def contact_address(record: dict) -> str:
    """Business address of a contact, or '' without a house number."""
    if not record.get("businesshousenumber"):
        return ""
    return _join(
        first_text(record, "businesshousenumber"),
        first_text(record, "businessstreetname"),
        first_text(record, "businessapartment"),
        first_text(record, "businesscity") + ",",
        first_text(record, "businessstate"),
        first_text(record, "businesszip"),
    )


def format_contact(record: dict) -> Contact:
    """Contact with name falling back to corporation, then 'Unknown'."""
    person = _join(first_text(record, "firstname"), first_text(record, "lastname"))
    return Contact(
        name=person or first_text(record, "corporationname", default="Unknown"),
        title=first_text(record, "type"),
        corporation=first_text(record, "corporationname"),
        address=contact_address(record),
    )


def _has_type(record: dict, words) -> bool:
    contact_type = lower(record, "type")
    return any(w in contact_type for w in words)


def partition_contacts(contacts: List[dict]) -> Tuple[List[dict], List[dict], List[dict]]:
    """Split registration contacts into (owners, agents, site managers) by type."""
    owners = [c for c in contacts if _has_type(c, OWNER_WORDS)]
    agents = [c for c in contacts if _has_type(c, AGENT_WORDS)]
    site = [c for c in contacts if _has_type(c, SITE_WORDS)]
    return owners, agents, site


def landlord_name(registration: Optional[dict], pluto_owner: str = "") -> str:
    """Registered corporation, else registered owner, else PLUTO owner."""
    if registration:
        if registration.get("corporationname"):
            return registration["corporationname"]
        if registration.get("ownerfirstname"):
            return _join(registration["ownerfirstname"], first_text(registration, "ownerlastname"))
    return pluto_owner or "Unknown"


def portfolio_entries(buildings: List[dict], subject_bbl: str, limit: int = PORTFOLIO_LIMIT) -> List[dict]:
    """Other buildings under the same registration, excluding the subject."""
    others = [b for b in buildings if str(b.get("bbl", "")) != subject_bbl]
    return [
        {
            "bbl": b.get("bbl"),
            "address": _join(first_text(b, "housenumber"), first_text(b, "streetname")),
            "borough": BOROUGH_CODES.get(b.get("borough"), b.get("borough")),
            "zipcode": b.get("zip"),
        }
        for b in others[:limit]
    ]


def build_landlord_section(
    registrations: List[dict],
    contacts: List[dict],
    portfolio: List[dict],
    subject_bbl: str,
    pluto_owner: str = "",
) -> dict:
    """
    Assemble the report's `landlord` section.

    Args:
        registrations: HPD registration rows (the first is used)
        contacts: Registration contacts
        portfolio: Buildings sharing the registration id
        subject_bbl: Padded BBL of the building itself
        pluto_owner: PLUTO owner name, used as a last resort
    """
    registration = registrations[0] if registrations else {}
    owners, agents, site = partition_contacts(contacts)

    registered = ""
    expires = ""
    if registration.get("registrationenddate"):
        last = first_text(registration, "lastregistrationdate", "registrationenddate")
        registered = f"Last registered: {format_short_date(last)}"
        expires = f"Expires: {format_short_date(registration['registrationenddate'])}"

    management = first_text(agents[0], "corporationname") if agents else ""

    return {
        "name": landlord_name(registration, pluto_owner),
        "type": "corporation" if registration.get("corporationname") else "individual",
        "registrationId": first_text(registration, "registrationid"),
        "registrationDate": registered,
        "registrationExpires": expires,
        "managementCompany": management or first_text(registration, "managementagent"),
        "owners": [format_contact(c).to_dict() for c in owners],
        "agents": [format_contact(c).to_dict() for c in agents],
        "siteManagers": [format_contact(c).to_dict() for c in site],
        "allContacts": [format_contact(c).to_dict() for c in contacts],
        "portfolioSize": len(portfolio),
        "portfolio": portfolio_entries(portfolio, subject_bbl),
    }
