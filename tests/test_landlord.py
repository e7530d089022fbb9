from building_health.normalizers.landlord import (
    build_landlord_section,
    format_contact,
    partition_contacts,
)

CONTACTS = [
    {"type": "HeadOfficer", "firstname": "JANE", "lastname": "DOE", "corporationname": ""},
    {"type": "CorporateOwner", "corporationname": "ACME REALTY LLC",
     "businesshousenumber": "10", "businessstreetname": "MAIN ST", "businesscity": "NEW YORK",
     "businessstate": "NY", "businesszip": "10001"},
    {"type": "Agent", "corporationname": "ACME MGMT"},
    {"type": "SiteManager", "firstname": "BOB", "lastname": "SMITH"},
]


def test_partition_contacts_by_type():
    owners, agents, site = partition_contacts(CONTACTS)
    assert [c["type"] for c in owners] == ["HeadOfficer", "CorporateOwner"]
    assert [c["type"] for c in agents] == ["Agent", "SiteManager"]
    assert [c["type"] for c in site] == ["SiteManager"]


def test_format_contact():
    corporate = format_contact(CONTACTS[1])
    assert corporate.name == "ACME REALTY LLC"
    assert corporate.address == "10 MAIN ST NEW YORK, NY 10001"
    assert format_contact(CONTACTS[0]).name == "JANE DOE"
    assert format_contact({}).name == "Unknown"
    assert format_contact(CONTACTS[2]).address == ""


def test_landlord_section():
    registration = {
        "registrationid": "777",
        "corporationname": "ACME REALTY LLC",
        "lastregistrationdate": "2023-09-01T00:00:00.000",
        "registrationenddate": "2024-09-01T00:00:00.000",
    }
    portfolio = [
        {"bbl": "1000120034", "housenumber": "123", "streetname": "EAST 4 STREET", "borough": "MANHATTAN"},
        {"bbl": "1000130001", "housenumber": "5", "streetname": "AVENUE A", "zip": "10009", "borough": "MANHATTAN"},
    ]
    landlord = build_landlord_section([registration], CONTACTS, portfolio, "1000120034")

    assert landlord["name"] == "ACME REALTY LLC"
    assert landlord["type"] == "corporation"
    assert landlord["registrationId"] == "777"
    assert landlord["registrationDate"] == "Last registered: Sep 1, 2023"
    assert landlord["registrationExpires"] == "Expires: Sep 1, 2024"
    assert landlord["managementCompany"] == "ACME MGMT"
    assert len(landlord["allContacts"]) == 4
    assert landlord["portfolioSize"] == 2
    assert landlord["portfolio"] == [
        {"bbl": "1000130001", "address": "5 AVENUE A", "borough": "Manhattan", "zipcode": "10009"},
    ]


def test_landlord_name_fallbacks():
    individual = build_landlord_section([{"ownerfirstname": "JOHN", "ownerlastname": "ROE"}], [], [], "1")
    assert individual["name"] == "JOHN ROE"
    assert individual["type"] == "individual"

    assert build_landlord_section([], [], [], "1", "PLUTO OWNER")["name"] == "PLUTO OWNER"

    unknown = build_landlord_section([], [], [], "1")
    assert unknown["name"] == "Unknown"
    assert unknown["registrationDate"] == ""
    assert unknown["portfolio"] == []


def test_management_company_falls_back_to_registration():
    landlord = build_landlord_section([{"managementagent": "SITE CO"}], [], [], "1")
    assert landlord["managementCompany"] == "SITE CO"
