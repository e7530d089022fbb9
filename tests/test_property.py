from datetime import date

from building_health.models.bbl import BBL
from building_health.normalizers.property import (
    build_building_section,
    build_cooling_towers_section,
    build_links,
    build_permits_section,
    build_programs_section,
    build_rent_fairness_section,
    build_rodents_section,
    build_sales_section,
    build_tax_exemptions_section,
    build_tax_liens_section,
)

BBL_1 = BBL("1000120034")

PLUTO = {
    "address": "123 EAST 4 STREET",
    "borough": "MN",
    "zipcode": "10003",
    "yearbuilt": "1910",
    "unitsres": "20",
    "unitstotal": "22",
    "numfloors": "6",
    "bldgclass": "C7",
    "ownername": "EAST FOURTH LLC",
    "ownertype": "",
    "latitude": "40.72",
    "longitude": "-73.98",
}


def test_building_section_from_pluto():
    building = build_building_section(PLUTO, BBL_1, (40.72, -73.98), [], [], [])
    assert building["address"] == "123 EAST 4 STREET"
    assert building["borough"] == "Manhattan"
    assert building["neighborhood"] == "East Village"
    assert building["yearBuilt"] == 1910
    assert building["unitsRes"] == 20
    assert building["unitsTotal"] == 22
    assert building["buildingClassDesc"] == "Walk-Up - Over Six Families With Stores"
    assert building["latitude"] == 40.72
    # 6+ units built before 1974
    assert building["isRentStabilized"] is True
    assert building["isNycha"] is False


def test_building_section_enrichment():
    building = build_building_section(
        dict(PLUTO, yearbuilt="1990", ownertype="P"),
        BBL_1,
        None,
        [{"uc2007": "30", "uc2023": "18"}],
        [{"program_name": "LIHTC"}, {}],
        [],
    )
    assert building["isRentStabilized"] is True
    assert building["rentStabilizedUnits"] == "18"
    assert building["rsLostUnits"] == 12
    assert building["subsidyPrograms"] == ["LIHTC"]
    assert building["isNycha"] is True
    assert building["latitude"] is None


def test_building_section_without_pluto():
    assert build_building_section(None, BBL_1, None, [], [], []) is None


def test_sales_keep_priced_sales():
    sales = build_sales_section([
        {"sale_price": "0", "sale_date": "2023-01-01"},
        {"sale_price": "950000", "sale_date": "2022-01-01", "ease_ment": ""},
        {"sale_price": "500000", "sale_date": "2015-01-01"},
    ])
    assert sales["total"] == 2
    assert sales["recent"][0] == {"id": "sale-0", "date": "2022-01-01", "amount": 950000}
    assert sales["lastSaleAmount"] == 950000


def test_permits():
    jobs = [
        {"job__": "1", "job_type": "A1", "filing_date": "2023-05-01"},
        {"job_number": "2", "job_type": "DM", "filing_date": "2018-05-01"},
        {"job_type": "A2", "filing_date": "2022-05-01", "initial_cost": "15000"},
    ]
    permits = build_permits_section(jobs, date(2021, 6, 1))
    assert permits["majorAlterations"] == 2
    assert permits["recentActivity"] == 2
    assert permits["recent"][1]["jobNumber"] == "2"
    assert permits["recent"][2]["jobTypeDesc"] == "Alteration (Multiple Work Types)"
    assert permits["recent"][2]["estimatedCost"] == 15000


def test_rodents():
    section = build_rodents_section([
        {"result": "Active Rat Signs"},
        {"result": "Passed"},
        {"result": "Failed for Other R"},
    ])
    assert section["failed"] == 1
    assert section["passed"] == 1
    assert section["totalInspections"] == 3


def test_programs():
    programs = build_programs_section([{}], [], [], [], [], [], [{}])
    assert programs == {
        "aep": True,
        "conh": False,
        "speculationWatch": False,
        "subsidized": False,
        "nycha": False,
        "vacateOrder": True,
    }


def test_rent_fairness_zip_level():
    fairness = build_rent_fairness_section("10025")
    assert fairness["hudFMR"]["isZipLevel"] is True
    assert fairness["hudFMR"]["oneBr"] == 3110
    assert fairness["neighborhood"] == "Upper West Side"
    assert fairness["note"] == "Fair Market Rents for Upper West Side (40th percentile)."


def test_rent_fairness_metro_fallback():
    fairness = build_rent_fairness_section("99999")
    assert fairness["hudFMR"]["isZipLevel"] is False
    assert fairness["hudFMR"]["studio"] == 2646
    assert fairness["neighborhood"] == "NYC"


def test_tax_exemptions():
    section = build_tax_exemptions_section([
        {"exname": "421-A 10 YR", "benftend": "2030-06-30"},
        {"exname": "J-51 ALTERATION", "benftend": "2026-06-30"},
    ])
    assert section["has421a"] and section["hasJ51"]
    assert section["rentStabilizedByExemption"] is True
    assert section["exemptionExpiration"] == "2030-06-30"

    assert build_tax_exemptions_section([])["note"] == ""


def test_tax_liens():
    assert build_tax_liens_section([])["warning"] == ""
    assert build_tax_liens_section([{}, {}])["count"] == 2


def test_cooling_towers_filtered_to_building():
    towers = [
        {"bbl": "1000120034", "activation_date": "2019-01-01"},
        {"bbl": "1000990001", "activation_date": "2023-01-01"},
    ]
    section = build_cooling_towers_section(towers, BBL_1)
    assert section["count"] == 1
    assert section["lastCertification"] == "2019-01-01"
    assert build_cooling_towers_section([], BBL_1)["hasTower"] is False


def test_links():
    links = {link["label"]: link["url"] for link in build_links(BBL_1)}
    assert links["Who Owns What"] == "https://whoownswhat.justfix.org/bbl/1000120034"
    assert "boro=1&block=00012&lot=0034" in links["DOB Building Info"]
