"""
Property-level reducers: building profile, sales, permits, health inspections,
program membership, tax status and rent fairness.
"""

from datetime import date
from typing import List, Optional

from building_health.config.reference import (
    BOROUGH_CODES,
    BUILDING_CLASSES,
    FMR_YEAR,
    HUD_FAIR_MARKET_RENTS,
    HUD_FMR_NYC_2025,
    JOB_TYPES,
    ZIP_TO_NEIGHBORHOOD,
)
from building_health.models.bbl import BBL
from building_health.normalizers.base import first_text, lower, record_id, to_int, to_number
from building_health.utils.dates import on_or_after, sort_key

RECENT_SALES_LIMIT = 25
RECENT_PERMITS_LIMIT = 25
RECENT_RODENT_LIMIT = 10

# Rent stabilization is presumed for 6+ units built before 1974
RS_MIN_UNITS = 6
RS_BUILT_BEFORE = 1974

RODENT_FAIL_WORDS = ("active", "rat", "mice", "evidence")
RODENT_PASS_WORDS = ("pass", "no evidence")


def build_building_section(
    pluto: Optional[dict],
    bbl: BBL,
    point,
    rent_stabilized: List[dict],
    subsidized: List[dict],
    nycha: List[dict],
) -> Optional[dict]:
    """
    Building profile from the PLUTO record, enriched with rent stabilization,
    subsidy and NYCHA membership. None when PLUTO has no record.
    """
    if not pluto:
        return None

    rs = rent_stabilized[0] if rent_stabilized else None
    units_res = to_number(pluto.get("unitsres"))
    year_built = to_int(pluto.get("yearbuilt"))
    building_class = first_text(pluto, "bldgclass")
    zipcode = first_text(pluto, "zipcode")

    rs_units = None
    rs_lost = None
    if rs:
        rs_units = rs.get("uc2023") or rs.get("uc2022") or rs.get("uc2021") or None
        if rs.get("uc2007") and rs.get("uc2023"):
            rs_lost = to_number(rs["uc2007"]) - to_number(rs["uc2023"])

    return {
        "bbl": bbl.padded,
        "address": first_text(pluto, "address", default="Unknown"),
        "borough": BOROUGH_CODES.get(pluto.get("borough"), pluto.get("borough")),
        "neighborhood": ZIP_TO_NEIGHBORHOOD.get(zipcode, ""),
        "zipcode": zipcode,
        "yearBuilt": year_built,
        "unitsRes": int(units_res),
        "unitsTotal": int(to_number(pluto.get("unitstotal")) or units_res),
        "floors": to_number(pluto.get("numfloors")),
        "buildingClass": building_class,
        "buildingClassDesc": BUILDING_CLASSES.get(building_class, building_class),
        "ownerName": first_text(pluto, "ownername", default="Unknown"),
        "ownerType": first_text(pluto, "ownertype"),
        "latitude": point[0] if point else None,
        "longitude": point[1] if point else None,
        "lotArea": to_number(pluto.get("lotarea")) if pluto.get("lotarea") else None,
        "buildingArea": to_number(pluto.get("bldgarea")) if pluto.get("bldgarea") else None,
        "zoneDist1": first_text(pluto, "zonedist1"),
        "assessedValue": to_number(pluto.get("assesstot")) if pluto.get("assesstot") else None,
        "yearAltered1": to_int(pluto.get("yearalter1")),
        "yearAltered2": to_int(pluto.get("yearalter2")),
        "landmark": pluto.get("landmark") or None,
        "histDist": pluto.get("histdist") or None,
        "isRentStabilized": rs is not None or (
            units_res >= RS_MIN_UNITS and year_built is not None and year_built < RS_BUILT_BEFORE
        ),
        "rentStabilizedUnits": rs_units,
        "rsLostUnits": rs_lost,
        "isSubsidized": len(subsidized) > 0,
        "subsidyPrograms": [s["program_name"] for s in subsidized if s.get("program_name")],
        "isNycha": len(nycha) > 0 or pluto.get("ownertype") == "P",
        "nychaDev": nycha[0].get("development") if nycha else None,
    }


def recent_sales(sales: List[dict], limit: int = RECENT_SALES_LIMIT) -> List[dict]:
    """Sales with a positive price, newest first as returned upstream."""
    priced = [s for s in sales if to_number(s.get("sale_price")) > 0]
    return [
        {
            "id": record_id(s, "ease_ment", "SALE", i),
            "date": s.get("sale_date"),
            "amount": to_number(s.get("sale_price")),
        }
        for i, s in enumerate(priced[:limit])
    ]


def build_sales_section(sales: List[dict]) -> dict:
    recent = recent_sales(sales)
    last = recent[0] if recent else None
    return {
        "total": len(recent),
        "recent": recent,
        "lastSaleDate": last["date"] if last else None,
        "lastSaleAmount": last["amount"] if last else None,
    }


def build_permits_section(jobs: List[dict], since: date) -> dict:
    return {
        "total": len(jobs),
        "majorAlterations": sum(1 for j in jobs if j.get("job_type") in ("A1", "DM")),
        "recentActivity": sum(1 for j in jobs if on_or_after(j.get("filing_date"), since)),
        "recent": [
            {
                "jobNumber": j.get("job__") or j.get("job_number"),
                "jobType": j.get("job_type"),
                "jobTypeDesc": JOB_TYPES.get(j.get("job_type"), j.get("job_type")),
                "filingDate": j.get("filing_date") or j.get("pre_filing_date"),
                "jobStatus": j.get("job_status"),
                "jobStatusDesc": j.get("job_status_descrp"),
                "workType": j.get("work_type"),
                "estimatedCost": to_number(j.get("initial_cost")) if j.get("initial_cost") else None,
            }
            for j in jobs[:RECENT_PERMITS_LIMIT]
        ],
    }


def is_rodent_failure(inspection: dict) -> bool:
    result = lower(inspection, "result")
    return any(word in result for word in RODENT_FAIL_WORDS)


def is_rodent_pass(inspection: dict) -> bool:
    result = lower(inspection, "result")
    return any(word in result for word in RODENT_PASS_WORDS)


def build_rodents_section(inspections: List[dict]) -> dict:
    return {
        "totalInspections": len(inspections),
        "failed": sum(1 for r in inspections if is_rodent_failure(r)),
        "passed": sum(1 for r in inspections if is_rodent_pass(r)),
        "recent": [
            {"date": r.get("inspection_date"), "result": r.get("result"), "type": r.get("inspection_type")}
            for r in inspections[:RECENT_RODENT_LIMIT]
        ],
    }


def build_bedbugs_section(filings: List[dict]) -> dict:
    return {
        "reports": len(filings),
        "lastReportDate": filings[0].get("filing_date") if filings else None,
    }


def build_programs_section(
    aep: List[dict],
    conh: List[dict],
    speculation: List[dict],
    subsidized: List[dict],
    nycha: List[dict],
    hpd_vacates: List[dict],
    dob_vacates: List[dict],
) -> dict:
    return {
        "aep": len(aep) > 0,
        "conh": len(conh) > 0,
        "speculationWatch": len(speculation) > 0,
        "subsidized": len(subsidized) > 0,
        "nycha": len(nycha) > 0,
        "vacateOrder": len(hpd_vacates) > 0 or len(dob_vacates) > 0,
    }


def build_rent_fairness_section(zipcode: str) -> dict:
    """HUD fair market rents for the ZIP, or the NYC metro average."""
    zip_fmr = HUD_FAIR_MARKET_RENTS.get(zipcode)
    if zip_fmr:
        fmr = {
            "studio": zip_fmr["studio"],
            "oneBr": zip_fmr["br1"],
            "twoBr": zip_fmr["br2"],
            "threeBr": zip_fmr["br3"],
            "fourBr": zip_fmr["br4"],
            "year": FMR_YEAR,
            "source": f"HUD Small Area FMR (ZIP {zipcode})",
            "isZipLevel": True,
        }
    else:
        fmr = {
            "studio": HUD_FMR_NYC_2025["0"],
            "oneBr": HUD_FMR_NYC_2025["1"],
            "twoBr": HUD_FMR_NYC_2025["2"],
            "threeBr": HUD_FMR_NYC_2025["3"],
            "fourBr": HUD_FMR_NYC_2025["4"],
            "year": FMR_YEAR,
            "source": "HUD FMR (NYC Metro Average)",
            "isZipLevel": False,
        }

    neighborhood = ZIP_TO_NEIGHBORHOOD.get(zipcode)
    if fmr["isZipLevel"]:
        note = f"Fair Market Rents for {neighborhood or zipcode} (40th percentile)."
    else:
        note = "NYC Metro Fair Market Rents (40th percentile)."

    return {
        "hudFMR": fmr,
        "neighborhood": neighborhood or "NYC",
        "note": note,
        "tip": "If asking rent exceeds FMR by 20%+, consider negotiating or comparing other units.",
    }


def build_tax_exemptions_section(exemptions: List[dict]) -> dict:
    """421-a and J-51 benefits, both of which carry rent stabilization."""
    names = [lower(e, "exname", "exemption_name", "exmp_code", "description") for e in exemptions]
    has_421a = any("421" in n for n in names)
    has_j51 = any("j-51" in n or "j51" in n for n in names)

    expirations = [first_text(e, "benftend", "exmp_end_date", "end_date") for e in exemptions]
    expirations = [x for x in expirations if x]
    expiration = max(expirations, key=sort_key) if expirations else None

    note = ""
    if has_421a or has_j51:
        note = "Buildings receiving 421-a or J-51 benefits must keep units rent stabilized."

    return {
        "has": len(exemptions) > 0,
        "count": len(exemptions),
        "has421a": has_421a,
        "hasJ51": has_j51,
        "rentStabilizedByExemption": has_421a or has_j51,
        "exemptionExpiration": expiration,
        "note": note,
    }


def build_tax_liens_section(liens: List[dict]) -> dict:
    count = len(liens)
    return {
        "count": count,
        "warning": f"Property appeared on {count} tax lien sale list(s)." if count else "",
    }


def build_cooling_towers_section(towers: List[dict], bbl: BBL) -> dict:
    """
    Registered cooling towers for the building.

    The upstream query matches on street name; rows carrying a BBL are kept
    only when it matches the subject building.
    """
    matched = [t for t in towers if not t.get("bbl") or str(t.get("bbl")) == bbl.padded]
    certifications = [first_text(t, "last_certification_date", "activation_date") for t in matched]
    certifications = [c for c in certifications if c]
    return {
        "hasTower": len(matched) > 0,
        "count": len(matched),
        "riskNote": "Cooling towers require regular Legionella testing and certification." if matched else "",
        "lastCertification": max(certifications, key=sort_key) if certifications else None,
    }


def build_links(bbl: BBL) -> List[dict]:
    """Links to the official city records for the building."""
    b, block, lot = bbl.borough, bbl.padded[1:6], bbl.padded[6:]
    return [
        {"label": "HPD Building Profile", "url": f"https://hpdonline.nyc.gov/hpdonline/building/{bbl.padded}"},
        {
            "label": "DOB Building Info",
            "url": f"https://a810-bisweb.nyc.gov/bisweb/PropertyProfileOverviewServlet?boro={b}&block={block}&lot={lot}",
        },
        {
            "label": "ACRIS (Sales)",
            "url": f"https://a836-acris.nyc.gov/bblsearch/bblsearch.asp?borough={b}&block={block}&lot={lot}",
        },
        {"label": "Who Owns What", "url": f"https://whoownswhat.justfix.org/bbl/{bbl.padded}"},
    ]
