"""
Building report aggregator.

Looks up one building in two phases: PLUTO first (for coordinates), then every
other dataset at once through a keyed fan-out. A failing source degrades to an
empty section; only a bad BBL or a bug in assembly fails the lookup.
"""

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Awaitable, Dict, Optional

import aiohttp

from building_health.config import AggregatorSettings, DEFAULT_SETTINGS, get_dataset
from building_health.fetchers import SocrataFetcher, gather_keyed
from building_health.fetchers.soql import and_, block_lot_where, numeric_block_lot_where, quote, within_circle
from building_health.flags import build_red_flags, build_timeline
from building_health.models import BBL, DatasetResult, RiskCounts, parse_bbl
from building_health.normalizers.base import first_text
from building_health.normalizers.complaints import (
    build_complaints_section,
    build_noise_section,
    recent_hpd_complaints,
)
from building_health.normalizers.landlord import build_landlord_section
from building_health.normalizers.legal import (
    build_charges_section,
    build_evictions_section,
    build_litigations_section,
)
from building_health.normalizers.neighborhood import (
    build_cafes_section,
    build_crashes_section,
    build_crime_section,
    build_flood_section,
    build_parks_section,
    build_restaurants_section,
    build_schools_section,
    build_shootings_section,
    build_transit_section,
    build_trees_section,
    build_wifi_section,
    crime_counts,
)
from building_health.normalizers.property import (
    build_bedbugs_section,
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
    recent_sales,
)
from building_health.normalizers.signals import build_signals_section
from building_health.normalizers.violations import build_violations_section, recent_dob, recent_hpd
from building_health.scoring import (
    build_health_score,
    category_scores,
    crime_level,
    crime_score,
    financial_health,
    neighborhood_score,
)
from building_health.utils.dates import Windows
from building_health.utils.geo import Point, to_float

logger = logging.getLogger(__name__)

DATA_SOURCES_COUNTED = 55
DATA_DISCLAIMER = (
    "Data from 55+ NYC Open Data sources including HUD Fair Market Rents. "
    "Scores are estimates. Always verify independently."
)

PORTFOLIO_FIELDS = "bbl,housenumber,streetname,zip,borough"
PORTFOLIO_LIMIT = 150


async def _skipped(key: str) -> DatasetResult:
    return DatasetResult.skip(key)


def pluto_point(record: Optional[dict]) -> Optional[Point]:
    """(lat, lng) from a PLUTO record, or None when it has no usable location."""
    if not record:
        return None
    lat = to_float(record.get("latitude"))
    lng = to_float(record.get("longitude"))
    if not lat or not lng:
        return None
    return lat, lng


def street_of(address: str) -> str:
    """Street part of a PLUTO address ('123 MAIN STREET' -> 'MAIN STREET')."""
    return " ".join(address.split(" ")[1:]).strip()


class BuildingAggregator:
    """
    Builds the full report for one BBL.

    Owns no connections: callers pass a shared aiohttp session, or the
    aggregator opens one for the duration of a single lookup.
    """

    def __init__(self, settings: AggregatorSettings = DEFAULT_SETTINGS, fetcher: Optional[SocrataFetcher] = None):
        """
        Initialize aggregator.

        Args:
            settings: Aggregator settings
            fetcher: Socrata fetcher (created from settings when omitted)
        """
        self.settings = settings
        self.fetcher = fetcher or SocrataFetcher(settings)

    async def build_report(
        self,
        raw_bbl: str,
        session: Optional[aiohttp.ClientSession] = None,
        today: Optional[date] = None,
    ) -> dict:
        """
        Look up a building and assemble its report.

        Args:
            raw_bbl: BBL as entered (non-digits are ignored)
            session: Shared aiohttp session, or None to open one
            today: Reference day for lookback windows (defaults to today)

        Returns:
            Report dict, JSON-ready

        Raises:
            InvalidBBLError: If the BBL does not normalize to 10 digits
        """
        bbl = parse_bbl(raw_bbl)
        windows = Windows.for_day(today or date.today())

        if session is None:
            async with self.fetcher.create_session() as own_session:
                return await self._build(own_session, bbl, windows)
        return await self._build(session, bbl, windows)

    async def _build(self, session: aiohttp.ClientSession, bbl: BBL, windows: Windows) -> dict:
        loop = asyncio.get_running_loop()
        started = loop.time()

        # Phase 1
        pluto = await self.fetch_pluto(session, bbl)
        record = pluto.rows[0] if pluto.rows else None
        point = pluto_point(record)
        if point is None:
            logger.info(f"{bbl}: no location from PLUTO, proximity sources skipped")

        # Phase 2
        results = await gather_keyed(self.plan_requests(session, bbl, record, point, windows))
        results["pluto"] = pluto

        registrations = results["hpd_registrations"].rows
        registration_id = first_text(registrations[0], "registrationid") if registrations else ""
        portfolio = None
        if registration_id:
            portfolio = await self.fetch_portfolio(session, registration_id)

        failed = sorted(k for k, r in results.items() if not r.success)
        logger.info(
            f"{bbl}: {len(results)} sources in {loop.time() - started:.2f}s"
            + (f", failed: {', '.join(failed)}" if failed else "")
        )

        return self.assemble(bbl, record, point, results, portfolio, windows)

    async def fetch_pluto(self, session: aiohttp.ClientSession, bbl: BBL) -> DatasetResult:
        return await self.fetcher.fetch(session, "pluto", {"bbl": bbl.padded, "$limit": 1})

    async def fetch_portfolio(self, session: aiohttp.ClientSession, registration_id: str) -> DatasetResult:
        """Buildings sharing an HPD registration id."""
        return await self.fetcher.fetch(
            session,
            "hpd_registrations",
            {"registrationid": registration_id, "$select": PORTFOLIO_FIELDS, "$limit": PORTFOLIO_LIMIT},
            timeout=self.settings.portfolio_timeout,
        )

    def plan_requests(
        self,
        session: aiohttp.ClientSession,
        bbl: BBL,
        pluto: Optional[dict],
        point: Optional[Point],
        windows: Windows,
    ) -> Dict[str, Awaitable[DatasetResult]]:
        """
        Keyed map of every phase 2 query.

        Proximity-only queries become skipped results when point is None.
        """
        fetch = self.fetcher.fetch
        padded = bbl.padded
        y1, y2, y3, y5 = (d.isoformat() for d in (windows.y1, windows.y2, windows.y3, windows.y5))
        dob_where = block_lot_where(bbl)
        by_bbl = f"bbl={quote(padded)}"

        def get(key: str, params: dict, timeout: Optional[float] = None) -> Awaitable[DatasetResult]:
            return fetch(session, key, params, timeout)

        def nearby(key: str, radius_m: int, extra: str = "", **params) -> Awaitable[DatasetResult]:
            if point is None:
                return _skipped(key)
            field = get_dataset(key).geo_fields[0]
            where = and_(within_circle(field, point[0], point[1], radius_m), extra)
            return fetch(session, key, {"$where": where, **params})

        registrations_id = get_dataset("hpd_registrations").dataset_id
        address = first_text(pluto or {}, "address")
        street = street_of(address)

        requests = {
            # HPD
            "hpd_violations": get("hpd_violations", {"bbl": padded, "$limit": 1500, "$order": "inspectiondate DESC"}),
            "hpd_complaints": get("hpd_complaints", {
                "bbl": padded,
                "$where": f"receiveddate>={quote(y5)}",
                "$limit": 800,
                "$order": "receiveddate DESC",
            }),
            "hpd_registrations": get("hpd_registrations", {"bbl": padded, "$limit": 1}),
            "hpd_contacts": get("hpd_contacts", {
                "$where": f"registrationid IN (SELECT registrationid FROM {registrations_id} WHERE {by_bbl})",
                "$limit": 30,
            }),
            "hpd_litigations": get("hpd_litigations", {"bbl": padded, "$limit": 200, "$order": "caseopendate DESC"}),
            "hpd_charges": get("hpd_charges", {"bbl": padded, "$limit": 200}),
            "hpd_vacate_orders": get("hpd_vacate_orders", {"bbl": padded, "$limit": 50}),
            "hpd_aep": get("hpd_aep", {"bbl": padded, "$limit": 10}),
            "hpd_conh": get("hpd_conh", {"bbl": padded, "$limit": 10}),

            # DOB
            "dob_violations": get("dob_violations", {"$where": dob_where, "$limit": 800, "$order": "issue_date DESC"}),
            "dob_complaints": get("dob_complaints", {"$where": dob_where, "$limit": 400, "$order": "date_entered DESC"}),
            "dob_job_filings": get("dob_job_filings", {"$where": dob_where, "$limit": 300, "$order": "filing_date DESC"}),
            "dob_permits_issued": get("dob_permits_issued", {"$where": dob_where, "$limit": 200}),
            "dob_safety": get("dob_safety", {"$where": dob_where, "$limit": 150}),
            "dob_ecb": get("dob_ecb", {"$where": dob_where, "$limit": 300}),
            "dob_vacates": get("dob_vacates", {"$where": dob_where, "$limit": 30}),

            # Property records
            "acris_legals": get("acris_legals", {
                "$where": numeric_block_lot_where(bbl),
                "$limit": 100,
                "$order": "good_through_date DESC",
            }),
            "dof_rolling_sales": get("dof_rolling_sales", {
                "$where": numeric_block_lot_where(bbl, quote_borough=False),
                "$limit": 50,
                "$order": "sale_date DESC",
            }),
            "dof_exemptions": get("dof_exemptions", {"$where": by_bbl, "$limit": 20}),
            "tax_lien_sales": get("tax_lien_sales", {"$where": by_bbl, "$limit": 20}),

            # Tenancy
            "evictions": get("evictions", {
                "bbl": padded,
                "$where": f"executed_date>={quote(y5)}",
                "$limit": 150,
                "$order": "executed_date DESC",
            }),
            "housing_court": get("housing_court", {"$where": by_bbl, "$limit": 200, "$order": "fileddate DESC"}),
            "speculation_watch": get("speculation_watch", {"bbl": padded, "$limit": 5}),
            "rent_stabilized": get("rent_stabilized", {"$where": f"ucbbl={quote(padded)}", "$limit": 1}),
            "subsidized_housing": get("subsidized_housing", {"$where": by_bbl, "$limit": 5}),
            "nycha": get("nycha", {"$where": by_bbl, "$limit": 3}),

            # Health
            "rodents": get("rodents", {"bbl": padded, "$limit": 80, "$order": "inspection_date DESC"}),
            "bedbugs": get("bedbugs", {"$where": f"building_id={quote(padded)}", "$limit": 50}),
            "cooling_towers": get("cooling_towers", {
                "$where": f"upper(street_name) LIKE upper({quote('%' + street + '%')})",
                "$limit": 20,
            }) if street else _skipped("cooling_towers"),
            "restaurant_inspections": nearby(
                "restaurant_inspections", 100, **{"$limit": 50, "$order": "inspection_date DESC"}
            ),

            # 311 and public safety
            "sr311": get("sr311", {
                "$where": and_(by_bbl, f"created_date>={quote(y3)}"),
                "$limit": 300,
                "$order": "created_date DESC",
            }),
            "nypd_complaints": nearby(
                "nypd_complaints", 500, f"cmplnt_fr_dt>={quote(y1)}",
                **{"$limit": 500, "$order": "cmplnt_fr_dt DESC"},
            ),
            "nypd_shooting": nearby("nypd_shooting", 500, f"occur_date>={quote(y3)}", **{"$limit": 200}),
            "motor_vehicle_crashes": nearby(
                "motor_vehicle_crashes", 300, f"crash_date>={quote(y2)}", **{"$limit": 300}
            ),

            # Environment
            "flood_zones": nearby("flood_zones", 100, **{"$limit": 5}),
            "hurricane_zones": nearby("hurricane_zones", 100, **{"$limit": 5}),

            # Neighborhood
            "subway_entrances": nearby("subway_entrances", 1000, **{"$limit": 50}),
            "bus_stops": _skipped("bus_stops"),
            "citibike_stations": nearby("citibike_stations", 800, **{"$limit": 30}),
            "school_locations": self.fetcher.fetch_nearby(
                session, "school_locations", point, 1200, {"$limit": 2000}, limit=200
            ),
            "parks": self.fetcher.fetch_nearby(session, "parks", point, 1200, {"$limit": 3000}, limit=200),
            "street_trees": nearby("street_trees", 150, **{"$limit": 100}),
            "sidewalk_cafes": self.fetcher.fetch_nearby(
                session, "sidewalk_cafes", point, 600, {"$limit": 3000}, limit=200
            ),
            "wifi_hotspots": self.fetcher.fetch_nearby(
                session, "wifi_hotspots", point, 600, {"$limit": 3000}, limit=200
            ),
        }
        return requests

    def assemble(
        self,
        bbl: BBL,
        pluto: Optional[dict],
        point: Optional[Point],
        results: Dict[str, DatasetResult],
        portfolio: Optional[DatasetResult],
        windows: Windows,
    ) -> dict:
        """
        Reduce fetched rows into the report.

        Args:
            bbl: Subject building
            pluto: PLUTO record, or None
            point: Building location, or None
            results: Phase 1 and phase 2 results by dataset key
            portfolio: Portfolio lookup result, or None when not attempted
            windows: Lookback cutoffs

        Returns:
            Report dict
        """
        rows = {key: result.rows for key, result in results.items()}

        building = build_building_section(
            pluto, bbl, point, rows["rent_stabilized"], rows["subsidized_housing"], rows["nycha"]
        )
        violations = build_violations_section(
            rows["hpd_violations"], rows["dob_violations"], rows["dob_ecb"], rows["dob_safety"]
        )
        complaints = build_complaints_section(
            rows["hpd_complaints"], rows["dob_complaints"], rows["sr311"], windows.y1
        )
        litigations = build_litigations_section(rows["hpd_litigations"])
        evictions = build_evictions_section(rows["evictions"], rows["housing_court"], windows.y3)
        sales = build_sales_section(rows["dof_rolling_sales"])
        rodents = build_rodents_section(rows["rodents"])
        bedbugs = build_bedbugs_section(rows["bedbugs"])
        programs = build_programs_section(
            rows["hpd_aep"],
            rows["hpd_conh"],
            rows["speculation_watch"],
            rows["subsidized_housing"],
            rows["nycha"],
            rows["hpd_vacate_orders"],
            rows["dob_vacates"],
        )
        landlord = build_landlord_section(
            rows["hpd_registrations"],
            rows["hpd_contacts"],
            portfolio.rows if portfolio is not None else [],
            bbl.padded,
            building["ownerName"] if building else "",
        )

        counts = RiskCounts(
            class_c=violations["hpd"]["classC"],
            class_b=violations["hpd"]["classB"],
            class_a=violations["hpd"]["classA"],
            hpd_open=violations["hpd"]["open"],
            dob_open=violations["dob"]["open"],
            ecb_open=violations["ecb"]["open"],
            heat_complaints=complaints["hpd"]["heatHotWater"],
            open_litigations=litigations["open"],
            evictions_3y=evictions["last3Years"],
            rodent_failures=rodents["failed"],
            bedbugs=bedbugs["reports"],
        )

        crime_total, crime_violent = crime_counts(rows["nypd_complaints"])
        crime = crime_score(crime_total, crime_violent)
        flood = build_flood_section(rows["flood_zones"], rows["hurricane_zones"])
        tax_liens = build_tax_liens_section(rows["tax_lien_sales"])
        charges = build_charges_section(rows["hpd_charges"])

        timeline = build_timeline(
            recent_hpd(rows["hpd_violations"]),
            recent_dob(rows["dob_violations"]),
            recent_hpd_complaints(rows["hpd_complaints"]),
            recent_sales(rows["dof_rolling_sales"]),
        )

        sources = {key: results[key].to_dict() for key in sorted(results)}
        if portfolio is not None:
            sources["hpd_portfolio"] = portfolio.to_dict()

        return {
            "building": building,
            "score": build_health_score(counts, complaints["hpd"]["recentYear"]).to_dict(),
            "categoryScores": [c.to_dict() for c in category_scores(counts, crime, crime_total)],
            "violations": violations,
            "complaints": complaints,
            "litigations": litigations,
            "charges": charges,
            "evictions": evictions,
            "sales": sales,
            "permits": build_permits_section(rows["dob_job_filings"], windows.y3),
            "rodents": rodents,
            "bedbugs": bedbugs,
            "programs": programs,
            "landlord": landlord,
            "redFlags": [f.to_dict() for f in build_red_flags(counts, programs, flood, tax_liens)],
            "timeline": [e.to_dict() for e in timeline],
            "crime": build_crime_section(rows["nypd_complaints"], crime, crime_level(crime)),
            "flood": flood,
            "neighborhoodScore": neighborhood_score(crime, flood["inFloodZone"], flood["inHurricaneZone"]),
            "rentFairness": build_rent_fairness_section(building["zipcode"] if building else ""),
            "noise": build_noise_section(rows["sr311"]),
            "signals": build_signals_section(
                rows["hpd_violations"],
                rows["dob_violations"],
                rows["hpd_complaints"],
                rows["dob_complaints"],
                rows["dob_job_filings"],
                rows["sr311"],
                windows.today,
            ),
            "transit": build_transit_section(
                point, rows["subway_entrances"], rows["citibike_stations"], rows["bus_stops"]
            ),
            "schools": build_schools_section(point, rows["school_locations"]),
            "parks": build_parks_section(point, rows["parks"]),
            "trees": build_trees_section(rows["street_trees"]),
            "cafes": build_cafes_section(point, rows["sidewalk_cafes"]),
            "wifi": build_wifi_section(point, rows["wifi_hotspots"]),
            "shootings": build_shootings_section(rows["nypd_shooting"]),
            "crashes": build_crashes_section(rows["motor_vehicle_crashes"]),
            "restaurants": build_restaurants_section(rows["restaurant_inspections"]),
            "coolingTowers": build_cooling_towers_section(rows["cooling_towers"], bbl),
            "taxExemptions": build_tax_exemptions_section(rows["dof_exemptions"]),
            "taxLiens": tax_liens,
            "financialHealth": financial_health(
                tax_liens["count"], charges["total"], violations["ecb"]["penaltiesOwed"]
            ),
            "links": build_links(bbl),
            "sources": sources,
            "dataSourcesCounted": DATA_SOURCES_COUNTED,
            "lastUpdated": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "dataDisclaimer": DATA_DISCLAIMER,
        }
