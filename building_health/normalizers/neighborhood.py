"""
Neighborhood reducers: crime, flood risk, transit, amenities and street safety.

Proximity sections rank records by haversine distance from the building. Rows
that came from a non-spatial fallback query are filtered to the search radius
here, so a city-wide fallback never inflates a nearby count.
"""

import re
from typing import List, Optional

from building_health.normalizers.base import first_text, js_round, lower, to_number
from building_health.normalizers.histograms import count_by, top_counts
from building_health.utils.geo import Point, distance_to, format_distance

CRIME_TYPE_LIMIT = 10
VIOLENT_WORDS = ("assault", "robbery", "murder", "rape")

# Roughly a five minute walk
WALK_5_MIN_M = 400

SCHOOL_RADIUS_M = 1200
PARK_RADIUS_M = 1200
CAFE_RADIUS_M = 600
WIFI_RADIUS_M = 600
NEARBY_LIMIT = 10

# NYC restaurant inspection scores: 0-13 is an A, 28+ is a C
RESTAURANT_C_SCORE = 28


def is_violent(complaint: dict) -> bool:
    offense = lower(complaint, "ofns_desc")
    return any(word in offense for word in VIOLENT_WORDS)


def crime_counts(complaints: List[dict]) -> tuple:
    """(total, violent) incident counts."""
    return len(complaints), sum(1 for c in complaints if is_violent(c))


def build_crime_section(complaints: List[dict], score: int, level: str) -> dict:
    total, violent = crime_counts(complaints)
    by_type = count_by(complaints, lambda c: first_text(c, "ofns_desc", "pd_desc", default="Other"))
    return {
        "total": total,
        "violent": violent,
        "score": score,
        "level": level,
        "byType": top_counts(by_type, CRIME_TYPE_LIMIT),
    }


def build_flood_section(flood_zones: List[dict], hurricane_zones: List[dict]) -> dict:
    flood = flood_zones[0] if flood_zones else {}
    hurricane = hurricane_zones[0] if hurricane_zones else {}
    return {
        "inFloodZone": len(flood_zones) > 0,
        "floodZoneType": first_text(flood, "fld_zone", "zone") or None,
        "inHurricaneZone": len(hurricane_zones) > 0,
        "hurricaneZone": first_text(hurricane, "hurricane_e", "zone") or None,
    }


def within(origin: Optional[Point], records: List[dict], radius_m: float) -> List[tuple]:
    """(distance, record) pairs within radius, nearest first."""
    ranked = []
    for record in records:
        distance = distance_to(origin, record)
        if distance is not None and distance <= radius_m:
            ranked.append((distance, record))
    ranked.sort(key=lambda pair: pair[0])
    return ranked


def _nearby(ranked: List[tuple], name_fn, limit: int = NEARBY_LIMIT, **extra_fns) -> List[dict]:
    entries = []
    for distance, record in ranked[:limit]:
        entry = {
            "name": name_fn(record),
            "distanceMeters": js_round(distance),
            "distance": format_distance(distance),
        }
        for key, fn in extra_fns.items():
            entry[key] = fn(record)
        entries.append(entry)
    return entries


def station_lines(entrance: dict) -> List[str]:
    routes = first_text(entrance, "daytime_routes", "line", "routes")
    return [r for r in re.split(r"[\s\-,/]+", routes) if r]


def build_transit_section(origin: Optional[Point], entrances: List[dict], bikes: List[dict], bus_stops: List[dict]) -> dict:
    """
    Subway access from station entrances within 1 km, plus bike share docks.
    """
    ranked = within(origin, entrances, float("inf"))
    nearest = None
    if ranked:
        distance, entrance = ranked[0]
        nearest = {
            "name": first_text(entrance, "stop_name", "station_name", "name", default="Subway station"),
            "distanceMeters": js_round(distance),
            "distance": format_distance(distance),
        }

    close = {
        first_text(e, "stop_name", "station_name", "name")
        for d, e in ranked
        if d <= WALK_5_MIN_M
    }
    lines = sorted({line for _, e in ranked for line in station_lines(e)})

    return {
        "nearestStation": nearest,
        "stationsWithin5min": len(close - {""}),
        "lines": lines,
        "totalLines": len(lines),
        "citibikeStations": len(bikes),
        "busStops": len(bus_stops),
    }


def build_schools_section(origin: Optional[Point], schools: List[dict]) -> dict:
    ranked = within(origin, schools, SCHOOL_RADIUS_M)
    return {
        "count": len(ranked),
        "nearby": _nearby(
            ranked,
            lambda s: first_text(s, "location_name", "school_name", "name", default="School"),
            grades=lambda s: first_text(s, "grades_final_text", "grades_text", "grades") or None,
        ),
    }


def build_parks_section(origin: Optional[Point], parks: List[dict]) -> dict:
    ranked = within(origin, parks, PARK_RADIUS_M)
    total_acres = sum(to_number(p.get("acres")) for _, p in ranked)
    return {
        "count": len(ranked),
        "totalAcres": round(total_acres, 1),
        "nearby": _nearby(
            ranked,
            lambda p: first_text(p, "signname", "name311", "park_name", "name", default="Park"),
            acres=lambda p: round(to_number(p.get("acres")), 2) if p.get("acres") else None,
        ),
    }


def build_trees_section(trees: List[dict]) -> dict:
    species = count_by(trees, lambda t: first_text(t, "spc_common"))
    return {
        "count": len(trees),
        "topSpecies": top_counts(species, 5, key_name="species"),
    }


def build_cafes_section(origin: Optional[Point], cafes: List[dict]) -> dict:
    ranked = within(origin, cafes, CAFE_RADIUS_M)
    return {
        "count": len(ranked),
        "nearby": _nearby(
            ranked,
            lambda c: first_text(c, "business_name", "entity_name", "camis_trade_name", "name", default="Cafe"),
        ),
    }


def build_wifi_section(origin: Optional[Point], hotspots: List[dict]) -> dict:
    ranked = within(origin, hotspots, WIFI_RADIUS_M)
    return {
        "count": len(ranked),
        "nearby": _nearby(
            ranked,
            lambda h: first_text(h, "name", "location", "ssid", default="Wi-Fi hotspot"),
            provider=lambda h: first_text(h, "provider") or None,
        ),
    }


def build_shootings_section(shootings: List[dict]) -> dict:
    return {
        "total": len(shootings),
        "fatal": sum(1 for s in shootings if lower(s, "statistical_murder_flag") in ("true", "y")),
    }


def build_crashes_section(crashes: List[dict]) -> dict:
    return {
        "total": len(crashes),
        "injured": int(sum(to_number(c.get("number_of_persons_injured")) for c in crashes)),
        "killed": int(sum(to_number(c.get("number_of_persons_killed")) for c in crashes)),
    }


def build_restaurants_section(inspections: List[dict]) -> dict:
    """Restaurants within 100 m and their inspection scores."""
    scores = [to_number(i.get("score")) for i in inspections if i.get("score") not in (None, "")]
    avg_score = js_round(sum(scores) / len(scores)) if scores else None
    critical = sum(1 for i in inspections if lower(i, "critical_flag") == "critical")

    note = ""
    if avg_score is not None and avg_score >= RESTAURANT_C_SCORE:
        note = "Nearby restaurants average a C-grade inspection score; expect more pest pressure."
    elif critical:
        note = f"{critical} critical health code violations at nearby restaurants."

    return {
        "total": len({i.get("camis") for i in inspections if i.get("camis")}),
        "avgScore": avg_score,
        "violations": critical,
        "note": note,
    }
