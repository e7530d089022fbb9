"""Geographic helpers."""

import math
from typing import Optional, Tuple

EARTH_RADIUS_M = 6371000

Point = Tuple[float, float]


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two lat/lng points."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def to_float(value) -> Optional[float]:
    """Parse a coordinate-like value, returning None when absent or malformed."""
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def record_point(record: dict) -> Optional[Point]:
    """
    Extract a (lat, lng) point from an open data record.

    Tries explicit latitude/longitude columns first, then GeoJSON point
    geometries ('the_geom', 'location', 'lat_lon', 'location_1').
    """
    for lat_key, lng_key in (
        ("latitude", "longitude"),
        ("entrance_latitude", "entrance_longitude"),
        ("lat", "lon"),
    ):
        lat = to_float(record.get(lat_key))
        lng = to_float(record.get(lng_key))
        if lat is not None and lng is not None:
            return lat, lng

    for geo_key in ("the_geom", "location", "lat_lon", "location_1", "entrance_georeference"):
        geom = record.get(geo_key)
        if not isinstance(geom, dict):
            continue
        if geom.get("type") == "Point" and len(geom.get("coordinates") or []) >= 2:
            lng, lat = geom["coordinates"][:2]
            return to_float(lat), to_float(lng)
        lat = to_float(geom.get("latitude"))
        lng = to_float(geom.get("longitude"))
        if lat is not None and lng is not None:
            return lat, lng

    return None


def distance_to(origin: Optional[Point], record: dict) -> Optional[float]:
    """Distance in meters from origin to a record's point, if both are known."""
    if origin is None:
        return None
    point = record_point(record)
    if point is None or point[0] is None or point[1] is None:
        return None
    return haversine(origin[0], origin[1], point[0], point[1])


def format_distance(meters: float) -> str:
    """Human label for a walking distance (e.g. '350 m', '1.2 km')."""
    if meters < 1000:
        return f"{int(round(meters))} m"
    return f"{meters / 1000:.1f} km"
