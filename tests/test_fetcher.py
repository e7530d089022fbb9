import asyncio
from dataclasses import replace

import pytest
from aiohttp import web

from building_health.fetchers import SocrataFetcher, gather_keyed
from building_health.models import DatasetResult


async def test_fetch_returns_rows_and_sends_query(socrata, settings, session):
    socrata.set("hpd_violations", [{"violationid": "1"}, {"violationid": "2"}])
    fetcher = SocrataFetcher(settings)

    result = await fetcher.fetch(session, "hpd_violations", {"bbl": "1000120034", "$limit": 1500})

    assert result.success
    assert len(result.rows) == 2
    assert socrata.queries_for("hpd_violations") == [{"bbl": "1000120034", "$limit": "1500"}]


async def test_non_2xx_degrades_to_empty(socrata, settings, session):
    socrata.fail("dob_violations", status=503)
    result = await SocrataFetcher(settings).fetch(session, "dob_violations", {})

    assert not result.success
    assert result.rows == []
    assert result.error == "HTTP 503"
    assert result.status() == "error"


async def test_timeout_degrades_to_empty(socrata, settings, session):
    socrata.hang("rodents", seconds=0.5)
    result = await SocrataFetcher(settings).fetch(session, "rodents", {}, timeout=0.05)

    assert result.rows == []
    assert result.error == "Request timeout"


async def test_query_error_payload_degrades_to_empty(socrata, settings, session):
    async def handler(request):
        return web.json_response({"error": True, "message": "No such column: bbl"})
    socrata.set("bedbugs", handler)

    result = await SocrataFetcher(settings).fetch(session, "bedbugs", {})

    assert result.rows == []
    assert result.error == "No such column: bbl"


@pytest.mark.parametrize("payload", [[None], [1, 2], [{"bbl": "1"}, "row"]])
async def test_non_object_rows_degrade_to_empty(socrata, settings, session, payload):
    socrata.set("hpd_violations", payload)

    result = await SocrataFetcher(settings).fetch(session, "hpd_violations", {})

    assert not result.success
    assert result.rows == []
    assert result.error == "Unexpected payload"


async def test_malformed_json_degrades_to_empty(socrata, settings, session):
    async def handler(request):
        return web.Response(text="<html>oops</html>", content_type="text/html")
    socrata.set("nycha", handler)

    result = await SocrataFetcher(settings).fetch(session, "nycha", {})

    assert not result.success
    assert result.rows == []


async def test_app_token_header(socrata, settings, session):
    seen = {}

    async def handler(request):
        seen["token"] = request.headers.get("X-App-Token")
        return web.json_response([])
    socrata.set("pluto", handler)

    fetcher = SocrataFetcher(replace(settings, app_token="secret"))
    await fetcher.fetch(session, "pluto", {})

    assert seen["token"] == "secret"


async def test_fetch_nearby_tries_geo_fields_in_order(socrata, settings, session):
    async def handler(request):
        where = request.query.get("$where", "")
        if where.startswith("within_circle(location,"):
            return web.json_response([{"name": "Park"}])
        if where:
            return web.json_response([])
        return web.json_response([{"name": "fallback"}])
    socrata.set("parks", handler)

    result = await SocrataFetcher(settings).fetch_nearby(
        session, "parks", (40.7, -74.0), 1200, {"$limit": 3000}, limit=200
    )

    assert result.rows == [{"name": "Park"}]
    wheres = [q.get("$where", "") for q in socrata.queries_for("parks")]
    assert wheres == [
        "within_circle(the_geom,40.7,-74.0,1200)",
        "within_circle(location,40.7,-74.0,1200)",
    ]


async def test_fetch_nearby_falls_back_when_spatial_empty(socrata, settings, session):
    async def handler(request):
        if "$where" in request.query:
            return web.json_response({"message": "function not supported"}, status=400)
        return web.json_response([{"name": "fallback"}])
    socrata.set("wifi_hotspots", handler)

    result = await SocrataFetcher(settings).fetch_nearby(
        session, "wifi_hotspots", (40.7, -74.0), 600, {"$limit": 3000}
    )

    assert result.rows == [{"name": "fallback"}]
    assert len(socrata.queries_for("wifi_hotspots")) == 4


async def test_fetch_nearby_without_point_uses_fallback(socrata, settings, session):
    socrata.set("school_locations", [{"location_name": "PS 1"}])

    result = await SocrataFetcher(settings).fetch_nearby(
        session, "school_locations", None, 1200, {"$limit": 2000}
    )

    assert len(result.rows) == 1
    assert socrata.queries_for("school_locations") == [{"$limit": "2000"}]


async def test_gather_keyed_isolates_failures():
    async def ok():
        return DatasetResult("a", [{"x": 1}])

    async def boom():
        raise RuntimeError("bad")

    async def slow():
        await asyncio.sleep(0.01)
        return DatasetResult("c", [])

    results = await gather_keyed({"a": ok(), "b": boom(), "c": slow()})

    assert results["a"].rows == [{"x": 1}]
    assert not results["b"].success
    assert results["b"].error == "bad"
    assert results["c"].status() == "empty"
