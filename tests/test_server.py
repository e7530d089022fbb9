import pytest

from building_health.fetchers import SocrataFetcher
from building_health.server import create_app

BBL = "1000120034"
CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=86400"


class BrokenAggregator:
    """Aggregator whose lookups always blow up."""

    def __init__(self, fetcher):
        self.fetcher = fetcher

    async def build_report(self, raw_bbl, session=None, today=None):
        raise RuntimeError("assembly bug")


@pytest.fixture
async def client(aiohttp_client, settings, socrata):
    socrata.set("pluto", [{"bbl": BBL, "address": "100 BROADWAY", "borough": "MN", "zipcode": "10006"}])
    return await aiohttp_client(create_app(settings))


async def test_missing_bbl(client):
    resp = await client.get("/api/building")

    assert resp.status == 400
    assert await resp.json() == {"error": "BBL parameter required"}
    assert resp.headers["Cache-Control"] == CACHE_CONTROL


async def test_invalid_bbl(client):
    resp = await client.get("/api/building", params={"bbl": "abc"})

    assert resp.status == 400
    assert await resp.json() == {"error": "Invalid BBL format"}


async def test_report(client):
    resp = await client.get("/api/building", params={"bbl": "1-00012-0034"})

    assert resp.status == 200
    assert resp.headers["Cache-Control"] == CACHE_CONTROL
    report = await resp.json()
    assert report["building"]["bbl"] == BBL
    assert report["building"]["address"] == "100 BROADWAY"
    assert report["score"]["overall"] == 100
    assert report["score"]["grade"] == "A"


async def test_report_by_path(client):
    resp = await client.get(f"/api/building/{BBL}")

    assert resp.status == 200
    assert (await resp.json())["building"]["bbl"] == BBL


async def test_upstream_outage_still_returns_report(aiohttp_client, settings, socrata):
    for key in ("pluto", "hpd_violations", "hpd_complaints", "dob_violations"):
        socrata.fail(key, status=503)
    client = await aiohttp_client(create_app(settings))

    resp = await client.get("/api/building", params={"bbl": BBL})

    assert resp.status == 200
    report = await resp.json()
    assert report["building"] is None
    assert report["sources"]["hpd_violations"]["status"] == "error"


async def test_non_object_rows_still_return_report(aiohttp_client, settings, socrata):
    socrata.set("hpd_violations", [None])
    client = await aiohttp_client(create_app(settings))

    resp = await client.get("/api/building", params={"bbl": BBL})

    assert resp.status == 200
    report = await resp.json()
    assert report["violations"]["hpd"]["total"] == 0
    assert report["sources"]["hpd_violations"]["error"] == "Unexpected payload"


async def test_unexpected_failure(aiohttp_client, settings):
    app = create_app(settings, aggregator=BrokenAggregator(SocrataFetcher(settings)))
    client = await aiohttp_client(app)

    resp = await client.get("/api/building", params={"bbl": BBL})

    assert resp.status == 500
    assert await resp.json() == {"error": "Failed to fetch data"}
    assert resp.headers["Cache-Control"] == CACHE_CONTROL
