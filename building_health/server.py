"""
HTTP API for building lookups.

Routes:
  /api/building?bbl=...      Full building report
  /api/building/{bbl}        Same, with the BBL in the path

Start: python main.py serve --port 8000
"""

import logging
from typing import Optional

import aiohttp
from aiohttp import web

from building_health.aggregator import BuildingAggregator
from building_health.config import AggregatorSettings, DEFAULT_SETTINGS
from building_health.errors import InvalidBBLError
from building_health.fetchers import SocrataFetcher

logger = logging.getLogger(__name__)

SETTINGS_KEY = web.AppKey("settings", AggregatorSettings)
AGGREGATOR_KEY = web.AppKey("aggregator", BuildingAggregator)
SESSION_KEY = web.AppKey("session", aiohttp.ClientSession)


def _json(app: web.Application, data: dict, status: int = 200) -> web.Response:
    return web.json_response(
        data,
        status=status,
        headers={"Cache-Control": app[SETTINGS_KEY].cache_control},
    )


async def get_building(request: web.Request) -> web.Response:
    """Look up a building by BBL and return its report."""
    app = request.app
    raw_bbl = request.match_info.get("bbl") or request.query.get("bbl")
    if not raw_bbl:
        return _json(app, {"error": "BBL parameter required"}, status=400)

    try:
        report = await app[AGGREGATOR_KEY].build_report(raw_bbl, session=app[SESSION_KEY])
    except InvalidBBLError:
        return _json(app, {"error": "Invalid BBL format"}, status=400)
    except Exception:
        logger.exception(f"Lookup failed for {raw_bbl!r}")
        return _json(app, {"error": "Failed to fetch data"}, status=500)

    return _json(app, report)


async def _client_session(app: web.Application):
    """One upstream session for the lifetime of the app."""
    fetcher = app[AGGREGATOR_KEY].fetcher
    async with fetcher.create_session() as session:
        app[SESSION_KEY] = session
        yield


def create_app(
    settings: AggregatorSettings = DEFAULT_SETTINGS,
    aggregator: Optional[BuildingAggregator] = None,
) -> web.Application:
    """
    Build the aiohttp application.

    Args:
        settings: Aggregator and server settings
        aggregator: Aggregator to serve (created from settings when omitted)
    """
    app = web.Application()
    app[SETTINGS_KEY] = settings
    app[AGGREGATOR_KEY] = aggregator or BuildingAggregator(settings, SocrataFetcher(settings))
    app.cleanup_ctx.append(_client_session)

    app.router.add_get("/api/building", get_building)
    app.router.add_get("/api/building/{bbl}", get_building)
    return app


def run_server(settings: AggregatorSettings = DEFAULT_SETTINGS) -> None:
    """Serve the API until interrupted."""
    logger.info(f"Serving on http://{settings.host}:{settings.port}")
    web.run_app(create_app(settings), host=settings.host, port=settings.port, print=None)
