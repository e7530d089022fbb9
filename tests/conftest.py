"""Shared fixtures: a fake Socrata host served by aiohttp."""

import asyncio
from dataclasses import replace
from datetime import date

import aiohttp
import pytest
from aiohttp import web

from building_health.config import DEFAULT_SETTINGS, get_dataset

TODAY = date(2024, 6, 15)


class FakeSocrata:
    """
    In-memory Socrata resource host.

    Rows are registered per dataset key; a callable may be registered instead
    to inspect the query and return a custom response.
    """

    def __init__(self):
        self.handlers = {}
        self.requests = []

    def set(self, key: str, rows_or_handler) -> None:
        self.handlers[get_dataset(key).dataset_id] = rows_or_handler

    def fail(self, key: str, status: int = 500) -> None:
        async def handler(request):
            return web.json_response({"message": "boom"}, status=status)
        self.set(key, handler)

    def hang(self, key: str, seconds: float = 0.5) -> None:
        async def handler(request):
            await asyncio.sleep(seconds)
            return web.json_response([])
        self.set(key, handler)

    def queries_for(self, key: str) -> list:
        dataset_id = get_dataset(key).dataset_id
        return [query for ds, query in self.requests if ds == dataset_id]

    async def handle(self, request: web.Request) -> web.StreamResponse:
        dataset_id = request.match_info["filename"].rsplit(".json", 1)[0]
        self.requests.append((dataset_id, dict(request.query)))
        handler = self.handlers.get(dataset_id, [])
        if callable(handler):
            return await handler(request)
        return web.json_response(handler)


@pytest.fixture
def socrata():
    return FakeSocrata()


@pytest.fixture
async def socrata_server(aiohttp_server, socrata):
    app = web.Application()
    app.router.add_get("/resource/{filename}", socrata.handle)
    return await aiohttp_server(app)


@pytest.fixture
def settings(socrata_server):
    return replace(
        DEFAULT_SETTINGS,
        api_base=str(socrata_server.make_url("/")).rstrip("/"),
        default_timeout=0.2,
        core_timeout=0.2,
        portfolio_timeout=0.2,
    )


@pytest.fixture
async def session():
    async with aiohttp.ClientSession() as client_session:
        yield client_session
