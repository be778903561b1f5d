"""Shared fixtures: a local aiohttp server standing in for the Wave API."""

import asyncio
from collections.abc import AsyncGenerator

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from wave_cli.api.client import WaveAPIClient

THUMBNAIL_BYTES = b"\xff\xd8\xff\xe0" + bytes(range(256)) * 400


def make_items(host: str) -> list[dict]:
    return [
        {
            "id": "dQw4w9WgXcQ",
            "title": "Never Gonna Give You Up",
            "uploaderName": "Rick Astley",
            "uploaderUrl": "/channel/UCuAXFkgsw1L7xaCfnd5JJOw",
            "duration": 213,
            "thumbnail": f"http://{host}/img/cover.jpg",
            "url": "/watch?v=dQw4w9WgXcQ",
            "uploaderVerified": True,
        },
        {
            "id": "yPYZpwSpKmA",
            "title": "Together Forever",
            "uploaderName": "Rick Astley",
            "duration": 205,
        },
        {"title": "Untitled upload"},
    ]


class FakeWaveAPI:
    """Records the requests it receives so tests can assert on them."""

    def __init__(self):
        self.requests: list[tuple[str, str | None]] = []

    async def search(self, request: web.Request) -> web.Response:
        if request.method == "POST":
            query = (await request.post()).get("q")
        else:
            query = request.query.get("q")
        self.requests.append((request.method, query))
        if query == "nothing":
            return web.json_response({"items": []})
        return web.json_response({"items": make_items(request.host)})

    async def broken(self, request: web.Request) -> web.Response:
        return web.Response(status=500, text="upstream exploded")

    async def not_json(self, request: web.Request) -> web.Response:
        return web.Response(text="<html>maintenance</html>", content_type="text/html")

    async def wrong_shape(self, request: web.Request) -> web.Response:
        return web.json_response({"results": []})

    async def json_list(self, request: web.Request) -> web.Response:
        return web.json_response([1, 2, 3])

    async def slow(self, request: web.Request) -> web.Response:
        await asyncio.sleep(2)
        return web.json_response({"items": []})

    async def cover(self, request: web.Request) -> web.Response:
        return web.Response(body=THUMBNAIL_BYTES, content_type="image/jpeg")

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_route("GET", "/wave/ytmusicsearch", self.search)
        app.router.add_route("POST", "/wave/ytmusicsearch", self.search)
        app.router.add_get("/wave/broken", self.broken)
        app.router.add_get("/wave/maintenance", self.not_json)
        app.router.add_get("/wave/wrongshape", self.wrong_shape)
        app.router.add_get("/wave/jsonlist", self.json_list)
        app.router.add_get("/wave/slow", self.slow)
        app.router.add_get("/img/cover.jpg", self.cover)
        return app


@pytest.fixture
def fake_api() -> FakeWaveAPI:
    return FakeWaveAPI()


@pytest.fixture
async def wave_server(fake_api: FakeWaveAPI) -> AsyncGenerator[TestServer, None]:
    server = TestServer(fake_api.build_app())
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
async def client(wave_server: TestServer) -> AsyncGenerator[WaveAPIClient, None]:
    api_client = WaveAPIClient(base_url=str(wave_server.make_url("/wave/")), timeout=5)
    yield api_client
    await api_client.close()
