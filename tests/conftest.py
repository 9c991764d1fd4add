"""
Shared fixtures: in-memory DuckDB local storage, a fake Supabase server
built on aiohttp.web, and a fully wired service container.
"""
import asyncio
import logging

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from newsdesk.data_manager.duckdb_client import DuckDBClient
from newsdesk.data_manager.local_repository import LocalNewsRepository
from newsdesk.data_manager.local_storage import LocalStorage
from newsdesk.di import build_services
from newsdesk.services.auth_service import hash_secret
from newsdesk.utils.app_config import AppConfig, RolesBlock, SettingsBlock

ADMIN_PIN = "1111"
USER_PIN = "2222"
ACCESS_KEY = "test-anon-key"


class FakeSupabase:
    """Just enough of PostgREST + storage to exercise the remote client."""

    def __init__(self):
        self.rows: list[dict] = []
        self.next_id = 1
        self.uploads: dict[str, bytes] = {}
        self.upload_types: dict[str, str] = {}
        self.requests: list[tuple[str, str]] = []
        self.fail_list = False
        self.fail_write = False
        self.fail_upload_suffix = None
        self.delay = 0.0
        self.endpoint = ""

    def app(self) -> web.Application:
        app = web.Application(middlewares=[self._auth])
        app.router.add_get("/rest/v1/news", self.list_news)
        app.router.add_post("/rest/v1/news", self.insert_news)
        app.router.add_delete("/rest/v1/news", self.delete_news)
        app.router.add_post("/storage/v1/object/news-images/{name}", self.upload)
        return app

    @web.middleware
    async def _auth(self, request, handler):
        self.requests.append((request.method, request.path_qs))
        if self.delay:
            await asyncio.sleep(self.delay)
        if (
            request.headers.get("apikey") != ACCESS_KEY
            or request.headers.get("Authorization") != f"Bearer {ACCESS_KEY}"
        ):
            return web.json_response({"message": "Invalid API key"}, status=401)
        return await handler(request)

    async def list_news(self, request):
        if self.fail_list:
            return web.Response(status=500, text="boom")
        assert request.query.get("order") == "news_date.desc"
        rows = sorted(self.rows, key=lambda r: r.get("news_date") or "", reverse=True)
        return web.json_response(rows)

    async def insert_news(self, request):
        if self.fail_write:
            return web.Response(status=400, text="duplicate key value")
        assert request.headers.get("Prefer") == "return=minimal"
        row = await request.json()
        row["id"] = self.next_id
        self.next_id += 1
        self.rows.append(row)
        return web.Response(status=201)

    async def delete_news(self, request):
        if self.fail_write:
            return web.Response(status=500, text="cannot delete")
        op, _, value = request.query["id"].partition(".")
        if op == "eq":
            self.rows = [r for r in self.rows if str(r["id"]) != value]
        elif op == "neq":
            self.rows = [r for r in self.rows if str(r["id"]) == value]
        return web.Response(status=204)

    async def upload(self, request):
        name = request.match_info["name"]
        if self.fail_upload_suffix and name.endswith(self.fail_upload_suffix):
            return web.Response(status=413, text="Payload too large")
        assert request.headers.get("x-upsert") == "true"
        self.uploads[name] = await request.read()
        self.upload_types[name] = request.headers.get("Content-Type")
        return web.json_response({"Key": f"news-images/{name}"})


@pytest.fixture(autouse=True)
def _no_ambient_credentials(monkeypatch):
    monkeypatch.delenv("SB_URL", raising=False)
    monkeypatch.delenv("SB_KEY", raising=False)


@pytest.fixture
def logger():
    return logging.getLogger("newsdesk.tests")


@pytest.fixture
def storage():
    client = DuckDBClient(":memory:")
    yield LocalStorage(client.conn)
    client.close()


@pytest.fixture
def local_repo(storage, logger):
    return LocalNewsRepository(storage, logger)


@pytest.fixture
def app_config():
    return AppConfig(
        roles=RolesBlock(admin_hash=hash_secret(ADMIN_PIN), user_hash=hash_secret(USER_PIN)),
        settings=SettingsBlock(request_timeout=5),
    )


@pytest.fixture
def notices():
    return []


@pytest.fixture
def services(app_config, logger, notices):
    svc = build_services(app_config, logger=logger, notify=notices.append, db_path=":memory:")
    yield svc
    svc.db_client.close()


@pytest.fixture
async def supabase():
    fake = FakeSupabase()
    server = TestServer(fake.app())
    await server.start_server()
    fake.endpoint = str(server.make_url("/"))
    yield fake
    await server.close()


@pytest.fixture
def remote_env(monkeypatch, supabase):
    monkeypatch.setenv("SB_URL", supabase.endpoint)
    monkeypatch.setenv("SB_KEY", ACCESS_KEY)
    return supabase
