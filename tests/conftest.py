"""
pytest configuration and fixtures for Quote Relay tests
"""

import asyncio
import json
import sys
from pathlib import Path

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from database.connection import DatabaseManager
from database.models import Quote
from database.operations import DatabaseOperations
from tests.factories import UPSTREAM_URL, UpstreamPayloadFactory
from utils.config_manager import UpstreamConfig


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory for test files"""
    return tmp_path


@pytest.fixture
def upstream_config():
    """Upstream config pointing at a mocked URL"""
    return UpstreamConfig(url=UPSTREAM_URL, pair_key="USDBRL", timeout=0.2)


@pytest.fixture
def upstream_payload():
    """Sample AwesomeAPI response"""
    return UpstreamPayloadFactory.create(bid="5.43")


@pytest.fixture
def sample_quote():
    """Sample quote"""
    return Quote(code="USD", codein="BRL", bid="5.43")


@pytest.fixture
async def test_database(temp_dir):
    """File-backed test database"""
    manager = DatabaseManager(str(temp_dir / "quotes.db"))
    await manager.initialize()

    yield manager

    await manager.close()


@pytest.fixture
async def db_operations(test_database):
    """DatabaseOperations with a deadline generous enough for CI"""
    return DatabaseOperations(test_database, write_timeout=2.0)


# 本地慢速服务的阻塞时长，远大于客户端和服务端的超时
STALL_SECONDS = 1.0


@pytest.fixture
async def slow_peer():
    """Real HTTP server on localhost that stalls before answering

    /slow-headers  waits before sending the status line
    /slow-body     sends headers and half the body, then waits
    /cotacao       relay-style {"bid"} answer sent after a wait
    """
    body = json.dumps(UpstreamPayloadFactory.create(bid="5.43")).encode()

    async def slow_headers(request):
        await asyncio.sleep(STALL_SECONDS)
        return web.Response(body=body, content_type="application/json")

    async def slow_body(request):
        response = web.StreamResponse(status=200, headers={"Content-Type": "application/json"})
        await response.prepare(request)
        await response.write(body[:len(body) // 2])
        await asyncio.sleep(STALL_SECONDS)
        await response.write(body[len(body) // 2:])
        await response.write_eof()
        return response

    async def slow_relay(request):
        await asyncio.sleep(STALL_SECONDS)
        return web.json_response({"bid": "5.43"})

    app = web.Application()
    app.router.add_get("/slow-headers", slow_headers)
    app.router.add_get("/slow-body", slow_body)
    app.router.add_get("/cotacao", slow_relay)

    server = TestServer(app)
    await server.start_server()

    yield server

    await server.close()
