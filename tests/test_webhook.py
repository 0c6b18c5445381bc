import asyncio
import json

import httpx
import pytest

from vvbot.agent.router import HELP_MESSAGE, MessageRouter
from vvbot.config.schema import Config
from vvbot.server.webhook import create_app

from conftest import BOT_QQ, MENTION, StubSearch


@pytest.fixture
def router(channel, search) -> MessageRouter:
    return MessageRouter(BOT_QQ, channel, search)


@pytest.fixture
def client(router):
    app = create_app(Config(qq=BOT_QQ), router=router)
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


async def settle(router: MessageRouter) -> None:
    await asyncio.gather(*router.pending)


@pytest.mark.asyncio
async def test_post_dispatches_and_acknowledges(client, router, channel):
    payload = {"post_type": "message", "group_id": 42, "raw_message": f"{MENTION} hi", "user_id": 1}

    resp = await client.post("/", content=json.dumps(payload))

    assert resp.status_code == 200
    assert resp.content == b""
    await settle(router)
    assert len(channel.sent) == 1
    assert channel.sent[0].segments[0].data.text == HELP_MESSAGE


@pytest.mark.asyncio
async def test_post_image_search_flow(client, router, channel):
    payload = {"group_id": 42, "raw_message": f"{MENTION} vv cute cat"}

    resp = await client.post("/", json=payload)

    assert resp.status_code == 200
    await settle(router)
    assert channel.sent[0].segments[0].data.file == "https://x/y/img.png"


@pytest.mark.asyncio
async def test_non_post_is_a_noop(client, router, channel):
    resp = await client.get("/")

    assert resp.status_code == 200
    assert resp.content == b""
    assert router.pending == set()
    assert channel.sent == []


@pytest.mark.asyncio
async def test_malformed_body_is_dropped(client, router, channel):
    resp = await client.post("/", content=b"{not json")

    assert resp.status_code == 200
    assert resp.content == b""
    assert router.pending == set()
    assert channel.sent == []


@pytest.mark.asyncio
async def test_events_without_group_message_are_not_dispatched(client, router, channel):
    resp = await client.post("/", json={"post_type": "meta_event", "meta_event_type": "heartbeat"})

    assert resp.status_code == 200
    assert router.pending == set()
    assert channel.sent == []


@pytest.mark.asyncio
async def test_default_app_builds_napcat_router():
    config = Config(qq=BOT_QQ, napcat_api_host="napcat.local", napcat_api_port=3001)

    app = create_app(config)

    router = app.state.router
    assert router.token == MENTION
    assert router.channel.api_url == "http://napcat.local:3001/send_group_msg"
    assert router.search.search_url == "https://api.zvv.quest/search"
    # 两个客户端共用同一个连接池，超时由它统一设置
    assert router.channel.client is router.search.client
    assert router.channel.client.timeout == httpx.Timeout(config.http_timeout)
    assert not hasattr(app.state, "config")


@pytest.mark.asyncio
async def test_odd_informational_fields_do_not_drop_the_event(client, router, channel):
    payload = {
        "group_id": 42,
        "raw_message": f"{MENTION} vv cat",
        "group_name": None,
        "sender": {"user_id": 1, "nickname": None, "card": None},
        "message": [
            {"type": "at", "data": {"qq": BOT_QQ}},
            {"type": "image", "data": {"url": "https://a/b.png"}},
            {"type": "text", "data": {"text": " vv cat"}},
        ],
    }

    resp = await client.post("/", json=payload)

    assert resp.status_code == 200
    await settle(router)
    assert len(channel.sent) == 1
    assert channel.sent[0].segments[0].data.file == "https://x/y/img.png"


@pytest.mark.asyncio
async def test_shutdown_waits_for_in_flight_replies(channel):
    gate = asyncio.Event()

    class SlowSearch(StubSearch):
        async def search(self, keyword):
            await gate.wait()
            return await super().search(keyword)

    router = MessageRouter(BOT_QQ, channel, SlowSearch("https://x/y/img.png"))
    app = create_app(Config(qq=BOT_QQ), router=router)
    client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")

    async with app.router.lifespan_context(app):
        resp = await client.post("/", json={"group_id": 42, "raw_message": f"{MENTION} vv cat"})
        assert resp.status_code == 200
        assert len(router.pending) == 1
        asyncio.get_running_loop().call_later(0.01, gate.set)

    assert router.pending == set()
    assert len(channel.sent) == 1
