"""Webhook 入口。

NapCat 把群消息以 HTTP POST 推送到 "/"：
- 非 POST 请求只记日志，不做任何处理；
- 请求体无法解析时记录原始内容后丢弃；
- 解析成功后把事件交给路由器在后台处理，立即返回 200，
  下游的搜索和发送结果不会反馈给网关。
"""

import asyncio
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from loguru import logger
from pydantic import ValidationError
from starlette.requests import ClientDisconnect

from vvbot.agent.router import MessageRouter
from vvbot.bus.events import InboundEvent
from vvbot.channels.base import BaseChannel
from vvbot.channels.napcat import NapcatChannel
from vvbot.config.schema import Config
from vvbot.search.base import SearchProvider
from vvbot.search.zvv import ZvvSearchClient
from vvbot.utils.helpers import truncate_string

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    config: Config,
    router: MessageRouter | None = None,
    channel: BaseChannel | None = None,
    search: SearchProvider | None = None,
) -> FastAPI:
    """创建 webhook 应用；未注入的组件共用同一个 httpx 连接池。"""
    client: httpx.AsyncClient | None = None
    if router is None and (channel is None or search is None):
        client = httpx.AsyncClient(timeout=config.http_timeout)

    if router is None:
        channel = channel or NapcatChannel(
            client,
            host=config.napcat_api_host,
            port=config.napcat_api_port,
            access_token=config.napcat_access_token,
        )
        search = search or ZvvSearchClient(client, api_base=config.search_api_base)
        router = MessageRouter(config.qq, channel, search)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # 等待仍在处理的消息发完，再关闭连接池
        if router.pending:
            await asyncio.gather(*router.pending, return_exceptions=True)
        if client is not None:
            await client.aclose()

    app = FastAPI(title="vvbot", lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.router = router

    @app.api_route("/", methods=ALL_METHODS)
    async def webhook(request: Request) -> Response:
        if request.method != "POST":
            logger.warning(f"Received a {request.method} request, but only POST is supported.")
            return Response()

        try:
            body = await request.body()
        except ClientDisconnect as e:
            logger.error(f"Error reading request body: {e}")
            return PlainTextResponse("Error reading request body", status_code=500)

        try:
            event = InboundEvent.model_validate_json(body)
        except ValidationError as e:
            logger.error(f"Error parsing JSON: {e}")
            logger.error(f"Raw body: {truncate_string(body.decode('utf-8', errors='replace'), 2000)}")
            return Response()

        if not event.is_actionable:
            logger.debug(f"Dropping {event.post_type or 'unknown'} event without group message")
            return Response()

        router.dispatch(event)
        return Response()

    return app
