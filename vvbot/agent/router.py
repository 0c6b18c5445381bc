"""消息路由模块。

该模块决定收到的一条群消息要不要回复、回复什么：
1. 只处理 @ 了机器人的消息。
2. 没有 "vv " 指令时回复帮助文本。
3. 有指令时按关键词搜索图片，找到就发图，找不到就回帮助文本。

每条 webhook 事件都在独立的 asyncio 任务里处理，调用方不等待结果。
"""

import asyncio

from loguru import logger

from vvbot.bus.events import InboundEvent
from vvbot.channels.base import BaseChannel
from vvbot.search.base import SearchProvider, SearchResult

HELP_MESSAGE = """Usage: 
@<bot-nickname> vv <keywords>

A bot for searching 张维为 quote picture according to given keywords.

Description:
    vv <keywords>    Searches for an image based on the keywords and sends it to the group.

Example:
    @<bot-nickname> vv cute cat

Note:
    Longer keywords for better results!
"""

TRIGGER_PREFIX = "vv "


def mention_token(qq: str) -> str:
    """机器人被 @ 时消息里出现的 CQ 码。"""
    return f"[CQ:at,qq={qq}]"


def is_help_message(msg: str, token: str) -> bool:
    return token in msg and TRIGGER_PREFIX not in msg


def extract_keyword(msg: str) -> str | None:
    """取第一个 "vv " 之后的文本并去掉首尾空白；没有指令时返回 None。"""
    index = msg.find(TRIGGER_PREFIX)
    if index == -1:
        return None
    return msg[index + len(TRIGGER_PREFIX):].strip()


class MessageRouter:
    """群消息路由器。

    持有的状态只有只读的机器人 QQ 号和两个客户端，
    可以被任意多个并发任务共享。
    """

    def __init__(self, qq: str, channel: BaseChannel, search: SearchProvider):
        self.qq = qq
        self.channel = channel
        self.search = search
        self.token = mention_token(qq)
        # 保存任务引用，避免任务在完成前被垃圾回收
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> set[asyncio.Task]:
        return set(self._tasks)

    def dispatch(self, event: InboundEvent) -> asyncio.Task:
        """为事件创建后台任务并立即返回，不等待处理结果。"""
        task = asyncio.create_task(self.handle(event))
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.opt(exception=exc).error(f"Unhandled error while routing message: {exc}")

    async def handle(self, event: InboundEvent) -> None:
        """处理一条群消息，每个分支最多发送一条回复。"""
        group_id = event.group_id
        msg = event.raw_message

        if not event.is_actionable:
            return

        # 检查是否是 @ 机器人的消息
        if self.token not in msg:
            return

        logger.debug(
            f"Mentioned in group {group_id} by {event.sender.nickname or event.user_id}: {msg}"
        )

        if is_help_message(msg, self.token):
            await self.channel.send_text(group_id, HELP_MESSAGE)
            return

        keyword = extract_keyword(msg)
        if keyword is None:
            return

        if keyword:
            result = await self.search.search(keyword)
        else:
            result = SearchResult.miss("empty keyword")

        if result.found:
            logger.info(f"Found image URL: {result.url}")
            await self.channel.send_image(group_id, result.url)
            return

        logger.info(f"No image for group {group_id}: {result.reason}")
        # 关键词为空或没搜到时，只要消息里仍有 "vv " 就回复帮助文本
        if TRIGGER_PREFIX in msg:
            await self.channel.send_text(group_id, HELP_MESSAGE)
