"""模块说明：napcat。通过 NapCat 的 OneBot HTTP API 发送群消息。"""

import httpx
from loguru import logger
from pydantic import ValidationError

from vvbot.bus.events import OutboundMessage, SendGroupMsgPayload
from vvbot.channels.base import BaseChannel
from vvbot.utils.helpers import truncate_string


class NapcatChannel(BaseChannel):
    """类说明：NapcatChannel。"""

    name = "napcat"

    def __init__(
        self,
        client: httpx.AsyncClient,
        host: str,
        port: int,
        access_token: str = "",
    ):
        self.client = client
        self.host = host
        self.port = port
        self.access_token = access_token

    @property
    def api_url(self) -> str:
        return f"http://{self.host}:{self.port}/send_group_msg"

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.access_token}",
        }

    async def send(self, msg: OutboundMessage) -> bool:
        """异步函数说明：send。发送失败不重试，也不向调用方抛出。"""
        try:
            body = SendGroupMsgPayload.from_outbound(msg).model_dump_json()
        except (ValidationError, ValueError) as e:
            logger.error(f"Error marshalling payload for group {msg.group_id}: {e}")
            return False

        try:
            resp = await self.client.post(
                self.api_url,
                content=body,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            logger.error(f"Error sending message to napcat: {e}")
            return False

        if resp.status_code != httpx.codes.OK:
            logger.error(
                f"Failed to send message to napcat, status: {resp.status_code}, "
                f"response: {truncate_string(resp.text, 500)}"
            )
            return False

        logger.info(f"Successfully sent message to group {msg.group_id}.")
        return True
