"""模块说明：base。"""

from abc import ABC, abstractmethod

from vvbot.bus.events import ImageSegment, ImageData, OutboundMessage, TextData, TextSegment
from vvbot.utils.helpers import image_caption


class BaseChannel(ABC):
    """类说明：BaseChannel。聊天网关的出站一侧。"""

    name: str = "base"

    @abstractmethod
    async def send(self, msg: OutboundMessage) -> bool:
        """异步函数说明：send。失败只记日志，返回是否成功。"""
        pass

    async def send_text(self, group_id: int, text: str) -> bool:
        """异步函数说明：send_text。"""
        return await self.send(OutboundMessage(group_id=group_id, segments=(text_segment(text),)))

    async def send_image(self, group_id: int, url: str) -> bool:
        """异步函数说明：send_image。"""
        return await self.send(OutboundMessage(group_id=group_id, segments=(image_segment(url),)))


def text_segment(text: str) -> TextSegment:
    return TextSegment(data=TextData(text=text))


def image_segment(url: str) -> ImageSegment:
    """图片段：file 始终是原始 URL，summary 取 URL 路径的文件名。"""
    return ImageSegment(data=ImageData(file=url, summary=image_caption(url)))
