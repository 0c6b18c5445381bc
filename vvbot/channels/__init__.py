"""模块说明：__init__。"""

from vvbot.channels.base import BaseChannel, image_segment, text_segment
from vvbot.channels.napcat import NapcatChannel

__all__ = ["BaseChannel", "NapcatChannel", "image_segment", "text_segment"]
