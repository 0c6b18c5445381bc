"""模块说明：__init__。"""

from vvbot.bus.events import (
    ImageSegment,
    InboundEvent,
    MessageSegment,
    OutboundMessage,
    SendGroupMsgPayload,
    TextSegment,
    decode_message,
    encode_message,
)

__all__ = [
    "InboundEvent",
    "OutboundMessage",
    "MessageSegment",
    "TextSegment",
    "ImageSegment",
    "SendGroupMsgPayload",
    "encode_message",
    "decode_message",
]
