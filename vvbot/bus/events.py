"""事件类型定义 - 网关收发的数据结构

- InboundEvent: NapCat 通过 webhook 推送的群消息事件
- MessageSegment: 消息段，只支持 text / image 两种
- OutboundMessage: 发回群里的回复
"""

from typing import Annotated, Any, Literal, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator


class TextData(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class ImageData(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: str  # 图片地址，由网关自行下载
    summary: str = ""  # 图片说明


class TextSegment(BaseModel):
    """文本消息段。"""
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    data: TextData


class ImageSegment(BaseModel):
    """图片消息段。"""
    model_config = ConfigDict(frozen=True)

    type: Literal["image"] = "image"
    data: ImageData


MessageSegment = Annotated[Union[TextSegment, ImageSegment], Field(discriminator="type")]

SEGMENT_TYPES = frozenset({"text", "image"})

_segments_adapter = TypeAdapter(list[MessageSegment])
_segment_adapter = TypeAdapter(MessageSegment)


def _known_segments(raw: Any) -> list[Any]:
    """过滤掉未知类型的消息段（at、face 等）。"""
    if not isinstance(raw, list):
        return []
    known = []
    for item in raw:
        seg_type = item.get("type") if isinstance(item, dict) else None
        if seg_type in SEGMENT_TYPES:
            known.append(item)
        else:
            logger.debug(f"Ignoring message segment of type {seg_type!r}")
    return known


def encode_message(segments: list[MessageSegment] | tuple[MessageSegment, ...]) -> list[dict[str, Any]]:
    """把消息段序列化为网关要求的 [{type, data}, ...]。"""
    return _segments_adapter.dump_python(list(segments), mode="json")


def decode_message(raw: Any) -> list[MessageSegment]:
    """解析消息段列表，未知类型会被丢弃，已知类型格式错误则抛出 ValidationError。"""
    return _segments_adapter.validate_python(_known_segments(raw))


def _valid_segments(raw: Any) -> list[MessageSegment]:
    """逐个解析入站消息段，格式不对的直接丢弃，不影响整条事件。"""
    segments = []
    for item in _known_segments(raw):
        try:
            segments.append(_segment_adapter.validate_python(item))
        except ValidationError as e:
            logger.debug(f"Ignoring malformed {item.get('type')} segment: {e.error_count()} error(s)")
    return segments


def _drop_nulls(value: Any) -> Any:
    # JSON null 当作字段缺失，回退到默认值
    if isinstance(value, dict):
        return {k: v for k, v in value.items() if v is not None}
    return value


class SenderInfo(BaseModel):
    """发送者信息，仅用于日志。"""
    user_id: int = 0
    nickname: str = ""
    card: str = ""
    role: str = ""

    @model_validator(mode="before")
    @classmethod
    def _tolerate_nulls(cls, value: Any) -> Any:
        if isinstance(value, (dict, SenderInfo)):
            return _drop_nulls(value)
        return {}


class InboundEvent(BaseModel):
    """
    入站事件 - NapCat 推送的群消息

    只有 group_id 和 raw_message 参与路由，其余字段仅用于日志。
    """
    model_config = ConfigDict(extra="ignore")

    group_id: int = 0
    raw_message: str = ""
    self_id: int = 0
    user_id: int = 0
    message_id: int = 0
    message_type: str = ""
    post_type: str = ""
    sub_type: str = ""
    time: int = 0
    group_name: str = ""
    sender: SenderInfo = Field(default_factory=SenderInfo)
    message: list[MessageSegment] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _tolerate_nulls(cls, value: Any) -> Any:
        return _drop_nulls(value)

    @field_validator("message", mode="before")
    @classmethod
    def _drop_unknown_segments(cls, value: Any) -> list[MessageSegment]:
        # message_format 为 string 时 message 是字符串，这里一并忽略
        return _valid_segments(value)

    @property
    def is_actionable(self) -> bool:
        return self.group_id != 0 and self.raw_message != ""


class OutboundMessage(BaseModel):
    """出站消息 - 发往某个群的一条回复。"""
    model_config = ConfigDict(frozen=True)

    group_id: int
    segments: tuple[MessageSegment, ...]


class SendGroupMsgPayload(BaseModel):
    """send_group_msg 请求体。"""
    group_id: int
    message: list[MessageSegment]

    @classmethod
    def from_outbound(cls, msg: OutboundMessage) -> "SendGroupMsgPayload":
        return cls(group_id=msg.group_id, message=list(msg.segments))
