"""模块说明：helpers。"""

import posixpath
from urllib.parse import urlsplit

# 无法从 URL 得到文件名时使用的图片说明
DEFAULT_IMAGE_CAPTION = "我们的网民有很多创意"


def truncate_string(s: str, max_len: int = 100, suffix: str = "...") -> str:
    """函数说明：truncate_string。"""
    if len(s) <= max_len:
        return s
    return s[: max_len - len(suffix)] + suffix


def image_caption(url: str) -> str:
    """取 URL 路径的最后一段作为图片说明，例如 https://x/y/img.png -> img.png。"""
    try:
        path = urlsplit(url).path
    except ValueError:
        return DEFAULT_IMAGE_CAPTION
    name = posixpath.basename(path.rstrip("/"))
    return name or DEFAULT_IMAGE_CAPTION
