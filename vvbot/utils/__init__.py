"""模块说明：__init__。"""

from vvbot.utils.helpers import image_caption, truncate_string

__all__ = ["image_caption", "truncate_string"]
