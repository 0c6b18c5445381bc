"""模块说明：__init__。"""

from vvbot.server.webhook import create_app

__all__ = ["create_app"]
