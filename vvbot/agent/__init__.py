"""模块说明：__init__。"""

from vvbot.agent.router import HELP_MESSAGE, MessageRouter

__all__ = ["HELP_MESSAGE", "MessageRouter"]
