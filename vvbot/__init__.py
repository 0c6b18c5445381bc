"""
vvbot - 张维为语录图片 QQ 群机器人
"""

__version__ = "0.1.0"
__logo__ = "🖼️"
