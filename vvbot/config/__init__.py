"""模块说明：__init__。"""

from vvbot.config.loader import ConfigError, load_config, save_config
from vvbot.config.schema import Config

__all__ = ["Config", "ConfigError", "load_config", "save_config"]
