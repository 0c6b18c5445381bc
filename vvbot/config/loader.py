"""模块说明：loader。"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from vvbot.config.schema import Config

DEFAULT_CONFIG_FILE = "config.yml"

# 旧版配置文件使用的键名
_LEGACY_KEYS = {
    "q_q": "qq",
    "go_listen_port": "listen_port",
    "napcat_a_p_i_host": "napcat_api_host",
    "napcat_a_p_i_port": "napcat_api_port",
}


class ConfigError(Exception):
    """配置无法加载，进程不应继续启动。"""


def get_config_path() -> Path:
    """函数说明：get_config_path。"""
    return Path.cwd() / DEFAULT_CONFIG_FILE


def load_config(config_path: Path | None = None) -> Config:
    """读取 YAML 配置文件，失败时抛出 ConfigError。"""
    path = config_path or get_config_path()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Error reading config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    data = _migrate_config(convert_keys(data))
    try:
        return Config(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e


def save_config(config: Config, config_path: Path | None = None) -> None:
    """函数说明：save_config。"""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = convert_to_camel(config.model_dump())

    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)


def _migrate_config(data: dict) -> dict:
    """函数说明：_migrate_config。"""
    for old, new in _LEGACY_KEYS.items():
        if old in data and new not in data:
            data[new] = data.pop(old)
    return data


def convert_keys(data: Any) -> Any:
    """函数说明：convert_keys。"""
    if isinstance(data, dict):
        return {camel_to_snake(str(k)): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def convert_to_camel(data: Any) -> Any:
    """函数说明：convert_to_camel。"""
    if isinstance(data, dict):
        return {snake_to_camel(k): convert_to_camel(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_to_camel(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """函数说明：camel_to_snake。"""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0 and name[i - 1] != "_":
            result.append("_")
        result.append(char.lower())
    return "".join(result)


def snake_to_camel(name: str) -> str:
    """函数说明：snake_to_camel。"""
    components = name.split("_")
    return components[0] + "".join(x.title() for x in components[1:])
