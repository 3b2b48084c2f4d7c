"""
配置文件加载

按后缀支持 TOML / JSON / YAML。
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import toml
import yaml

from modwatch.models import ModWatchConfig
from modwatch.exceptions import ConfigError, ConfigParseError


def load_config_dict(config_path: str) -> Dict[str, Any]:
    """加载配置文件为字典"""
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"配置文件不存在: {config_path}")

    suffix = path.suffix.lower()

    try:
        if suffix == ".toml":
            data = toml.load(str(path))
        elif suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        else:
            raise ConfigError(f"不支持的配置文件格式: {suffix}")
    except (toml.TomlDecodeError, ValueError, yaml.YAMLError) as e:
        raise ConfigParseError(
            f"配置文件解析失败: {config_path}", context={"error": str(e)}
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(f"配置文件顶层必须是表/对象: {config_path}")
    return data


def load_config(config_path: Optional[str] = None) -> ModWatchConfig:
    """加载配置，未指定文件时使用默认配置"""
    if config_path is None:
        return ModWatchConfig()
    return ModWatchConfig.from_dict(load_config_dict(config_path))
