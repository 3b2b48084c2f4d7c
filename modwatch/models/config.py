"""
配置模型

定义 ModWatch 运行配置（检查节奏、API、存储）以及模组加载器等枚举。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from modwatch.exceptions import ConfigValidationError


MODRINTH_BASE_URL = "https://api.modrinth.com/v2"
DEFAULT_USER_AGENT = "modwatch/0.1.0"


class ModLoader(Enum):
    """模组加载器"""

    FABRIC = "fabric"
    FORGE = "forge"
    QUILT = "quilt"
    NEOFORGE = "neoforge"


class CategoryPolicy(Enum):
    """
    客户端/服务端分类策略

    PRIORITY: 服务端必需优先标记为 server-only，其次客户端必需为 client-only。
    STRICT: 两端都必需才是 both，只有一端必需时才归为对应的单端分类。
    """

    PRIORITY = "priority"
    STRICT = "strict"


@dataclass
class TargetEnvironment:
    """
    服务端目标环境

    空字段表示该维度不参与过滤。
    """

    game_version: str = ""
    loader: str = ""


@dataclass
class CheckConfig:
    """更新检查节奏配置"""

    batch_size: int = 3
    batch_delay: float = 0.5
    max_retries: int = 3
    retry_delay: float = 1.0
    category_policy: CategoryPolicy = CategoryPolicy.PRIORITY

    def validate(self):
        if self.batch_size <= 0:
            raise ConfigValidationError(
                "batch_size 必须为正整数", context={"batch_size": self.batch_size}
            )
        if self.max_retries <= 0:
            raise ConfigValidationError(
                "max_retries 必须为正整数", context={"max_retries": self.max_retries}
            )
        if self.batch_delay < 0 or self.retry_delay < 0:
            raise ConfigValidationError(
                "batch_delay / retry_delay 不能为负数",
                context={
                    "batch_delay": self.batch_delay,
                    "retry_delay": self.retry_delay,
                },
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CheckConfig":
        policy = data.get("category_policy", CategoryPolicy.PRIORITY.value)
        try:
            category_policy = CategoryPolicy(policy)
        except ValueError:
            raise ConfigValidationError(
                f"未知的分类策略: {policy}", context={"category_policy": policy}
            )
        try:
            config = cls(
                batch_size=int(data.get("batch_size", 3)),
                batch_delay=float(data.get("batch_delay", 0.5)),
                max_retries=int(data.get("max_retries", 3)),
                retry_delay=float(data.get("retry_delay", 1.0)),
                category_policy=category_policy,
            )
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(f"[check] 配置项类型错误: {e}")
        config.validate()
        return config


@dataclass
class APIConfig:
    """Modrinth API 配置"""

    base_url: str = MODRINTH_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = 10.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "APIConfig":
        try:
            timeout = float(data.get("request_timeout", 10.0))
        except (TypeError, ValueError):
            raise ConfigValidationError(
                "request_timeout 必须为数字",
                context={"request_timeout": data.get("request_timeout")},
            )
        if timeout <= 0:
            raise ConfigValidationError(
                "request_timeout 必须大于 0", context={"request_timeout": timeout}
            )
        return cls(
            base_url=str(data.get("base_url", MODRINTH_BASE_URL)).rstrip("/"),
            user_agent=str(data.get("user_agent", DEFAULT_USER_AGENT)),
            request_timeout=timeout,
        )


@dataclass
class StoreConfig:
    """存储配置"""

    data_dir: str = "data"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoreConfig":
        return cls(data_dir=str(data.get("data_dir", "data")))


@dataclass
class ModWatchConfig:
    """ModWatch 主配置"""

    check: CheckConfig = field(default_factory=CheckConfig)
    api: APIConfig = field(default_factory=APIConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    log_file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ModWatchConfig":
        """从配置字典创建（缺失的节使用默认值）"""
        data = data or {}
        for section in ("check", "api", "store"):
            if not isinstance(data.get(section, {}), dict):
                raise ConfigValidationError(f"[{section}] 必须是一个表")
        return cls(
            check=CheckConfig.from_dict(data.get("check", {})),
            api=APIConfig.from_dict(data.get("api", {})),
            store=StoreConfig.from_dict(data.get("store", {})),
            log_file=data.get("log_file"),
        )
