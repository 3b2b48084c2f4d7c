"""
ModWatch 数据模型包

包含配置模型、API 模型、模组目录模型和检查结果模型。
"""

from modwatch.models.config import (
    ModLoader,
    CategoryPolicy,
    TargetEnvironment,
    CheckConfig,
    APIConfig,
    StoreConfig,
    ModWatchConfig,
)
from modwatch.models.api import (
    SupportLevel,
    Category,
    ProjectInfo,
    RemoteVersion,
)
from modwatch.models.catalog import (
    ModEnvironment,
    InstalledMod,
    ServerConfig,
)
from modwatch.models.result import (
    UpdateCheckResult,
    CheckSummary,
    CheckReport,
)

__all__ = [
    # 配置模型
    "ModLoader",
    "CategoryPolicy",
    "TargetEnvironment",
    "CheckConfig",
    "APIConfig",
    "StoreConfig",
    "ModWatchConfig",
    # API 模型
    "SupportLevel",
    "Category",
    "ProjectInfo",
    "RemoteVersion",
    # 模组目录模型
    "ModEnvironment",
    "InstalledMod",
    "ServerConfig",
    # 检查结果
    "UpdateCheckResult",
    "CheckSummary",
    "CheckReport",
]
