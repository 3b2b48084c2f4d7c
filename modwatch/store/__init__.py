"""
ModWatch 存储层

模组目录与服务端配置的仓库接口及其 JSON / 内存实现。
"""

from modwatch.store.base import ModRepository, ConfigRepository
from modwatch.store.json_store import JsonModRepository, JsonConfigRepository
from modwatch.store.memory import MemoryModRepository, MemoryConfigRepository

__all__ = [
    "ModRepository",
    "ConfigRepository",
    "JsonModRepository",
    "JsonConfigRepository",
    "MemoryModRepository",
    "MemoryConfigRepository",
]
