"""内存存储，主要用于测试"""

import copy
from typing import List, Optional

from modwatch.models import InstalledMod, ServerConfig
from modwatch.store.base import ConfigRepository, ModRepository


class MemoryModRepository(ModRepository):
    def __init__(self, mods: Optional[List[InstalledMod]] = None):
        self._mods = list(mods or [])

    async def load(self) -> List[InstalledMod]:
        return copy.deepcopy(self._mods)

    async def save(self, mods: List[InstalledMod]) -> None:
        self._mods = copy.deepcopy(mods)


class MemoryConfigRepository(ConfigRepository):
    def __init__(self, config: Optional[ServerConfig] = None):
        self._config = config or ServerConfig()

    async def load(self) -> ServerConfig:
        return copy.deepcopy(self._config)

    async def save(self, config: ServerConfig) -> None:
        self._config = copy.deepcopy(config)
