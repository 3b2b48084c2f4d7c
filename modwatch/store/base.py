"""
存储接口

模组目录与服务端配置的仓库接口。检查流程只依赖 load/save，
具体实现可以是 JSON 文件，也可以是测试用的内存实现。
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from modwatch.models import Category, InstalledMod, ServerConfig


class ModRepository(ABC):
    """已安装模组仓库"""

    @abstractmethod
    async def load(self) -> List[InstalledMod]:
        """读取全部模组"""
        pass

    @abstractmethod
    async def save(self, mods: List[InstalledMod]) -> None:
        """整体写回模组列表"""
        pass

    async def get(self, mod_id: str) -> Optional[InstalledMod]:
        for mod in await self.load():
            if mod.id == mod_id:
                return mod
        return None

    async def add(self, mod: InstalledMod) -> None:
        """添加模组，已存在同 ID 的模组时原位替换"""
        mods = await self.load()
        for index, existing in enumerate(mods):
            if existing.id == mod.id:
                mods[index] = mod
                break
        else:
            mods.append(mod)
        await self.save(mods)

    async def remove(self, mod_id: str) -> bool:
        """删除模组，返回是否存在"""
        mods = await self.load()
        remaining = [mod for mod in mods if mod.id != mod_id]
        if len(remaining) == len(mods):
            return False
        await self.save(remaining)
        return True

    async def categorized(self) -> Dict[Category, List[InstalledMod]]:
        """按分类分组"""
        groups: Dict[Category, List[InstalledMod]] = {
            category: [] for category in Category
        }
        for mod in await self.load():
            groups[mod.category].append(mod)
        return groups


class ConfigRepository(ABC):
    """服务端配置仓库"""

    @abstractmethod
    async def load(self) -> ServerConfig:
        pass

    @abstractmethod
    async def save(self, config: ServerConfig) -> None:
        pass
