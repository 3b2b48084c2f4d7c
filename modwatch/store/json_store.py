"""
JSON 文件存储

<data_dir>/mods.json 保存已安装模组列表，<data_dir>/config.json 保存服务端配置。
文件不存在或无法解析时用默认值重新初始化。
"""

import json
import os
from typing import Any, List

import aiofiles
from loguru import logger

from modwatch.models import InstalledMod, ServerConfig
from modwatch.exceptions import StoreError
from modwatch.store.base import ConfigRepository, ModRepository

MODS_FILE = "mods.json"
CONFIG_FILE = "config.json"


class JsonFile:
    """单个 JSON 文件的读写"""

    def __init__(self, path: str):
        self.path = path

    def _ensure_dir(self):
        directory = os.path.dirname(self.path)
        if not directory:
            return
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise StoreError(
                f"无法创建数据目录: {directory}", context={"error": str(e)}
            ) from e

    async def write(self, data: Any) -> None:
        self._ensure_dir()
        try:
            async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(data, indent=2, ensure_ascii=False))
        except OSError as e:
            raise StoreError(
                f"写入文件失败: {self.path}", context={"error": str(e)}
            ) from e

    async def read(self, default: Any) -> Any:
        """读取文件，不存在或内容损坏时写入并返回默认值"""
        if not os.path.exists(self.path):
            await self.write(default)
            return default

        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            raise StoreError(
                f"读取文件失败: {self.path}", context={"error": str(e)}
            ) from e

        try:
            return json.loads(content)
        except ValueError:
            logger.warning(f"[存储] {self.path} 内容无法解析，已重置为默认值")
            await self.write(default)
            return default


class JsonModRepository(ModRepository):
    """基于 mods.json 的模组仓库"""

    def __init__(self, data_dir: str):
        self.file = JsonFile(os.path.join(data_dir, MODS_FILE))

    async def load(self) -> List[InstalledMod]:
        data = await self.file.read([])
        if not isinstance(data, list):
            raise StoreError(
                "mods.json 必须是一个数组", context={"path": self.file.path}
            )
        try:
            return [InstalledMod.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise StoreError(
                "mods.json 中存在无效的模组记录",
                context={"path": self.file.path, "error": str(e)},
            ) from e

    async def save(self, mods: List[InstalledMod]) -> None:
        await self.file.write([mod.to_dict() for mod in mods])


class JsonConfigRepository(ConfigRepository):
    """基于 config.json 的服务端配置仓库"""

    def __init__(self, data_dir: str):
        self.file = JsonFile(os.path.join(data_dir, CONFIG_FILE))

    async def load(self) -> ServerConfig:
        data = await self.file.read(ServerConfig().to_dict())
        if not isinstance(data, dict):
            raise StoreError(
                "config.json 必须是一个对象", context={"path": self.file.path}
            )
        return ServerConfig.from_dict(data)

    async def save(self, config: ServerConfig) -> None:
        await self.file.write(config.to_dict())
