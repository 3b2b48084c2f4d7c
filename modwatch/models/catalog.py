"""
模组目录模型

服务端已安装模组与服务端配置，对应 data/mods.json 与 data/config.json。
JSON 中使用 camelCase 键名。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from modwatch.models.api import Category, SupportLevel
from modwatch.models.config import ModLoader, TargetEnvironment


@dataclass
class ModEnvironment:
    """模组的客户端/服务端支持等级"""

    client: SupportLevel = SupportLevel.REQUIRED
    server: SupportLevel = SupportLevel.REQUIRED

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ModEnvironment":
        data = data or {}
        return cls(
            client=SupportLevel.parse(data.get("client")),
            server=SupportLevel.parse(data.get("server")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"client": self.client.value, "server": self.server.value}


@dataclass
class InstalledMod:
    """
    已安装模组

    version_number 为当前安装的版本号，未知时为空字符串。
    """

    id: str
    name: str
    slug: str = ""
    version_number: str = ""
    version_id: str = ""
    filename: str = ""
    environment: ModEnvironment = field(default_factory=ModEnvironment)
    category: Category = Category.BOTH
    installed_at: str = ""
    icon_url: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InstalledMod":
        try:
            category = Category(data.get("category", Category.BOTH.value))
        except ValueError:
            category = Category.BOTH
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            slug=data.get("slug", ""),
            version_number=data.get("versionNumber") or "",
            version_id=data.get("versionId", ""),
            filename=data.get("filename", ""),
            environment=ModEnvironment.from_dict(data.get("environment")),
            category=category,
            installed_at=data.get("installedAt", ""),
            icon_url=data.get("iconUrl"),
            description=data.get("description"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "versionId": self.version_id,
            "filename": self.filename,
            "environment": self.environment.to_dict(),
            "category": self.category.value,
            "installedAt": self.installed_at,
        }
        if self.icon_url is not None:
            data["iconUrl"] = self.icon_url
        if self.description is not None:
            data["description"] = self.description
        if self.version_number:
            data["versionNumber"] = self.version_number
        return data


@dataclass
class ServerConfig:
    """服务端配置"""

    path: str = ""
    minecraft_version: str = ""
    loader: str = ModLoader.FABRIC.value
    loader_version: str = ""
    show_server_only_mods: bool = True

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ServerConfig":
        data = data or {}
        return cls(
            path=data.get("path", ""),
            minecraft_version=data.get("minecraftVersion", ""),
            loader=data.get("loader", ModLoader.FABRIC.value),
            loader_version=data.get("loaderVersion", ""),
            show_server_only_mods=data.get("showServerOnlyMods", True),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "minecraftVersion": self.minecraft_version,
            "loader": self.loader,
            "loaderVersion": self.loader_version,
            "showServerOnlyMods": self.show_server_only_mods,
        }

    def target(self) -> TargetEnvironment:
        """用于筛选兼容版本的目标环境"""
        return TargetEnvironment(
            game_version=self.minecraft_version or "",
            loader=self.loader or "",
        )
