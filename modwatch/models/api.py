"""
API 数据模型

定义 Modrinth 返回数据对应的数据类：项目信息、版本信息、环境支持等级。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class SupportLevel(Enum):
    """单端（客户端/服务端）支持等级"""

    REQUIRED = "required"
    OPTIONAL = "optional"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SupportLevel":
        """未设置时按 required 处理，无法识别的取值归为 unknown"""
        if not value:
            return cls.REQUIRED
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class Category(Enum):
    """模组分类"""

    BOTH = "both"
    SERVER_ONLY = "server-only"
    CLIENT_ONLY = "client-only"


@dataclass
class ProjectInfo:
    """
    模组项目信息。
    """

    id: str
    slug: str
    title: str
    description: str = ""
    project_type: str = "mod"
    icon_url: Optional[str] = None
    client_side: Optional[str] = None
    server_side: Optional[str] = None
    versions: List[str] = field(default_factory=list)

    @classmethod
    def from_modrinth(cls, data: Dict[str, Any]) -> "ProjectInfo":
        return cls(
            id=data.get("id", ""),
            slug=data.get("slug", ""),
            title=data.get("title", ""),
            description=data.get("description", ""),
            project_type=data.get("project_type", "mod"),
            icon_url=data.get("icon_url"),
            client_side=data.get("client_side"),
            server_side=data.get("server_side"),
            versions=data.get("versions", []),
        )


@dataclass(frozen=True)
class RemoteVersion:
    """
    远端版本记录

    Modrinth 的版本接口使用 client_support/server_support，项目接口使用
    client_side/server_side，两组字段都保留。
    """

    id: str
    version_number: str
    date_published: str = ""
    changelog: Optional[str] = None
    game_versions: List[str] = field(default_factory=list)
    loaders: List[str] = field(default_factory=list)
    client_support: Optional[str] = None
    server_support: Optional[str] = None
    client_side: Optional[str] = None
    server_side: Optional[str] = None

    @classmethod
    def from_modrinth(cls, data: Dict[str, Any]) -> "RemoteVersion":
        """
        将 Modrinth API 返回的版本信息转换为 RemoteVersion 对象。
        """
        return cls(
            id=data.get("id", ""),
            version_number=data.get("version_number", ""),
            date_published=data.get("date_published", ""),
            changelog=data.get("changelog"),
            game_versions=list(data.get("game_versions") or []),
            loaders=list(data.get("loaders") or []),
            client_support=data.get("client_support"),
            server_support=data.get("server_support"),
            client_side=data.get("client_side"),
            server_side=data.get("server_side"),
        )
