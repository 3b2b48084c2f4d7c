"""
兼容性过滤服务

判断远端版本是否适用于服务端的游戏版本与模组加载器，
并根据客户端/服务端支持等级给版本分类。
"""

from dataclasses import dataclass
from typing import List, Union

from modwatch.models import (
    Category,
    CategoryPolicy,
    ProjectInfo,
    RemoteVersion,
    SupportLevel,
    TargetEnvironment,
)


@dataclass(frozen=True)
class EnvironmentInfo:
    """环境分析结果"""

    client: SupportLevel
    server: SupportLevel
    category: Category


class CompatibilityFilter:
    """兼容性过滤器"""

    def __init__(self, policy: CategoryPolicy = CategoryPolicy.PRIORITY):
        self.policy = policy

    def matches(self, value: str, declared: List[str]) -> bool:
        """
        检查目标值是否在版本声明的集合中

        目标值为空时不参与过滤。
        """
        if not value:
            return True
        return value in (declared or [])

    def is_compatible(
        self,
        candidate: RemoteVersion,
        target: TargetEnvironment,
    ) -> bool:
        """
        检查版本是否兼容目标环境

        Args:
            candidate: 远端版本
            target: 服务端目标环境

        Returns:
            游戏版本与加载器都精确匹配（或目标未设置该项）时为 True
        """
        return self.matches(target.game_version, candidate.game_versions) and (
            self.matches(target.loader, candidate.loaders)
        )

    def analyze_environment(
        self, data: Union[RemoteVersion, ProjectInfo]
    ) -> EnvironmentInfo:
        """
        分析环境类型（支持版本或项目对象）

        版本对象使用 client_support/server_support，项目对象使用
        client_side/server_side，未设置时按 required 处理。
        """
        client = SupportLevel.parse(
            getattr(data, "client_support", None) or getattr(data, "client_side", None)
        )
        server = SupportLevel.parse(
            getattr(data, "server_support", None) or getattr(data, "server_side", None)
        )
        return EnvironmentInfo(
            client=client,
            server=server,
            category=self.classify(client, server),
        )

    def classify(self, client: SupportLevel, server: SupportLevel) -> Category:
        """按当前策略确定分类"""
        client_required = client == SupportLevel.REQUIRED
        server_required = server == SupportLevel.REQUIRED

        if self.policy == CategoryPolicy.STRICT:
            if client_required and server_required:
                return Category.BOTH
            if server_required:
                return Category.SERVER_ONLY
            if client_required:
                return Category.CLIENT_ONLY
            return Category.BOTH

        # 优先级: server-only > client-only > both
        if server_required:
            return Category.SERVER_ONLY
        if client_required:
            return Category.CLIENT_ONLY
        return Category.BOTH
