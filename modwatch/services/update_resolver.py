"""
更新解析服务

对单个模组的远端版本列表，选出比当前版本新且兼容目标环境的最小升级。
"""

from typing import List, Optional

from loguru import logger

from modwatch.models import (
    InstalledMod,
    RemoteVersion,
    TargetEnvironment,
    UpdateCheckResult,
)
from modwatch.services.compatibility import CompatibilityFilter
from modwatch.services.versioning import (
    format_version,
    is_newer_version,
    version_sort_key,
)

UNKNOWN_VERSION = "?"
FALLBACK_CURRENT_VERSION = "0.0.0"


class UpdateResolver:
    """更新解析器"""

    def __init__(self, compatibility: Optional[CompatibilityFilter] = None):
        self.compatibility = compatibility or CompatibilityFilter()

    def sort_candidates(self, candidates: List[RemoteVersion]) -> List[RemoteVersion]:
        """按版本号从旧到新排序，相同版本保持原有顺序"""
        return sorted(candidates, key=lambda v: version_sort_key(v.version_number))

    def find_update(
        self,
        current_version: str,
        candidates: List[RemoteVersion],
        target: TargetEnvironment,
    ) -> Optional[RemoteVersion]:
        """
        找到第一个比当前版本新且兼容的版本

        返回的是最小的可行升级，而不是最新版本。
        """
        for candidate in self.sort_candidates(candidates):
            if not is_newer_version(current_version, candidate.version_number):
                continue
            if self.compatibility.is_compatible(candidate, target):
                return candidate
        return None

    def resolve(
        self,
        mod: InstalledMod,
        candidates: List[RemoteVersion],
        target: TargetEnvironment,
    ) -> UpdateCheckResult:
        """
        解析模组更新

        Args:
            mod: 已安装模组
            candidates: 该模组的远端版本列表
            target: 服务端目标环境

        Returns:
            UpdateCheckResult
        """
        if not candidates:
            raw = mod.version_number or UNKNOWN_VERSION
            return UpdateCheckResult(
                mod_id=mod.id,
                name=mod.name,
                slug=mod.slug,
                current_version=raw,
                target_version=raw,
            )

        current_version = mod.version_number or FALLBACK_CURRENT_VERSION
        update = self.find_update(current_version, candidates, target)

        if update is None:
            logger.debug(f"[检查] {mod.name} 已是最新 ({current_version})")
            return UpdateCheckResult(
                mod_id=mod.id,
                name=mod.name,
                slug=mod.slug,
                current_version=format_version(current_version),
                target_version=format_version(current_version),
            )

        env = self.compatibility.analyze_environment(update)
        logger.debug(
            f"[检查] {mod.name} 可更新: {current_version} -> {update.version_number}"
        )
        return UpdateCheckResult(
            mod_id=mod.id,
            name=mod.name,
            slug=mod.slug,
            current_version=format_version(current_version),
            target_version=format_version(update.version_number),
            target_version_id=update.id,
            has_update=True,
            release_date=update.date_published,
            changelog=update.changelog,
            new_category=env.category,
        )
