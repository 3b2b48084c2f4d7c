"""
检查结果模型

单个模组的更新检查结果、汇总统计以及对外返回的报告结构。
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from modwatch.models.api import Category


@dataclass(frozen=True)
class UpdateCheckResult:
    """
    单个模组的更新检查结果

    error_detail 仅用于内部日志，不会出现在 to_dict() 输出中。
    """

    mod_id: str
    name: str
    slug: str
    current_version: str
    target_version: str
    target_version_id: Optional[str] = None
    has_update: bool = False
    release_date: str = ""
    changelog: Optional[str] = None
    new_category: Optional[Category] = None
    error: bool = False
    error_detail: Optional[str] = field(default=None, compare=False)

    def redacted(self) -> "UpdateCheckResult":
        """去掉更新日志，控制响应体积"""
        return replace(self, changelog=None)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "modId": self.mod_id,
            "name": self.name,
            "slug": self.slug,
            "currentVersion": self.current_version,
            "targetVersion": self.target_version,
            "targetVersionId": self.target_version_id,
            "hasUpdate": self.has_update,
            "releaseDate": self.release_date,
        }
        if self.changelog is not None:
            data["changelog"] = self.changelog
        if self.new_category is not None:
            data["newCategory"] = self.new_category.value
        if self.error:
            data["error"] = True
        return data


@dataclass
class CheckSummary:
    """检查统计"""

    total: int = 0
    has_updates: int = 0
    up_to_date: int = 0
    errors: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "hasUpdates": self.has_updates,
            "upToDate": self.up_to_date,
            "errors": self.errors,
        }


@dataclass
class CheckReport:
    """对外返回的检查报告"""

    updates: List[UpdateCheckResult]
    summary: CheckSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "updates": [result.to_dict() for result in self.updates],
            "summary": self.summary.to_dict(),
        }
