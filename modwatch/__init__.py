"""
ModWatch - Minecraft 服务端模组更新检查
"""

__version__ = "0.1.0"

from modwatch.services.versioning import (
    compare_versions,
    format_version,
    get_latest_version,
    is_newer_version,
    parse_version,
)

__all__ = [
    "__version__",
    "compare_versions",
    "format_version",
    "get_latest_version",
    "is_newer_version",
    "parse_version",
]
