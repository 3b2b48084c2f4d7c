"""
版本号比较工具

把模组发布时使用的各种自由格式版本号解析成可比较的整数序列，
并提供比较、取最新版本和展示格式化。解析永远不会抛出异常，
无法识别的部分按 0 处理。
"""

import functools
import re
from typing import List, Optional

ParsedVersion = List[int]

_SEGMENT_SPLIT = re.compile(r"[-+]")
_V_PREFIX = re.compile(r"^v", re.IGNORECASE)
_VERSION_SEGMENT = re.compile(r"^\d[\d.]*")
_LEADING_INT = re.compile(r"\s*(\d+)")
_DIGITS = re.compile(r"(\d+)")

# 预发布标签的权重，越小越早
ALPHA_RANK = -3
BETA_RANK = -2
RC_RANK = -1


def extract_mod_version(version: str) -> str:
    """
    提取纯 mod 版本号（去掉 Minecraft 版本前缀）

    e.g. "1.21.1-6.0.9" -> "6.0.9"
    e.g. "mc1.20-1.2.3" -> "1.2.3"
    e.g. "1.0.0-alpha" -> "1.0.0-alpha"
    """
    clean = _V_PREFIX.sub("", version, count=1)
    parts = _SEGMENT_SPLIT.split(clean)

    # 从后往前找最后一个以数字开头的段，返回它及之后的所有段
    for i in range(len(parts) - 1, -1, -1):
        if _VERSION_SEGMENT.match(parts[i]):
            return "-".join(parts[i:])

    return clean


def _to_int(part: str) -> int:
    match = _LEADING_INT.match(part)
    return int(match.group(1)) if match else 0


def _pre_release_rank(tag: str) -> int:
    lowered = tag.lower()
    if "alpha" in lowered:
        return ALPHA_RANK
    if "beta" in lowered:
        return BETA_RANK
    if "rc" in lowered or "pre" in lowered:
        return RC_RANK
    match = _DIGITS.search(tag)
    if match:
        return -int(match.group(1))
    return RC_RANK


def parse_version(version: str) -> ParsedVersion:
    """
    解析版本号为数字数组

    e.g. "1.20.1" -> [1, 20, 1]
    e.g. "2.0-beta.3" -> [2, 0, -2]

    带预发布标签时追加一个负数，因此总是排在同号正式版之前。
    """
    mod_version = extract_mod_version(version)

    segments = _SEGMENT_SPLIT.split(mod_version, maxsplit=1)
    main = segments[0]
    pre_release = segments[1] if len(segments) > 1 else ""

    parts = [_to_int(part) for part in main.split(".")]

    if pre_release:
        parts.append(_pre_release_rank(pre_release))

    return parts


def compare_parsed(parts1: ParsedVersion, parts2: ParsedVersion) -> int:
    """较短的一方补 0 后逐位比较"""
    max_length = max(len(parts1), len(parts2))
    for i in range(max_length):
        part1 = parts1[i] if i < len(parts1) else 0
        part2 = parts2[i] if i < len(parts2) else 0
        if part1 < part2:
            return -1
        if part1 > part2:
            return 1
    return 0


def compare_versions(v1: str, v2: str) -> int:
    """
    比较两个版本号

    Returns:
        -1 如果 v1 < v2，0 如果相等，1 如果 v1 > v2
    """
    return compare_parsed(parse_version(v1), parse_version(v2))


def is_newer_version(current: str, candidate: str) -> bool:
    """candidate 是否比 current 新"""
    return compare_versions(current, candidate) < 0


def get_latest_version(versions: List[str]) -> Optional[str]:
    """获取最新版本，相等的版本保留先出现的那个"""
    if not versions:
        return None

    latest = versions[0]
    for current in versions[1:]:
        if compare_versions(current, latest) > 0:
            latest = current
    return latest


# sorted(..., key=version_sort_key) 按版本从旧到新排序（稳定排序）
version_sort_key = functools.cmp_to_key(compare_versions)


def format_version(version: str) -> str:
    """
    格式化版本号显示

    e.g. "1.20.1+build.1" -> "1.20.1"
    e.g. "1.21.1-6.0.9" -> "6.0.9"
    """
    if not version:
        return ""
    parts = _SEGMENT_SPLIT.split(_V_PREFIX.sub("", version, count=1))
    if len(parts) > 1 and parts[-1][:1].isdigit():
        return parts[-1]
    return parts[0]
