"""
ModWatch 服务层

包含业务逻辑服务：API 客户端、版本比较、兼容性过滤、更新解析、
带重试的获取、批量调度与结果汇总。
"""

from modwatch.services.api_client import ModrinthClient
from modwatch.services.compatibility import CompatibilityFilter, EnvironmentInfo
from modwatch.services.update_resolver import UpdateResolver
from modwatch.services.fetcher import RetryingFetcher
from modwatch.services.scheduler import BatchScheduler, CancelToken
from modwatch.services.aggregator import ResultAggregator

__all__ = [
    "ModrinthClient",
    "CompatibilityFilter",
    "EnvironmentInfo",
    "UpdateResolver",
    "RetryingFetcher",
    "BatchScheduler",
    "CancelToken",
    "ResultAggregator",
]
