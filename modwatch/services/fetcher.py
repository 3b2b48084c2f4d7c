"""
带重试的版本获取

每次尝试的结果是一个显式状态：Success、RetryableFailure(wait, next_attempt)
或 PermanentFailure。等待由 fetch_versions 的驱动循环负责，sleep 可注入，
便于测试。
"""

import asyncio
import errno
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Union

import aiohttp
from loguru import logger

from modwatch.models import RemoteVersion
from modwatch.exceptions import (
    APIError,
    FetchError,
    PermanentFetchError,
    TransientFetchError,
)

Sleep = Callable[[float], Awaitable[None]]

RETRYABLE_STATUSES = frozenset({429, 502, 503})


@dataclass(frozen=True)
class Success:
    versions: List[RemoteVersion]


@dataclass(frozen=True)
class RetryableFailure:
    error: BaseException
    wait: float
    next_attempt: int


@dataclass(frozen=True)
class PermanentFailure:
    error: BaseException
    exhausted: bool = False


AttemptOutcome = Union[Success, RetryableFailure, PermanentFailure]


def is_retryable(error: BaseException) -> bool:
    """远端 429/502/503 或连接被重置时可以重试"""
    if isinstance(error, APIError):
        return error.status in RETRYABLE_STATUSES
    if isinstance(error, (ConnectionResetError, aiohttp.ServerDisconnectedError)):
        return True
    if isinstance(error, aiohttp.ClientOSError):
        return error.errno == errno.ECONNRESET
    return False


class RetryingFetcher:
    """
    带重试的版本获取器

    source 是任何提供 `async get_project_versions(mod_id)` 的对象，
    通常是 ModrinthClient。
    """

    def __init__(
        self,
        source,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        sleep: Sleep = asyncio.sleep,
    ):
        self.source = source
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self._sleep = sleep

    def backoff(self, attempt: int) -> float:
        """第 attempt 次失败后的等待时间（线性增长）"""
        return attempt * self.base_delay

    async def attempt(self, mod_id: str, attempt: int) -> AttemptOutcome:
        """执行一次获取并给出下一步状态"""
        try:
            versions = await self.source.get_project_versions(mod_id)
        except Exception as e:
            if not is_retryable(e):
                return PermanentFailure(e)
            if attempt < self.max_attempts:
                return RetryableFailure(e, self.backoff(attempt), attempt + 1)
            return PermanentFailure(e, exhausted=True)
        return Success(list(versions or []))

    async def fetch_versions(self, mod_id: str) -> List[RemoteVersion]:
        """
        获取模组的全部远端版本

        Raises:
            TransientFetchError: 可重试错误在重试次数耗尽后仍然失败
            PermanentFetchError: 不可重试的错误，立即抛出
        """
        attempt = 1
        while True:
            outcome = await self.attempt(mod_id, attempt)

            if isinstance(outcome, Success):
                return outcome.versions

            if isinstance(outcome, RetryableFailure):
                logger.warning(
                    f"[重试] {mod_id} 第 {attempt}/{self.max_attempts} 次失败: "
                    f"{outcome.error}. {outcome.wait:.1f}s 后重试..."
                )
                await self._sleep(outcome.wait)
                attempt = outcome.next_attempt
                continue

            raise self._to_fetch_error(mod_id, outcome, attempt)

    def _to_fetch_error(
        self, mod_id: str, outcome: PermanentFailure, attempts: int
    ) -> FetchError:
        context = {"mod_id": mod_id, "cause": type(outcome.error).__name__}
        if isinstance(outcome.error, APIError) and outcome.error.status is not None:
            context["status_code"] = outcome.error.status

        if outcome.exhausted:
            error: FetchError = TransientFetchError(
                f"获取 {mod_id} 的版本列表失败，已重试 {attempts} 次: {outcome.error}",
                context=context,
                attempts=attempts,
            )
        else:
            error = PermanentFetchError(
                f"获取 {mod_id} 的版本列表失败: {outcome.error}",
                context=context,
                attempts=attempts,
            )
        error.__cause__ = outcome.error
        return error
