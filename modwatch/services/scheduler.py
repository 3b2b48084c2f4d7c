"""
批量检查调度

把模组列表按固定大小分批，批内并发检查，批与批之间顺序执行并插入
间隔，避免触发远端的限流。单个模组失败只影响它自己的结果。
"""

import asyncio
from typing import List, Optional

from loguru import logger

from modwatch.models import InstalledMod, TargetEnvironment, UpdateCheckResult
from modwatch.exceptions import CheckCancelledError
from modwatch.services.fetcher import RetryingFetcher, Sleep
from modwatch.services.update_resolver import UNKNOWN_VERSION, UpdateResolver


class CancelToken:
    """
    检查流程的取消信号

    可以在事件循环启动之前创建，Event 在第一次 wait 时才在当前循环中创建。
    """

    def __init__(self):
        self._cancelled = False
        self._event: Optional[asyncio.Event] = None

    def cancel(self):
        self._cancelled = True
        if self._event is not None:
            self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    async def wait(self):
        if self._event is None:
            self._event = asyncio.Event()
            if self._cancelled:
                self._event.set()
        await self._event.wait()


class BatchScheduler:
    """批量检查调度器"""

    def __init__(
        self,
        fetcher: RetryingFetcher,
        resolver: Optional[UpdateResolver] = None,
        batch_size: int = 3,
        batch_delay: float = 0.5,
        sleep: Sleep = asyncio.sleep,
    ):
        self.fetcher = fetcher
        self.resolver = resolver or UpdateResolver()
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self._sleep = sleep

    def partition(self, mods: List[InstalledMod]) -> List[List[InstalledMod]]:
        """按 batch_size 切分为连续的批次"""
        return [
            mods[i : i + self.batch_size]
            for i in range(0, len(mods), self.batch_size)
        ]

    async def check_mod(
        self, mod: InstalledMod, target: TargetEnvironment
    ) -> UpdateCheckResult:
        """检查单个模组，任何异常都转换为带 error 标记的结果"""
        try:
            versions = await self.fetcher.fetch_versions(mod.id)
            return self.resolver.resolve(mod, versions, target)
        except Exception as e:
            logger.error(f"[检查] 检查模组 {mod.id} 的更新失败: {e}")
            return UpdateCheckResult(
                mod_id=mod.id,
                name=mod.name,
                slug=mod.slug,
                current_version=mod.version_number or UNKNOWN_VERSION,
                target_version=UNKNOWN_VERSION,
                error=True,
                error_detail=str(e),
            )

    async def _pace(self, cancel_token: Optional[CancelToken]):
        """批次间隔，取消信号可以提前结束等待"""
        if cancel_token is None:
            await self._sleep(self.batch_delay)
            return

        sleeper = asyncio.ensure_future(self._sleep(self.batch_delay))
        waiter = asyncio.ensure_future(cancel_token.wait())
        _, pending = await asyncio.wait(
            {sleeper, waiter}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    async def check_all(
        self,
        mods: List[InstalledMod],
        target: TargetEnvironment,
        cancel_token: Optional[CancelToken] = None,
    ) -> List[UpdateCheckResult]:
        """
        检查所有模组的更新

        Args:
            mods: 已安装模组列表
            target: 服务端目标环境
            cancel_token: 可选的取消信号，取消后不再开始新的批次

        Returns:
            与 mods 顺序一致的检查结果

        Raises:
            CheckCancelledError: 检查被取消
        """
        batches = self.partition(mods)
        total_batches = len(batches)
        results: List[UpdateCheckResult] = []

        logger.info(f"[检查] 开始检查 {len(mods)} 个模组的更新")

        for index, batch in enumerate(batches, start=1):
            if cancel_token is not None and cancel_token.cancelled:
                logger.warning(f"[检查] 已取消，完成 {len(results)}/{len(mods)} 个模组")
                raise CheckCancelledError(
                    "更新检查已取消",
                    context={"checked": len(results), "total": len(mods)},
                )

            logger.info(f"[批次] 处理第 {index}/{total_batches} 批 ({len(batch)} 个模组)")
            batch_results = await asyncio.gather(
                *(self.check_mod(mod, target) for mod in batch)
            )
            results.extend(batch_results)

            if index < total_batches:
                await self._pace(cancel_token)

        logger.info(f"[检查] 完成，共检查 {len(results)} 个模组")
        return results
