"""
主协调器

从存储读取模组目录与服务端配置，组装服务层组件，执行一次完整的更新检查。
"""

import asyncio
from typing import Optional

from loguru import logger

from modwatch.models import CheckReport, ModWatchConfig
from modwatch.services import (
    BatchScheduler,
    CancelToken,
    CompatibilityFilter,
    ModrinthClient,
    ResultAggregator,
    RetryingFetcher,
    UpdateResolver,
)
from modwatch.services.fetcher import Sleep
from modwatch.store import (
    ConfigRepository,
    JsonConfigRepository,
    JsonModRepository,
    ModRepository,
)


class UpdateCheckOrchestrator:
    """更新检查协调器"""

    def __init__(
        self,
        config: ModWatchConfig,
        mods: Optional[ModRepository] = None,
        server_config: Optional[ConfigRepository] = None,
        client=None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.config = config
        self.mods = mods or JsonModRepository(config.store.data_dir)
        self.server_config = server_config or JsonConfigRepository(
            config.store.data_dir
        )

        self._owned_client = client is None
        self.client = client or ModrinthClient(
            base_url=config.api.base_url,
            user_agent=config.api.user_agent,
            request_timeout=config.api.request_timeout,
        )

        check = config.check
        self.compatibility = CompatibilityFilter(check.category_policy)
        self.resolver = UpdateResolver(self.compatibility)
        self.fetcher = RetryingFetcher(
            self.client,
            max_attempts=check.max_retries,
            base_delay=check.retry_delay,
            sleep=sleep,
        )
        self.scheduler = BatchScheduler(
            self.fetcher,
            self.resolver,
            batch_size=check.batch_size,
            batch_delay=check.batch_delay,
            sleep=sleep,
        )
        self.aggregator = ResultAggregator()

    async def run(self, cancel_token: Optional[CancelToken] = None) -> CheckReport:
        """
        运行一次完整的更新检查

        只有在模组目录或服务端配置无法读取、或者被取消时才会抛出异常，
        单个模组的失败体现在对应结果的 error 标记上。
        """
        try:
            installed = await self.mods.load()
            server_config = await self.server_config.load()
            target = server_config.target()

            logger.info(
                f"[检查] 目标环境: Minecraft {target.game_version or '任意'}, "
                f"加载器 {target.loader or '任意'}"
            )

            results = await self.scheduler.check_all(installed, target, cancel_token)
            report = self.aggregator.build_report(results)

            summary = report.summary
            logger.success(
                f"[检查] 共 {summary.total} 个模组: {summary.has_updates} 个可更新, "
                f"{summary.up_to_date} 个已是最新, {summary.errors} 个失败"
            )
            return report
        finally:
            await self.close()

    async def close(self):
        if self._owned_client:
            await self.client.close()
