"""
结果汇总

统计可更新 / 已是最新 / 失败的模组数量，并生成去掉更新日志的报告。
"""

from typing import List

from loguru import logger

from modwatch.models import CheckReport, CheckSummary, UpdateCheckResult


class ResultAggregator:
    """检查结果汇总器"""

    def summarize(self, results: List[UpdateCheckResult]) -> CheckSummary:
        return CheckSummary(
            total=len(results),
            has_updates=sum(1 for r in results if r.has_update),
            up_to_date=sum(1 for r in results if not r.has_update and not r.error),
            errors=sum(1 for r in results if r.error),
        )

    def build_report(self, results: List[UpdateCheckResult]) -> CheckReport:
        """生成对外返回的报告（更新日志已去除）"""
        summary = self.summarize(results)
        for result in results:
            if result.error:
                logger.debug(f"[汇总] {result.mod_id} 失败原因: {result.error_detail}")
        return CheckReport(
            updates=[result.redacted() for result in results],
            summary=summary,
        )
