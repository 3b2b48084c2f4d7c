"""
CLI 模块

命令行接口实现。
"""

import asyncio
import json
import signal
from typing import Optional

import click
from loguru import logger

from modwatch import __version__
from modwatch.config import load_config
from modwatch.exceptions import CheckCancelledError, ModWatchError
from modwatch.logger import setup_logger
from modwatch.models import Category, CheckReport, ModWatchConfig
from modwatch.orchestrator import UpdateCheckOrchestrator
from modwatch.services import CancelToken
from modwatch.services.versioning import compare_versions, get_latest_version
from modwatch.store import JsonModRepository

CATEGORY_LABELS = {
    Category.BOTH: "双端",
    Category.SERVER_ONLY: "仅服务端",
    Category.CLIENT_ONLY: "仅客户端",
}


def build_config(
    config_path: Optional[str],
    data_dir: Optional[str] = None,
    batch_size: Optional[int] = None,
    batch_delay: Optional[float] = None,
    max_retries: Optional[int] = None,
    retry_delay: Optional[float] = None,
) -> ModWatchConfig:
    """加载配置文件，命令行参数覆盖文件中的值"""
    config = load_config(config_path)
    if data_dir is not None:
        config.store.data_dir = data_dir
    if batch_size is not None:
        config.check.batch_size = batch_size
    if batch_delay is not None:
        config.check.batch_delay = batch_delay
    if max_retries is not None:
        config.check.max_retries = max_retries
    if retry_delay is not None:
        config.check.retry_delay = retry_delay
    config.check.validate()
    return config


def render_report(report: CheckReport):
    """以文本形式输出检查报告"""
    updates = [r for r in report.updates if r.has_update]
    failed = [r for r in report.updates if r.error]

    if updates:
        click.echo("可更新的模组:")
        for result in updates:
            category = (
                f" [{CATEGORY_LABELS[result.new_category]}]"
                if result.new_category
                else ""
            )
            click.echo(
                f"  {result.name} ({result.slug}): "
                f"{result.current_version} -> {result.target_version}{category}"
            )
    else:
        click.echo("所有模组都已是最新")

    if failed:
        click.echo("检查失败的模组:")
        for result in failed:
            click.echo(f"  {result.name} ({result.mod_id})")

    summary = report.summary
    click.echo(
        f"共 {summary.total} 个: {summary.has_updates} 可更新, "
        f"{summary.up_to_date} 已是最新, {summary.errors} 失败"
    )


async def run_check(config: ModWatchConfig) -> CheckReport:
    """异步运行检查，Ctrl+C 在当前批次结束后停止"""
    cancel_token = CancelToken()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_token.cancel)
    except (NotImplementedError, RuntimeError):
        # Windows 事件循环不支持
        pass

    orchestrator = UpdateCheckOrchestrator(config)
    try:
        return await orchestrator.run(cancel_token)
    finally:
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except (NotImplementedError, RuntimeError):
            pass


@click.group()
@click.option("--debug", is_flag=True, help="启用调试模式")
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, debug: bool):
    """ModWatch - Minecraft 服务端模组更新检查工具"""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = "DEBUG" if debug else None
    setup_logger(level=ctx.obj["log_level"])


@main.command()
@click.option("-c", "--config", "config_path", type=click.Path(exists=True), help="配置文件 (toml/json/yaml)")
@click.option("--data-dir", help="数据目录（mods.json / config.json 所在目录）")
@click.option("--batch-size", type=int, help="每批并发检查的模组数量")
@click.option("--batch-delay", type=float, help="批次之间的间隔（秒）")
@click.option("--max-retries", type=int, help="单个模组的最大尝试次数")
@click.option("--retry-delay", type=float, help="重试基础间隔（秒）")
@click.option("--json", "as_json", is_flag=True, help="以 JSON 输出报告")
@click.pass_context
def check(
    ctx: click.Context,
    config_path: Optional[str],
    data_dir: Optional[str],
    batch_size: Optional[int],
    batch_delay: Optional[float],
    max_retries: Optional[int],
    retry_delay: Optional[float],
    as_json: bool,
):
    """检查所有已安装模组的可用更新"""
    try:
        config = build_config(
            config_path, data_dir, batch_size, batch_delay, max_retries, retry_delay
        )
        if config.log_file:
            setup_logger(level=ctx.obj.get("log_level"), log_file=config.log_file)
        report = asyncio.run(run_check(config))
    except CheckCancelledError as e:
        logger.warning(str(e))
        raise click.Abort()
    except ModWatchError as e:
        logger.error(f"检查失败: {e}")
        raise click.ClickException(str(e))
    except Exception as e:
        logger.exception(f"运行时错误: {e}")
        raise click.ClickException(f"运行时错误: {e}")

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        render_report(report)


@main.command()
@click.option("-c", "--config", "config_path", type=click.Path(exists=True), help="配置文件 (toml/json/yaml)")
@click.option("--data-dir", help="数据目录")
def mods(config_path: Optional[str], data_dir: Optional[str]):
    """按分类列出已安装的模组"""
    try:
        config = build_config(config_path, data_dir)
        groups = asyncio.run(JsonModRepository(config.store.data_dir).categorized())
    except ModWatchError as e:
        raise click.ClickException(str(e))

    for category, installed in groups.items():
        click.echo(f"{CATEGORY_LABELS[category]} ({len(installed)}):")
        for mod in installed:
            click.echo(f"  {mod.name} ({mod.slug or mod.id}) {mod.version_number or '?'}")


@main.command()
@click.argument("first")
@click.argument("second")
def compare(first: str, second: str):
    """比较两个版本号，输出 -1 / 0 / 1"""
    click.echo(str(compare_versions(first, second)))


@main.command()
@click.argument("versions", nargs=-1, required=True)
def latest(versions: tuple):
    """输出若干版本号中最新的一个"""
    click.echo(get_latest_version(list(versions)))


if __name__ == "__main__":
    main()
