"""buildlayout 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import os

import click

from buildlayout import __version__
from buildlayout.core.config import DEFAULT_CONFIG_FILE, Config, init_config
from buildlayout.core.exceptions import BuildLayoutError
from buildlayout.core.layout import configure
from buildlayout.core.models import BuildConfiguration
from buildlayout.utils.logger import setup_logging


def _load(ctx: click.Context) -> tuple[Config, BuildConfiguration]:
    """加载配置文件并执行配置阶段，业务异常转换为 CLI 错误"""
    path = ctx.obj["config_path"]
    try:
        cfg = init_config(path)
        return cfg, configure(cfg)
    except BuildLayoutError as e:
        raise fail(e) from e


def fail(e: BuildLayoutError) -> click.ClickException:
    """业务异常 → 非零退出码"""
    return click.ClickException(f"[{e.code}] {e}")


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "-c", "config_path", default=DEFAULT_CONFIG_FILE,
    show_default=True, help="配置文件路径",
)
@click.pass_context
def main(ctx: click.Context, config_path: str) -> None:
    """buildlayout - 构建产物目录布局与清理"""
    setup_logging(
        level=os.getenv("BUILDLAYOUT_LOG_LEVEL", "WARNING"),
        json_output=os.getenv("BUILDLAYOUT_LOG_JSON", "") == "1",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


# 注册各领域子命令
from buildlayout.cli.cmd_layout import register as _reg_layout  # noqa: E402
from buildlayout.cli.cmd_tasks import register as _reg_tasks  # noqa: E402

_reg_layout(main)
_reg_tasks(main)
