"""CLI — 任务列表与执行"""

from __future__ import annotations

import click

from buildlayout.core.exceptions import BuildLayoutError
from buildlayout.core.layout import execute
from buildlayout.core.tasks import default_registry


def register(group: click.Group) -> None:
    group.add_command(tasks)
    group.add_command(run)
    group.add_command(clean)


def _run_task(ctx: click.Context, name: str | None = None) -> None:
    """配置阶段完成后执行任务；name 为空时执行配置中的 clean 任务"""
    from buildlayout.cli import _load, fail

    cfg, build_config = _load(ctx)
    task_name = name or cfg.clean_task
    try:
        execute(task_name, build_config, default_registry(cfg.clean_task))
    except BuildLayoutError as e:
        raise fail(e) from e
    click.echo(f"任务完成: {task_name}")


@click.command()
@click.pass_context
def tasks(ctx: click.Context) -> None:
    """列出已注册的任务"""
    from buildlayout.cli import _load

    cfg, _ = _load(ctx)
    for t in default_registry(cfg.clean_task).describe():
        click.echo(f"  {t['name']:20s} {t['description']}")


@click.command()
@click.argument("name")
@click.pass_context
def run(ctx: click.Context, name: str) -> None:
    """执行指定任务"""
    _run_task(ctx, name)


@click.command()
@click.pass_context
def clean(ctx: click.Context) -> None:
    """删除共享构建输出目录（不可撤销）"""
    _run_task(ctx)
