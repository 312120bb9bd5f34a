"""CLI — 配置查看与初始化"""

from __future__ import annotations

import json
from pathlib import Path

import click

from buildlayout.core.config import Config


def register(group: click.Group) -> None:
    group.add_command(init)
    group.add_command(show)


@click.command()
@click.option("--project", "-p", "projects", multiple=True, help="子项目名称（可多次指定）")
@click.option("--force", is_flag=True, help="覆盖已存在的配置文件")
@click.pass_context
def init(ctx: click.Context, projects: tuple[str, ...], force: bool) -> None:
    """生成默认配置文件"""
    path = Path(ctx.obj["config_path"])
    if path.exists() and not force:
        raise click.ClickException(f"配置文件已存在: {path}（使用 --force 覆盖）")
    cfg = Config(projects=list(projects))
    cfg.save(path)
    click.echo(f"配置已生成: {path}")


@click.command()
@click.option("--json", "as_json", is_flag=True, help="以 JSON 输出")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """显示仓库顺序与各子项目输出目录"""
    from buildlayout.cli import _load

    _, build_config = _load(ctx)
    if as_json:
        click.echo(json.dumps(build_config.to_dict(), indent=2, ensure_ascii=False))
        return

    click.echo(f"根项目:   {build_config.root_dir}")
    click.echo(f"共享输出: {build_config.shared_dir}")
    click.echo("仓库:")
    for i, repo in enumerate(build_config.repositories, 1):
        click.echo(f"  {i}. {repo.name:20s} {repo.url or '-'}")
    if not build_config.projects:
        click.echo("没有子项目。")
        return
    click.echo("子项目:")
    for node in build_config.projects:
        click.echo(f"  {node.name:20s} {node.output_dir}")
