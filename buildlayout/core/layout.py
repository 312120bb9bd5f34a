"""两阶段入口: configure() 与 execute()

configure 只做路径计算，不触碰文件系统；
execute 在配置阶段完成后按名称执行任务。
"""

from __future__ import annotations

import logging
from pathlib import Path

from buildlayout.core.config import Config, get_config
from buildlayout.core.models import BuildConfiguration
from buildlayout.core.relocator import relocate, resolve_root
from buildlayout.core.repositories import RepositoryRegistry
from buildlayout.core.tasks import TaskRegistry, default_registry

logger = logging.getLogger(__name__)


def configure(
    config: Config | None = None, base_dir: str | Path | None = None,
) -> BuildConfiguration:
    """执行配置阶段

    按声明顺序: 登记仓库 → 解析根目录 → 重定位子项目输出目录。
    任一步骤失败即整体失败，不返回部分结果。
    """
    cfg = config or get_config()
    base = base_dir or cfg.config_dir or None

    repos = RepositoryRegistry()
    repos.register_repositories(cfg.repositories)

    root = resolve_root(cfg.root_dir, base)
    shared, projects = relocate(root, cfg.projects, cfg.build_dir)

    build_config = BuildConfiguration(
        root_dir=root,
        shared_dir=shared,
        root_output_dir=shared,
        repositories=repos.sources(),
        projects=projects,
    )
    logger.debug("配置完成: %s", build_config.to_dict())
    return build_config


def execute(
    task_name: str,
    build_config: BuildConfiguration,
    registry: TaskRegistry | None = None,
) -> None:
    """执行阶段: 运行已登记的任务"""
    tasks = registry or default_registry()
    tasks.execute(task_name, build_config)
