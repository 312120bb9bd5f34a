"""任务注册与 clean 任务

任务以工厂形式登记，只有在被显式执行时才实例化（惰性注册）。
任务动作只接收配置阶段产出的 BuildConfiguration，不读取任何全局状态。
"""

from __future__ import annotations

import logging
import shutil
import stat
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from buildlayout.core.exceptions import DeletionError, TaskNotFoundError
from buildlayout.core.models import BuildConfiguration

logger = logging.getLogger(__name__)

TaskAction = Callable[[BuildConfiguration], None]
TaskFactory = Callable[[], TaskAction]


@dataclass
class _TaskEntry:
    name: str
    factory: TaskFactory
    description: str = ""


class TaskRegistry:
    """名称 → 任务工厂"""

    def __init__(self) -> None:
        self._tasks: dict[str, _TaskEntry] = {}

    def register(self, name: str, factory: TaskFactory, description: str = "") -> None:
        """登记任务（同名覆盖），此时不创建任务动作"""
        if name in self._tasks:
            logger.warning("任务已存在，将被覆盖: %s", name)
        self._tasks[name] = _TaskEntry(name=name, factory=factory, description=description)

    def has(self, name: str) -> bool:
        return name in self._tasks

    def names(self) -> list[str]:
        return list(self._tasks)

    def describe(self) -> list[dict[str, str]]:
        return [
            {"name": t.name, "description": t.description}
            for t in self._tasks.values()
        ]

    def execute(self, name: str, config: BuildConfiguration) -> None:
        """实例化并执行任务，异常原样向上抛出，不重试"""
        entry = self._tasks.get(name)
        if entry is None:
            raise TaskNotFoundError(f"任务不存在: {name}")
        action = entry.factory()
        logger.info("执行任务: %s", name, extra={"task": name})
        action(config)


def delete_tree(path: Path) -> bool:
    """递归删除目录树

    返回:
        bool: 实际删除了内容返回 True，目标本来不存在返回 False

    异常:
        DeletionError: 权限或 IO 故障，或目标是文件系统根目录
    """
    if path == Path(path.anchor):
        raise DeletionError(f"拒绝删除文件系统根目录: {path}", path=str(path))

    try:
        # lstat 不跟随符号链接，链接只删除本身
        mode = path.lstat().st_mode
        if stat.S_ISDIR(mode):
            shutil.rmtree(path)
        else:
            path.unlink()
    except (FileNotFoundError, NotADirectoryError):
        logger.info("目录不存在，无需清理: %s", path, extra={"target": str(path)})
        return False
    except OSError as e:
        logger.error("删除失败: %s, 错误: %s", path, e, extra={"target": str(path)})
        raise DeletionError(f"删除失败: {path}: {e}", path=str(path)) from e

    logger.info("已删除: %s", path, extra={"target": str(path)})
    return True


def clean(config: BuildConfiguration) -> None:
    """删除根输出目录（执行时读取配置中的当前值）"""
    delete_tree(config.root_output_dir)


def default_registry(clean_task: str = "clean") -> TaskRegistry:
    """带内置 clean 任务的注册表"""
    registry = TaskRegistry()
    registry.register(clean_task, lambda: clean, description="删除共享构建输出目录")
    return registry
