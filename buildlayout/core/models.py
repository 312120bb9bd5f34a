"""核心数据模型

配置阶段的产物全部是不可变对象：配置只计算一次，
之后在整个构建调用期间保持稳定，执行阶段只读取不修改。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from buildlayout.core.exceptions import ValidationError


@dataclass(frozen=True)
class RepositorySource:
    """依赖仓库源 — 声明后不可变，声明顺序即查找优先级"""

    name: str
    url: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "url": self.url}


@dataclass(frozen=True)
class ProjectNode:
    """可构建单元（子项目）"""

    name: str
    output_dir: Path | None = None  # 由重定位器赋值


@dataclass(frozen=True)
class BuildConfiguration:
    """配置阶段结果

    root_output_dir 即 clean 任务的删除目标，与 shared_dir 相同：
    根项目的输出目录同样被重定位到共享目录。
    """

    root_dir: Path
    shared_dir: Path
    root_output_dir: Path
    repositories: tuple[RepositorySource, ...] = ()
    projects: tuple[ProjectNode, ...] = field(default_factory=tuple)

    def project(self, name: str) -> ProjectNode:
        for node in self.projects:
            if node.name == name:
                return node
        raise ValidationError(f"子项目不存在: {name}")

    def output_dir(self, name: str) -> Path:
        """返回子项目重定位后的输出目录"""
        node = self.project(name)
        if node.output_dir is None:
            raise ValidationError(f"子项目尚未重定位: {name}")
        return node.output_dir

    def repositories_for(self, name: str = "") -> tuple[RepositorySource, ...]:
        """仓库列表作用于根项目（name 为空）及所有子项目"""
        if name:
            self.project(name)
        return self.repositories

    def to_dict(self) -> dict[str, Any]:
        return {
            "root_dir": str(self.root_dir),
            "shared_dir": str(self.shared_dir),
            "root_output_dir": str(self.root_output_dir),
            "repositories": [r.to_dict() for r in self.repositories],
            "projects": [
                {"name": p.name, "output_dir": str(p.output_dir)}
                for p in self.projects
            ],
        }
