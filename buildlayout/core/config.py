"""集中配置管理

从 YAML 文件（默认 buildlayout.yml）加载声明式构建布局配置，
支持编程式覆盖。相对路径一律以配置文件所在目录为基准。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from buildlayout.core.exceptions import ConfigError
from buildlayout.utils.yaml_io import load_yaml, save_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "buildlayout.yml"

# 不允许从 YAML 覆盖的内部字段
_INTERNAL_FIELDS = {"extra", "config_dir"}


def _default_repositories() -> list[Any]:
    return ["google", "mavenCentral"]


@dataclass
class Config:
    """构建布局配置"""

    # 根项目目录，相对路径以配置文件所在目录为基准
    root_dir: str = "."
    # 仓库源，按声明顺序查找
    repositories: list[Any] = field(default_factory=_default_repositories)
    # 共享输出目录模板，相对于根项目默认输出目录 <root>/build
    build_dir: str = "../../build"
    projects: list[str] = field(default_factory=list)
    clean_task: str = "clean"

    # 配置文件所在目录（加载时填充）
    config_dir: str = ""
    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any], config_dir: str = "") -> Config:
        known = {f for f in cls.__dataclass_fields__} - _INTERNAL_FIELDS
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        cfg.config_dir = config_dir
        cfg.validate()
        return cfg

    @classmethod
    def from_file(cls, path: str | Path = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        p = Path(path)
        config_dir = str(p.absolute().parent)
        if not p.exists():
            logger.warning("配置文件不存在，使用默认配置: %s", p)
            return cls(config_dir=config_dir)
        return cls.from_dict(load_yaml(p), config_dir=config_dir)

    def validate(self) -> None:
        """字段类型校验，失败抛出 ConfigError"""
        if not isinstance(self.root_dir, str):
            raise ConfigError(f"root_dir 必须是字符串: {self.root_dir!r}")
        if not isinstance(self.build_dir, str):
            raise ConfigError(f"build_dir 必须是字符串: {self.build_dir!r}")
        if not isinstance(self.repositories, list):
            raise ConfigError("repositories 必须是列表")
        if not isinstance(self.projects, list):
            raise ConfigError("projects 必须是列表")
        if not isinstance(self.clean_task, str) or not self.clean_task:
            raise ConfigError("clean_task 必须是非空字符串")

    def to_dict(self) -> dict:
        data = asdict(self)
        for key in _INTERNAL_FIELDS:
            data.pop(key, None)
        data.update(self.extra)
        return data

    def save(self, path: str | Path = DEFAULT_CONFIG_FILE) -> None:
        save_yaml(path, self.to_dict())


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str | Path = DEFAULT_CONFIG_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
