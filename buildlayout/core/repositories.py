"""依赖仓库注册表

职责:
- 按声明顺序登记仓库源（只追加，不去重、不校验可达性）
- 将常用仓库别名展开为地址

重复或不可达的仓库由外部依赖解析器处理，这里只负责保持顺序。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from buildlayout.core.exceptions import ConfigError
from buildlayout.core.models import RepositorySource

logger = logging.getLogger(__name__)

WELL_KNOWN_REPOSITORIES: dict[str, str] = {
    "google": "https://dl.google.com/dl/android/maven2/",
    "mavenCentral": "https://repo.maven.apache.org/maven2/",
    "gradlePluginPortal": "https://plugins.gradle.org/m2/",
}


def parse_repository(entry: Any) -> RepositorySource:
    """把配置项转换为 RepositorySource

    支持两种写法:
        - google                      # 别名
        - {name: corp, url: https://...}
    """
    if isinstance(entry, RepositorySource):
        return entry
    if isinstance(entry, str):
        name = entry.strip()
        if not name:
            raise ConfigError("仓库名称不能为空")
        return RepositorySource(name=name, url=WELL_KNOWN_REPOSITORIES.get(name, ""))
    if isinstance(entry, dict):
        name = str(entry.get("name") or "").strip()
        if not name:
            raise ConfigError(f"仓库配置缺少 name: {entry}")
        url = str(entry.get("url") or WELL_KNOWN_REPOSITORIES.get(name, ""))
        return RepositorySource(name=name, url=url)
    raise ConfigError(f"无法识别的仓库配置: {entry!r}")


class RepositoryRegistry:
    """有序、只追加的仓库源列表"""

    def __init__(self) -> None:
        self._sources: list[RepositorySource] = []

    def register_repositories(self, sources: Iterable[Any]) -> None:
        """按顺序追加仓库源，先全部解析成功再提交"""
        parsed = [parse_repository(s) for s in sources]
        self._sources.extend(parsed)
        for src in parsed:
            if not src.url:
                logger.debug("仓库 %s 未指定地址，交由解析器处理", src.name)
        logger.info("已登记 %d 个仓库源: %s", len(parsed), ", ".join(self.names()))

    def sources(self) -> tuple[RepositorySource, ...]:
        return tuple(self._sources)

    def names(self) -> list[str]:
        return [s.name for s in self._sources]

    def __iter__(self) -> Iterator[RepositorySource]:
        return iter(tuple(self._sources))

    def __len__(self) -> int:
        return len(self._sources)
