"""仓库注册表测试"""

from __future__ import annotations

import pytest

from buildlayout.core.exceptions import ConfigError
from buildlayout.core.models import RepositorySource
from buildlayout.core.repositories import (
    WELL_KNOWN_REPOSITORIES,
    RepositoryRegistry,
    parse_repository,
)


class TestParseRepository:
    def test_alias(self) -> None:
        src = parse_repository("google")
        assert src == RepositorySource("google", WELL_KNOWN_REPOSITORIES["google"])

    def test_unknown_alias_keeps_empty_url(self) -> None:
        assert parse_repository("jitpack") == RepositorySource("jitpack", "")

    def test_mapping(self) -> None:
        src = parse_repository({"name": "corp", "url": "https://maven.corp.example/"})
        assert src.name == "corp"
        assert src.url == "https://maven.corp.example/"

    def test_mapping_alias_without_url(self) -> None:
        src = parse_repository({"name": "mavenCentral"})
        assert src.url == WELL_KNOWN_REPOSITORIES["mavenCentral"]

    @pytest.mark.parametrize("entry", ["", "  ", {"url": "https://x/"}, 3, None])
    def test_invalid(self, entry: object) -> None:
        with pytest.raises(ConfigError):
            parse_repository(entry)


class TestRepositoryRegistry:
    def test_order_preserved(self) -> None:
        reg = RepositoryRegistry()
        reg.register_repositories(["google", "mavenCentral"])
        assert reg.names() == ["google", "mavenCentral"]
        assert [s.name for s in reg] == ["google", "mavenCentral"]

    def test_append_only(self) -> None:
        reg = RepositoryRegistry()
        reg.register_repositories(["mavenCentral"])
        reg.register_repositories(["google", "mavenCentral"])
        assert reg.names() == ["mavenCentral", "google", "mavenCentral"]
        assert len(reg) == 3

    def test_failed_batch_not_committed(self) -> None:
        reg = RepositoryRegistry()
        reg.register_repositories(["google"])
        with pytest.raises(ConfigError):
            reg.register_repositories(["mavenCentral", ""])
        assert reg.names() == ["google"]

    def test_sources_is_snapshot(self) -> None:
        reg = RepositoryRegistry()
        reg.register_repositories(["google"])
        snapshot = reg.sources()
        reg.register_repositories(["mavenCentral"])
        assert isinstance(snapshot, tuple)
        assert len(snapshot) == 1
