"""配置加载测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from buildlayout.core.config import Config
from buildlayout.core.exceptions import ConfigError


class TestConfigFromFile:
    def test_missing_file_defaults(self, tmp_path: Path) -> None:
        cfg = Config.from_file(tmp_path / "buildlayout.yml")
        assert cfg.repositories == ["google", "mavenCentral"]
        assert cfg.build_dir == "../../build"
        assert cfg.projects == []
        assert cfg.config_dir == str(tmp_path)

    def test_load(self, tmp_path: Path) -> None:
        f = tmp_path / "buildlayout.yml"
        f.write_text(
            "root_dir: android\n"
            "repositories:\n"
            "  - mavenCentral\n"
            "  - {name: corp, url: 'https://maven.corp.example/'}\n"
            "projects: [app, core]\n"
            "owner: mobile-team\n",
            encoding="utf-8",
        )
        cfg = Config.from_file(f)
        assert cfg.root_dir == "android"
        assert cfg.repositories[0] == "mavenCentral"
        assert cfg.projects == ["app", "core"]
        assert cfg.extra == {"owner": "mobile-team"}

    def test_internal_fields_not_overridable(self, tmp_path: Path) -> None:
        f = tmp_path / "buildlayout.yml"
        f.write_text("config_dir: /etc\n", encoding="utf-8")
        cfg = Config.from_file(f)
        assert cfg.config_dir == str(tmp_path)
        assert cfg.extra == {"config_dir": "/etc"}

    def test_empty_file(self, tmp_path: Path) -> None:
        f = tmp_path / "buildlayout.yml"
        f.write_text("", encoding="utf-8")
        assert Config.from_file(f).clean_task == "clean"

    @pytest.mark.parametrize(
        "content",
        [
            "projects: app\n",
            "repositories: google\n",
            "build_dir: [a]\n",
            "clean_task: ''\n",
            "- just\n- a list\n",
            "projects: [unclosed\n",
        ],
    )
    def test_invalid(self, tmp_path: Path, content: str) -> None:
        f = tmp_path / "buildlayout.yml"
        f.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.from_file(f)

    def test_not_utf8(self, tmp_path: Path) -> None:
        f = tmp_path / "buildlayout.yml"
        f.write_bytes(b"projects: [\xff\xfe]\n")
        with pytest.raises(ConfigError):
            Config.from_file(f)


class TestConfigSave:
    def test_save_keeps_extra(self, tmp_path: Path) -> None:
        f = tmp_path / "out" / "buildlayout.yml"
        cfg = Config(projects=["app"], extra={"owner": "mobile-team"})
        cfg.save(f)
        loaded = Config.from_file(f)
        assert loaded.projects == ["app"]
        assert loaded.extra == {"owner": "mobile-team"}
        assert "config_dir" not in f.read_text(encoding="utf-8")
