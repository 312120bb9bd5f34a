"""YAML 文件统一读写工具

集中管理配置文件的序列化/反序列化：统一 encoding="utf-8"、
空值保护、大小限制、原子写入。解析失败统一转换为 ConfigError。
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

from buildlayout.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# 配置文件最大 1MB，构建布局配置不应更大
MAX_YAML_SIZE = 1024 * 1024


def atomic_write(path: Path, content: str) -> None:
    """原子写入文件：先写同目录临时文件再 rename，防止中途崩溃导致损坏"""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp, str(path))
    except Exception:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def load_yaml(path: str | Path) -> dict[str, Any]:
    """读取 YAML 配置文件

    参数:
        path: YAML 文件路径

    返回:
        dict: 解析结果。文件不存在或内容为空时返回空字典

    异常:
        ConfigError: 文件过大、YAML 语法错误、顶层不是映射或无法读取
    """
    p = Path(path)
    try:
        file_size = p.stat().st_size
        if file_size > MAX_YAML_SIZE:
            raise ConfigError(
                f"配置文件过大: {p} ({file_size} 字节), 超过限制 {MAX_YAML_SIZE} 字节"
            )
        with open(p, encoding="utf-8") as f:
            result = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error("解析 YAML 文件失败: %s, 错误: %s", p, e)
        raise ConfigError(f"YAML 格式错误: {p}: {e}") from e
    except UnicodeDecodeError as e:
        logger.error("配置文件不是 UTF-8 编码: %s, 错误: %s", p, e)
        raise ConfigError(f"配置文件必须是 UTF-8 编码: {p}: {e}") from e
    except FileNotFoundError:
        return {}
    except OSError as e:
        logger.error("读取文件失败: %s, 错误: %s", p, e)
        raise ConfigError(f"无法读取配置文件: {p}: {e}") from e

    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ConfigError(
            f"{p} 顶层必须是映射 (实际类型: {type(result).__name__})"
        )
    return result


def save_yaml(path: str | Path, data: Any) -> None:
    """原子写入 YAML 文件，保持键顺序并允许 Unicode 字符"""
    content = yaml.safe_dump(
        data, default_flow_style=False,
        allow_unicode=True, sort_keys=False,
    )
    atomic_write(Path(path), content)
    logger.debug("已写入 %s", path)
