"""构建产物目录重定位

把所有子项目的输出目录收拢到同一个共享目录下:

    <root>/build/../../build/<子项目名>

路径按字面规则解析（不访问文件系统、不跟随符号链接），
同样的输入总是得到同样的结果。任一子项目校验失败时整体报错，
不会返回部分重定位的结果。
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path, PurePath

from buildlayout.core.exceptions import (
    DuplicateProjectError,
    PathResolutionError,
    ValidationError,
)
from buildlayout.core.models import ProjectNode

logger = logging.getLogger(__name__)

DEFAULT_BUILD_DIRNAME = "build"
DEFAULT_SHARED_TEMPLATE = "../../build"


def _normalize(path: PurePath) -> Path:
    """字面化处理 . 和 ..，越过文件系统根时报错"""
    if not path.is_absolute():
        raise PathResolutionError(f"不是绝对路径: {path}")
    stack: list[str] = []
    for part in path.parts[1:]:
        if part in ("", "."):
            continue
        if part == "..":
            if not stack:
                raise PathResolutionError(f"路径越过文件系统根目录: {path}")
            stack.pop()
        else:
            stack.append(part)
    return Path(path.anchor, *stack)


def resolve_root(root: str | Path, base_dir: str | Path | None = None) -> Path:
    """把根项目路径解析为绝对路径

    相对路径以配置文件所在目录（base_dir）为基准；未提供时使用当前目录。
    """
    if root is None or str(root).strip() == "":
        raise PathResolutionError("根项目路径为空")
    p = Path(str(root)).expanduser()
    if not p.is_absolute():
        base = Path(base_dir) if base_dir else Path.cwd()
        p = base.absolute() / p
    return _normalize(p)


def resolve_shared_dir(
    root: str | Path, template: str = DEFAULT_SHARED_TEMPLATE,
) -> Path:
    """计算共享输出目录

    模板相对于根项目的默认输出目录 <root>/build 求值，
    因此 /home/user/myapp/android 得到 /home/user/myapp/build。
    """
    if not template or not str(template).strip():
        raise PathResolutionError("输出目录模板为空")
    tpl = PurePath(str(template))
    if tpl.is_absolute():
        raise PathResolutionError(f"输出目录模板必须是相对路径: {template}")
    root_path = _normalize(PurePath(str(root)))
    shared = _normalize(root_path / DEFAULT_BUILD_DIRNAME / tpl)
    # clean 会删除共享目录，不能是根项目本身或其上级目录
    if shared == root_path or shared in root_path.parents:
        raise PathResolutionError(
            f"共享输出目录 {shared} 包含根项目 {root_path}: {template}"
        )
    return shared


def validate_project_names(names: Iterable[str]) -> list[str]:
    """校验子项目名称: 非空、无首尾空白、不含路径分隔符、不重复"""
    result = list(names)
    bad = [
        n for n in result
        if not isinstance(n, str) or n in ("", ".", "..") or n != n.strip()
        or "/" in n or "\\" in n
    ]
    if bad:
        raise ValidationError("子项目名称无效", details=[repr(n) for n in bad])

    dupes = sorted(n for n, count in Counter(result).items() if count > 1)
    if dupes:
        raise DuplicateProjectError(
            f"子项目名称冲突: {', '.join(dupes)}", names=dupes,
        )
    return result


def relocate(
    root: str | Path,
    projects: Iterable[str | ProjectNode],
    template: str = DEFAULT_SHARED_TEMPLATE,
) -> tuple[Path, tuple[ProjectNode, ...]]:
    """重定位所有子项目的输出目录

    返回:
        (共享目录, 已赋值 output_dir 的子项目元组)
    """
    nodes = [p if isinstance(p, ProjectNode) else ProjectNode(name=p) for p in projects]
    validate_project_names(n.name for n in nodes)
    shared = resolve_shared_dir(root, template)

    relocated = tuple(replace(n, output_dir=shared / n.name) for n in nodes)
    for node in relocated:
        logger.debug(
            "子项目 %s -> %s", node.name, node.output_dir,
            extra={"project": node.name, "target": str(node.output_dir)},
        )
    logger.info(
        "共享输出目录: %s (%d 个子项目)", shared, len(relocated),
        extra={"target": str(shared)},
    )
    return shared, relocated
