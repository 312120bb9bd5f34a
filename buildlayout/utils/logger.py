"""buildlayout 日志配置

日志记录可通过 extra= 携带上下文字段:
    task     正在执行的任务名（tasks.py）
    project  子项目名（relocator.py）
    target   涉及的目录路径（relocator.py / tasks.py）

文本格式把上下文追加在消息末尾，JSON 格式作为独立字段输出，便于 CI 按路径检索。
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

CONTEXT_FIELDS = ("task", "project", "target")


def _context(record: logging.LogRecord) -> dict[str, str]:
    return {
        key: str(getattr(record, key))
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


class ContextFormatter(logging.Formatter):
    """人类可读格式: 时间 级别 logger: 消息 [task=clean target=/x/build]"""

    def __init__(self) -> None:
        super().__init__("%(asctime)s [%(levelname)-7s] %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        ctx = _context(record)
        if not ctx:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in ctx.items())
        # 异常堆栈在 line 末尾时，上下文放在第一行
        head, sep, rest = line.partition("\n")
        return f"{head} [{pairs}]{sep}{rest}"


class JSONFormatter(logging.Formatter):
    """结构化 JSON 日志，每条记录一行

    {"timestamp": ..., "level": "INFO", "logger": "buildlayout.core.tasks",
     "message": "已删除: /x/build", "target": "/x/build"}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, str] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_context(record))
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """配置根日志器，输出到 stderr（不干扰 show --json 的标准输出）"""
    reset_logging()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_output else ContextFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.addHandler(handler)


def reset_logging() -> None:
    """清理根日志器上已注册的 handlers"""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
