"""统一异常体系

所有业务异常继承 BuildLayoutError，替代散落的 ValueError / OSError。
CLI 层据此输出友好提示并返回非零退出码。
"""

from __future__ import annotations


class BuildLayoutError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(BuildLayoutError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(BuildLayoutError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class PathResolutionError(BuildLayoutError):
    """相对路径无法解析为绝对路径（配置阶段致命错误）"""

    code = "PATH_RESOLUTION_ERROR"


class DuplicateProjectError(BuildLayoutError):
    """子项目名称冲突，重定位后输出目录会互相覆盖"""

    code = "DUPLICATE_PROJECT"

    def __init__(self, message: str, names: list[str] | None = None) -> None:
        super().__init__(message)
        self.names = names or []


class DeletionError(BuildLayoutError):
    """递归删除时遇到权限或 IO 故障，不自动重试"""

    code = "DELETION_ERROR"

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class TaskNotFoundError(BuildLayoutError):
    """指定的任务未注册"""

    code = "TASK_NOT_FOUND"
