"""工作区浏览工具的错误类型"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ToolInputError(Exception):
    """
    调用方输入错误，携带稳定的错误码，用于映射响应信封

    调用方调整请求即可恢复。
    """

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = str(code or "INVALID_PARAM")
        self.message = str(message or "")


class SearchFailureKind(str, Enum):
    """搜索进程失败的类别"""

    EXIT_STATUS = "exit_status"
    SIGNAL = "signal"
    OUTPUT_LIMIT = "output_limit"
    TIMEOUT = "timeout"
    SPAWN_FAILED = "spawn_failed"


class SearchUsageError(ToolInputError):
    """grep 退出码为 2（正则非法、路径不存在等）"""

    def __init__(self, stderr: str, exit_code: int = 2):
        self.exit_code = exit_code
        self.stderr = stderr or ""
        detail = self.stderr.strip() or f"grep exited with status {exit_code}"
        super().__init__("INVALID_PARAM", f"Grep error: {detail}")


class SearchProcessError(Exception):
    """搜索进程的意外失败，本次调用无法继续"""

    def __init__(
        self,
        kind: SearchFailureKind,
        message: str,
        exit_code: Optional[int] = None,
        stderr: str = "",
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.exit_code = exit_code
        self.stderr = stderr or ""
        self.cause = cause
