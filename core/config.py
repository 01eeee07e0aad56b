"""配置管理"""

import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from core.env import getenv, getenv_bool, load_env

load_env()

# list_files.ignore / search.exclude 的默认值
DEFAULT_IGNORE: List[str] = [".git", "node_modules", "dist", "coverage"]


class Config(BaseModel):
    """Workspace Explorer 配置类"""

    # 工作区根目录（None 表示使用当前目录）
    workspace_root: Optional[str] = None

    # 系统配置
    debug: bool = False
    log_level: str = "INFO"

    # list_files 配置
    list_max_entries: int = Field(default=1000, ge=1)
    default_ignore: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE))

    # search 配置
    search_max_lines: int = Field(default=500, ge=1)
    search_max_buffer_bytes: int = Field(default=1024 * 1024, ge=1)  # 1MB
    search_timeout_sec: Optional[float] = 30.0  # None 表示不限制
    grep_binary: str = "grep"

    @classmethod
    def from_env(cls) -> "Config":
        """从环境变量创建配置"""
        timeout_raw = getenv("SEARCH_TIMEOUT_SEC", "30")
        return cls(
            workspace_root=getenv("WORKSPACE_ROOT"),
            debug=getenv_bool("DEBUG", False),
            log_level=getenv("LOG_LEVEL", "INFO"),
            list_max_entries=int(getenv("LIST_MAX_ENTRIES", "1000")),
            search_max_lines=int(getenv("SEARCH_MAX_LINES", "500")),
            search_max_buffer_bytes=int(getenv("SEARCH_MAX_BUFFER_BYTES", str(1024 * 1024))),
            search_timeout_sec=float(timeout_raw) if timeout_raw and float(timeout_raw) > 0 else None,
            grep_binary=getenv("GREP_BINARY", "grep"),
        )

    def resolve_root(self) -> str:
        """返回工作区根目录的绝对路径"""
        return os.path.abspath(self.workspace_root or os.getcwd())

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return self.model_dump()
