"""工作区根目录边界检查"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from core.errors import ToolInputError

PathLike = Union[str, "os.PathLike[str]"]


def is_within_root(root: PathLike, candidate: PathLike) -> bool:
    """
    candidate 是 root 本身或位于其下时返回 True

    两个参数都应是已规范化的绝对路径；仅共享名称前缀的兄弟目录
    （``/ws`` 与 ``/ws-other``）视为在外部。
    """
    try:
        rel = os.path.relpath(os.fspath(candidate), os.fspath(root))
    except ValueError:
        # Windows 下不同盘符
        return False
    return rel != os.pardir and not rel.startswith(os.pardir + os.sep)


def resolve_within_root(root: PathLike, relative: str) -> Path:
    """
    把 relative 解析到 root 下，越界则拒绝

    纯词法解析：折叠 ``..``，不跟随符号链接。绝对路径仅在落入 root 内时接受。

    Raises:
        ToolInputError: 结果离开 root 时为 ACCESS_DENIED
    """
    root_str = os.path.normpath(os.fspath(root))
    target = os.path.normpath(os.path.join(root_str, relative))
    if not is_within_root(root_str, target):
        raise ToolInputError(
            "ACCESS_DENIED",
            f"Access denied: {relative} is outside workspace root.",
        )
    return Path(target)
