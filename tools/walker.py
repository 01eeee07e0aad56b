"""目录遍历（带剪枝）

被忽略的目录在进入前即被跳过（剪枝，而非遍历后过滤）。
结果最终按字典序排序，与文件系统枚举顺序无关。
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from core.errors import ToolInputError
from .glob_matcher import GlobMatcher

logger = logging.getLogger(__name__)


def walk_directory(
    root: Path,
    start_relative: str,
    recursive: bool,
    ignore: GlobMatcher,
    label: Optional[str] = None,
) -> List[str]:
    """
    遍历目录，返回排序后的相对路径列表

    Args:
        root: 工作区根目录（绝对路径）
        start_relative: 起始目录（相对 root，"." 表示根）
        recursive: 是否递归；为 False 时目录以 "/" 结尾且不进入
        ignore: 忽略匹配器（按 basename 或相对路径匹配）
        label: 错误消息中显示的路径（默认为 start_relative）

    Returns:
        排序后的相对路径列表（相对于 root，使用 "/" 分隔）

    Raises:
        ToolInputError: 起始目录不存在（NOT_FOUND）或不是目录（INVALID_PARAM）
        OSError: 其它文件系统错误（原样抛出）
    """
    start_dir = Path(os.path.normpath(os.path.join(root, start_relative)))
    if not start_dir.exists():
        raise ToolInputError("NOT_FOUND", f"Directory not found: {label or start_relative}")
    if not start_dir.is_dir():
        raise ToolInputError("INVALID_PARAM", f"{label or start_relative} is not a directory.")

    prefix = _start_prefix(root, start_dir)
    results: List[str] = []
    _walk(start_dir, prefix, recursive, ignore, results)
    results.sort()
    logger.debug("Walked %s: %d entries (recursive=%s)", start_dir, len(results), recursive)
    return results


def _start_prefix(root: Path, start_dir: Path) -> str:
    rel = os.path.relpath(start_dir, root)
    if rel == os.curdir:
        return ""
    return rel.replace(os.sep, "/")


def _walk(
    current_dir: Path,
    current_rel: str,
    recursive: bool,
    ignore: GlobMatcher,
    results: List[str],
) -> None:
    with os.scandir(current_dir) as it:
        entries = list(it)

    for entry in entries:
        entry_rel = f"{current_rel}/{entry.name}" if current_rel else entry.name

        if ignore.matches(entry_rel, entry.name):
            continue

        # symlink 不跟随：指向目录的链接按普通条目列出，不会越出根目录
        if entry.is_dir(follow_symlinks=False):
            if recursive:
                _walk(Path(entry.path), entry_rel, recursive, ignore, results)
            else:
                results.append(f"{entry_rel}/")
        else:
            results.append(entry_rel)
