"""
glob 模式编译器（用于 ignore / include / exclude 列表）

支持的语法：
- ``*``   匹配除 ``/`` 以外的任意字符序列
- ``**``  匹配任意字符序列（包含 ``/``）
- ``?``   恰好一个字符
- 末尾 ``/``  匹配该目录本身及其下所有内容

除末尾以外还含 ``/`` 的模式按完整相对路径匹配（``src/test``）；
其余模式只匹配 basename（``node_modules`` 在任意深度命中）。
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterable, List, Union

# 通配符替换前需要转义的正则元字符；`*` 与 `?` 是通配符本身，不在其中
_REGEX_SPECIALS = re.compile(r"[.+^${}()|\[\]\\]")


def glob_to_regex(pattern: str) -> re.Pattern:
    """把单个 glob 模式编译为锚定的正则"""
    body = _REGEX_SPECIALS.sub(lambda m: "\\" + m.group(0), pattern)
    # 先用占位符处理 `**`，避免被单个 `*` 的替换吃掉
    body = body.replace("**", "\0").replace("*", "[^/]*").replace("\0", ".*")
    body = body.replace("?", ".")
    if pattern.endswith("/"):
        return re.compile(f"^{body}.*", re.DOTALL)
    return re.compile(f"^{body}$", re.DOTALL)


@dataclass(frozen=True)
class BasenameMatch:
    """只看 basename 的模式"""

    pattern: str
    regex: re.Pattern

    def matches(self, rel_path: str, basename: str) -> bool:
        return self.regex.search(basename) is not None


@dataclass(frozen=True)
class FullPathMatch:
    """按完整相对路径匹配的模式"""

    pattern: str
    regex: re.Pattern

    def matches(self, rel_path: str, basename: str) -> bool:
        return self.regex.search(rel_path) is not None


@dataclass(frozen=True)
class DirectoryMatch:
    """末尾带 ``/`` 的模式：命中目录条目本身，遍历时整棵子树被剪掉

    条目名补上 ``/`` 后再匹配，因此 ``gen/`` 命中任意深度的 ``gen``，
    ``src/gen/`` 只命中 ``src/gen``。
    """

    pattern: str
    regex: re.Pattern

    def matches(self, rel_path: str, basename: str) -> bool:
        if self.regex.search(rel_path + "/") is not None:
            return True
        return "/" not in self.pattern[:-1] and self.regex.search(basename + "/") is not None


PatternMatch = Union[BasenameMatch, FullPathMatch, DirectoryMatch]


def compile_pattern(pattern: str) -> PatternMatch:
    regex = glob_to_regex(pattern)
    if pattern.endswith("/"):
        return DirectoryMatch(pattern=pattern, regex=regex)
    if "/" in pattern:
        return FullPathMatch(pattern=pattern, regex=regex)
    return BasenameMatch(pattern=pattern, regex=regex)


def normalize_rel_path(rel_path: str) -> str:
    """把平台路径分隔符统一为 ``/``"""
    if os.sep != "/":
        rel_path = rel_path.replace(os.sep, "/")
    if os.altsep and os.altsep != "/":
        rel_path = rel_path.replace(os.altsep, "/")
    return rel_path


class GlobMatcher:
    """
    模式列表的“任一命中”匹配器

    每次工具调用构建一次；空列表永不命中，即“未配置过滤”。
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self._compiled: List[PatternMatch] = [compile_pattern(p) for p in patterns]

    @property
    def patterns(self) -> List[str]:
        return [c.pattern for c in self._compiled]

    def __bool__(self) -> bool:
        return bool(self._compiled)

    def matches(self, rel_path: str, basename: str) -> bool:
        if not self._compiled:
            return False
        normalized = normalize_rel_path(rel_path)
        return any(c.matches(normalized, basename) for c in self._compiled)


def compile_patterns(patterns: Iterable[str]) -> GlobMatcher:
    return GlobMatcher(patterns)
