"""代码内容搜索工具 (search)"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from core.config import DEFAULT_IGNORE
from core.errors import ToolInputError
from prompts.tools_prompts.grep_prompt import grep_prompt
from ..base import ErrorCode, TextContent, Tool, ToolParameter, ToolResult
from ..output_limiter import limit_items, render_limited
from ..path_guard import resolve_within_root
from ..search_invoker import (
    DEFAULT_MAX_BUFFER,
    DEFAULT_TIMEOUT_SEC,
    build_grep_args,
    run_search,
)

logger = logging.getLogger(__name__)

NO_MATCHES_TEXT = "No matches found."


class SearchParams(BaseModel):
    """search 参数（caseSensitive 也接受 case_sensitive）"""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    pattern: StrictStr
    path: Optional[StrictStr] = None
    include: Optional[List[StrictStr]] = None
    exclude: Optional[List[StrictStr]] = None
    case_sensitive: Optional[StrictBool] = Field(default=None, alias="caseSensitive")


class SearchTool(Tool):
    """基于 grep 的文件内容搜索（扩展正则，跳过二进制文件）"""

    params_model = SearchParams

    # 最大返回行数
    MAX_LINES = 500

    def __init__(
        self,
        name: str = "search",
        project_root: Optional[Path] = None,
        max_lines: Optional[int] = None,
        default_exclude: Optional[List[str]] = None,
        grep_binary: str = "grep",
        max_buffer: int = DEFAULT_MAX_BUFFER,
        timeout_sec: Optional[float] = DEFAULT_TIMEOUT_SEC,
    ):
        """
        初始化搜索工具

        Args:
            name: 工具名称，默认为 "search"
            project_root: 工作区根目录（grep 的工作目录）
            max_lines: 最大返回行数（默认 500）
            default_exclude: 未传 exclude 时使用的排除列表
            grep_binary: grep 可执行文件
            max_buffer: grep stdout 字节上限
            timeout_sec: grep 墙钟超时（秒），None 表示不限制
        """
        super().__init__(name=name, description=grep_prompt, project_root=project_root)
        self.max_lines = max_lines if max_lines is not None else self.MAX_LINES
        self.default_exclude = (
            list(default_exclude) if default_exclude is not None else list(DEFAULT_IGNORE)
        )
        self.grep_binary = grep_binary
        self.max_buffer = max_buffer
        self.timeout_sec = timeout_sec

    def execute(self, parameters: Dict[str, Any]) -> ToolResult:
        """
        执行代码搜索操作

        Args:
            parameters: 包含以下键的字典：
                - pattern: 扩展正则（必需）
                - path: 搜索目录（默认为 '.'）
                - include: 文件 glob 列表（可选）
                - exclude: 排除的文件/目录 glob 列表（默认为 DEFAULT_IGNORE）
                - caseSensitive: 仅显式为 True 时区分大小写

        Returns:
            ToolResult，文本为 "path:line:content" 行
        """
        params = self.parse_parameters(parameters)
        if not params.pattern.strip():
            raise ToolInputError(
                ErrorCode.INVALID_PARAM.value, "Missing required parameter 'pattern'."
            )
        rel_path = (params.path or "").strip() or "."
        exclude = params.exclude if params.exclude is not None else self.default_exclude
        case_sensitive = params.case_sensitive is True

        target = resolve_within_root(self._project_root, rel_path)
        search_path = os.path.relpath(target, self._project_root)

        args = build_grep_args(
            pattern=params.pattern,
            relative_path=search_path,
            include=params.include,
            exclude=exclude,
            case_sensitive=case_sensitive,
        )
        outcome = run_search(
            self._project_root,
            args,
            grep_binary=self.grep_binary,
            max_buffer=self.max_buffer,
            timeout=self.timeout_sec,
        )

        lines = outcome.lines()
        limited = limit_items(lines, self.max_lines)
        if limited.truncated:
            logger.info(
                "search truncated '%s': showing %d of %d lines",
                params.pattern, limited.shown, limited.total,
            )
        text = render_limited(limited, "matches", NO_MATCHES_TEXT)

        return ToolResult(
            content=[TextContent(text=text)],
            data={
                "matches": lines[: limited.shown],
                "path_resolved": search_path.replace(os.sep, "/"),
                "total": limited.total,
                "omitted": limited.omitted,
            },
            truncated=limited.truncated,
        )

    def get_parameters(self) -> List[ToolParameter]:
        """
        获取工具参数定义

        Returns:
            ToolParameter 对象列表，描述工具支持的参数
        """
        return [
            ToolParameter(
                name="pattern",
                type="string",
                description="The extended regex (ERE) pattern to search for. Required.",
                required=True,
            ),
            ToolParameter(
                name="path",
                type="string",
                description="Directory to search in (relative to workspace root). Defaults to root.",
                required=False,
                default=".",
            ),
            ToolParameter(
                name="include",
                type="array",
                description="File patterns to include (e.g. *.ts).",
                required=False,
                default=None,
            ),
            ToolParameter(
                name="exclude",
                type="array",
                description="File and directory patterns to exclude (e.g. *.test.ts, fixtures).",
                required=False,
                default=None,
            ),
            ToolParameter(
                name="caseSensitive",
                type="boolean",
                description="Whether search is case sensitive. Defaults to false.",
                required=False,
                default=False,
            ),
        ]
