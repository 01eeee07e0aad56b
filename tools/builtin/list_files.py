"""目录浏览工具 (list_files)"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr

from core.config import DEFAULT_IGNORE
from prompts.tools_prompts.list_file_prompt import list_files_prompt
from ..base import TextContent, Tool, ToolParameter, ToolResult
from ..glob_matcher import compile_patterns
from ..output_limiter import limit_items, render_limited
from ..path_guard import resolve_within_root
from ..walker import walk_directory

logger = logging.getLogger(__name__)

EMPTY_DIRECTORY_TEXT = "(empty directory)"


class ListFilesParams(BaseModel):
    """list_files 参数（None 表示使用默认值）"""
    model_config = ConfigDict(extra="ignore")

    path: Optional[StrictStr] = None
    recursive: Optional[StrictBool] = None
    ignore: Optional[List[StrictStr]] = None


class ListFilesTool(Tool):
    """沙箱内的递归目录列表工具，支持 glob 忽略与输出截断"""

    params_model = ListFilesParams

    # 最大返回条目数
    MAX_ENTRIES = 1000

    def __init__(
        self,
        name: str = "list_files",
        project_root: Optional[Path] = None,
        max_entries: Optional[int] = None,
        default_ignore: Optional[List[str]] = None,
    ):
        """
        初始化文件列表工具

        Args:
            name: 工具名称，默认为 "list_files"
            project_root: 工作区根目录，用于沙箱限制
            max_entries: 最大返回条目数（默认 1000）
            default_ignore: 未传 ignore 时使用的忽略列表
        """
        super().__init__(name=name, description=list_files_prompt, project_root=project_root)
        self.max_entries = max_entries if max_entries is not None else self.MAX_ENTRIES
        self.default_ignore = list(default_ignore) if default_ignore is not None else list(DEFAULT_IGNORE)

    def execute(self, parameters: Dict[str, Any]) -> ToolResult:
        """
        执行文件列表操作

        Args:
            parameters: 包含以下键的字典：
                - path: 要列出的目录（相对工作区根目录，默认为 '.'）
                - recursive: 是否递归（默认为 True）
                - ignore: 要忽略的 glob 模式列表（默认为 DEFAULT_IGNORE）

        Returns:
            ToolResult，文本为排序后的相对路径（每行一个）
        """
        params = self.parse_parameters(parameters)
        rel_path = (params.path or "").strip() or "."
        recursive = params.recursive is not False
        ignore = params.ignore if params.ignore is not None else self.default_ignore

        target = resolve_within_root(self._project_root, rel_path)
        start_relative = os.path.relpath(target, self._project_root)

        matcher = compile_patterns(ignore)
        entries = walk_directory(
            self._project_root,
            start_relative,
            recursive,
            matcher,
            label=rel_path,
        )

        limited = limit_items(entries, self.max_entries)
        if limited.truncated:
            logger.info(
                "list_files truncated %s: showing %d of %d entries",
                rel_path, limited.shown, limited.total,
            )
        text = render_limited(limited, "files", EMPTY_DIRECTORY_TEXT)

        return ToolResult(
            content=[TextContent(text=text)],
            data={
                "entries": entries[: limited.shown],
                "path_resolved": start_relative.replace(os.sep, "/"),
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
                name="path",
                type="string",
                description="Directory to list (relative to workspace root). Defaults to root.",
                required=False,
                default=".",
            ),
            ToolParameter(
                name="recursive",
                type="boolean",
                description="Whether to list recursively. Defaults to true.",
                required=False,
                default=True,
            ),
            ToolParameter(
                name="ignore",
                type="array",
                description="Glob patterns to ignore (e.g. node_modules, .git, src/generated, build/).",
                required=False,
                default=None,  # 避免可变默认值
            ),
        ]
