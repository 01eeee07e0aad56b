"""工具注册表

按名称管理工具实例，并保证 execute_tool 始终返回《通用工具响应协议》信封。
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from core.config import Config
from .base import ErrorCode, Tool, ToolStatus
from .builtin.list_files import ListFilesTool
from .builtin.search_code import SearchTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    工具注册表

    提供工具的注册、查询和执行功能。
    工具抛出的未分类异常在此统一转换为 INTERNAL_ERROR 响应。
    """

    def __init__(self):
        self._tools: Dict[str, Tool] = {}

    def register_tool(self, tool: Tool):
        """
        注册Tool对象

        Args:
            tool: Tool实例
        """
        if tool.name in self._tools:
            logger.warning("Tool '%s' already registered; overriding.", tool.name)
        self._tools[tool.name] = tool
        logger.debug("Tool '%s' registered.", tool.name)

    def unregister(self, name: str):
        """注销工具"""
        if self._tools.pop(name, None) is None:
            logger.warning("Tool '%s' is not registered.", name)

    def get_tool(self, name: str) -> Optional[Tool]:
        """获取Tool对象"""
        return self._tools.get(name)

    def execute_tool(self, name: str, parameters: Any) -> str:
        """
        执行工具

        Args:
            name: 工具名称
            parameters: 参数对象（dict）；JSON 字符串会先被解析

        Returns:
            工具执行结果（符合《通用工具响应协议》的 JSON 字符串）
        """
        tool = self._tools.get(name)
        if tool is None:
            return self._create_internal_error_response(
                message=f"Tool '{name}' not found.",
                params_input={},
            )

        if isinstance(parameters, str):
            try:
                parameters = json.loads(parameters) if parameters.strip() else {}
            except json.JSONDecodeError as e:
                return self._create_error_response(
                    code=ErrorCode.INVALID_PARAM,
                    message=f"Parameters are not valid JSON: {e}",
                    params_input={"input": parameters},
                )
        if parameters is None:
            parameters = {}

        try:
            return tool.run(parameters)
        except Exception as e:
            logger.exception("Tool '%s' raised an unexpected error", name)
            return self._create_internal_error_response(
                message=f"Tool '{name}' failed: {e}",
                params_input=parameters if isinstance(parameters, dict) else {"input": parameters},
            )

    def _create_internal_error_response(self, message: str, params_input: Dict[str, Any]) -> str:
        """创建内部错误响应（符合协议）"""
        return self._create_error_response(ErrorCode.INTERNAL_ERROR, message, params_input)

    def _create_error_response(self, code: ErrorCode, message: str, params_input: Dict[str, Any]) -> str:
        return json.dumps({
            "status": ToolStatus.ERROR.value,
            "data": {},
            "text": message,
            "error": {
                "code": code.value,
                "message": message,
            },
            "stats": {"time_ms": 0},
            "context": {
                "params_input": params_input,
            },
        }, ensure_ascii=False, indent=2)

    def get_tools_description(self) -> str:
        """
        获取所有可用工具的格式化描述字符串

        Returns:
            工具描述字符串，用于构建提示词
        """
        descriptions = [f"- {tool.name}: {tool.description.strip()}" for tool in self._tools.values()]
        return "\n".join(descriptions) if descriptions else "No tools available."

    def list_tools(self) -> List[str]:
        """列出所有工具名称"""
        return list(self._tools.keys())

    def get_all_tools(self) -> List[Tool]:
        """获取所有Tool对象"""
        return list(self._tools.values())

    def clear(self):
        """清空所有工具"""
        self._tools.clear()


def create_workspace_registry(
    project_root: Optional[Union[str, Path]] = None,
    config: Optional[Config] = None,
) -> ToolRegistry:
    """
    创建注册了 list_files 与 search 的注册表

    Args:
        project_root: 工作区根目录（优先于 config.workspace_root）
        config: 配置（默认 Config.from_env()）
    """
    config = config or Config.from_env()
    root = Path(project_root) if project_root is not None else Path(config.resolve_root())

    registry = ToolRegistry()
    registry.register_tool(ListFilesTool(
        project_root=root,
        max_entries=config.list_max_entries,
        default_ignore=config.default_ignore,
    ))
    registry.register_tool(SearchTool(
        project_root=root,
        max_lines=config.search_max_lines,
        default_exclude=config.default_ignore,
        grep_binary=config.grep_binary,
        max_buffer=config.search_max_buffer_bytes,
        timeout_sec=config.search_timeout_sec,
    ))
    return registry
