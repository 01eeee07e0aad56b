"""工具基类与响应协议支持

工具以 execute() 返回类型化文本块（ToolResult），调用方输入错误抛出
ToolInputError；run() 将其包装为《通用工具响应协议》的标准信封结构。
"""

import json
import logging
import time
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, Field, ValidationError

from core.errors import SearchFailureKind, SearchProcessError, ToolInputError

logger = logging.getLogger(__name__)


# =============================================================================
# 响应协议枚举与常量
# =============================================================================

class ToolStatus(str, Enum):
    """
    工具运行状态枚举（遵循《通用工具响应协议》）

    - SUCCESS: 任务完全按预期执行，无截断、无错误
    - PARTIAL: 结果可用但已截断
    - ERROR: 无法提供有效结果
    """
    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"


class ErrorCode(str, Enum):
    """
    标准错误码枚举（遵循《通用工具响应协议》）
    """
    NOT_FOUND = "NOT_FOUND"             # 路径不存在
    ACCESS_DENIED = "ACCESS_DENIED"     # 路径不在 workspace root 内
    INVALID_PARAM = "INVALID_PARAM"     # 参数校验失败 / 不是目录 / grep 用法错误
    TIMEOUT = "TIMEOUT"                 # 搜索进程超时
    EXECUTION_ERROR = "EXECUTION_ERROR" # 搜索进程异常终止
    INTERNAL_ERROR = "INTERNAL_ERROR"   # 未分类的内部异常


# =============================================================================
# 工具参数与结果定义
# =============================================================================

class ToolParameter(BaseModel):
    """工具参数定义"""
    name: str
    type: str
    description: str
    required: bool = True
    default: Any = None


class TextContent(BaseModel):
    """文本内容块"""
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """
    工具执行结果

    Attributes:
        content: 给调用方的文本块列表
        data: 结构化载荷（写入信封的 data 字段）
        truncated: 输出是否被截断（决定 success / partial）
    """
    content: List[TextContent]
    data: Dict[str, Any] = Field(default_factory=dict)
    truncated: bool = False

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)


def format_validation_error(error: ValidationError) -> str:
    """将 pydantic 校验错误压缩为一行可读消息"""
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item.get("loc", ())) or "parameters"
        parts.append(f"{loc}: {item.get('msg', 'invalid value')}")
    return "Invalid parameters - " + "; ".join(parts)


# =============================================================================
# 工具基类
# =============================================================================

class Tool(ABC):
    """
    工具基类（遵循《通用工具响应协议》）

    Attributes:
        name: 工具名称
        description: 工具描述
        params_model: 参数模型（pydantic），入口处一次性校验
        _project_root: 工作区根目录（沙箱边界，实例生命周期内固定）
    """

    params_model: Type[BaseModel]

    def __init__(self, name: str, description: str, project_root: Optional[Path] = None):
        """
        初始化工具

        Args:
            name: 工具名称
            description: 工具描述
            project_root: 工作区根目录（必须由框架注入）
        """
        if project_root is None:
            raise ValueError("project_root must be provided by the framework")
        self.name = name
        self.description = description
        self._project_root = Path(project_root).resolve()

    @property
    def project_root(self) -> Path:
        return self._project_root

    # -------------------------------------------------------------------------
    # 抽象方法
    # -------------------------------------------------------------------------

    @abstractmethod
    def execute(self, parameters: Dict[str, Any]) -> ToolResult:
        """
        执行工具（必须实现）

        Raises:
            ToolInputError: 调用方输入错误
        """

    @abstractmethod
    def get_parameters(self) -> List[ToolParameter]:
        """获取工具参数定义（必须实现）"""

    # -------------------------------------------------------------------------
    # 参数校验
    # -------------------------------------------------------------------------

    def parse_parameters(self, parameters: Optional[Dict[str, Any]]) -> BaseModel:
        """
        用 params_model 校验原始参数，失败时抛出 INVALID_PARAM

        在任何文件系统或进程操作之前调用。
        """
        if parameters is None:
            parameters = {}
        if not isinstance(parameters, dict):
            raise ToolInputError(ErrorCode.INVALID_PARAM.value, "Parameters must be an object.")
        try:
            return self.params_model.model_validate(parameters)
        except ValidationError as e:
            raise ToolInputError(ErrorCode.INVALID_PARAM.value, format_validation_error(e)) from e

    # -------------------------------------------------------------------------
    # 协议包装
    # -------------------------------------------------------------------------

    def run(self, parameters: Dict[str, Any]) -> str:
        """
        执行工具并返回协议信封 JSON

        ToolInputError / SearchProcessError 映射为 error 响应；
        其它异常原样抛出，由注册表统一处理。
        """
        start = time.monotonic()
        params_input = parameters if isinstance(parameters, dict) else {"input": parameters}
        try:
            result = self.execute(parameters)
        except ToolInputError as e:
            return self.create_error_response(
                error_code=_to_error_code(e.code),
                message=e.message,
                params_input=params_input,
                time_ms=_elapsed_ms(start),
            )
        except SearchProcessError as e:
            logger.warning("Tool '%s' search process failed: %s", self.name, e.message)
            code = ErrorCode.TIMEOUT if e.kind == SearchFailureKind.TIMEOUT else ErrorCode.EXECUTION_ERROR
            return self.create_error_response(
                error_code=code,
                message=e.message,
                params_input=params_input,
                time_ms=_elapsed_ms(start),
                extra_context={
                    "failure_kind": e.kind.value,
                    "exit_code": e.exit_code,
                    "stderr": e.stderr,
                },
            )

        status = ToolStatus.PARTIAL if result.truncated else ToolStatus.SUCCESS
        data = dict(result.data)
        data["truncated"] = result.truncated
        return self._build_response(
            status=status,
            data=data,
            text=result.text,
            params_input=params_input,
            time_ms=_elapsed_ms(start),
        )

    def create_error_response(
        self,
        error_code: ErrorCode,
        message: str,
        params_input: Dict[str, Any],
        time_ms: int = 0,
        extra_context: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        创建错误响应（status="error"）

        注意：error 字段仅在此情况下存在，data 为空对象。
        """
        context: Dict[str, Any] = {
            "root": str(self._project_root),
            "params_input": params_input,
        }
        if extra_context:
            context.update(extra_context)

        payload = {
            "status": ToolStatus.ERROR.value,
            "data": {},
            "text": message,
            "error": {
                "code": error_code.value,
                "message": message,
            },
            "stats": {"time_ms": time_ms},
            "context": context,
        }
        return json.dumps(payload, ensure_ascii=False, indent=2)

    def _build_response(
        self,
        status: ToolStatus,
        data: Dict[str, Any],
        text: str,
        params_input: Dict[str, Any],
        time_ms: int,
    ) -> str:
        """
        内部方法：构建标准响应信封

        顶层字段严格限制为：status, data, text, stats, context
        """
        payload = {
            "status": status.value,
            "data": data,
            "text": text,
            "stats": {"time_ms": time_ms},
            "context": {
                "root": str(self._project_root),
                "params_input": params_input,
            },
        }
        return json.dumps(payload, ensure_ascii=False, indent=2)

    # -------------------------------------------------------------------------
    # 其他辅助方法
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": [param.model_dump() for param in self.get_parameters()],
        }

    def __str__(self) -> str:
        return f"Tool(name={self.name})"

    def __repr__(self) -> str:
        return self.__str__()


def _to_error_code(code: str) -> ErrorCode:
    try:
        return ErrorCode(code)
    except ValueError:
        return ErrorCode.INVALID_PARAM


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
