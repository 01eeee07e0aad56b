"""测试辅助工具

提供测试所需的临时工作区创建、响应解析等复用函数。
"""

import json
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass
class TempProject:
    """临时测试工作区"""
    root: Path

    def __post_init__(self):
        self.root = Path(self.root)

    def path(self, *parts: str) -> Path:
        """获取工作区内路径"""
        return self.root.joinpath(*parts)

    def create_file(self, rel_path: str, content: str = "") -> Path:
        """创建文件"""
        file_path = self.path(rel_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return file_path

    def create_dir(self, rel_path: str) -> Path:
        """创建目录"""
        dir_path = self.path(rel_path)
        dir_path.mkdir(parents=True, exist_ok=True)
        return dir_path

    def cleanup(self):
        """清理临时目录"""
        if self.root.exists():
            shutil.rmtree(self.root)


@contextmanager
def create_temp_project(structure: Optional[Dict[str, Any]] = None):
    """
    创建临时测试工作区（上下文管理器）

    Args:
        structure: 工作区结构字典，格式如:
            {
                "src/index.ts": "console.log('hello world');",
                "empty/": None,  # 空目录
            }
            为 None 时使用 DEFAULT_PROJECT_STRUCTURE。

    Yields:
        TempProject: 临时工作区对象
    """
    temp_dir = Path(tempfile.mkdtemp(prefix="test_workspace_"))
    project = TempProject(root=temp_dir)

    try:
        if structure is None:
            structure = DEFAULT_PROJECT_STRUCTURE

        for path, content in structure.items():
            if path.endswith("/"):
                project.create_dir(path.rstrip("/"))
            else:
                project.create_file(path, content or "")

        yield project
    finally:
        project.cleanup()


# 默认测试工作区结构
DEFAULT_PROJECT_STRUCTURE = {
    "src/index.ts": "console.log('hello world');",
    "src/utils.ts": "export const add = (a, b) => a + b;",
    "src/nested_modules/nested.js": "nested",
    "test/index.test.ts": "import { add } from '../src/utils';",
    "README.md": "# Project\n\nHello world project.",
    "node_modules/foo.js": "module.exports = {};",
}


def parse_response(response_str: str) -> Dict[str, Any]:
    """
    解析工具响应 JSON

    Raises:
        ValueError: JSON 解析失败
    """
    try:
        return json.loads(response_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Response is not valid JSON: {e}")


def assert_response_status(response_str: str, expected_status: str) -> Dict[str, Any]:
    """断言响应状态并返回解析结果"""
    parsed = parse_response(response_str)
    actual_status = parsed.get("status")

    if actual_status != expected_status:
        raise AssertionError(
            f"expected status='{expected_status}', got status='{actual_status}'\n"
            f"response: {json.dumps(parsed, ensure_ascii=False, indent=2)}"
        )

    return parsed


def text_lines(text: str) -> list:
    """将工具文本输出按行拆分（去掉空行）"""
    return [line for line in text.split("\n") if line]
