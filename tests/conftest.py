"""Pytest 配置和共享 fixtures"""

import shutil

import pytest

from tests.utils.test_helpers import create_temp_project

requires_grep = pytest.mark.skipif(shutil.which("grep") is None, reason="grep not installed")


@pytest.fixture
def temp_project():
    """
    提供临时测试工作区 fixture（DEFAULT_PROJECT_STRUCTURE）

    Usage:
        def test_something(temp_project):
            tool = ListFilesTool(project_root=temp_project.root)
            ...
    """
    with create_temp_project() as project:
        yield project


@pytest.fixture
def list_tool(temp_project):
    """ListFilesTool fixture"""
    from tools.builtin.list_files import ListFilesTool
    return ListFilesTool(project_root=temp_project.root)


@pytest.fixture
def search_tool(temp_project):
    """SearchTool fixture"""
    from tools.builtin.search_code import SearchTool
    return SearchTool(project_root=temp_project.root)
