"""scripts/explore.py CLI tests."""

import io
import json

from rich.console import Console

from scripts.explore import build_parser, build_tool_call, custom_theme, main
from tests.conftest import requires_grep
from tests.utils.test_helpers import create_temp_project


def _console():
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None, theme=custom_theme), buffer


class TestBuildToolCall:

    def test_ls_arguments(self):
        args = build_parser().parse_args(["ls", "src", "--no-recursive", "--ignore", "*.log"])
        assert build_tool_call(args) == ("list_files", {"path": "src", "recursive": False, "ignore": ["*.log"]})

    def test_search_arguments(self):
        args = build_parser().parse_args(["search", "TODO", "--include", "*.py", "--case-sensitive"])
        assert build_tool_call(args) == ("search", {"pattern": "TODO", "include": ["*.py"], "caseSensitive": True})


class TestMain:

    def test_ls_renders_listing(self):
        with create_temp_project() as project:
            console, buffer = _console()
            code = main(["--root", str(project.root), "ls", "src"], console=console)
            assert code == 0
            assert "src/index.ts" in buffer.getvalue()

    def test_json_output(self):
        with create_temp_project() as project:
            console, buffer = _console()
            main(["--root", str(project.root), "--json", "ls"], console=console)
            payload = json.loads(buffer.getvalue())
            assert payload["status"] == "success"

    def test_error_exit_code(self):
        with create_temp_project() as project:
            console, buffer = _console()
            code = main(["--root", str(project.root), "ls", "../"], console=console)
            assert code == 1
            assert "ACCESS_DENIED" in buffer.getvalue()

    @requires_grep
    def test_search(self):
        with create_temp_project() as project:
            console, buffer = _console()
            code = main(["--root", str(project.root), "search", "hello", "--include", "*.md"], console=console)
            assert code == 0
            output = buffer.getvalue()
            assert "README.md" in output
            assert "index.ts" not in output
