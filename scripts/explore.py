import argparse
import json
import os
import sys
from typing import Any, Dict, List, Optional

# Ensure project root is on sys.path when running as a script
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from core.config import Config
from tools.registry import create_workspace_registry
from utils import setup_logger

custom_theme = Theme({
    "info": "bright_cyan",
    "warning": "bright_yellow",
    "error": "bold bright_red",
    "observation": "dim",
})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Explore a workspace with list_files / search")
    parser.add_argument("--root", default=None, help="workspace root (override WORKSPACE_ROOT)")
    parser.add_argument("--json", action="store_true", help="print the raw response envelope")
    parser.add_argument("--log-level", default=None, help="log level (override LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("ls", help="list files")
    ls.add_argument("path", nargs="?", default=None)
    ls.add_argument("--no-recursive", action="store_true", help="list direct children only")
    ls.add_argument("--ignore", action="append", default=None, metavar="GLOB",
                    help="ignore pattern (repeatable, replaces defaults)")

    search = sub.add_parser("search", help="search file contents")
    search.add_argument("pattern")
    search.add_argument("path", nargs="?", default=None)
    search.add_argument("--include", action="append", default=None, metavar="GLOB")
    search.add_argument("--exclude", action="append", default=None, metavar="GLOB",
                        help="exclude pattern (repeatable, replaces defaults)")
    search.add_argument("--case-sensitive", action="store_true")
    return parser


def build_tool_call(args: argparse.Namespace) -> tuple:
    """Translate CLI arguments into (tool name, parameters)."""
    params: Dict[str, Any] = {}
    if args.path is not None:
        params["path"] = args.path
    if args.command == "ls":
        if args.no_recursive:
            params["recursive"] = False
        if args.ignore is not None:
            params["ignore"] = args.ignore
        return "list_files", params

    params["pattern"] = args.pattern
    if args.include is not None:
        params["include"] = args.include
    if args.exclude is not None:
        params["exclude"] = args.exclude
    if args.case_sensitive:
        params["caseSensitive"] = True
    return "search", params


def render_response(payload: Dict[str, Any], console: Console) -> None:
    status = payload.get("status")
    if status == "error":
        error = payload.get("error") or {}
        title = f"[error]{error.get('code', 'ERROR')}[/error]"
        console.print(Panel(Text(payload.get("text", "")), title=title, border_style="red", title_align="left"))
        return

    border = "yellow" if status == "partial" else "cyan"
    time_ms = (payload.get("stats") or {}).get("time_ms", 0)
    console.print(Panel(
        Text(payload.get("text", "")),
        title=f"[info]{status}[/info]",
        subtitle=f"[observation]{time_ms}ms[/observation]",
        border_style=border,
        title_align="left",
    ))


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console(theme=custom_theme)

    config = Config.from_env()
    if args.root is not None:
        config.workspace_root = args.root
    setup_logger(None, args.log_level or config.log_level)

    registry = create_workspace_registry(config=config)
    name, params = build_tool_call(args)
    response = registry.execute_tool(name, params)

    payload = json.loads(response)
    if args.json:
        console.print_json(response)
    else:
        render_response(payload, console)
    return 1 if payload.get("status") == "error" else 0


if __name__ == "__main__":
    sys.exit(main())
