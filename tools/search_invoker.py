"""grep 调用封装（参数构建 / 受限执行 / 退出码分类）

退出码约定：
- 0: 有匹配，返回 stdout
- 1: 无匹配，返回空结果（不是错误）
- 2: grep 用法/运行错误 -> SearchUsageError（调用方可修正）
- 其它 / 信号终止: SearchProcessError（本次调用致命失败）
"""

import logging
import subprocess
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from core.errors import SearchFailureKind, SearchProcessError, SearchUsageError

logger = logging.getLogger(__name__)

GREP_MATCH = 0
GREP_NO_MATCH = 1
GREP_ERROR = 2

# stdout 上限（字节），超过即终止子进程
DEFAULT_MAX_BUFFER = 1024 * 1024

DEFAULT_TIMEOUT_SEC = 30.0

_READ_CHUNK = 64 * 1024


@dataclass(frozen=True)
class SearchOutcome:
    """一次 grep 调用的结果（仅退出码 0 / 1）"""
    exit_code: int
    stdout: str
    stderr: str = ""

    @property
    def matched(self) -> bool:
        return self.exit_code == GREP_MATCH

    def lines(self) -> List[str]:
        """按行拆分 stdout，丢弃空行"""
        return [line for line in self.stdout.split("\n") if line]


def build_grep_args(
    pattern: str,
    relative_path: str,
    include: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None,
    case_sensitive: bool = False,
) -> List[str]:
    """
    构建 grep 参数列表（不经过 shell）

    Args:
        pattern: 扩展正则（ERE）
        relative_path: 搜索目标（相对工作区根目录，放在最后）
        include: --include 文件 glob 列表
        exclude: 每项同时生成 --exclude 与 --exclude-dir
        case_sensitive: False 时追加 -i

    Returns:
        grep 参数（不含可执行文件名）
    """
    # -r 递归, -I 跳过二进制, -n 行号
    args = ["-rIn"]
    if not case_sensitive:
        args.append("-i")
    args.append("-E")

    for inc in include or ():
        args.extend(["--include", inc])

    for exc in exclude or ():
        args.extend(["--exclude", exc])
        args.extend(["--exclude-dir", exc])

    # 通过 -e 传递 pattern，防止被当作选项（如 "-v"）
    args.extend(["-e", pattern])
    # "--" 之后的目标路径不会被解析为选项（如 "--help"、"-f..."）
    args.extend(["--", relative_path])
    return args


def run_search(
    root: Path,
    args: Sequence[str],
    grep_binary: str = "grep",
    max_buffer: int = DEFAULT_MAX_BUFFER,
    timeout: Optional[float] = DEFAULT_TIMEOUT_SEC,
) -> SearchOutcome:
    """
    以 root 为工作目录执行 grep，并对退出码分类

    Args:
        root: 工作区根目录（输出路径因此相对于根目录）
        args: build_grep_args 的结果
        grep_binary: grep 可执行文件
        max_buffer: stdout 字节上限
        timeout: 墙钟超时（秒），None 表示不限制

    Returns:
        SearchOutcome（退出码 0 或 1）

    Raises:
        SearchUsageError: 退出码 2
        SearchProcessError: 启动失败 / 超时 / 输出超限 / 其它退出码 / 信号
    """
    cmd = [grep_binary, *args]
    logger.debug("Running %s (cwd=%s)", cmd, root)

    with tempfile.TemporaryFile() as stderr_file:
        try:
            proc = subprocess.Popen(
                cmd,
                cwd=str(root),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=stderr_file,
            )
        except OSError as e:
            raise SearchProcessError(
                SearchFailureKind.SPAWN_FAILED,
                f"Failed to start {grep_binary}: {e}",
                cause=e,
            ) from e

        timed_out = threading.Event()

        def _on_timeout() -> None:
            timed_out.set()
            proc.kill()

        timer = None
        if timeout is not None:
            timer = threading.Timer(timeout, _on_timeout)
            timer.daemon = True
            timer.start()

        chunks: List[bytes] = []
        size = 0
        overflow = False
        try:
            while True:
                chunk = proc.stdout.read1(_READ_CHUNK)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_buffer:
                    overflow = True
                    proc.kill()
                    break
                chunks.append(chunk)
            returncode = proc.wait()
        finally:
            if timer is not None:
                timer.cancel()
            proc.stdout.close()

        stderr_file.seek(0)
        stderr = stderr_file.read().decode("utf-8", errors="replace")

    # 计时器可能在 grep 正常退出后才触发，只有被 kill 的进程才算超时
    if timed_out.is_set() and returncode < 0:
        logger.warning("grep timed out after %ss: %s", timeout, cmd)
        raise SearchProcessError(
            SearchFailureKind.TIMEOUT,
            f"grep timed out after {timeout}s",
            exit_code=returncode,
            stderr=stderr,
        )
    if overflow:
        logger.warning("grep output exceeded %d bytes: %s", max_buffer, cmd)
        raise SearchProcessError(
            SearchFailureKind.OUTPUT_LIMIT,
            f"grep output exceeded {max_buffer} bytes",
            exit_code=returncode,
            stderr=stderr,
        )

    if returncode == GREP_MATCH:
        stdout = b"".join(chunks).decode("utf-8", errors="replace")
        return SearchOutcome(exit_code=returncode, stdout=stdout, stderr=stderr)
    if returncode == GREP_NO_MATCH:
        return SearchOutcome(exit_code=returncode, stdout="", stderr=stderr)
    if returncode == GREP_ERROR:
        raise SearchUsageError(stderr, exit_code=returncode)
    if returncode < 0:
        raise SearchProcessError(
            SearchFailureKind.SIGNAL,
            f"grep terminated by signal {-returncode}",
            exit_code=returncode,
            stderr=stderr,
        )
    raise SearchProcessError(
        SearchFailureKind.EXIT_STATUS,
        f"grep exited with unexpected status {returncode}",
        exit_code=returncode,
        stderr=stderr,
    )
