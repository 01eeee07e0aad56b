"""结果条数截断器（list_files / search 共用）

截断规则：
- 条目数 <= ceiling：原样拼接
- 条目数 > ceiling：保留前 ceiling 条，并报告省略数量

截断绝不能静默发生：调用方必须在 truncated=True 时追加
"... and N more" 提示（见 render_limited）。
"""

import logging
from dataclasses import dataclass
from typing import Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LimitedOutput:
    """截断结果"""
    text: str        # 拼接后的文本（最多 ceiling 条）
    truncated: bool  # 是否发生截断
    omitted: int     # 被省略的条目数
    total: int       # 截断前的总条目数

    @property
    def shown(self) -> int:
        return self.total - self.omitted


def limit_items(items: Sequence[str], ceiling: int) -> LimitedOutput:
    """
    按条数截断并拼接

    Args:
        items: 结果条目（文件路径或 grep 输出行）
        ceiling: 最大保留条数（>= 0）

    Returns:
        LimitedOutput
    """
    if ceiling < 0:
        raise ValueError("ceiling must be a non-negative integer")

    total = len(items)
    if total <= ceiling:
        return LimitedOutput(text="\n".join(items), truncated=False, omitted=0, total=total)

    omitted = total - ceiling
    logger.debug("Truncating %d items to %d (omitted=%d)", total, ceiling, omitted)
    return LimitedOutput(
        text="\n".join(items[:ceiling]),
        truncated=True,
        omitted=omitted,
        total=total,
    )


def render_limited(limited: LimitedOutput, noun: str, empty_placeholder: str) -> str:
    """
    生成给 LLM 阅读的最终文本

    - 截断：追加 "... and N more <noun>."
    - 空结果：返回占位文本（不返回空字符串）
    """
    if limited.truncated:
        return f"{limited.text}\n\n... and {limited.omitted} more {noun}."
    return limited.text or empty_placeholder
