"""输出截断器测试"""

import pytest

from tools.output_limiter import limit_items, render_limited


class TestLimitItems:

    def test_under_ceiling_not_truncated(self):
        limited = limit_items(["a", "b"], 5)
        assert limited.text == "a\nb"
        assert limited.truncated is False
        assert limited.omitted == 0
        assert limited.total == 2

    def test_exactly_ceiling_not_truncated(self):
        limited = limit_items(["a", "b", "c"], 3)
        assert limited.truncated is False
        assert limited.text == "a\nb\nc"

    def test_over_ceiling_keeps_prefix(self):
        items = [f"f{i}" for i in range(10)]
        limited = limit_items(items, 4)
        assert limited.truncated is True
        assert limited.text.split("\n") == items[:4]
        assert limited.omitted == 6
        assert limited.shown + limited.omitted == limited.total == 10

    def test_negative_ceiling_rejected(self):
        with pytest.raises(ValueError):
            limit_items(["a"], -1)


class TestRenderLimited:

    def test_truncation_note(self):
        limited = limit_items(["a", "b", "c"], 1)
        assert render_limited(limited, "files", "(empty directory)") == "a\n\n... and 2 more files."

    def test_empty_placeholder(self):
        limited = limit_items([], 10)
        assert render_limited(limited, "matches", "No matches found.") == "No matches found."

    def test_plain_output(self):
        limited = limit_items(["x"], 10)
        assert render_limited(limited, "files", "(empty directory)") == "x"
