from __future__ import annotations

import pytest

from src.processors.layout import LayoutLine, wrap_text


class KerningMeasurer:
    """相邻字符各收紧 2px：w = 10 * n - 2 * (n - 1)。"""

    def measure(self, font_size: int, text: str) -> float:
        n = len(text)
        return 0.0 if n == 0 else 10.0 * n - 2.0 * (n - 1)

    def font_descriptor(self, font_size: int) -> str:
        return f"{font_size}px kern"


class TestWrapText:
    def test_empty_text_returns_empty_list(self, fixed_measurer):
        assert wrap_text("", 12, 100, fixed_measurer) == []
        assert fixed_measurer.calls == 0

    def test_greedy_character_packing(self, fixed_measurer):
        # 每字符 10px，行宽 30 -> 每行 3 个字符，尾行保留
        lines = wrap_text("abcdefg", 12, 30, fixed_measurer)
        assert [ln.text for ln in lines] == ["abc", "def", "g"]
        assert [ln.width for ln in lines] == [30, 30, 10]

    def test_wrapping_ignores_word_boundaries(self, fixed_measurer):
        lines = wrap_text("ab cd", 12, 20, fixed_measurer)
        assert [ln.text for ln in lines] == ["ab", " c", "d"]

    def test_char_wider_than_line_stands_alone(self, scaled_measurer):
        # 字号 12 时单字符宽 12 > 10，各自独占一行，且不产生空行
        lines = wrap_text("ab", 12, 10, scaled_measurer)
        assert [ln.text for ln in lines] == ["a", "b"]
        assert all(ln.text for ln in lines)

    def test_trailing_partial_line_emitted(self, fixed_measurer):
        lines = wrap_text("abcd", 12, 30, fixed_measurer)
        assert lines[-1] == LayoutLine(text="d", width=10)

    def test_differential_width_keeps_kerning_offset(self):
        # "abc" = 26 > 20 -> 断行；新行宽度 = 26 - 18 = 8（差分近似）
        lines = wrap_text("abc", 12, 20, KerningMeasurer())
        assert [(ln.text, ln.width) for ln in lines] == [("ab", 18.0), ("c", 8.0)]

    def test_exact_width_remeasures_new_line(self):
        lines = wrap_text("abc", 12, 20, KerningMeasurer(), exact_width=True)
        assert [(ln.text, ln.width) for ln in lines] == [("ab", 18.0), ("c", 10.0)]

    @pytest.mark.parametrize("text", ["x", "hello world", "测试文本与ASCII混排"])
    def test_every_line_fits_or_is_single_char(self, scaled_measurer, text):
        lines = wrap_text(text, 10, 35, scaled_measurer)
        assert "".join(ln.text for ln in lines) == text
        for ln in lines:
            assert ln.width <= 35 or len(ln.text) == 1
