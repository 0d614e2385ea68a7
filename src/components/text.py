"""
文件路径：src/components/text.py

说明：文本宽度估算与消息文本清洗相关工具函数，从包入口拆分而来。
"""

from __future__ import annotations

import re

from ..variables import STYLE_CHAR_WIDTH_RATIO

_WHITESPACE_RUN_RE = re.compile(r"\s+")


def estimate_text_width(
    text: str,
    font_size: float,
    char_width_ratio: float = STYLE_CHAR_WIDTH_RATIO,
) -> float:
    """估算文本宽度（简化版）。

    - 中文等非 ASCII 字符按 font_size 计算；ASCII 按 font_size * char_width_ratio。
    """
    if not text:
        return 0.0
    width = 0.0
    for char in text:
        if ord(char) > 127:
            width += font_size
        else:
            width += font_size * char_width_ratio
    return width


def compact_whitespace(text: str) -> str:
    """将连续空白（含换行、制表符）折叠为单个空格并去除首尾空白。

    排版按字符换行，不保留用户输入的换行符。
    """
    if not text:
        return ""
    return _WHITESPACE_RUN_RE.sub(" ", str(text)).strip()


__all__ = [
    "estimate_text_width",
    "compact_whitespace",
]
