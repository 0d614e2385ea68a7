"""
文件路径：src/processors/__init__.py

说明：
- layout.py：字符级换行、字号二分搜索与排版收尾（截断/省略号/居中/基线）；
- engines/{raster.py, reportlab.py}：消息画面的位图合成与 PDF 导出。
"""

from .layout import FitResult, LayoutLine, LayoutResult, TextLayoutEngine, fit_text, wrap_text

__all__ = [
    "FitResult",
    "LayoutLine",
    "LayoutResult",
    "TextLayoutEngine",
    "fit_text",
    "wrap_text",
]
