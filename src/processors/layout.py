"""
文件路径：src/processors/layout.py

说明：自适应字号的文字排版引擎。

- wrap_text：按字符贪心换行（不按单词），每行宽度不超过给定像素宽度；
- fit_text：在 [floor(高 / 最大行数), 高] 区间内二分搜索最大可用整数字号；
- TextLayoutEngine.calc_layout：截断溢出行并追加省略号，计算每行居中坐标与基线。

坐标系：原点在文字区域左上角，y 向下为正；y 为字母基线位置（多数绘制接口按基线定位文字）。
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import List, Tuple

from ..components import InvalidArgumentError, Measurer, get_logger
from ..variables import STYLE_BASELINE_RATIO, STYLE_ELLIPSIS


logger = get_logger(__name__)


@dataclass(frozen=True)
class LayoutLine:
    """排版后的一行文字。

    属性：
        text: 行文本。
        width: 行宽的近似值（换行时差分计算，追加省略号后不重新度量）。
        x, y: 绘制起点；y 为基线位置。
    """

    text: str
    width: float
    x: float = 0.0
    y: float = 0.0


@dataclass
class FitResult:
    font_size: int
    lines: List[LayoutLine]


@dataclass(frozen=True)
class LayoutResult:
    """排版结果：字体描述串（字号 + 字体族）、数值字号与自上而下的行序列。"""

    font: str
    font_size: int
    lines: Tuple[LayoutLine, ...]


def wrap_text(
    text: str,
    font_size: int,
    max_width: float,
    measurer: Measurer,
    *,
    exact_width: bool = False,
) -> List[LayoutLine]:
    """按最大行宽将文本逐字符贪心分行。

    - 追加下一个字符后度量宽度超过 max_width 时，结束当前行，新行从该字符开始；
    - 单个字符本身超宽时仍独占一行，不再细分；
    - 新行宽度默认按差分计算：measure(旧行 + 字符) - 旧行宽度，受字距影响可能略有偏差；
      exact_width=True 时改为重新度量新行；
    - 空文本返回空列表，不抛异常。
    """
    lines: List[LayoutLine] = []
    current = ""
    current_width = 0.0
    for char in text:
        measured = measurer.measure(font_size, current + char)
        if measured > max_width and current:
            lines.append(LayoutLine(text=current, width=current_width))
            if exact_width:
                current_width = measurer.measure(font_size, char)
            else:
                current_width = measured - current_width
            current = char
        else:
            current += char
            current_width = measured
    if current:
        lines.append(LayoutLine(text=current, width=current_width))
    return lines


def _validate_box(width: float, height: float, max_wrap: int) -> None:
    """校验排版参数，非法时抛出 InvalidArgumentError。"""
    try:
        w = float(width)
        h = float(height)
        mw = int(max_wrap)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidArgumentError(f"排版参数类型非法：width={width!r}, height={height!r}, max_wrap={max_wrap!r}") from exc
    if not math.isfinite(w) or w <= 0:
        raise InvalidArgumentError(f"宽度必须为有限正数：{width!r}")
    if not math.isfinite(h) or h <= 0:
        raise InvalidArgumentError(f"高度必须为有限正数：{height!r}")
    if math.floor(h) < 1:
        raise InvalidArgumentError(f"高度不足 1 像素，无法容纳任何字号：{height!r}")
    if mw <= 0:
        raise InvalidArgumentError(f"最大行数必须 >= 1：{max_wrap!r}")


def fit_text(
    text: str,
    width: float,
    height: float,
    max_wrap: int,
    measurer: Measurer,
    *,
    exact_width: bool = False,
) -> FitResult:
    """二分搜索能容纳文本的最大整数字号。

    参数：
        text: 待排版文本。
        width, height: 文字区域宽高（像素）。
        max_wrap: 最大行数。
        measurer: 度量器。

    返回：
        FitResult(font_size, lines)。

    说明：
    - 溢出条件：行数 > max_wrap，或 字号 * 行数 > height；
    - 搜索窗口收敛到 max - min <= 1 时，直接采用本轮中点的换行结果，即使仍溢出，
      由排版收尾阶段截断并追加省略号；
    - 前提：溢出随字号单调（度量器约定），不做运行时校验。

    异常：
        InvalidArgumentError: 宽/高非正或 max_wrap <= 0。
    """
    _validate_box(width, height, max_wrap)
    max_wrap = int(max_wrap)

    max_font_size = int(math.floor(height))
    min_font_size = max(1, int(math.floor(height / max_wrap)))
    while True:
        font_size = (min_font_size + max_font_size) // 2

        lines = wrap_text(text, font_size, width, measurer, exact_width=exact_width)
        num_of_lines = len(lines)
        has_overflow = num_of_lines > max_wrap or font_size * num_of_lines > height

        if max_font_size - min_font_size <= 1:
            logger.debug(
                "字号搜索完成：font_size=%s, lines=%s, overflow=%s", font_size, num_of_lines, has_overflow
            )
            return FitResult(font_size=font_size, lines=lines)
        if has_overflow:
            max_font_size = font_size - 1
        else:
            min_font_size = font_size


class TextLayoutEngine:
    """自适应字号排版引擎。

    用法示例：
        engine = TextLayoutEngine(PillowMeasurer())
        result = engine.calc_layout("Hello", width=800, height=400, max_wrap=3)
        for line in result.lines:
            draw.text((line.x, line.y), line.text, anchor="ls", ...)

    引擎本身无跨调用状态；同一度量器实例不可被多个并发排版共享。
    """

    def __init__(
        self,
        measurer: Measurer,
        baseline_ratio: float = STYLE_BASELINE_RATIO,
        ellipsis: str = STYLE_ELLIPSIS,
        exact_width: bool = False,
    ) -> None:
        self.measurer = measurer
        self.baseline_ratio = baseline_ratio
        self.ellipsis = ellipsis
        self.exact_width = exact_width

    def calc_layout(self, text: str, width: float, height: float, max_wrap: int) -> LayoutResult:
        """计算文本在给定区域内的字号、分行与每行坐标。

        参数：
            text: 待排版文本；空文本返回零行结果。
            width, height: 文字区域宽高（像素）。
            max_wrap: 最大行数。

        返回：
            LayoutResult；lines 数量不超过 max_wrap。

        异常：
            InvalidArgumentError: 参数非法。
        """
        fit = fit_text(text, width, height, max_wrap, self.measurer, exact_width=self.exact_width)
        font_size = fit.font_size
        lines = list(fit.lines)

        # 丢弃溢出行，并在保留的最后一行追加省略号（不重新度量宽度）
        max_wrap = int(max_wrap)
        if len(lines) > max_wrap:
            lines = lines[:max_wrap]
            last = lines[-1]
            lines[-1] = dataclasses.replace(last, text=last.text + self.ellipsis)

        # 垂直整体居中；每行独立水平居中
        offset_y = (height - font_size * len(lines)) / 2
        placed = tuple(
            dataclasses.replace(
                line,
                x=(width - line.width) / 2,
                y=offset_y + font_size * (i + self.baseline_ratio),
            )
            for i, line in enumerate(lines)
        )

        return LayoutResult(
            font=self.measurer.font_descriptor(font_size),
            font_size=font_size,
            lines=placed,
        )


__all__ = [
    "LayoutLine",
    "FitResult",
    "LayoutResult",
    "wrap_text",
    "fit_text",
    "TextLayoutEngine",
]
