"""
文件路径：src/components/coords.py

说明：坐标计算相关通用函数（文字区域留白、居中偏移），从包入口拆分而来。
"""

from __future__ import annotations

import math
from typing import Tuple

from ..variables import (
    CONST_BOX_ASPECT,
    CONST_BOX_ASPECT_HEIGHT_RATIO,
    CONST_BOX_HEIGHT_RATIO,
    CONST_BOX_WIDTH_RATIO,
)


def adjust_coords(x: float, y: float, offset_x: float, offset_y: float) -> Tuple[float, float]:
    """对坐标应用偏移（画面坐标系原点在左上角，y 向下为正）。

    参数：
        x: 原始 X 坐标。
        y: 原始 Y 坐标。
        offset_x: X 方向偏移量（向右为正）。
        offset_y: Y 方向偏移量（向下为正）。

    返回：
        偏移后的 (x, y)。
    """
    return (x + offset_x, y + offset_y)


def padded_text_box(frame_width: float, frame_height: float) -> Tuple[int, int]:
    """根据画面尺寸计算文字区域（宽, 高），单位为像素并向下取整。

    - 宽度：min(画面宽 * 0.8, 画面高 * 0.9 * 4/3)，避免宽屏画面上文字过于狭长；
    - 高度：画面高 * 0.8。
    """
    box_width = math.floor(
        min(
            frame_width * CONST_BOX_WIDTH_RATIO,
            frame_height * CONST_BOX_ASPECT_HEIGHT_RATIO * CONST_BOX_ASPECT,
        )
    )
    box_height = math.floor(frame_height * CONST_BOX_HEIGHT_RATIO)
    return box_width, box_height


def center_offset(
    outer_width: float,
    outer_height: float,
    inner_width: float,
    inner_height: float,
) -> Tuple[float, float]:
    """返回将内框居中放入外框时内框左上角的偏移量 (offset_x, offset_y)。"""
    return (outer_width - inner_width) / 2, (outer_height - inner_height) / 2


__all__ = [
    "adjust_coords",
    "padded_text_box",
    "center_offset",
]
