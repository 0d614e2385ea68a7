"""
文件路径：src/processors/engines/raster.py

说明：Pillow 合成消息画面（叠加模式 / 纯文字模式）并输出 PNG 等位图。
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from ...components import FileHandler, get_logger, retry_on_exception
from ...variables import (
    CONST_MESSAGE_MODE_OVERLAY,
    CONST_MESSAGE_MODE_TEXT,
    ERR_DATA_INVALID,
    STYLE_OVERLAY_DIM_RGBA,
    STYLE_OVERLAY_TEXT_RGB,
    STYLE_TEXT_ONLY_BG_RGB,
    STYLE_TEXT_ONLY_TEXT_RGB,
)
from ..layout import LayoutResult


logger = get_logger(__name__)


def compose_frame(
    frame: Image.Image,
    layout: Optional[LayoutResult],
    mode: str,
    font: ImageFont.FreeTypeFont,
) -> Image.Image:
    """在画面上合成消息，返回新的 RGB 图像（不修改输入）。

    参数：
        frame: 原始画面。
        layout: 已换算到画面坐标的排版结果；None 时原样返回画面副本，
            零行（消息仅含空白）时只绘制蒙版或白底。
        mode: "overlay"（原画面 + 半透明蒙版 + 白字）或 "text"（白底灰字）。
        font: 与排版度量一致的 Pillow 字体（字号为 layout.font_size）。
    """
    base = frame.convert("RGB")
    if layout is None:
        return base.copy()

    if mode == CONST_MESSAGE_MODE_OVERLAY:
        canvas = base.convert("RGBA")
        dim = Image.new("RGBA", canvas.size, STYLE_OVERLAY_DIM_RGBA)
        canvas = Image.alpha_composite(canvas, dim).convert("RGB")
        fill = STYLE_OVERLAY_TEXT_RGB
    elif mode == CONST_MESSAGE_MODE_TEXT:
        canvas = Image.new("RGB", base.size, STYLE_TEXT_ONLY_BG_RGB)
        fill = STYLE_TEXT_ONLY_TEXT_RGB
    else:
        raise ValueError(f"[{ERR_DATA_INVALID}] 未知的消息模式：{mode}")

    draw = ImageDraw.Draw(canvas)
    for line in layout.lines:
        # anchor="ls"：x 为左边界，y 为基线
        draw.text((line.x, line.y), line.text, font=font, fill=fill, anchor="ls")
    return canvas


@retry_on_exception(exceptions=(OSError,))
def save_image(image: Image.Image, output_path: Path) -> Path:
    """保存图像到 output_path（格式由扩展名决定），失败时按全局配置重试。"""
    FileHandler.ensure_parent_writable(output_path)
    image.save(str(output_path))
    try:
        size_kb = Path(output_path).stat().st_size / 1024.0
        logger.info("Raster 输出完成：%s (%.1f KB)", output_path, size_kb)
    except OSError:
        logger.info("Raster 输出完成：%s", output_path)
    return output_path


__all__ = ["compose_frame", "save_image"]
