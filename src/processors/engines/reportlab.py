"""
文件路径：src/processors/engines/reportlab.py

说明：ReportLab 路径，将消息画面导出为单页 PDF。

注意：ReportLab 原点在左下角，排版结果的 y（自上而下的基线）需翻转为 page_height - y。
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

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


def _rgb01(rgb: Tuple[int, ...]) -> Tuple[float, float, float]:
    return rgb[0] / 255.0, rgb[1] / 255.0, rgb[2] / 255.0


@retry_on_exception(exceptions=(OSError,))
def build_message_pdf(
    output_pdf: Path,
    page_size: Tuple[float, float],
    layout: Optional[LayoutResult],
    *,
    mode: str,
    font_name: str,
    background: Optional[Image.Image] = None,
) -> Path:
    """使用 ReportLab 生成包含消息画面的单页 PDF。

    参数：
        output_pdf: 输出路径。
        page_size: 页面尺寸（宽, 高），与画面像素一一对应（1px = 1pt）。
        layout: 已换算到画面坐标的排版结果；None 时仅输出背景，零行时仍绘制蒙版或白底。
        mode: "overlay" 或 "text"。
        font_name: 已在 pdfmetrics 注册的字体名，应与排版度量所用字体一致。
        background: 叠加模式下的原画面；None 时使用黑色背景。

    返回：
        output_pdf。
    """
    if mode not in (CONST_MESSAGE_MODE_OVERLAY, CONST_MESSAGE_MODE_TEXT):
        raise ValueError(f"[{ERR_DATA_INVALID}] 未知的消息模式：{mode}")

    FileHandler.ensure_parent_writable(output_pdf)
    page_w, page_h = float(page_size[0]), float(page_size[1])
    c = canvas.Canvas(str(output_pdf), pagesize=(page_w, page_h))

    has_layout = layout is not None
    if mode == CONST_MESSAGE_MODE_OVERLAY or not has_layout:
        if background is not None:
            c.drawImage(ImageReader(background.convert("RGB")), 0, 0, width=page_w, height=page_h)
        else:
            c.setFillColorRGB(0, 0, 0)
            c.rect(0, 0, page_w, page_h, stroke=0, fill=1)
        if has_layout:
            c.saveState()
            c.setFillColorRGB(*_rgb01(STYLE_OVERLAY_DIM_RGBA))
            c.setFillAlpha(STYLE_OVERLAY_DIM_RGBA[3] / 255.0)
            c.rect(0, 0, page_w, page_h, stroke=0, fill=1)
            c.restoreState()
        text_rgb = STYLE_OVERLAY_TEXT_RGB
    else:
        c.setFillColorRGB(*_rgb01(STYLE_TEXT_ONLY_BG_RGB))
        c.rect(0, 0, page_w, page_h, stroke=0, fill=1)
        text_rgb = STYLE_TEXT_ONLY_TEXT_RGB

    if has_layout and layout.lines:
        c.setFont(font_name, layout.font_size)
        c.setFillColorRGB(*_rgb01(text_rgb))
        for line in layout.lines:
            c.drawString(line.x, page_h - line.y, line.text)

    c.showPage()
    c.save()
    logger.info("ReportLab 输出完成：%s", output_pdf)
    return output_pdf


__all__ = ["build_message_pdf"]
