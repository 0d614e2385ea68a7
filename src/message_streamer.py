"""
文件路径：src/message_streamer.py

模块职责：
- 消息画面门面：持有当前消息文本、消息模式与启用状态，把排版结果合成到每一帧画面上。
- 仅通过 `src/components` 进行通用操作（日志、坐标、度量），跨模块变量统一从 `src/variables.py` 引用。

注意：
- 文字区域按画面尺寸留白：宽 = min(画面宽 * 0.8, 画面高 * 0.9 * 4/3)，高 = 画面高 * 0.8，最多 3 行；
- 排版结果按 (画面宽, 画面高, 原始文本) 做单条缓存，输入完全一致时直接复用，
  适配固定帧率重绘、输入大多不变的调用方式；
- 实例非线程安全（度量器缓存与排版缓存均为实例状态）。

组件调用说明（来自 src/components / src/processors）：
- PillowMeasurer / ReportlabMeasurer（度量）、padded_text_box / center_offset / adjust_coords（坐标）
- TextLayoutEngine.calc_layout（排版）、compose_frame / build_message_pdf（输出）
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageFont

from .components import (
    Measurer,
    PillowMeasurer,
    ReportlabMeasurer,
    adjust_coords,
    center_offset,
    compact_whitespace,
    get_logger,
    padded_text_box,
)
from .data_handler import StreamerSettings, load_settings, save_settings, validate_message_mode
from .processors.engines.raster import compose_frame
from .processors.engines.reportlab import build_message_pdf
from .processors.layout import LayoutResult, TextLayoutEngine
from .variables import (
    CONST_ENGINE_RASTER,
    CONST_ENGINE_REPORTLAB,
    CONST_MAX_WRAP_DEFAULT,
    ERR_DATA_INVALID,
    ERR_FRAME_RENDER_FAILED,
    STYLE_FONT_NAME_PDF,
)


logger = get_logger(__name__)


_CacheKey = Tuple[int, int, str]


class MessageStreamer:
    """消息画面合成器。

    用法示例：
        streamer = MessageStreamer()
        streamer.start()
        streamer.text = "会议中，请稍候"
        out = streamer.render_frame(frame)  # frame: PIL.Image

    参数：
        settings_path: 设置文件路径；None 使用 `config/settings.json`。
        engine: "raster"（Pillow 度量）或 "reportlab"（pdfmetrics 度量），决定默认度量器。
        font_file: 字体文件；None 时自动探测。
        measurer: 显式指定度量器（优先于 engine/font_file）。
        max_wrap: 最大行数。
    """

    def __init__(
        self,
        *,
        settings_path: Optional[Path] = None,
        engine: str = CONST_ENGINE_RASTER,
        font_file: Optional[Path] = None,
        measurer: Optional[Measurer] = None,
        max_wrap: int = CONST_MAX_WRAP_DEFAULT,
    ) -> None:
        if engine not in (CONST_ENGINE_RASTER, CONST_ENGINE_REPORTLAB):
            raise ValueError(f"[{ERR_DATA_INVALID}] 未知的渲染引擎：{engine}")
        self.engine = engine
        self.settings_path = settings_path
        self._settings: StreamerSettings = load_settings(settings_path)
        if measurer is None:
            if engine == CONST_ENGINE_REPORTLAB:
                font_name = Path(font_file).stem if font_file is not None else STYLE_FONT_NAME_PDF
                measurer = ReportlabMeasurer(font_name=font_name, font_file=font_file)
            else:
                measurer = PillowMeasurer(font_file=font_file)
        self.measurer = measurer
        self._layout_engine = TextLayoutEngine(measurer)
        self.max_wrap = max_wrap
        self.text: str = ""
        self._is_started = False
        self._layout_cache: Optional[Tuple[_CacheKey, LayoutResult]] = None

    # -----------------------------
    # 设置（持久化）
    # -----------------------------
    @property
    def mode(self) -> str:
        return self._settings.message_mode

    @mode.setter
    def mode(self, value: str) -> None:
        self._settings.message_mode = validate_message_mode(value)
        save_settings(self._settings, self.settings_path)

    @property
    def enabled(self) -> bool:
        return self._settings.enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._settings.enabled = bool(value)
        save_settings(self._settings, self.settings_path)

    # -----------------------------
    # 启停
    # -----------------------------
    @property
    def is_started(self) -> bool:
        return self._is_started

    def start(self) -> None:
        if self._is_started:
            return
        self._is_started = True
        logger.info("消息画面已启动：engine=%s, mode=%s", self.engine, self.mode)

    def stop(self) -> None:
        if not self._is_started:
            return
        self._layout_cache = None
        self._is_started = False
        logger.info("消息画面已停止")

    # -----------------------------
    # 排版
    # -----------------------------
    def calc_text_layout(self, width: int, height: int, text: str) -> LayoutResult:
        """计算整帧画面坐标下的排版结果（单条缓存，键为宽/高/原始文本）。

        参数：
            width, height: 画面尺寸（像素）。
            text: 原始消息文本；排版前会折叠连续空白。

        返回：
            LayoutResult，行坐标已换算到画面坐标系。

        异常：
            InvalidArgumentError: 画面过小，文字区域宽或高不足 1 像素。
        """
        key: _CacheKey = (width, height, text)
        if self._layout_cache is not None and self._layout_cache[0] == key:
            return self._layout_cache[1]

        box_width, box_height = padded_text_box(width, height)
        result = self._layout_engine.calc_layout(
            compact_whitespace(text),
            box_width,
            box_height,
            self.max_wrap,
        )

        # 文字区域坐标 -> 画面坐标
        offset_x, offset_y = center_offset(width, height, box_width, box_height)
        lines = []
        for line in result.lines:
            x, y = adjust_coords(line.x, line.y, offset_x, offset_y)
            lines.append(dataclasses.replace(line, x=x, y=y))
        result = dataclasses.replace(result, lines=tuple(lines))

        self._layout_cache = (key, result)
        return result

    def _raster_font(self, font_size: int) -> ImageFont.FreeTypeFont:
        if isinstance(self.measurer, PillowMeasurer):
            return self.measurer.get_font(font_size)
        # 非 Pillow 度量器：使用内置字体绘制，行宽可能与度量略有差异
        return ImageFont.load_default(size=max(1, int(font_size)))

    # -----------------------------
    # 输出
    # -----------------------------
    def render_frame(self, frame: Image.Image) -> Image.Image:
        """将当前消息合成到一帧画面上，返回新图像。

        - 未启动或消息为空字符串时，原样返回画面副本；消息仅含空白时仍绘制蒙版或白底（零行）；
        - 失败时记录日志并重新抛出，由调用方跳过该帧。
        """
        if not self._is_started or not self.text:
            return frame.convert("RGB").copy()
        try:
            width, height = frame.size
            layout = self.calc_text_layout(width, height, self.text)
            font = self._raster_font(layout.font_size)
            return compose_frame(frame, layout, self.mode, font)
        except Exception as exc:
            logger.error("[%s] 画面合成失败：%s", ERR_FRAME_RENDER_FAILED, exc)
            raise

    def export_pdf(
        self,
        frame: Union[Image.Image, Tuple[int, int]],
        output_pdf: Path,
    ) -> Path:
        """将当前消息画面导出为单页 PDF。

        参数：
            frame: 原画面（叠加模式下作为背景），或仅提供画面尺寸 (宽, 高)。
            output_pdf: 输出路径。

        返回：
            output_pdf。
        """
        if isinstance(frame, Image.Image):
            size = frame.size
            background: Optional[Image.Image] = frame
        else:
            size = (int(frame[0]), int(frame[1]))
            background = None

        layout: Optional[LayoutResult] = None
        if self._is_started and self.text:
            layout = self.calc_text_layout(size[0], size[1], self.text)

        if isinstance(self.measurer, ReportlabMeasurer):
            font_name = self.measurer.font_name
        else:
            font_name = STYLE_FONT_NAME_PDF
            logger.warning("当前度量器非 ReportLab，PDF 使用 %s 绘制，行宽可能与度量略有差异", font_name)

        try:
            return build_message_pdf(
                output_pdf,
                size,
                layout,
                mode=self.mode,
                font_name=font_name,
                background=background,
            )
        except Exception as exc:
            logger.error("[%s] PDF 导出失败：%s", ERR_FRAME_RENDER_FAILED, exc)
            raise


__all__ = ["MessageStreamer"]
