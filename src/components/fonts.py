"""
文件路径：src/components/fonts.py

说明：字体探测与文字度量。

- 度量器（Measurer）是排版引擎唯一依赖的外部能力：
  给定字号与字符串，返回该字符串以固定字体族渲染后的像素宽度。
- 约定（不做运行时校验）：同一字号下，字符串追加字符不会使宽度变小；
  同一字符串下，字号变大不会使宽度变小。换行与二分搜索的正确性依赖该约定。
- 每个度量器实例内部缓存按字号创建的字体对象，非线程安全；
  并发排版时请为每个工作线程创建独立实例。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from PIL import Image, ImageDraw, ImageFont
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from ..variables import (
    CONST_CANDIDATE_SANS_FONT_PATHS,
    PATH_CONFIG_DIR,
    PATH_FONT_FILE,
    STYLE_CHAR_WIDTH_RATIO,
    STYLE_FONT_FAMILY,
    STYLE_FONT_NAME_PDF,
)
from .errors import MeasurementUnavailableError
from .text import estimate_text_width


# get_logger 定义在包入口，而包入口导入本模块，此处直接取标准 logger 以避免循环导入
logger = logging.getLogger(__name__)


class Measurer(Protocol):
    """度量能力接口。"""

    def measure(self, font_size: int, text: str) -> float:
        ...

    def font_descriptor(self, font_size: int) -> str:
        ...


# =============================
# 字体探测
# =============================
def probe_available_fonts() -> List[Path]:
    """探测可用的无衬线字体文件（TTF/OTF），按优先级返回去重列表。

    优先级：
    1) 显式指定的 `PATH_FONT_FILE`（若是 .ttf/.otf 且存在）
    2) `config/fonts/` 目录下的 .ttf/.otf 文件（按文件名排序）
    3) `CONST_CANDIDATE_SANS_FONT_PATHS` 列表中存在的 .ttf/.otf 文件

    返回：
        `Path` 列表，按优先级与发现顺序排列，已去重。
    """
    seen: set[str] = set()
    results: List[Path] = []

    def _add(p: Path) -> None:
        key = str(p.resolve())
        if key not in seen and p.exists() and p.suffix.lower() in {".ttf", ".otf"}:
            seen.add(key)
            results.append(p)

    # 1) 显式指定
    if PATH_FONT_FILE:
        _add(Path(PATH_FONT_FILE))

    # 2) config/fonts 目录
    fonts_dir = PATH_CONFIG_DIR / "fonts"
    if fonts_dir.exists():
        for p in sorted(list(fonts_dir.glob("*.ttf")) + list(fonts_dir.glob("*.otf"))):
            _add(p)

    # 3) 预置候选
    for s in CONST_CANDIDATE_SANS_FONT_PATHS:
        _add(Path(s))

    return results


def pick_preferred_font() -> Optional[Path]:
    """选择首个可用的字体文件，若无可用则返回 None。"""
    fonts = probe_available_fonts()
    return fonts[0] if fonts else None


# =============================
# 度量器实现
# =============================
class PillowMeasurer:
    """基于 Pillow 的度量器，宽度取自 `ImageDraw.textlength`。

    参数：
        font_file: 字体文件路径；None 时自动探测，探测不到则使用 Pillow 内置字体。
        family: 字体描述串中的族名。

    异常：
        MeasurementUnavailableError: 字体文件不存在/无法加载，或 FreeType 不可用。
    """

    def __init__(self, font_file: Optional[Path] = None, family: str = STYLE_FONT_FAMILY) -> None:
        if font_file is not None and not Path(font_file).exists():
            raise MeasurementUnavailableError(f"字体文件不存在：{font_file}")
        self.font_file: Optional[Path] = Path(font_file) if font_file is not None else pick_preferred_font()
        if self.font_file is None:
            logger.warning("未探测到可用的无衬线字体文件，改用 Pillow 内置字体")
        self.family = family
        self._fonts: Dict[int, ImageFont.FreeTypeFont] = {}
        self._draw = ImageDraw.Draw(Image.new("L", (1, 1), color=0))
        # 构造时加载一次，尽早暴露字体问题
        try:
            self.get_font(1)
        except (OSError, ImportError, TypeError, ValueError) as exc:
            raise MeasurementUnavailableError(f"无法加载字体：{self.font_file or 'Pillow 内置字体'}，原因：{exc}") from exc
        logger.debug("Pillow 度量器就绪：font_file=%s", self.font_file)

    def get_font(self, font_size: int) -> ImageFont.FreeTypeFont:
        """返回指定字号的字体对象（按字号缓存）。"""
        size = max(1, int(font_size))
        font = self._fonts.get(size)
        if font is None:
            if self.font_file is not None:
                font = ImageFont.truetype(str(self.font_file), size)
            else:
                font = ImageFont.load_default(size=size)
            self._fonts[size] = font
        return font

    def measure(self, font_size: int, text: str) -> float:
        if not text:
            return 0.0
        return float(self._draw.textlength(text, font=self.get_font(font_size)))

    def font_descriptor(self, font_size: int) -> str:
        return f"{int(font_size)}px {self.family}"


class ReportlabMeasurer:
    """基于 ReportLab 字体度量（pdfmetrics.stringWidth）的度量器。

    默认使用内置 Helvetica（无需字体文件）；提供 font_file 时以 font_name 注册该 TTF。
    与 ReportLab 导出路径搭配使用，保证度量与绘制一致。
    """

    def __init__(self, font_name: str = STYLE_FONT_NAME_PDF, font_file: Optional[Path] = None) -> None:
        if font_file is not None:
            try:
                pdfmetrics.registerFont(TTFont(font_name, str(font_file)))
                logger.info("已注册字体：%s -> %s", font_name, font_file)
            except Exception as exc:  # noqa: BLE001
                raise MeasurementUnavailableError(f"注册字体失败：{font_name} -> {font_file}，原因：{exc}") from exc
        try:
            pdfmetrics.getFont(font_name)
        except KeyError as exc:
            raise MeasurementUnavailableError(f"ReportLab 未注册字体：{font_name}") from exc
        self.font_name = font_name

    def measure(self, font_size: int, text: str) -> float:
        if not text:
            return 0.0
        return float(pdfmetrics.stringWidth(text, self.font_name, font_size))

    def font_descriptor(self, font_size: int) -> str:
        return f"{int(font_size)}px {self.font_name}"


class RatioMeasurer:
    """不依赖字体文件的估算度量器：非 ASCII 按 1em，ASCII 按 char_width_ratio em。"""

    def __init__(self, char_width_ratio: float = STYLE_CHAR_WIDTH_RATIO, family: str = STYLE_FONT_FAMILY) -> None:
        self.char_width_ratio = char_width_ratio
        self.family = family

    def measure(self, font_size: int, text: str) -> float:
        return estimate_text_width(text, font_size, char_width_ratio=self.char_width_ratio)

    def font_descriptor(self, font_size: int) -> str:
        return f"{int(font_size)}px {self.family}"


__all__ = [
    "Measurer",
    "probe_available_fonts",
    "pick_preferred_font",
    "PillowMeasurer",
    "ReportlabMeasurer",
    "RatioMeasurer",
]
