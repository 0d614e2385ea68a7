"""
文件路径：src/processors/engines/__init__.py

说明：消息画面的两种输出引擎：`raster.py`（Pillow 位图）与 `reportlab.py`（PDF）。
"""

from .raster import compose_frame, save_image
from .reportlab import build_message_pdf

__all__ = ["compose_frame", "save_image", "build_message_pdf"]
