from __future__ import annotations

"""
pytest 全局配置：将项目根目录加入 sys.path，确保 `from src...` 可被导入；
并提供排版测试用的确定性度量器。
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)


class FixedWidthMeasurer:
    """每个字符固定宽度（与字号无关），记录度量调用次数。"""

    def __init__(self, char_width: float = 10.0) -> None:
        self.char_width = char_width
        self.calls = 0

    def measure(self, font_size: int, text: str) -> float:
        self.calls += 1
        return self.char_width * len(text)

    def font_descriptor(self, font_size: int) -> str:
        return f"{font_size}px test"


class ScaledMeasurer(FixedWidthMeasurer):
    """每个字符宽度 = 字号 * ratio。"""

    def __init__(self, ratio: float = 1.0) -> None:
        super().__init__()
        self.ratio = ratio

    def measure(self, font_size: int, text: str) -> float:
        self.calls += 1
        return font_size * self.ratio * len(text)


@pytest.fixture
def fixed_measurer() -> FixedWidthMeasurer:
    return FixedWidthMeasurer(10.0)


@pytest.fixture
def scaled_measurer() -> ScaledMeasurer:
    return ScaledMeasurer(1.0)


@pytest.fixture
def settings_path(tmp_path) -> Path:
    # 每个用例使用独立设置文件，避免写入仓库 config/
    return tmp_path / "settings.json"
