"""
文件路径：src/variables.py

模块职责：
- 统一管理全局跨模块变量，确保模块化、无冲突、可追溯，可复用。
- 变量命名规范：{分类前缀}_{描述性名称}（全大写+下划线）。
  - PATH_：路径相关
  - STYLE_：样式相关
  - CONST_：通用常量
  - ERR_：错误码

使用说明：
- 业务模块严禁定义新的全局变量，必须从本模块导入所需常量。
- 目录路径均使用 pathlib.Path 对象表示，使用时如需字符串请显式 str() 转换。
"""

from pathlib import Path
from typing import Optional, Tuple


# =============================
# 路径（PATH_）
# =============================
# 项目根目录：定位到当前文件（variables.py）的上两级目录
PATH_ROOT: Path = Path(__file__).resolve().parents[1]

# 各功能目录
PATH_CONFIG_DIR: Path = PATH_ROOT / "config"
PATH_OUTPUT_DIR: Path = PATH_ROOT / "output"
PATH_LOGS_DIR: Path = PATH_ROOT / "logs"

# 关键文件路径
PATH_SETTINGS_JSON: Path = PATH_CONFIG_DIR / "settings.json"  # 开关与消息模式的持久化设置
PATH_LOG_FILE: Path = PATH_LOGS_DIR / "app.log"  # 应用运行日志

# 字体文件（可选；存在时优先于系统候选字体）
PATH_FONT_FILE: Optional[Path] = PATH_CONFIG_DIR / "fonts" / "sans.ttf"


# =============================
# 样式（STYLE_）
# =============================
STYLE_FONT_FAMILY: str = "sans-serif"  # 字体描述串中的族名（Pillow 度量）
STYLE_FONT_NAME_PDF: str = "Helvetica"  # ReportLab 内置无衬线字体，无需注册
STYLE_BASELINE_RATIO: float = 0.88  # 行顶到字母基线的比例（占行高）
STYLE_ELLIPSIS: str = "…"  # 截断时追加到最后一行的省略号
STYLE_CHAR_WIDTH_RATIO: float = 0.6  # 估算度量中 ASCII 字符宽度 / 字号

# 叠加模式：原画面 + 半透明黑色蒙版 + 白字
STYLE_OVERLAY_DIM_RGBA: Tuple[int, int, int, int] = (0, 0, 0, 128)
STYLE_OVERLAY_TEXT_RGB: Tuple[int, int, int] = (255, 255, 255)
# 纯文字模式：白底 + 灰字
STYLE_TEXT_ONLY_BG_RGB: Tuple[int, int, int] = (255, 255, 255)
STYLE_TEXT_ONLY_TEXT_RGB: Tuple[int, int, int] = (0x99, 0x99, 0x99)


# =============================
# 常量（CONST_）
# =============================
CONST_ENCODING: str = "utf-8"  # 文件读写默认编码
CONST_MAX_RETRY: int = 2  # 通用重试次数，用于输出文件写入
CONST_DEFAULT_OUTPUT_SUFFIX: str = "_message.png"  # 光栅输出文件名后缀
CONST_PDF_OUTPUT_SUFFIX: str = "_message.pdf"  # ReportLab 输出文件名后缀
# 输出命名增强：默认前缀与序号宽度（批量输出时使用）
CONST_OUTPUT_PREFIX_DEFAULT: str = ""  # 默认不强制覆盖，留空表示使用输入文件名 stem
CONST_INDEX_PAD_WIDTH_DEFAULT: int = 3  # 批量输出时的序号零填充位数

# 文字区域：相对画面尺寸的留白比例
CONST_BOX_WIDTH_RATIO: float = 0.8  # 宽度不超过画面宽的 80%
CONST_BOX_HEIGHT_RATIO: float = 0.8  # 高度为画面高的 80%
CONST_BOX_ASPECT_HEIGHT_RATIO: float = 0.9  # 宽度同时不超过 画面高 * 0.9 * 4/3
CONST_BOX_ASPECT: float = 4 / 3
CONST_MAX_WRAP_DEFAULT: int = 3  # 每帧最多显示的行数

# 无输入图像时生成的空白画面尺寸（宽, 高）
CONST_FRAME_SIZE_DEFAULT: Tuple[int, int] = (1280, 720)
CONST_FRAME_BG_RGB: Tuple[int, int, int] = (0, 0, 0)

# 消息模式（显示名 -> 存储值）
CONST_MESSAGE_MODE_OVERLAY: str = "overlay"
CONST_MESSAGE_MODE_TEXT: str = "text"
CONST_MESSAGE_MODES: Tuple[Tuple[str, str], ...] = (
    ("Overlay", CONST_MESSAGE_MODE_OVERLAY),
    ("Text Only", CONST_MESSAGE_MODE_TEXT),
)
CONST_MESSAGE_MODE_DEFAULT: str = CONST_MESSAGE_MODE_OVERLAY
CONST_ENABLED_DEFAULT: bool = True

# 渲染引擎
CONST_ENGINE_RASTER: str = "raster"
CONST_ENGINE_REPORTLAB: str = "reportlab"

# 常见无衬线字体候选路径（用于自动探测，按顺序优先）
CONST_CANDIDATE_SANS_FONT_PATHS: Tuple[str, ...] = (
    # Linux 常见字体
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    # Windows 常见字体
    "C:/Windows/Fonts/arial.ttf",
    "C:/Windows/Fonts/segoeui.ttf",
    # macOS 常见字体
    "/Library/Fonts/Arial.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
)

# 日志格式（供 logging.basicConfig 使用）
CONST_LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONST_LOG_DATEFMT: str = "%Y-%m-%d %H:%M:%S"


# =============================
# 错误码（ERR_）
# =============================
# 1xxx：文件/路径相关
ERR_FILE_NOT_FOUND: int = 1001  # 输入文件不存在
ERR_PATH_NOT_WRITABLE: int = 1003  # 目标路径不可写

# 2xxx：排版/度量相关
ERR_INVALID_ARGUMENT: int = 2001  # 宽高或最大行数非法
ERR_MEASUREMENT_UNAVAILABLE: int = 2002  # 无法构建文字度量（字体缺失等）

# 3xxx：渲染/写入相关
ERR_FRAME_RENDER_FAILED: int = 3001  # 画面合成失败

# 4xxx：配置/数据相关
ERR_CONFIG_LOAD_FAILED: int = 4001  # 配置加载失败
ERR_DATA_INVALID: int = 4002  # 输入数据非法


# =============================
# 导出声明
# =============================
__all__ = [
    # PATH_
    "PATH_ROOT",
    "PATH_CONFIG_DIR",
    "PATH_OUTPUT_DIR",
    "PATH_LOGS_DIR",
    "PATH_SETTINGS_JSON",
    "PATH_LOG_FILE",
    "PATH_FONT_FILE",
    # STYLE_
    "STYLE_FONT_FAMILY",
    "STYLE_FONT_NAME_PDF",
    "STYLE_BASELINE_RATIO",
    "STYLE_ELLIPSIS",
    "STYLE_CHAR_WIDTH_RATIO",
    "STYLE_OVERLAY_DIM_RGBA",
    "STYLE_OVERLAY_TEXT_RGB",
    "STYLE_TEXT_ONLY_BG_RGB",
    "STYLE_TEXT_ONLY_TEXT_RGB",
    # CONST_
    "CONST_ENCODING",
    "CONST_MAX_RETRY",
    "CONST_DEFAULT_OUTPUT_SUFFIX",
    "CONST_PDF_OUTPUT_SUFFIX",
    "CONST_OUTPUT_PREFIX_DEFAULT",
    "CONST_INDEX_PAD_WIDTH_DEFAULT",
    "CONST_BOX_WIDTH_RATIO",
    "CONST_BOX_HEIGHT_RATIO",
    "CONST_BOX_ASPECT_HEIGHT_RATIO",
    "CONST_BOX_ASPECT",
    "CONST_MAX_WRAP_DEFAULT",
    "CONST_FRAME_SIZE_DEFAULT",
    "CONST_FRAME_BG_RGB",
    "CONST_MESSAGE_MODE_OVERLAY",
    "CONST_MESSAGE_MODE_TEXT",
    "CONST_MESSAGE_MODES",
    "CONST_MESSAGE_MODE_DEFAULT",
    "CONST_ENABLED_DEFAULT",
    "CONST_ENGINE_RASTER",
    "CONST_ENGINE_REPORTLAB",
    "CONST_CANDIDATE_SANS_FONT_PATHS",
    "CONST_LOG_FORMAT",
    "CONST_LOG_DATEFMT",
    # ERR_
    "ERR_FILE_NOT_FOUND",
    "ERR_PATH_NOT_WRITABLE",
    "ERR_INVALID_ARGUMENT",
    "ERR_MEASUREMENT_UNAVAILABLE",
    "ERR_FRAME_RENDER_FAILED",
    "ERR_CONFIG_LOAD_FAILED",
    "ERR_DATA_INVALID",
]
