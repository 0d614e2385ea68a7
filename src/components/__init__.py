"""
文件路径：src/components/__init__.py

说明：
- 通用组件包入口：日志、文件与输出路径、重试机制，以及拆分出的子模块的聚合导出；
- 子模块：`errors.py`（错误格式与异常）、`coords.py`（坐标）、`text.py`（文本）、`fonts.py`（字体探测与度量）；
- 业务模块与测试统一使用 `from src.components import ...` 导入。
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Iterable, Optional, Type

from ..variables import (
    PATH_LOGS_DIR,
    PATH_OUTPUT_DIR,
    PATH_LOG_FILE,
    CONST_DEFAULT_OUTPUT_SUFFIX,
    CONST_OUTPUT_PREFIX_DEFAULT,
    CONST_INDEX_PAD_WIDTH_DEFAULT,
    CONST_LOG_FORMAT,
    CONST_LOG_DATEFMT,
    CONST_MAX_RETRY,
    ERR_PATH_NOT_WRITABLE,
    ERR_FILE_NOT_FOUND,
)

# 聚合导出：拆分后的子模块
from .errors import ErrorHandler, InvalidArgumentError, MeasurementUnavailableError
from .coords import adjust_coords, center_offset, padded_text_box
from .text import compact_whitespace, estimate_text_width
from .fonts import (
    Measurer,
    PillowMeasurer,
    RatioMeasurer,
    ReportlabMeasurer,
    pick_preferred_font,
    probe_available_fonts,
)


# =============================
# 日志工具
# =============================
_LOGGER_CONFIGURED: bool = False


def get_logger(name: str) -> logging.Logger:
    """获取 logger，首次调用时配置文件与控制台双输出。

    参数：
        name: 日志记录器名称（一般使用 __name__）。

    返回：
        logging.Logger 对象。
    """
    global _LOGGER_CONFIGURED
    if not _LOGGER_CONFIGURED:
        # 确保日志目录存在
        PATH_LOGS_DIR.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(PATH_LOG_FILE, encoding="utf-8")
        console_handler = logging.StreamHandler()
        logging.basicConfig(
            level=logging.INFO,
            format=CONST_LOG_FORMAT,
            datefmt=CONST_LOG_DATEFMT,
            handlers=[file_handler, console_handler],
        )
        _LOGGER_CONFIGURED = True
    return logging.getLogger(name)


# =============================
# 文件操作
# =============================
class FileHandler:
    """文件与路径相关的通用处理器。"""

    @staticmethod
    def ensure_project_dirs() -> None:
        """确保项目运行所需目录存在：logs/output。"""
        for d in (PATH_LOGS_DIR, PATH_OUTPUT_DIR):
            d.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def validate_readable_file(path: Path) -> None:
        """校验文件可读。

        参数：
            path: 文件路径。
        异常：
            FileNotFoundError: 文件不存在或不可读。
        """
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"[{ERR_FILE_NOT_FOUND}] 文件不存在或不可读: {path}")

    @staticmethod
    def ensure_parent_writable(target: Path) -> None:
        """确保目标文件的父目录可写，不存在则创建。

        参数：
            target: 目标文件路径。
        异常：
            PermissionError: 目录不可写。
        """
        parent = target.parent
        parent.mkdir(parents=True, exist_ok=True)
        # Windows 上 os.access 可能不可靠，尝试创建临时文件验证
        probe = parent / f".__writable_probe_{int(time.time()*1000)}"
        try:
            with open(probe, "w", encoding="utf-8") as f:  # noqa: P103
                f.write("probe")
        except OSError as exc:
            raise PermissionError(f"[{ERR_PATH_NOT_WRITABLE}] 目录不可写: {parent}") from exc
        else:
            probe.unlink(missing_ok=True)

    @staticmethod
    def timestamped_output_path(
        source: Optional[Path],
        suffix: str = CONST_DEFAULT_OUTPUT_SUFFIX,
        prefix: Optional[str] = None,
    ) -> Path:
        """生成带时间戳的输出路径，位于 output 目录。

        参数：
            source: 源图像路径；若为 None，则使用默认前缀。
            suffix: 输出文件名后缀（默认 "_message.png"）。
            prefix: 自定义文件名前缀；若提供则覆盖 source 的 stem。

        返回：
            输出路径，例如 output/frame_20240101_120000_message.png
        """
        FileHandler.ensure_project_dirs()
        ts = time.strftime("%Y%m%d_%H%M%S")
        use_prefix = (prefix if prefix is not None else CONST_OUTPUT_PREFIX_DEFAULT).strip()
        if use_prefix:
            stem = use_prefix
        else:
            stem = source.stem if source is not None else "output"
        return PATH_OUTPUT_DIR / f"{stem}_{ts}{suffix}"

    @staticmethod
    def indexed_output_path(
        source: Optional[Path],
        index: int,
        suffix: str = CONST_DEFAULT_OUTPUT_SUFFIX,
        pad: int = CONST_INDEX_PAD_WIDTH_DEFAULT,
        prefix: Optional[str] = None,
        output_dir: Optional[Path] = None,
    ) -> Path:
        """生成带时间戳与序号的输出路径，便于批量输出。

        参数：
            source: 源图像路径；None 则使用默认前缀。
            index: 序号（从 1 开始更友好）。
            suffix: 输出文件名后缀（默认 "_message.png"）。
            pad: 序号左侧零填充位数，默认使用全局配置。
            prefix: 自定义文件名前缀；若提供则覆盖 source 的 stem。
            output_dir: 自定义输出目录；None 则使用默认 PATH_OUTPUT_DIR。

        返回：
            输出路径，例如 output/frame_20240101_120000_001_message.png

        示例：
            >>> FileHandler.indexed_output_path(Path("frame.png"), 1, prefix="msg", pad=2)
            Path("output/msg_20240101_120000_01_message.png")
        """
        target_dir = output_dir if output_dir is not None else PATH_OUTPUT_DIR
        target_dir.mkdir(parents=True, exist_ok=True)

        ts = time.strftime("%Y%m%d_%H%M%S")
        use_prefix = (prefix if prefix is not None else CONST_OUTPUT_PREFIX_DEFAULT).strip()
        if use_prefix:
            stem = use_prefix
        else:
            stem = source.stem if source is not None else "output"
        idx = str(max(0, int(index))).zfill(int(pad))
        return target_dir / f"{stem}_{ts}_{idx}{suffix}"


# =============================
# 重试机制
# =============================
def retry_on_exception(
    retries: int = CONST_MAX_RETRY,
    exceptions: Iterable[Type[BaseException]] = (Exception,),
    delay_s: float = 0.2,
    backoff: float = 2.0,
) -> Callable[[Callable[..., object]], Callable[..., object]]:
    """装饰器：异常自动重试，含指数退避。

    参数：
        retries: 重试次数（不含首次）。
        exceptions: 触发重试的异常类型集合。
        delay_s: 初始等待秒数。
        backoff: 每次重试的等待倍数。

    返回：
        包装后的可调用对象。
    """
    exc_types = tuple(exceptions)

    def decorator(func: Callable[..., object]) -> Callable[..., object]:
        def wrapper(*args, **kwargs):
            wait = delay_s
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except exc_types as exc:
                    if attempt >= retries:
                        raise
                    logger = get_logger(func.__module__)
                    logger.warning("操作失败，准备重试（第 %s 次）：%s", attempt + 1, exc)
                    time.sleep(wait)
                    wait *= backoff
                    attempt += 1

        return wrapper

    return decorator


# =============================
# 导出声明
# =============================
__all__ = [
    # 日志工具
    "get_logger",
    # 文件操作
    "FileHandler",
    # 重试与错误处理
    "retry_on_exception",
    "ErrorHandler",
    "InvalidArgumentError",
    "MeasurementUnavailableError",
    # 坐标处理
    "adjust_coords",
    "padded_text_box",
    "center_offset",
    # 文本
    "estimate_text_width",
    "compact_whitespace",
    # 字体探测与度量
    "Measurer",
    "PillowMeasurer",
    "ReportlabMeasurer",
    "RatioMeasurer",
    "probe_available_fonts",
    "pick_preferred_font",
]
