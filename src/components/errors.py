"""
文件路径：src/components/errors.py

说明：统一错误信息格式与排版引擎的异常类型，从包入口拆分而来。
"""

from __future__ import annotations

from ..variables import ERR_INVALID_ARGUMENT, ERR_MEASUREMENT_UNAVAILABLE


class ErrorHandler:
    """错误处理相关工具。"""

    @staticmethod
    def format_error(err_code: int, message: str) -> str:
        """生成统一错误信息字符串。"""
        return f"[{err_code}] {message}"


class InvalidArgumentError(ValueError):
    """排版参数非法：宽/高非正、最大行数 <= 0 等。"""

    err_code: int = ERR_INVALID_ARGUMENT

    def __init__(self, message: str) -> None:
        super().__init__(ErrorHandler.format_error(self.err_code, message))


class MeasurementUnavailableError(RuntimeError):
    """无法构建文字度量能力（字体文件缺失、字体未注册、FreeType 不可用等）。

    仅在度量器构造时抛出；构造成功后的单次度量不会再因此失败。
    """

    err_code: int = ERR_MEASUREMENT_UNAVAILABLE

    def __init__(self, message: str) -> None:
        super().__init__(ErrorHandler.format_error(self.err_code, message))


__all__ = [
    "ErrorHandler",
    "InvalidArgumentError",
    "MeasurementUnavailableError",
]
