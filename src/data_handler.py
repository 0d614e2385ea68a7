"""
文件路径：src/data_handler.py

模块职责：
- 读写持久化设置（是否启用、消息模式），非法或缺失值回退默认并记录告警。
- 解析批量消息输入（JSON / CSV），并进行基础清洗（去除空消息）。

说明：
- 仅依赖标准库、`src/components` 与 `src/variables.py`，不直接依赖排版与渲染模块。

变量引用说明（来自 src/variables.py）：
- PATH_SETTINGS_JSON, CONST_ENCODING, CONST_MESSAGE_MODES, CONST_MESSAGE_MODE_DEFAULT,
  CONST_ENABLED_DEFAULT, ERR_CONFIG_LOAD_FAILED, ERR_DATA_INVALID
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .components import FileHandler, get_logger
from .variables import (
    PATH_SETTINGS_JSON,
    CONST_ENCODING,
    CONST_ENABLED_DEFAULT,
    CONST_MESSAGE_MODES,
    CONST_MESSAGE_MODE_DEFAULT,
    ERR_CONFIG_LOAD_FAILED,
    ERR_DATA_INVALID,
)


logger = get_logger(__name__)


@dataclass
class StreamerSettings:
    """持久化设置。

    属性：
        enabled: 是否启用消息叠加。
        message_mode: 消息模式，取值见 CONST_MESSAGE_MODES。
    """

    enabled: bool = CONST_ENABLED_DEFAULT
    message_mode: str = CONST_MESSAGE_MODE_DEFAULT


def _json_loads_strip_bom(content: str):
    """解析 JSON 字符串，自动去除 UTF-8 BOM。"""
    if content.startswith("\ufeff"):
        content = content.lstrip("\ufeff")
    return json.loads(content)


def message_mode_values() -> List[str]:
    """返回全部合法的消息模式存储值。"""
    return [value for _, value in CONST_MESSAGE_MODES]


def validate_message_mode(mode: str) -> str:
    """校验消息模式，非法时抛出 ValueError。"""
    if mode not in message_mode_values():
        raise ValueError(f"[{ERR_DATA_INVALID}] 非法的消息模式：{mode!r}")
    return mode


def _parse_enabled(raw) -> bool:
    # 仅布尔 false 或字符串 "false"（区分大小写）视为关闭，其余（含缺失）均视为开启
    return not (raw is False or raw == "false")


def load_settings(settings_path: Optional[Path] = None) -> StreamerSettings:
    """加载设置 JSON。

    参数：
        settings_path: 设置文件路径；默认读取 `config/settings.json`。

    返回：
        StreamerSettings；文件不存在时返回默认值，消息模式非法时回退为默认模式。

    异常：
        RuntimeError: 文件存在但无法解析。
    """
    path = settings_path or PATH_SETTINGS_JSON
    if not path.exists():
        logger.warning("找不到设置文件，将使用默认设置：%s", path)
        return StreamerSettings()
    try:
        content = path.read_text(encoding=CONST_ENCODING)
        data = _json_loads_strip_bom(content)
    except (OSError, ValueError) as exc:
        raise RuntimeError(f"[{ERR_CONFIG_LOAD_FAILED}] 设置加载失败: {exc}") from exc
    if not isinstance(data, dict):
        raise RuntimeError(f"[{ERR_CONFIG_LOAD_FAILED}] 设置文件需为对象结构：{path}")

    mode = data.get("message_mode", CONST_MESSAGE_MODE_DEFAULT)
    if mode not in message_mode_values():
        logger.warning("设置中的消息模式非法：%r，回退为 %s", mode, CONST_MESSAGE_MODE_DEFAULT)
        mode = CONST_MESSAGE_MODE_DEFAULT
    return StreamerSettings(enabled=_parse_enabled(data.get("enabled", CONST_ENABLED_DEFAULT)), message_mode=mode)


def save_settings(settings: StreamerSettings, settings_path: Optional[Path] = None) -> Path:
    """保存设置 JSON，返回写入路径。"""
    validate_message_mode(settings.message_mode)
    path = settings_path or PATH_SETTINGS_JSON
    FileHandler.ensure_parent_writable(path)
    path.write_text(json.dumps(asdict(settings), ensure_ascii=False, indent=2), encoding=CONST_ENCODING)
    return path


def sanitize_messages(raw: Iterable[Optional[str]]) -> List[str]:
    """过滤空消息（None、空字符串、仅空白），返回去除首尾空白后的列表。"""
    cleaned: List[str] = []
    for v in raw:
        if v is None:
            continue
        vs = str(v).strip()
        if vs == "":
            continue
        cleaned.append(vs)
    return cleaned


def load_messages_json(path: Path) -> List[str]:
    """从 JSON 文件加载批量消息。

    支持两种结构：
    - 数组：["第一条", "第二条"]
    - 对象：{"messages": [ ... ]}
    """
    content = path.read_text(encoding=CONST_ENCODING)
    data = _json_loads_strip_bom(content)
    if isinstance(data, dict) and isinstance(data.get("messages"), list):
        items = data["messages"]
    elif isinstance(data, list):
        items = data
    else:
        raise RuntimeError(f"[{ERR_CONFIG_LOAD_FAILED}] 批量 JSON 结构需为数组或包含 messages 数组的对象")
    return sanitize_messages(None if item is None else str(item) for item in items if not isinstance(item, (dict, list)))


def load_messages_csv(path: Path, column: str = "message") -> List[str]:
    """从 CSV 文件加载批量消息（首行为表头，读取 column 列）。"""
    import csv

    with path.open("r", encoding=CONST_ENCODING, newline="") as f:  # noqa: P103
        reader = csv.DictReader(f)
        if reader.fieldnames is None or column not in reader.fieldnames:
            raise RuntimeError(f"[{ERR_CONFIG_LOAD_FAILED}] CSV 缺少列：{column}")
        return sanitize_messages(row.get(column) for row in reader)


__all__ = [
    "StreamerSettings",
    "message_mode_values",
    "validate_message_mode",
    "load_settings",
    "save_settings",
    "sanitize_messages",
    "load_messages_json",
    "load_messages_csv",
]
