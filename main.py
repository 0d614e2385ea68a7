"""
文件路径：main.py

命令行入口：
- 功能：把一条（或一批）消息按自适应字号排版后合成到画面上，输出 PNG 或 PDF 到 output 目录。
- 依赖：`src/message_streamer.py`、`src/data_handler.py`、`src/components`、`src/variables.py`。

快速使用示例：
    # 1) 在空白画面上生成消息（默认 1280x720，叠加模式）
    python main.py --text "会议中，请稍候"

    # 2) 叠加到已有截图上，并指定输出路径
    python main.py --input frame.png --text "Be right back" --output output/brb.png

    # 3) 纯文字模式导出 PDF
    python main.py --text "Be right back" --mode text --engine reportlab

    # 4) 批量：每条消息输出一个文件
    python main.py --batch-json messages.json --input frame.png

运行说明：
- 消息模式与启用状态持久化在 config/settings.json；--mode 会同时更新该设置。
- 设置中 enabled=false 时，画面原样输出。

变量引用说明（来自 src/variables.py）：
- CONST_FRAME_SIZE_DEFAULT, CONST_FRAME_BG_RGB, CONST_DEFAULT_OUTPUT_SUFFIX, CONST_PDF_OUTPUT_SUFFIX,
  CONST_INDEX_PAD_WIDTH_DEFAULT, CONST_MESSAGE_MODES, CONST_ENGINE_RASTER, CONST_ENGINE_REPORTLAB
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PIL import Image

from src.components import FileHandler, get_logger
from src.data_handler import load_messages_csv, load_messages_json, message_mode_values, sanitize_messages
from src.message_streamer import MessageStreamer
from src.processors.engines.raster import save_image
from src.variables import (
    CONST_DEFAULT_OUTPUT_SUFFIX,
    CONST_ENGINE_RASTER,
    CONST_ENGINE_REPORTLAB,
    CONST_FRAME_BG_RGB,
    CONST_FRAME_SIZE_DEFAULT,
    CONST_INDEX_PAD_WIDTH_DEFAULT,
    CONST_PDF_OUTPUT_SUFFIX,
)


logger = get_logger(__name__)


def _parse_size(value: str) -> Tuple[int, int]:
    """解析 "宽x高" 形式的画面尺寸。"""
    try:
        w_s, h_s = value.lower().split("x", 1)
        w, h = int(w_s), int(h_s)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"画面尺寸需为 宽x高，例如 1280x720：{value}") from exc
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"画面尺寸必须为正数：{value}")
    return w, h


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    default_size = f"{CONST_FRAME_SIZE_DEFAULT[0]}x{CONST_FRAME_SIZE_DEFAULT[1]}"
    parser = argparse.ArgumentParser(description="消息画面工具（自适应字号排版 + 画面合成）")
    parser.add_argument("--text", type=str, default=None, help="消息文本")
    parser.add_argument("--input", type=Path, default=None, help="输入画面（图像文件）；省略时生成空白画面")
    parser.add_argument("--size", type=_parse_size, default=_parse_size(default_size), help=f"空白画面尺寸，默认 {default_size}")
    parser.add_argument("--output", type=Path, default=None, help="输出路径（可省略，自动生成）")
    parser.add_argument("--output-prefix", dest="output_prefix", type=str, default=None, help="输出文件名前缀（覆盖输入文件名 stem）")
    parser.add_argument("--mode", type=str, choices=message_mode_values(), default=None, help="消息模式：overlay/text（同时写入设置）")
    parser.add_argument("--engine", type=str, choices=[CONST_ENGINE_RASTER, CONST_ENGINE_REPORTLAB], default=CONST_ENGINE_RASTER, help="输出引擎：raster(PNG)/reportlab(PDF)")
    parser.add_argument("--font-file", dest="font_file", type=Path, default=None, help="字体文件（TTF/OTF）；省略时自动探测")
    parser.add_argument("--settings", type=Path, default=None, help="设置文件路径（默认 config/settings.json）")
    parser.add_argument("--batch-json", dest="batch_json", type=Path, default=None, help="批量 JSON：字符串数组或包含 messages 数组的对象")
    parser.add_argument("--batch-csv", dest="batch_csv", type=Path, default=None, help="批量 CSV：读取 message 列")
    parser.add_argument("--batch-output-dir", dest="batch_output_dir", type=Path, default=None, help="批量输出目录（默认 output/）")
    parser.add_argument("--index-width", dest="index_width", type=int, default=None, help="批量输出序号零填充宽度，默认使用全局配置")
    return parser.parse_args(argv)


def _load_frame(args: argparse.Namespace) -> Image.Image:
    if args.input is not None:
        FileHandler.validate_readable_file(args.input)
        with Image.open(args.input) as img:
            return img.convert("RGB")
    return Image.new("RGB", args.size, CONST_FRAME_BG_RGB)


def _render_one(streamer: MessageStreamer, frame: Image.Image, text: str, output_path: Path) -> Path:
    streamer.text = text
    if streamer.engine == CONST_ENGINE_REPORTLAB:
        return streamer.export_pdf(frame, output_path)
    return save_image(streamer.render_frame(frame), output_path)


def main(argv: Optional[Sequence[str]] = None) -> List[Path]:
    args = parse_args(argv)
    FileHandler.ensure_project_dirs()

    streamer = MessageStreamer(settings_path=args.settings, engine=args.engine, font_file=args.font_file)
    if args.mode is not None:
        streamer.mode = args.mode
    if streamer.enabled:
        streamer.start()
    else:
        logger.warning("设置中已关闭消息叠加，画面将原样输出")

    frame = _load_frame(args)
    suffix = CONST_PDF_OUTPUT_SUFFIX if args.engine == CONST_ENGINE_REPORTLAB else CONST_DEFAULT_OUTPUT_SUFFIX

    # 批量模式优先
    if args.batch_json or args.batch_csv:
        if args.output is not None:
            logger.warning("批量模式下将忽略 --output，改用按序号自动生成多个输出文件")
        messages: List[str] = []
        if args.batch_json:
            messages.extend(load_messages_json(args.batch_json))
        if args.batch_csv:
            messages.extend(load_messages_csv(args.batch_csv))
        if not messages:
            raise SystemExit("未从批量数据中解析到任何消息")

        pad = args.index_width if args.index_width is not None else CONST_INDEX_PAD_WIDTH_DEFAULT
        outputs: List[Path] = []
        for i, message in enumerate(messages, start=1):
            out = FileHandler.indexed_output_path(
                args.input,
                i,
                suffix=suffix,
                pad=pad,
                prefix=args.output_prefix,
                output_dir=args.batch_output_dir,
            )
            outputs.append(_render_one(streamer, frame, message, out))
        logger.info("批量输出完成：%s 个文件", len(outputs))
        return outputs

    texts = sanitize_messages([args.text])
    if not texts:
        logger.warning("未提供消息文本，画面将原样输出")
    output_path = args.output or FileHandler.timestamped_output_path(args.input, suffix=suffix, prefix=args.output_prefix)
    out = _render_one(streamer, frame, texts[0] if texts else "", output_path)
    print(f"输出完成：{out}")
    return [out]


if __name__ == "__main__":
    main()
