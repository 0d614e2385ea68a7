from __future__ import annotations

import pytest
from PIL import Image, ImageFont
from reportlab.pdfgen import canvas as rl_canvas

from src.processors.engines import build_message_pdf, compose_frame, save_image
from src.processors.layout import LayoutLine, LayoutResult


def _layout() -> LayoutResult:
    return LayoutResult(font="40px test", font_size=40, lines=(LayoutLine(text="Hi", width=40, x=140, y=130),))


class TestComposeFrame:
    def test_no_layout_returns_copy(self):
        frame = Image.new("RGB", (320, 240), (10, 20, 30))
        out = compose_frame(frame, None, "overlay", ImageFont.load_default(size=40))
        assert out is not frame
        assert out.getpixel((0, 0)) == (10, 20, 30)

    def test_unknown_mode_rejected(self):
        frame = Image.new("RGB", (320, 240))
        with pytest.raises(ValueError):
            compose_frame(frame, _layout(), "marquee", ImageFont.load_default(size=40))

    def test_input_frame_not_modified(self):
        frame = Image.new("RGB", (320, 240), (200, 200, 200))
        compose_frame(frame, _layout(), "overlay", ImageFont.load_default(size=40))
        assert frame.getextrema() == ((200, 200), (200, 200), (200, 200))


def test_save_image_png(tmp_path):
    out = save_image(Image.new("RGB", (16, 9)), tmp_path / "sub" / "frame.png")
    assert out.exists()
    with Image.open(out) as img:
        assert img.size == (16, 9)


@pytest.mark.parametrize("mode", ["overlay", "text"])
def test_build_message_pdf(tmp_path, mode):
    out = build_message_pdf(tmp_path / "m.pdf", (320, 240), _layout(), mode=mode, font_name="Helvetica")
    assert out.read_bytes().startswith(b"%PDF")


def test_build_message_pdf_with_background(tmp_path):
    bg = Image.new("RGB", (320, 240), (0, 128, 0))
    out = build_message_pdf(tmp_path / "m.pdf", bg.size, _layout(), mode="overlay", font_name="Helvetica", background=bg)
    assert out.stat().st_size > 0


def test_build_message_pdf_unknown_mode(tmp_path):
    with pytest.raises(ValueError):
        build_message_pdf(tmp_path / "m.pdf", (320, 240), None, mode="marquee", font_name="Helvetica")


def test_zero_line_layout_still_draws_background():
    # 消息仅含空白：无文字行，但叠加模式仍绘制蒙版、纯文字模式仍绘制白底
    frame = Image.new("RGB", (320, 240), (200, 200, 200))
    empty = LayoutResult(font="40px test", font_size=40, lines=())
    font = ImageFont.load_default(size=40)
    r, g, b = compose_frame(frame, empty, "overlay", font).getpixel((0, 0))
    assert abs(r - 100) <= 2 and r == g == b
    assert compose_frame(frame, empty, "text", font).getextrema() == ((255, 255), (255, 255), (255, 255))


class TestMessagePdfDrawing:
    @pytest.fixture
    def events(self, monkeypatch):
        recorded = []

        def draw_string(self, x, y, text, *args, **kwargs):
            recorded.append(("drawString", x, y, text))

        def set_fill_alpha(self, a):
            recorded.append(("setFillAlpha", a))

        def set_fill_color_rgb(self, r, g, b, *args, **kwargs):
            recorded.append(("setFillColorRGB", r, g, b))

        monkeypatch.setattr(rl_canvas.Canvas, "drawString", draw_string)
        monkeypatch.setattr(rl_canvas.Canvas, "setFillAlpha", set_fill_alpha)
        monkeypatch.setattr(rl_canvas.Canvas, "setFillColorRGB", set_fill_color_rgb)
        return recorded

    def test_baseline_flipped_to_pdf_origin(self, tmp_path, events):
        # 画面坐标 y=130（自上而下）-> PDF 坐标 240 - 130 = 110（自下而上）
        build_message_pdf(tmp_path / "m.pdf", (320, 240), _layout(), mode="overlay", font_name="Helvetica")
        assert [e for e in events if e[0] == "drawString"] == [("drawString", 140, 110.0, "Hi")]

    def test_overlay_dims_and_draws_white_text(self, tmp_path, events):
        build_message_pdf(tmp_path / "m.pdf", (320, 240), _layout(), mode="overlay", font_name="Helvetica")
        assert ("setFillAlpha", pytest.approx(128 / 255)) in events
        colors = [e for e in events if e[0] == "setFillColorRGB"]
        assert colors[-1] == ("setFillColorRGB", 1.0, 1.0, 1.0)

    def test_text_mode_grey_on_white_without_dim(self, tmp_path, events):
        build_message_pdf(tmp_path / "m.pdf", (320, 240), _layout(), mode="text", font_name="Helvetica")
        assert not [e for e in events if e[0] == "setFillAlpha"]
        colors = [e for e in events if e[0] == "setFillColorRGB"]
        assert ("setFillColorRGB", 1.0, 1.0, 1.0) in colors
        assert colors[-1] == ("setFillColorRGB", pytest.approx(0x99 / 255), pytest.approx(0x99 / 255), pytest.approx(0x99 / 255))

    def test_zero_line_layout_still_dims(self, tmp_path, events):
        empty = LayoutResult(font="40px test", font_size=40, lines=())
        build_message_pdf(tmp_path / "m.pdf", (320, 240), empty, mode="overlay", font_name="Helvetica")
        assert ("setFillAlpha", pytest.approx(128 / 255)) in events
        assert not [e for e in events if e[0] == "drawString"]
