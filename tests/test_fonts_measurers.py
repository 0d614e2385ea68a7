from __future__ import annotations

from pathlib import Path

import pytest
from reportlab.pdfbase import pdfmetrics

from src.components import (
    MeasurementUnavailableError,
    PillowMeasurer,
    RatioMeasurer,
    ReportlabMeasurer,
    estimate_text_width,
    probe_available_fonts,
)
from src.variables import ERR_MEASUREMENT_UNAVAILABLE


class TestRatioMeasurer:
    def test_matches_estimate(self):
        m = RatioMeasurer()
        assert m.measure(12, "测试ABC") == estimate_text_width("测试ABC", 12)
        assert m.font_descriptor(12) == "12px sans-serif"


class TestReportlabMeasurer:
    def test_helvetica_width_matches_pdfmetrics(self):
        m = ReportlabMeasurer()
        assert m.measure(24, "Hello") == pytest.approx(pdfmetrics.stringWidth("Hello", "Helvetica", 24))
        assert m.measure(24, "") == 0.0
        assert m.font_descriptor(24) == "24px Helvetica"

    def test_unknown_font_unavailable(self):
        with pytest.raises(MeasurementUnavailableError) as excinfo:
            ReportlabMeasurer(font_name="NoSuchFont-Regular")
        assert str(excinfo.value).startswith(f"[{ERR_MEASUREMENT_UNAVAILABLE}]")

    def test_missing_font_file_unavailable(self, tmp_path):
        with pytest.raises(MeasurementUnavailableError):
            ReportlabMeasurer(font_name="Missing", font_file=tmp_path / "missing.ttf")


class TestPillowMeasurer:
    def test_missing_font_file_unavailable(self, tmp_path):
        with pytest.raises(MeasurementUnavailableError):
            PillowMeasurer(font_file=tmp_path / "missing.ttf")

    def test_invalid_font_file_unavailable(self, tmp_path):
        bogus = tmp_path / "bogus.ttf"
        bogus.write_bytes(b"not a font")
        with pytest.raises(MeasurementUnavailableError):
            PillowMeasurer(font_file=bogus)

    def test_width_monotonic_in_text_and_size(self):
        m = PillowMeasurer()
        assert m.measure(20, "") == 0.0
        assert m.measure(20, "Hel") <= m.measure(20, "Hell")
        assert m.measure(20, "Hello") <= m.measure(40, "Hello")
        assert m.measure(20, "Hello") > 0

    def test_fonts_cached_per_size(self):
        m = PillowMeasurer()
        assert m.get_font(18) is m.get_font(18)
        assert m.get_font(0) is m.get_font(1)
        assert m.font_descriptor(18) == "18px sans-serif"


def test_font_search_only_returns_existing_font_files(tmp_path, monkeypatch):
    ttf = tmp_path / "a.ttf"
    ttf.write_bytes(b"")
    txt = tmp_path / "b.txt"
    txt.write_bytes(b"")
    monkeypatch.setattr("src.components.fonts.PATH_FONT_FILE", None)
    monkeypatch.setattr("src.components.fonts.PATH_CONFIG_DIR", tmp_path / "config")
    monkeypatch.setattr(
        "src.components.fonts.CONST_CANDIDATE_SANS_FONT_PATHS",
        [str(ttf), str(txt), str(tmp_path / "missing.otf"), str(ttf)],
    )
    assert probe_available_fonts() == [Path(ttf)]
