from __future__ import annotations

import json

import pytest
from PIL import Image

import main
from src.variables import CONST_FRAME_BG_RGB


def test_single_png(tmp_path):
    out = tmp_path / "brb.png"
    outputs = main.main(
        ["--text", "Be right back", "--size", "320x240", "--output", str(out), "--settings", str(tmp_path / "s.json")]
    )
    assert outputs == [out]
    with Image.open(out) as img:
        assert img.size == (320, 240)


def test_mode_flag_persists_setting(tmp_path):
    settings = tmp_path / "s.json"
    main.main(["--text", "Hi", "--size", "160x90", "--mode", "text", "--output", str(tmp_path / "o.png"), "--settings", str(settings)])
    assert json.loads(settings.read_text(encoding="utf-8"))["message_mode"] == "text"


def test_disabled_setting_outputs_frame_unchanged(tmp_path):
    settings = tmp_path / "s.json"
    settings.write_text(json.dumps({"enabled": False, "message_mode": "text"}), encoding="utf-8")
    out = tmp_path / "o.png"
    main.main(["--text", "Hi", "--size", "160x90", "--output", str(out), "--settings", str(settings)])
    with Image.open(out) as img:
        assert img.convert("RGB").getextrema() == tuple((c, c) for c in CONST_FRAME_BG_RGB)


def test_reportlab_pdf(tmp_path):
    out = tmp_path / "brb.pdf"
    main.main(["--text", "Be right back", "--engine", "reportlab", "--output", str(out), "--settings", str(tmp_path / "s.json")])
    assert out.read_bytes().startswith(b"%PDF")


def test_batch_json(tmp_path):
    batch = tmp_path / "messages.json"
    batch.write_text(json.dumps({"messages": ["会议中", "Be right back"]}, ensure_ascii=False), encoding="utf-8")
    out_dir = tmp_path / "out"
    outputs = main.main(
        ["--batch-json", str(batch), "--size", "320x240", "--batch-output-dir", str(out_dir), "--output-prefix", "msg", "--settings", str(tmp_path / "s.json")]
    )
    assert len(outputs) == 2
    assert all(p.parent == out_dir and p.exists() for p in outputs)
    assert outputs[0].name.startswith("msg_") and "_001_" in outputs[0].name


def test_invalid_size_rejected(tmp_path):
    with pytest.raises(SystemExit):
        main.main(["--text", "Hi", "--size", "wide", "--settings", str(tmp_path / "s.json")])
