"""Tests for the command-line interface."""

import io
import sys

import pytest

from tests.conftest import HINT_PBM, PAD_110010

from otpx.cli import main
from otpx.pad import load_pad


@pytest.fixture
def pad_file(tmp_path):
    path = tmp_path / "secret.txt"
    path.write_text(PAD_110010)
    return path


def _stdin(monkeypatch, data: bytes):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))


def test_encode(tmp_path, pad_file, monkeypatch, capsys):
    _stdin(monkeypatch, b"HELLO\nWORLD")
    out = tmp_path / "output" / "example.pbm"
    main(["encode", str(pad_file), "builtin:5x5", str(out)])

    text = out.read_text()
    assert text.startswith("P1\n")
    width, height = text.splitlines()[1].split()
    assert width == height

    printed = capsys.readouterr().out
    assert printed.startswith("plaintext:\nHELLO\nWORLD\n")
    assert "plaintext bitmap:" in printed
    assert "ciphertext bitmap:" in printed
    assert "Pad cursor: 4/6" in printed


def test_encode_with_hint_and_png(tmp_path, pad_file, monkeypatch, capsys):
    hint = tmp_path / "hint.pbm"
    hint.write_text(HINT_PBM)
    _stdin(monkeypatch, b"OK")
    out, png = tmp_path / "c.pbm", tmp_path / "c.png"
    main(["encode", "-q", "-H", str(hint), "--png", str(png), str(pad_file), "builtin:5x5", str(out)])

    assert out.exists() and png.exists()
    printed = capsys.readouterr().out
    assert "plaintext bitmap:" not in printed
    assert printed.count("Saved to:") == 2


def test_encode_unknown_character(tmp_path, pad_file, monkeypatch, capsys):
    _stdin(monkeypatch, b"hi")
    out = tmp_path / "c.pbm"
    with pytest.raises(SystemExit) as excinfo:
        main(["encode", str(pad_file), "builtin:5x5", str(out)])
    assert excinfo.value.code == 1
    assert "no character 'h' in font" in capsys.readouterr().err
    assert not out.exists()


def test_encode_empty_message(tmp_path, pad_file, monkeypatch, capsys):
    _stdin(monkeypatch, b"\n\n")
    with pytest.raises(SystemExit) as excinfo:
        main(["encode", str(pad_file), "builtin:5x5", str(tmp_path / "c.pbm")])
    assert excinfo.value.code == 1
    assert "empty" in capsys.readouterr().err


def test_encode_missing_pad(tmp_path, monkeypatch, capsys):
    _stdin(monkeypatch, b"HI")
    with pytest.raises(SystemExit) as excinfo:
        main(["encode", str(tmp_path / "nope.txt"), "builtin:5x5", str(tmp_path / "c.pbm")])
    assert excinfo.value.code == 1
    assert "otpx: error:" in capsys.readouterr().err


def test_keygen(tmp_path, capsys):
    path = tmp_path / "pad.txt"
    main(["keygen", "64", str(path), "--seed", "3"])
    assert len(load_pad(path)) == 64
    assert "Generated:" in capsys.readouterr().out


def test_keygen_rejects_zero(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["keygen", "0", str(tmp_path / "pad.txt")])
    assert excinfo.value.code == 1


def test_fonts(capsys):
    main(["fonts"])
    assert "builtin:5x5" in capsys.readouterr().out


def test_no_command(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
