"""Tests for PBM hint loading and bitmap output."""

import numpy as np
import pytest
from PIL import Image

from tests.conftest import HINT_PBM

from otpx.errors import MalformedHint
from otpx.pbm import format_pbm, load_hint, parse_pbm, save_image, to_image, write_pbm


def test_parse_hint(hint):
    bitmap = parse_pbm(HINT_PBM)
    assert bitmap.shape == (2, 6)
    np.testing.assert_array_equal(bitmap, hint)


def test_any_nonzero_token_is_on():
    assert parse_pbm("P1\n3 1\n0 2 1\n").tolist() == [[False, True, True]]


def test_missing_marker():
    with pytest.raises(MalformedHint, match="marker"):
        parse_pbm("P4\n1 1\n1\n")


def test_bad_dimension_line():
    with pytest.raises(MalformedHint, match="width height"):
        parse_pbm("P1\n3\n1 1 1\n")


def test_non_positive_dimensions():
    with pytest.raises(MalformedHint, match="positive"):
        parse_pbm("P1\n0 2\n\n\n")


def test_too_few_rows():
    with pytest.raises(MalformedHint, match="expected 3 rows, found 2"):
        parse_pbm("P1\n2 3\n1 0\n0 1\n")


def test_row_width_mismatch():
    with pytest.raises(MalformedHint, match="row 2: expected 2 pixels, found 3"):
        parse_pbm("P1\n2 2\n1 0\n0 1 1\n")


def test_no_hint_is_none():
    assert load_hint(None) is None


def test_load_hint_from_file(tmp_path, hint):
    path = tmp_path / "hint.pbm"
    path.write_text(HINT_PBM)
    np.testing.assert_array_equal(load_hint(path), hint)


def test_format_pbm():
    bitmap = np.array([[1, 0, 0], [0, 1, 1]], dtype=bool)
    assert format_pbm(bitmap) == "P1\n3 2\n1 0 0\n0 1 1\n"


def test_write_pbm_leaves_no_temp_file(tmp_path):
    bitmap = np.eye(4, dtype=bool)
    path = write_pbm(bitmap, tmp_path / "out" / "code.pbm")
    assert path.read_text() == format_pbm(bitmap)
    assert sorted(p.name for p in path.parent.iterdir()) == ["code.pbm"]


def test_written_pbm_reads_back_as_hint(tmp_path):
    bitmap = np.array([[1, 0], [1, 1], [0, 0]], dtype=bool)
    path = write_pbm(bitmap, tmp_path / "b.pbm")
    np.testing.assert_array_equal(load_hint(path), bitmap)


def test_to_image_uses_pbm_polarity():
    bitmap = np.array([[1, 0]], dtype=bool)
    img = to_image(bitmap)
    assert img.mode == "1"
    assert img.size == (2, 1)
    assert img.getpixel((0, 0)) == 0
    assert img.getpixel((1, 0)) == 255


def test_save_image_png(tmp_path):
    bitmap = np.zeros((5, 5), dtype=bool)
    bitmap[2, 2] = True
    path = save_image(bitmap, tmp_path / "code.png")
    with Image.open(path) as img:
        assert img.size == (5, 5)
        assert img.convert("L").getpixel((2, 2)) == 0
