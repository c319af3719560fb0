"""Shared test fixtures."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from otpx.font import parse_font
from otpx.pad import Pad


# A tiny 3x3 font; rows keep their trailing spaces
FONT_3X3 = (
    "H\n"
    "* *\n"
    "***\n"
    "* *\n"
    "i\n"
    " * \n"
    "   \n"
    " * \n"
    "Y\n"
    "* *\n"
    " * \n"
    " * \n"
    "o\n"
    "   \n"
    "***\n"
    "***\n"
    "A\n"
    " * \n"
    "***\n"
    "* *\n"
    "B\n"
    "** \n"
    "***\n"
    "** \n"
)

PAD_110010 = "1\n1\n0\n0\n1\n0\n"

OEIS_PAD = """\
# A010060 Thue-Morse sequence (first terms)
0 0
1 1
2 1
3 0

4 1
5 0
"""

HINT_PBM = """\
P1
# hint: 110010
6 2
1 1 0 0 1 0
0 1 0 0 1 1
"""


@pytest.fixture
def font():
    return parse_font(FONT_3X3)


@pytest.fixture
def pad():
    return Pad([1, 1, 0, 0, 1, 0])


@pytest.fixture
def random_pad():
    rng = np.random.default_rng(1234)
    return Pad(rng.integers(0, 2, size=97))


@pytest.fixture
def hint():
    return np.array([[1, 1, 0, 0, 1, 0], [0, 1, 0, 0, 1, 1]], dtype=bool)


@pytest.fixture(autouse=True)
def _reset_otpx_logging():
    yield
    root = logging.getLogger("otpx")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
