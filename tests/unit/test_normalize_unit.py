# tests/unit/test_normalize_unit.py

import numpy as np
import pytest

from pnmdecode.normalize import MAXVAL_LIMIT, scale, scale_array

MAXVALS = [1, 2, 3, 15, 100, 255, 256, 1000, 4095, MAXVAL_LIMIT]


def test_identity_at_255():
    for v in range(256):
        assert scale(v, 255) == v


@pytest.mark.parametrize("maxval", MAXVALS)
def test_endpoints(maxval):
    assert scale(0, maxval) == 0
    assert scale(maxval, maxval) == 255


@pytest.mark.parametrize("maxval", [3, 1000, MAXVAL_LIMIT])
def test_monotonic(maxval):
    values = [scale(v, maxval) for v in range(maxval + 1)]
    assert all(a <= b for a, b in zip(values, values[1:]))


def test_floor_rounding():
    # 7 * 255 / 15 = 119.0, 500 * 255 / 1000 = 127.5
    assert scale(7, 15) == 119
    assert scale(500, 1000) == 127


@pytest.mark.parametrize("maxval", [1, 255, 1000, MAXVAL_LIMIT])
def test_array_matches_scalar(maxval):
    samples = np.arange(maxval + 1, dtype=np.uint16 if maxval > 255 else np.uint8)
    out = scale_array(samples, maxval)
    assert out.dtype == np.uint32
    expected = [scale(int(v), maxval) for v in samples]
    assert out.tolist() == expected
