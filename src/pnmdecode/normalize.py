# pnmdecode/normalize.py
import numpy as np

MAXVAL_LIMIT = 0xFFFF


def scale(sample: int, maxval: int) -> int:
    """Map a sample in [0, maxval] onto [0, 255] (floor of the proportional value)."""
    return (sample * 255) // maxval


def scale_array(samples: np.ndarray, maxval: int) -> np.ndarray:
    """Vectorized scale(); result is uint32 so it can be shifted into RGBA words."""
    wide = samples.astype(np.uint32)
    if maxval == 255:
        return wide
    # 65535 * 255 fits in uint32
    return (wide * np.uint32(255)) // np.uint32(maxval)
