# pnmdecode/headers.py
"""
Header grammars.

  classic (P2, P3, P5, P6):  WIDTH HEIGHT MAXVAL
  bitmap  (P1, P4):          WIDTH HEIGHT            (maxval is implicitly 1)
  pam     (P7):              KEY VALUE ... ENDHDR

Every parser returns the validated header together with a freshly allocated
pixel buffer; nothing is allocated until all fields are known and in range.
"""

from typing import Dict, Tuple

import numpy as np

from .cursor import ByteCursor
from .diagnostics import _debug
from .errors import PnmAllocationError, PnmFormatError, PnmRangeError
from .normalize import MAXVAL_LIMIT
from .pnm_types import DecodeContext, PnmHeader
from .scanner import match_keyword, read_integer, skip_to_token, skip_token

DEFAULT_MAX_PIXELS = 1 << 28

_PAM_KEYS = (b"DEPTH", b"MAXVAL", b"HEIGHT", b"WIDTH")


# ----------------------------------------------------------------------
# Validation / allocation
# ----------------------------------------------------------------------

def _require_dimension(name: str, value: int, offset: int) -> int:
    if value < 1:
        raise PnmRangeError(f"{name} must be at least 1", field=name, value=value, offset=offset)
    return value


def _require_maxval(value: int, offset: int) -> int:
    if value < 1 or value > MAXVAL_LIMIT:
        raise PnmRangeError(
            f"maxval must be between 1-{MAXVAL_LIMIT}",
            field="maxval", value=value, offset=offset,
        )
    return value


def allocate_pixels(header: PnmHeader, ctx: DecodeContext) -> np.ndarray:
    max_pixels = int(ctx.params.get("max_pixels", DEFAULT_MAX_PIXELS))
    count = header.width * header.height
    if count > max_pixels:
        raise PnmAllocationError(
            f"image of {header.width}x{header.height} exceeds the {max_pixels} pixel budget",
            width=header.width, height=header.height, max_pixels=max_pixels,
        )
    try:
        return np.empty(count, dtype=np.uint32)
    except (MemoryError, ValueError) as e:
        raise PnmAllocationError(
            f"cannot allocate {header.width}x{header.height} pixel buffer: {e}",
            width=header.width, height=header.height,
        ) from e


def _trace(ctx: DecodeContext, header: PnmHeader) -> None:
    if ctx.debug:
        _debug(f"[PNM][DBG] {ctx.source}: {header.magic} width={header.width} height={header.height} "
               f"maxval={header.maxval} depth={header.depth}")


# ----------------------------------------------------------------------
# Parsers
# ----------------------------------------------------------------------

def parse_classic_header(cur: ByteCursor, ctx: DecodeContext, magic: str, depth: int) -> Tuple[PnmHeader, np.ndarray]:
    """WIDTH HEIGHT MAXVAL; depth is implied by the magic (1 for P2/P5, 3 for P3/P6)."""
    width = _require_dimension("width", read_integer(cur), cur.offset)
    height = _require_dimension("height", read_integer(cur), cur.offset)
    maxval = _require_maxval(read_integer(cur), cur.offset)

    header = PnmHeader(magic=magic, width=width, height=height, maxval=maxval, depth=depth)
    _trace(ctx, header)
    return header, allocate_pixels(header, ctx)


def parse_bitmap_header(cur: ByteCursor, ctx: DecodeContext, magic: str) -> Tuple[PnmHeader, np.ndarray]:
    width = _require_dimension("width", read_integer(cur), cur.offset)
    height = _require_dimension("height", read_integer(cur), cur.offset)

    header = PnmHeader(magic=magic, width=width, height=height, maxval=1, depth=1)
    _trace(ctx, header)
    return header, allocate_pixels(header, ctx)


def parse_pam_header(cur: ByteCursor, ctx: DecodeContext, magic: str = "P7") -> Tuple[PnmHeader, np.ndarray]:
    """
    Keyed header. WIDTH/HEIGHT/DEPTH/MAXVAL take one integer each; any
    other key (TUPLTYPE, ...) is dropped together with its value token.
    Missing fields count as 0 and fail validation.
    """
    fields: Dict[bytes, int] = {k: 0 for k in _PAM_KEYS}

    while True:
        skip_to_token(cur)
        if cur.at_eof():
            raise PnmFormatError("end-of-file reached before ENDHDR in PAM header", offset=cur.offset)

        for key in _PAM_KEYS:
            if match_keyword(cur, key):
                fields[key] = read_integer(cur)
                break
        else:
            if match_keyword(cur, b"ENDHDR"):
                break
            if ctx.debug:
                _debug(f"[PNM][DBG] {ctx.source}: skipping unknown PAM key at byte {cur.offset}")
            skip_token(cur)
            skip_to_token(cur)
            skip_token(cur)

    end = cur.offset
    depth = fields[b"DEPTH"]
    if depth < 1 or depth > 4:
        raise PnmRangeError("depth must be between 1-4", field="depth", value=depth, offset=end)
    maxval = _require_maxval(fields[b"MAXVAL"], end)
    width = _require_dimension("width", fields[b"WIDTH"], end)
    height = _require_dimension("height", fields[b"HEIGHT"], end)

    header = PnmHeader(magic=magic, width=width, height=height, maxval=maxval, depth=depth)
    _trace(ctx, header)
    return header, allocate_pixels(header, ctx)
