# pnmdecode/pixels.py
"""
Pixel decoders.

Each decoder consumes the stream in raster order and writes exactly one RGBA
word per cell of the buffer handed over by the header parser. Binary samples
are decoded a row at a time with numpy; ASCII samples go through the token
scanner one by one.
"""

import numpy as np

from .bits import BitReader
from .cursor import ByteCursor
from .errors import PnmFormatError, PnmRangeError, PnmTruncationError
from .normalize import scale, scale_array
from .pnm_types import BLACK, OPAQUE, WHITE, DecodeContext, PnmHeader
from .scanner import COMMENT, WHITESPACE, read_integer, skip_comment


def _over_maxval(maxval: int, value: int, offset: int) -> PnmRangeError:
    return PnmRangeError(
        "pixel value greater than maxval encountered",
        value=value, maxval=maxval, offset=offset,
    )


def _eof_in_pixels(offset: int, **context) -> PnmTruncationError:
    return PnmTruncationError(
        "unexpected end-of-file reached while reading pixel data",
        offset=offset, **context,
    )


# ----------------------------------------------------------------------
# Sample readers
# ----------------------------------------------------------------------

def read_binary_samples(cur: ByteCursor, count: int, maxval: int) -> np.ndarray:
    """
    Read `count` fixed-width samples (1 byte, or 2 bytes big-endian when
    maxval > 255) and return them scaled to [0, 255] as uint32.
    """
    width = 2 if maxval > 255 else 1
    start = cur.offset
    raw = cur.read(count * width)
    got = len(raw) // width
    samples = np.frombuffer(raw[:got * width], dtype=">u2" if width == 2 else np.uint8)

    # Anything out of range among what did arrive is reported before the short read.
    bad = np.flatnonzero(samples > maxval)
    if bad.size:
        i = int(bad[0])
        raise _over_maxval(maxval, int(samples[i]), start + i * width)
    if got < count:
        raise _eof_in_pixels(start + len(raw), expected_samples=count, read_samples=got)
    return scale_array(samples, maxval)


def read_binary_sample(cur: ByteCursor, maxval: int) -> int:
    return int(read_binary_samples(cur, 1, maxval)[0])


def read_ascii_sample(cur: ByteCursor, maxval: int) -> int:
    start = cur.offset
    n = read_integer(cur)
    if n > maxval:
        raise _over_maxval(maxval, n, start)
    return scale(n, maxval)


# ----------------------------------------------------------------------
# Binary decoders (P5, P6, P7)
# ----------------------------------------------------------------------

def _pack_rows(samples: np.ndarray, channels: int) -> np.ndarray:
    px = samples.reshape(-1, channels)
    if channels <= 2:
        r = g = b = px[:, 0]
    else:
        r, g, b = px[:, 0], px[:, 1], px[:, 2]
    if channels in (2, 4):
        a = px[:, channels - 1]
    else:
        a = np.uint32(OPAQUE)
    return (r << 24) | (g << 16) | (b << 8) | a


def _decode_binary(cur: ByteCursor, pix: np.ndarray, header: PnmHeader, channels: int) -> None:
    w = header.width
    for y in range(header.height):
        row = read_binary_samples(cur, w * channels, header.maxval)
        pix[y * w:(y + 1) * w] = _pack_rows(row, channels)


def decode_binary_gray(cur: ByteCursor, pix: np.ndarray, header: PnmHeader) -> None:
    """Gray (depth 1) or gray+alpha (depth 2)."""
    _decode_binary(cur, pix, header, 2 if header.has_alpha else 1)


def decode_binary_color(cur: ByteCursor, pix: np.ndarray, header: PnmHeader) -> None:
    """RGB (depth 3) or RGBA (depth 4)."""
    _decode_binary(cur, pix, header, 4 if header.has_alpha else 3)


def decode_binary_by_depth(cur: ByteCursor, pix: np.ndarray, header: PnmHeader) -> None:
    if header.depth <= 2:
        decode_binary_gray(cur, pix, header)
    else:
        decode_binary_color(cur, pix, header)


# ----------------------------------------------------------------------
# ASCII decoders (P2, P3)
# ----------------------------------------------------------------------

def decode_ascii_gray(cur: ByteCursor, pix: np.ndarray, header: PnmHeader) -> None:
    maxval = header.maxval
    for i in range(header.width * header.height):
        gray = read_ascii_sample(cur, maxval)
        pix[i] = (gray << 24) | (gray << 16) | (gray << 8) | OPAQUE


def decode_ascii_color(cur: ByteCursor, pix: np.ndarray, header: PnmHeader) -> None:
    maxval = header.maxval
    for i in range(header.width * header.height):
        r = read_ascii_sample(cur, maxval)
        g = read_ascii_sample(cur, maxval)
        b = read_ascii_sample(cur, maxval)
        pix[i] = (r << 24) | (g << 16) | (b << 8) | OPAQUE


# ----------------------------------------------------------------------
# Bitmaps (P1, P4)
# ----------------------------------------------------------------------

def decode_binary_bitmap(cur: ByteCursor, pix: np.ndarray, header: PnmHeader, ctx: DecodeContext) -> None:
    """
    Packed bits, MSB first; 1 is black, 0 is white. Bits run on across rows
    and a new byte is read only when the previous one is used up. With
    params["pbm_row_padding"] set, every row starts on a byte boundary
    instead (the layout Netpbm tools write).
    """
    padded = bool(ctx.params.get("pbm_row_padding", False))
    reader = BitReader(cur)
    w = header.width
    for y in range(header.height):
        base = y * w
        for x, bit in enumerate(reader.bits(w)):
            pix[base + x] = BLACK if bit else WHITE
        if padded:
            reader.align()


def decode_ascii_bitmap(cur: ByteCursor, pix: np.ndarray, header: PnmHeader, ctx: DecodeContext) -> None:
    """
    Literal '0' (white) / '1' (black) bytes; '#' comments run to end-of-line.
    Other bytes are skipped, unless params["strict_bitmap"] is set, in which
    case anything but whitespace is a format error.
    """
    strict = bool(ctx.params.get("strict_bitmap", False))
    size = header.width * header.height
    i = 0
    while i < size:
        b = cur.read_byte()
        if b is None:
            raise _eof_in_pixels(cur.offset, expected_pixels=size, read_pixels=i)
        if b == 0x30:
            pix[i] = WHITE
            i += 1
        elif b == 0x31:
            pix[i] = BLACK
            i += 1
        elif b == COMMENT:
            skip_comment(cur)
        elif strict and b not in WHITESPACE:
            raise PnmFormatError(
                f"invalid character {chr(b)!r} in bitmap data",
                offset=cur.offset - 1,
            )
