# tests/unit/test_pixels_unit.py

import unittest

import numpy as np

from pnmdecode.bits import BitReader
from pnmdecode.cursor import ByteCursor
from pnmdecode.errors import PnmFormatError, PnmRangeError, PnmTruncationError
from pnmdecode.pixels import (
    decode_ascii_bitmap,
    decode_ascii_color,
    decode_ascii_gray,
    decode_binary_bitmap,
    decode_binary_by_depth,
    decode_binary_color,
    decode_binary_gray,
    read_ascii_sample,
    read_binary_sample,
    read_binary_samples,
)
from pnmdecode.pnm_types import BLACK, WHITE, DecodeContext, PnmHeader


def cur(data: bytes) -> ByteCursor:
    return ByteCursor.from_bytes(data)


def buf(header: PnmHeader) -> np.ndarray:
    return np.zeros(header.width * header.height, dtype=np.uint32)


class TestSampleReaders(unittest.TestCase):
    def test_binary_8bit(self):
        self.assertEqual(read_binary_samples(cur(b"\x00\x80\xff"), 3, 255).tolist(), [0, 128, 255])

    def test_binary_16bit_big_endian(self):
        out = read_binary_samples(cur(b"\x80\x00\xff\xff"), 2, 65535)
        self.assertEqual(out.tolist(), [127, 255])

    def test_binary_scalar(self):
        c = cur(b"\x03\xe8")
        self.assertEqual(read_binary_sample(c, 1000), 255)
        self.assertEqual(c.offset, 2)

    def test_binary_sample_over_maxval(self):
        with self.assertRaises(PnmRangeError):
            read_binary_sample(cur(b"\x65"), 100)

    def test_binary_truncated(self):
        with self.assertRaises(PnmTruncationError):
            read_binary_samples(cur(b"\x01"), 2, 255)
        # half a 16-bit sample
        with self.assertRaises(PnmTruncationError):
            read_binary_sample(cur(b"\x00"), 1000)

    def test_range_error_wins_over_truncation(self):
        with self.assertRaises(PnmRangeError) as cm:
            read_binary_samples(cur(b"\x05\x0b"), 3, 10)
        self.assertEqual(cm.exception.offset, 1)

    def test_ascii_sample(self):
        self.assertEqual(read_ascii_sample(cur(b" 7"), 7), 255)
        self.assertEqual(read_ascii_sample(cur(b"7 "), 15), 119)
        with self.assertRaises(PnmRangeError):
            read_ascii_sample(cur(b"8"), 7)


class TestBitReader(unittest.TestCase):
    def test_msb_first(self):
        reader = BitReader(cur(b"\xa5"))
        self.assertEqual(list(reader.bits(8)), [1, 0, 1, 0, 0, 1, 0, 1])

    def test_bits_are_lazy(self):
        c = cur(b"\xff")
        it = BitReader(c).bits(3)
        self.assertEqual(c.offset, 0)
        self.assertEqual(next(it), 1)
        self.assertEqual(c.offset, 1)

    def test_runs_out(self):
        reader = BitReader(cur(b"\xa5"))
        with self.assertRaises(PnmTruncationError):
            list(reader.bits(9))

    def test_align_drops_rest_of_byte(self):
        reader = BitReader(cur(b"\xe0\x80"))
        self.assertEqual(list(reader.bits(3)), [1, 1, 1])
        reader.align()
        self.assertEqual(reader.read_bit(), 1)
        self.assertEqual(reader.read_bit(), 0)


class TestBinaryDecoders(unittest.TestCase):
    def test_gray(self):
        h = PnmHeader("P5", 2, 1, 255, 1)
        pix = buf(h)
        decode_binary_gray(cur(b"\x00\x80"), pix, h)
        self.assertEqual(pix.tolist(), [0x000000FF, 0x808080FF])

    def test_gray_alpha(self):
        h = PnmHeader("P7", 1, 1, 255, 2)
        pix = buf(h)
        decode_binary_gray(cur(b"\x80\x40"), pix, h)
        self.assertEqual(pix.tolist(), [0x80808040])

    def test_alpha_is_scaled_by_maxval(self):
        h = PnmHeader("P7", 1, 1, 1000, 2)
        pix = buf(h)
        decode_binary_gray(cur(b"\x03\xe8\x01\xf4"), pix, h)
        self.assertEqual(pix.tolist(), [0xFFFFFF7F])

    def test_color(self):
        h = PnmHeader("P6", 1, 2, 255, 3)
        pix = buf(h)
        decode_binary_color(cur(b"\x01\x02\x03\xff\x00\x10"), pix, h)
        self.assertEqual(pix.tolist(), [0x010203FF, 0xFF0010FF])

    def test_color_alpha_by_depth(self):
        h = PnmHeader("P7", 1, 1, 255, 4)
        pix = buf(h)
        decode_binary_by_depth(cur(bytes([10, 20, 30, 40])), pix, h)
        self.assertEqual(pix.tolist(), [0x0A141E28])

    def test_short_row(self):
        h = PnmHeader("P6", 2, 2, 255, 3)
        with self.assertRaises(PnmTruncationError):
            decode_binary_color(cur(b"\x00" * 11), buf(h), h)


class TestAsciiDecoders(unittest.TestCase):
    def test_gray(self):
        h = PnmHeader("P2", 3, 1, 15, 1)
        pix = buf(h)
        decode_ascii_gray(cur(b"0 15\n# mid\n7\n"), pix, h)
        self.assertEqual(pix.tolist(), [0x000000FF, 0xFFFFFFFF, 0x777777FF])

    def test_color(self):
        h = PnmHeader("P3", 2, 1, 255, 3)
        pix = buf(h)
        decode_ascii_color(cur(b"255 0 0  0 255 0\n"), pix, h)
        self.assertEqual(pix.tolist(), [0xFF0000FF, 0x00FF00FF])

    def test_gray_truncated(self):
        h = PnmHeader("P2", 2, 1, 255, 1)
        with self.assertRaises(PnmTruncationError):
            decode_ascii_gray(cur(b"12\n"), buf(h), h)


class TestBitmapDecoders(unittest.TestCase):
    def setUp(self):
        self.ctx = DecodeContext(source="test")

    def test_binary_rows_are_byte_aligned(self):
        self.ctx.params["pbm_row_padding"] = True
        h = PnmHeader("P4", 3, 2, 1, 1)
        pix = buf(h)
        decode_binary_bitmap(cur(b"\xa0\x40"), pix, h, self.ctx)
        self.assertEqual(pix.tolist(), [BLACK, WHITE, BLACK, WHITE, BLACK, WHITE])

    def test_binary_bits_run_on_across_rows_by_default(self):
        h = PnmHeader("P4", 3, 2, 1, 1)
        pix = buf(h)
        c = cur(b"\xa0\x40")
        decode_binary_bitmap(c, pix, h, self.ctx)
        self.assertEqual(pix.tolist(), [BLACK, WHITE, BLACK, WHITE, WHITE, WHITE])
        # six bits fit in the first byte; the second one is never touched
        self.assertEqual(c.offset, 1)

    def test_binary_unpadded_rows(self):
        self.ctx.params["pbm_row_padding"] = False
        h = PnmHeader("P4", 3, 2, 1, 1)
        pix = buf(h)
        decode_binary_bitmap(cur(b"\xa8"), pix, h, self.ctx)
        self.assertEqual(pix.tolist(), [BLACK, WHITE, BLACK, WHITE, BLACK, WHITE])

    def test_binary_truncated(self):
        h = PnmHeader("P4", 8, 2, 1, 1)
        with self.assertRaises(PnmTruncationError):
            decode_binary_bitmap(cur(b"\xff"), buf(h), h, self.ctx)

    def test_ascii_lenient(self):
        h = PnmHeader("P1", 2, 2, 1, 1)
        pix = buf(h)
        decode_ascii_bitmap(cur(b"0x1 # 1111\n1 0"), pix, h, self.ctx)
        self.assertEqual(pix.tolist(), [WHITE, BLACK, BLACK, WHITE])

    def test_ascii_without_separators(self):
        h = PnmHeader("P1", 4, 1, 1, 1)
        pix = buf(h)
        decode_ascii_bitmap(cur(b"0110"), pix, h, self.ctx)
        self.assertEqual(pix.tolist(), [WHITE, BLACK, BLACK, WHITE])

    def test_ascii_strict(self):
        self.ctx.params["strict_bitmap"] = True
        h = PnmHeader("P1", 2, 2, 1, 1)
        with self.assertRaises(PnmFormatError):
            decode_ascii_bitmap(cur(b"0x1 1 0"), buf(h), h, self.ctx)

    def test_ascii_truncated(self):
        h = PnmHeader("P1", 2, 2, 1, 1)
        with self.assertRaises(PnmTruncationError):
            decode_ascii_bitmap(cur(b"0 1"), buf(h), h, self.ctx)


if __name__ == "__main__":
    unittest.main()
