# pnmdecode/bits.py
from typing import Iterator

from .cursor import ByteCursor
from .errors import PnmTruncationError


class BitReader:
    """
    MSB-first bit reader over a cursor.

    State is just the current byte and how many of its bits are still unread;
    bits() hands out a lazy, finite, one-shot sequence of 0/1 samples.
    """

    def __init__(self, cur: ByteCursor):
        self._cur = cur
        self._byte = 0
        self._remaining = 0

    def __repr__(self):
        return f"<BitReader byte=0x{self._byte:02x} remaining={self._remaining} offset={self._cur.offset}>"

    def read_bit(self) -> int:
        if self._remaining == 0:
            b = self._cur.read_byte()
            if b is None:
                raise PnmTruncationError(
                    "unexpected end-of-file encountered while reading pixel data",
                    offset=self._cur.offset,
                )
            self._byte = b
            self._remaining = 8
        self._remaining -= 1
        return (self._byte >> self._remaining) & 1

    def align(self) -> None:
        """Discard the unread bits of the current byte."""
        self._remaining = 0

    def bits(self, count: int) -> Iterator[int]:
        for _ in range(count):
            yield self.read_bit()
