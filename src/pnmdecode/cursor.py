"""
cursor.py: positioned byte cursor over a sequential binary stream.

The cursor reads ahead in chunks and keeps consumed bytes around only while a
saved position is outstanding, so speculative reads can be rewound without the
underlying stream supporting seek() (pipes, sockets, gzip streams, ...).
"""

import io
from typing import BinaryIO, List, Optional

DEFAULT_CHUNK_SIZE = 64 * 1024


class ByteCursor:
    def __init__(self, stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be a positive integer")
        self._stream = stream
        self._chunk_size = chunk_size
        self._buf = bytearray()
        self._pos = 0          # index into _buf
        self._base = 0         # absolute stream offset of _buf[0]
        self._eof = False
        self._saved: List[int] = []

    @classmethod
    def from_bytes(cls, data: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> "ByteCursor":
        return cls(io.BytesIO(bytes(data)), chunk_size=chunk_size)

    def __repr__(self):
        return f"<ByteCursor offset={self.offset} buffered={len(self._buf) - self._pos} eof={self._eof}>"

    # ---------- buffering ----------

    def _compact(self) -> None:
        # Drop bytes nobody can rewind to anymore.
        keep_from = min(self._saved) - self._base if self._saved else self._pos
        if keep_from > 0:
            del self._buf[:keep_from]
            self._base += keep_from
            self._pos -= keep_from

    def _fill(self, need: int) -> bool:
        """Make sure `need` unread bytes are buffered; False if the stream ends first."""
        while len(self._buf) - self._pos < need:
            if self._eof:
                return False
            self._compact()
            chunk = self._stream.read(max(self._chunk_size, need))
            if not chunk:
                self._eof = True
                return False
            self._buf.extend(chunk)
        return True

    # ---------- reading ----------

    @property
    def offset(self) -> int:
        """Absolute number of bytes consumed so far."""
        return self._base + self._pos

    def at_eof(self) -> bool:
        return not self._fill(1)

    def peek(self) -> Optional[int]:
        if not self._fill(1):
            return None
        return self._buf[self._pos]

    def read_byte(self) -> Optional[int]:
        """Next byte as an int, or None at end-of-stream."""
        if not self._fill(1):
            return None
        b = self._buf[self._pos]
        self._pos += 1
        return b

    def read(self, n: int) -> bytes:
        """Up to n bytes; shorter only when the stream ends."""
        if n <= 0:
            return b""
        self._fill(n)
        out = bytes(self._buf[self._pos:self._pos + n])
        self._pos += len(out)
        return out

    # ---------- speculative reads ----------

    def save(self) -> int:
        mark = self.offset
        self._saved.append(mark)
        return mark

    def restore(self, mark: int) -> None:
        """Rewind to a position returned by save() and forget it."""
        self._saved.remove(mark)
        self._pos = mark - self._base

    def release(self, mark: int) -> None:
        """Forget a saved position without moving."""
        self._saved.remove(mark)
