# pnmdecode/scanner.py
"""
Header token scanner.

Tokens are runs of bytes delimited by whitespace, end-of-stream or a '#'
comment (which extends to the next line feed or end-of-stream). Comments may
appear between any two tokens.
"""

from .cursor import ByteCursor
from .errors import PnmFormatError, PnmTruncationError

# C isspace(): space \t \n \v \f \r
WHITESPACE = frozenset(b" \t\n\x0b\x0c\r")
COMMENT = 0x23  # '#'
NEWLINE = 0x0A


def _is_space(b: int) -> bool:
    return b in WHITESPACE


def skip_comment(cur: ByteCursor) -> None:
    """Consume up to and including the next line feed (or to end-of-stream)."""
    while True:
        b = cur.read_byte()
        if b is None or b == NEWLINE:
            return


def skip_to_token(cur: ByteCursor) -> None:
    """Leave the cursor on the first byte of the next token, or at end-of-stream."""
    while True:
        b = cur.peek()
        if b is None:
            return
        if b == COMMENT:
            cur.read_byte()
            skip_comment(cur)
        elif _is_space(b):
            cur.read_byte()
        else:
            return


def is_terminator(cur: ByteCursor) -> bool:
    """
    Consume one byte and report whether it ends a token.
    A '#' terminates the token and its comment is swallowed as well.
    """
    b = cur.read_byte()
    if b is None:
        return True
    if b == COMMENT:
        skip_comment(cur)
        return True
    return _is_space(b)


def skip_token(cur: ByteCursor) -> None:
    while not is_terminator(cur):
        pass


def match_keyword(cur: ByteCursor, literal: bytes) -> bool:
    """
    Consume `literal` if it is the whole current token.
    On any mismatch the cursor goes back exactly where it was, so
    b"WIDTHX" does not match b"WIDTH".
    """
    mark = cur.save()
    for expected in literal:
        if cur.read_byte() != expected:
            cur.restore(mark)
            return False
    if is_terminator(cur):
        cur.release(mark)
        return True
    cur.restore(mark)
    return False


def read_integer(cur: ByteCursor) -> int:
    """Parse the next token as a non-negative base-10 integer."""
    skip_to_token(cur)
    start = cur.offset
    if cur.at_eof():
        raise PnmTruncationError(
            "unexpected end-of-file reached while reading integer",
            offset=start,
        )

    n = 0
    while True:
        b = cur.read_byte()
        if b is None or _is_space(b):
            break
        if b == COMMENT:
            skip_comment(cur)
            break
        if 0x30 <= b <= 0x39:
            n = n * 10 + (b - 0x30)
        else:
            raise PnmFormatError(
                f"invalid character {chr(b)!r} encountered in integer",
                offset=cur.offset - 1,
                token_start=start,
            )
    return n
