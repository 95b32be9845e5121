from typing import Optional

from ..cursor import ByteCursor
from ..errors import PnmFormatError
from .handlers.pbm import PBMHandler
from .handlers.pgm import PGMHandler
from .handlers.ppm import PPMHandler
from .handlers.pam import PAMHandler

# REGISTER INSTANCES; each magic belongs to exactly one handler
_HANDLERS = [
    PBMHandler(),
    PGMHandler(),
    PPMHandler(),
    PAMHandler(),
]


def read_magic(cur: ByteCursor) -> str:
    """Consume exactly two bytes: 'P' and a digit 1-7."""
    start = cur.offset
    raw = cur.read(2)
    if len(raw) != 2 or raw[0] != 0x50 or not (0x31 <= raw[1] <= 0x37):
        raise PnmFormatError("invalid magic number encountered", magic=raw, offset=start)
    return raw.decode("ascii")


def pick_handler(magic: Optional[str]):
    for h in _HANDLERS:
        if h.supports(magic):
            return h
    raise PnmFormatError("invalid magic number encountered", magic=magic)
