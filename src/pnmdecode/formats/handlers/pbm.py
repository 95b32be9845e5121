# pnmdecode/formats/handlers/pbm.py
from typing import Optional

from ...cursor import ByteCursor
from ...headers import parse_bitmap_header
from ...pixels import decode_ascii_bitmap, decode_binary_bitmap
from ...pnm_types import DecodeContext, PnmImage


class PBMHandler:
    """
    Bitmaps:
      - P1: '0'/'1' characters
      - P4: packed bits, MSB first
    """
    magics = {"P1", "P4"}

    @staticmethod
    def supports(magic: Optional[str]) -> bool:
        return (magic or "") in PBMHandler.magics

    def decode(self, cur: ByteCursor, ctx: DecodeContext, magic: str) -> PnmImage:
        header, pix = parse_bitmap_header(cur, ctx, magic)
        if magic == "P1":
            decode_ascii_bitmap(cur, pix, header, ctx)
        else:
            decode_binary_bitmap(cur, pix, header, ctx)
        return PnmImage(width=header.width, height=header.height, pixels=pix,
                        magic=magic, maxval=header.maxval, depth=header.depth)
