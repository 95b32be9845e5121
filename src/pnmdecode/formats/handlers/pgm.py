# pnmdecode/formats/handlers/pgm.py
from typing import Optional

from ...cursor import ByteCursor
from ...headers import parse_classic_header
from ...pixels import decode_ascii_gray, decode_binary_gray
from ...pnm_types import DecodeContext, PnmImage


class PGMHandler:
    """
    Grayscale:
      - P2: ASCII decimal samples
      - P5: 1- or 2-byte binary samples
    """
    magics = {"P2", "P5"}

    @staticmethod
    def supports(magic: Optional[str]) -> bool:
        return (magic or "") in PGMHandler.magics

    def decode(self, cur: ByteCursor, ctx: DecodeContext, magic: str) -> PnmImage:
        header, pix = parse_classic_header(cur, ctx, magic, depth=1)
        if magic == "P2":
            decode_ascii_gray(cur, pix, header)
        else:
            decode_binary_gray(cur, pix, header)
        return PnmImage(width=header.width, height=header.height, pixels=pix,
                        magic=magic, maxval=header.maxval, depth=header.depth)
