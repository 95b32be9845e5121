# pnmdecode/formats/handlers/ppm.py
from typing import Optional

from ...cursor import ByteCursor
from ...headers import parse_classic_header
from ...pixels import decode_ascii_color, decode_binary_color
from ...pnm_types import DecodeContext, PnmImage


class PPMHandler:
    """
    Color:
      - P3: ASCII decimal R G B triples
      - P6: 1- or 2-byte binary R G B samples
    """
    magics = {"P3", "P6"}

    @staticmethod
    def supports(magic: Optional[str]) -> bool:
        return (magic or "") in PPMHandler.magics

    def decode(self, cur: ByteCursor, ctx: DecodeContext, magic: str) -> PnmImage:
        header, pix = parse_classic_header(cur, ctx, magic, depth=3)
        if magic == "P3":
            decode_ascii_color(cur, pix, header)
        else:
            decode_binary_color(cur, pix, header)
        return PnmImage(width=header.width, height=header.height, pixels=pix,
                        magic=magic, maxval=header.maxval, depth=header.depth)
