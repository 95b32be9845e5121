# pnmdecode/formats/handlers/pam.py
from typing import Optional

from ...cursor import ByteCursor
from ...headers import parse_pam_header
from ...pixels import decode_binary_by_depth
from ...pnm_types import DecodeContext, PnmImage


class PAMHandler:
    """
    P7: keyed header, binary samples; DEPTH picks the layout
    (1 gray, 2 gray+alpha, 3 RGB, 4 RGBA). TUPLTYPE is ignored.
    """
    magics = {"P7"}

    @staticmethod
    def supports(magic: Optional[str]) -> bool:
        return (magic or "") in PAMHandler.magics

    def decode(self, cur: ByteCursor, ctx: DecodeContext, magic: str) -> PnmImage:
        header, pix = parse_pam_header(cur, ctx, magic)
        decode_binary_by_depth(cur, pix, header)
        return PnmImage(width=header.width, height=header.height, pixels=pix,
                        magic=magic, maxval=header.maxval, depth=header.depth)
