# pnmdecode/pnm_types.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from .errors import PnmError

# Dimension sentinel reported by a failed decode.
FAILED_DIMENSION = -1

# Canonical bitmap pixels (RGBA, R in the most significant byte).
BLACK = 0x000000FF
WHITE = 0xFFFFFFFF
OPAQUE = 0xFF


@dataclass
class DecodeContext:
    source: str
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def debug(self) -> bool:
        return bool(self.params.get("debug", False))


@dataclass(frozen=True)
class PnmHeader:
    magic: str
    width: int
    height: int
    maxval: int
    depth: int

    @property
    def has_alpha(self) -> bool:
        return self.depth in (2, 4)

    @property
    def sample_bytes(self) -> int:
        return 2 if self.maxval > 255 else 1


@dataclass
class PnmImage:
    """
    Decoded image.

    pixels: flat row-major numpy uint32 array of width*height RGBA words
            (0xRRGGBBAA). magic/maxval/depth describe the source file only;
            samples are always normalized to 8 bits per channel.
    """
    width: int
    height: int
    pixels: np.ndarray
    magic: str = ""
    maxval: int = 255
    depth: int = 4

    def __repr__(self):
        return f"<PnmImage {self.magic} {self.width}x{self.height} maxval={self.maxval} depth={self.depth}>"

    def pixel(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return int(self.pixels[y * self.width + x])

    def rgba(self) -> np.ndarray:
        """(height, width, 4) uint8 array in R, G, B, A channel order."""
        return self.pixels.astype(">u4").view(np.uint8).reshape(self.height, self.width, 4)


@dataclass
class DecodeResult:
    """Either an image or an error, never both."""
    image: Optional[PnmImage] = None
    error: Optional[PnmError] = None

    @property
    def ok(self) -> bool:
        return self.image is not None

    @property
    def width(self) -> int:
        return self.image.width if self.image is not None else FAILED_DIMENSION

    @property
    def height(self) -> int:
        return self.image.height if self.image is not None else FAILED_DIMENSION

    @property
    def pixels(self) -> Optional[np.ndarray]:
        return self.image.pixels if self.image is not None else None

    def unwrap(self) -> PnmImage:
        if self.image is None:
            raise self.error if self.error is not None else PnmError("decode failed")
        return self.image
