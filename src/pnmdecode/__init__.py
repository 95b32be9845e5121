from .diagnostics import CollectingSink, Diagnostic, null_sink, stderr_sink
from .errors import (
    PnmAllocationError,
    PnmError,
    PnmFormatError,
    PnmIOError,
    PnmRangeError,
    PnmTruncationError,
)
from .load import decode, load
from .normalize import scale
from .pnm_types import BLACK, FAILED_DIMENSION, WHITE, DecodeResult, PnmHeader, PnmImage

__version__ = "0.1.0"
