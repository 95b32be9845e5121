# pnmdecode/errors.py
from typing import Any, Dict, Optional


class PnmError(Exception):
    """
    Base class for every decode failure.

    kind:    short failure class ("io", "format", "range", "truncation", "allocation")
    message: human-readable diagnostic
    context: structured extras (offset, field, value, limits, ...)
    """
    kind = "error"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context

    @property
    def offset(self) -> Optional[int]:
        return self.context.get("offset")

    def __repr__(self):
        return f"<{type(self).__name__} kind={self.kind} message={self.message!r} context={self.context}>"


class PnmIOError(PnmError):
    kind = "io"


class PnmFormatError(PnmError):
    kind = "format"


class PnmRangeError(PnmError):
    kind = "range"


class PnmTruncationError(PnmError):
    kind = "truncation"


class PnmAllocationError(PnmError):
    kind = "allocation"
