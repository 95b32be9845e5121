# pnmdecode/diagnostics.py
"""
Diagnostic sinks.

A sink is any callable taking a Diagnostic. decode() reports exactly one
Diagnostic per failed call; the default sink prints it to stderr.
"""
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .errors import PnmError


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    message: str
    source: str = ""
    context: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_error(cls, err: PnmError, source: str = "") -> "Diagnostic":
        return cls(kind=err.kind, message=err.message, source=source, context=dict(err.context))

    def render(self) -> str:
        where = f" ({self.source})" if self.source else ""
        off = self.context.get("offset")
        at = f" at byte {off}" if off is not None else ""
        return f"[error] Error reading pnm file{where}; {self.message}{at}."


Sink = Callable[[Diagnostic], None]


def stderr_sink(diag: Diagnostic) -> None:
    print(diag.render(), file=sys.stderr)


def null_sink(diag: Diagnostic) -> None:
    return None


class CollectingSink:
    """Keeps every diagnostic it receives; handy for tests and batch tools."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def __call__(self, diag: Diagnostic) -> None:
        self.diagnostics.append(diag)

    def __len__(self):
        return len(self.diagnostics)

    @property
    def last(self) -> Optional[Diagnostic]:
        return self.diagnostics[-1] if self.diagnostics else None


def _debug(msg: str) -> None:
    print(msg.rstrip(), file=sys.stderr, flush=True)
