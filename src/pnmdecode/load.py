# pnmdecode/load.py
"""
Entry points.

    result = load("image.pam")
    if result.ok:
        rgba = result.image.rgba()

decode() accepts raw bytes, a path, or an already-open binary stream. Streams
opened here are closed on every exit path; streams handed in by the caller
stay open. A failed call yields DecodeResult(error=...), with width/height
reported as -1, and sends exactly one Diagnostic to the sink.
"""

import io
import os
from typing import Any, BinaryIO, Dict, Optional, Union

from .cursor import DEFAULT_CHUNK_SIZE, ByteCursor
from .diagnostics import Diagnostic, Sink, _debug, stderr_sink
from .errors import PnmAllocationError, PnmError, PnmIOError
from .formats import pick_handler, read_magic
from .pnm_types import DecodeContext, DecodeResult, PnmImage

Source = Union[bytes, bytearray, memoryview, str, "os.PathLike[str]", BinaryIO]


def _decode_stream(stream: BinaryIO, ctx: DecodeContext) -> PnmImage:
    cur = ByteCursor(stream, chunk_size=int(ctx.params.get("chunk_size", DEFAULT_CHUNK_SIZE)))
    magic = read_magic(cur)
    handler = pick_handler(magic)
    if ctx.debug:
        _debug(f"[PNM][DBG] {ctx.source}: magic={magic} handler={type(handler).__name__}")
    return handler.decode(cur, ctx, magic)


def _fail(err: PnmError, ctx: DecodeContext, sink: Sink) -> DecodeResult:
    sink(Diagnostic.from_error(err, ctx.source))
    return DecodeResult(error=err)


def _run(stream: BinaryIO, ctx: DecodeContext, sink: Sink) -> DecodeResult:
    try:
        image = _decode_stream(stream, ctx)
    except PnmError as e:
        return _fail(e, ctx, sink)
    except MemoryError as e:
        return _fail(PnmAllocationError(f"out of memory while decoding: {e}"), ctx, sink)
    except OSError as e:
        return _fail(PnmIOError(f"read failed: {e}"), ctx, sink)
    return DecodeResult(image=image)


def load(path: Union[str, "os.PathLike[str]"], *, sink: Optional[Sink] = None,
         params: Optional[Dict[str, Any]] = None) -> DecodeResult:
    """Open `path`, decode it, and close it again."""
    sink = stderr_sink if sink is None else sink
    ctx = DecodeContext(source=os.fspath(path), params=dict(params or {}))
    try:
        f = open(path, "rb")
    except OSError as e:
        return _fail(PnmIOError(f"error opening file '{ctx.source}': {e.strerror or e}", path=ctx.source), ctx, sink)
    with f:
        return _run(f, ctx, sink)


def decode(source: Source, *, sink: Optional[Sink] = None,
           params: Optional[Dict[str, Any]] = None, name: Optional[str] = None) -> DecodeResult:
    """
    Decode a path, a bytes-like object or a readable binary stream.

    A stream passed in by the caller is not closed. Its read position after
    the call is unspecified: the cursor reads ahead in chunks of
    params["chunk_size"] bytes and may consume data past the end of the image.
    """
    if isinstance(source, (str, os.PathLike)):
        return load(source, sink=sink, params=params)

    sink = stderr_sink if sink is None else sink
    if isinstance(source, (bytes, bytearray, memoryview)):
        ctx = DecodeContext(source=name or "<bytes>", params=dict(params or {}))
        with io.BytesIO(bytes(source)) as stream:
            return _run(stream, ctx, sink)

    ctx = DecodeContext(source=name or str(getattr(source, "name", "<stream>")), params=dict(params or {}))
    return _run(source, ctx, sink)
