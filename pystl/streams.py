# pystl/streams.py
"""Small helpers so the codecs work on both text and binary file objects.

Readers take anything with ``readline``/``read`` (``open(..., "rb")``,
``io.BytesIO``, ``io.StringIO``...). Writers encode to ASCII when the sink
is a byte stream; characters outside ASCII are written as ``?``. None of
these helpers ever close the stream.
"""
from __future__ import annotations

import io
from typing import IO, Any, Optional

ENCODING = "ascii"


def is_text_stream(stream: IO[Any]) -> bool:
    return isinstance(stream, io.TextIOBase) or hasattr(stream, "encoding")


def read_line(stream: IO[Any]) -> Optional[str]:
    """Next line without its terminator, or None at end of input."""
    line = stream.readline()
    if not line:
        return None
    if isinstance(line, bytes):
        line = line.decode(ENCODING, errors="replace")
    return line.rstrip("\r\n")


def read_exact(stream: IO[Any], size: int) -> bytes:
    """Read up to ``size`` bytes, retrying short reads until EOF."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def stream_length(stream: IO[Any]) -> Optional[int]:
    """Total length of a seekable stream (position is preserved), else None."""
    seekable = getattr(stream, "seekable", None)
    if seekable is None or not seekable():
        return None
    pos = stream.tell()
    end = stream.seek(0, io.SEEK_END)
    stream.seek(pos)
    return end


def write_str(sink: IO[Any], text: str) -> None:
    if is_text_stream(sink):
        sink.write(text)
    else:
        sink.write(text.encode(ENCODING, errors="replace"))
