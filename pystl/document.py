# pystl/document.py
"""
STL documents: an optional solid name plus an ordered list of facets.

Reading picks the format from the first five bytes: a stream that starts
with ``solid`` (any case) is parsed as text, anything else as binary. The
binary header is an arbitrary 80-byte comment, so a binary file whose
header happens to begin with "solid" is read as text and fails with a
HeaderFormatError or VertexFormatError. That ambiguity is part of the
format; there is no second-guessing heuristic here.

A document copies the facets it is constructed with, so two documents never
share Facet objects.

Example:
    doc = Document.open("part.stl")
    doc.shift_all(0, 0, 10)
    doc.save_as_binary("part_raised.stl")

    with open("a.stl", "rb") as src, open("a_text.stl", "wb") as dst:
        Document.copy_as_text(src, dst)
"""
from __future__ import annotations

import enum
import io
import logging
import re
import struct
from dataclasses import dataclass, field
from typing import IO, Any, Iterable, Iterator, List, Optional, Union

from .errors import HeaderFormatError, TruncatedError
from .facet import Facet, copy_facets
from .streams import ENCODING, is_text_stream, read_exact, read_line, stream_length, write_str
from .vertex import Vec3, Vertex

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
COUNT_SIZE = 4
HEADER_TEXT = b"Binary STL created by pystl."

_SOLID = "solid"
_HEADER_RE = re.compile(r"^\s*solid(?:\s+(?P<name>.*?))?\s*$", re.IGNORECASE)
_COUNT = struct.Struct("<I")


class StlFormat(enum.Enum):
    TEXT = "text"
    BINARY = "binary"


@dataclass(eq=False)
class Document:
    name: str = ""
    facets: List[Facet] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.name is None:
            self.name = ""
        self.facets = copy_facets(self.facets)

    # ---- format detection ----
    @staticmethod
    def detect_format(stream: IO[Any]) -> StlFormat:
        """Peek at the first five bytes. The stream is rewound to 0 afterwards."""
        stream.seek(0)
        prefix = stream.read(len(_SOLID))
        stream.seek(0)
        if isinstance(prefix, bytes):
            prefix = prefix.decode("ascii", errors="replace")
        return StlFormat.TEXT if prefix.lower() == _SOLID else StlFormat.BINARY

    @classmethod
    def is_text(cls, stream: IO[Any]) -> bool:
        return cls.detect_format(stream) is StlFormat.TEXT

    @classmethod
    def is_binary(cls, stream: IO[Any]) -> bool:
        return cls.detect_format(stream) is StlFormat.BINARY

    # ---- reading ----
    @classmethod
    def read(cls, stream: IO[Any]) -> "Document":
        """Read a text or binary STL from ``stream``. The stream is left open."""
        fmt = cls.detect_format(stream)
        logger.debug("Detected %s STL", fmt.value)
        # a text stream cannot hold binary STL; let the header check report it
        if fmt is StlFormat.TEXT or is_text_stream(stream):
            return cls.read_text(stream)
        return cls.read_binary(stream)

    @classmethod
    def read_text(cls, stream: IO[Any]) -> "Document":
        header = read_line(stream)
        match = _HEADER_RE.match(header) if header is not None else None
        if match is None:
            raise HeaderFormatError(header)

        doc = cls(name=match.group("name") or "")
        while True:
            facet = Facet.read_text(stream)
            if facet is None:
                break
            doc.facets.append(facet)

        logger.debug("Read text solid %r with %d facets", doc.name, len(doc.facets))
        return doc

    @classmethod
    def read_binary(cls, stream: IO[bytes]) -> "Document":
        preamble = read_exact(stream, HEADER_SIZE + COUNT_SIZE)
        if len(preamble) != HEADER_SIZE + COUNT_SIZE:
            raise TruncatedError(HEADER_SIZE + COUNT_SIZE, len(preamble))
        (declared,) = _COUNT.unpack_from(preamble, HEADER_SIZE)

        # the declared count is advisory; read until the data runs out
        end = stream_length(stream)
        doc = cls()
        while end is None or stream.tell() != end:
            facet = Facet.read_binary(stream)
            if facet is None:
                break
            doc.facets.append(facet)

        if declared != len(doc.facets):
            logger.debug("Binary header declares %d facets but %d were read", declared, len(doc.facets))
        logger.debug("Read binary solid with %d facets", len(doc.facets))
        return doc

    @classmethod
    def read_from_string(cls, text: Optional[str]) -> Optional["Document"]:
        """Parse a complete text STL held in a string. Empty input gives None."""
        if not text:
            return None
        return cls.read_text(io.StringIO(text))

    @classmethod
    def open(cls, path: str) -> "Document":
        if not path:
            raise ValueError("path must not be empty")
        with open(path, "rb") as f:
            return cls.read(f)

    # ---- writing ----
    def write_text(self, sink: IO[Any]) -> None:
        write_str(sink, f"{self}\n")
        for facet in self.facets:
            facet.write_text(sink)
        write_str(sink, f"end{self}")

    def write_binary(self, sink: IO[bytes]) -> None:
        sink.write(HEADER_TEXT.ljust(HEADER_SIZE, b"\0"))
        sink.write(_COUNT.pack(len(self.facets)))
        for facet in self.facets:
            facet.write_binary(sink)

    def to_text(self) -> str:
        buf = io.StringIO()
        self.write_text(buf)
        return buf.getvalue()

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.write_binary(buf)
        return buf.getvalue()

    def save_as_text(self, path: str) -> None:
        with open(path, "w", encoding=ENCODING, errors="replace", newline="\n") as f:
            self.write_text(f)

    def save_as_binary(self, path: str) -> None:
        with open(path, "wb") as f:
            self.write_binary(f)

    @classmethod
    def copy_as_text(cls, source: IO[Any], destination: IO[Any]) -> "Document":
        doc = cls.read(source)
        doc.write_text(destination)
        return doc

    @classmethod
    def copy_as_binary(cls, source: IO[Any], destination: IO[bytes]) -> "Document":
        doc = cls.read(source)
        doc.write_binary(destination)
        return doc

    # ---- composition / transforms ----
    def append_facets(self, facets: Iterable[Facet]) -> "Document":
        """Append copies of ``facets`` (another Document works too), in order."""
        self.facets.extend(copy_facets(facets))
        return self

    def shift_all(self, dx: Union[Vertex, Vec3, float], dy: Optional[float] = None,
                  dz: Optional[float] = None) -> "Document":
        for facet in self.facets:
            facet.shift(dx, dy, dz)
        return self

    def invert_all(self) -> "Document":
        for facet in self.facets:
            facet.invert()
        return self

    def copy(self) -> "Document":
        return Document(self.name, self.facets)

    # ---- container / comparison ----
    def __iter__(self) -> Iterator[Facet]:
        return iter(self.facets)

    def __len__(self) -> int:
        return len(self.facets)

    def __getitem__(self, index: int) -> Facet:
        return self.facets[index]

    def __eq__(self, other: object) -> bool:
        # facet i is compared with facet i; reordering makes documents unequal
        if not isinstance(other, Document):
            return NotImplemented
        return (
            self.name == other.name
            and len(self.facets) == len(other.facets)
            and all(a == b for a, b in zip(self.facets, other.facets))
        )

    def __str__(self) -> str:
        return f"solid {self.name}"
