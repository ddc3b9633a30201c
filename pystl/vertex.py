# pystl/vertex.py
"""
Coordinate triples: the Vertex (a point on a facet) and the Normal (the
facet's outward direction).

Both types are stored as three IEEE-754 single precision values, the same
width the binary format uses, so a value survives a binary round trip
unchanged. They share one codec (the helpers below) and differ only in the
keyword that frames their text form and in Normal.invert().

Text form:
      vertex <x> <y> <z>
      facet normal <x> <y> <z>

Binary form: three little-endian float32, X then Y then Z (12 bytes).
"""
from __future__ import annotations

import re
import struct
from dataclasses import dataclass
from typing import IO, Any, Iterator, Optional, Tuple, Union

import numpy as np

from .errors import CoordinateParseError, TruncatedError, VertexFormatError
from .streams import read_exact, write_str

Vec3 = Tuple[float, float, float]

VERTEX_SIZE = 12

_TRIPLE = struct.Struct("<3f")

_LINE_RE = re.compile(
    r"^\s*(?P<keyword>facet\s+normal|vertex)\s+(?P<X>\S+)\s+(?P<Y>\S+)\s+(?P<Z>\S+)\s*$",
    re.IGNORECASE,
)

# signed decimal / exponential literal; nan and inf are what we write for non-finite values
_NUMBER_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|nan|inf(?:inity)?)",
    re.IGNORECASE,
)


# -----------------------------
# Shared coordinate codec
# -----------------------------

def to_f32(value: float) -> float:
    """Round a number to the nearest float32 and hand it back as a Python float."""
    return float(np.float32(value))


def format_coordinate(value: float) -> str:
    """Shortest plain decimal that reads back as the same float32 ("0", "-10", "0.23")."""
    return np.format_float_positional(np.float32(value), trim="-")


def parse_coordinate(axis: str, token: str) -> float:
    if not _NUMBER_RE.fullmatch(token):
        raise CoordinateParseError(axis, token)
    return to_f32(float(token))


def parse_line(line: str) -> Tuple[str, Vec3]:
    """Split a ``vertex``/``facet normal`` line into (keyword, (x, y, z)).

    The keyword comes back lower-cased with single spaces.
    """
    match = _LINE_RE.match(line)
    if match is None:
        raise VertexFormatError(line)
    keyword = " ".join(match.group("keyword").lower().split())
    xyz = (
        parse_coordinate("X", match.group("X")),
        parse_coordinate("Y", match.group("Y")),
        parse_coordinate("Z", match.group("Z")),
    )
    return keyword, xyz


def read_triple(stream: IO[bytes]) -> Optional[Vec3]:
    """Read 12 bytes as (x, y, z). None on a clean end of stream."""
    data = read_exact(stream, VERTEX_SIZE)
    if not data:
        return None
    if len(data) != VERTEX_SIZE:
        raise TruncatedError(VERTEX_SIZE, len(data))
    return _TRIPLE.unpack(data)


def pack_triple(xyz: Vec3) -> bytes:
    return _TRIPLE.pack(*xyz)


def format_triple(keyword: str, xyz: Vec3) -> str:
    return f"{keyword} " + " ".join(format_coordinate(c) for c in xyz)


def _delta(dx: Union["Vertex", "Normal", Vec3, float], dy: Optional[float], dz: Optional[float]) -> Vec3:
    if dy is None and dz is None:
        x, y, z = dx  # type: ignore[misc]
        return (x, y, z)
    if dy is None or dz is None:
        raise TypeError("shift() takes a single vector or three components")
    return (dx, dy, dz)  # type: ignore[return-value]


# --------------
# Value types
# --------------

@dataclass(eq=False)
class Vertex:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        self.x, self.y, self.z = to_f32(self.x), to_f32(self.y), to_f32(self.z)

    # ---- codec ----
    @classmethod
    def read_text(cls, line: Optional[str]) -> Optional["Vertex"]:
        """Parse one text line. None means there was no line left to read."""
        if line is None:
            return None
        _, xyz = parse_line(line)
        return cls(*xyz)

    @classmethod
    def read_binary(cls, stream: IO[bytes]) -> Optional["Vertex"]:
        xyz = read_triple(stream)
        return None if xyz is None else cls(*xyz)

    def write_text(self, sink: IO[Any]) -> None:
        write_str(sink, f"\t\t\t{self}\n")

    def write_binary(self, sink: IO[bytes]) -> None:
        sink.write(pack_triple(self.as_tuple()))

    # ---- transforms ----
    def shift(self, dx: Union["Vertex", Vec3, float], dy: Optional[float] = None,
              dz: Optional[float] = None) -> "Vertex":
        ox, oy, oz = _delta(dx, dy, dz)
        self.x = to_f32(self.x + ox)
        self.y = to_f32(self.y + oy)
        self.z = to_f32(self.z + oz)
        return self

    def copy(self) -> "Vertex":
        return Vertex(self.x, self.y, self.z)

    def as_tuple(self) -> Vec3:
        return (self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        return iter(self.as_tuple())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z  # type: ignore[attr-defined]

    def __str__(self) -> str:
        return format_triple("vertex", self.as_tuple())


@dataclass(eq=False)
class Normal:
    """Facet direction. Same layout as Vertex, written as ``facet normal``."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        self.x, self.y, self.z = to_f32(self.x), to_f32(self.y), to_f32(self.z)

    @classmethod
    def from_vertex(cls, vertex: Optional[Vertex]) -> Optional["Normal"]:
        if vertex is None:
            return None
        return cls(vertex.x, vertex.y, vertex.z)

    # ---- codec ----
    @classmethod
    def read_text(cls, line: Optional[str]) -> Optional["Normal"]:
        if line is None:
            return None
        _, xyz = parse_line(line)
        return cls(*xyz)

    @classmethod
    def read_binary(cls, stream: IO[bytes]) -> Optional["Normal"]:
        xyz = read_triple(stream)
        return None if xyz is None else cls(*xyz)

    def write_text(self, sink: IO[Any]) -> None:
        write_str(sink, f"\tfacet {self}\n")

    def write_binary(self, sink: IO[bytes]) -> None:
        sink.write(pack_triple(self.as_tuple()))

    # ---- transforms ----
    def invert(self) -> "Normal":
        """Flip the direction in place."""
        self.x, self.y, self.z = -self.x, -self.y, -self.z
        return self

    def copy(self) -> "Normal":
        return Normal(self.x, self.y, self.z)

    def as_tuple(self) -> Vec3:
        return (self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        return iter(self.as_tuple())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z  # type: ignore[attr-defined]

    def __str__(self) -> str:
        return format_triple("normal", self.as_tuple())
