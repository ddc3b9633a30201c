# pystl/facet.py
"""
A facet is one triangle: a Normal plus exactly three Vertex values, and a
16-bit attribute field that only the binary format stores.

Text layout (framing lines are skipped, not validated, on read):

      facet normal nx ny nz
        outer loop
          vertex x y z     (x3)
        endloop
      endfacet

Binary layout, 50 bytes: normal (12) + 3 vertices (36) + uint16 attribute (2).

A facet keeps its own copies of the normal and vertices it is built from.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import IO, Any, Iterable, Iterator, List, Optional, Union

from .errors import MissingNormalError, TruncatedError, VertexFormatError
from .streams import read_exact, read_line, write_str
from .vertex import VERTEX_SIZE, Normal, Vec3, Vertex, parse_line

FACET_SIZE = 50
ATTRIBUTE_SIZE = 2

_ATTRIBUTE = struct.Struct("<H")


def _is_end_of_solid(line: str) -> bool:
    return line.strip().lower().startswith("endsolid")


@dataclass(eq=False)
class Facet:
    normal: Normal
    vertices: List[Vertex]
    attribute_byte_count: int = 0

    def __post_init__(self) -> None:
        if self.normal is None:
            raise MissingNormalError()
        self.normal = self.normal.copy()
        self.vertices = [v.copy() for v in self.vertices]
        if len(self.vertices) != 3:
            raise ValueError(f"A facet needs exactly 3 vertices, got {len(self.vertices)}")
        if not 0 <= self.attribute_byte_count <= 0xFFFF:
            raise ValueError(f"Attribute byte count must fit in 16 bits, got {self.attribute_byte_count}")

    # ---- text codec ----
    @classmethod
    def read_text(cls, stream: IO[Any]) -> Optional["Facet"]:
        """Read one facet, or return None once the facets are exhausted.

        The end is either the end of the input or an ``endsolid`` line.
        """
        line = read_line(stream)
        if line is None or _is_end_of_solid(line):
            return None
        keyword, xyz = parse_line(line)
        if keyword != "facet normal":
            raise MissingNormalError(line)
        normal = Normal(*xyz)

        read_line(stream)  # outer loop
        vertices = []
        for _ in range(3):
            line = read_line(stream)
            if line is None:
                raise VertexFormatError(None)
            vertices.append(Vertex.read_text(line))
        read_line(stream)  # endloop
        read_line(stream)  # endfacet

        return cls(normal, vertices)

    def write_text(self, sink: IO[Any]) -> None:
        self.normal.write_text(sink)
        write_str(sink, "\t\touter loop\n")
        for v in self.vertices:
            v.write_text(sink)
        write_str(sink, "\t\tendloop\n")
        write_str(sink, "\tendfacet\n")

    # ---- binary codec ----
    @classmethod
    def read_binary(cls, stream: IO[bytes]) -> Optional["Facet"]:
        """Read one 50-byte record, or None on a clean end of stream."""
        consumed = 0
        try:
            normal = Normal.read_binary(stream)
            if normal is None:
                return None
            consumed += VERTEX_SIZE

            vertices = []
            for _ in range(3):
                v = Vertex.read_binary(stream)
                if v is None:
                    raise TruncatedError(FACET_SIZE, consumed)
                vertices.append(v)
                consumed += VERTEX_SIZE
        except TruncatedError as e:
            if e.expected == FACET_SIZE:
                raise
            raise TruncatedError(FACET_SIZE, consumed + e.actual) from e

        data = read_exact(stream, ATTRIBUTE_SIZE)
        if len(data) != ATTRIBUTE_SIZE:
            raise TruncatedError(FACET_SIZE, consumed + len(data))
        (attribute_byte_count,) = _ATTRIBUTE.unpack(data)

        return cls(normal, vertices, attribute_byte_count)

    def write_binary(self, sink: IO[bytes]) -> None:
        self.normal.write_binary(sink)
        for v in self.vertices:
            v.write_binary(sink)
        sink.write(_ATTRIBUTE.pack(self.attribute_byte_count))

    # ---- transforms ----
    def shift(self, dx: Union[Vertex, Vec3, float], dy: Optional[float] = None,
              dz: Optional[float] = None) -> "Facet":
        for v in self.vertices:
            v.shift(dx, dy, dz)
        return self

    def invert(self) -> "Facet":
        self.normal.invert()
        return self

    def copy(self) -> "Facet":
        return Facet(self.normal, self.vertices, self.attribute_byte_count)

    # ---- container / comparison ----
    def __iter__(self) -> Iterator[Vertex]:
        return iter(self.vertices)

    def __len__(self) -> int:
        return len(self.vertices)

    def __eq__(self, other: object) -> bool:
        # vertex order matters; the attribute field is binary-only and ignored
        if not isinstance(other, Facet):
            return NotImplemented
        return (
            self.normal == other.normal
            and len(self.vertices) == len(other.vertices)
            and all(a == b for a, b in zip(self.vertices, other.vertices))
        )

    def __str__(self) -> str:
        return f"facet {self.normal}"


def copy_facets(facets: Iterable[Facet]) -> List[Facet]:
    return [f.copy() for f in facets]
