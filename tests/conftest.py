"""Shared fixtures and STL builders for the pystl test suite."""

from __future__ import annotations

import io
import logging
import struct

import pytest

from pystl import Document, Facet, Normal, Vertex

# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

SCENARIO_TEXT = (
    "solid T\n"
    "facet normal 0 0 1\n"
    "outer loop\n"
    "vertex 0 0 0\n"
    "vertex -10 -10 0\n"
    "vertex -10 0 0\n"
    "endloop\n"
    "endfacet\n"
    "endsolid T"
)

SCENARIO_WRITTEN = (
    "solid T\n"
    "\tfacet normal 0 0 1\n"
    "\t\touter loop\n"
    "\t\t\tvertex 0 0 0\n"
    "\t\t\tvertex -10 -10 0\n"
    "\t\t\tvertex -10 0 0\n"
    "\t\tendloop\n"
    "\tendfacet\n"
    "endsolid T"
)


def cube_triangles(size: float = 10.0) -> list:
    """12 (normal, v1, v2, v3) tuples forming a cube [0,size]^3."""
    s = size
    verts = [
        (0, 0, 0), (s, 0, 0), (s, s, 0), (0, s, 0),
        (0, 0, s), (s, 0, s), (s, s, s), (0, s, s),
    ]
    faces = [
        ((0, 0, -1), (0, 2, 1)), ((0, 0, -1), (0, 3, 2)),
        ((0, 0, 1), (4, 5, 6)), ((0, 0, 1), (4, 6, 7)),
        ((0, -1, 0), (0, 1, 5)), ((0, -1, 0), (0, 5, 4)),
        ((0, 1, 0), (2, 3, 7)), ((0, 1, 0), (2, 7, 6)),
        ((-1, 0, 0), (0, 4, 7)), ((-1, 0, 0), (0, 7, 3)),
        ((1, 0, 0), (1, 2, 6)), ((1, 0, 0), (1, 6, 5)),
    ]
    return [(n, verts[a], verts[b], verts[c]) for n, (a, b, c) in faces]


def make_facet(normal, v1, v2, v3, attribute_byte_count: int = 0) -> Facet:
    return Facet(Normal(*normal), [Vertex(*v1), Vertex(*v2), Vertex(*v3)], attribute_byte_count)


def make_document(name: str = "cube", triangles=None) -> Document:
    if triangles is None:
        triangles = cube_triangles()
    return Document(name, [make_facet(*t) for t in triangles])


def make_binary_stl(triangles, attributes=None, declared=None) -> bytes:
    """Hand-packed binary STL, independent of the writer under test."""
    header = b"\x00" * 80
    count = struct.pack("<I", len(triangles) if declared is None else declared)
    body = b""
    for i, (n, v1, v2, v3) in enumerate(triangles):
        attr = 0 if attributes is None else attributes[i]
        body += struct.pack("<3f", *n) + struct.pack("<9f", *v1, *v2, *v3) + struct.pack("<H", attr)
    return header + count + body


def make_text_stl(name, triangles) -> str:
    lines = [f"solid {name}"]
    for n, v1, v2, v3 in triangles:
        lines.append("  facet normal %g %g %g" % n)
        lines.append("    outer loop")
        for v in (v1, v2, v3):
            lines.append("      vertex %g %g %g" % v)
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append(f"endsolid {name}")
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cube_doc() -> Document:
    return make_document()


@pytest.fixture
def cube_text_stream() -> io.BytesIO:
    return io.BytesIO(make_text_stl("cube", cube_triangles()).encode("ascii"))


@pytest.fixture
def cube_binary_stream() -> io.BytesIO:
    return io.BytesIO(make_binary_stl(cube_triangles()))


@pytest.fixture(autouse=True)
def _reset_pystl_logger():
    yield
    logger = logging.getLogger("pystl")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
