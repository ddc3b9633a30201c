"""
pystl: read and write STL (STereoLithography) files, text and binary.

    from pystl import Document
    doc = Document.open("part.stl")
    doc.invert_all()
    doc.save_as_text("part_flipped.stl")
"""
from .document import COUNT_SIZE, HEADER_SIZE, HEADER_TEXT, Document, StlFormat
from .errors import (
    CoordinateParseError,
    HeaderFormatError,
    MissingNormalError,
    StlError,
    TruncatedError,
    VertexFormatError,
)
from .facet import FACET_SIZE, Facet
from .vertex import VERTEX_SIZE, Normal, Vertex

__version__ = "0.1.0"

__all__ = [
    "Document",
    "StlFormat",
    "Facet",
    "Vertex",
    "Normal",
    "StlError",
    "HeaderFormatError",
    "VertexFormatError",
    "CoordinateParseError",
    "TruncatedError",
    "MissingNormalError",
    "HEADER_SIZE",
    "HEADER_TEXT",
    "COUNT_SIZE",
    "FACET_SIZE",
    "VERTEX_SIZE",
]
