# pystl/errors.py
"""Exceptions raised while decoding STL data.

Every codec error is a ``ValueError`` so callers that only care about
"bad input" can catch that, while the subclasses carry the details.
"""
from __future__ import annotations

from typing import Optional


class StlError(ValueError):
    """Base class for malformed STL input."""


class HeaderFormatError(StlError):
    def __init__(self, line: Optional[str]) -> None:
        self.line = line or ""
        super().__init__(f'Invalid STL header, expected "solid [name]" but found "{self.line}".')


class VertexFormatError(StlError):
    def __init__(self, line: Optional[str]) -> None:
        self.line = line
        if line is None:
            super().__init__("Expected a vertex line but reached the end of the data.")
        else:
            super().__init__(f"Vertex is not formatted correctly: {line}")


class CoordinateParseError(StlError):
    def __init__(self, axis: str, token: str) -> None:
        self.axis = axis
        self.token = token
        super().__init__(f"Could not parse {axis} coordinate as a number from value: {token}")


class TruncatedError(StlError):
    """Binary data ended in the middle of a fixed-size record."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Truncated binary STL data. Expected {expected} bytes but found {actual}.")


class MissingNormalError(StlError):
    def __init__(self, line: Optional[str] = None) -> None:
        self.line = line
        if line is None:
            super().__init__("Facet has no normal.")
        else:
            super().__init__(f'Facet has no normal, expected "facet normal" but found "{line}".')
