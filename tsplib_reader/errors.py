"""Error taxonomy raised by the decoder.

Every failure is terminal for the parse that raised it. Errors carry the
section being decoded, the 1-based input line and, for count mismatches, the
expected and actual token counts so callers can render a diagnostic.
"""

from __future__ import annotations

from typing import Optional


class ParseError(ValueError):
    """Base class of every decode failure."""

    def __init__(
        self,
        message: str,
        *,
        section: Optional[str] = None,
        line: Optional[int] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.section = section
        self.line = line
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        parts = []
        if self.line is not None:
            parts.append(f"line {self.line}")
        if self.section is not None:
            parts.append(self.section)
        prefix = f"[{', '.join(parts)}] " if parts else ""
        text = f"{prefix}{self.message}"
        if self.expected is not None or self.actual is not None:
            text += f" (expected {self.expected}, got {self.actual})"
        return text


class IoFailure(ParseError):
    """The underlying read failed."""


class MalformedHeader(ParseError):
    pass


class MalformedFile(ParseError):
    pass


class DuplicateSection(ParseError):
    pass


class MalformedCoordinate(ParseError):
    pass


class MalformedMatrix(ParseError):
    pass


class MalformedEdgeList(ParseError):
    pass


class MalformedTour(ParseError):
    pass


class InvalidLayoutForKind(ParseError):
    pass


class OutOfRangeId(ParseError):
    """A node id outside ``[1, dimension]`` or a repeated id."""


class DemandCoverageError(MalformedFile):
    """``DEMAND_SECTION`` does not list every node id exactly once."""


class CoordinateIdError(MalformedCoordinate, OutOfRangeId):
    """Bad node id inside a coordinate section."""


class MissingWeights(LookupError):
    """Weights were requested from a problem that has none (HCP, TOUR)."""


__all__ = [
    "CoordinateIdError",
    "DemandCoverageError",
    "DuplicateSection",
    "InvalidLayoutForKind",
    "IoFailure",
    "MalformedCoordinate",
    "MalformedEdgeList",
    "MalformedFile",
    "MalformedHeader",
    "MalformedMatrix",
    "MalformedTour",
    "MissingWeights",
    "OutOfRangeId",
    "ParseError",
]
