"""Closed vocabularies and the decoded header of a TSPLIB file."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import enums as codes


class ProblemKind(Enum):
    TSP = "TSP"
    ATSP = "ATSP"
    HCP = "HCP"
    CVRP = "CVRP"
    SOP = "SOP"
    TOUR = "TOUR"


class WeightKind(Enum):
    EXPLICIT = "EXPLICIT"
    EUC_2D = "EUC_2D"
    EUC_3D = "EUC_3D"
    MAX_2D = "MAX_2D"
    MAX_3D = "MAX_3D"
    MAN_2D = "MAN_2D"
    MAN_3D = "MAN_3D"
    CEIL_2D = "CEIL_2D"
    GEO = "GEO"
    ATT = "ATT"
    XRAY1 = "XRAY1"
    XRAY2 = "XRAY2"

    @property
    def is_explicit(self) -> bool:
        return self is WeightKind.EXPLICIT

    @property
    def coord_dims(self) -> int:
        """Number of coordinates the distance function reads (0 for EXPLICIT)."""
        if self is WeightKind.EXPLICIT:
            return 0
        if self in _THREE_D_KINDS:
            return 3
        return 2

    @property
    def code(self) -> int:
        return _METRIC_CODES[self]


_THREE_D_KINDS = frozenset(
    {
        WeightKind.EUC_3D,
        WeightKind.MAX_3D,
        WeightKind.MAN_3D,
        WeightKind.XRAY1,
        WeightKind.XRAY2,
    }
)

_METRIC_CODES = {
    WeightKind.EUC_2D: codes.METRIC_EUC_2D,
    WeightKind.EUC_3D: codes.METRIC_EUC_3D,
    WeightKind.MAX_2D: codes.METRIC_MAX_2D,
    WeightKind.MAX_3D: codes.METRIC_MAX_3D,
    WeightKind.MAN_2D: codes.METRIC_MAN_2D,
    WeightKind.MAN_3D: codes.METRIC_MAN_3D,
    WeightKind.CEIL_2D: codes.METRIC_CEIL_2D,
    WeightKind.GEO: codes.METRIC_GEO,
    WeightKind.ATT: codes.METRIC_ATT,
    WeightKind.XRAY1: codes.METRIC_XRAY1,
    WeightKind.XRAY2: codes.METRIC_XRAY2,
}


class MatrixLayout(Enum):
    FULL_MATRIX = "FULL_MATRIX"
    UPPER_ROW = "UPPER_ROW"
    LOWER_ROW = "LOWER_ROW"
    UPPER_DIAG_ROW = "UPPER_DIAG_ROW"
    LOWER_DIAG_ROW = "LOWER_DIAG_ROW"
    UPPER_COL = "UPPER_COL"
    LOWER_COL = "LOWER_COL"
    UPPER_DIAG_COL = "UPPER_DIAG_COL"
    LOWER_DIAG_COL = "LOWER_DIAG_COL"

    @property
    def is_triangular(self) -> bool:
        return self is not MatrixLayout.FULL_MATRIX

    @property
    def has_diagonal(self) -> bool:
        return self is MatrixLayout.FULL_MATRIX or "DIAG" in self.value

    @property
    def code(self) -> int:
        return _LAYOUT_CODES[self]

    def token_count(self, dimension: int) -> int:
        """Number of tokens an ``EDGE_WEIGHT_SECTION`` in this layout holds."""
        if self is MatrixLayout.FULL_MATRIX:
            return dimension * dimension
        if self.has_diagonal:
            return dimension * (dimension + 1) // 2
        return dimension * (dimension - 1) // 2


_LAYOUT_CODES = {
    MatrixLayout.FULL_MATRIX: codes.LAYOUT_FULL_MATRIX,
    MatrixLayout.UPPER_ROW: codes.LAYOUT_UPPER_ROW,
    MatrixLayout.LOWER_ROW: codes.LAYOUT_LOWER_ROW,
    MatrixLayout.UPPER_DIAG_ROW: codes.LAYOUT_UPPER_DIAG_ROW,
    MatrixLayout.LOWER_DIAG_ROW: codes.LAYOUT_LOWER_DIAG_ROW,
    MatrixLayout.UPPER_COL: codes.LAYOUT_UPPER_COL,
    MatrixLayout.LOWER_COL: codes.LAYOUT_LOWER_COL,
    MatrixLayout.UPPER_DIAG_COL: codes.LAYOUT_UPPER_DIAG_COL,
    MatrixLayout.LOWER_DIAG_COL: codes.LAYOUT_LOWER_DIAG_COL,
}


class EdgeDataFormat(Enum):
    EDGE_LIST = "EDGE_LIST"
    ADJ_LIST = "ADJ_LIST"


class CoordType(Enum):
    TWOD_COORDS = "TWOD_COORDS"
    THREED_COORDS = "THREED_COORDS"
    NO_COORDS = "NO_COORDS"


class DisplayType(Enum):
    COORD_DISPLAY = "COORD_DISPLAY"
    TWOD_DISPLAY = "TWOD_DISPLAY"
    NO_DISPLAY = "NO_DISPLAY"


class Section(Enum):
    NODE_COORD = "NODE_COORD_SECTION"
    EDGE_WEIGHT = "EDGE_WEIGHT_SECTION"
    EDGE_DATA = "EDGE_DATA_SECTION"
    FIXED_EDGES = "FIXED_EDGES_SECTION"
    DISPLAY_DATA = "DISPLAY_DATA_SECTION"
    DEPOT = "DEPOT_SECTION"
    DEMAND = "DEMAND_SECTION"
    TOUR = "TOUR_SECTION"
    EOF = "EOF"


@dataclass(frozen=True)
class Header:
    """Typed header part.

    ``weight_kind`` is ``None`` only for kinds that carry no weights (HCP and
    TOUR files usually omit ``EDGE_WEIGHT_TYPE``). ``matrix_layout`` is set
    only for explicit weights.
    """

    name: str
    kind: ProblemKind
    dimension: int
    comment: str = ""
    weight_kind: Optional[WeightKind] = None
    matrix_layout: Optional[MatrixLayout] = None
    edge_data_format: Optional[EdgeDataFormat] = None
    coord_type: Optional[CoordType] = None
    display_type: Optional[DisplayType] = None
    capacity: Optional[int] = None

    @property
    def coord_dims(self) -> int:
        """Coordinates per ``NODE_COORD_SECTION`` row."""
        if self.coord_type is CoordType.THREED_COORDS:
            return 3
        if self.coord_type is CoordType.TWOD_COORDS:
            return 2
        if self.weight_kind is not None and self.weight_kind.coord_dims == 3:
            return 3
        return 2

    @property
    def is_symmetric(self) -> bool:
        """Whether ``weight(i, j) == weight(j, i)`` holds for every pair."""
        if self.matrix_layout is not None and self.matrix_layout.is_triangular:
            return True
        if self.weight_kind is not None and not self.weight_kind.is_explicit:
            return True
        return self.kind not in (ProblemKind.ATSP, ProblemKind.SOP)


__all__ = [
    "CoordType",
    "DisplayType",
    "EdgeDataFormat",
    "Header",
    "MatrixLayout",
    "ProblemKind",
    "Section",
    "WeightKind",
]
