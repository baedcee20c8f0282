"""Typed problem model."""

from .problem import Problem
from .types import (
    CoordType,
    DisplayType,
    EdgeDataFormat,
    Header,
    MatrixLayout,
    ProblemKind,
    Section,
    WeightKind,
)
from .views import LazySequence
from .weights import ComputedWeights, EdgeWeights, ExplicitWeights, NoWeights

__all__ = [
    "ComputedWeights",
    "CoordType",
    "DisplayType",
    "EdgeDataFormat",
    "EdgeWeights",
    "ExplicitWeights",
    "Header",
    "LazySequence",
    "MatrixLayout",
    "NoWeights",
    "Problem",
    "ProblemKind",
    "Section",
    "WeightKind",
]
