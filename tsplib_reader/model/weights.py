"""Resolved edge-weight accessors.

The weight source is chosen once when a problem is assembled: either an
explicit dense matrix decoded from ``EDGE_WEIGHT_SECTION`` or a distance
function evaluated on node coordinates. Callers only use :meth:`weight`
and :meth:`matrix`.
"""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Tuple, Union

import numpy as np

from ..engine import distance
from ..errors import MissingWeights, OutOfRangeId
from .types import WeightKind

Number = Union[int, float]

DISTANCE_FUNCTIONS: Dict[WeightKind, Callable] = {
    WeightKind.EUC_2D: distance.euc_2d,
    WeightKind.EUC_3D: distance.euc_3d,
    WeightKind.MAX_2D: distance.max_2d,
    WeightKind.MAX_3D: distance.max_3d,
    WeightKind.MAN_2D: distance.man_2d,
    WeightKind.MAN_3D: distance.man_3d,
    WeightKind.CEIL_2D: distance.ceil_2d,
    WeightKind.GEO: distance.geo,
    WeightKind.ATT: distance.att,
    WeightKind.XRAY1: distance.xray1,
    WeightKind.XRAY2: distance.xray2,
}


class EdgeWeights:
    """Common read surface of both weight sources."""

    dimension: int

    def weight(self, i: int, j: int) -> Number:
        raise NotImplementedError

    def matrix(self) -> np.ndarray:
        raise NotImplementedError

    def _check(self, i: int, j: int) -> None:
        for node in (i, j):
            if not 1 <= node <= self.dimension:
                raise OutOfRangeId(f"node id {node} outside [1, {self.dimension}]")


class ExplicitWeights(EdgeWeights):
    """Weights read from the file; ``values`` is a read-only ``(n, n)`` array."""

    def __init__(self, values: np.ndarray):
        self.values = values
        self.dimension = int(values.shape[0])

    def weight(self, i: int, j: int) -> Number:
        self._check(i, j)
        return self.values[i - 1, j - 1].item()

    def matrix(self) -> np.ndarray:
        return self.values

    def __eq__(self, other):
        if not isinstance(other, ExplicitWeights):
            return NotImplemented
        return bool(np.array_equal(self.values, other.values))

    __hash__ = None

    def __repr__(self):
        return f"ExplicitWeights(dimension={self.dimension}, dtype={self.values.dtype})"


class ComputedWeights(EdgeWeights):
    """Weights evaluated on demand from coordinates, one call per pair."""

    def __init__(self, kind: WeightKind, coords: Mapping[int, Tuple[float, ...]], dimension: int):
        self.kind = kind
        self.coords = coords
        self.dimension = dimension
        self._fn = DISTANCE_FUNCTIONS[kind]

    def weight(self, i: int, j: int) -> int:
        self._check(i, j)
        if i == j:
            return 0
        return int(self._fn(self.coords[i], self.coords[j]))

    def coords_array(self) -> np.ndarray:
        return np.array([self.coords[i] for i in range(1, self.dimension + 1)], dtype=np.float64)

    def matrix(self) -> np.ndarray:
        out = distance.distance_matrix(self.coords_array(), self.kind.code)
        out.flags.writeable = False
        return out

    def __eq__(self, other):
        if not isinstance(other, ComputedWeights):
            return NotImplemented
        return (
            self.kind is other.kind
            and self.dimension == other.dimension
            and dict(self.coords) == dict(other.coords)
        )

    __hash__ = None

    def __repr__(self):
        return f"ComputedWeights(kind={self.kind.value}, dimension={self.dimension})"


class NoWeights(EdgeWeights):
    """Placeholder for kinds without an edge-weight source (HCP, TOUR)."""

    def __init__(self, dimension: int):
        self.dimension = dimension

    def weight(self, i: int, j: int) -> Number:
        raise MissingWeights("problem carries no edge weights")

    def matrix(self) -> np.ndarray:
        raise MissingWeights("problem carries no edge weights")

    def __eq__(self, other):
        if not isinstance(other, NoWeights):
            return NotImplemented
        return self.dimension == other.dimension

    __hash__ = None

    def __repr__(self):
        return f"NoWeights(dimension={self.dimension})"


__all__ = [
    "ComputedWeights",
    "DISTANCE_FUNCTIONS",
    "EdgeWeights",
    "ExplicitWeights",
    "NoWeights",
]
