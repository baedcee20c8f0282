"""The immutable parse result."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple, Union

import numpy as np

from .types import DisplayType, Header, ProblemKind, WeightKind
from .views import LazySequence
from .weights import EdgeWeights, NoWeights

Coord = Tuple[float, ...]
Edge = Tuple[int, int]


def _empty() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True)
class Problem:
    """A decoded TSPLIB instance.

    Mappings are read-only views and the explicit matrix is a non-writeable
    array, so a ``Problem`` can be shared across threads once built. The
    ``iter_*`` accessors return :class:`LazySequence` objects that can be
    traversed any number of times.
    """

    header: Header
    edge_weights: EdgeWeights
    node_coords: Mapping[int, Coord] = field(default_factory=_empty)
    display_data: Mapping[int, Coord] = field(default_factory=_empty)
    fixed_edges: Tuple[Edge, ...] = ()
    edges: Tuple[Edge, ...] = ()
    depots: Tuple[int, ...] = ()
    demands: Mapping[int, int] = field(default_factory=_empty)
    tours: Tuple[Tuple[int, ...], ...] = ()

    # -- header shortcuts --------------------------------------------------

    @property
    def name(self) -> str:
        return self.header.name

    @property
    def kind(self) -> ProblemKind:
        return self.header.kind

    @property
    def dimension(self) -> int:
        return self.header.dimension

    @property
    def comment(self) -> str:
        return self.header.comment

    @property
    def capacity(self) -> Optional[int]:
        return self.header.capacity

    @property
    def weight_kind(self) -> Optional[WeightKind]:
        return self.header.weight_kind

    @property
    def is_symmetric(self) -> bool:
        return self.header.is_symmetric

    @property
    def has_weights(self) -> bool:
        return not isinstance(self.edge_weights, NoWeights)

    # -- weights -----------------------------------------------------------

    def weight(self, i: int, j: int) -> Union[int, float]:
        """Cost of edge ``(i, j)`` for 1-based node ids.

        Raises :class:`OutOfRangeId` for ids outside ``[1, dimension]`` and
        :class:`MissingWeights` (a ``LookupError``) when the problem has no
        weights.
        """
        return self.edge_weights.weight(i, j)

    def weight_matrix(self) -> np.ndarray:
        """Dense read-only ``(n, n)`` matrix, index ``[i - 1, j - 1]``."""
        return self.edge_weights.matrix()

    def coords_array(self) -> np.ndarray:
        """Node coordinates ordered by id as an ``(n, k)`` float array."""
        if not self.node_coords:
            return np.empty((0, self.header.coord_dims), dtype=np.float64)
        return np.array([self.node_coords[i] for i in sorted(self.node_coords)], dtype=np.float64)

    # -- lazy accessors ----------------------------------------------------

    def iter_node_coords(self) -> LazySequence[Tuple[int, Coord]]:
        coords = self.node_coords
        return LazySequence(lambda: iter(coords.items()), len(coords))

    def iter_display_coords(self) -> LazySequence[Tuple[int, Coord]]:
        """Display positions: ``DISPLAY_DATA_SECTION`` or, for
        ``COORD_DISPLAY``, the node coordinates themselves."""
        source = self.display_data
        if not source:
            display = self.header.display_type
            if display is DisplayType.COORD_DISPLAY or (
                display is None and self.node_coords
            ):
                source = self.node_coords
        return LazySequence(lambda: iter(source.items()), len(source))

    def iter_fixed_edges(self) -> LazySequence[Edge]:
        edges = self.fixed_edges
        return LazySequence(lambda: iter(edges), len(edges))

    def iter_edges(self) -> LazySequence[Edge]:
        edges = self.edges
        return LazySequence(lambda: iter(edges), len(edges))

    def iter_edge_weights(self) -> LazySequence[Tuple[int, int, Union[int, float]]]:
        """``(i, j, weight)`` over ``i < j`` when symmetric, else all ``i != j``.

        Computed weights call the distance function for each pair as the
        sequence is consumed.
        """
        n = self.dimension
        weight = self.edge_weights.weight
        if not self.has_weights:
            return LazySequence(lambda: iter(()), 0)

        if self.is_symmetric:
            def pairs() -> Iterator[Tuple[int, int, Union[int, float]]]:
                for i in range(1, n + 1):
                    for j in range(i + 1, n + 1):
                        yield i, j, weight(i, j)

            return LazySequence(pairs, n * (n - 1) // 2)

        def ordered() -> Iterator[Tuple[int, int, Union[int, float]]]:
            for i in range(1, n + 1):
                for j in range(1, n + 1):
                    if i != j:
                        yield i, j, weight(i, j)

        return LazySequence(ordered, n * (n - 1))

    def __repr__(self):
        wk = self.weight_kind.value if self.weight_kind is not None else None
        return (
            f"Problem(name={self.name!r}, kind={self.kind.value}, "
            f"dimension={self.dimension}, weight_kind={wk})"
        )


__all__ = ["Problem"]
