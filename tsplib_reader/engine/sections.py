"""Decoders for the non-matrix sections of the data part.

Every decoder receives the validated header, the body lines collected by the
dispatcher and the line number of the section keyword, and returns plain
immutable Python values.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterator, List, Sequence, Tuple, Type

from ..config.enums import SENTINEL
from ..errors import (
    CoordinateIdError,
    DemandCoverageError,
    MalformedCoordinate,
    MalformedEdgeList,
    MalformedFile,
    MalformedTour,
    OutOfRangeId,
    ParseError,
)
from ..model.types import EdgeDataFormat, Header, Section
from .lines import Line

logger = logging.getLogger(__name__)

Coord = Tuple[float, ...]
Edge = Tuple[int, int]


def _check_id(
    node: int,
    header: Header,
    section: Section,
    line: int,
    error: Type[ParseError] = OutOfRangeId,
) -> int:
    if not 1 <= node <= header.dimension:
        raise error(
            f"node id {node} outside [1, {header.dimension}]",
            section=section.value,
            line=line,
        )
    return node


def _iter_ints(
    lines: Sequence[Line], section: Section, error: Type[ParseError]
) -> Iterator[Tuple[int, int]]:
    """Yield ``(value, line_number)`` for every token of ``lines``."""
    for line in lines:
        for tok in line.tokens:
            try:
                yield int(tok), line.number
            except ValueError:
                raise error(
                    f"invalid integer {tok!r}", section=section.value, line=line.number
                ) from None


def _missing_sentinel(section: Section, line: int, error: Type[ParseError], params: dict) -> None:
    if params.get("strict", False):
        raise error("list is not terminated by -1", section=section.value, line=line)
    logger.warning("line %d: %s is not terminated by -1", line, section.value)


def _trailing(section: Section, line: int, error: Type[ParseError]) -> ParseError:
    return error("data after the closing -1", section=section.value, line=line)


# ---------------------------------------------------------------------------
# coordinates
# ---------------------------------------------------------------------------


def decode_coords(
    header: Header,
    lines: Sequence[Line],
    start_line: int,
    section: Section = Section.NODE_COORD,
    dims: int = 2,
) -> Dict[int, Coord]:
    """Decode ``id x y [z]`` rows into an id-keyed mapping in input order."""

    coords: Dict[int, Coord] = {}
    for line in lines:
        toks = line.tokens
        if len(toks) != dims + 1:
            raise MalformedCoordinate(
                "wrong number of fields in coordinate row",
                section=section.value,
                line=line.number,
                expected=dims + 1,
                actual=len(toks),
            )
        try:
            node = int(toks[0])
            point = tuple(float(t) for t in toks[1:])
        except ValueError:
            raise MalformedCoordinate(
                f"invalid coordinate row {line.text!r}",
                section=section.value,
                line=line.number,
            ) from None
        if not all(math.isfinite(v) for v in point):
            raise MalformedCoordinate(
                f"non-finite coordinate in row {line.text!r}",
                section=section.value,
                line=line.number,
            )
        _check_id(node, header, section, line.number, CoordinateIdError)
        if node in coords:
            raise CoordinateIdError(
                f"node id {node} listed twice", section=section.value, line=line.number
            )
        coords[node] = point

    if len(coords) != header.dimension:
        raise MalformedCoordinate(
            "coordinate count does not match DIMENSION",
            section=section.value,
            line=start_line,
            expected=header.dimension,
            actual=len(coords),
        )
    return coords


def decode_node_coords(header: Header, lines: Sequence[Line], start_line: int, params: dict):
    return decode_coords(header, lines, start_line, Section.NODE_COORD, header.coord_dims)


def decode_display_coords(header: Header, lines: Sequence[Line], start_line: int, params: dict):
    return decode_coords(header, lines, start_line, Section.DISPLAY_DATA, 2)


# ---------------------------------------------------------------------------
# CVRP
# ---------------------------------------------------------------------------


def decode_depots(header: Header, lines: Sequence[Line], start_line: int, params: dict) -> Tuple[int, ...]:
    section = Section.DEPOT
    depots: List[int] = []
    closed = False
    for value, line_no in _iter_ints(lines, section, MalformedFile):
        if closed:
            raise _trailing(section, line_no, MalformedFile)
        if value == SENTINEL:
            closed = True
            continue
        _check_id(value, header, section, line_no)
        if value in depots:
            raise OutOfRangeId(f"depot {value} listed twice", section=section.value, line=line_no)
        depots.append(value)
    if not closed:
        _missing_sentinel(section, start_line, MalformedFile, params)
    return tuple(depots)


def decode_demands(header: Header, lines: Sequence[Line], start_line: int, params: dict) -> Dict[int, int]:
    """Decode ``id demand`` rows; every id in ``[1, dimension]`` exactly once."""

    section = Section.DEMAND
    demands: Dict[int, int] = {}
    for line in lines:
        toks = line.tokens
        if len(toks) != 2:
            raise MalformedFile(
                "demand row must be 'id demand'",
                section=section.value,
                line=line.number,
                expected=2,
                actual=len(toks),
            )
        try:
            node, load = int(toks[0]), int(toks[1])
        except ValueError:
            raise MalformedFile(
                f"invalid demand row {line.text!r}", section=section.value, line=line.number
            ) from None
        _check_id(node, header, section, line.number)
        if node in demands:
            raise OutOfRangeId(f"demand for node {node} listed twice", section=section.value, line=line.number)
        if load < 0:
            raise MalformedFile(f"negative demand {load} for node {node}", section=section.value, line=line.number)
        demands[node] = load

    missing = [i for i in range(1, header.dimension + 1) if i not in demands]
    if missing:
        shown = ", ".join(str(i) for i in missing[:10])
        raise DemandCoverageError(
            f"no demand for node(s) {shown}",
            section=section.value,
            line=start_line,
            expected=header.dimension,
            actual=len(demands),
        )
    return demands


# ---------------------------------------------------------------------------
# edges
# ---------------------------------------------------------------------------


def _decode_pairs(
    header: Header,
    lines: Sequence[Line],
    start_line: int,
    params: dict,
    section: Section,
) -> Tuple[Edge, ...]:
    edges: List[Edge] = []
    closed = False
    for line in lines:
        toks = line.tokens
        if closed:
            raise _trailing(section, line.number, MalformedEdgeList)
        if toks == [str(SENTINEL)]:
            closed = True
            continue
        if len(toks) != 2:
            raise MalformedEdgeList(
                "edge row must hold two node ids",
                section=section.value,
                line=line.number,
                expected=2,
                actual=len(toks),
            )
        try:
            a, b = int(toks[0]), int(toks[1])
        except ValueError:
            raise MalformedEdgeList(
                f"invalid edge row {line.text!r}", section=section.value, line=line.number
            ) from None
        _check_id(a, header, section, line.number)
        _check_id(b, header, section, line.number)
        if a == b:
            raise MalformedEdgeList(f"self loop on node {a}", section=section.value, line=line.number)
        edges.append((a, b))
    if not closed:
        _missing_sentinel(section, start_line, MalformedEdgeList, params)
    return tuple(edges)


def decode_fixed_edges(header: Header, lines: Sequence[Line], start_line: int, params: dict) -> Tuple[Edge, ...]:
    """Fixed edges as unordered pairs normalised to ``(min, max)``, duplicates dropped."""

    pairs = _decode_pairs(header, lines, start_line, params, Section.FIXED_EDGES)
    seen = {}
    for a, b in pairs:
        seen.setdefault((min(a, b), max(a, b)), None)
    return tuple(seen)


def _decode_adjacency(
    header: Header, lines: Sequence[Line], start_line: int, params: dict
) -> Tuple[Edge, ...]:
    # node a1 a2 ... -1, repeated; a lone -1 closes the section
    section = Section.EDGE_DATA
    edges: List[Edge] = []
    node = None
    closed = False
    for value, line_no in _iter_ints(lines, section, MalformedEdgeList):
        if closed:
            raise _trailing(section, line_no, MalformedEdgeList)
        if node is None:
            if value == SENTINEL:
                closed = True
            else:
                node = _check_id(value, header, section, line_no)
            continue
        if value == SENTINEL:
            node = None
            continue
        _check_id(value, header, section, line_no)
        if value == node:
            raise MalformedEdgeList(f"self loop on node {node}", section=section.value, line=line_no)
        edges.append((node, value))
    if node is not None:
        raise MalformedEdgeList(
            f"adjacency list of node {node} is not terminated by -1",
            section=section.value,
            line=start_line,
        )
    if not closed:
        _missing_sentinel(section, start_line, MalformedEdgeList, params)
    return tuple(edges)


def decode_edge_data(header: Header, lines: Sequence[Line], start_line: int, params: dict) -> Tuple[Edge, ...]:
    if header.edge_data_format is EdgeDataFormat.ADJ_LIST:
        return _decode_adjacency(header, lines, start_line, params)
    if header.edge_data_format is EdgeDataFormat.EDGE_LIST:
        return _decode_pairs(header, lines, start_line, params, Section.EDGE_DATA)
    raise MalformedFile(
        "EDGE_DATA_SECTION requires EDGE_DATA_FORMAT",
        section=Section.EDGE_DATA.value,
        line=start_line,
    )


# ---------------------------------------------------------------------------
# tours
# ---------------------------------------------------------------------------


def decode_tours(header: Header, lines: Sequence[Line], start_line: int, params: dict) -> Tuple[Tuple[int, ...], ...]:
    """Decode one or more ``-1`` terminated tours; a second ``-1`` closes the list."""

    section = Section.TOUR
    tours: List[Tuple[int, ...]] = []
    current: List[int] = []
    visited = set()
    closed = False
    for value, line_no in _iter_ints(lines, section, MalformedTour):
        if closed:
            raise _trailing(section, line_no, MalformedTour)
        if value == SENTINEL:
            if current:
                tours.append(tuple(current))
                current = []
                visited = set()
            else:
                closed = True
            continue
        _check_id(value, header, section, line_no)
        if value in visited:
            raise OutOfRangeId(f"node {value} visited twice in one tour", section=section.value, line=line_no)
        visited.add(value)
        current.append(value)
    if current:
        _missing_sentinel(section, start_line, MalformedTour, params)
        tours.append(tuple(current))
    return tuple(tours)


__all__ = [
    "decode_coords",
    "decode_demands",
    "decode_depots",
    "decode_display_coords",
    "decode_edge_data",
    "decode_fixed_edges",
    "decode_node_coords",
    "decode_tours",
]
