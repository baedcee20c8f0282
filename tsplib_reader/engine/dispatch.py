"""Section dispatcher and problem assembly.

One pass over the input: header lines feed :class:`HeaderDecoder` until the
first section keyword, then body lines are collected per section and handed
to the matching decoder whenever the next keyword (or end of input) is seen.
The whole input is decoded before a :class:`Problem` is built, so a failure
never leaves a partial result behind.
"""

from __future__ import annotations

import logging
import time
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Optional

import numpy as np

from ..config.config import DEFAULTS
from ..errors import DuplicateSection, MalformedFile
from ..logging.trace import ParseTrace
from ..model.problem import Problem
from ..model.types import CoordType, Header, ProblemKind, Section
from ..model.weights import ComputedWeights, EdgeWeights, ExplicitWeights, NoWeights
from .header import HeaderDecoder
from .lines import Line, iter_lines, section_keyword
from .matrix import decode_edge_weights
from .sections import (
    decode_demands,
    decode_depots,
    decode_display_coords,
    decode_edge_data,
    decode_fixed_edges,
    decode_node_coords,
    decode_tours,
)

logger = logging.getLogger(__name__)

Decoder = Callable[[Header, List[Line], int, dict], Any]

DECODERS: Dict[Section, Decoder] = {
    Section.NODE_COORD: decode_node_coords,
    Section.EDGE_WEIGHT: decode_edge_weights,
    Section.EDGE_DATA: decode_edge_data,
    Section.FIXED_EDGES: decode_fixed_edges,
    Section.DISPLAY_DATA: decode_display_coords,
    Section.DEPOT: decode_depots,
    Section.DEMAND: decode_demands,
    Section.TOUR: decode_tours,
}

_WEIGHTED_KINDS = (ProblemKind.TSP, ProblemKind.ATSP, ProblemKind.SOP, ProblemKind.CVRP)


def _admit(section: Section, header: Header, line: int) -> None:
    """Reject sections the header makes illegal, before reading their body."""

    if section in (Section.DEPOT, Section.DEMAND) and header.kind is not ProblemKind.CVRP:
        raise MalformedFile(
            f"{section.value} is only valid for CVRP, not {header.kind.value}", line=line
        )
    if section is Section.EDGE_WEIGHT and (
        header.weight_kind is None or not header.weight_kind.is_explicit
    ):
        raise MalformedFile("EDGE_WEIGHT_SECTION requires EDGE_WEIGHT_TYPE: EXPLICIT", line=line)
    if section is Section.NODE_COORD and header.coord_type is CoordType.NO_COORDS:
        raise MalformedFile("NODE_COORD_SECTION present but NODE_COORD_TYPE is NO_COORDS", line=line)
    if section is Section.EDGE_DATA and header.edge_data_format is None:
        raise MalformedFile("EDGE_DATA_SECTION requires EDGE_DATA_FORMAT", line=line)


def _entries(value: Any) -> int:
    if isinstance(value, np.ndarray):
        return int(value.size)
    return len(value)


class _Dispatcher:
    def __init__(self, header: Header, params: dict, trace: Optional[ParseTrace]):
        self.header = header
        self.params = params
        self.trace = trace
        self.decoded: Dict[Section, Any] = {}
        self.current: Optional[Section] = None
        self.start = 0
        self.body: List[Line] = []

    def open(self, section: Section, line: int) -> None:
        if section in self.decoded:
            raise DuplicateSection(f"{section.value} appears more than once", line=line)
        _admit(section, self.header, line)
        logger.debug("line %d: entering %s", line, section.value)
        self.current = section
        self.start = line
        self.body = []

    def flush(self) -> None:
        section = self.current
        if section is None:
            return
        t0 = time.perf_counter()
        value = DECODERS[section](self.header, self.body, self.start, self.params)
        elapsed = time.perf_counter() - t0
        self.decoded[section] = value
        n = _entries(value)
        logger.debug("line %d: decoded %s (%d entries)", self.start, section.value, n)
        if self.trace is not None:
            self.trace.append(section.value, self.start, n, elapsed)
        self.current = None
        self.body = []


def parse_lines(
    source: Iterable[str],
    params: Optional[dict] = None,
    trace: Optional[ParseTrace] = None,
) -> Problem:
    """Parse TSPLIB text given as an iterable of physical lines."""

    options = DEFAULTS.copy()
    options.update(params or {})

    lines = iter_lines(source)
    header_decoder = HeaderDecoder(options)
    first: Optional[Section] = None
    first_line: Optional[int] = None
    for line in lines:
        section = section_keyword(line)
        if section is not None:
            first, first_line = section, line.number
            break
        header_decoder.feed(line)

    header = header_decoder.finish(first_line)
    dispatcher = _Dispatcher(header, options, trace)

    if first is not None and first is not Section.EOF:
        dispatcher.open(first, first_line)
        for line in lines:
            section = section_keyword(line)
            if section is None:
                dispatcher.body.append(line)
                continue
            dispatcher.flush()
            if section is Section.EOF:
                break
            dispatcher.open(section, line.number)
        dispatcher.flush()

    return assemble(header, dispatcher.decoded)


def _weights(header: Header, decoded: Dict[Section, Any]) -> EdgeWeights:
    wk = header.weight_kind
    weighted = header.kind in _WEIGHTED_KINDS
    if wk is None:
        return NoWeights(header.dimension)
    if wk.is_explicit:
        if Section.EDGE_WEIGHT in decoded:
            return ExplicitWeights(decoded[Section.EDGE_WEIGHT])
        if weighted:
            raise MalformedFile("missing EDGE_WEIGHT_SECTION for EXPLICIT weights")
        return NoWeights(header.dimension)
    if Section.NODE_COORD in decoded:
        return ComputedWeights(wk, MappingProxyType(decoded[Section.NODE_COORD]), header.dimension)
    if weighted:
        raise MalformedFile(f"missing NODE_COORD_SECTION for {wk.value} weights")
    return NoWeights(header.dimension)


def assemble(header: Header, decoded: Dict[Section, Any]) -> Problem:
    """Check per-kind section requirements and build the :class:`Problem`."""

    weights = _weights(header, decoded)

    required = {
        ProblemKind.CVRP: Section.DEMAND,
        ProblemKind.HCP: Section.EDGE_DATA,
        ProblemKind.TOUR: Section.TOUR,
    }.get(header.kind)
    if required is not None and required not in decoded:
        raise MalformedFile(f"missing {required.value} for {header.kind.value}")

    def mapping(section: Section):
        return MappingProxyType(dict(decoded.get(section, {})))

    return Problem(
        header=header,
        edge_weights=weights,
        node_coords=(
            weights.coords if isinstance(weights, ComputedWeights) else mapping(Section.NODE_COORD)
        ),
        display_data=mapping(Section.DISPLAY_DATA),
        fixed_edges=decoded.get(Section.FIXED_EDGES, ()),
        edges=decoded.get(Section.EDGE_DATA, ()),
        depots=decoded.get(Section.DEPOT, ()),
        demands=mapping(Section.DEMAND),
        tours=decoded.get(Section.TOUR, ()),
    )


__all__ = ["DECODERS", "assemble", "parse_lines"]
