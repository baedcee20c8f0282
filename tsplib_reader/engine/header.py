"""Keyword header decoder.

Consumes the ``KEY: value`` lines that precede the first section keyword
and produces a validated :class:`~tsplib_reader.model.types.Header`. Unknown
keys are skipped so newer files stay readable.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Optional, Type, TypeVar

from ..errors import InvalidLayoutForKind, MalformedFile, MalformedHeader
from ..model.types import (
    CoordType,
    DisplayType,
    EdgeDataFormat,
    Header,
    MatrixLayout,
    ProblemKind,
    WeightKind,
)
from .lines import Line

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

K_NAME = "NAME"
K_TYPE = "TYPE"
K_COMMENT = "COMMENT"
K_DIMENSION = "DIMENSION"
K_CAPACITY = "CAPACITY"
K_WEIGHT_TYPE = "EDGE_WEIGHT_TYPE"
K_WEIGHT_FORMAT = "EDGE_WEIGHT_FORMAT"
K_EDGE_FORMAT = "EDGE_DATA_FORMAT"
K_COORD_TYPE = "NODE_COORD_TYPE"
K_DISPLAY_TYPE = "DISPLAY_DATA_TYPE"

# valid for non-explicit weights only: weights come from the distance function
FUNCTION_FORMAT = "FUNCTION"

_ENUM_KEYS: Dict[str, Type[Enum]] = {
    K_WEIGHT_TYPE: WeightKind,
    K_EDGE_FORMAT: EdgeDataFormat,
    K_COORD_TYPE: CoordType,
    K_DISPLAY_TYPE: DisplayType,
}

_WEIGHTED_KINDS = (ProblemKind.TSP, ProblemKind.ATSP, ProblemKind.SOP, ProblemKind.CVRP)


def _lookup(enum_cls: Type[E], key: str, value: str, line: Line) -> E:
    try:
        return enum_cls(value.upper())
    except ValueError:
        raise MalformedHeader(f"invalid {key} value {value!r}", line=line.number) from None


def _parse_int(key: str, value: str, line: Line) -> int:
    try:
        return int(value)
    except ValueError:
        raise MalformedHeader(f"{key} must be an integer, got {value!r}", line=line.number) from None


class HeaderDecoder:
    """Accumulates header entries line by line; :meth:`finish` validates them.

    Errors in individual values surface in :meth:`feed`, so failures follow
    input order. Cross-field checks run in :meth:`finish`.
    """

    def __init__(self, params: Optional[dict] = None):
        self.params = params or {}
        self.strict = bool(self.params.get("strict", False))
        self.name: Optional[str] = None
        self.kind: Optional[ProblemKind] = None
        self.comments: List[str] = []
        self.dimension: Optional[int] = None
        self.capacity: Optional[int] = None
        self.weight_kind: Optional[WeightKind] = None
        self.weight_format: Optional[str] = None
        self.edge_data_format: Optional[EdgeDataFormat] = None
        self.coord_type: Optional[CoordType] = None
        self.display_type: Optional[DisplayType] = None
        self.lines: Dict[str, int] = {}

    def feed(self, line: Line) -> None:
        entry = line.split_entry()
        if entry is None:
            raise MalformedFile(
                f"expected 'KEY: value' before the first section, got {line.text!r}",
                line=line.number,
            )
        key, value = entry
        self.lines[key] = line.number

        if key == K_NAME:
            self.name = value
        elif key == K_COMMENT:
            self.comments.append(value)
        elif key == K_TYPE:
            self.kind = self._problem_kind(value, line)
        elif key == K_DIMENSION:
            self.dimension = _parse_int(key, value, line)
            if self.dimension < 1:
                raise MalformedHeader(
                    f"DIMENSION must be positive, got {self.dimension}", line=line.number
                )
        elif key == K_CAPACITY:
            self.capacity = _parse_int(key, value, line)
            if self.capacity < 0:
                raise MalformedHeader("CAPACITY must be non-negative", line=line.number)
        elif key == K_WEIGHT_FORMAT:
            upper = value.upper()
            if upper != FUNCTION_FORMAT:
                _lookup(MatrixLayout, key, value, line)
            self.weight_format = upper
        elif key in _ENUM_KEYS:
            setattr(self, _ATTR_FOR_KEY[key], _lookup(_ENUM_KEYS[key], key, value, line))
        else:
            logger.debug("line %d: ignoring unknown header key %s", line.number, key)

    def _problem_kind(self, value: str, line: Line) -> ProblemKind:
        try:
            return ProblemKind(value.upper())
        except ValueError:
            pass
        words = value.split()
        if not self.strict and words:
            try:
                kind = ProblemKind(words[0].upper())
            except ValueError:
                pass
            else:
                logger.warning(
                    "line %d: reading TYPE %r as %s", line.number, value, kind.value
                )
                return kind
        raise MalformedHeader(f"invalid TYPE value {value!r}", line=line.number)

    def _at(self, key: str, default: Optional[int] = None) -> Optional[int]:
        return self.lines.get(key, default)

    def finish(self, line_no: Optional[int] = None) -> Header:
        """Validate the collected entries and build the :class:`Header`.

        ``line_no`` is the line of the first section keyword (or ``None`` at
        end of input); it locates errors about missing keys.
        """

        kind = self.kind
        if kind is None:
            logger.debug("TYPE missing, assuming TSP")
            kind = ProblemKind.TSP

        if self.dimension is None:
            raise MalformedHeader("missing DIMENSION", line=line_no)

        weight_kind = self.weight_kind
        if weight_kind is None and kind in _WEIGHTED_KINDS:
            raise MalformedHeader(f"missing EDGE_WEIGHT_TYPE for {kind.value}", line=line_no)

        layout = self._matrix_layout(weight_kind, line_no)

        if layout is not None and layout.is_triangular and kind is ProblemKind.ATSP:
            raise InvalidLayoutForKind(
                f"{layout.value} cannot carry asymmetric ATSP weights",
                line=self._at(K_WEIGHT_FORMAT, line_no),
            )

        if kind is ProblemKind.CVRP and self.capacity is None:
            raise MalformedHeader("missing CAPACITY for CVRP", line=line_no)
        if kind is not ProblemKind.CVRP and self.capacity is not None:
            raise MalformedHeader(
                f"CAPACITY is only valid for CVRP, not {kind.value}",
                line=self._at(K_CAPACITY),
            )
        if kind is ProblemKind.HCP and self.edge_data_format is None:
            raise MalformedHeader("missing EDGE_DATA_FORMAT for HCP", line=line_no)

        if (
            weight_kind is not None
            and weight_kind.coord_dims == 3
            and self.coord_type is CoordType.TWOD_COORDS
        ):
            raise MalformedHeader(
                f"{weight_kind.value} needs THREED_COORDS, NODE_COORD_TYPE is TWOD_COORDS",
                line=self._at(K_COORD_TYPE),
            )

        return Header(
            name=self.name if self.name is not None else "",
            kind=kind,
            dimension=self.dimension,
            comment="\n".join(self.comments),
            weight_kind=weight_kind,
            matrix_layout=layout,
            edge_data_format=self.edge_data_format,
            coord_type=self.coord_type,
            display_type=self.display_type,
            capacity=self.capacity,
        )

    def _matrix_layout(
        self, weight_kind: Optional[WeightKind], line_no: Optional[int]
    ) -> Optional[MatrixLayout]:
        fmt = self.weight_format
        if weight_kind is None or not weight_kind.is_explicit:
            if fmt is not None and fmt != FUNCTION_FORMAT:
                raise MalformedHeader(
                    f"EDGE_WEIGHT_FORMAT {fmt} requires EDGE_WEIGHT_TYPE: EXPLICIT",
                    line=self._at(K_WEIGHT_FORMAT),
                )
            return None

        if fmt == FUNCTION_FORMAT:
            raise MalformedHeader(
                "EDGE_WEIGHT_FORMAT FUNCTION contradicts EDGE_WEIGHT_TYPE: EXPLICIT",
                line=self._at(K_WEIGHT_FORMAT),
            )
        if fmt is None:
            if self.strict:
                raise MalformedHeader(
                    "missing EDGE_WEIGHT_FORMAT for EXPLICIT weights", line=line_no
                )
            fmt = str(self.params.get("default_weight_format", "FULL_MATRIX")).upper()
            logger.warning("EDGE_WEIGHT_FORMAT missing, assuming %s", fmt)
        try:
            return MatrixLayout(fmt)
        except ValueError:
            raise MalformedHeader(f"invalid default_weight_format {fmt!r}") from None


_ATTR_FOR_KEY = {
    K_WEIGHT_TYPE: "weight_kind",
    K_EDGE_FORMAT: "edge_data_format",
    K_COORD_TYPE: "coord_type",
    K_DISPLAY_TYPE: "display_type",
}


def decode_header(lines: List[Line], params: Optional[dict] = None, line_no: Optional[int] = None) -> Header:
    """Decode a complete list of header lines in one call."""

    decoder = HeaderDecoder(params)
    for line in lines:
        decoder.feed(line)
    return decoder.finish(line_no)


__all__ = ["HeaderDecoder", "decode_header"]
