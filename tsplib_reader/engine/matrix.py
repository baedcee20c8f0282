"""Explicit edge-weight reconstruction.

``EDGE_WEIGHT_SECTION`` is consumed as one flat token stream (line wrapping
is meaningless) and reshaped into a dense square matrix according to
``EDGE_WEIGHT_FORMAT``. Triangular layouts fill both ``(i, j)`` and
``(j, i)`` from the same token; layouts without a diagonal leave it at zero.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Iterable, Iterator, Optional

import numpy as np
from numba import njit

from ..config.enums import (
    LAYOUT_FULL_MATRIX,
    LAYOUT_LOWER_COL,
    LAYOUT_LOWER_DIAG_COL,
    LAYOUT_LOWER_ROW,
    LAYOUT_UPPER_COL,
    LAYOUT_UPPER_DIAG_ROW,
    LAYOUT_UPPER_ROW,
)
from ..errors import MalformedMatrix
from ..model.types import Header, MatrixLayout, ProblemKind, Section
from .lines import Line

logger = logging.getLogger(__name__)

_SECTION = Section.EDGE_WEIGHT.value


@njit(cache=True)
def fill_matrix(values, n, layout):
    """Reshape the flat ``values`` stream into an ``(n, n)`` matrix.

    Row variants walk the triangle row by row, column variants column by
    column. ``values`` must hold exactly the layout's token count.
    """

    out = np.zeros((n, n), dtype=values.dtype)
    if layout == LAYOUT_FULL_MATRIX:
        k = 0
        for i in range(n):
            for j in range(n):
                out[i, j] = values[k]
                k += 1
        return out

    k = 0
    for outer in range(n):
        if layout == LAYOUT_UPPER_ROW or layout == LAYOUT_LOWER_COL:
            lo, hi = outer + 1, n
        elif layout == LAYOUT_UPPER_DIAG_ROW or layout == LAYOUT_LOWER_DIAG_COL:
            lo, hi = outer, n
        elif layout == LAYOUT_LOWER_ROW or layout == LAYOUT_UPPER_COL:
            lo, hi = 0, outer
        else:
            lo, hi = 0, outer + 1
        for inner in range(lo, hi):
            out[outer, inner] = values[k]
            out[inner, outer] = values[k]
            k += 1
    return out


def _iter_numbers(lines: Iterable[Line]) -> Iterator[float]:
    for line in lines:
        for tok in line.tokens:
            try:
                value = float(tok)
            except ValueError:
                raise MalformedMatrix(
                    f"invalid weight {tok!r}", section=_SECTION, line=line.number
                ) from None
            if not math.isfinite(value):
                raise MalformedMatrix(
                    f"non-finite weight {tok!r}", section=_SECTION, line=line.number
                )
            yield value


def decode_edge_weights(
    header: Header,
    lines: Iterable[Line],
    start_line: int,
    params: dict,
) -> np.ndarray:
    """Decode an ``EDGE_WEIGHT_SECTION`` body into a read-only dense matrix.

    Integral streams are stored as ``int64``, anything else as ``float64``.
    """

    layout = header.matrix_layout
    n = header.dimension
    if layout is None:
        raise MalformedMatrix(
            "EDGE_WEIGHT_SECTION without an explicit EDGE_WEIGHT_FORMAT",
            section=_SECTION,
            line=start_line,
        )
    limit: Optional[int] = params.get("max_explicit_dimension")
    if limit is not None and n > int(limit):
        raise MalformedMatrix(
            f"explicit matrix dimension {n} exceeds the configured limit {limit}",
            section=_SECTION,
            line=start_line,
        )

    t0 = time.perf_counter()
    values = np.fromiter(_iter_numbers(lines), dtype=np.float64)
    need = layout.token_count(n)

    if values.shape[0] == need + 1 and header.kind is ProblemKind.SOP and values[0] == n:
        if params.get("strict", False):
            raise MalformedMatrix(
                "SOP matrix prefixed with its dimension",
                section=_SECTION,
                line=start_line,
                expected=need,
                actual=int(values.shape[0]),
            )
        logger.warning(
            "line %d: dropping leading dimension token from SOP EDGE_WEIGHT_SECTION",
            start_line,
        )
        values = values[1:]

    if values.shape[0] != need:
        raise MalformedMatrix(
            f"token count does not match {layout.value} for dimension {n}",
            section=_SECTION,
            line=start_line,
            expected=need,
            actual=int(values.shape[0]),
        )

    if np.all(np.mod(values, 1.0) == 0.0):
        values = values.astype(np.int64)

    matrix = fill_matrix(values, n, layout.code)
    matrix.flags.writeable = False
    logger.debug(
        "decoded %s matrix n=%d in %.3fs", layout.value, n, time.perf_counter() - t0
    )
    return matrix


__all__ = ["decode_edge_weights", "fill_matrix"]
