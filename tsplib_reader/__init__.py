"""Read-only parser for TSPLIB problem and tour files."""

from .errors import (
    CoordinateIdError,
    DemandCoverageError,
    DuplicateSection,
    InvalidLayoutForKind,
    IoFailure,
    MalformedCoordinate,
    MalformedEdgeList,
    MalformedFile,
    MalformedHeader,
    MalformedMatrix,
    MalformedTour,
    MissingWeights,
    OutOfRangeId,
    ParseError,
)
from .glue import (
    build_params,
    load_config,
    parse_bytes,
    parse_file,
    parse_path,
    parse_str,
)
from .logging.trace import ParseTrace, save_trace_json
from .model import (
    CoordType,
    DisplayType,
    EdgeDataFormat,
    Header,
    LazySequence,
    MatrixLayout,
    Problem,
    ProblemKind,
    WeightKind,
)

__all__ = [
    "CoordType",
    "CoordinateIdError",
    "DemandCoverageError",
    "DisplayType",
    "DuplicateSection",
    "EdgeDataFormat",
    "Header",
    "InvalidLayoutForKind",
    "IoFailure",
    "LazySequence",
    "MalformedCoordinate",
    "MalformedEdgeList",
    "MalformedFile",
    "MalformedHeader",
    "MalformedMatrix",
    "MalformedTour",
    "MatrixLayout",
    "MissingWeights",
    "OutOfRangeId",
    "ParseError",
    "ParseTrace",
    "Problem",
    "ProblemKind",
    "WeightKind",
    "build_params",
    "load_config",
    "parse_bytes",
    "parse_file",
    "parse_path",
    "parse_str",
    "save_trace_json",
]
