import pytest

from tsplib_reader.engine.header import HeaderDecoder, decode_header
from tsplib_reader.engine.lines import Line
from tsplib_reader.errors import InvalidLayoutForKind, MalformedFile, MalformedHeader
from tsplib_reader.model.types import (
    CoordType,
    DisplayType,
    EdgeDataFormat,
    MatrixLayout,
    ProblemKind,
    WeightKind,
)


def _lines(text):
    return [Line(i, s.strip()) for i, s in enumerate(text.strip().splitlines(), start=1)]


def test_decode_full_header():
    header = decode_header(
        _lines(
            """
            NAME : gr17
            TYPE : TSP
            COMMENT : 17-city problem
            COMMENT : (Groetschel)
            DIMENSION : 17
            EDGE_WEIGHT_TYPE : EXPLICIT
            EDGE_WEIGHT_FORMAT : LOWER_DIAG_ROW
            DISPLAY_DATA_TYPE : NO_DISPLAY
            """
        )
    )
    assert header.name == "gr17"
    assert header.kind is ProblemKind.TSP
    assert header.dimension == 17
    assert header.comment == "17-city problem\n(Groetschel)"
    assert header.weight_kind is WeightKind.EXPLICIT
    assert header.matrix_layout is MatrixLayout.LOWER_DIAG_ROW
    assert header.display_type is DisplayType.NO_DISPLAY
    assert header.capacity is None


def test_unknown_keys_are_ignored():
    header = decode_header(
        _lines("NAME: x\nTYPE: TSP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EUC_2D\nVENDOR_EXTENSION: 42")
    )
    assert header.dimension == 3


def test_missing_dimension():
    with pytest.raises(MalformedHeader):
        decode_header(_lines("NAME: x\nTYPE: TSP\nEDGE_WEIGHT_TYPE: EUC_2D"))


@pytest.mark.parametrize("value", ["0", "-4", "three"])
def test_bad_dimension(value):
    with pytest.raises(MalformedHeader) as err:
        decode_header(_lines(f"TYPE: TSP\nDIMENSION: {value}\nEDGE_WEIGHT_TYPE: EUC_2D"))
    assert err.value.line == 2


def test_unknown_type_rejected():
    with pytest.raises(MalformedHeader):
        decode_header(_lines("TYPE: KTSP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EUC_2D"))


def test_annotated_type_lenient_and_strict():
    text = "TYPE: TSP (M.~Hofmeister)\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EUC_2D"
    assert decode_header(_lines(text)).kind is ProblemKind.TSP
    with pytest.raises(MalformedHeader):
        decode_header(_lines(text), {"strict": True})


def test_missing_type_defaults_to_tsp():
    header = decode_header(_lines("DIMENSION: 3\nEDGE_WEIGHT_TYPE: ATT"))
    assert header.kind is ProblemKind.TSP
    assert header.name == ""


def test_unknown_weight_type_rejected():
    with pytest.raises(MalformedHeader):
        decode_header(_lines("TYPE: TSP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: SPHERE"))


def test_weight_type_required_for_weighted_kinds():
    with pytest.raises(MalformedHeader):
        decode_header(_lines("TYPE: ATSP\nDIMENSION: 3"))


def test_format_without_explicit_weights_rejected():
    with pytest.raises(MalformedHeader) as err:
        decode_header(
            _lines("TYPE: TSP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EUC_2D\nEDGE_WEIGHT_FORMAT: UPPER_ROW")
        )
    assert err.value.line == 4


def test_function_format_accepted_for_computed_weights():
    header = decode_header(
        _lines("TYPE: TSP\nDIMENSION: 16\nEDGE_WEIGHT_TYPE: GEO\nEDGE_WEIGHT_FORMAT: FUNCTION")
    )
    assert header.weight_kind is WeightKind.GEO
    assert header.matrix_layout is None


def test_function_format_with_explicit_rejected():
    with pytest.raises(MalformedHeader):
        decode_header(
            _lines("TYPE: TSP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EXPLICIT\nEDGE_WEIGHT_FORMAT: FUNCTION")
        )


def test_explicit_without_format_lenient_and_strict():
    text = "TYPE: TSP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EXPLICIT"
    assert decode_header(_lines(text)).matrix_layout is MatrixLayout.FULL_MATRIX
    header = decode_header(_lines(text), {"default_weight_format": "upper_row"})
    assert header.matrix_layout is MatrixLayout.UPPER_ROW
    with pytest.raises(MalformedHeader):
        decode_header(_lines(text), {"strict": True})


def test_triangular_layout_on_atsp_rejected():
    with pytest.raises(InvalidLayoutForKind) as err:
        decode_header(
            _lines("TYPE: ATSP\nDIMENSION: 4\nEDGE_WEIGHT_TYPE: EXPLICIT\nEDGE_WEIGHT_FORMAT: UPPER_ROW")
        )
    assert err.value.line == 4


def test_cvrp_requires_capacity():
    with pytest.raises(MalformedHeader):
        decode_header(_lines("TYPE: CVRP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EUC_2D"))
    header = decode_header(_lines("TYPE: CVRP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EUC_2D\nCAPACITY: 100"))
    assert header.capacity == 100


def test_capacity_outside_cvrp_rejected():
    with pytest.raises(MalformedHeader):
        decode_header(_lines("TYPE: TSP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EUC_2D\nCAPACITY: 100"))


def test_hcp_requires_edge_data_format():
    with pytest.raises(MalformedHeader):
        decode_header(_lines("TYPE: HCP\nDIMENSION: 3"))
    header = decode_header(_lines("TYPE: HCP\nDIMENSION: 3\nEDGE_DATA_FORMAT: ADJ_LIST"))
    assert header.edge_data_format is EdgeDataFormat.ADJ_LIST
    assert header.weight_kind is None


def test_coord_dims_follow_weight_kind_and_coord_type():
    header = decode_header(_lines("TYPE: TSP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EUC_3D"))
    assert header.coord_dims == 3
    header = decode_header(
        _lines("TYPE: TSP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EUC_2D\nNODE_COORD_TYPE: THREED_COORDS")
    )
    assert header.coord_type is CoordType.THREED_COORDS
    assert header.coord_dims == 3
    with pytest.raises(MalformedHeader):
        decode_header(
            _lines("TYPE: TSP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: MAN_3D\nNODE_COORD_TYPE: TWOD_COORDS")
        )


def test_non_entry_line_before_sections_is_malformed_file():
    decoder = HeaderDecoder()
    decoder.feed(Line(1, "NAME: x"))
    with pytest.raises(MalformedFile) as err:
        decoder.feed(Line(2, "1 2 3"))
    assert err.value.line == 2


def test_symmetry_flag():
    sym = decode_header(
        _lines("TYPE: TSP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EXPLICIT\nEDGE_WEIGHT_FORMAT: FULL_MATRIX")
    )
    asym = decode_header(
        _lines("TYPE: ATSP\nDIMENSION: 3\nEDGE_WEIGHT_TYPE: EXPLICIT\nEDGE_WEIGHT_FORMAT: FULL_MATRIX")
    )
    assert sym.is_symmetric
    assert not asym.is_symmetric
