from pathlib import Path

import numpy as np
import pytest

from tsplib_reader import (
    Header,
    LazySequence,
    OutOfRangeId,
    Problem,
    ProblemKind,
    WeightKind,
    parse_path,
    parse_str,
)
from tsplib_reader.model import NoWeights

DATA = Path(__file__).parent / "data"


def test_lazy_sequence_is_restartable():
    seq = LazySequence(lambda: iter(range(3)), 3)
    assert list(seq) == [0, 1, 2]
    assert list(seq) == [0, 1, 2]
    assert len(seq) == 3


def test_node_coords_view():
    problem = parse_path(DATA / "toy5.tsp")
    coords = problem.iter_node_coords()
    assert len(coords) == 5
    assert list(coords)[1] == (2, (3.0, 4.0))
    assert list(coords) == list(coords)


def test_symmetric_edge_weights_yield_each_pair_once():
    problem = parse_path(DATA / "toy5.tsp")
    triples = list(problem.iter_edge_weights())
    assert len(triples) == len(problem.iter_edge_weights()) == 10
    assert all(i < j for i, j, _ in triples)
    lookup = {(i, j): w for i, j, w in triples}
    assert lookup[(1, 2)] == 5
    assert lookup[(1, 3)] == 10
    assert lookup[(2, 3)] == 5
    assert lookup[(4, 5)] == 14
    assert lookup[(2, 5)] == 8


def test_asymmetric_edge_weights_yield_ordered_pairs():
    problem = parse_path(DATA / "toy4.atsp")
    assert not problem.is_symmetric
    triples = list(problem.iter_edge_weights())
    assert len(triples) == 12
    lookup = {(i, j): w for i, j, w in triples}
    assert lookup[(1, 2)] == 3
    assert lookup[(2, 1)] == 4
    assert lookup[(4, 1)] == 1


def test_weight_matrix_matches_weight():
    problem = parse_path(DATA / "toy5.tsp")
    m = problem.weight_matrix()
    assert m.shape == (5, 5)
    assert not m.flags.writeable
    for i, j, w in problem.iter_edge_weights():
        assert m[i - 1, j - 1] == w == m[j - 1, i - 1]
    np.testing.assert_array_equal(np.diag(m), 0)


def test_coords_array_ordered_by_id():
    problem = parse_str("TYPE: TSP\nDIMENSION: 2\nEDGE_WEIGHT_TYPE: EUC_2D\nNODE_COORD_SECTION\n2 1 1\n1 0 0\n")
    np.testing.assert_array_equal(problem.coords_array(), [[0.0, 0.0], [1.0, 1.0]])


def test_weight_rejects_ids_outside_dimension():
    problem = parse_path(DATA / "toy5.tsp")
    with pytest.raises(OutOfRangeId):
        problem.weight(0, 1)
    with pytest.raises(OutOfRangeId):
        problem.weight(1, 6)


def test_display_coords_fall_back_to_node_coords():
    problem = parse_path(DATA / "toy5.tsp")
    assert list(problem.iter_display_coords()) == list(problem.iter_node_coords())

    text = (
        "TYPE: TSP\nDIMENSION: 2\nEDGE_WEIGHT_TYPE: EUC_2D\nDISPLAY_DATA_TYPE: NO_DISPLAY\n"
        "NODE_COORD_SECTION\n1 0 0\n2 1 1\nEOF\n"
    )
    assert len(parse_str(text).iter_display_coords()) == 0


def test_display_data_section():
    text = (
        "TYPE: TSP\nDIMENSION: 2\nEDGE_WEIGHT_TYPE: EXPLICIT\nEDGE_WEIGHT_FORMAT: UPPER_ROW\n"
        "DISPLAY_DATA_TYPE: TWOD_DISPLAY\nEDGE_WEIGHT_SECTION\n7\nDISPLAY_DATA_SECTION\n1 1.5 2\n2 3 4\nEOF\n"
    )
    problem = parse_str(text)
    assert dict(problem.iter_display_coords()) == {1: (1.5, 2.0), 2: (3.0, 4.0)}
    assert problem.weight(2, 1) == 7


def test_edges_view():
    problem = parse_path(DATA / "cycle4.hcp")
    edges = problem.iter_edges()
    assert len(edges) == 4
    assert list(edges) == [(1, 2), (2, 3), (3, 4), (4, 1)]
    assert len(problem.iter_edge_weights()) == 0
    assert len(problem.iter_fixed_edges()) == 0


def test_problem_is_immutable():
    problem = parse_path(DATA / "eil7.vrp")
    with pytest.raises(AttributeError):
        problem.depots = (2,)
    with pytest.raises(TypeError):
        problem.demands[1] = 5
    with pytest.raises(TypeError):
        problem.node_coords[1] = (0.0, 0.0)


def test_problem_defaults_are_empty_read_only_mappings():
    header = Header(name="t", kind=ProblemKind.TOUR, dimension=2)
    first = Problem(header=header, edge_weights=NoWeights(2))
    second = Problem(header=header, edge_weights=NoWeights(2))
    assert dict(first.node_coords) == {}
    assert dict(first.display_data) == {}
    assert dict(first.demands) == {}
    assert first == second
    with pytest.raises(TypeError):
        first.demands[1] = 0


COMPUTED_KINDS = [kind for kind in WeightKind if not kind.is_explicit]

ROWS = [
    (12.5, 40.2, 3.1),
    (17.1, 33.3, 0.4),
    (350.0, 21.75, 8.0),
    (10.0, 36.6, 2.2),
]


@pytest.mark.parametrize("kind", COMPUTED_KINDS, ids=lambda k: k.value)
def test_computed_weights_symmetric_with_zero_diagonal(kind):
    dims = kind.coord_dims
    body = "\n".join(
        f"{i} " + " ".join(str(v) for v in row[:dims]) for i, row in enumerate(ROWS, start=1)
    )
    text = f"TYPE: TSP\nDIMENSION: 4\nEDGE_WEIGHT_TYPE: {kind.value}\nNODE_COORD_SECTION\n{body}\nEOF\n"
    problem = parse_str(text)
    m = problem.weight_matrix()

    for i in range(1, 5):
        assert problem.weight(i, i) == 0
        assert m[i - 1, i - 1] == 0
        for j in range(1, 5):
            assert problem.weight(i, j) == problem.weight(j, i)
            assert m[i - 1, j - 1] == problem.weight(i, j)
    assert len(problem.iter_edge_weights()) == 6
