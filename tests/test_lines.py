import io

import pytest

from tsplib_reader.engine.lines import Line, iter_lines, section_keyword
from tsplib_reader.errors import MalformedFile
from tsplib_reader.model.types import Section


def test_iter_lines_skips_blank_and_keeps_physical_numbers():
    text = "NAME: a\n\n   \nDIMENSION : 3\r\nEOF\n"
    lines = list(iter_lines(io.StringIO(text, newline=None)))
    assert [ln.number for ln in lines] == [1, 4, 5]
    assert lines[1].text == "DIMENSION : 3"


def test_split_entry_tolerates_both_spacings():
    assert Line(1, "DIMENSION : 52").split_entry() == ("DIMENSION", "52")
    assert Line(1, "dimension:52").split_entry() == ("DIMENSION", "52")
    assert Line(1, "COMMENT : a: b").split_entry() == ("COMMENT", "a: b")


def test_split_entry_rejects_data_rows():
    assert Line(1, "1 30 40").split_entry() is None
    assert Line(1, "NODE COORD: 1").split_entry() is None


@pytest.mark.parametrize(
    "text, section",
    [
        ("NODE_COORD_SECTION", Section.NODE_COORD),
        ("NODE_COORD_SECTION :", Section.NODE_COORD),
        ("EDGE_WEIGHT_SECTION:", Section.EDGE_WEIGHT),
        ("tour_section", Section.TOUR),
        ("EOF", Section.EOF),
    ],
)
def test_section_keyword_recognised(text, section):
    assert section_keyword(Line(1, text)) is section


def test_section_keyword_ignores_data_and_entries():
    assert section_keyword(Line(1, "1 2 3")) is None
    assert section_keyword(Line(1, "-1")) is None
    assert section_keyword(Line(1, "TYPE: TSP")) is None


def test_unknown_section_keyword_is_malformed_file():
    with pytest.raises(MalformedFile) as err:
        section_keyword(Line(7, "NODE_COORDS_SECTION"))
    assert err.value.line == 7


def test_section_keyword_with_trailing_content_is_malformed_file():
    with pytest.raises(MalformedFile):
        section_keyword(Line(3, "DEPOT_SECTION 1"))


def test_iter_lines_drops_byte_order_mark():
    lines = list(iter_lines(["\ufeffNAME: bom\n", "TYPE: TSP\n"]))
    assert lines[0].split_entry() == ("NAME", "bom")
    assert lines[0].number == 1
