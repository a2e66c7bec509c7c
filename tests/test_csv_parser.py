import pytest

from cavitation_checker.constants import LAYOUT_SECTIONED, LAYOUT_STANDARD
from cavitation_checker.csv_parser import (
    FormatError,
    SectionTable,
    is_csv_path,
    parse_finite_float,
    read_csv_file,
    split_layout,
    tokenize,
)


@pytest.mark.parametrize(
    "text, expected",
    [("12.5", 12.5), (" 3 ", 3.0), ("-1e2", -100.0), ("0", 0.0)],
)
def test_parse_finite_float_accepts_numbers(text, expected):
    assert parse_finite_float(text) == expected


@pytest.mark.parametrize("text", [None, "", "   ", "N/A", "abc", "nan", "inf", "-inf"])
def test_parse_finite_float_rejects_non_numbers(text):
    assert parse_finite_float(text) is None


def test_tokenize_trims_fields_and_numbers_lines():
    lines = list(tokenize(" a , b \n1, 2\n"))
    assert [line.fields for line in lines] == [["a", "b"], ["1", "2"]]
    assert [line.number for line in lines] == [1, 2]
    assert all(line.section is None for line in lines)


def test_tokenize_skips_blank_lines_but_keeps_numbering():
    lines = list(tokenize("a,b\n\n   \n1,2\n"))
    assert [line.number for line in lines] == [1, 4]


def test_tokenize_strips_bom_and_handles_crlf():
    lines = list(tokenize("\ufeffa,b\r\n1,2\r\n"))
    assert lines[0].fields == ["a", "b"]
    assert lines[1].fields == ["1", "2"]


def test_tokenize_splits_only_on_cr_and_lf():
    text = "a,b\n1,x\u2028y\r2,p\x85q\r\n3,\x0cz\n"
    lines = list(tokenize(text))
    assert [line.number for line in lines] == [1, 2, 3, 4]
    assert lines[1].fields == ["1", "x\u2028y"]
    assert lines[2].fields == ["2", "p\x85q"]


def test_is_csv_path():
    assert is_csv_path("/data/pump_log.csv")
    assert is_csv_path("LOG.CSV")
    assert not is_csv_path("pump_log.txt")
    assert not is_csv_path("csv")
    assert not is_csv_path("archive.csv.gz")


@pytest.mark.parametrize("text", ["", "   \n\n", "a,b", "a,b\n\n\n"])
def test_tokenize_needs_header_and_one_row(text):
    with pytest.raises(FormatError, match="at least a header"):
        tokenize(text)


def test_format_error_is_a_value_error():
    assert issubclass(FormatError, ValueError)


def test_section_marker_ignores_case_and_trailing_commas():
    lines = list(tokenize("#NPSHr Curve,,,\nFlow,NPSHr\n"))
    assert lines[0].section == "npshr curve"
    assert lines[1].section is None


def test_section_table_drops_rows_with_wrong_field_count():
    diagnostics = []
    table = SectionTable("data")
    for line in tokenize("a,b,c\n1,2,3\n1,2\n1,2,3,4\n4,5,6\n"):
        table.feed(line, diagnostics)

    assert table.header == ["a", "b", "c"]
    assert table.rows == [
        {"a": "1", "b": "2", "c": "3"},
        {"a": "4", "b": "5", "c": "6"},
    ]
    assert table.line_numbers == [2, 5]
    assert len(table) == 2
    assert [d.line for d in diagnostics] == [3, 4]
    assert diagnostics[0].reason == "expected 3 fields, found 2"
    assert diagnostics[1].section == "data"


def test_split_layout_standard():
    parsed = split_layout(tokenize("a,b\n1,2\n3,4\n"))
    assert parsed.layout == LAYOUT_STANDARD
    assert parsed.curve is None
    assert parsed.operating.rows == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]


def test_split_layout_routes_sections(sectioned_csv):
    parsed = split_layout(tokenize(sectioned_csv))
    assert parsed.layout == LAYOUT_SECTIONED
    assert parsed.operating.header == ["Temperature", "Pressure", "Flow", "NPSHa"]
    assert len(parsed.operating) == 2
    assert parsed.curve.header == ["Flow", "NPSHr"]
    assert parsed.curve.rows == [
        {"Flow": "50", "NPSHr": "8"},
        {"Flow": "200", "NPSHr": "14"},
    ]


def test_split_layout_section_order_does_not_matter():
    text = (
        "#npshr curve\nFlow,NPSHr\n50,8\n"
        "#operating data\nTemperature,Pressure,Flow,NPSHa\n20,5,60,12\n"
    )
    parsed = split_layout(tokenize(text))
    assert parsed.operating.rows[0]["Flow"] == "60"
    assert parsed.curve.rows[0]["NPSHr"] == "8"


def test_split_layout_reports_ignored_lines():
    text = (
        "stray,line\n"
        "#operating data\nA,B\n1,2\n"
        "#notes\nsome,remark\n"
    )
    diagnostics = []
    parsed = split_layout(tokenize(text), diagnostics)

    assert parsed.operating.rows == [{"A": "1", "B": "2"}]
    assert parsed.curve.header is None
    reasons = {(d.line, d.section): d.reason for d in diagnostics}
    assert reasons[(1, "(none)")] == "line appears before the first section marker"
    assert reasons[(5, "notes")] == "unrecognised section, its lines are ignored"
    # Lines under an unknown section are not reported one by one
    assert (6, "notes") not in reasons


def test_read_csv_file_strips_bom(write_csv):
    path = write_csv("a,b\n1,2\n", encoding="utf-8-sig")
    assert read_csv_file(path) == "a,b\n1,2\n"


def test_read_csv_file_rejects_non_utf8(tmp_path):
    path = tmp_path / "latin1.csv"
    path.write_bytes("Température,x\n1,2\n".encode("latin-1"))
    with pytest.raises(OSError, match="not UTF-8"):
        read_csv_file(str(path))


def test_read_csv_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_csv_file(str(tmp_path / "missing.csv"))
