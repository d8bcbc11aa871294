import pytest

from uffio.errors import MalformedFieldError
from uffio.fields import (
    extend_to_width,
    extract,
    extract_float,
    extract_int,
    format_float,
    format_int,
    line_at,
    pad,
    parse_floats,
)


def test_extend_to_width_pads_short_lines_only():
    line = "01-JAN-20 12:00:00"
    extended = extend_to_width(line, 80)
    assert len(extended) == 80
    assert extended[: len(line)] == line
    assert extended[len(line) :].strip() == ""

    long_line = "x" * 85
    assert extend_to_width(long_line, 80) is long_line
    assert extend_to_width("y" * 80, 80) == "y" * 80


def test_extract_trims_and_tolerates_short_lines():
    assert extract("  hello   world", 0, 7) == "hello"
    assert extract("abc", 10, 5) == ""
    assert extract("0123456789tail  ", 10) == "tail"


def test_extract_int_blank_means_zero():
    assert extract_int(" " * 10, 0, 10) == 0
    assert extract_int("", 40) == 0
    assert extract_int("        42", 0, 10) == 42
    assert extract_int("   -7", 0, 5) == -7


def test_extract_int_reports_field_name():
    with pytest.raises(MalformedFieldError) as excinfo:
        extract_int("    abc", 0, 7, name="file_type")
    assert excinfo.value.field == "file_type"
    assert excinfo.value.value == "abc"
    assert isinstance(excinfo.value, ValueError)


def test_extract_float_accepts_fortran_exponents():
    assert extract_float("  1.5D+01", 0) == 15.0
    assert extract_float("  2.50000E-01", 0, 13) == 0.25
    assert extract_float("", 0, 13) == 0.0
    with pytest.raises(MalformedFieldError):
        extract_float("  x.yz", 0, name="abscissa_min")


def test_pad_never_truncates():
    assert pad("ab", 5) == "ab   "
    assert pad("abcdef", 3) == "abcdef"


def test_fortran_formats():
    assert format_int(3, 10) == "         3"
    assert format_float(1.0, 13, 5) == "  1.00000E+00"
    assert format_float(1.0, 25, 17, exponent="D") == "  1.00000000000000000D+00"
    assert format_float(-2.5, 13, 5) == " -2.50000E+00"


def test_parse_floats_reads_fixed_columns():
    # full-width values touch their neighbours
    line = format_float(1.0, 13, 5) + format_float(-1e-100, 13, 5)
    assert line == "  1.00000E+00-1.00000E-100"
    assert parse_floats([line], (13,)) == [1.0, -1e-100]
    assert parse_floats(["  3.0D+00     ", ""], (13,)) == [3.0]


def test_parse_floats_cycles_mixed_widths():
    line = format_float(0.5, 13, 5) + format_float(-2.0e-120, 20, 12)
    line += format_float(1.5, 13, 5) + format_float(4.0, 20, 12)
    assert parse_floats([line], (13, 20)) == [0.5, -2.0e-120, 1.5, 4.0]
    with pytest.raises(MalformedFieldError) as excinfo:
        parse_floats(["  1.00000E+00  abc"], (13,), name="data")
    assert excinfo.value.field == "data"


def test_line_at():
    assert line_at(["a", "b"], 1) == "b"
    assert line_at(["a", "b"], 5) == ""
