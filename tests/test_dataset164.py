import pytest

from uffio.codec import decode_all, encode_all
from uffio.datasets.dataset164 import Dataset164, parse_dataset164, write_dataset164
from uffio.errors import MalformedFieldError
from uffio.scanner import Block

RECORD1 = "         5" + "mm (milli newton)   " + "         2"
RECORD2 = "  1.00000000000000000D+03" + "  1.00000000000000000D+03" + "  1.00000000000000000D+00"
RECORD3 = "  2.73150000000000000D+02"


def _block(*raw: str) -> Block:
    return Block(lines=[line.strip() for line in raw], raw_lines=list(raw))


def test_decode_units_from_columns():
    units = parse_dataset164(_block("   164", RECORD1, RECORD2, RECORD3))
    assert units.units_code == 5
    assert units.units_description == "mm (milli newton)"
    assert units.temperature_mode == 2
    assert units.conversion_length == 1000.0
    assert units.conversion_force == 1000.0
    assert units.conversion_temperature == 1.0
    assert units.temperature_offset == 273.15


def test_write_uses_d_exponents():
    lines = write_dataset164(Dataset164(units_code=1, units_description="SI"))
    assert lines[0] == "         1SI                           1"
    assert lines[1] == "  1.00000000000000000D+00" * 3
    assert lines[2] == "  0.00000000000000000D+00"


def test_units_roundtrip_through_codec():
    original = Dataset164(
        units_code=5,
        units_description="mm (milli newton)",
        temperature_mode=2,
        conversion_length=1000.0,
        conversion_force=1000.0,
        temperature_offset=273.15,
    )
    text = "\n".join(encode_all([original])) + "\n"
    (decoded,) = decode_all(text.encode()).records
    assert decoded == original


def test_malformed_factor_is_named():
    with pytest.raises(MalformedFieldError) as excinfo:
        parse_dataset164(_block("   164", RECORD1, "  not-a-number"))
    assert excinfo.value.field == "conversion_length"
