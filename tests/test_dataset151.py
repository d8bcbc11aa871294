from uffio.codec import decode_all, encode_all
from uffio.datasets.dataset151 import Dataset151, parse_dataset151, write_dataset151
from uffio.scanner import Block

HEADER_LINES = [
    "    -1",
    "   151",
    "model.unv",
    "desc",
    "app",
    "01-JAN-20 12:00:00version   1 2         3",
    "01-JAN-20 12:00:00",
    "prog",
    "01-JAN-20 12:00:00",
    "    -1",
]


def test_decode_header_dataset():
    result = decode_all(("\n".join(HEADER_LINES) + "\n").encode())
    assert result.skipped == 0
    assert len(result.records) == 1
    header = result.records[0]
    assert isinstance(header, Dataset151)
    assert header.model_name == "model.unv"
    assert header.description == "desc"
    assert header.application == "app"
    assert header.file_type == 3
    assert header.datetime_last_saved == "01-JAN-20 12:00:00"
    assert header.program == "prog"
    assert header.title == "Header"


def test_blank_file_type_defaults_to_zero():
    block = Block(lines=["151", "m", "d", "a", "01-JAN-20 12:00:00", "", "p", ""])
    header = parse_dataset151(block)
    assert header.file_type == 0
    assert header.version == ""
    assert header.datetime_created == "01-JAN-20 12:00:00"


def test_short_block_decodes_with_defaults():
    header = parse_dataset151(Block(lines=["151", "only the model"]))
    assert header == Dataset151(model_name="only the model")


def test_write_places_fields_in_columns():
    header = Dataset151(
        model_name="model.unv",
        datetime_created="01-JAN-20 12:00:00",
        version="1",
        file_type=2,
    )
    record4 = write_dataset151(header)[3]
    assert record4[:20].strip() == "01-JAN-20 12:00:00"
    assert record4[20:40].strip() == "1"
    assert record4[40:50] == "         2"


def test_header_survives_reencoding():
    first = decode_all(("\n".join(HEADER_LINES) + "\n").encode()).records
    lines = encode_all(first)
    assert lines[:2] == ["    -1", "   151"]
    assert lines[-1] == "    -1"
    second = decode_all(("\n".join(lines) + "\n").encode()).records
    assert second == first
