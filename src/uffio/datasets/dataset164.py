"""Dataset 164: Units."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from uffio.fields import extract, extract_float, extract_int, format_float, format_int, line_at, pad
from uffio.records import UffDataset
from uffio.registry import register_dataset_kind
from uffio.scanner import Block

TEMPERATURE_ABSOLUTE = 1
TEMPERATURE_RELATIVE = 2


@dataclass
class Dataset164(UffDataset):
    title: ClassVar[str] = "Units"

    units_code: int = 1
    units_description: str = ""
    temperature_mode: int = TEMPERATURE_ABSOLUTE
    conversion_length: float = 1.0
    conversion_force: float = 1.0
    conversion_temperature: float = 1.0
    temperature_offset: float = 0.0


def _d25(value: float) -> str:
    return format_float(value, 25, 17, exponent="D")


def parse_dataset164(block: Block) -> Dataset164:
    """Universal Dataset Number: 164 (Units)

    Record 1: FORMAT(I10,20A1,I10)
                units code (1 SI meter, 2 BG foot, 3 MG meter, 4 BA foot,
                5 MM mm, 6 CM cm, 7 IN inch, ...),
                units description,
                temperature mode (1 absolute, 2 relative)
    Record 2: FORMAT(3D25.17)
                unit factors for converting universal file units to SI:
                length, force, temperature
    Record 3: FORMAT(1D25.17)
                temperature offset

    To convert universal file units to SI divide by the matching factor.
    """
    lines = block.raw_lines
    record1 = line_at(lines, 1)
    record2 = line_at(lines, 2)
    return Dataset164(
        units_code=extract_int(record1, 0, 10, name="units_code"),
        units_description=extract(record1, 10, 20),
        temperature_mode=extract_int(record1, 30, 10, name="temperature_mode"),
        conversion_length=extract_float(record2, 0, 25, name="conversion_length"),
        conversion_force=extract_float(record2, 25, 25, name="conversion_force"),
        conversion_temperature=extract_float(record2, 50, 25, name="conversion_temperature"),
        temperature_offset=extract_float(line_at(lines, 3), 0, 25, name="temperature_offset"),
    )


def write_dataset164(dataset: Dataset164) -> list[str]:
    return [
        format_int(dataset.units_code, 10)
        + pad(dataset.units_description, 20)[:20]
        + format_int(dataset.temperature_mode, 10),
        _d25(dataset.conversion_length)
        + _d25(dataset.conversion_force)
        + _d25(dataset.conversion_temperature),
        _d25(dataset.temperature_offset),
    ]


register_dataset_kind("164", parse_dataset164, write_dataset164, kind=Dataset164)
