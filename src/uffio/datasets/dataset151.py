"""Dataset 151: Header."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from uffio.fields import extract, extract_int, format_int, line_at, pad
from uffio.records import UffDataset
from uffio.registry import register_dataset_kind
from uffio.scanner import Block


@dataclass
class Dataset151(UffDataset):
    title: ClassVar[str] = "Header"

    model_name: str = ""
    description: str = ""
    application: str = ""
    datetime_created: str = ""
    version: str = ""
    file_type: int = 0
    datetime_last_saved: str = ""
    program: str = ""
    datetime_written: str = ""


def parse_dataset151(block: Block) -> Dataset151:
    """Universal Dataset Number: 151 (Header)

    Record 1: FORMAT(80A1)  model file name
    Record 2: FORMAT(80A1)  model file description
    Record 3: FORMAT(80A1)  program which created DB
    Record 4: FORMAT(10A1,10A1,3I10)
                date/time database created (DD-MMM-YY HH:MM:SS),
                version from database (2 fields),
                file type (0 universal, 1 archive, 2 other)
    Record 5: FORMAT(10A1,10A1)  date/time database last saved
    Record 6: FORMAT(80A1)  program which created universal file
    Record 7: FORMAT(10A1,10A1)  date/time universal file written
    """
    lines = block.lines
    created = block.record(4)
    return Dataset151(
        model_name=line_at(lines, 1),
        description=line_at(lines, 2),
        application=line_at(lines, 3),
        datetime_created=extract(created, 0, 20),
        version=extract(created, 20, 20),
        file_type=extract_int(created, 40, name="file_type"),
        datetime_last_saved=line_at(lines, 5),
        program=line_at(lines, 6),
        datetime_written=line_at(lines, 7),
    )


def write_dataset151(dataset: Dataset151) -> list[str]:
    record4 = pad(dataset.datetime_created, 20)[:20] + pad(dataset.version, 20)[:20]
    if dataset.file_type:
        record4 += format_int(dataset.file_type, 10)
    return [
        dataset.model_name,
        dataset.description,
        dataset.application,
        record4.rstrip(),
        dataset.datetime_last_saved,
        dataset.program,
        dataset.datetime_written,
    ]


register_dataset_kind("151", parse_dataset151, write_dataset151, kind=Dataset151)
