"""Convert decoded datasets to SI using a Units (164) dataset.

Dataset 164 stores factors for converting universal file units to SI: divide
a length by `conversion_length` to get meters. Kinds without dimensional data
come back unchanged. Files without a Units dataset can pass the factor
directly with `conversion_length=`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from functools import singledispatch

from uffio.datasets.dataset15 import Dataset15
from uffio.datasets.dataset164 import Dataset164
from uffio.records import UffDataset


def _factor(value: float, name: str) -> float:
    if value == 0:
        raise ValueError(f"units dataset has a zero {name} factor")
    return value


def _length_factor(units: Dataset164 | None, conversion_length: float | None) -> float:
    if conversion_length is not None:
        return _factor(conversion_length, "length")
    if units is None:
        raise ValueError("either a units dataset or conversion_length is required")
    return _factor(units.conversion_length, "length")


@singledispatch
def convert_to_si(
    dataset: UffDataset,
    units: Dataset164 | None = None,
    *,
    conversion_length: float | None = None,
) -> UffDataset:
    return dataset


@convert_to_si.register
def _(
    dataset: Dataset15,
    units: Dataset164 | None = None,
    *,
    conversion_length: float | None = None,
) -> Dataset15:
    length = _length_factor(units, conversion_length)
    coords = [(x / length, y / length, z / length) for x, y, z in dataset.node_coords]
    return replace(dataset, node_coords=coords)


def find_units(records: Sequence[UffDataset]) -> Dataset164 | None:
    """First Units dataset in a file, if any."""
    for record in records:
        if isinstance(record, Dataset164):
            return record
    return None


def records_to_si(records: Sequence[UffDataset]) -> list[UffDataset]:
    """Convert every record using the file's own Units dataset."""
    units = find_units(records)
    if units is None:
        return list(records)
    return [convert_to_si(record, units) for record in records]
