"""Dataset 15: Nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from uffio.fields import extract_float, extract_int, format_float, format_int
from uffio.records import UffDataset
from uffio.registry import register_dataset_kind
from uffio.scanner import Block


@dataclass
class Dataset15(UffDataset):
    title: ClassVar[str] = "Nodes"

    node_labels: list[int] = field(default_factory=list)
    def_cs: list[int] = field(default_factory=list)
    disp_cs: list[int] = field(default_factory=list)
    colors: list[int] = field(default_factory=list)
    node_coords: list[tuple[float, float, float]] = field(default_factory=list)


def parse_dataset15(block: Block) -> Dataset15:
    """Universal Dataset Number: 15 (Nodes)

    Record 1: FORMAT(4I10,1P3E13.5)
                node label,
                definition coordinate system number,
                displacement coordinate system number,
                color,
                3 - dimensional coordinates of node in the definition system

    Record 1 repeats for each node.
    """
    dataset = Dataset15()
    for line in block.raw_lines[1:]:
        if not line.strip():
            continue
        dataset.node_labels.append(extract_int(line, 0, 10, name="node_label"))
        dataset.def_cs.append(extract_int(line, 10, 10, name="def_cs"))
        dataset.disp_cs.append(extract_int(line, 20, 10, name="disp_cs"))
        dataset.colors.append(extract_int(line, 30, 10, name="color"))
        dataset.node_coords.append(
            (
                extract_float(line, 40, 13, name="x"),
                extract_float(line, 53, 13, name="y"),
                extract_float(line, 66, 13, name="z"),
            )
        )
    return dataset


def write_dataset15(dataset: Dataset15) -> list[str]:
    lines = []
    for label, def_cs, disp_cs, color, coords in zip(
        dataset.node_labels,
        dataset.def_cs,
        dataset.disp_cs,
        dataset.colors,
        dataset.node_coords,
        strict=True,
    ):
        ints = "".join(format_int(v, 10) for v in (label, def_cs, disp_cs, color))
        reals = "".join(format_float(v, 13, 5) for v in coords)
        lines.append(ints + reals)
    return lines


register_dataset_kind("15", parse_dataset15, write_dataset15, kind=Dataset15)
