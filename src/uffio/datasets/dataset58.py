"""Dataset 58: Function at nodal DOF, with its binary `58b` variant.

Both tags decode into Dataset58. Records are always written back as ASCII
`58` blocks; single precision data is written `6E13.5`, double precision
`4E20.12`, so values read from a `58b` single precision payload are rounded
to the ASCII width on write.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar

from uffio.errors import MalformedFieldError
from uffio.fields import (
    extract,
    extract_float,
    extract_int,
    format_float,
    format_int,
    line_at,
    pad,
    parse_floats,
)
from uffio.records import UffDataset
from uffio.registry import register_dataset_kind
from uffio.scanner import Block

REAL_SINGLE = 2
REAL_DOUBLE = 4
COMPLEX_SINGLE = 5
COMPLEX_DOUBLE = 6

EVEN_SPACING = 1
UNEVEN_SPACING = 0

SINGLE_WIDTH = 13  # E13.5
DOUBLE_WIDTH = 20  # E20.12

BYTE_ORDERS = {"1": "<", "2": ">"}
IEEE_754 = "2"


@dataclass
class AxisSpec:
    spec_data_type: int = 0
    length_exp: int = 0
    force_exp: int = 0
    temp_exp: int = 0
    label: str = ""
    units: str = ""


@dataclass
class Dataset58(UffDataset):
    title: ClassVar[str] = "Function at Nodal DOF"

    id1: str = ""
    id2: str = ""
    id3: str = ""
    id4: str = ""
    id5: str = ""
    func_type: int = 0
    func_id: int = 0
    version: int = 0
    load_case: int = 0
    rsp_ent_name: str = ""
    rsp_node: int = 0
    rsp_dir: int = 0
    ref_ent_name: str = ""
    ref_node: int = 0
    ref_dir: int = 0
    ord_data_type: int = REAL_SINGLE
    num_pts: int = 0
    abscissa_spacing: int = EVEN_SPACING
    abscissa_min: float = 0.0
    abscissa_inc: float = 0.0
    z_axis_value: float = 0.0
    abscissa_axis: AxisSpec = field(default_factory=AxisSpec)
    ordinate_num_axis: AxisSpec = field(default_factory=AxisSpec)
    ordinate_den_axis: AxisSpec = field(default_factory=AxisSpec)
    z_axis: AxisSpec = field(default_factory=AxisSpec)
    abscissa: list[float] = field(default_factory=list)
    data: list[float | complex] = field(default_factory=list)

    @property
    def is_complex(self) -> bool:
        return self.ord_data_type in (COMPLEX_SINGLE, COMPLEX_DOUBLE)

    @property
    def is_double(self) -> bool:
        return self.ord_data_type in (REAL_DOUBLE, COMPLEX_DOUBLE)

    @property
    def is_even(self) -> bool:
        return self.abscissa_spacing == EVEN_SPACING


def _parse_axis(line: str, name: str) -> AxisSpec:
    return AxisSpec(
        spec_data_type=extract_int(line, 0, 10, name=f"{name}.spec_data_type"),
        length_exp=extract_int(line, 10, 5, name=f"{name}.length_exp"),
        force_exp=extract_int(line, 15, 5, name=f"{name}.force_exp"),
        temp_exp=extract_int(line, 20, 5, name=f"{name}.temp_exp"),
        label=extract(line, 26, 20),
        units=extract(line, 47, 20),
    )


def _write_axis(axis: AxisSpec) -> str:
    line = (
        format_int(axis.spec_data_type, 10)
        + format_int(axis.length_exp, 5)
        + format_int(axis.force_exp, 5)
        + format_int(axis.temp_exp, 5)
        + " "
        + pad(axis.label, 20)[:20]
        + " "
        + pad(axis.units, 20)[:20]
    )
    return line.rstrip()


def _unpack_payload(block: Block, dataset: Dataset58) -> list[float]:
    """Decode a `58b` payload per its header (byte order, float format, size)."""
    tokens = block.lines[0].split()
    if len(tokens) < 5:
        raise MalformedFieldError("binary_header", block.lines[0])
    byte_order = BYTE_ORDERS.get(tokens[1])
    if byte_order is None:
        raise MalformedFieldError("byte_ordering", tokens[1])
    if tokens[2] != IEEE_754:
        raise MalformedFieldError("float_format", tokens[2])
    try:
        nbytes = int(tokens[4])
    except ValueError:
        raise MalformedFieldError("payload_bytes", tokens[4]) from None

    payload = block.payload or b""
    if len(payload) < nbytes:
        raise MalformedFieldError("payload", f"{len(payload)} of {nbytes} bytes")
    code = "d" if dataset.is_double else "f"
    itemsize = struct.calcsize(code)
    count = nbytes // itemsize
    return list(struct.unpack(f"{byte_order}{count}{code}", payload[: count * itemsize]))


def parse_dataset58(block: Block) -> Dataset58:
    """Universal Dataset Number: 58 (Function at Nodal DOF)

    Record 1-5:  FORMAT(80A1)  ID lines 1-5
    Record 6:    FORMAT(2(I5,I10),2(1X,10A1,I10,I4))
                   function type, function id, version, load case,
                   response entity, node, direction,
                   reference entity, node, direction
    Record 7:    FORMAT(3I10,3E13.5)
                   ordinate data type (2 real single, 4 real double,
                   5 complex single, 6 complex double),
                   number of points, abscissa spacing (0 uneven, 1 even),
                   abscissa minimum, abscissa increment, z-axis value
    Record 8-11: FORMAT(I10,3I5,2(1X,20A1))
                   abscissa, ordinate numerator, ordinate denominator and
                   z-axis characteristics: specific data type, length, force
                   and temperature exponents, axis label, axis units label
    Record 12:   data values, 6E13.5 for single and 4E20.12 for double
                 precision; uneven abscissa interleaves x with each value

    Universal Dataset Number: 58b (binary)

    The dataset line reads FORMAT(I6,1A1,I6,I6,I12,I12,I6,I6,I12,I12):
    58, 'b', byte ordering (1 little endian, 2 big endian), floating point
    format (2 IEEE 754), number of ASCII lines following (11), number of bytes
    following the ASCII lines. Record 12 is then raw binary.
    """
    raw = block.raw_lines
    record6 = line_at(raw, 6)
    record7 = line_at(raw, 7)
    dataset = Dataset58(
        id1=line_at(block.lines, 1),
        id2=line_at(block.lines, 2),
        id3=line_at(block.lines, 3),
        id4=line_at(block.lines, 4),
        id5=line_at(block.lines, 5),
        func_type=extract_int(record6, 0, 5, name="func_type"),
        func_id=extract_int(record6, 5, 10, name="func_id"),
        version=extract_int(record6, 15, 5, name="version"),
        load_case=extract_int(record6, 20, 10, name="load_case"),
        rsp_ent_name=extract(record6, 31, 10),
        rsp_node=extract_int(record6, 41, 10, name="rsp_node"),
        rsp_dir=extract_int(record6, 51, 4, name="rsp_dir"),
        ref_ent_name=extract(record6, 56, 10),
        ref_node=extract_int(record6, 66, 10, name="ref_node"),
        ref_dir=extract_int(record6, 76, 4, name="ref_dir"),
        ord_data_type=extract_int(record7, 0, 10, name="ord_data_type"),
        num_pts=extract_int(record7, 10, 10, name="num_pts"),
        abscissa_spacing=extract_int(record7, 20, 10, name="abscissa_spacing"),
        abscissa_min=extract_float(record7, 30, 13, name="abscissa_min"),
        abscissa_inc=extract_float(record7, 43, 13, name="abscissa_inc"),
        z_axis_value=extract_float(record7, 56, 13, name="z_axis_value"),
        abscissa_axis=_parse_axis(line_at(raw, 8), "abscissa_axis"),
        ordinate_num_axis=_parse_axis(line_at(raw, 9), "ordinate_num_axis"),
        ordinate_den_axis=_parse_axis(line_at(raw, 10), "ordinate_den_axis"),
        z_axis=_parse_axis(line_at(raw, 11), "z_axis"),
    )

    if block.payload is not None:
        values = _unpack_payload(block, dataset)
    else:
        values = parse_floats(raw[12:], _data_widths(dataset), name="data")

    if dataset.is_even:
        if dataset.is_complex:
            dataset.data = [complex(re, im) for re, im in zip(values[0::2], values[1::2])]
        else:
            dataset.data = values
    else:
        stride = 3 if dataset.is_complex else 2
        dataset.abscissa = values[0::stride][: len(values) // stride]
        if dataset.is_complex:
            dataset.data = [complex(re, im) for re, im in zip(values[1::3], values[2::3])]
        else:
            dataset.data = values[1::2]

    if dataset.num_pts:
        dataset.data = dataset.data[: dataset.num_pts]
        dataset.abscissa = dataset.abscissa[: dataset.num_pts]
    if dataset.is_even:
        dataset.abscissa = [
            dataset.abscissa_min + i * dataset.abscissa_inc for i in range(len(dataset.data))
        ]
    return dataset


def _data_widths(dataset: Dataset58) -> tuple[int, ...]:
    """Column widths of one data point: abscissa (uneven only), then ordinate parts."""
    width = DOUBLE_WIDTH if dataset.is_double else SINGLE_WIDTH
    ordinate = (width, width) if dataset.is_complex else (width,)
    if dataset.is_even:
        return ordinate
    return (SINGLE_WIDTH, *ordinate)


def _data_tokens(dataset: Dataset58) -> tuple[list[str], int]:
    """Formatted data values and how many of them share a line."""
    if dataset.is_double:
        width, precision = DOUBLE_WIDTH, 12
    else:
        width, precision = SINGLE_WIDTH, 5

    def real(value: float) -> str:
        return format_float(value, width, precision)

    def parts(value: float | complex) -> list[str]:
        if dataset.is_complex:
            value = complex(value)
            return [real(value.real), real(value.imag)]
        return [real(float(value))]

    tokens: list[str] = []
    if dataset.is_even:
        for value in dataset.data:
            tokens.extend(parts(value))
        return tokens, 4 if dataset.is_double else 6

    for x, value in zip(dataset.abscissa, dataset.data, strict=True):
        tokens.append(format_float(x, SINGLE_WIDTH, 5))
        tokens.extend(parts(value))
    if not dataset.is_double:
        return tokens, 6
    return tokens, 3 if dataset.is_complex else 4


def write_dataset58(dataset: Dataset58) -> list[str]:
    record6 = (
        format_int(dataset.func_type, 5)
        + format_int(dataset.func_id, 10)
        + format_int(dataset.version, 5)
        + format_int(dataset.load_case, 10)
        + " "
        + pad(dataset.rsp_ent_name, 10)[:10]
        + format_int(dataset.rsp_node, 10)
        + format_int(dataset.rsp_dir, 4)
        + " "
        + pad(dataset.ref_ent_name, 10)[:10]
        + format_int(dataset.ref_node, 10)
        + format_int(dataset.ref_dir, 4)
    )
    record7 = (
        format_int(dataset.ord_data_type, 10)
        + format_int(len(dataset.data), 10)
        + format_int(dataset.abscissa_spacing, 10)
        + format_float(dataset.abscissa_min, 13, 5)
        + format_float(dataset.abscissa_inc, 13, 5)
        + format_float(dataset.z_axis_value, 13, 5)
    )
    lines = [
        dataset.id1,
        dataset.id2,
        dataset.id3,
        dataset.id4,
        dataset.id5,
        record6,
        record7,
        _write_axis(dataset.abscissa_axis),
        _write_axis(dataset.ordinate_num_axis),
        _write_axis(dataset.ordinate_den_axis),
        _write_axis(dataset.z_axis),
    ]
    tokens, per_line = _data_tokens(dataset)
    for start in range(0, len(tokens), per_line):
        lines.append("".join(tokens[start : start + per_line]))
    return lines


register_dataset_kind("58", parse_dataset58, write_dataset58, kind=Dataset58)
register_dataset_kind("58b", parse_dataset58, write_dataset58)
