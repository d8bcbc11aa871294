"""Fixed-column field helpers.

UFF records are Fortran-formatted: every field lives at a fixed column range
and is never delimiter-split. Columns here are 0-based and half-open
(`[start, start + width)`); the format documentation counts from 1.

Blank numeric fields decode to zero. Anything else that fails to parse raises
MalformedFieldError naming the field.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from itertools import cycle

from uffio.errors import MalformedFieldError

LINE_WIDTH = 80
# ASCII only: latin-1 decoding maps 0x85/0xA0 to characters str.strip() would eat.
WHITESPACE = " \t\r\n\x0b\x0c"


def extend_to_width(line: str, width: int = LINE_WIDTH) -> str:
    """Pad `line` with trailing spaces so it is at least `width` characters."""
    if len(line) < width:
        return line + " " * (width - len(line))
    return line


def _slice(line: str, start: int, width: int | None) -> str:
    if width is None:
        return line[start:]
    return extend_to_width(line, start + width)[start : start + width]


def extract(line: str, start: int, width: int | None = None) -> str:
    """Trimmed text of a column range; `width=None` runs to end of line."""
    return _slice(line, start, width).strip(WHITESPACE)


def extract_int(line: str, start: int, width: int | None = None, *, name: str | None = None) -> int:
    text = extract(line, start, width)
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        raise MalformedFieldError(name, text) from None


def to_float(text: str, name: str | None = None) -> float:
    """Parse a Fortran real, accepting `D` exponents; blank means 0.0."""
    text = text.strip(WHITESPACE)
    if not text:
        return 0.0
    try:
        return float(text.replace("D", "E").replace("d", "e"))
    except ValueError:
        raise MalformedFieldError(name, text) from None


def extract_float(
    line: str, start: int, width: int | None = None, *, name: str | None = None
) -> float:
    return to_float(_slice(line, start, width), name=name)


def line_at(lines: list[str], index: int) -> str:
    """Record line `index`, or an empty line when the block is short."""
    return lines[index] if index < len(lines) else ""


def pad(text: str, width: int) -> str:
    """Right-pad `text` with spaces to `width`. Longer text is left as is."""
    return text.ljust(width)


def format_int(value: int, width: int) -> str:
    """Fortran `Iw`."""
    return f"{value:{width}d}"


def format_float(value: float, width: int, precision: int, *, exponent: str = "E") -> str:
    """Fortran `Ew.d`, or `Dw.d` with `exponent="D"`."""
    text = f"{value:{width}.{precision}E}"
    if exponent != "E":
        text = text.replace("E", exponent)
    return text


def parse_floats(
    lines: Iterable[str], widths: Sequence[int], name: str | None = None
) -> list[float]:
    """Reals from data lines laid out in fixed columns.

    Each line repeats `widths` from column 0 until the text runs out, so
    `(13, 20)` reads an `E13.5` abscissa followed by an `E20.12` ordinate.
    """
    values: list[float] = []
    for line in lines:
        line = line.rstrip(WHITESPACE)
        start = 0
        for width in cycle(widths):
            if start >= len(line):
                break
            values.append(extract_float(line, start, width, name=name))
            start += width
    return values
