"""Block segmentation for UFF byte buffers.

A UFF file is a run of blocks, each opened and closed by a line that trims to
`-1`. Payload blocks (`58b` and friends) announce themselves with a first line
longer than 6 characters; after their 12 header lines the rest of the block is
raw binary, terminated by the padded sentinel `"    -1"`. Because that binary
span can hold any byte, including newlines, the scanner walks the buffer with
an explicit byte cursor instead of a line reader.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from uffio.errors import TruncatedPayloadError
from uffio.fields import LINE_WIDTH, WHITESPACE, extend_to_width, line_at
from uffio.registry import TAG_WIDTH, normalize_tag

logger = logging.getLogger(__name__)

SENTINEL = "-1"
SENTINEL_LINE = "    -1"
SENTINEL_BYTES = SENTINEL_LINE.encode("ascii")
PAYLOAD_HEADER_LINES = 12


@dataclass
class Block:
    """One block: stripped lines, plus a binary payload for payload blocks.

    `raw_lines` holds the same lines with only trailing whitespace removed, for
    records whose fixed columns start with right-justified fields.
    """

    lines: list[str]
    payload: bytes | None = None
    index: int = 0
    offset: int = 0
    raw_lines: list[str] = field(default_factory=list)
    line_width: int = LINE_WIDTH

    def __post_init__(self) -> None:
        if not self.raw_lines:
            self.raw_lines = list(self.lines)

    def record(self, index: int) -> str:
        """Raw line `index` padded to the line width, blank past the end."""
        return extend_to_width(line_at(self.raw_lines, index), self.line_width)

    @property
    def tag(self) -> str:
        return normalize_tag(self.lines[0])

    @property
    def is_payload_block(self) -> bool:
        return self.payload is not None

    @property
    def elements(self) -> list[str | bytes]:
        """Lines followed by the binary payload, when there is one."""
        items: list[str | bytes] = list(self.lines)
        if self.payload is not None:
            items.append(self.payload)
        return items


@dataclass
class _ScanState:
    in_block: bool = False
    payload_candidate: bool = False
    offset: int = 0
    lines: list[str] = field(default_factory=list)
    raw_lines: list[str] = field(default_factory=list)

    def open(self, offset: int) -> None:
        self.in_block = True
        self.payload_candidate = False
        self.offset = offset
        self.lines = []
        self.raw_lines = []

    def close(self) -> None:
        self.in_block = False
        self.payload_candidate = False
        self.lines = []
        self.raw_lines = []

    def emit(self, index: int, line_width: int, payload: bytes | None = None) -> Block:
        return Block(
            lines=self.lines,
            payload=payload,
            index=index,
            offset=self.offset,
            raw_lines=self.raw_lines,
            line_width=line_width,
        )


def declared_payload_size(header: str) -> int | None:
    """Byte count from a `58b`-style header (5th token), if it has one."""
    tokens = header.split()
    if len(tokens) < 5:
        return None
    try:
        size = int(tokens[4])
    except ValueError:
        return None
    return size if size > 0 else None


def find_payload_end(data: bytes, start: int, declared: int | None = None) -> int:
    """Offset of the sentinel closing a payload that begins at `start`, or -1.

    The last sentinel in the buffer closes the payload, so everything up to it
    belongs to the payload block. With a `declared` byte count the first
    sentinel at or past `start + declared` is used instead.
    """
    if declared is not None:
        idx = data.find(SENTINEL_BYTES, start + declared)
        if idx != -1:
            return idx
    return data.rfind(SENTINEL_BYTES, start)


def iter_blocks(
    data: bytes,
    *,
    payload_lines: int = PAYLOAD_HEADER_LINES,
    sized_payloads: bool = False,
    line_width: int = LINE_WIDTH,
) -> Iterator[Block]:
    """Yield blocks in file order.

    `sized_payloads` ends each payload at the first sentinel past the byte
    count its header declares, instead of at the last sentinel in the buffer.

    Raises TruncatedPayloadError when a payload block never sees its closing
    sentinel. A text block still open at end-of-buffer is dropped.
    """
    idx = 0
    total = len(data)
    count = 0
    state = _ScanState()

    while idx < total:
        end = data.find(b"\n", idx)
        if end == -1:
            raw = data[idx:]
            idx = total
        else:
            raw = data[idx:end]
            idx = end + 1
        text = raw.decode("latin-1")
        line = text.strip(WHITESPACE)

        if line == SENTINEL:
            if not state.in_block:
                state.open(idx)
            else:
                if state.lines:
                    yield state.emit(count, line_width)
                    count += 1
                state.close()
            continue

        if not state.in_block:
            continue

        state.lines.append(line)
        state.raw_lines.append(text.rstrip(WHITESPACE))
        if len(state.lines) == 1 and len(line) > TAG_WIDTH:
            state.payload_candidate = True

        if state.payload_candidate and len(state.lines) == payload_lines:
            declared = declared_payload_size(state.lines[0]) if sized_payloads else None
            stop = find_payload_end(data, idx, declared)
            if stop == -1:
                raise TruncatedPayloadError(count, state.offset)
            logger.debug("block %d: %d byte payload at offset %d", count, stop - idx, idx)
            yield state.emit(count, line_width, payload=data[idx:stop])
            count += 1
            state.close()
            idx = stop + len(SENTINEL_BYTES)

    if state.in_block and state.lines:
        logger.debug("dropping unterminated block at offset %d", state.offset)


def extract_blocks(
    data: bytes,
    *,
    payload_lines: int = PAYLOAD_HEADER_LINES,
    sized_payloads: bool = False,
    line_width: int = LINE_WIDTH,
) -> list[Block]:
    return list(
        iter_blocks(
            data,
            payload_lines=payload_lines,
            sized_payloads=sized_payloads,
            line_width=line_width,
        )
    )
