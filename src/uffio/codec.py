"""Whole-file decode and encode.

Decoding scans the buffer into blocks, looks each block's tag up in the
registry and parses the supported ones. Unsupported blocks are logged and
counted, never fatal. Encoding wraps every record's lines between sentinels
with the record's tag line.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from uffio.config import CodecConfig
from uffio.errors import MalformedFieldError, TruncatedPayloadError
from uffio.records import UffDataset
from uffio.registry import DatasetRegistry, load_builtin_kinds, render_tag
from uffio.scanner import SENTINEL_LINE, Block, iter_blocks

logger = logging.getLogger(__name__)


@dataclass
class BlockError:
    block_index: int
    tag: str
    field: str | None
    message: str


@dataclass
class DecodeResult:
    records: list[UffDataset] = field(default_factory=list)
    skipped: int = 0
    skipped_tags: Counter[str] = field(default_factory=Counter)
    errors: list[BlockError] = field(default_factory=list)
    blocks: int = 0


def _decode_block(
    block: Block, registry: DatasetRegistry, config: CodecConfig, result: DecodeResult
) -> None:
    tag = block.tag
    if not registry.is_supported(tag):
        logger.warning("Unsupported dataset type: %s - skipping block %d", tag, block.index)
        result.skipped += 1
        result.skipped_tags[tag] += 1
        return

    codec = registry.resolve(tag)
    try:
        result.records.append(codec.parse(block))
    except MalformedFieldError as exc:
        exc.block_index = block.index
        exc.tag = tag
        if config.on_malformed == "raise":
            raise
        logger.warning("%s - skipping block", exc)
        result.errors.append(
            BlockError(block_index=block.index, tag=tag, field=exc.field, message=str(exc))
        )


def decode_all(
    data: bytes,
    *,
    registry: DatasetRegistry | None = None,
    config: CodecConfig | None = None,
) -> DecodeResult:
    """Decode every supported block of a UFF buffer, in file order.

    Raises TruncatedPayloadError (with `partial` holding the records decoded so
    far) when a binary payload runs off the end of the buffer, and
    MalformedFieldError when `config.on_malformed == "raise"`.
    """
    if registry is None:
        registry = load_builtin_kinds()
    cfg = config or CodecConfig()
    result = DecodeResult()

    try:
        for block in iter_blocks(data, **cfg.scan_options()):
            result.blocks += 1
            _decode_block(block, registry, cfg, result)
    except TruncatedPayloadError as exc:
        exc.partial = result
        logger.error("%s", exc)
        raise

    logger.info(
        "decoded %d of %d blocks (%d unsupported, %d malformed)",
        len(result.records),
        result.blocks,
        result.skipped,
        len(result.errors),
    )
    return result


def encode_record(record: UffDataset, registry: DatasetRegistry) -> list[str]:
    tag = registry.tag_for(record)
    codec = registry.resolve(tag)
    return [SENTINEL_LINE, render_tag(tag), *codec.write(record), SENTINEL_LINE]


def encode_all(
    records: Iterable[UffDataset], *, registry: DatasetRegistry | None = None
) -> list[str]:
    if registry is None:
        registry = load_builtin_kinds()
    lines: list[str] = []
    for record in records:
        lines.extend(encode_record(record, registry))
    return lines


def load_bytes(path: Path) -> bytes:
    return Path(path).read_bytes()


def save_lines(
    path: Path, lines: Iterable[str], *, encoding: str = "latin-1", newline: str = "\n"
) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding=encoding, newline="") as f:
        for line in lines:
            f.write(line + newline)


def read_uff(
    path: Path,
    *,
    registry: DatasetRegistry | None = None,
    config: CodecConfig | None = None,
) -> list[UffDataset]:
    """Read a UFF file and return its decoded records."""
    return decode_all(load_bytes(path), registry=registry, config=config).records


def write_uff(
    path: Path,
    records: Iterable[UffDataset],
    *,
    registry: DatasetRegistry | None = None,
    config: CodecConfig | None = None,
) -> None:
    cfg = config or CodecConfig()
    save_lines(
        path,
        encode_all(records, registry=registry),
        encoding=cfg.encoding,
        newline=cfg.newline,
    )
