"""Export decoded datasets as JSON, JSONL, or Arrow IPC."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict
from pathlib import Path
from typing import Any

import orjson
import pyarrow as pa

from uffio.records import UffDataset
from uffio.registry import DatasetRegistry, load_builtin_kinds


def _default(obj: object) -> object:
    # complex ordinates are not JSON-native; emit [re, im]
    if isinstance(obj, complex):
        return [obj.real, obj.imag]
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def record_to_dict(
    record: UffDataset, registry: DatasetRegistry | None = None
) -> dict[str, Any]:
    if registry is None:
        registry = load_builtin_kinds()
    return {
        "kind": record.kind,
        "tag": registry.tag_for(record),
        "title": record.title,
        "fields": asdict(record),
    }


def records_to_json(
    records: Sequence[UffDataset], registry: DatasetRegistry | None = None, indent: bool = False
) -> bytes:
    payload = [record_to_dict(r, registry) for r in records]
    option = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(payload, option=option, default=_default)


def records_to_jsonl(
    records: Sequence[UffDataset], path: Path, registry: DatasetRegistry | None = None
) -> None:
    """Write one JSON object per dataset."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        for record in records:
            f.write(orjson.dumps(record_to_dict(record, registry), default=_default) + b"\n")


def records_to_arrow(
    records: Sequence[UffDataset], path: Path, registry: DatasetRegistry | None = None
) -> None:
    """Write datasets to Arrow IPC, one row per dataset."""
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = [record_to_dict(r, registry) for r in records]
    table = pa.table(
        {
            "record_index": list(range(len(rows))),
            "kind": [row["kind"] for row in rows],
            "tag": [row["tag"] for row in rows],
            # field layouts differ per kind; store them as JSON to keep one schema
            "fields": [orjson.dumps(row["fields"], default=_default).decode() for row in rows],
        }
    )
    with pa.OSFile(str(path), "wb") as sink:
        with pa.ipc.new_file(sink, table.schema) as writer:
            writer.write_table(table)
