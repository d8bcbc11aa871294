from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from uffio.codec import DecodeResult, decode_all, load_bytes, write_uff
from uffio.config import CodecConfig, load_config
from uffio.errors import ConfigError, MalformedFieldError, TruncatedPayloadError
from uffio.export import records_to_arrow, records_to_json, records_to_jsonl
from uffio.log import setup_logging
from uffio.registry import load_builtin_kinds
from uffio.scanner import iter_blocks
from uffio.units import records_to_si

app = typer.Typer(help="Read, inspect, and rewrite Universal File Format (UFF/UNV) files.")
console = Console()
SUPPORTED_FORMATS = {"json", "jsonl", "arrow"}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    setup_logging(verbose)


def _read_bytes(path: Path) -> bytes:
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    return load_bytes(path)


def _load_config(path: Path | None) -> CodecConfig:
    if path is None:
        return CodecConfig()
    try:
        return load_config(path)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _decode(data: bytes, config: CodecConfig) -> DecodeResult:
    try:
        return decode_all(data, config=config)
    except TruncatedPayloadError as exc:
        console.print(f"[bold red]Truncated file:[/] {exc}")
        raise typer.Exit(code=1) from exc
    except MalformedFieldError as exc:
        console.print(f"[bold red]Malformed field:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _report(result: DecodeResult) -> None:
    console.print(
        f"[bold green]Decoded[/] {len(result.records)} of {result.blocks} blocks"
        f" ({result.skipped} unsupported, {len(result.errors)} malformed)"
    )
    for tag, count in sorted(result.skipped_tags.items()):
        console.print(f"[yellow]Skipped[/] dataset {tag} x{count}")


@app.command()
def scan(
    input: Path = typer.Argument(..., help="UFF file to segment into blocks."),
    config: Path | None = typer.Option(None, "--config", "-c", help="Codec config (yaml/json)."),
) -> None:
    """List the blocks of a file with their tags and sizes."""
    data = _read_bytes(input)
    cfg = _load_config(config)
    registry = load_builtin_kinds()
    table = Table(title=str(input))
    table.add_column("block", justify="right")
    table.add_column("tag", no_wrap=True)
    table.add_column("offset", justify="right")
    table.add_column("lines", justify="right")
    table.add_column("payload bytes", justify="right")
    table.add_column("supported")

    truncated: TruncatedPayloadError | None = None
    try:
        for block in iter_blocks(data, **cfg.scan_options()):
            table.add_row(
                str(block.index),
                block.tag,
                str(block.offset),
                str(len(block.lines)),
                str(len(block.payload)) if block.payload is not None else "-",
                "yes" if registry.is_supported(block.tag) else "[yellow]no[/]",
            )
    except TruncatedPayloadError as exc:
        truncated = exc

    console.print(table)
    if truncated is not None:
        console.print(f"[bold red]Truncated file:[/] {truncated}")
        raise typer.Exit(code=1)


@app.command()
def decode(
    input: Path = typer.Argument(..., help="UFF file to decode."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write decoded datasets."
    ),
    format: str = typer.Option(
        "json", "--format", "-f", help="Output format: json | jsonl | arrow."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="Codec config (yaml/json)."),
    si: bool = typer.Option(False, "--si", help="Convert to SI using the file's units dataset."),
) -> None:
    """Decode every supported dataset of a file."""
    fmt = format.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise typer.BadParameter(
            f"Unsupported format '{format}'. Choose from {sorted(SUPPORTED_FORMATS)}."
        )
    if fmt != "json" and output is None:
        raise typer.BadParameter(f"--output is required for format '{fmt}'.")

    data = _read_bytes(input)
    result = _decode(data, _load_config(config))
    records = records_to_si(result.records) if si else result.records

    if output is None:
        console.print(
            records_to_json(records, indent=True).decode(),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        return

    if fmt == "json":
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(records_to_json(records))
    elif fmt == "jsonl":
        records_to_jsonl(records, output)
    else:
        records_to_arrow(records, output)
    _report(result)
    console.print(f"[bold green]Wrote[/] {len(records)} datasets to {output}")


@app.command()
def rewrite(
    input: Path = typer.Argument(..., help="UFF file to read."),
    output: Path = typer.Argument(..., help="Path to write the re-encoded UFF file."),
    config: Path | None = typer.Option(None, "--config", "-c", help="Codec config (yaml/json)."),
) -> None:
    """Decode a file and write its supported datasets back out."""
    cfg = _load_config(config)
    result = _decode(_read_bytes(input), cfg)
    write_uff(output, result.records, config=cfg)
    _report(result)
    console.print(f"[bold green]Wrote[/] {len(result.records)} datasets to {output}")


@app.command()
def kinds() -> None:
    """List the registered dataset types."""
    registry = load_builtin_kinds()
    table = Table(title="Registered datasets")
    table.add_column("tag", no_wrap=True)
    table.add_column("record", no_wrap=True)
    table.add_column("description")
    for tag in registry.tags():
        entry = registry.resolve(tag)
        doc = registry.describe(tag)
        table.add_row(
            tag,
            entry.kind.__name__ if entry.kind else "(decode only)",
            doc.splitlines()[0] if doc else "",
        )
    console.print(table)


if __name__ == "__main__":
    app()
