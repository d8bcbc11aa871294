"""Codec configuration, loadable from YAML or JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from uffio.errors import ConfigError
from uffio.fields import LINE_WIDTH
from uffio.scanner import PAYLOAD_HEADER_LINES

MALFORMED_POLICIES = {"skip", "raise"}


@dataclass
class CodecConfig:
    encoding: str = "latin-1"
    on_malformed: str = "skip"  # skip: warn and drop the record; raise: abort the decode
    payload_lines: int = PAYLOAD_HEADER_LINES
    sized_payloads: bool = False  # end payloads at the byte count their header declares
    line_width: int = LINE_WIDTH
    newline: str = "\n"

    def __post_init__(self) -> None:
        if self.on_malformed not in MALFORMED_POLICIES:
            raise ConfigError(
                f"on_malformed must be one of {sorted(MALFORMED_POLICIES)}, "
                f"got {self.on_malformed!r}"
            )
        if self.payload_lines < 1:
            raise ConfigError("payload_lines must be at least 1")
        if self.line_width < 1:
            raise ConfigError("line_width must be at least 1")

    def scan_options(self) -> dict[str, Any]:
        """Keyword arguments for `iter_blocks`."""
        return {
            "payload_lines": self.payload_lines,
            "sized_payloads": self.sized_payloads,
            "line_width": self.line_width,
        }

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> CodecConfig:
        known = {
            "encoding",
            "on_malformed",
            "payload_lines",
            "sized_payloads",
            "line_width",
            "newline",
        }
        unknown = set(payload) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
        return CodecConfig(
            encoding=str(payload.get("encoding", "latin-1")),
            on_malformed=str(payload.get("on_malformed", "skip")),
            payload_lines=int(payload.get("payload_lines", PAYLOAD_HEADER_LINES)),
            sized_payloads=bool(payload.get("sized_payloads", False)),
            line_width=int(payload.get("line_width", LINE_WIDTH)),
            newline=str(payload.get("newline", "\n")),
        )


def load_config(path: Path) -> CodecConfig:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    if path.suffix.lower() in {".yml", ".yaml"}:
        payload = yaml.safe_load(path.read_text()) or {}
    else:
        payload = json.loads(path.read_text())
    if not isinstance(payload, dict):
        raise ConfigError(f"Config file {path} must hold a mapping")
    return CodecConfig.from_mapping(payload)
