"""Error taxonomy shared by the scanner, registry, and codec."""

from __future__ import annotations


class UffError(Exception):
    """Base class for every error raised by uffio."""


class UnknownTagError(UffError, KeyError):
    """A block or record kind has no registry entry."""

    def __init__(self, tag: str) -> None:
        super().__init__(tag)
        self.tag = tag

    def __str__(self) -> str:
        return f"unsupported dataset type: {self.tag!r}"


class TruncatedPayloadError(UffError):
    """A payload block's closing sentinel is missing before end-of-buffer."""

    def __init__(self, block_index: int, offset: int, partial: object | None = None) -> None:
        super().__init__(block_index, offset)
        self.block_index = block_index
        self.offset = offset
        # filled by the codec with whatever was decoded before the truncation
        self.partial = partial

    def __str__(self) -> str:
        return (
            f"block {self.block_index} at byte {self.offset}: binary payload has no "
            "closing sentinel; file is truncated"
        )


class MalformedFieldError(UffError, ValueError):
    """A fixed-width numeric field holds non-blank, non-numeric text."""

    def __init__(
        self,
        field: str | None,
        value: str,
        block_index: int | None = None,
        tag: str | None = None,
    ) -> None:
        super().__init__(field, value)
        self.field = field
        self.value = value
        self.block_index = block_index
        self.tag = tag

    def __str__(self) -> str:
        where = []
        if self.block_index is not None:
            where.append(f"block {self.block_index}")
        if self.tag is not None:
            where.append(f"dataset {self.tag}")
        prefix = f"{', '.join(where)}: " if where else ""
        return f"{prefix}field {self.field or '<unnamed>'!s} is not numeric: {self.value!r}"


class ConfigError(UffError):
    """Codec configuration could not be loaded or is invalid."""
