"""Dataset type registry.

Each concrete record module registers a `(parse, write)` pair for its tag at
import time. The scanner and codec only ever look tags up here, so adding a
record kind means adding one module and one `register_dataset_kind` call.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from uffio.errors import UnknownTagError
from uffio.fields import WHITESPACE

logger = logging.getLogger(__name__)

TAG_WIDTH = 6
COMPOSITE_TAG_LENGTH = 3

BUILTIN_KINDS: tuple[str, ...] = (
    "uffio.datasets.dataset15",
    "uffio.datasets.dataset58",
    "uffio.datasets.dataset151",
    "uffio.datasets.dataset164",
)

ParseFn = Callable[[Any], Any]
WriteFn = Callable[[Any], Sequence[str]]


def normalize_tag(first_line: str) -> str:
    """Dispatch key for a block's first line.

    Up to 6 characters the whole trimmed line is the tag (`"151"`); longer lines
    are payload-block headers and only the leading 3 characters count (`"58b"`).
    """
    text = first_line.strip(WHITESPACE)
    if len(text) > TAG_WIDTH:
        return text[:COMPOSITE_TAG_LENGTH]
    return text


def validate_tag(tag: str) -> str:
    if not tag:
        raise ValueError("dataset tag must not be empty")
    if len(tag) > TAG_WIDTH:
        raise ValueError(f"dataset tag {tag!r} is longer than {TAG_WIDTH} characters")
    if any(ch.isspace() for ch in tag):
        raise ValueError(f"dataset tag {tag!r} contains whitespace")
    return tag


def render_tag(tag: str) -> str:
    """Tag line as written after the opening sentinel, e.g. `'   151'`."""
    return tag.rjust(TAG_WIDTH)


@dataclass(frozen=True)
class DatasetCodec:
    tag: str
    parse: ParseFn
    write: WriteFn
    kind: type | None = None
    doc: str | None = None


class DatasetRegistry:
    def __init__(self) -> None:
        self._codecs: dict[str, DatasetCodec] = {}
        self._kind_tags: dict[type, str] = {}

    def register(
        self,
        tag: str,
        parse: ParseFn,
        write: WriteFn,
        *,
        kind: type | None = None,
        doc: str | None = None,
        replace: bool = False,
    ) -> DatasetCodec:
        """Register a tag. With `kind`, the tag is also how that type is encoded."""
        validate_tag(tag)
        if tag in self._codecs and not replace:
            raise ValueError(f"dataset tag {tag!r} is already registered")
        codec = DatasetCodec(
            tag=tag, parse=parse, write=write, kind=kind, doc=doc or parse.__doc__
        )
        self._codecs[tag] = codec
        if kind is not None:
            self._kind_tags[kind] = tag
        logger.debug("registered dataset %s (%s)", tag, kind.__name__ if kind else "decode-only")
        return codec

    def is_supported(self, tag: str) -> bool:
        return tag in self._codecs

    def resolve(self, tag: str) -> DatasetCodec:
        try:
            return self._codecs[tag]
        except KeyError:
            raise UnknownTagError(tag) from None

    def tag_for(self, record: object) -> str:
        """Encoding tag of a record, walking its MRO for registered kinds."""
        for cls in type(record).__mro__:
            if cls in self._kind_tags:
                return self._kind_tags[cls]
        raise UnknownTagError(type(record).__name__)

    def tags(self) -> list[str]:
        return sorted(self._codecs, key=lambda t: (len(t), t))

    def describe(self, tag: str) -> str:
        return (self.resolve(tag).doc or "").strip()

    def __contains__(self, tag: object) -> bool:
        return tag in self._codecs

    def __len__(self) -> int:
        return len(self._codecs)


default_registry = DatasetRegistry()


def register_dataset_kind(
    tag: str,
    parse: ParseFn,
    write: WriteFn,
    *,
    kind: type | None = None,
    doc: str | None = None,
) -> DatasetCodec:
    return default_registry.register(tag, parse, write, kind=kind, doc=doc)


def load_builtin_kinds() -> DatasetRegistry:
    """Import the bundled record modules so they register themselves."""
    for module in BUILTIN_KINDS:
        importlib.import_module(module)
    return default_registry
