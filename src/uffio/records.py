from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class UffDataset:
    """Base for decoded datasets. Concrete kinds are dataclasses with defaults."""

    title: ClassVar[str] = ""

    @property
    def kind(self) -> str:
        return type(self).__name__
