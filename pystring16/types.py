from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from .constants import (
    HIGH_SURROGATE_END,
    HIGH_SURROGATE_START,
    LOW_SURROGATE_END,
    LOW_SURROGATE_START,
    MAX_CODE_UNIT,
)

if TYPE_CHECKING:
    from .buffer import String16

# Which side of a match a search expression resolves to
Anchor = Literal["leading", "trailing"]


@dataclass(frozen=True)
class CodeUnit:
    """One 16-bit unit of UTF-16 text."""

    value: int

    def __post_init__(self):
        if not 0 <= self.value <= MAX_CODE_UNIT:
            raise ValueError(f"Code unit out of range: {self.value:#x}")

    @property
    def is_high_surrogate(self) -> bool:
        return HIGH_SURROGATE_START <= self.value <= HIGH_SURROGATE_END

    @property
    def is_low_surrogate(self) -> bool:
        return LOW_SURROGATE_START <= self.value <= LOW_SURROGATE_END

    @property
    def is_surrogate(self) -> bool:
        return HIGH_SURROGATE_START <= self.value <= LOW_SURROGATE_END

    @property
    def scalar(self) -> str | None:
        """The character this unit encodes on its own, if any."""
        if self.is_surrogate:
            return None
        return chr(self.value)

    @property
    def ascii_scalar(self) -> str | None:
        return chr(self.value) if self.value < 128 else None

    def __str__(self) -> str:
        scalar = self.scalar
        return scalar if scalar is not None else f"0x{self.value:x}"


@dataclass(frozen=True, order=True)
class BoundaryIndex:
    """Opaque position between grapheme clusters, measured in code units.

    Instances never change; stepping returns a new index. Validity is
    relative to a buffer: ``0 <= offset <= len(text)`` and the offset is a
    boundary the segmenter recognizes.
    """

    offset: int

    def step_by(self, n: int, text: String16) -> BoundaryIndex | None:
        from .index import step_by

        return step_by(self, n, text)

    def __str__(self) -> str:
        return f"BoundaryIndex({self.offset})"


@dataclass(frozen=True)
class GraphemeRange:
    """Half-open span ``[lower, upper)`` covering one grapheme cluster."""

    lower: BoundaryIndex
    upper: BoundaryIndex

    @property
    def length(self) -> int:
        return self.upper.offset - self.lower.offset
