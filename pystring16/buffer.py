from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import replace
from typing import Any, Union

import numpy as np

from . import index as _index
from . import subscripts
from .codec import CODE_UNIT_DTYPE, decode, encode
from .config import IndexConfig
from .offsets import OffsetExpression, resolve, resolve_or_fail
from .segmentation import GraphemeSegmenter
from .types import BoundaryIndex, CodeUnit, GraphemeRange

Position = Union[BoundaryIndex, OffsetExpression]


class String16:
    """Mutable UTF-16 string addressed by grapheme-safe positions.

    Code units live in a contiguous numpy ``uint16`` array. Subscripts take
    offset expressions or BoundaryIndex values, never raw ints:

        >>> s = String16("Hello, World!")
        >>> s[first_of(" "):]
        ' World!'
        >>> s[END] = "?"
        >>> str(s)
        'Hello, World!?'

    Plain subscripts fail through ``config.failure_handler`` when a position
    does not resolve; ``s.safe[...]`` returns None instead.

    Args:
        text: Initial contents (str, another String16, CodeUnits or ints)
        config: Indexing behavior, defaults to ``IndexConfig()``
        segmenter: Boundary source to share with other strings of the same
            execution context; a private one is created when omitted
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        text: str | String16 | Iterable[int] | np.ndarray = "",
        *,
        config: IndexConfig | None = None,
        segmenter: GraphemeSegmenter | None = None,
    ) -> None:
        self.config = config or IndexConfig()
        self.segmenter = segmenter or GraphemeSegmenter(locale=self.config.locale)
        if isinstance(text, str):
            self._units = encode(text)
        elif isinstance(text, String16):
            self._units = text._units.copy()
        else:
            if isinstance(text, np.ndarray):
                units = text
            else:
                units = np.asarray([getattr(unit, "value", unit) for unit in text])
            if units.size and (units.min() < 0 or units.max() > 0xFFFF):
                raise ValueError("Code unit values must be within 0...0xFFFF")
            self._units = np.ascontiguousarray(units, dtype=CODE_UNIT_DTYPE).copy()

    @classmethod
    def from_units(cls, units: Iterable[int] | np.ndarray, **kwargs: Any) -> String16:
        return cls(units, **kwargs)

    def with_config(self, **overrides: Any) -> String16:
        """Copy of this string with config fields replaced.

        The segmenter is shared unless the locale changes, in which case a
        new one is opened for the new locale on the same service.
        """
        config = replace(self.config, **overrides)
        segmenter = self.segmenter
        if "locale" in overrides and config.locale != segmenter.locale:
            segmenter = GraphemeSegmenter(segmenter.service, locale=config.locale)
        return String16(self, config=config, segmenter=segmenter)

    # -----------------------------------------------------------------
    # Code unit storage

    def units_view(self) -> np.ndarray:
        """Read-only view of the code units, for segmentation backends."""
        view = self._units.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return len(self._units)

    def code_units(self) -> list[CodeUnit]:
        return [CodeUnit(int(value)) for value in self._units]

    def unit_at(self, offset: int) -> CodeUnit:
        return CodeUnit(int(self._units[offset]))

    def decode(self, start: int = 0, end: int | None = None) -> str:
        return decode(self._units[start:end])

    def replace_units(self, start: int, end: int, units: np.ndarray) -> None:
        """Raw sub-range replace. Does not validate boundaries."""
        self._units = np.concatenate(
            (self._units[:start], units.astype(CODE_UNIT_DTYPE), self._units[end:])
        )

    def append(self, value: str) -> None:
        self.replace_units(len(self), len(self), encode(value))

    @property
    def string_value(self) -> str:
        return decode(self._units)

    def __str__(self) -> str:
        return self.string_value

    def __repr__(self) -> str:
        return f"String16({self.string_value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, String16):
            return np.array_equal(self._units, other._units)
        if isinstance(other, str):
            return self.string_value == other
        return NotImplemented

    # -----------------------------------------------------------------
    # Indices

    @property
    def start_index(self) -> BoundaryIndex:
        return _index.start_index(self)

    @property
    def end_index(self) -> BoundaryIndex:
        return _index.end_index(self)

    def index_at(self, offset: int) -> BoundaryIndex:
        return _index.index_at(self, offset)

    def index_after(self, i: BoundaryIndex) -> BoundaryIndex:
        return _index.index_after(self, i)

    def index_before(self, i: BoundaryIndex) -> BoundaryIndex:
        return _index.index_before(self, i)

    def index_offset_by(self, i: BoundaryIndex, n: int) -> BoundaryIndex:
        return _index.index_offset_by(self, i, n)

    def index_of(self, expr: OffsetExpression) -> BoundaryIndex | None:
        return resolve(expr, self)

    def is_valid_index(self, i: BoundaryIndex) -> bool:
        return subscripts.is_valid_index(self, i)

    def as_span(self, lower: BoundaryIndex, upper: BoundaryIndex) -> tuple[int, int]:
        """``(location, length)`` in code units, as used by UTF-16 APIs."""
        return lower.offset, upper.offset - lower.offset

    # -----------------------------------------------------------------
    # Subscripts

    def _position(
        self, position: Position | None, default: BoundaryIndex
    ) -> BoundaryIndex:
        if position is None:
            return default
        if isinstance(position, BoundaryIndex):
            return position
        if isinstance(position, OffsetExpression):
            return resolve_or_fail(position, self)
        raise TypeError(_position_type_error(position))

    def _safe_position(
        self, position: Position | None, default: BoundaryIndex
    ) -> BoundaryIndex | None:
        if position is None:
            return default
        if isinstance(position, BoundaryIndex):
            return position if self.is_valid_index(position) else None
        if isinstance(position, OffsetExpression):
            return resolve(position, self)
        raise TypeError(_position_type_error(position))

    def _range(self, key: slice) -> tuple[BoundaryIndex, BoundaryIndex]:
        _check_slice(key)
        lower = self._position(key.start, self.start_index)
        upper = self._position(key.stop, self.end_index)
        return lower, upper

    def __getitem__(self, key: Position | slice) -> str:
        if isinstance(key, slice):
            return subscripts.read(self, *self._range(key))
        return subscripts.read_char(self, self._position(key, self.start_index))

    def __setitem__(self, key: Position | slice, value: str | String16) -> None:
        if not isinstance(value, (str, String16)):
            raise TypeError(f"Can only assign str or String16, got {type(value)}")
        value = str(value)
        if isinstance(key, slice):
            subscripts.write(self, *self._range(key), value)
        else:
            subscripts.write_char(self, self._position(key, self.start_index), value)

    def safe_get(self, key: Position | slice) -> str | None:
        if isinstance(key, slice):
            _check_slice(key)
            lower = self._safe_position(key.start, self.start_index)
            upper = self._safe_position(key.stop, self.end_index)
            if lower is None or upper is None or lower > upper:
                return None
            if not (self.is_valid_index(lower) and self.is_valid_index(upper)):
                return None
            return subscripts.read(self, lower, upper)
        at = self._safe_position(key, self.start_index)
        if at is None:
            return None
        after = at.step_by(1, self)
        if after is None:
            return None
        return subscripts.read(self, at, after)

    @property
    def safe(self) -> SafeSubscripts:
        """Subscripts that return None instead of failing."""
        return SafeSubscripts(self)

    # -----------------------------------------------------------------
    # Editing

    def replace_subrange(
        self, lower: Position | None, upper: Position | None, value: str
    ) -> None:
        self[lower:upper] = value

    def insert(self, value: str, at: Position) -> None:
        self[at:at] = value

    # -----------------------------------------------------------------
    # Iteration

    def grapheme_ranges(self, *, reverse: bool = False) -> Iterable[GraphemeRange]:
        return subscripts.GraphemeRanges(self, reverse=reverse)

    def characters(self, *, reverse: bool = False) -> Iterator[str]:
        return subscripts.characters(self, reverse=reverse)

    def character_indices(self) -> Iterator[BoundaryIndex]:
        return subscripts.character_indices(self)


class SafeSubscripts:
    """``s.safe[...]``: reads return None on absence, writes delegate."""

    def __init__(self, text: String16) -> None:
        self._text = text

    def __getitem__(self, key: Position | slice) -> str | None:
        return self._text.safe_get(key)

    def __setitem__(self, key: Position | slice, value: str | String16 | None) -> None:
        if value is None:
            raise TypeError("Cannot assign None through a safe subscript")
        self._text[key] = value


def _check_slice(key: slice) -> None:
    if key.step is not None:
        raise ValueError("String16 ranges do not support a step")


def _position_type_error(position: object) -> str:
    if isinstance(position, int):
        return (
            "String16 positions must be BoundaryIndex or OffsetExpression values; "
            "use START.plus(n) to count characters or unit_at() for code units"
        )
    return f"Unsupported String16 position: {type(position).__name__}"
