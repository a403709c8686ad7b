"""Symbolic positions resolved lazily against a String16.

An OffsetExpression describes *where* to look ("the first space", "two
characters before the end") without holding a reference to any buffer.
Resolution is a pure function of the expression and the buffer's current
contents:

    >>> text = String16("Hello, World!")
    >>> text[first_of(" ").plus(1):]
    'World!'

Expressions are built with the functions below or chained with
``plus``/``minus``/``or_else``.

Nested deltas: in ``offset(base, delta_expr)`` the delta expression is
resolved against the tail of the buffer that begins at ``base`` (its
``start`` is ``base``) and its offset within that tail is added to the base
offset. ``first_of("o").plus(1).plus(first_of("o"))`` therefore finds the
second "o".
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from .errors import OutOfRangeError, UnresolvedExpressionError, fail
from .index import step_by
from .predicates import Predicate, as_predicate
from .types import Anchor, BoundaryIndex

if TYPE_CHECKING:
    from .buffer import String16

Delta = Union[int, "OffsetExpression"]


class OffsetExpression:
    """Base class of the position algebra."""

    def _resolve(self, text: String16, origin: int) -> BoundaryIndex | None:
        raise NotImplementedError

    def plus(self, delta: Delta) -> Offset:
        return Offset(self, delta)

    def minus(self, n: int) -> Offset:
        if not isinstance(n, int) or isinstance(n, bool):
            raise TypeError("minus() takes an integer count of characters")
        return Offset(self, -n)

    def or_else(self, other: OffsetExpression) -> Either:
        return Either(self, other)


@dataclass(frozen=True)
class Start(OffsetExpression):
    def _resolve(self, text: String16, origin: int) -> BoundaryIndex | None:
        return BoundaryIndex(origin)

    def __str__(self) -> str:
        return "start"


@dataclass(frozen=True)
class End(OffsetExpression):
    def _resolve(self, text: String16, origin: int) -> BoundaryIndex | None:
        return BoundaryIndex(len(text))

    def __str__(self) -> str:
        return "end"


def _anchored(span: tuple[int, int] | None, anchor: Anchor) -> BoundaryIndex | None:
    if span is None:
        return None
    return BoundaryIndex(span[0] if anchor == "leading" else span[1])


def _check_anchor(anchor: str) -> None:
    if anchor not in ("leading", "trailing"):
        raise ValueError(f"anchor must be 'leading' or 'trailing', got {anchor!r}")


@dataclass(frozen=True)
class First(OffsetExpression):
    predicate: Predicate
    anchor: Anchor = "leading"

    def __post_init__(self):
        _check_anchor(self.anchor)

    def _resolve(self, text: String16, origin: int) -> BoundaryIndex | None:
        return _anchored(self.predicate.first_match(text, origin), self.anchor)

    def __str__(self) -> str:
        return f"first({self.predicate}, {self.anchor})"


@dataclass(frozen=True)
class Last(OffsetExpression):
    predicate: Predicate
    anchor: Anchor = "leading"

    def __post_init__(self):
        _check_anchor(self.anchor)

    def _resolve(self, text: String16, origin: int) -> BoundaryIndex | None:
        return _anchored(self.predicate.last_match(text, origin), self.anchor)

    def __str__(self) -> str:
        return f"last({self.predicate}, {self.anchor})"


@dataclass(frozen=True)
class Either(OffsetExpression):
    """Ordered fallback: ``second`` is only tried when ``first`` fails."""

    first: OffsetExpression
    second: OffsetExpression

    def _resolve(self, text: String16, origin: int) -> BoundaryIndex | None:
        resolved = self.first._resolve(text, origin)
        if resolved is not None:
            return resolved
        return self.second._resolve(text, origin)

    def __str__(self) -> str:
        return f"either({self.first}, {self.second})"


@dataclass(frozen=True)
class Offset(OffsetExpression):
    base: OffsetExpression
    delta: Delta = 0

    def __post_init__(self):
        if isinstance(self.delta, bool) or not isinstance(
            self.delta, (int, OffsetExpression)
        ):
            raise TypeError(
                f"delta must be an int or OffsetExpression, got {type(self.delta)}"
            )

    def _resolve_steps(
        self, text: String16, origin: int
    ) -> tuple[BoundaryIndex | None, BoundaryIndex | None]:
        """Resolve to ``(base, result)`` so callers can tell which step failed."""
        base = self.base._resolve(text, origin)
        if base is None:
            return None, None
        if isinstance(self.delta, OffsetExpression):
            # Offsets within the tail starting at base are already absolute.
            return base, self.delta._resolve(text, base.offset)
        return base, step_by(base, self.delta, text, lower=origin)

    def _resolve(self, text: String16, origin: int) -> BoundaryIndex | None:
        return self._resolve_steps(text, origin)[1]

    def __str__(self) -> str:
        if isinstance(self.delta, int) and self.delta < 0:
            return f"{self.base}-{-self.delta}"
        return f"{self.base}+{self.delta}"


START = Start()
END = End()


def start() -> Start:
    return START


def end() -> End:
    return END


def first_of(
    target: str | Iterable[str] | Predicate,
    *,
    regex: bool = False,
    anchor: Anchor = "leading",
    flags: int = 0,
) -> First:
    """Position of the first match of ``target``.

    Args:
        target: Literal substring, pattern (with ``regex=True``), a set of
            characters, or a Predicate
        regex: Treat a string target as a ``regex`` pattern
        anchor: ``"leading"`` for the boundary before the match,
            ``"trailing"`` for the boundary after it
        flags: ``regex`` flags for pattern targets
    """
    return First(as_predicate(target, is_regex=regex, flags=flags), anchor)


def last_of(
    target: str | Iterable[str] | Predicate,
    *,
    regex: bool = False,
    anchor: Anchor = "leading",
    flags: int = 0,
) -> Last:
    """Position of the last match of ``target``. See ``first_of``."""
    return Last(as_predicate(target, is_regex=regex, flags=flags), anchor)


def either(first: OffsetExpression, second: OffsetExpression) -> Either:
    return Either(first, second)


def offset(base: OffsetExpression, delta: Delta) -> Offset:
    return Offset(base, delta)


def resolve(expr: OffsetExpression, text: String16) -> BoundaryIndex | None:
    """Resolve ``expr`` against ``text``; None when it does not match."""
    return expr._resolve(text, 0)


def resolve_or_fail(expr: OffsetExpression, text: String16) -> BoundaryIndex:
    """Resolve ``expr`` or report the failure through the configured handler."""
    if isinstance(expr, Offset):
        base, resolved = expr._resolve_steps(text, 0)
        if resolved is not None:
            return resolved
        if base is not None and isinstance(expr.delta, int):
            fail(text.config, OutOfRangeError(f"Offset index {expr} out of range"))
    else:
        resolved = resolve(expr, text)
        if resolved is not None:
            return resolved
    fail(text.config, UnresolvedExpressionError(f"Invalid offset index {expr}"))
