"""Search predicates used by first/last offset expressions.

Every predicate searches a window ``[lower, len(text))`` of a String16 and
reports matches as absolute code unit spans ``(start, end)``. Reported spans
always start and end on grapheme boundaries.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

import regex

from .codec import utf16_offsets

if TYPE_CHECKING:
    from .buffer import String16

Span = tuple[int, int]


class Predicate(Protocol):
    def first_match(self, text: String16, lower: int = 0) -> Span | None: ...

    def last_match(self, text: String16, lower: int = 0) -> Span | None: ...


@dataclass(frozen=True)
class CharSetPredicate:
    """Matches a grapheme cluster whose first scalar is in ``chars``."""

    chars: frozenset[str]

    @classmethod
    def of(cls, chars: Iterable[str]) -> CharSetPredicate:
        return cls(frozenset(chars))

    def _matches(self, text: String16, start: int, end: int) -> bool:
        cluster = text.decode(start, end)
        return bool(cluster) and cluster[0] in self.chars

    def first_match(self, text: String16, lower: int = 0) -> Span | None:
        length = len(text)
        position = lower
        with text.segmenter.bound(text) as breaker:
            while position < length:
                following = breaker.following(position)
                if self._matches(text, position, following):
                    return position, following
                position = following
        return None

    def last_match(self, text: String16, lower: int = 0) -> Span | None:
        position = len(text)
        with text.segmenter.bound(text) as breaker:
            while position > lower:
                preceding = breaker.preceding(position)
                if preceding < lower:
                    break
                if self._matches(text, preceding, position):
                    return preceding, position
                position = preceding
        return None

    def __str__(self) -> str:
        return "[" + "".join(sorted(self.chars)) + "]"


@dataclass(frozen=True)
class LiteralPredicate:
    """Matches an exact substring that starts and ends on boundaries."""

    literal: str

    def _search(self, text: String16, lower: int, reverse: bool) -> Span | None:
        with text.segmenter.bound(text) as breaker:
            for start, end in self._candidates(text, lower, reverse):
                if breaker.is_boundary(start) and breaker.is_boundary(end):
                    return start, end
        return None

    def _candidates(self, text: String16, lower: int, reverse: bool):
        window = text.decode(lower, len(text))
        offsets = utf16_offsets(window)
        size = len(self.literal)
        if reverse:
            found = window.rfind(self.literal)
            while found >= 0:
                yield lower + int(offsets[found]), lower + int(offsets[found + size])
                found = window.rfind(self.literal, 0, found + size - 1) if found else -1
        else:
            found = window.find(self.literal)
            while found >= 0:
                yield lower + int(offsets[found]), lower + int(offsets[found + size])
                found = window.find(self.literal, found + 1)

    def first_match(self, text: String16, lower: int = 0) -> Span | None:
        return self._search(text, lower, reverse=False)

    def last_match(self, text: String16, lower: int = 0) -> Span | None:
        return self._search(text, lower, reverse=True)

    def __str__(self) -> str:
        return repr(self.literal)


@dataclass(frozen=True)
class RegexPredicate:
    """Matches a ``regex`` pattern against the decoded text.

    Match ends that fall inside a grapheme cluster are widened outward to
    the enclosing boundaries.
    """

    pattern: str
    flags: int = 0
    _compiled: regex.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_compiled", regex.compile(self.pattern, self.flags))

    def _span(self, text: String16, lower: int, window: str, match) -> Span:
        offsets = utf16_offsets(window)
        start = lower + int(offsets[match.start()])
        end = lower + int(offsets[match.end()])
        with text.segmenter.bound(text) as breaker:
            if not breaker.is_boundary(start):
                start = max(breaker.preceding(start), lower)
            if not breaker.is_boundary(end):
                end = breaker.following(end)
        return start, end

    def first_match(self, text: String16, lower: int = 0) -> Span | None:
        window = text.decode(lower, len(text))
        match = self._compiled.search(window)
        if match is None:
            return None
        return self._span(text, lower, window, match)

    def last_match(self, text: String16, lower: int = 0) -> Span | None:
        window = text.decode(lower, len(text))
        last = None
        for match in self._compiled.finditer(window):
            last = match
        if last is None:
            return None
        return self._span(text, lower, window, last)

    def __str__(self) -> str:
        return f"/{self.pattern}/"


def as_predicate(
    target: str | Iterable[str] | Predicate, *, is_regex: bool = False, flags: int = 0
) -> Predicate:
    """Coerce a search target into a predicate.

    Strings are literal substrings unless ``is_regex`` is set; sets (or any
    other iterable of characters) become character set predicates.
    """
    if isinstance(target, str):
        if is_regex:
            return RegexPredicate(target, flags)
        return LiteralPredicate(target)
    if isinstance(target, (CharSetPredicate, LiteralPredicate, RegexPredicate)):
        return target
    if hasattr(target, "first_match") and hasattr(target, "last_match"):
        return target  # type: ignore[return-value]
    return CharSetPredicate.of(target)
