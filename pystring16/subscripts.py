"""Validated reads and writes of substrings and single characters.

Range validation differs by direction. Writes always validate and fail
through the configured handler. Reads fail the same way unless the buffer's
config enables lenient reads in debug mode, where an invalid range is
logged and the read proceeds on the clipped offsets. Production code must
not rely on the lenient mode.

Iteration helpers walk the buffer lazily, one boundary query per step.
Each traversal starts fresh from the current start or end. Mutating the
buffer while a traversal is open gives undefined results; serializing
access is the caller's job.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from .codec import encode, grapheme_clusters
from .constants import DONE
from .errors import InvalidBoundaryError, OutOfRangeError, fail
from .index import step_by
from .types import BoundaryIndex, GraphemeRange

if TYPE_CHECKING:
    from .buffer import String16

logger = logging.getLogger(__name__)


def is_valid_index(text: String16, index: BoundaryIndex) -> bool:
    return text.segmenter.is_boundary(text, index.offset)


def validate_range(
    text: String16, lower: BoundaryIndex, upper: BoundaryIndex, *, writing: bool
) -> bool:
    """Check that both bounds are in range, on boundaries and ordered.

    Returns True for a valid range, False for an invalid read tolerated in
    lenient mode. Anything else goes to the failure handler.
    """
    problems = []
    with text.segmenter.bound(text) as breaker:
        if lower.offset < 0 or not breaker.is_boundary(lower.offset):
            problems.append(f"Invalid lower bound {lower}")
        if upper.offset > len(text) or not breaker.is_boundary(upper.offset):
            problems.append(f"Invalid upper bound {upper}")
    if lower > upper:
        problems.append(f"Lower bound {lower} is after upper bound {upper}")
    if not problems:
        return True
    message = "; ".join(problems)
    if not writing and text.config.reads_are_lenient:
        logger.warning("%s (lenient read)", message)
        return False
    fail(text.config, InvalidBoundaryError(message))


def _clip(text: String16, offset: int) -> int:
    return min(max(offset, 0), len(text))


def read(text: String16, lower: BoundaryIndex, upper: BoundaryIndex) -> str:
    if validate_range(text, lower, upper, writing=False):
        return text.decode(lower.offset, upper.offset)
    start = _clip(text, lower.offset)
    return text.decode(start, max(start, _clip(text, upper.offset)))


def write(
    text: String16, lower: BoundaryIndex, upper: BoundaryIndex, value: str
) -> None:
    """Replace ``[lower, upper)`` with ``value``.

    A zero width range inserts, an empty value deletes.
    """
    validate_range(text, lower, upper, writing=True)
    text.replace_units(lower.offset, upper.offset, encode(value))


def _check_character(value: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"Expected a single character string, got {type(value)}")
    if len(grapheme_clusters(value)) != 1:
        raise ValueError(f"Expected a single character, got {value!r}")


def read_char(text: String16, at: BoundaryIndex) -> str:
    after = step_by(at, 1, text)
    if after is None:
        fail(text.config, OutOfRangeError(f"No character at {at}"))
    return read(text, at, after)


def write_char(text: String16, at: BoundaryIndex, value: str) -> None:
    """Replace the character at ``at``; at the end boundary this appends."""
    _check_character(value)
    if at.offset >= len(text):
        write(text, at, at, value)
        return
    after = step_by(at, 1, text)
    if after is None:
        fail(text.config, OutOfRangeError(f"No character at {at}"))
    write(text, at, after, value)


class GraphemeRanges:
    """Restartable lazy sequence of grapheme cluster ranges.

    Args:
        text: Buffer to walk
        reverse: Walk from the end towards the start
    """

    def __init__(self, text: String16, *, reverse: bool = False) -> None:
        self.text = text
        self.reverse = reverse

    def __iter__(self) -> Iterator[GraphemeRange]:
        if self.reverse:
            return self._backward()
        return self._forward()

    def _forward(self) -> Iterator[GraphemeRange]:
        text = self.text
        position = 0
        while position < len(text):
            following = text.segmenter.following_boundary(text, position)
            if following == DONE:
                return
            yield GraphemeRange(BoundaryIndex(position), BoundaryIndex(following))
            position = following

    def _backward(self) -> Iterator[GraphemeRange]:
        text = self.text
        position = len(text)
        while position > 0:
            preceding = text.segmenter.preceding_boundary(text, position)
            yield GraphemeRange(BoundaryIndex(preceding), BoundaryIndex(position))
            position = preceding


def characters(text: String16, *, reverse: bool = False) -> Iterator[str]:
    for span in GraphemeRanges(text, reverse=reverse):
        yield text.decode(span.lower.offset, span.upper.offset)


def character_indices(text: String16) -> Iterator[BoundaryIndex]:
    for span in GraphemeRanges(text):
        yield span.lower
