"""Boundary index construction and boundary-safe stepping."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .constants import DONE
from .errors import InvalidBoundaryError, OutOfRangeError, String16Error, fail
from .types import BoundaryIndex

if TYPE_CHECKING:
    from .buffer import String16

logger = logging.getLogger(__name__)


def start_index(text: String16) -> BoundaryIndex:
    return BoundaryIndex(0)


def end_index(text: String16) -> BoundaryIndex:
    return BoundaryIndex(len(text))


def index_at(text: String16, offset: int) -> BoundaryIndex:
    """Wrap a raw code unit offset without stepping.

    Unchecked unless ``text.config.debug`` is set. In debug mode an offset
    that is not a boundary is logged, or fails when ``strict_raw_indices``
    is set.
    """
    config = text.config
    if config.debug and not text.segmenter.is_boundary(text, offset):
        if not 0 <= offset <= len(text):
            error: String16Error = OutOfRangeError(
                f"Creating index at {offset} outside 0...{len(text)}"
            )
        else:
            error = InvalidBoundaryError(f"Creating invalid index at: {offset}")
        if config.strict_raw_indices:
            fail(config, error)
        logger.warning("%s: %s", type(text).__name__, error)
    return BoundaryIndex(offset)


def step_by(
    index: BoundaryIndex, n: int, text: String16, *, lower: int = 0
) -> BoundaryIndex | None:
    """Move ``n`` grapheme boundaries forward (n > 0) or backward (n < 0).

    Boundaries are visited one at a time, never by raw code unit count.
    Returns None when the walk would leave ``[lower, len(text)]`` before
    consuming all of ``n``, or when ``n == 0`` and ``index`` is not a
    boundary.
    """
    length = len(text)
    position = index.offset
    if not lower <= position <= length:
        return None
    remaining = n
    with text.segmenter.bound(text) as breaker:
        if remaining == 0:
            return index if breaker.is_boundary(position) else None
        while remaining < 0 and position > lower:
            position = breaker.preceding(position)
            remaining += 1
        while remaining > 0 and position < length:
            position = breaker.following(position)
            remaining -= 1
    if remaining != 0 or position == DONE or position < lower:
        return None
    return BoundaryIndex(position)


def index_offset_by(text: String16, index: BoundaryIndex, n: int) -> BoundaryIndex:
    """Step ``n`` boundaries, clamping or failing on overflow per config."""
    stepped = step_by(index, n, text)
    if stepped is not None:
        return stepped
    config = text.config
    if n == 0:
        fail(config, InvalidBoundaryError(f"{index} is not a boundary"))
    if config.clamp_on_overflow:
        clamped = end_index(text) if n > 0 else start_index(text)
        logger.debug("Clamped %s %+d to %s", index, n, clamped)
        return clamped
    direction = "after" if n > 0 else "before"
    fail(config, OutOfRangeError(f"No index {abs(n)} {direction} {index}"))


def index_after(text: String16, index: BoundaryIndex) -> BoundaryIndex:
    return index_offset_by(text, index, 1)


def index_before(text: String16, index: BoundaryIndex) -> BoundaryIndex:
    return index_offset_by(text, index, -1)
