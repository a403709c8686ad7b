from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

if TYPE_CHECKING:
    from .config import IndexConfig


class String16Error(Exception):
    """Base class for indexing failures."""


class InvalidBoundaryError(String16Error, ValueError):
    """An index or range does not land on a legal grapheme boundary."""


class OutOfRangeError(String16Error, IndexError):
    """Stepping or construction went past the start or end of the buffer."""


class UnresolvedExpressionError(String16Error, LookupError):
    """An offset expression found no match in the buffer."""


class NoSegmentationSessionError(String16Error, RuntimeError):
    """A segmentation session could not be opened or bound."""


def raise_failure(error: String16Error) -> NoReturn:
    """Default failure handler: surface the error to the caller."""
    raise error


def fail(config: IndexConfig, error: String16Error) -> NoReturn:
    """Route an unrecoverable error through the configured handler.

    Handlers are expected not to return. If one does, the error is raised
    anyway so a corrupted index never flows back into the caller.
    """
    config.failure_handler(error)
    raise error
