from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from ..codec import CODE_UNIT_DTYPE, grapheme_boundaries
from ..constants import DONE
from ..errors import NoSegmentationSessionError

logger = logging.getLogger(__name__)


@dataclass
class RegexBreakSession:
    """Boundary table for the text a session is currently bound to."""

    locale: str
    boundaries: np.ndarray = field(default_factory=lambda: np.zeros(1, np.int64))
    units: np.ndarray = field(default_factory=lambda: np.zeros(0, CODE_UNIT_DTYPE))
    closed: bool = False

    @property
    def length(self) -> int:
        return len(self.units)


class RegexGraphemeService:
    """Segmentation service backed by the ``regex`` module's ``\\X``.

    Extended grapheme clusters are locale independent here; the locale is
    kept on the session for parity with other backends.
    """

    def open(self, locale: str, units: np.ndarray) -> RegexBreakSession:
        session = RegexBreakSession(locale=locale)
        self.set_text(session, units)
        return session

    def set_text(self, session: RegexBreakSession, units: np.ndarray) -> None:
        if session.closed:
            raise NoSegmentationSessionError("Segmentation session is closed")
        # Rebinding to identical contents keeps the existing table.
        if np.array_equal(session.units, units):
            return
        session.units = np.array(units, dtype=CODE_UNIT_DTYPE, copy=True)
        session.boundaries = grapheme_boundaries(session.units)
        logger.debug(
            "Rebound session to %d code units (%d boundaries)",
            session.length,
            len(session.boundaries),
        )

    def is_boundary(self, session: RegexBreakSession, offset: int) -> bool:
        if not 0 <= offset <= session.length:
            return False
        pos = int(np.searchsorted(session.boundaries, offset))
        return pos < len(session.boundaries) and session.boundaries[pos] == offset

    def preceding(self, session: RegexBreakSession, offset: int) -> int:
        pos = int(np.searchsorted(session.boundaries, offset, side="left"))
        if pos == 0:
            return DONE
        return int(session.boundaries[pos - 1])

    def following(self, session: RegexBreakSession, offset: int) -> int:
        pos = int(np.searchsorted(session.boundaries, offset, side="right"))
        if pos >= len(session.boundaries):
            return DONE
        return int(session.boundaries[pos])

    def close(self, session: RegexBreakSession) -> None:
        session.closed = True
        session.units = np.zeros(0, dtype=CODE_UNIT_DTYPE)
        session.boundaries = np.zeros(0, dtype=np.int64)
