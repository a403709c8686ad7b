from __future__ import annotations

from typing import Any, Protocol

import numpy as np


class BreakSession(Protocol):
    """Opaque handle on a service-side break iterator."""

    locale: str


class SegmentationService(Protocol):
    """Grapheme boundary queries over UTF-16 text.

    Offsets are measured in code units. ``preceding`` and ``following``
    return ``constants.DONE`` when no boundary exists in that direction, and
    ``is_boundary`` is False for offsets outside ``[0, len]``.
    """

    def open(self, locale: str, units: np.ndarray) -> BreakSession: ...

    def set_text(self, session: Any, units: np.ndarray) -> None: ...

    def is_boundary(self, session: Any, offset: int) -> bool: ...

    def preceding(self, session: Any, offset: int) -> int: ...

    def following(self, session: Any, offset: int) -> int: ...

    def close(self, session: Any) -> None: ...
