from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from ..constants import DEFAULT_LOCALE
from ..errors import NoSegmentationSessionError
from .protocols import SegmentationService
from .regex_service import RegexGraphemeService

if TYPE_CHECKING:
    from ..buffer import String16

logger = logging.getLogger(__name__)


class Breaker:
    """Boundary queries against the buffer a session was bound to.

    Only valid inside the ``GraphemeSegmenter.bound`` block that produced it.
    """

    def __init__(self, service: SegmentationService, session: Any, length: int):
        self._service = service
        self._session = session
        self.length = length
        self._live = True

    def _check(self) -> None:
        if not self._live:
            raise NoSegmentationSessionError("Breaker used outside of its binding")

    def is_boundary(self, offset: int) -> bool:
        self._check()
        return bool(self._service.is_boundary(self._session, offset))

    def preceding(self, offset: int) -> int:
        self._check()
        return int(self._service.preceding(self._session, offset))

    def following(self, offset: int) -> int:
        self._check()
        return int(self._service.following(self._session, offset))

    def release(self) -> None:
        self._live = False
        self._session = None


class GraphemeSegmenter:
    """Cached binding of a segmentation service to whatever buffer is queried.

    Each thread using the segmenter gets its own session, so several threads
    may read the same String16 concurrently; a session is never shared across
    threads. Sessions are created lazily and rebound to the current buffer on
    every call, so reuse across buffers is safe. Within one thread calls are
    strictly sequential: binding while already bound raises
    NoSegmentationSessionError.

    Args:
        service: Backend answering boundary queries (defaults to regex ``\\X``)
        locale: Locale passed to the service when a session is opened
    """

    def __init__(
        self,
        service: SegmentationService | None = None,
        *,
        locale: str = DEFAULT_LOCALE,
    ) -> None:
        self.service = service or RegexGraphemeService()
        self.locale = locale
        self._local = threading.local()
        self._sessions: list[Any] = []
        self._generation = 0
        self._creation_lock = threading.Lock()

    def __enter__(self) -> GraphemeSegmenter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the sessions of every thread; later calls reopen lazily."""
        with self._creation_lock:
            sessions, self._sessions = self._sessions, []
            self._generation += 1
        for session in sessions:
            logger.debug("Closing segmentation session")
            self.service.close(session)

    def _thread_session(self) -> Any | None:
        local = self._local
        if getattr(local, "generation", None) != self._generation:
            local.session = None
            local.generation = self._generation
        return local.session

    @property
    def has_session(self) -> bool:
        """Whether the calling thread has an open session."""
        return self._thread_session() is not None

    def _open(self, view) -> Any:
        # Session creation is the only step that may not be thread safe.
        with self._creation_lock:
            logger.debug(
                "Opening segmentation session (locale=%s, thread=%s)",
                self.locale,
                threading.current_thread().name,
            )
            try:
                session = self.service.open(self.locale, view)
            except NoSegmentationSessionError:
                raise
            except Exception as exc:
                raise NoSegmentationSessionError(
                    f"Could not open segmentation session: {exc}"
                ) from exc
            if session is None:
                raise NoSegmentationSessionError(
                    "Segmentation service returned no session"
                )
            self._sessions.append(session)
            self._local.session = session
            self._local.generation = self._generation
        return session

    @contextmanager
    def bound(self, text: String16) -> Iterator[Breaker]:
        """Bind the calling thread's session to ``text`` for the block."""
        local = self._local
        if getattr(local, "bound", False):
            raise NoSegmentationSessionError(
                "Segmentation session is already bound; queries are not reentrant"
            )
        view = text.units_view()
        local.bound = True
        try:
            session = self._thread_session()
            if session is None:
                session = self._open(view)
            else:
                self.service.set_text(session, view)
            breaker = Breaker(self.service, session, len(view))
            try:
                yield breaker
            finally:
                breaker.release()
        finally:
            local.bound = False

    def is_boundary(self, text: String16, offset: int) -> bool:
        with self.bound(text) as breaker:
            return breaker.is_boundary(offset)

    def preceding_boundary(self, text: String16, offset: int) -> int:
        with self.bound(text) as breaker:
            return breaker.preceding(offset)

    def following_boundary(self, text: String16, offset: int) -> int:
        with self.bound(text) as breaker:
            return breaker.following(offset)
