from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import NoReturn

from .constants import DEFAULT_LOCALE
from .errors import String16Error, raise_failure

FailureHandler = Callable[[String16Error], NoReturn]


@dataclass(frozen=True)
class IndexConfig:
    """Indexing behavior for a String16 and everything resolved against it.

    Keep this frozen so a buffer's behavior cannot change under a resolution
    in progress. Use ``dataclasses.replace`` (or ``String16.with_config``) to
    derive variants.
    """

    # Saturate at start/end instead of failing when stepping overflows
    clamp_on_overflow: bool = False

    # Called with the error for every unrecoverable indexing failure
    failure_handler: FailureHandler = raise_failure

    # Development mode: validate raw offsets, allow lenient reads
    debug: bool = __debug__

    # Read-path range validation only logs (requires debug). Writes are
    # always validated.
    lenient_reads: bool = False

    # Raw offsets that are not boundaries fail instead of logging (debug only)
    strict_raw_indices: bool = False

    locale: str = DEFAULT_LOCALE

    @property
    def reads_are_lenient(self) -> bool:
        return self.debug and self.lenient_reads
