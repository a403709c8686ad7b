"""pystring16 - grapheme-safe offset indexing over UTF-16 strings."""

from .buffer import String16
from .config import IndexConfig
from .errors import (
    InvalidBoundaryError,
    NoSegmentationSessionError,
    OutOfRangeError,
    String16Error,
    UnresolvedExpressionError,
)
from .offsets import (
    END,
    START,
    OffsetExpression,
    either,
    end,
    first_of,
    last_of,
    offset,
    resolve,
    resolve_or_fail,
    start,
)
from .predicates import CharSetPredicate, LiteralPredicate, RegexPredicate
from .segmentation import GraphemeSegmenter, RegexGraphemeService
from .types import BoundaryIndex, CodeUnit, GraphemeRange

# Version info
try:
    from ._version import __version__, __version_tuple__
except ImportError:
    __version__ = "0.0.0"
    __version_tuple__ = (0, 0, 0)

__all__ = [
    "__version__",
    "BoundaryIndex",
    "CharSetPredicate",
    "CodeUnit",
    "END",
    "GraphemeRange",
    "GraphemeSegmenter",
    "IndexConfig",
    "InvalidBoundaryError",
    "LiteralPredicate",
    "NoSegmentationSessionError",
    "OffsetExpression",
    "OutOfRangeError",
    "RegexGraphemeService",
    "RegexPredicate",
    "START",
    "String16",
    "String16Error",
    "UnresolvedExpressionError",
    "either",
    "end",
    "first_of",
    "last_of",
    "offset",
    "resolve",
    "resolve_or_fail",
    "start",
]
