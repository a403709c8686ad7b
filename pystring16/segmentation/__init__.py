from .adapter import Breaker, GraphemeSegmenter
from .protocols import BreakSession, SegmentationService
from .regex_service import RegexBreakSession, RegexGraphemeService

__all__ = [
    "Breaker",
    "BreakSession",
    "GraphemeSegmenter",
    "RegexBreakSession",
    "RegexGraphemeService",
    "SegmentationService",
]
