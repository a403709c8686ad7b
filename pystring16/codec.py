"""Bridging between Python strings and UTF-16 code unit arrays."""

from __future__ import annotations

import numpy as np
import regex

from .constants import UTF16_CODEC, UTF16_ERRORS

CODE_UNIT_DTYPE = np.dtype("<u2")

_GRAPHEME = regex.compile(r"\X")


def encode(text: str) -> np.ndarray:
    """Encode a string to a fresh, writable array of code units."""
    if not text:
        return np.zeros(0, dtype=CODE_UNIT_DTYPE)
    data = text.encode(UTF16_CODEC, UTF16_ERRORS)
    return np.frombuffer(data, dtype=CODE_UNIT_DTYPE).copy()


def decode(units: np.ndarray) -> str:
    """Decode code units; unpaired surrogates survive as lone surrogates."""
    if len(units) == 0:
        return ""
    data = np.ascontiguousarray(units, dtype=CODE_UNIT_DTYPE).tobytes()
    return data.decode(UTF16_CODEC, UTF16_ERRORS)


def utf16_lengths(text: str) -> np.ndarray:
    """Code units needed for each code point of ``text`` (1 or 2)."""
    if not text:
        return np.zeros(0, dtype=np.int64)
    points = np.frombuffer(text.encode("utf-32-le", UTF16_ERRORS), dtype="<u4")
    return np.where(points > 0xFFFF, 2, 1).astype(np.int64)


def utf16_offsets(text: str) -> np.ndarray:
    """Map code point positions of ``text`` to code unit offsets.

    The result has ``len(text) + 1`` entries so match ends map too:
    ``utf16_offsets(s)[i]`` is the code unit offset of ``s[i]``.
    """
    offsets = np.zeros(len(text) + 1, dtype=np.int64)
    np.cumsum(utf16_lengths(text), out=offsets[1:])
    return offsets


def grapheme_clusters(text: str) -> list[str]:
    """Split text into extended grapheme clusters using regex ``\\X``."""
    if not text:
        return []
    return _GRAPHEME.findall(text)


def grapheme_boundaries(units: np.ndarray) -> np.ndarray:
    """Sorted code unit offsets of every grapheme boundary, start and end included."""
    clusters = grapheme_clusters(decode(units))
    sizes = np.fromiter(
        (len(cluster.encode(UTF16_CODEC, UTF16_ERRORS)) // 2 for cluster in clusters),
        dtype=np.int64,
        count=len(clusters),
    )
    boundaries = np.zeros(len(clusters) + 1, dtype=np.int64)
    np.cumsum(sizes, out=boundaries[1:])
    return boundaries
