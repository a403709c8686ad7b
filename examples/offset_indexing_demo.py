"""Offset expressions and grapheme-safe editing.

Usage:
    python examples/offset_indexing_demo.py
"""

from __future__ import annotations

import logging

from pystring16 import (
    END,
    START,
    GraphemeSegmenter,
    IndexConfig,
    String16,
    either,
    first_of,
    last_of,
)

WORD = r"\w+"


def show(label: str, value: object) -> None:
    print(f"{label:<28} {value!r}")


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    # One segmenter per thread/worker, shared by every string it touches
    with GraphemeSegmenter() as segmenter:
        text = String16("Hello, World!", segmenter=segmenter)
        text.insert("?", END.minus(1))
        show("insert before last", str(text))

        second_o = first_of("o").plus(1).plus(first_of("o"))
        text[second_o] = "a"
        show("replace second 'o'", str(text))

        show("first word", text[: first_of(" ")])
        show("last word", text[last_of(" ").plus(1) :])
        show("stripped", text[START.plus(1) : END.minus(1)])
        show("first regex word", text[: first_of(WORD, regex=True, anchor="trailing")])
        show("either", text.index_of(either(first_of("z"), first_of("W"))))
        show("safe miss", text.safe[: first_of("z")])

        emoji = String16(
            "Family: \U0001F468\u200d\U0001F469\u200d\U0001F467!",
            segmenter=segmenter,
        )
        show("characters", list(emoji.characters()))
        show("last character before '!'", emoji[END.minus(2)])
        emoji[END] = "\U0001F921"
        show("append at end", str(emoji))

        clamped = String16(
            "abc", config=IndexConfig(clamp_on_overflow=True), segmenter=segmenter
        )
        show("clamped step past end", clamped.index_after(clamped.end_index))


if __name__ == "__main__":
    main()
