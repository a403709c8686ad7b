"""Tests for offset expression resolution."""

import pytest
import regex

from pystring16 import (
    END,
    START,
    BoundaryIndex,
    CharSetPredicate,
    String16,
    either,
    end,
    first_of,
    last_of,
    offset,
    resolve,
    resolve_or_fail,
    start,
)
from pystring16.errors import OutOfRangeError, UnresolvedExpressionError
from pystring16.offsets import Either, First, Last, Offset


def offset_of(expr, text):
    resolved = resolve(expr, text)
    return None if resolved is None else resolved.offset


class CountingPredicate:
    def __init__(self, inner):
        self.inner = inner
        self.searches = 0

    def first_match(self, text, lower=0):
        self.searches += 1
        return self.inner.first_match(text, lower)

    def last_match(self, text, lower=0):
        self.searches += 1
        return self.inner.last_match(text, lower)


@pytest.mark.parametrize("value", ["", "abc", "a\U0001F921", "e\u0301"])
def test_start_and_end(value):
    text = String16(value)
    assert resolve(START, text) == BoundaryIndex(0)
    assert resolve(END, text) == BoundaryIndex(len(text))
    assert start() is START
    assert end() is END


class TestFirstAndLast:
    """Literal, character set and regex searches."""

    def test_literal_first_and_last(self):
        text = String16("Hello, World!")
        assert offset_of(first_of("o"), text) == 4
        assert offset_of(last_of("o"), text) == 8
        assert offset_of(first_of("o", anchor="trailing"), text) == 5
        assert offset_of(first_of("World"), text) == 7
        assert offset_of(last_of("l", anchor="trailing"), text) == 11

    def test_literal_no_match(self):
        text = String16("Hello")
        assert resolve(first_of("z"), text) is None
        assert resolve(last_of("\U0001F920"), text) is None

    def test_literal_skips_matches_inside_clusters(self):
        # the bare "e" is part of e + combining acute and must not match
        text = String16("e\u0301 e")
        assert offset_of(first_of("e"), text) == 3
        assert offset_of(last_of("e"), text) == 3

    def test_literal_after_astral_characters(self):
        text = String16("\U0001F921x\U0001F921x")
        assert offset_of(first_of("x"), text) == 2
        assert offset_of(last_of("x"), text) == 5

    def test_char_set_uses_first_scalar_of_cluster(self):
        text = String16("ae\u0301e")
        expr = first_of({"e"})
        assert offset_of(expr, text) == 1
        assert offset_of(first_of({"e"}, anchor="trailing"), text) == 3
        assert offset_of(last_of({"e"}), text) == 3
        assert isinstance(expr.predicate, CharSetPredicate)

    def test_char_set_no_match(self):
        assert resolve(first_of({"x", "y"}), String16("abc")) is None
        assert resolve(last_of(frozenset("xy")), String16("abc")) is None

    def test_regex_anchors(self):
        text = String16("Hi, World?!.")
        word = r"\w+"
        assert offset_of(first_of(word, regex=True), text) == 0
        assert offset_of(first_of(word, regex=True, anchor="trailing"), text) == 2
        assert offset_of(last_of(word, regex=True), text) == 4
        assert offset_of(last_of(word, regex=True, anchor="trailing"), text) == 9

    def test_regex_offsets_in_code_units(self):
        text = String16("\U0001F921 abc")
        assert offset_of(first_of(r"[a-z]+", regex=True), text) == 3
        assert offset_of(first_of(r"[a-z]+", regex=True, anchor="trailing"), text) == 6

    def test_regex_match_widened_to_boundaries(self):
        # the pattern matches only the "e" of e + combining acute
        text = String16("xe\u0301y")
        expr = first_of(r"e", regex=True, anchor="trailing")
        assert offset_of(expr, text) == 3

    def test_regex_flags(self):
        text = String16("abc ABC")
        expr = last_of("abc", regex=True, flags=regex.IGNORECASE)
        assert offset_of(expr, text) == 4

    def test_regex_no_match(self):
        assert resolve(first_of(r"\d", regex=True), String16("abc")) is None
        assert resolve(last_of(r"\d", regex=True), String16("abc")) is None

    def test_invalid_anchor(self):
        with pytest.raises(ValueError):
            first_of("a", anchor="middle")


class TestEither:
    def test_first_alternative_wins(self):
        text = String16("Hello, World!")
        expr = either(first_of("o"), first_of("W"))
        assert offset_of(expr, text) == 4

    def test_falls_back_to_second(self):
        text = String16("Hello, World!")
        assert resolve(either(first_of("z"), first_of("W")), text) == resolve(
            first_of("W"), text
        )

    def test_second_not_evaluated_when_first_matches(self):
        calls = []

        class Recording:
            def first_match(self, text, lower=0):
                calls.append(lower)
                return (0, 1)

            def last_match(self, text, lower=0):
                return None

        text = String16("abc")
        expr = first_of("c").or_else(first_of(Recording()))
        assert offset_of(expr, text) == 2
        assert calls == []

    def test_both_fail(self):
        assert resolve(either(first_of("x"), last_of("y")), String16("abc")) is None


class TestOffset:
    def test_integer_delta_steps_by_characters(self):
        text = String16("a\U0001F921e\u0301b")
        assert offset_of(START.plus(1), text) == 1
        assert offset_of(START.plus(2), text) == 3
        assert offset_of(END.minus(1), text) == 5
        assert offset_of(offset(END, -2), text) == 3
        assert offset_of(END.plus(0).plus(0), text) == len(text)

    def test_overflow_is_absent(self):
        text = String16("abc")
        assert resolve(START.minus(1), text) is None
        assert resolve(END.plus(1), text) is None

    def test_nested_delta_resolves_in_tail(self):
        text = String16("Hello, World?!")
        expr = first_of("o").plus(1).plus(first_of("o"))
        assert offset_of(expr, text) == 8

    def test_nested_regex_delta(self):
        text = String16("Hi, World?!.")
        word_end = first_of(r"\w+", regex=True, anchor="trailing")
        assert offset_of(word_end.plus(word_end), text) == 9

    def test_nested_start_is_base(self):
        text = String16("abcdef")
        assert offset_of(START.plus(2).plus(START), text) == 2
        assert offset_of(START.plus(2).plus(START.plus(1)), text) == 3
        assert offset_of(START.plus(2).plus(END), text) == 6

    def test_nested_delta_cannot_step_before_base(self):
        text = String16("abcdef")
        assert resolve(START.plus(2).plus(START.minus(1)), text) is None

    def test_nested_delta_no_match(self):
        text = String16("Hello")
        assert resolve(first_of("o").plus(first_of("H")), text) is None

    def test_delta_type_checked(self):
        with pytest.raises(TypeError):
            Offset(START, "1")
        with pytest.raises(TypeError):
            START.plus(True)
        with pytest.raises(TypeError):
            START.minus(START)


class TestResolveOrFail:
    def test_returns_index(self):
        assert resolve_or_fail(first_of("b"), String16("abc")) == BoundaryIndex(1)

    def test_unresolved_search(self):
        with pytest.raises(UnresolvedExpressionError, match="Invalid offset index"):
            resolve_or_fail(first_of("z"), String16("abc"))

    def test_step_overflow(self):
        with pytest.raises(OutOfRangeError):
            resolve_or_fail(END.plus(1), String16("abc"))

    def test_step_overflow_searches_base_once(self):
        predicate = CountingPredicate(CharSetPredicate.of("c"))
        with pytest.raises(OutOfRangeError):
            resolve_or_fail(First(predicate).plus(2), String16("abc"))
        assert predicate.searches == 1

    def test_unresolved_base_searches_once(self):
        predicate = CountingPredicate(CharSetPredicate.of("z"))
        with pytest.raises(UnresolvedExpressionError):
            resolve_or_fail(First(predicate).plus(1), String16("abc"))
        assert predicate.searches == 1

    def test_nested_delta_failure_is_unresolved(self):
        with pytest.raises(UnresolvedExpressionError):
            resolve_or_fail(first_of("o").plus(first_of("H")), String16("Hello"))


def test_expressions_are_values():
    assert first_of("a") == first_of("a")
    assert START.plus(1) == Offset(START, 1)
    assert isinstance(either(START, END), Either)
    assert isinstance(first_of("a"), First)
    assert isinstance(last_of("a"), Last)
    assert str(END.minus(1)) == "end-1"
    assert str(START.plus(2)) == "start+2"
    assert hash(first_of(r"\w", regex=True)) == hash(first_of(r"\w", regex=True))
