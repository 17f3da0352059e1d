"""Tests for parser combinator primitives.

Every combinator returns a ParseResult or None and never moves a cursor in
place, so failed alternatives leave the caller's position untouched.
"""

from __future__ import annotations

import re

from hypothesis import given
from hypothesis import strategies as st

from msgtemplate.syntax.cursor import Cursor, ParseResult
from msgtemplate.syntax.parser.primitives import (
    ParseContext,
    choice,
    memoize,
    n_or_more,
    nested,
    regex_parser,
    sequence,
    string_parser,
    transform,
)


def _run(parser, source: str, pos: int = 0):  # type: ignore[no-untyped-def]
    return parser(Cursor(source, pos), ParseContext())


# ============================================================================
# TERMINALS
# ============================================================================


class TestStringParser:
    """Test fixed-string matching."""

    def test_match_consumes_text(self) -> None:
        """Matching text advances by its length."""
        result = _run(string_parser("{{"), "{{X}}")

        assert result is not None
        assert result.value == "{{"
        assert result.cursor.pos == 2

    def test_mismatch_returns_none(self) -> None:
        """A partial match is a failure."""
        assert _run(string_parser("{{"), "{X}") is None

    def test_match_at_offset(self) -> None:
        """Matching happens at the cursor position, not at offset 0."""
        result = _run(string_parser("}}"), "X}}", 1)

        assert result is not None
        assert result.cursor.pos == 3

    def test_at_eof(self) -> None:
        """Matching at EOF fails."""
        assert _run(string_parser("|"), "") is None


class TestRegexParser:
    """Test anchored regex matching."""

    def test_match_is_anchored_at_cursor(self) -> None:
        """The pattern must match at the cursor, not later in the source."""
        digits = regex_parser(r"[0-9]+")

        assert _run(digits, "a12") is None
        result = _run(digits, "a12", 1)
        assert result is not None
        assert result.value == "12"

    def test_empty_match_is_failure(self) -> None:
        """A pattern that matches the empty string must consume something."""
        assert _run(regex_parser(r"[0-9]*"), "abc") is None

    def test_accepts_compiled_pattern(self) -> None:
        """Compiled patterns keep their flags."""
        any_char = regex_parser(re.compile(r".", re.DOTALL))
        result = _run(any_char, "\n")

        assert result is not None
        assert result.value == "\n"


# ============================================================================
# COMBINATORS
# ============================================================================


class TestSequence:
    """Test all-or-nothing sequencing."""

    def test_collects_values(self) -> None:
        """Sub-results are returned in order."""
        parser = sequence(string_parser("$"), regex_parser(r"[0-9]+"))
        result = _run(parser, "$12")

        assert result is not None
        assert result.value == ["$", "12"]
        assert result.cursor.pos == 3

    def test_any_failure_fails_whole(self) -> None:
        """A failing later element fails the sequence."""
        parser = sequence(string_parser("$"), regex_parser(r"[0-9]+"))

        assert _run(parser, "$x") is None

    def test_empty_sequence_succeeds(self) -> None:
        """A sequence of nothing consumes nothing."""
        result = _run(sequence(), "abc")

        assert result is not None
        assert result.value == []
        assert result.cursor.pos == 0


class TestChoice:
    """Test ordered choice."""

    def test_first_success_wins(self) -> None:
        """Earlier alternatives take precedence."""
        parser = choice(string_parser("{{"), string_parser("{"))
        result = _run(parser, "{{")

        assert result is not None
        assert result.value == "{{"

    def test_later_alternative_from_same_position(self) -> None:
        """Each alternative starts at the original cursor."""
        parser = choice(
            sequence(string_parser("a"), string_parser("x")),
            sequence(string_parser("a"), string_parser("b")),
        )
        result = _run(parser, "ab")

        assert result is not None
        assert result.value == ["a", "b"]

    def test_all_fail(self) -> None:
        """No alternative matching is a failure."""
        assert _run(choice(string_parser("a"), string_parser("b")), "c") is None


class TestNOrMore:
    """Test greedy repetition."""

    def test_greedy(self) -> None:
        """Repetition consumes as many matches as possible."""
        result = _run(n_or_more(0, string_parser("ab")), "ababa")

        assert result is not None
        assert result.value == ["ab", "ab"]
        assert result.cursor.pos == 4

    def test_zero_matches_with_zero_minimum(self) -> None:
        """Zero matches satisfy a minimum of zero."""
        result = _run(n_or_more(0, string_parser("x")), "abc")

        assert result is not None
        assert result.value == []
        assert result.cursor.pos == 0

    def test_minimum_not_met(self) -> None:
        """Too few matches fail the repetition."""
        assert _run(n_or_more(3, string_parser("a")), "aab") is None

    def test_zero_progress_success_stops(self) -> None:
        """A parser that succeeds without consuming cannot loop forever."""
        result = _run(n_or_more(0, sequence()), "abc")

        assert result is not None
        assert result.value == []


class TestTransform:
    """Test result mapping."""

    def test_maps_success(self) -> None:
        """The function is applied to the parsed value."""
        parser = transform(regex_parser(r"[0-9]+"), int)
        result = _run(parser, "42")

        assert result is not None
        assert result.value == 42

    def test_failure_passes_through(self) -> None:
        """The function is not called on failure."""
        calls: list[object] = []
        parser = transform(string_parser("x"), calls.append)

        assert _run(parser, "y") is None
        assert calls == []


# ============================================================================
# NESTING AND MEMOIZATION
# ============================================================================


class TestParseContext:
    """Test ParseContext depth tracking."""

    def test_enter_nesting_increments_depth(self) -> None:
        """enter_nesting returns a deeper context sharing the memo."""
        context = ParseContext(max_nesting_depth=5)
        inner = context.enter_nesting()

        assert inner.current_depth == 1
        assert inner.max_nesting_depth == 5
        assert inner.memo is context.memo
        assert context.current_depth == 0

    def test_depth_exceeded(self) -> None:
        """is_depth_exceeded compares against the limit."""
        assert ParseContext(max_nesting_depth=2, current_depth=2).is_depth_exceeded()
        assert not ParseContext(max_nesting_depth=2, current_depth=1).is_depth_exceeded()


class TestNested:
    """Test nesting depth enforcement."""

    def test_runs_parser_one_level_deeper(self) -> None:
        """The wrapped parser sees the incremented depth."""
        seen: list[int] = []

        def probe(cursor: Cursor, context: ParseContext) -> ParseResult[str] | None:
            seen.append(context.current_depth)
            return ParseResult("", cursor)

        nested(probe)(Cursor("", 0), ParseContext())

        assert seen == [1]

    def test_fails_at_limit(self) -> None:
        """At the nesting limit the parser is not called."""
        context = ParseContext(max_nesting_depth=1, current_depth=1)

        assert nested(string_parser("a"))(Cursor("a", 0), context) is None


class TestMemoize:
    """Test packrat caching."""

    def test_result_cached_per_position(self) -> None:
        """A rule re-entered at the same position is not re-run."""
        calls: list[int] = []

        def counted(cursor: Cursor, context: ParseContext) -> ParseResult[str] | None:
            calls.append(cursor.pos)
            return string_parser("a")(cursor, context)

        parser = memoize("counted", counted)
        context = ParseContext()
        first = parser(Cursor("aa", 0), context)
        second = parser(Cursor("aa", 0), context)
        parser(Cursor("aa", 1), context)

        assert first == second
        assert calls == [0, 1]

    def test_failure_cached(self) -> None:
        """Failures are cached too."""
        calls: list[int] = []

        def failing(cursor: Cursor, context: ParseContext) -> ParseResult[str] | None:
            calls.append(cursor.pos)
            return None

        parser = memoize("failing", failing)
        context = ParseContext()

        assert parser(Cursor("x", 0), context) is None
        assert parser(Cursor("x", 0), context) is None
        assert calls == [0]

    def test_fresh_context_fresh_cache(self) -> None:
        """Separate parses do not share cached results."""
        calls: list[int] = []

        def counted(cursor: Cursor, context: ParseContext) -> ParseResult[str] | None:
            calls.append(cursor.pos)
            return None

        parser = memoize("fresh", counted)
        parser(Cursor("x", 0), ParseContext())
        parser(Cursor("x", 0), ParseContext())

        assert calls == [0, 0]


class TestCombinatorProperties:
    """Property tests over arbitrary input."""

    @given(st.text(max_size=40))
    def test_choice_of_repetitions_never_overruns(self, source: str) -> None:
        """Property: results never move past the end of input."""
        parser = n_or_more(0, choice(regex_parser(r"[a-z]+"), regex_parser(r"(?s).")))
        result = parser(Cursor(source, 0), ParseContext())

        assert result is not None
        assert result.cursor.pos == len(source)
        assert "".join(result.value) == source
