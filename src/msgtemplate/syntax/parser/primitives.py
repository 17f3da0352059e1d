"""Parser combinator primitives.

Grammar-agnostic building blocks: every parser is a plain callable

    parser(cursor: Cursor, context: ParseContext) -> ParseResult[T] | None

None is the single failure value. No primitive raises on a mismatch and
none keeps position state of its own: backtracking means handing the
original cursor to the next alternative.

Combinators:
    string_parser: match a fixed string
    regex_parser: match a non-empty regex prefix at the cursor
    sequence: all parsers in order, all-or-nothing
    choice: first successful alternative (ordered choice)
    n_or_more: greedy repetition with a minimum count
    transform: map a successful result
    nested: run a parser one nesting level deeper, failing at the limit
    memoize: packrat-cache a parser per (position, depth) within one parse
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from msgtemplate.constants import MAX_DEPTH
from msgtemplate.syntax.cursor import Cursor, ParseResult

__all__ = [
    "ParseContext",
    "Parser",
    "choice",
    "memoize",
    "n_or_more",
    "nested",
    "regex_parser",
    "sequence",
    "string_parser",
    "transform",
]

type Parser[T] = Callable[[Cursor, ParseContext], ParseResult[T] | None]

# Distinguishes "not cached" from a cached failure (None)
_NOT_CACHED = object()


@dataclass(slots=True)
class ParseContext:
    """Explicit context for one parse run.

    Replaces shared module state with explicit parameter passing for:
    - Thread safety without global state
    - Easier testing (no state reset needed)
    - Clear dependency flow

    A context is created per parse call. enter_nesting() derives a deeper
    context that shares the same memo table.

    Attributes:
        max_nesting_depth: Maximum allowed nesting depth for templates
        current_depth: Current nesting depth (0 = top level)
        memo: Packrat cache keyed by (rule key, position, depth)
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0
    memo: dict[tuple[str, int, int], object] = field(default_factory=dict)

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been reached."""
        return self.current_depth >= self.max_nesting_depth

    def enter_nesting(self) -> "ParseContext":
        """Create new context with incremented depth for entering a template."""
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
            memo=self.memo,
        )


def string_parser(text: str) -> Parser[str]:
    """Match ``text`` exactly at the cursor.

    Example:
        >>> open_template = string_parser("{{")
        >>> open_template(Cursor("{{X}}", 0), ParseContext()).cursor.pos
        2
        >>> open_template(Cursor("{X}", 0), ParseContext()) is None
        True
    """
    length = len(text)

    def parse_string(cursor: Cursor, context: ParseContext) -> ParseResult[str] | None:
        if cursor.startswith(text):
            return ParseResult(text, cursor.advance(length))
        return None

    return parse_string


def regex_parser(pattern: str | re.Pattern[str]) -> Parser[str]:
    """Match ``pattern`` anchored at the cursor.

    The match must be non-empty; an empty match is a failure, so a
    regex parser always makes progress when it succeeds.

    Note:
        Do not start the pattern with ``^``: the pattern is matched with
        ``Pattern.match(source, pos)``, which anchors at ``pos`` already,
        while ``^`` would only ever match at offset 0.
    """
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def parse_regex(cursor: Cursor, context: ParseContext) -> ParseResult[str] | None:
        match = compiled.match(cursor.source, cursor.pos)
        if match is None or match.end() == cursor.pos:
            return None
        return ParseResult(match.group(), cursor.advance(match.end() - cursor.pos))

    return parse_regex


def sequence(*parsers: Parser[object]) -> Parser[list[object]]:
    """Run parsers in order; all must succeed.

    Returns the list of sub-results. On any failure the whole sequence
    fails and nothing is consumed (the caller still holds its cursor).
    """

    def parse_sequence(cursor: Cursor, context: ParseContext) -> ParseResult[list[object]] | None:
        values: list[object] = []
        current = cursor
        for parser in parsers:
            result = parser(current, context)
            if result is None:
                return None
            values.append(result.value)
            current = result.cursor
        return ParseResult(values, current)

    return parse_sequence


def choice[T](*parsers: Parser[T]) -> Parser[T]:
    """Try alternatives in order at the same cursor; first success wins.

    Order encodes precedence: list the more specific alternatives first.
    """

    def parse_choice(cursor: Cursor, context: ParseContext) -> ParseResult[T] | None:
        for parser in parsers:
            result = parser(cursor, context)
            if result is not None:
                return result
        return None

    return parse_choice


def n_or_more[T](n: int, parser: Parser[T]) -> Parser[list[T]]:
    """Apply ``parser`` greedily until it fails; require at least ``n`` results.

    A success that consumes nothing ends the repetition (and is not
    collected), so repetition terminates for any parser.
    """

    def parse_repeated(cursor: Cursor, context: ParseContext) -> ParseResult[list[T]] | None:
        values: list[T] = []
        current = cursor
        while True:
            result = parser(current, context)
            if result is None or result.cursor.pos == current.pos:
                break
            values.append(result.value)
            current = result.cursor
        if len(values) < n:
            return None
        return ParseResult(values, current)

    return parse_repeated


def transform[T, U](parser: Parser[T], fn: Callable[[T], U]) -> Parser[U]:
    """Apply ``fn`` to the parsed value on success; failures pass through."""

    def parse_transformed(cursor: Cursor, context: ParseContext) -> ParseResult[U] | None:
        result = parser(cursor, context)
        if result is None:
            return None
        return ParseResult(fn(result.value), result.cursor)

    return parse_transformed


def nested[T](parser: Parser[T]) -> Parser[T]:
    """Run ``parser`` one nesting level deeper.

    Fails (returns None) once the context is at its nesting limit, which
    bounds recursion depth for inputs like ``{{a|{{a|{{a|...``.
    """

    def parse_nested(cursor: Cursor, context: ParseContext) -> ParseResult[T] | None:
        if context.is_depth_exceeded():
            return None
        return parser(cursor, context.enter_nesting())

    return parse_nested


def memoize[T](key: str, parser: Parser[T]) -> Parser[T]:
    """Cache ``parser`` results per (position, depth) for the current parse.

    Packrat memoization: a rule re-entered at the same position and
    nesting depth returns its earlier result, failures included. This
    keeps ordered choices that retry the same sub-rule polynomial.

    Args:
        key: Name identifying the rule in the memo table
        parser: Parser to cache
    """

    def parse_memoized(cursor: Cursor, context: ParseContext) -> ParseResult[T] | None:
        memo_key = (key, cursor.pos, context.current_depth)
        cached = context.memo.get(memo_key, _NOT_CACHED)
        if cached is not _NOT_CACHED:
            return cached  # type: ignore[return-value]
        result = parser(cursor, context)
        context.memo[memo_key] = result
        return result

    return parse_memoized
