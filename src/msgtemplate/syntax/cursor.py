"""Immutable cursor infrastructure for backtracking parsing.

Every grammar rule receives a Cursor and returns either a ParseResult
carrying the advanced cursor or None. Backtracking is simply reusing the
cursor a rule was given: nothing is ever moved in place, so a failed
alternative cannot leave the position corrupted and two parses never
share a position.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

__all__ = ["Cursor", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """A position in a message source.

    Example:
        >>> cursor = Cursor("{{X}}", 0)
        >>> cursor.advance(2).startswith("X")
        True
        >>> cursor.pos
        0
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """True once every character has been consumed."""
        return self.pos >= len(self.source)

    def advance(self, count: int = 1) -> "Cursor":
        """Cursor ``count`` characters further on, stopping at the end."""
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def startswith(self, text: str) -> bool:
        """Check the remaining input for a prefix without slicing."""
        return self.source.startswith(text, self.pos)

    def compute_line_col(self) -> tuple[int, int]:
        """1-based (line, column) of the position, for error messages.

        O(position); call only when reporting.

        Example:
            >>> Cursor("one\\ntwo", 5).compute_line_col()
            (2, 2)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        line_start = self.source.rfind("\n", 0, self.pos) + 1
        return (line, self.pos - line_start + 1)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """A parsed value and the cursor just past it.

    Rules have the shape:
        def parse_foo(cursor: Cursor, context: ParseContext) -> ParseResult[Foo] | None
    """

    value: T
    cursor: Cursor
