"""Core message template parser.

This module provides the MessageParserV1 class that runs the grammar in
:mod:`msgtemplate.syntax.parser.rules` over a message and returns the AST
defined in :mod:`msgtemplate.syntax.ast`.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~msgtemplate.syntax.cursor.Cursor`).
    Each rule returns either a :class:`~msgtemplate.syntax.cursor.ParseResult`
    holding the node and the advanced cursor, or None on failure.

Security:
    Includes a configurable input size limit and a template nesting limit.
"""

from msgtemplate.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from msgtemplate.core.depth_guard import depth_clamp
from msgtemplate.diagnostics import ErrorTemplate, MessageSyntaxError
from msgtemplate.syntax.ast import Concat
from msgtemplate.syntax.cursor import Cursor
from msgtemplate.syntax.parser.primitives import ParseContext
from msgtemplate.syntax.parser.rules import parse_start

__all__ = ["MessageParserV1"]


class MessageParserV1:
    """Message template parser using immutable cursor pattern.

    Design:
    - Every grammar rule takes a Cursor and a ParseContext
    - Every rule returns ParseResult[T] | None (None indicates no match)
    - A fresh ParseContext per parse: nothing is shared between calls

    Attributes:
        max_source_size: Maximum allowed message size in characters (default: 10 MB)
        max_nesting_depth: Maximum allowed template nesting depth (default: 32)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Configure limits; None selects the package defaults.

        Args:
            max_source_size: Longest accepted message in characters; 0 accepts any length.
            max_nesting_depth: Deepest template nesting, lowered by depth_clamp()
                when the interpreter stack is too small for it.
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = depth_clamp(
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed message size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed template nesting depth."""
        return self._max_nesting_depth

    def parse(self, source: str) -> Concat:
        """Parse a message template into its AST.

        Args:
            source: Message template text

        Returns:
            :class:`~msgtemplate.syntax.ast.Concat` root, with empty children
            for an empty message

        Raises:
            ValueError: If source exceeds max_source_size
            MessageSyntaxError: If the grammar stopped before the end of the
                message. The grammar consumes every input, so this signals a
                broken parser invariant rather than bad input.

        Example:
            >>> parser = MessageParserV1()
            >>> parser.parse("{{PLURAL:$1|apple|apples}}")
            Concat(children=(TemplateCall(name='PLURAL', args=(Replace(index=0), 'apple', 'apples')),))
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            diagnostic = ErrorTemplate.source_too_large(len(source), self._max_source_size)
            raise ValueError(diagnostic.message)

        cursor = Cursor(source, 0)
        context = ParseContext(max_nesting_depth=self._max_nesting_depth)

        result = parse_start(cursor, context)
        if result is None or not result.cursor.is_eof:
            stop = cursor if result is None else result.cursor
            line, column = stop.compute_line_col()
            raise MessageSyntaxError(
                ErrorTemplate.parse_incomplete(stop.pos, len(source), line, column)
            )
        return result.value
