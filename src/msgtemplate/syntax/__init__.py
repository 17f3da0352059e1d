"""Message template syntax package.

Provides the parser, AST definitions and serialization. Separate from
runtime so tooling (extractors, linters) can parse without rendering.

Python 3.13+.
"""

from .ast import Concat, Node, Replace, TemplateCall, as_tree
from .cursor import Cursor, ParseResult
from .parser import MessageParserV1
from .serializer import SerializationValidationError, serialize

__all__ = [
    "Concat",
    "Cursor",
    "MessageParserV1",
    "Node",
    "ParseResult",
    "Replace",
    "SerializationValidationError",
    "TemplateCall",
    "as_tree",
    "parse",
    "serialize",
]


def parse(source: str) -> Concat:
    """Parse a message template into its AST.

    Convenience function for MessageParserV1().parse().

    Args:
        source: Message template text

    Returns:
        Concat root node

    Example:
        >>> from msgtemplate.syntax import parse
        >>> parse("Hello $1")
        Concat(children=('Hello ', Replace(index=0)))
    """
    parser = MessageParserV1()
    return parser.parse(source)
