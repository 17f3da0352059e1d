"""msgtemplate - MediaWiki-style message templates for Python.

Parses messages with numbered placeholders ($1, $2, ...) and nested
template calls ({{PLURAL:$1|one item|$1 items}}) into an AST with a
backtracking parser-combinator grammar, and renders them with
caller-registered template functions.

Public API:
    MessageParser - Render messages for one locale (fast path + grammar)
    MessageEmitter - Render an AST with replacement values
    TemplateRegistry - Register template functions by name
    parse - Render a message once with a default MessageParser
    parse_ast - Parse a message template to its AST
    serialize - Serialize an AST back to message source
    as_tree - Convert an AST to the tagged nested-list form

Exceptions:
    MessageError - Base exception class
    MessageSyntaxError - Message could not be parsed
    MessageResolutionError - Rendering errors
    TemplateNotFoundError - Unknown template name
    TemplateFunctionError - Template function failed

Submodules:
    msgtemplate.syntax.ast - AST node types (Concat, Replace, TemplateCall)
    msgtemplate.syntax.parser - Combinators and grammar rules
    msgtemplate.diagnostics - Error types and diagnostic codes
"""

from collections.abc import Sequence

from .diagnostics import (
    MessageError,
    MessageResolutionError,
    MessageSyntaxError,
    TemplateFunctionError,
    TemplateNotFoundError,
)
from .runtime import MessageEmitter, MessageParser, MessageValue, TemplateRegistry
from .syntax import Concat, Replace, TemplateCall, as_tree, serialize
from .syntax import parse as parse_ast

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("msgtemplate")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Concat",
    "MessageEmitter",
    "MessageError",
    "MessageParser",
    "MessageResolutionError",
    "MessageSyntaxError",
    "MessageValue",
    "Replace",
    "TemplateCall",
    "TemplateFunctionError",
    "TemplateNotFoundError",
    "TemplateRegistry",
    "__version__",
    "as_tree",
    "parse",
    "parse_ast",
    "serialize",
]


def parse(message: str, replacements: Sequence[MessageValue] = ()) -> str:
    """Render a message once, with no template functions registered.

    Template calls are rendered back as source text; use a MessageParser
    with a TemplateRegistry to render them.

    Example:
        >>> from msgtemplate import parse
        >>> parse("Hello $1", ["World"])
        'Hello World'
    """
    return MessageParser("en").parse(message, replacements)
