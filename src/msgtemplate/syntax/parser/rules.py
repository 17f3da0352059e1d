"""Grammar rules for message templates.

Reference grammar (ordered choice, first match wins):

    start            = expression*
    expression       = template | replacement | literal | stray
    paramExpr        = template | replacement | literalNoBar
    template         = "{{" templateContents "}}"
    templateContents = (name ":" (replacement | paramExpr) param*) | (name param*)
    param            = "|" paramExpr*
    replacement      = "$" [0-9]+
    literal          = (escape | [^{}\\[\\]$\\\\])+
    literalNoBar     = (escape | [^{}\\[\\]$\\\\|])+
    literalNoSpace   = (escape | [^{}\\[\\]$\\\\\\s])+
    escape           = "\\" any-character
    name             = [ !"$&'()*,./0-9;=?@A-Z^_`a-z~\\x80-\\xFF+-]+
    stray            = any-character

Rules are module-level functions taking (cursor, context). Rules that
recurse into each other (templates inside template parameters) look up
their combinators by module name at call time; those combinators are wired
in the grammar table at the bottom of this module, after every rule
function exists.

Disambiguation:
    - template and replacement are tried before literal text, so "{{" and
      "$N" are special whenever they validly can be
    - an escape is tried before bare literal characters
    - inside parameters "|" ends a literal and "}}" ends the template
    - stray is the last resort at top level only: a lone "{", "}", "[",
      "]", a "$" not followed by a placeholder number, or a trailing "\\"
      is kept as text. Every message is therefore consumed completely;
      an unterminated "{{" comes out as literal text.

Security:
    Template nesting is capped by ParseContext.max_nesting_depth; a template
    nested deeper fails and its text falls back to literals. Template
    results are memoized per (position, depth) within a parse.
"""

import re
from typing import cast

from msgtemplate.syntax.ast import Concat, Node, Replace, TemplateCall
from msgtemplate.syntax.cursor import Cursor, ParseResult
from msgtemplate.syntax.parser.primitives import (
    ParseContext,
    Parser,
    choice,
    memoize,
    n_or_more,
    nested,
    regex_parser,
    sequence,
    string_parser,
    transform,
)

__all__ = [
    "TEMPLATE_NAME_PATTERN",
    "parse_escape",
    "parse_expression",
    "parse_literal",
    "parse_literal_without_bar",
    "parse_literal_without_space",
    "parse_param_expression",
    "parse_replacement",
    "parse_start",
    "parse_template",
    "parse_template_contents",
    "parse_template_name",
    "parse_template_param",
]

# Legal template name characters. Colon is excluded so that "PLURAL:$1"
# splits into name and first argument.
TEMPLATE_NAME_PATTERN: str = r"""[ !"$&'()*,./0-9;=?@A-Z\^_`a-z~\x80-\xff+\-]+"""

# =============================================================================
# Terminals
# =============================================================================

_pipe = string_parser("|")
_colon = string_parser(":")
_backslash = string_parser("\\")
_dollar = string_parser("$")
_open_template = string_parser("{{")
_close_template = string_parser("}}")
_any_character = regex_parser(re.compile(r".", re.DOTALL))
_digits = regex_parser(r"[0-9]+")
_template_name = regex_parser(TEMPLATE_NAME_PATTERN)

# Bare literal runs. Matching a run at a time yields the same joined text
# as matching one character at a time.
_regular_run = regex_parser(r"[^{}\[\]$\\]+")
_run_without_bar = regex_parser(r"[^{}\[\]$\\|]+")
_run_without_space = regex_parser(r"[^{}\[\]$\\\s]+")


def _second(values: list[object]) -> str:
    return cast(str, values[1])


def _join(values: list[str]) -> str:
    return "".join(values)


# =============================================================================
# Literals
# =============================================================================

_escape = transform(sequence(_backslash, _any_character), _second)


def parse_escape(cursor: Cursor, context: ParseContext) -> ParseResult[str] | None:
    """Parse escape sequence: \\ followed by any character.

    The escaped character is taken verbatim; it is never re-interpreted,
    so "\\{" yields "{" and cannot open a template.

    Examples:
        \\{ -> "{"
        \\| -> "|"
        \\\\ -> "\\"
    """
    return _escape(cursor, context)


def _literal_of(run: Parser[str]) -> Parser[str]:
    return transform(n_or_more(1, choice(_escape, run)), _join)


_literal = _literal_of(_regular_run)
_literal_without_bar = _literal_of(_run_without_bar)
_literal_without_space = _literal_of(_run_without_space)


def parse_literal(cursor: Cursor, context: ParseContext) -> ParseResult[str] | None:
    """Parse free literal text, excluding { } [ ] $ \\ (escapes allowed).

    Example:
        "Hello, world | again" -> "Hello, world | again"
    """
    return _literal(cursor, context)


def parse_literal_without_bar(cursor: Cursor, context: ParseContext) -> ParseResult[str] | None:
    """Parse literal text inside a template parameter.

    "|" is the parameter delimiter, so it ends the literal unless escaped.
    """
    return _literal_without_bar(cursor, context)


def parse_literal_without_space(cursor: Cursor, context: ParseContext) -> ParseResult[str] | None:
    """Parse a bare space-delimited token (literal text without whitespace)."""
    return _literal_without_space(cursor, context)


# =============================================================================
# Replacements and names
# =============================================================================

_replacement = sequence(_dollar, _digits)


def parse_replacement(cursor: Cursor, context: ParseContext) -> ParseResult[Replace] | None:
    """Parse numbered placeholder: $ followed by digits.

    Placeholders are 1-based in the source and 0-based in the AST.
    "$0" has no 0-based index and does not match.

    Examples:
        $1 -> Replace(0)
        $12 -> Replace(11)
    """
    result = _replacement(cursor, context)
    if result is None:
        return None
    number = int(_second(result.value))
    if number < 1:
        return None
    return ParseResult(Replace(number - 1), result.cursor)


def parse_template_name(cursor: Cursor, context: ParseContext) -> ParseResult[str] | None:
    """Parse template name (see TEMPLATE_NAME_PATTERN).

    Examples:
        PLURAL -> "PLURAL"
        int:foo -> "int" (colon ends the name)
    """
    return _template_name(cursor, context)


# =============================================================================
# Templates
# =============================================================================


def parse_template_param(cursor: Cursor, context: ParseContext) -> ParseResult[Node] | None:
    """Parse template parameter: "|" paramExpr*

    Returns:
        The single expression when there is exactly one, a Concat when
        there are several, "" when the parameter is empty.

    Examples:
        |apples -> "apples"
        |$1 items -> Concat((Replace(0), " items"))
        | -> ""
    """
    result = _TEMPLATE_PARAM(cursor, context)
    if result is None:
        return None
    expressions = cast(list[Node], result.value[1])
    if len(expressions) > 1:
        return ParseResult(Concat(tuple(expressions)), result.cursor)
    if expressions:
        return ParseResult(expressions[0], result.cursor)
    return ParseResult("", result.cursor)


def _parse_contents_with_argument(
    cursor: Cursor, context: ParseContext
) -> ParseResult[TemplateCall] | None:
    """name ":" (replacement | paramExpr) param*"""
    result = _CONTENTS_WITH_ARGUMENT(cursor, context)
    if result is None:
        return None
    name, _, first, params = result.value
    args = (cast(Node, first), *cast(list[Node], params))
    return ParseResult(TemplateCall(cast(str, name), args), result.cursor)


def _parse_contents_without_argument(
    cursor: Cursor, context: ParseContext
) -> ParseResult[TemplateCall] | None:
    """name param*"""
    result = _CONTENTS_WITHOUT_ARGUMENT(cursor, context)
    if result is None:
        return None
    name, params = result.value
    return ParseResult(
        TemplateCall(cast(str, name), tuple(cast(list[Node], params))), result.cursor
    )


def parse_template_contents(
    cursor: Cursor, context: ParseContext
) -> ParseResult[TemplateCall] | None:
    """Parse what sits between "{{" and "}}".

    Ordered choice:
        1. NAME:$N|...  or  NAME:expression|...  (replacement tried first)
        2. NAME|...     (no colon-qualified first argument)

    Examples:
        PLURAL:$1|one|many -> TemplateCall("PLURAL", (Replace(0), "one", "many"))
        GRAMMAR:genitive|x -> TemplateCall("GRAMMAR", ("genitive", "x"))
        SITENAME -> TemplateCall("SITENAME", ())
    """
    return _TEMPLATE_CONTENTS(cursor, context)


def _parse_template_call(
    cursor: Cursor, context: ParseContext
) -> ParseResult[TemplateCall] | None:
    result = _TEMPLATE_CALL(cursor, context)
    if result is None:
        return None
    return ParseResult(cast(TemplateCall, result.value[1]), result.cursor)


def parse_template(cursor: Cursor, context: ParseContext) -> ParseResult[TemplateCall] | None:
    """Parse template call: "{{" templateContents "}}"

    Atomic: if any piece fails nothing is consumed, and the caller goes on
    to treat "{{" as text. Fails once the nesting limit is reached.

    Example:
        {{GRAMMAR:genitive|{{SITENAME}}}}
            -> TemplateCall("GRAMMAR", ("genitive", TemplateCall("SITENAME", ())))
    """
    return _TEMPLATE(cursor, context)


# =============================================================================
# Expressions
# =============================================================================


def parse_expression(cursor: Cursor, context: ParseContext) -> ParseResult[Node] | None:
    """Parse top-level expression: template | replacement | literal | stray"""
    return _EXPRESSION(cursor, context)


def parse_param_expression(cursor: Cursor, context: ParseContext) -> ParseResult[Node] | None:
    """Parse expression inside a parameter: template | replacement | literalNoBar"""
    return _PARAM_EXPRESSION(cursor, context)


def _merge_literals(nodes: list[Node]) -> tuple[Node, ...]:
    """Join runs of adjacent str nodes into one str."""
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, str) and merged and isinstance(merged[-1], str):
            merged[-1] += node
        else:
            merged.append(node)
    return tuple(merged)


def parse_start(cursor: Cursor, context: ParseContext) -> ParseResult[Concat] | None:
    """Parse a whole message: expression*

    Adjacent literal pieces (text, escapes, stray characters) are merged.

    Returns:
        ParseResult with a Concat root, for empty input too.

    Example:
        "Hello $1" -> Concat(("Hello ", Replace(0)))
    """
    result = _START(cursor, context)
    if result is None:
        return None
    return ParseResult(Concat(_merge_literals(result.value)), result.cursor)


# =============================================================================
# Grammar table
# =============================================================================
#
# Recursive rules are wired here, after every rule function exists.

_PARAM_EXPRESSION: Parser[Node] = choice(
    parse_template, parse_replacement, parse_literal_without_bar
)
_TEMPLATE_PARAM = sequence(_pipe, n_or_more(0, parse_param_expression))
_CONTENTS_WITH_ARGUMENT = sequence(
    _template_name,
    _colon,
    choice(parse_replacement, parse_param_expression),
    n_or_more(0, parse_template_param),
)
_CONTENTS_WITHOUT_ARGUMENT = sequence(_template_name, n_or_more(0, parse_template_param))
_TEMPLATE_CONTENTS: Parser[TemplateCall] = choice(
    _parse_contents_with_argument, _parse_contents_without_argument
)
_TEMPLATE_CALL = sequence(_open_template, parse_template_contents, _close_template)
_TEMPLATE: Parser[TemplateCall] = memoize("template", nested(_parse_template_call))
_EXPRESSION: Parser[Node] = choice(
    parse_template, parse_replacement, parse_literal, _any_character
)
_START = n_or_more(0, parse_expression)
