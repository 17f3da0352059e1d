"""Serialize a message AST back to template syntax.

Converts AST nodes to message source text. Useful for:
- Rendering unknown template calls verbatim
- Code generators and message extraction tools
- Property-based testing (roundtrip: parse -> serialize -> parse)

Python 3.13+.
"""

import re

from msgtemplate.core.depth_guard import DepthGuard
from msgtemplate.syntax.ast import Concat, Node, Replace, TemplateCall
from msgtemplate.syntax.parser.rules import TEMPLATE_NAME_PATTERN

__all__ = ["SerializationValidationError", "serialize"]

_TEMPLATE_NAME = re.compile(TEMPLATE_NAME_PATTERN)

# Characters that are syntax in free text / inside template arguments
_TEXT_SPECIAL = re.compile(r"([{}\[\]$\\])")
_ARG_SPECIAL = re.compile(r"([{}\[\]$\\|])")


class SerializationValidationError(ValueError):
    """Raised when an AST cannot be written as valid template syntax.

    Common causes:
    - TemplateCall name empty or containing ":", "|", "{" or "}"
    - Malformed AST nodes from programmatic construction
    """


def serialize(node: Node, *, max_depth: int | None = None) -> str:
    """Serialize an AST node to message template source.

    Literal text is escaped so that parsing the output gives the node back
    (for ASTs the parser produces). A digit directly after a replacement
    is escaped too, so "$1" followed by "5" does not read as "$15".

    Args:
        node: AST node (usually the Concat root)
        max_depth: Maximum AST nesting depth (default: MAX_DEPTH)

    Returns:
        Message template text

    Raises:
        SerializationValidationError: If a template name is not serializable
        DepthLimitExceededError: If the AST nests deeper than max_depth

    Example:
        >>> serialize(Concat(("Price: ", Replace(0), " {", "}")))
        'Price: $1 \\\\{\\\\}'
    """
    guard = DepthGuard() if max_depth is None else DepthGuard(max_depth=max_depth)
    return _serialize(node, _TEXT_SPECIAL, guard)


def _serialize(node: Node, special: re.Pattern[str], guard: DepthGuard) -> str:
    match node:
        case str():
            return special.sub(r"\\\1", node)
        case Replace():
            return f"${node.number}"
        case Concat(children=children):
            return _serialize_sequence(children, special, guard)
        case TemplateCall():
            with guard:
                return _serialize_template(node, guard)
        case _:
            msg = f"Unknown AST node type: {type(node).__name__}"
            raise TypeError(msg)


def _serialize_sequence(
    children: tuple[Node, ...], special: re.Pattern[str], guard: DepthGuard
) -> str:
    parts: list[str] = []
    previous: Node | None = None
    for child in children:
        if isinstance(child, Concat):
            with guard:
                text = _serialize(child, special, guard)
        else:
            text = _serialize(child, special, guard)
        if isinstance(previous, Replace) and text[:1].isdigit():
            text = "\\" + text
        parts.append(text)
        previous = child
    return "".join(parts)


def _serialize_template(call: TemplateCall, guard: DepthGuard) -> str:
    if not _TEMPLATE_NAME.fullmatch(call.name):
        msg = f"Invalid template name: {call.name!r}"
        raise SerializationValidationError(msg)

    if not call.args:
        return f"{{{{{call.name}}}}}"

    first, *rest = call.args
    args = [_serialize_argument(arg, guard) for arg in rest]

    # "NAME:arg" takes exactly one expression after the colon; anything
    # else (empty text, several expressions) goes through "NAME|arg".
    if isinstance(first, (Replace, TemplateCall)) or (isinstance(first, str) and first):
        head = f"{call.name}:{_serialize_argument(first, guard)}"
    else:
        head = f"{call.name}|{_serialize_argument(first, guard)}"

    return "{{" + "|".join([head, *args]) + "}}"


def _serialize_argument(arg: Node, guard: DepthGuard) -> str:
    if isinstance(arg, Concat):
        return _serialize_sequence(arg.children, _ARG_SPECIAL, guard)
    return _serialize(arg, _ARG_SPECIAL, guard)
