"""Message emitter - renders a message AST to text.

Walks the AST, substitutes replacement values and hands template calls to
the functions in a TemplateRegistry.

Thread Safety:
    Per-render state (error list, depth guard) is created by each emit()
    call, so one emitter can render concurrently from several threads.
"""

import logging
from collections.abc import Sequence
from decimal import Decimal

from msgtemplate.constants import FALLBACK_INVALID, FALLBACK_MISSING_REPLACEMENT, MAX_DEPTH
from msgtemplate.core.depth_guard import DepthGuard
from msgtemplate.diagnostics import (
    ErrorTemplate,
    MessageError,
    MessageResolutionError,
    TemplateNotFoundError,
)
from msgtemplate.runtime.templates import TemplateRegistry
from msgtemplate.syntax.ast import Concat, Node, Replace, TemplateCall
from msgtemplate.syntax.serializer import SerializationValidationError, serialize

__all__ = ["MessageEmitter", "MessageValue", "format_value"]

logger = logging.getLogger(__name__)

# Values accepted as replacements for $1, $2, ...
type MessageValue = str | int | float | Decimal


def format_value(value: MessageValue) -> str:
    """Render a replacement value as text.

    Shared by the fast path and the emitter so both render values the same.
    """
    return value if isinstance(value, str) else str(value)


def replacement_text(index: int, replacements: Sequence[MessageValue]) -> str:
    """Text for placeholder ``index`` (0-based); the placeholder itself if missing."""
    if 0 <= index < len(replacements):
        return format_value(replacements[index])
    return FALLBACK_MISSING_REPLACEMENT.format(number=index + 1)


class MessageEmitter:
    """Renders message ASTs to strings.

    Error handling:
    - Collects errors instead of raising them
    - Returns (result, errors) tuples
    - Unknown or failing templates are rendered back as their source text

    Attributes:
        templates: Registry of template functions
        language: Language table passed to every template function
        max_depth: Maximum AST nesting depth
    """

    __slots__ = ("language", "max_depth", "templates")

    def __init__(
        self,
        templates: TemplateRegistry | None = None,
        *,
        language: object = None,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialize emitter.

        Args:
            templates: Template registry (default: empty registry)
            language: Language table for template functions (keyword-only)
            max_depth: Maximum AST nesting depth (keyword-only)
        """
        self.templates = templates if templates is not None else TemplateRegistry()
        self.language = language
        self.max_depth = max_depth

    def emit(
        self, node: Node, replacements: Sequence[MessageValue] = ()
    ) -> tuple[str, tuple[MessageError, ...]]:
        """Render an AST with replacement values.

        Args:
            node: AST node, usually the Concat root from the parser
            replacements: Values for $1, $2, ... (index 0 is $1)

        Returns:
            Tuple of (text, errors)
            - text: Best-effort output
            - errors: Errors encountered (immutable)

        Example:
            >>> emitter = MessageEmitter()
            >>> emitter.emit(Concat(("Hello ", Replace(0))), ["World"])
            ('Hello World', ())
        """
        errors: list[MessageError] = []
        guard = DepthGuard(max_depth=self.max_depth)
        try:
            text = self._emit(node, replacements, errors, guard)
        except MessageResolutionError as e:
            errors.append(e)
            text = FALLBACK_INVALID
        return (text, tuple(errors))

    def _emit(
        self,
        node: Node,
        replacements: Sequence[MessageValue],
        errors: list[MessageError],
        guard: DepthGuard,
    ) -> str:
        match node:
            case str():
                return node
            case Replace(index=index):
                return replacement_text(index, replacements)
            case Concat(children=children):
                return self._emit_sequence(children, replacements, errors, guard)
            case TemplateCall():
                with guard:
                    return self._emit_template(node, replacements, errors, guard)
            case _:
                raise MessageResolutionError(ErrorTemplate.unknown_node(type(node).__name__))

    def _emit_sequence(
        self,
        children: tuple[Node, ...],
        replacements: Sequence[MessageValue],
        errors: list[MessageError],
        guard: DepthGuard,
    ) -> str:
        # A template call is one level; its arguments sit on that level.
        # Concat directly inside Concat only comes from hand-built ASTs and
        # counts as a level of its own.
        parts: list[str] = []
        for child in children:
            if isinstance(child, Concat):
                with guard:
                    parts.append(self._emit(child, replacements, errors, guard))
            else:
                parts.append(self._emit(child, replacements, errors, guard))
        return "".join(parts)

    def _emit_template(
        self,
        call: TemplateCall,
        replacements: Sequence[MessageValue],
        errors: list[MessageError],
        guard: DepthGuard,
    ) -> str:
        """Render arguments, then hand them to the template function."""
        args = [self._emit(arg, replacements, errors, guard) for arg in call.args]
        try:
            return self.templates.call(call.name, args, self.language)
        except TemplateNotFoundError as e:
            logger.debug("Unknown template '%s' rendered as source text", call.name)
            errors.append(e)
        except MessageResolutionError as e:
            errors.append(e)
        return self._fallback(call)

    def _fallback(self, call: TemplateCall) -> str:
        """Source text of a template call that could not be rendered."""
        try:
            return serialize(call, max_depth=self.max_depth)
        except (SerializationValidationError, MessageResolutionError):
            return FALLBACK_INVALID
