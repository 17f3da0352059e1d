"""MessageParser - render message templates with replacement values.

Entry point of the runtime. Decides per message between:
    - the fast path: no "{{" in the message, so a single regex pass
      substitutes $1, $2, ... and no AST is built
    - the grammar path: parse to an AST and render it with MessageEmitter

Python 3.13+. Indirect dependency: Babel (language table lookup via
locale_utils).
"""

import logging
import re
from collections.abc import Mapping, Sequence

from msgtemplate.constants import MAX_DEPTH, TEMPLATE_OPEN
from msgtemplate.diagnostics import MessageError, MessageSyntaxError
from msgtemplate.locale_utils import get_system_locale, resolve_language
from msgtemplate.runtime.emitter import MessageEmitter, MessageValue, replacement_text
from msgtemplate.runtime.templates import TemplateRegistry
from msgtemplate.syntax.ast import Concat
from msgtemplate.syntax.parser import MessageParserV1

__all__ = ["MessageParser", "simple_parse"]

logger = logging.getLogger(__name__)

# Numbered placeholder for the fast path. ASCII digits only, like the grammar.
_PLACEHOLDER = re.compile(r"\$([0-9]+)")


def simple_parse(message: str, replacements: Sequence[MessageValue] = ()) -> str:
    """Substitute $N placeholders without parsing templates.

    Each $N becomes the (N-1)-th replacement value. A placeholder with no
    matching value, $0 included, is left untouched.

    Example:
        >>> simple_parse("$1 has $2 new messages", ["Ana", 3])
        'Ana has 3 new messages'
        >>> simple_parse("$5", [])
        '$5'
    """

    def substitute(match: re.Match[str]) -> str:
        index = int(match.group(1)) - 1
        if 0 <= index < len(replacements):
            return replacement_text(index, replacements)
        return match.group(0)

    return _PLACEHOLDER.sub(substitute, message)


class MessageParser:
    """Renders message templates for one locale.

    The locale selects a language table from ``languages`` (fallback chain
    ``pt_BR`` -> ``pt`` -> ``default``); the table is handed to every
    template function through the emitter.

    Error handling:
        - Template and resolution errors are logged and the best-effort
          text is returned; with ``strict=True`` the first error is raised
        - A message the grammar cannot handle is returned unchanged

    Example:
        >>> parser = MessageParser("en")
        >>> parser.templates.register(
        ...     lambda args, language: args[1] if args[0] == "1" else args[2], name="PLURAL"
        ... )
        >>> parser.parse("{{PLURAL:$1|apple|apples}}", [3])
        'apples'
    """

    __slots__ = ("_emitter", "_languages", "_locale", "_parser", "_strict")

    def __init__(
        self,
        locale: str | None = None,
        *,
        languages: Mapping[str, object] | None = None,
        templates: TemplateRegistry | None = None,
        strict: bool = False,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize a message parser.

        Args:
            locale: Locale code (default: detected system locale)
            languages: Mapping of locale code -> language table for template
                      functions. Keys may be BCP-47 or POSIX, plus "default".
            templates: Template registry to use (copied; default: empty)
            strict: Raise the first rendering error instead of logging it
            max_source_size: Maximum message size in characters (default: 10 MB)
            max_nesting_depth: Maximum template nesting depth (default: 32)
        """
        self._locale = locale if locale is not None else get_system_locale()
        self._languages = dict(languages) if languages is not None else {}
        self._strict = strict
        self._parser = MessageParserV1(
            max_source_size=max_source_size,
            max_nesting_depth=max_nesting_depth,
        )
        self._emitter = MessageEmitter(
            templates.copy() if templates is not None else TemplateRegistry(),
            language=resolve_language(self._locale, self._languages) if self._languages else None,
            max_depth=max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH,
        )

        logger.info(
            "MessageParser initialized for locale: %s (templates=%d, strict=%s)",
            self._locale,
            len(self._emitter.templates),
            strict,
        )

    @property
    def locale(self) -> str:
        """Locale code this parser renders for (read-only)."""
        return self._locale

    @property
    def language(self) -> object:
        """Language table selected for the locale, or None."""
        return self._emitter.language

    @property
    def templates(self) -> TemplateRegistry:
        """Template registry used by this parser."""
        return self._emitter.templates

    @property
    def strict(self) -> bool:
        """Whether rendering errors are raised."""
        return self._strict

    def simple_parse(self, message: str, replacements: Sequence[MessageValue] = ()) -> str:
        """Fast path: substitute $N placeholders only. See simple_parse()."""
        return simple_parse(message, replacements)

    def ast(self, message: str) -> Concat:
        """Parse a message to its AST.

        Raises:
            ValueError: If message exceeds max_source_size
            MessageSyntaxError: If the grammar could not consume the message
        """
        return self._parser.parse(message)

    def format_message(
        self, message: str, replacements: Sequence[MessageValue] = ()
    ) -> tuple[str, tuple[MessageError, ...]]:
        """Render a message and collect errors.

        Args:
            message: Message template
            replacements: Values for $1, $2, ...

        Returns:
            Tuple of (text, errors). Errors never raise here.

        Raises:
            ValueError: If message exceeds max_source_size
        """
        if TEMPLATE_OPEN not in message:
            logger.debug("No template call; substituting placeholders only")
            return (simple_parse(message, replacements), ())

        logger.debug("Template call found; parsing with the grammar")
        try:
            root = self._parser.parse(message)
        except MessageSyntaxError as e:
            logger.warning("Message left unrendered: %s", e.diagnostic or e)
            return (message, (e,))
        return self._emitter.emit(root, replacements)

    def parse(self, message: str, replacements: Sequence[MessageValue] = ()) -> str:
        """Render a message with replacement values.

        Args:
            message: Message template
            replacements: Values for $1, $2, ... (index 0 is $1)

        Returns:
            Rendered text

        Raises:
            ValueError: If message exceeds max_source_size
            MessageError: First rendering error, in strict mode only

        Example:
            >>> MessageParser("en").parse("Hello $1", ["World"])
            'Hello World'
        """
        result, errors = self.format_message(message, replacements)

        if errors:
            logger.warning("Message rendering errors: %d error(s)", len(errors))
            for err in errors:
                logger.debug("  - %s: %s", type(err).__name__, err)
            if self._strict:
                raise errors[0]
        else:
            logger.debug("Rendered message: %s", result[:50])

        return result
