"""Message exception hierarchy with structured diagnostics.

All exceptions can carry a Diagnostic object for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class MessageError(Exception):
    """Base exception for all message errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MessageError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class MessageSyntaxError(MessageError):
    """Message template could not be parsed.

    The grammar itself never raises; this is reserved for broken parser
    invariants (input left unconsumed). Callers fall back to the original
    message text.
    """


class MessageResolutionError(MessageError):
    """Runtime error while rendering an AST.

    Examples:
    - Template function raised on its arguments
    - AST nested beyond the depth limit

    Fallback: the emitter renders the failing node as source text.
    """


class TemplateNotFoundError(MessageResolutionError):
    """Template call names no registered template function.

    Example:
        {{GENDER:$1|he|she}} with no GENDER template registered.

    Fallback: render the call back to its source text.
    """

    def __init__(self, message: str | Diagnostic, *, template_name: str = "") -> None:
        """Initialize TemplateNotFoundError.

        Args:
            message: Error message string OR Diagnostic object
            template_name: Name of the unknown template
        """
        super().__init__(message)
        self.template_name = template_name


class TemplateFunctionError(MessageResolutionError):
    """Registered template function failed on its arguments."""
