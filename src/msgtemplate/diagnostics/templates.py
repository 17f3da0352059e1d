"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and consistently formatted.
    """

    @staticmethod
    def template_not_found(template_name: str) -> Diagnostic:
        """Template call names no registered template function.

        Args:
            template_name: The template name as written in the message

        Returns:
            Diagnostic for TEMPLATE_NOT_FOUND
        """
        msg = f"Template '{template_name}' not found"
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_NOT_FOUND,
            message=msg,
            template_name=template_name,
            hint="Register a template function for this name",
        )

    @staticmethod
    def template_failed(template_name: str, error_msg: str) -> Diagnostic:
        """Template function raised while rendering.

        Args:
            template_name: Name of the failing template
            error_msg: Error raised by the template function

        Returns:
            Diagnostic for TEMPLATE_FAILED
        """
        msg = f"Template '{template_name}' failed: {error_msg}"
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_FAILED,
            message=msg,
            template_name=template_name,
            hint="Check the argument count and values the template function expects",
        )

    @staticmethod
    def unknown_node(node_type: str) -> Diagnostic:
        """AST node of an unsupported type.

        Args:
            node_type: The node type name

        Returns:
            Diagnostic for UNKNOWN_NODE
        """
        msg = f"Unknown AST node type: {node_type}"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_NODE,
            message=msg,
            hint="Nodes must be str, Concat, Replace or TemplateCall",
        )

    @staticmethod
    def max_depth_exceeded(max_depth: int) -> Diagnostic:
        """AST nesting exceeded the depth limit.

        Args:
            max_depth: The configured limit

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Reduce template nesting or raise max_nesting_depth",
        )

    @staticmethod
    def parse_incomplete(
        position: int, length: int, line: int | None = None, column: int | None = None
    ) -> Diagnostic:
        """Parse stopped before the end of the message.

        Args:
            position: Offset where parsing stopped
            length: Total message length
            line: 1-based line of the stop position
            column: 1-based column of the stop position

        Returns:
            Diagnostic for PARSE_INCOMPLETE
        """
        msg = f"Parse stopped at position {position} of {length}"
        return Diagnostic(
            code=DiagnosticCode.PARSE_INCOMPLETE,
            message=msg,
            position=position,
            line=line,
            column=column,
            hint="The message is returned unchanged",
        )

    @staticmethod
    def source_too_large(size: int, max_size: int) -> Diagnostic:
        """Message exceeds the configured size limit.

        Args:
            size: Message length in characters
            max_size: Configured limit

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        msg = f"Message size ({size:,} characters) exceeds maximum ({max_size:,} characters)"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            hint="Configure max_source_size to increase the limit",
        )
