"""Diagnostic system for message errors.

Provides structured error diagnostics with codes, positions and hints.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    MessageError,
    MessageResolutionError,
    MessageSyntaxError,
    TemplateFunctionError,
    TemplateNotFoundError,
)
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "MessageError",
    "MessageResolutionError",
    "MessageSyntaxError",
    "TemplateFunctionError",
    "TemplateNotFoundError",
]
