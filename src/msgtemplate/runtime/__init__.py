"""Message rendering runtime.

Exports:
    MessageParser: Fast-path / grammar dispatch for one locale
    MessageEmitter: Renders an AST with replacement values
    TemplateRegistry: Template name -> template function mapping
    MessageValue: Type alias for replacement values

Python 3.13+.
"""

from .emitter import MessageEmitter, MessageValue, format_value
from .message_parser import MessageParser, simple_parse
from .templates import TemplateFunction, TemplateRegistry

__all__ = [
    "MessageEmitter",
    "MessageParser",
    "MessageValue",
    "TemplateFunction",
    "TemplateRegistry",
    "format_value",
    "simple_parse",
]
