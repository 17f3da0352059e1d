"""Hypothesis strategies for msgtemplate property-based testing.

- messages: message source text and AST strategies

Usage:
    from tests.strategies import message_sources, message_asts

Event-Emitting Strategies:
    message_chaos_source and unclosed_template_nesting call
    hypothesis.event() so runs report which shapes were generated.
"""

from .messages import (
    PLAIN_TEXT_CHARS,
    SPECIAL_CHARS,
    message_asts,
    message_chaos_source,
    message_sources,
    plain_texts,
    replacement_values,
    template_names,
    templateless_sources,
    unclosed_template_nesting,
)

__all__ = [
    "PLAIN_TEXT_CHARS",
    "SPECIAL_CHARS",
    "message_asts",
    "message_chaos_source",
    "message_sources",
    "plain_texts",
    "replacement_values",
    "template_names",
    "templateless_sources",
    "unclosed_template_nesting",
]
