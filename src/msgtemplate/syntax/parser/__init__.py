"""Message template parser module.

Module Organization:
- core.py: MessageParserV1 class and parse() entry point
- primitives.py: Parser combinators (string, regex, sequence, choice,
  repetition, transform) and the per-parse ParseContext
- rules.py: Grammar rules (literals, escapes, replacements, templates)

Public API:
    MessageParserV1: Main parser class
    ParseContext: Parse context for depth tracking (advanced usage)
"""

from msgtemplate.syntax.parser.core import MessageParserV1
from msgtemplate.syntax.parser.primitives import ParseContext

__all__ = ["MessageParserV1", "ParseContext"]
