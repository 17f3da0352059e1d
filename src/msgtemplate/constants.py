"""Shared constants for msgtemplate.

Centralized configuration constants used by the syntax and runtime
packages. Placing them here avoids circular imports and gives one
source of truth for limits and fallbacks.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Languages
    "DEFAULT_LANGUAGE",
    # Syntax
    "TEMPLATE_OPEN",
    "TEMPLATE_CLOSE",
    # Fallback strings
    "FALLBACK_INVALID",
    "FALLBACK_MISSING_REPLACEMENT",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: parser (template nesting), emitter (AST walk).
# Legitimate messages nest templates two or three levels deep at most.
MAX_DEPTH: int = 32

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum message size in characters (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# LANGUAGES
# ============================================================================

# Key of the language table used when no locale-specific table matches.
DEFAULT_LANGUAGE: str = "default"

# ============================================================================
# SYNTAX
# ============================================================================

TEMPLATE_OPEN: str = "{{"
TEMPLATE_CLOSE: str = "}}"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Rendered in place of a replacement whose value was not supplied.
# Format string - use .format(number=...) with the 1-based placeholder number.
FALLBACK_MISSING_REPLACEMENT: str = "${number}"

# Rendered in place of a node that could not be rendered or written back
# (nesting too deep, unsupported node type).
FALLBACK_INVALID: str = "{???}"
