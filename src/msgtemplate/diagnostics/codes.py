"""Stable error codes and the Diagnostic record exceptions carry.

Python 3.13+.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Numeric codes; the thousands digit gives the stage that failed.

    2xxx codes come from rendering, 3xxx codes from parsing.
    """

    # Rendering
    TEMPLATE_NOT_FOUND = 2003
    TEMPLATE_FAILED = 2004
    UNKNOWN_NODE = 2005
    MAX_DEPTH_EXCEEDED = 2010

    # Parsing
    PARSE_INCOMPLETE = 3004
    SOURCE_TOO_LARGE = 3006


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One problem, described for humans and for tooling alike.

    Attributes:
        code: Unique error code
        message: One-line description
        position: Character offset in the message source (syntax errors only)
        line: 1-based line of position, when known
        column: 1-based column of position, when known
        hint: What the caller can do about it
        template_name: Template name involved in the error (resolution errors)
        severity: "error" or "warning"
    """

    code: DiagnosticCode
    message: str
    position: int | None = None
    line: int | None = None
    column: int | None = None
    hint: str | None = None
    template_name: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        return self.message

    def format_error(self) -> str:
        """Render as a multi-line report in rustc style:

            error[TEMPLATE_NOT_FOUND]: Template 'GENDER' not found
              = template: GENDER
              = help: Register a template function for this name
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape_control(self.message)}"]
        if self.position is not None:
            where = f"  --> position {self.position}"
            if self.line is not None and self.column is not None:
                where += f" (line {self.line}, column {self.column})"
            lines.append(where)
        if self.template_name is not None:
            lines.append(f"  = template: {_escape_control(self.template_name)}")
        if self.hint is not None:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)


def _escape_control(text: str) -> str:
    """Escape newlines and other control characters (log injection prevention)."""
    return "".join(
        ch.encode("unicode_escape").decode("ascii") if not ch.isprintable() else ch
        for ch in text
    )
