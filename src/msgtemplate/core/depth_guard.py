"""Nesting limits shared by the parser, emitter and serializer.

The parser is recursive descent and the emitter and serializer walk the
AST recursively, so all three bound nesting explicitly instead of letting
an attacker-chosen message reach RecursionError. Hand-built ASTs are
bounded by the same guard as parsed ones.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from msgtemplate.constants import MAX_DEPTH
from msgtemplate.diagnostics import ErrorTemplate, MessageResolutionError

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)

# Python frames consumed by one level of template nesting in the parser:
# template -> memoize -> nested -> call -> sequence -> contents -> choice
# -> contents form -> sequence -> n_or_more -> param -> sequence -> n_or_more
# -> param expression -> choice, plus one spare.
FRAMES_PER_LEVEL: int = 16

_RESERVE_FRAMES: int = 100


class DepthLimitExceededError(MessageResolutionError):
    """An AST handed to the emitter or serializer nests past the limit."""


@dataclass(slots=True)
class DepthGuard:
    """Counts nesting levels; ``with guard:`` opens one.

    One guard belongs to one walk of one tree; the emitter and serializer
    create a fresh guard per call, so guards are never shared across threads.

        guard = DepthGuard(max_depth=8)
        with guard:
            ...  # one level deeper

    Attributes:
        max_depth: Levels allowed, lowered by depth_clamp() if the
            interpreter stack cannot hold that many
        current_depth: Levels currently open
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # Check first: a raising __enter__ gets no matching __exit__.
        if self.is_exceeded():
            raise DepthLimitExceededError(ErrorTemplate.max_depth_exceeded(self.max_depth))
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Same as current_depth."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """True when entering one more level would raise."""
        return self.current_depth >= self.max_depth


def depth_clamp(requested_depth: int, reserve_frames: int = _RESERVE_FRAMES) -> int:
    """Largest nesting depth up to ``requested_depth`` the stack can afford.

    A nesting level costs FRAMES_PER_LEVEL interpreter frames in the
    parser. ``reserve_frames`` are kept back for the caller's own stack.

    >>> depth_clamp(10)
    10
    """
    limit = sys.getrecursionlimit()
    affordable = (limit - reserve_frames) // FRAMES_PER_LEVEL
    if requested_depth <= affordable:
        return requested_depth
    logger.warning(
        "Clamping nesting depth %d to %d (recursion limit %d); "
        "raise sys.setrecursionlimit() to allow deeper messages",
        requested_depth,
        affordable,
        limit,
    )
    return affordable
