"""Message AST (Abstract Syntax Tree) node definitions.

A parsed message is a Concat of nodes; literal text is a bare ``str``.
Includes type guards as static methods and a conversion to the tagged
nested-list tree form used by JavaScript emitters.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

__all__ = [
    "Concat",
    "Node",
    "Replace",
    "TemplateCall",
    "as_tree",
]

# Tags of the nested-list tree form
CONCAT_TAG: str = "CONCAT"
REPLACE_TAG: str = "REPLACE"


@dataclass(frozen=True, slots=True)
class Concat:
    """Adjacent nodes rendered in order and joined.

    The root of every parse is a Concat, even for empty input.

    Example:
        "Hello $1" -> Concat(("Hello ", Replace(0)))
    """

    children: tuple["Node", ...] = ()

    @staticmethod
    def guard(node: object) -> TypeIs["Concat"]:
        """Type guard for Concat."""
        return isinstance(node, Concat)


@dataclass(frozen=True, slots=True)
class Replace:
    """Numbered placeholder.

    Attributes:
        index: 0-based index into the replacement values ($1 -> 0)
    """

    index: int

    def __post_init__(self) -> None:
        """Validate index invariant."""
        if self.index < 0:
            msg = f"Replace index must be >= 0, got {self.index}"
            raise ValueError(msg)

    @property
    def number(self) -> int:
        """1-based placeholder number as written in the source."""
        return self.index + 1

    @staticmethod
    def guard(node: object) -> TypeIs["Replace"]:
        """Type guard for Replace."""
        return isinstance(node, Replace)


@dataclass(frozen=True, slots=True)
class TemplateCall:
    """Template call: {{NAME:arg|arg|...}}

    Examples:
        {{PLURAL:$1|apple|apples}}
            -> TemplateCall("PLURAL", (Replace(0), "apple", "apples"))
        {{SITENAME}} -> TemplateCall("SITENAME", ())
    """

    name: str
    args: tuple["Node", ...] = ()

    @staticmethod
    def guard(node: object) -> TypeIs["TemplateCall"]:
        """Type guard for TemplateCall."""
        return isinstance(node, TemplateCall)


type Node = str | Concat | Replace | TemplateCall
"""Any AST node. Literal text is a plain str."""


type TreeNode = str | int | list["TreeNode"]


def as_tree(node: Node) -> TreeNode:
    """Convert a node to the tagged nested-list tree form.

    Example:
        >>> as_tree(Concat((TemplateCall("PLURAL", (Replace(0), "a", "b")),)))
        ['CONCAT', ['PLURAL', ['REPLACE', 0], 'a', 'b']]
    """
    match node:
        case str():
            return node
        case Concat(children=children):
            return [CONCAT_TAG, *(as_tree(child) for child in children)]
        case Replace(index=index):
            return [REPLACE_TAG, index]
        case TemplateCall(name=name, args=args):
            return [name, *(as_tree(arg) for arg in args)]
        case _:
            msg = f"Unknown AST node type: {type(node).__name__}"
            raise TypeError(msg)
