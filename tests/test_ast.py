"""Tests for AST node types and the tagged tree form."""

from __future__ import annotations

import pytest

from msgtemplate.syntax.ast import Concat, Replace, TemplateCall, as_tree


class TestNodes:
    """Test node construction and invariants."""

    def test_nodes_are_frozen(self) -> None:
        """Nodes cannot be modified after construction."""
        node = TemplateCall("PLURAL", (Replace(0),))

        with pytest.raises(AttributeError):
            node.name = "GENDER"  # type: ignore[misc]

    def test_negative_replace_index_rejected(self) -> None:
        """Replace index is never negative."""
        with pytest.raises(ValueError, match=">= 0"):
            Replace(-1)

    def test_replace_number_is_one_based(self) -> None:
        """number is the placeholder as written in source."""
        assert Replace(0).number == 1
        assert Replace(11).number == 12

    def test_defaults(self) -> None:
        """Concat and TemplateCall default to no children."""
        assert Concat().children == ()
        assert TemplateCall("SITENAME").args == ()

    def test_structural_equality(self) -> None:
        """Equal structure compares equal and hashes equal."""
        first = Concat(("a", Replace(1)))
        second = Concat(("a", Replace(1)))

        assert first == second
        assert hash(first) == hash(second)


class TestGuards:
    """Test static type guards."""

    def test_guards_match_own_type(self) -> None:
        """Each guard accepts only its node type."""
        nodes = [Concat(()), Replace(0), TemplateCall("X")]

        assert [Concat.guard(n) for n in nodes] == [True, False, False]
        assert [Replace.guard(n) for n in nodes] == [False, True, False]
        assert [TemplateCall.guard(n) for n in nodes] == [False, False, True]

    def test_guard_rejects_text(self) -> None:
        """Literal text is a plain str, not a node class."""
        assert not Concat.guard("text")


class TestAsTree:
    """Test conversion to the tagged nested-list form."""

    def test_plural(self) -> None:
        """Template call becomes [name, *args]."""
        node = Concat((TemplateCall("PLURAL", (Replace(0), "apple", "apples")),))

        assert as_tree(node) == ["CONCAT", ["PLURAL", ["REPLACE", 0], "apple", "apples"]]

    def test_nested_concat(self) -> None:
        """Parameter Concat nodes are tagged too."""
        node = TemplateCall("PLURAL", (Replace(0), Concat((Replace(0), " files"))))

        assert as_tree(node) == [
            "PLURAL",
            ["REPLACE", 0],
            ["CONCAT", ["REPLACE", 0], " files"],
        ]

    def test_text_is_itself(self) -> None:
        """A str is its own tree form."""
        assert as_tree("plain") == "plain"

    def test_empty_concat(self) -> None:
        """Empty Concat is just the tag."""
        assert as_tree(Concat(())) == ["CONCAT"]

    def test_unknown_node_type(self) -> None:
        """Non-node values are rejected."""
        with pytest.raises(TypeError, match="int"):
            as_tree(42)  # type: ignore[arg-type]
