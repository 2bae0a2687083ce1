"""Search-argument trees built while parsing a WHERE clause."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Union


class Op(enum.Enum):
    """Operators that a search-argument node can carry."""

    OR = "or"
    AND = "and"
    NOT = "not"
    EQUAL = "="
    GT = ">"
    LT = "<"
    GTEQ = ">="
    LTEQ = "<="
    LIKE = "like"
    ILIKE = "ilike"
    NEQ = "<>"
    ISNULL = "is null"
    NOTNULL = "is not null"

    @property
    def is_relational(self) -> bool:
        """True for comparison operators, False for the logical ones."""
        return self not in _LOGICAL_OPS


_LOGICAL_OPS = frozenset({Op.OR, Op.AND, Op.NOT})


class ValueType(enum.Enum):
    """The kind of literal stored in a node."""

    TEXT = "text"
    INT = "int"
    DOUBLE = "double"


Value = Union[int, float, str, None]


@dataclass(eq=False)
class SargNode:
    """One node of a search-argument tree.

    Logical nodes (``AND``, ``OR``, ``NOT``) use ``left``/``right``;
    relational nodes hold a column name, a literal and its type.
    ``column`` is filled in once the column name is resolved against a table.
    """

    op: Op
    left: Optional["SargNode"] = None
    right: Optional["SargNode"] = None
    value: Value = None
    val_type: Optional[ValueType] = None
    col_name: Optional[str] = None
    column: Any = None

    def is_relational(self) -> bool:
        """Whether this node compares a column with a value."""
        return self.op.is_relational

    def children(self) -> Iterator["SargNode"]:
        """Yield the left and right children that are present."""
        if self.left is not None:
            yield self.left
        if self.right is not None:
            yield self.right

    def walk(self, func: Callable[["SargNode"], Any]) -> bool:
        """Call ``func`` on this node and then on its subtrees, depth first.

        A truthy result from ``func`` stops the walk; the method returns
        True if the walk was stopped that way and False otherwise.
        """
        if func(self):
            return True
        return any(child.walk(func) for child in self.children())


def _format_value(value: Value) -> str:
    if value is None:
        return "0"
    if isinstance(value, float):
        return "%g" % value
    return str(value)


def _node_label(node: SargNode) -> str:
    if node.op in _LOGICAL_OPS:
        return f" {node.op.value}"
    if node.op in (Op.ISNULL, Op.NOTNULL):
        return f" {node.op.value}"
    return f" {node.op.value} {_format_value(node.value)}"


def _format_lines(node: SargNode, level: int) -> Iterator[str]:
    depth = level + 1
    prefix = "root  " if level == 0 else ""
    yield f"{prefix}{'--->' * depth}{_node_label(node)}\n"
    if node.left is not None:
        yield "left  "
        yield from _format_lines(node.left, depth)
    if node.right is not None:
        yield "right "
        yield from _format_lines(node.right, depth)


def format_tree(node: SargNode) -> str:
    """Render a tree as indented text, one node per line."""
    return "".join(_format_lines(node, 0))