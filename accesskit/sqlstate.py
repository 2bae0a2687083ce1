"""State of one SQL statement while it is parsed and executed."""

from __future__ import annotations

import locale
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterable, List, Optional

from accesskit.sarg import Op, SargNode, ValueType

_JET_EPOCH = datetime(1899, 12, 30)
_UNIX_EPOCH = datetime(1970, 1, 1)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_DATE_DIRECTIVES = frozenset("dmYyjbBhaAeDFxcUWGVuwC")


class SqlError(Exception):
    """Raised when a statement cannot be built or evaluated."""


@dataclass
class SqlColumn:
    """A column named in the select list."""

    name: str
    disp_size: int = 0


@dataclass
class SqlTable:
    """A table named in the FROM clause."""

    name: str
    alias: Optional[str] = None


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _like(value: str, pattern: str, ignore_case: bool = False) -> bool:
    parts = []
    for ch in pattern:
        if ch == "%":
            parts.append(".*")
        elif ch == "_":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    flags = re.DOTALL | (re.IGNORECASE if ignore_case else 0)
    return re.fullmatch("".join(parts), value, flags) is not None


def _jet_date(moment: datetime) -> float:
    return (moment - _JET_EPOCH).total_seconds() / 86400.0


def _unquote(text: str) -> Optional[str]:
    if len(text) >= 2 and text[0] == "'" and text[-1] == "'":
        return text[1:-1]
    return None


def _has_date_directive(fmt: str) -> bool:
    chars = iter(fmt)
    for ch in chars:
        if ch == "%":
            directive = next(chars, "")
            if directive in _DATE_DIRECTIVES:
                return True
    return False


class SqlQuery:
    """Columns, tables, search arguments and limits of one statement."""

    def __init__(self) -> None:
        self.columns: List[SqlColumn] = []
        self.tables: List[SqlTable] = []
        self.bound_values: List[Any] = []
        self.all_columns = False
        self.sel_count = False
        self.sarg_tree: Optional[SargNode] = None
        self.sarg_stack: List[SargNode] = []
        self.max_rows = -1
        self.limit = -1
        self.limit_percent = False
        self.row_count = 0

    @property
    def num_columns(self) -> int:
        return len(self.columns)

    @property
    def num_tables(self) -> int:
        return len(self.tables)

    def _fail(self, message: str) -> SqlError:
        self.reset()
        return SqlError(message)

    def _push(self, node: SargNode) -> None:
        self.sarg_stack.append(node)
        # The tree is built bottom-up, so the last node pushed is the root.
        self.sarg_tree = node

    def _pop(self) -> Optional[SargNode]:
        return self.sarg_stack.pop() if self.sarg_stack else None

    def add_column(self, name: str) -> SqlColumn:
        """Append a column to the select list."""
        column = SqlColumn(name)
        self.columns.append(column)
        return column

    def add_table(self, name: str) -> SqlTable:
        """Append a table to the FROM list."""
        table = SqlTable(name)
        self.tables.append(table)
        return table

    def select_all_columns(self) -> None:
        """Mark the statement as ``SELECT *``."""
        self.all_columns = True

    def select_count(self) -> None:
        """Mark the statement as ``SELECT COUNT(*)``."""
        self.sel_count = True

    def add_sarg(self, col_name: str, op: Op, constant: Optional[str]) -> SargNode:
        """Push a comparison of a column with a literal."""
        node = SargNode(op=op, col_name=col_name)
        if constant is not None:
            if constant.startswith("'"):
                node.value = constant[1:-1]
                node.val_type = ValueType.TEXT
            elif "." in constant:
                node.value = _atof(constant)
                node.val_type = ValueType.DOUBLE
            else:
                node.value = _atoi(constant)
                node.val_type = ValueType.INT
        self._push(node)
        return node

    def add_not(self) -> SargNode:
        """Negate the node on top of the stack."""
        operand = self._pop()
        if operand is None:
            raise self._fail("parse error near 'NOT'")
        node = SargNode(op=Op.NOT, left=operand)
        self._push(node)
        return node

    def _add_binary(self, op: Op, word: str) -> SargNode:
        left = self._pop()
        right = self._pop()
        if left is None or right is None:
            raise self._fail(f"parse error near '{word}'")
        node = SargNode(op=op, left=left, right=right)
        self._push(node)
        return node

    def add_or(self) -> SargNode:
        """Combine the two nodes on top of the stack with OR."""
        return self._add_binary(Op.OR, "OR")

    def add_and(self) -> SargNode:
        """Combine the two nodes on top of the stack with AND."""
        return self._add_binary(Op.AND, "AND")

    def eval_expr(self, const1: str, op: Op, const2: str) -> bool:
        """Compare two literals and push the constant result as a node."""
        quoted1 = const1.startswith("'")
        quoted2 = const2.startswith("'")
        result: Optional[bool]
        if quoted1 and quoted2:
            order = locale.strcoll(const1, const2)
            result = {
                Op.EQUAL: order == 0,
                Op.GT: order > 0,
                Op.GTEQ: order >= 0,
                Op.LT: order < 0,
                Op.LTEQ: order <= 0,
                Op.NEQ: order != 0,
            }.get(op)
            if op is Op.LIKE:
                result = _like(const1[1:-1], const2[1:-1])
            elif op is Op.ILIKE:
                result = _like(const1[1:-1], const2[1:-1], ignore_case=True)
        elif not quoted1 and not quoted2:
            val1, val2 = _atoi(const1), _atoi(const2)
            result = {
                Op.EQUAL: val1 == val2,
                Op.GT: val1 > val2,
                Op.GTEQ: val1 >= val2,
                Op.LT: val1 < val2,
                Op.LTEQ: val1 <= val2,
                Op.NEQ: val1 != val2,
            }.get(op)
        else:
            raise self._fail("Comparison of strings and numbers not allowed.")
        if result is None:
            raise self._fail("Illegal operator used for comparison of literals.")
        self._push(SargNode(op=Op.EQUAL, value=1 if result else 0, val_type=ValueType.INT))
        return result

    def add_limit(self, limit: str, percent: bool) -> int:
        """Set a row limit, either a count or a percentage of the table."""
        self.limit = _atoi(limit)
        self.limit_percent = bool(percent)
        if self.limit_percent and not 0 <= self.limit <= 100:
            raise SqlError(f"Percentage limit {self.limit} must be between 0 and 100")
        return self.limit

    def resolve_limit(self, num_rows: int) -> int:
        """Turn a percentage limit into a row count for a table of ``num_rows``."""
        if self.limit != -1 and self.limit_percent:
            self.limit = int(num_rows / 100 * self.limit)
            self.limit_percent = False
        return self.limit

    def accept_row(self) -> bool:
        """Count a fetched row; False once the limit has been reached."""
        if self.limit >= 0 and self.row_count + 1 > self.limit:
            return False
        self.row_count += 1
        return True

    def resolve_sarg_columns(self, columns: Iterable[Any]) -> None:
        """Attach table columns to the relational nodes that name them.

        Each column needs a ``name``; one with a true ``is_datetime``
        attribute turns an integer literal (a Unix timestamp) into a date.
        """
        by_name = {}
        for column in columns:
            by_name.setdefault(column.name.lower(), column)

        def resolve(node: SargNode) -> bool:
            if not node.is_relational() or node.col_name is None:
                return False
            column = by_name.get(node.col_name.lower())
            if column is None:
                return False
            node.column = column
            if getattr(column, "is_datetime", False) and node.val_type is ValueType.INT:
                moment = _UNIX_EPOCH + timedelta(seconds=node.value)
                node.value = _jet_date(moment)
                node.val_type = ValueType.DOUBLE
            return False

        if self.sarg_tree is not None:
            self.sarg_tree.walk(resolve)

    def strptime_value(self, data: str, fmt: str) -> str:
        """Parse a quoted date with a quoted format into a date number string."""
        text = _unquote(data)
        if text is None:
            raise self._fail("First parameter of strptime (data) must be a string.")
        pattern = _unquote(fmt)
        if pattern is None:
            raise self._fail("Second parameter of strptime (format) must be a string.")
        try:
            moment = datetime.strptime(text, pattern)
        except ValueError:
            raise self._fail(f"strptime('{text}','{pattern}') failed.") from None
        if not _has_date_directive(pattern):
            moment = datetime.combine(datetime(1899, 12, 31).date(), moment.time())
        date = _jet_date(moment)
        # A bare time lands on day one; it should carry no day part.
        if 1 < date < 2:
            date -= 1
        return "%f" % date

    def reset(self) -> None:
        """Forget everything about the current statement."""
        self.columns = []
        self.tables = []
        self.bound_values = []
        self.sarg_tree = None
        self.sarg_stack = []
        self.all_columns = False
        self.sel_count = False
        self.max_rows = -1
        self.row_count = 0
        self.limit = -1

    def dump(self) -> str:
        """List the selected columns and tables, one per line."""
        lines = [f"column = {c.name}\n" for c in self.columns]
        lines += [f"table = {t.name}\n" for t in self.tables]
        return "".join(lines)