"""Listing stored queries and rebuilding their SQL from query definition rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

_ATTR_PREDICATE = 3
_ATTR_TABLE = 5
_ATTR_COLUMN = 6
_ATTR_JOIN = 7
_ATTR_WHERE = 8
_ATTR_SORTING = 11

_FLAG_TOP = 0x30
_FLAG_PERCENT = 0x20
_FLAG_DISTINCTROW = 0x8
_FLAG_DISTINCT = 0x2


@dataclass
class QueryRow:
    """One row of the query definition table that belongs to a single query."""

    attribute: int
    expression: str = ""
    flag: int = 0
    name1: str = ""
    name2: str = ""
    order: str = ""


def build_query_sql(rows: Iterable[QueryRow]) -> str:
    """Reassemble a SELECT statement from the definition rows of one query."""
    predicate = ""
    tables: List[str] = []
    columns: List[str] = []
    where = ""
    sorting = ""

    for row in rows:
        if row.attribute == _ATTR_PREDICATE:
            if row.flag & _FLAG_TOP:
                predicate = " TOP " + row.name1
                if row.flag & _FLAG_PERCENT:
                    predicate += " PERCENT"
            elif row.flag & _FLAG_DISTINCTROW:
                predicate = " DISTINCTROW"
            elif row.flag & _FLAG_DISTINCT:
                predicate = " DISTINCT"
        elif row.attribute == _ATTR_TABLE:
            tables.append(f"[{row.name1}]")
        elif row.attribute == _ATTR_COLUMN:
            columns.append(row.expression)
        elif row.attribute == _ATTR_JOIN:
            # Join clauses are not reconstructed.
            continue
        elif row.attribute == _ATTR_WHERE:
            where = row.expression
        elif row.attribute == _ATTR_SORTING:
            if not sorting:
                sorting = "ORDER BY " + row.expression
                if row.name1 == "D":
                    sorting += " DESCENDING"

    column_text = ",".join(columns)
    table_text = ",".join(tables)
    if not where:
        return f"SELECT{predicate} {column_text} FROM {table_text} {sorting}"
    return f"SELECT{predicate} {column_text} FROM {table_text} WHERE {where} {sorting}"


def list_queries(
    names: Iterable[str], line_break: bool = False, delimiter: Optional[str] = None
) -> str:
    """List query names, one per line or separated by ``delimiter`` (a space by default)."""
    parts = []
    for name in names:
        if line_break:
            parts.append(f"{name}\n")
        elif delimiter is not None:
            parts.append(f"{name}{delimiter}")
        else:
            parts.append(f"{name} ")
    if not line_break:
        parts.append("\n")
    return "".join(parts)