"""Generation of C sources describing tables and their rows."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple


class ColumnKind(enum.IntEnum):
    """Column data types, by their on-disk type code."""

    BOOL = 0x01
    BYTE = 0x02
    INT = 0x03
    LONGINT = 0x04
    MONEY = 0x05
    FLOAT = 0x06
    DOUBLE = 0x07
    DATETIME = 0x08
    BINARY = 0x09
    TEXT = 0x0A
    OLE = 0x0B
    MEMO = 0x0C
    REPID = 0x0F
    NUMERIC = 0x10
    COMPLEX = 0x12


@dataclass
class ColumnDef:
    """A column's name and type."""

    name: str
    kind: ColumnKind


@dataclass
class TableDef:
    """A user table and its columns."""

    name: str
    columns: List[ColumnDef] = field(default_factory=list)


class UnsupportedColumnError(Exception):
    """Raised when a column type has no C counterpart.

    ``sources`` holds the generated files anyway, as
    ``(types_h, dumptypes_h, dumptypes_c)``.
    """

    def __init__(self, message: str, sources: Tuple[str, str, str]) -> None:
        super().__init__(message)
        self.sources = sources


_TEXT_KINDS = frozenset({ColumnKind.TEXT, ColumnKind.MEMO})

_C_TYPES = {
    ColumnKind.INT: ("\tint\t", "\tdump_int (x."),
    ColumnKind.LONGINT: ("\tlong\t", "\tdump_long (x."),
    ColumnKind.TEXT: ("\tchar *\t", "\tdump_string (x."),
    ColumnKind.MEMO: ("\tchar *\t", "\tdump_string (x."),
}


def generated_banner() -> str:
    """The comment block placed at the top of every generated file."""
    return (
        "/******************************************************************/\n"
        "/* THIS IS AN AUTOMATICALLY GENERATED FILE.  DO NOT EDIT IT!!!!!! */\n"
        "/******************************************************************/\n"
    )


def array_source(
    table_name: str,
    columns: Sequence[ColumnDef],
    rows: Iterable[Sequence[Optional[str]]],
) -> str:
    """A C array initializer holding every row of a table.

    Text and memo values are wrapped in double quotes; other values are
    written as they are. A None value is written as empty.
    """
    parts = [
        generated_banner(),
        "\n",
        "#include <stdio.h>\n",
        '#include "types.h"\n',
        '#include "dump.h"\n',
        "\n",
        f"const {table_name} {table_name}_array [] = {{\n",
    ]
    count = 0
    last = len(columns) - 1
    for count, row in enumerate(rows, start=1):
        if count > 1:
            parts.append(",\n")
        parts.append("{\t\t\t\t/* %6d */\n\t" % (count - 1))
        for index, (column, value) in enumerate(zip(columns, row)):
            text = "" if value is None else str(value)
            parts.append("\t")
            parts.append(f'"{text}"' if column.kind in _TEXT_KINDS else text)
            parts.append(", \n" if index != last else "\n")
        parts.append("}")
    parts.append("\n};\n\n")
    parts.append(f"const int {table_name}_array_length = {count};\n")
    return "".join(parts)


def header_sources(tables: Iterable[TableDef]) -> Tuple[str, str, str]:
    """Generate ``types.h``, ``dumptypes.h`` and ``dumptypes.c`` for the tables.

    Raises UnsupportedColumnError after generating everything when any
    column has a type other than int, long int, text or memo.
    """
    banner = generated_banner()
    types_h = [banner]
    dump_h = [banner, '#include "types.h"\n']
    dump_c = [banner, "#include <stdio.h>\n", '#include "dumptypes.h"\n']
    errors: List[str] = []

    for table in tables:
        name = table.name
        types_h.append(f"typedef struct _{name}\n{{\n")
        dump_h.append(f"void dump_{name} ({name} x);\n")
        dump_c.append(f"void dump_{name} ({name} x)\n{{\n")
        dump_c.append(
            f'\tfprintf (stdout, "**************** {name} ****************\\n");\n'
        )
        for column in table.columns:
            field_name = column.name.lower()
            dump_c.append(f'\tfprintf (stdout, "x.{field_name} = ");\n')
            c_type = _C_TYPES.get(column.kind)
            if c_type is None:
                errors.append("ERROR: unsupported type: 0x%02x" % int(column.kind))
            else:
                types_h.append(c_type[0])
                dump_c.append(c_type[1])
            types_h.append(f"{field_name};\n")
            dump_c.append(f"{field_name});\n")
        types_h.append(f"\n}} {name} ;\n\n")
        dump_c.append("}\n\n")

    sources = ("".join(types_h), "".join(dump_h), "".join(dump_c))
    if errors:
        raise UnsupportedColumnError("\n".join(errors), sources)
    return sources