"""Conversion of delimited text rows into field values for insertion."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence


class ImportFormatError(ValueError):
    """Raised when a row or field cannot be converted."""


class FieldKind(enum.IntEnum):
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
class Field:
    """A converted value ready to be packed into a row."""

    value: Optional[bytes]
    size: int
    is_null: bool = False
    colnum: int = 0


_NATURAL_SIZES = {FieldKind.BYTE: 1, FieldKind.INT: 2, FieldKind.LONGINT: 4}

_HEX_NUMBER = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")


def _parse_hex(text: str) -> int:
    """Parse a whole string as a base-16 integer the way strtol does."""
    match = _HEX_NUMBER.match(text)
    digits = match.group(2)
    if not digits:
        if text:
            raise ImportFormatError(f"{text!r} is not a hexadecimal number")
        return 0
    if match.end() != len(text):
        raise ImportFormatError(f"{text!r} is not a hexadecimal number")
    value = int(digits, 16)
    return -value if match.group(1) == "-" else value


def _fixed(value: int, width: int, size: int) -> bytes:
    mask = (1 << (8 * width)) - 1
    return (value & mask).to_bytes(width, "little").ljust(size, b"\0")


def convert_field(kind: int, text: str, fixed_size: Optional[int] = None) -> Field:
    """Convert the text of one field into a value of the column's type.

    Numbers are read as hexadecimal. Only text, byte, integer and long
    integer columns can be converted; anything else raises ImportFormatError.
    """
    try:
        kind = FieldKind(kind)
    except ValueError:
        raise ImportFormatError(
            "Conversion of type %02x not supported yet." % int(kind)
        ) from None

    if kind is FieldKind.TEXT:
        data = text.encode("utf-8")
        return Field(value=data, size=len(data))

    if kind in _NATURAL_SIZES:
        number = _parse_hex(text)
        width = _NATURAL_SIZES[kind]
        size = width if fixed_size is None else fixed_size
        return Field(value=_fixed(number, width, size), size=size)

    if kind is FieldKind.BOOL and text[:1] not in ("0", "1"):
        raise ImportFormatError(f"{text[:1]} is not a valid value for type BOOLEAN")

    raise ImportFormatError("Conversion of type %02x not supported yet." % int(kind))


def _strip_quotes(text: str) -> str:
    if text.startswith('"') and text.endswith('"'):
        return text[1:-1]
    return text


def prep_row(
    kinds: Sequence[int], line: str, delimiter: str = ","
) -> List[Field]:
    """Split a line on any character of ``delimiter`` and convert each field.

    Empty fields are skipped. Raises ImportFormatError when the row has
    more or fewer fields than ``kinds`` or a field cannot be converted.
    """
    if line.endswith("\n"):
        line = line[:-1]
    table = str.maketrans({ch: "\n" for ch in delimiter})
    parts = line.translate(table).split("\n")

    fields: List[Field] = []
    for index, part in enumerate(parts):
        if not part:
            continue
        if index >= len(kinds):
            raise ImportFormatError("Number of columns in file exceeds number in table.")
        try:
            field = convert_field(kinds[index], _strip_quotes(part))
        except ImportFormatError as exc:
            raise ImportFormatError(f"Format error in column {index + 1}: {exc}") from exc
        field.colnum = index
        fields.append(field)

    if len(parts) < len(kinds):
        raise ImportFormatError(
            f"Row has {len(parts)} columns, but table has {len(kinds)}"
        )
    return fields