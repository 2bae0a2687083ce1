"""Rendering of table rows as one JSON object per line."""

from __future__ import annotations

import base64
from typing import Iterable, Optional, Tuple, Union

from accesskit.codegen import ColumnKind

_QUOTE = '"'
_ESCAPE = "\\"
_SEPARATOR = ":"
_ROW_START = "{"
_ROW_END = "}\n"
_DELIMITER = ","

_QUOTE_KINDS = frozenset(
    {
        ColumnKind.TEXT,
        ColumnKind.OLE,
        ColumnKind.MEMO,
        ColumnKind.DATETIME,
        ColumnKind.BINARY,
        ColumnKind.REPID,
    }
)
_BINARY_KINDS = frozenset({ColumnKind.OLE, ColumnKind.BINARY, ColumnKind.REPID})

Value = Union[str, bytes, int, float, None]


def base64_encode(data: bytes) -> str:
    """Standard padded base64 of ``data``."""
    return base64.b64encode(bytes(data)).decode("ascii")


def quote_value(value: str, drop_nonascii: bool = False) -> str:
    """Wrap ``value`` in double quotes, escaping quotes, backslashes and control codes.

    Control characters become ``\\u00XX``, or a space when ``drop_nonascii``.
    """
    out = [_QUOTE]
    for ch in value:
        if ch == _QUOTE:
            out.append(_ESCAPE + _QUOTE)
        elif ch == _ESCAPE:
            out.append(_ESCAPE + _ESCAPE)
        elif ord(ch) < 0x20:
            out.append(" " if drop_nonascii else "\\u00%02x" % ord(ch))
        else:
            out.append(ch)
    out.append(_QUOTE)
    return "".join(out)


def binary_value(data: bytes) -> str:
    """An extended-JSON binary object holding ``data`` in base64."""
    return '{"$binary": "' + base64_encode(data) + '", "$type": "00"}'


def _as_bytes(value: Value) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return str(value).encode("latin-1")


def _as_text(value: Value) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def format_column(
    name: str, value: Value, kind: ColumnKind, drop_nonascii: bool = False
) -> str:
    """One ``"name":value`` member; text-like kinds are quoted, binary ones base64."""
    head = quote_value(name, drop_nonascii) + _SEPARATOR
    kind = ColumnKind(kind)
    if kind in _BINARY_KINDS:
        return head + binary_value(_as_bytes(value))
    if kind in _QUOTE_KINDS:
        return head + quote_value(_as_text(value), drop_nonascii)
    return head + _as_text(value)


def _is_absent(value: Value) -> bool:
    return value is None or (isinstance(value, (str, bytes, bytearray)) and len(value) == 0)


def format_row(
    columns: Iterable[Tuple[str, Value, ColumnKind]], drop_nonascii: bool = False
) -> str:
    """A whole row as a JSON object followed by a newline.

    ``columns`` are ``(name, value, kind)`` triples; columns whose value is
    None or empty are left out of the object.
    """
    members = [
        format_column(name, value, kind, drop_nonascii)
        for name, value, kind in columns
        if not _is_absent(value)
    ]
    return _ROW_START + _DELIMITER.join(members) + _ROW_END


def _optional(value: Optional[str]) -> Optional[str]:
    return value