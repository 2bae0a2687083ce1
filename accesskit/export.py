"""Option handling and batching for exporting table rows as CSV or INSERTs."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


class BinaryMode(enum.Enum):
    """How binary column values are written."""

    STRIP = "strip"
    RAW = "raw"
    OCTAL = "octal"
    HEXADECIMAL = "hex"


def unescape(text: str) -> str:
    """Expand ``\\n``, ``\\t`` and ``\\r``; keep any other backslash pair as is.

    A lone backslash at the very end is dropped.
    """
    out: List[str] = []
    chars = iter(text)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, None)
        if nxt is None:
            break
        out.append(_ESCAPES.get(nxt, "\\" + nxt))
    return "".join(out)


def parse_binary_mode(name: Optional[str]) -> BinaryMode:
    """Map a ``--bin`` argument to a mode; raw when none is given."""
    if name is None:
        return BinaryMode.RAW
    try:
        return BinaryMode(name)
    except ValueError:
        raise ValueError("Invalid binary mode") from None


@dataclass
class ExportOptions:
    """Everything that shapes the exported text."""

    delimiter: str = ","
    row_delimiter: str = "\n"
    quote_char: str = '"'
    escape_char: Optional[str] = None
    null_text: str = ""
    insert_dialect: Optional[str] = None
    bin_mode: BinaryMode = BinaryMode.RAW
    header_row: bool = True
    quote_text: bool = True
    escape_control_chars: bool = False
    boolean_words: bool = False
    batch_size: int = 1000
    namespace: Optional[str] = None
    date_fmt: Optional[str] = None
    shortdate_fmt: Optional[str] = None

    @classmethod
    def from_args(
        cls,
        delimiter: Optional[str] = None,
        row_delimiter: Optional[str] = None,
        quote_char: Optional[str] = None,
        escape_char: Optional[str] = None,
        null_text: Optional[str] = None,
        insert_dialect: Optional[str] = None,
        bin_mode: Optional[str] = None,
    ) -> "ExportOptions":
        """Build options from raw command-line strings, applying defaults."""
        if quote_char is not None:
            quote = unescape(quote_char)
        elif insert_dialect == "postgres":
            quote = "'"
        else:
            quote = '"'
        return cls(
            delimiter="," if delimiter is None else unescape(delimiter),
            row_delimiter="\n" if row_delimiter is None else unescape(row_delimiter),
            quote_char=quote,
            escape_char=None if escape_char is None else unescape(escape_char),
            null_text="" if null_text is None else unescape(null_text),
            insert_dialect=insert_dialect,
            bin_mode=parse_binary_mode(bin_mode),
            header_row=insert_dialect is None,
        )


_BINARY_WRAPPERS = {
    "sqlite": ("X", "'", ""),
    "mysql": ("0x", "", ""),
    "postgres": ("decode(", "'", ", 'hex')"),
}


def binary_wrapper(
    backend_name: str, is_binary: bool, bin_mode: BinaryMode
) -> Optional[Tuple[str, str, str]]:
    """Prefix, quote character and suffix for a hex binary literal.

    Returns None when the value needs no special notation: the column is
    not binary, the mode is not hexadecimal, or the backend has none.
    """
    if not is_binary or bin_mode is not BinaryMode.HEXADECIMAL:
        return None
    return _BINARY_WRAPPERS.get(backend_name)


def batch_statements(rows: Iterable[T], batch_size: int) -> Iterator[List[T]]:
    """Group rows into lists of at most ``batch_size`` for multi-row INSERTs."""
    if batch_size <= 0:
        raise ValueError("batch size must be positive")
    batch: List[T] = []
    for row in rows:
        batch.append(row)
        if len(batch) == batch_size:
            yield batch
            batch = []
    if batch:
        yield batch