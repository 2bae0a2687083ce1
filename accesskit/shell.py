"""Interactive SQL shell: line handling and result formatting."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, TextIO, Union

from accesskit.sarg import SargNode, format_tree
from accesskit.sqlstate import SqlColumn, SqlError

_SET_USAGE = "Usage: set [stats|showplan|noexec] [on|off]\n"
_EXIT_WORDS = frozenset({"exit", "quit", "bye"})


@dataclass
class ResultSet:
    """Columns and rows produced by running one statement.

    ``limit`` caps the number of rows handed out by :meth:`fetch`;
    ``row_count`` tracks how many rows have been fetched so far.
    """

    columns: List[SqlColumn]
    rows: Iterable[Sequence[str]]
    limit: int = -1
    table_name: str = ""
    sarg_tree: Optional[SargNode] = None
    scan_index: Optional[str] = None
    row_count: int = field(default=0, init=False)

    def fetch(self) -> Iterator[Sequence[str]]:
        """Yield rows until the source runs out or the limit is reached."""
        for row in self.rows:
            if self.limit >= 0 and self.row_count + 1 > self.limit:
                return
            self.row_count += 1
            yield row


@dataclass
class ShellOptions:
    """Settings that control how the shell prints results."""

    pretty_print: bool = True
    headers: bool = True
    footers: bool = True
    delimiter: Optional[str] = None
    showplan: bool = False
    noexec: bool = False
    stats: bool = False


def find_sql_terminator(text: str) -> Optional[int]:
    """Return the index of a trailing ``;`` (ignoring trailing blanks), else None."""
    if not text:
        return None
    pos = len(text) - 1
    while pos > 0 and text[pos].isspace():
        pos -= 1
    return pos if text[pos] == ";" else None


def display_width(text: Union[str, bytes]) -> int:
    """Number of characters in ``text``; UTF-8 bytes count once per character."""
    if isinstance(text, bytes):
        return sum(1 for byte in text if byte & 0xC0 != 0x80)
    return len(text)


def rows_retrieved(count: int) -> str:
    """The footer line reporting how many rows were fetched."""
    if not count:
        return "No Rows retrieved\n"
    if count == 1:
        return "1 Row retrieved\n"
    return f"{count} Rows retrieved\n"


def _break_line(widths: Sequence[int]) -> str:
    return "+" + "".join("-" * width + "+" for width in widths) + "\n"


def _value_line(values: Sequence[str], widths: Sequence[int]) -> str:
    cells = (
        value + " " * max(0, width - display_width(value)) + "|"
        for value, width in zip(values, widths)
    )
    return "|" + "".join(cells) + "\n"


def format_pretty(result: ResultSet, headers: bool = True, footers: bool = True) -> str:
    """Render a result set as a boxed table."""
    parts = []
    columns = result.columns
    if headers:
        for column in columns:
            name_len = len(column.name.encode("utf-8"))
            if name_len > column.disp_size:
                column.disp_size = name_len
    widths = [column.disp_size for column in columns]
    if headers:
        parts.append(_break_line(widths))
        parts.append(_value_line([column.name for column in columns], widths))
    parts.append(_break_line(widths))
    for row in result.fetch():
        parts.append(_value_line([str(value) for value in row], widths))
    parts.append(_break_line(widths))
    if footers:
        parts.append(rows_retrieved(result.row_count))
    return "".join(parts)


def format_delimited(
    result: ResultSet,
    delimiter: Optional[str] = None,
    headers: bool = True,
    footers: bool = True,
) -> str:
    """Render a result set as delimited text, tab-separated by default."""
    sep = "\t" if delimiter is None else delimiter
    parts = []
    if headers:
        parts.append(sep.join(column.name for column in result.columns) + "\n")
    for row in result.fetch():
        parts.append(sep.join(str(value) for value in row) + "\n")
    if footers:
        parts.append(rows_retrieved(result.row_count))
    return "".join(parts)


class QueryShell:
    """Collects input lines into statements and runs them.

    ``runner`` takes the text of a statement and returns a
    :class:`ResultSet`, raising :class:`SqlError` when it fails.
    """

    def __init__(
        self,
        runner: Callable[[str], ResultSet],
        out: Optional[TextIO] = None,
        options: Optional[ShellOptions] = None,
    ) -> None:
        self.runner = runner
        self.out = out if out is not None else sys.stdout
        self.options = options if options is not None else ShellOptions()
        self.buffer = ""
        self._line = 0
        self._in_file = False

    @property
    def prompt(self) -> str:
        """The prompt for the next line of input."""
        return f"{self._line + 1} => "

    def handle_line(self, line: str) -> bool:
        """Process one line of input; False means the shell should stop."""
        self._line += 1
        if line in _EXIT_WORDS:
            return False
        if self._line == 1 and (line.startswith("set ") or line == "set"):
            self.set_command(line[3:])
            self._line = 0
        elif line == "go":
            self._line = 0
            self._run_buffer()
        elif line == "reset":
            self._line = 0
            self.buffer = ""
        elif line.startswith(":r"):
            return self._read_file(line[2:])
        else:
            self.buffer += line + "\n"
            end = find_sql_terminator(self.buffer)
            if end is not None:
                self.buffer = self.buffer[:end]
                self._line = 0
                self._run_buffer()
        return True

    def set_command(self, args: str) -> None:
        """Handle ``set stats|showplan|noexec on|off``."""
        words = args.split()
        if not words:
            sys.stdout.write(_SET_USAGE)
            return
        name = words[0]
        if name not in ("stats", "showplan", "noexec"):
            sys.stdout.write(f"Unknown set command {name}\n")
            sys.stdout.write(_SET_USAGE)
            return
        usage = f"Usage: set {name} [on|off]\n"
        if len(words) < 2:
            sys.stdout.write(usage)
            return
        value = words[1]
        if value not in ("on", "off"):
            sys.stdout.write(f"Unknown {name} option {value}\n")
            sys.stdout.write(usage)
            return
        setattr(self.options, name, value == "on")

    def finish(self) -> None:
        """Run whatever statement is left in the buffer at end of input."""
        if self.buffer:
            self._run_buffer()

    def _read_file(self, rest: str) -> bool:
        if self._in_file:
            sys.stderr.write("Can not handle nested opens\n")
            return True
        fname = rest.lstrip()
        try:
            handle = open(fname, encoding="utf-8")
        except OSError:
            sys.stderr.write(f"Unable to open file {fname}\n")
            self.buffer = ""
            return True
        self._in_file = True
        try:
            with handle:
                for raw in handle:
                    if not self.handle_line(raw.rstrip("\n")):
                        return False
        finally:
            self._in_file = False
        self._line = 0
        return True

    def _run_buffer(self) -> None:
        text, self.buffer = self.buffer, ""
        try:
            result = self.runner(text)
        except SqlError as exc:
            sys.stderr.write(f"{exc}\n")
            return
        opts = self.options
        if opts.showplan:
            if result.sarg_tree is not None:
                sys.stdout.write(format_tree(result.sarg_tree))
            if result.scan_index is None:
                sys.stdout.write(f"Table scanning {result.table_name}\n")
            else:
                sys.stdout.write(
                    f"Index scanning {result.table_name} using {result.scan_index}\n"
                )
        if not opts.noexec:
            if opts.pretty_print:
                text_out = format_pretty(result, opts.headers, opts.footers)
            else:
                text_out = format_delimited(result, opts.delimiter, opts.headers, opts.footers)
            self.out.write(text_out)
            self.out.flush()