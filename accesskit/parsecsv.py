"""Turn an exported CSV text file into a C array initializer source."""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence, Tuple

_BANNER = (
    "/******************************************************************/\n"
    "/* THIS IS AN AUTOMATICALLY GENERATED FILE.  DO NOT EDIT IT!!!!!! */\n"
    "/******************************************************************/\n"
)


def convert_line(line: str) -> str:
    """Convert one CSV record into the body of a C struct initializer."""
    out: List[str] = []
    instring = False
    lastcomma = False
    for ch in line:
        if instring:
            if ch == "\\":
                out.append("\\\\")
            elif ch == "\n":
                out.append("\\n")
            elif ch != "\r":
                out.append(ch)
            if ch == '"':
                instring = False
                lastcomma = False
        elif ch == ",":
            if lastcomma:
                out.append('""')
            out.append(",\n\t")
            lastcomma = True
        elif ch == '"':
            out.append(ch)
            lastcomma = False
            instring = True
        else:
            out.append(ch)
            lastcomma = False
    if lastcomma:
        out.append('""\n')
    return "".join(out)


def _records(text: str) -> List[str]:
    """Split on carriage returns, discarding the character after each one."""
    records = []
    pos = 0
    size = len(text)
    while pos < size:
        end = text.find("\r", pos)
        if end == -1:
            records.append(text[pos:])
            break
        records.append(text[pos:end])
        pos = end + 2
    return [record for record in records if record]


def convert_text(text: str, name: str) -> Tuple[str, int]:
    """Build the C source for all records; returns the source and record count."""
    parts = [
        _BANNER,
        "\n",
        "#include <stdio.h>\n",
        '#include "types.h"\n',
        '#include "mdbsupport.h"\n',
        "\n",
        f"const {name} {name}_array [] = {{\n",
    ]
    records = _records(text)
    for count, record in enumerate(records):
        if count:
            parts.append(",\n")
        parts.append("{\t\t\t\t/* %6d */\n\t" % count)
        parts.append(convert_line(record))
        parts.append("\n}")
    parts.append("\n};\n")
    parts.append(f"\nconst int {name}_array_length = {len(records)};\n")
    return "".join(parts), len(records)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Convert ``<file>`` (or ``<file>.txt``) into ``<file>.c``."""
    args = list(sys.argv[1:] if argv is None else argv)
    sys.stderr.write("parsecsv is deprecated and will disappear in a future version.\n\n")
    if not args:
        sys.stderr.write("Usage: parsecsv <file> (assumed extension .txt)\n")
        return 1
    name = args[0]
    text = None
    for candidate in (name, name + ".txt"):
        try:
            with open(candidate, encoding="latin-1", newline="") as handle:
                text = handle.read()
            break
        except OSError:
            continue
    if text is None:
        return 1
    source, count = convert_text(text, name)
    try:
        with open(name + ".c", "w", encoding="latin-1", newline="") as handle:
            handle.write(source)
    except OSError as exc:
        sys.stderr.write(f"Unable to write {name}.c: {exc}\n")
        return 1
    sys.stdout.write(f"count = {count}\n")
    return 0