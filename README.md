# accesskit

Pure-Python building blocks for front-ends to Microsoft Access (JET/ACE)
database contents: the state a SQL `SELECT` builds up while it is parsed,
search-argument trees for its `WHERE` clause, a line-oriented query shell,
and formatters that turn rows into delimited text, SQL `INSERT` batches,
JSON lines or generated C source.

It has no runtime dependencies beyond the standard library.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Purpose |
| --- | --- |
| `accesskit.sarg` | `SargNode` trees with `Op` and `ValueType`; `SargNode.walk` for depth-first visits and `format_tree` to render a tree as indented text. |
| `accesskit.sqlstate` | `SqlQuery`: select-list columns, `FROM` tables, `WHERE` nodes (`add_sarg`, `add_and`, `add_or`, `add_not`, `eval_expr`), row limits (`add_limit`, `resolve_limit`, `accept_row`) and `strptime_value`. Failures raise `SqlError`. |
| `accesskit.shell` | `QueryShell`, which gathers input lines into statements and hands them to a runner you supply; `ResultSet`, `ShellOptions`, `format_pretty`, `format_delimited`, `rows_retrieved`, `find_sql_terminator`. |
| `accesskit.export` | `ExportOptions.from_args`, `BinaryMode`, backslash `unescape`, `binary_wrapper` for hex literals per backend (`sqlite`, `mysql`, `postgres`), and `batch_statements` for multi-row `INSERT`s. |
| `accesskit.jsonout` | `format_row` writes one JSON object per row; binary columns become `{"$binary": ..., "$type": "00"}`; empty or `None` values are left out. |
| `accesskit.codegen` | `ColumnKind`, `ColumnDef`, `TableDef`; `array_source` for a C array of rows and `header_sources` for `types.h`, `dumptypes.h` and `dumptypes.c`. Unsupported column types raise `UnsupportedColumnError`, which still carries the generated sources. |
| `accesskit.parsecsv` | `convert_text` / `convert_line` turn CSV text into a C array initializer; `main` is the command below. |
| `accesskit.queries` | `build_query_sql` rebuilds a stored query's `SELECT` from its `QueryRow` definition rows; `list_queries` formats a list of query names. |
| `accesskit.importer` | `prep_row` and `convert_field` turn delimited lines into `Field` values (text, byte, int, long int; numbers read as hexadecimal). Bad input raises `ImportFormatError`. |

## Shell

`QueryShell(runner, out, options)` takes one line at a time through
`handle_line`. A statement runs on `go` or when the buffer ends with `;`;
`reset` clears the buffer; `:r <file>` reads lines from a file; `exit`,
`quit` and `bye` stop it; `set showplan|noexec|stats on|off` as the first
line changes `ShellOptions`. `finish()` runs whatever is left at end of
input. The runner receives the statement text and returns a `ResultSet`, or
raises `SqlError`, whose message goes to standard error.

## Examples

```python
from accesskit.export import unescape
from accesskit.jsonout import base64_encode

assert unescape(r"\t") == "\t"
assert base64_encode(b"Man") == "TWFu"
```

## Command line

```
accesskit-parsecsv FOO
```

Reads `FOO` (or `FOO.txt` if `FOO` cannot be opened), splits it into
records at carriage returns, and writes `FOO.c` holding a C array of type
`FOO` with one element per non-empty record. It prints `count = N`.

## What it does not do

The package does not open, read or write Access database files. It has no
page or catalog reader, so nothing here lists a file's tables or executes a
query against stored data: the shell needs a runner that produces the rows,
and the formatters and importer work on rows, columns and values the caller
already has. Apart from `accesskit-parsecsv` there are no commands.