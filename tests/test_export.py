import pytest

from accesskit.export import (
    BinaryMode,
    ExportOptions,
    batch_statements,
    binary_wrapper,
    parse_binary_mode,
    unescape,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("\\t", "\t"),
        ("a\\nb", "a\nb"),
        ("\\r", "\r"),
        ("\\x", "\\x"),
        ("abc\\", "abc"),
        ("plain", "plain"),
    ],
)
def test_unescape(raw, expected):
    assert unescape(raw) == expected


@pytest.mark.parametrize(
    "name, mode",
    [
        ("strip", BinaryMode.STRIP),
        ("raw", BinaryMode.RAW),
        ("octal", BinaryMode.OCTAL),
        ("hex", BinaryMode.HEXADECIMAL),
        (None, BinaryMode.RAW),
    ],
)
def test_parse_binary_mode(name, mode):
    assert parse_binary_mode(name) is mode


def test_parse_binary_mode_invalid():
    with pytest.raises(ValueError, match="Invalid binary mode"):
        parse_binary_mode("base64")


def test_from_args_defaults():
    opts = ExportOptions.from_args()
    assert opts.delimiter == ","
    assert opts.row_delimiter == "\n"
    assert opts.quote_char == '"'
    assert opts.escape_char is None
    assert opts.null_text == ""
    assert opts.bin_mode is BinaryMode.RAW
    assert opts.header_row is True


def test_from_args_postgres_quotes_and_no_header():
    opts = ExportOptions.from_args(insert_dialect="postgres")
    assert opts.quote_char == "'"
    assert opts.header_row is False


def test_from_args_explicit_quote_wins_over_dialect():
    opts = ExportOptions.from_args(quote_char="|", insert_dialect="postgres")
    assert opts.quote_char == "|"


def test_from_args_unescapes_strings():
    opts = ExportOptions.from_args(
        delimiter="\\t", row_delimiter="\\r\\n", escape_char="\\\\", null_text="\\N"
    )
    assert opts.delimiter == "\t"
    assert opts.row_delimiter == "\r\n"
    assert opts.escape_char == "\\\\"
    assert opts.null_text == "\\N"


def test_from_args_bad_bin_mode():
    with pytest.raises(ValueError):
        ExportOptions.from_args(bin_mode="nope")


def test_binary_wrapper_backends():
    assert binary_wrapper("sqlite", True, BinaryMode.HEXADECIMAL) == ("X", "'", "")
    assert binary_wrapper("mysql", True, BinaryMode.HEXADECIMAL) == ("0x", "", "")
    assert binary_wrapper("postgres", True, BinaryMode.HEXADECIMAL) == (
        "decode(",
        "'",
        ", 'hex')",
    )


def test_binary_wrapper_not_applicable():
    assert binary_wrapper("sqlite", False, BinaryMode.HEXADECIMAL) is None
    assert binary_wrapper("mysql", True, BinaryMode.RAW) is None
    assert binary_wrapper("oracle", True, BinaryMode.HEXADECIMAL) is None


def test_batch_statements_groups():
    rows = ["r0", "r1", "r2", "r3", "r4"]
    batches = list(batch_statements(rows, 2))
    assert batches == [["r0", "r1"], ["r2", "r3"], ["r4"]]


def test_batch_statements_preserves_rows():
    rows = list(range(23))
    batches = list(batch_statements(rows, 5))
    assert [r for b in batches for r in b] == rows
    assert all(1 <= len(b) <= 5 for b in batches)


def test_batch_statements_empty():
    assert list(batch_statements([], 10)) == []


def test_batch_statements_bad_size():
    with pytest.raises(ValueError):
        list(batch_statements([1], 0))