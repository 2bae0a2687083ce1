import base64
import json

import pytest

from accesskit.codegen import ColumnKind
from accesskit.jsonout import (
    base64_encode,
    binary_value,
    format_column,
    format_row,
    quote_value,
)


@pytest.mark.parametrize("data", [b"", b"M", b"Ma", b"Man", bytes(range(256))])
def test_base64_round_trip(data):
    encoded = base64_encode(data)
    assert base64.b64decode(encoded) == data
    assert len(encoded) % 4 == 0


def test_base64_known_value():
    assert base64_encode(b"Man") == "TWFu"


def test_quote_value_escapes_quote_and_backslash():
    assert quote_value('a"b\\c') == '"a\\"b\\\\c"'


def test_quote_value_round_trips_through_json():
    text = 'line\nwith "quotes" and \\ and \x01'
    assert json.loads(quote_value(text)) == text


def test_quote_value_control_escape():
    assert quote_value("\x01") == '"\\u0001"'


def test_quote_value_drop_nonascii_uses_space():
    assert quote_value("a\tb", drop_nonascii=True) == quote_value("a b")


def test_binary_value_shape():
    rendered = binary_value(b"\x00\xff")
    parsed = json.loads(rendered)
    assert parsed["$type"] == "00"
    assert base64.b64decode(parsed["$binary"]) == b"\x00\xff"


def test_format_column_number_unquoted():
    assert format_column("n", "42", ColumnKind.LONGINT) == '"n":42'


def test_format_column_text_quoted():
    member = format_column("name", "Bob", ColumnKind.TEXT)
    assert json.loads("{" + member + "}") == {"name": "Bob"}


def test_format_column_binary():
    member = format_column("blob", b"abc", ColumnKind.OLE)
    parsed = json.loads("{" + member + "}")
    assert base64.b64decode(parsed["blob"]["$binary"]) == b"abc"


def test_format_row_skips_null_and_empty():
    row = format_row(
        [
            ("a", "1", ColumnKind.INT),
            ("b", None, ColumnKind.TEXT),
            ("c", "x", ColumnKind.TEXT),
            ("d", "", ColumnKind.TEXT),
        ]
    )
    assert row.endswith("}\n")
    assert json.loads(row) == {"a": 1, "c": "x"}


def test_format_row_empty():
    assert format_row([]) == "{}\n"