import pytest

from accesskit.importer import (
    Field,
    FieldKind,
    ImportFormatError,
    convert_field,
    prep_row,
)


def test_text_field():
    field = convert_field(FieldKind.TEXT, "hello")
    assert field.value == b"hello"
    assert field.size == 5
    assert field.is_null is False


def test_int_field_is_hex_little_endian():
    field = convert_field(FieldKind.INT, "1f")
    assert field.size == 2
    assert int.from_bytes(field.value, "little") == 0x1F


def test_longint_field_with_prefix():
    field = convert_field(FieldKind.LONGINT, "0x1234")
    assert field.size == 4
    assert int.from_bytes(field.value, "little") == 0x1234


def test_byte_field():
    field = convert_field(FieldKind.BYTE, "7f")
    assert field.value == bytes([0x7F])
    assert field.size == 1


def test_fixed_size_pads():
    field = convert_field(FieldKind.INT, "a", fixed_size=4)
    assert field.size == 4
    assert len(field.value) == 4
    assert int.from_bytes(field.value, "little") == 0xA


@pytest.mark.parametrize("text", ["zz", "12g", "0x"])
def test_bad_hex_rejected(text):
    with pytest.raises(ImportFormatError):
        convert_field(FieldKind.INT, text)


def test_bool_invalid_value():
    with pytest.raises(ImportFormatError, match="BOOLEAN"):
        convert_field(FieldKind.BOOL, "x")


def test_bool_conversion_not_supported():
    with pytest.raises(ImportFormatError, match="not supported"):
        convert_field(FieldKind.BOOL, "1")


def test_unsupported_type():
    with pytest.raises(ImportFormatError, match="07"):
        convert_field(FieldKind.DOUBLE, "1.5")


def test_prep_row_converts_and_strips_quotes():
    fields = prep_row([FieldKind.TEXT, FieldKind.INT], '"abc",1f\n')
    assert [f.colnum for f in fields] == [0, 1]
    assert fields[0].value == b"abc"
    assert int.from_bytes(fields[1].value, "little") == 0x1F


def test_prep_row_custom_delimiter_set():
    fields = prep_row([FieldKind.TEXT] * 3, "a|b;c\n", delimiter="|;")
    assert [f.value for f in fields] == [b"a", b"b", b"c"]


def test_prep_row_skips_empty_fields():
    fields = prep_row([FieldKind.TEXT] * 3, "a,,b\n")
    assert [f.colnum for f in fields] == [0, 2]
    assert all(isinstance(f, Field) for f in fields) and len(fields) == 2


def test_prep_row_too_many_columns():
    with pytest.raises(ImportFormatError, match="exceeds"):
        prep_row([FieldKind.TEXT], "a,b\n")


def test_prep_row_too_few_columns():
    with pytest.raises(ImportFormatError, match="Row has 1 columns, but table has 2"):
        prep_row([FieldKind.TEXT, FieldKind.TEXT], "a\n")


def test_prep_row_reports_column_of_bad_field():
    with pytest.raises(ImportFormatError, match="column 2"):
        prep_row([FieldKind.TEXT, FieldKind.INT], "a,zz\n")