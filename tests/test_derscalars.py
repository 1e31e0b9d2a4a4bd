import pytest

from workbench.derbase import AnyBuf, DerError, Tag
from workbench.derscalars import (
    read_bit_string,
    read_integer,
    read_null,
    read_sequence,
    write_bit_string,
    write_integer,
    write_null,
    write_sequence,
)


@pytest.mark.parametrize("value", [0, 1, 30, 60, 0x7F, 0x80, 0xFF, 0x8000, 0x123456, 0xFFFFFFFF])
def test_integer_round_trip(value):
    assert read_integer(write_integer(value)) == value


def test_integer_high_bit_gets_leading_zero():
    assert write_integer(0x80).data == b"\x02\x02\x00\x80"


def test_integer_data_type():
    assert write_integer(5).data_type == Tag.INTEGER


@pytest.mark.parametrize("value", [-1, 0x100000000])
def test_integer_out_of_range(value):
    with pytest.raises(DerError) as info:
        write_integer(value)
    assert info.value.code == DerError.DATA_RANGE


def test_read_integer_long_form_length():
    assert read_integer(AnyBuf(b"\x02\x81\x01\x07")) == 7


def test_read_integer_truncated():
    with pytest.raises(DerError) as info:
        read_integer(AnyBuf(b"\x02\x04\x01"))
    assert info.value.code == DerError.LENGTH


def test_bit_string_layout():
    encoded = write_bit_string(AnyBuf(b"hello", unused_bits=5))
    assert encoded.data[0] == 0x03
    assert encoded.data[1] == len(b"hello") + 1
    assert encoded.data[2] == 5
    assert encoded.data[3:] == b"hello"


def test_bit_string_round_trip():
    decoded = read_bit_string(write_bit_string(AnyBuf(b"hello world", unused_bits=3)))
    assert decoded.data == b"hello world"
    assert decoded.unused_bits == 3


def test_empty_bit_string_round_trip():
    decoded = read_bit_string(write_bit_string(AnyBuf(b"")))
    assert decoded.data == b""


def test_null_encoding():
    assert write_null().data == b"\x05\x00"
    assert read_null(write_null()) == Tag.NULL


def test_read_null_rejects_other_data():
    with pytest.raises(DerError):
        read_null(AnyBuf(b"\x05\x01"))


def test_empty_sequence():
    assert write_sequence([]).data == b"\x30\x00"
    assert read_sequence(write_sequence([])) == []


def test_sequence_round_trip():
    parts = [write_integer(30), write_null(), write_bit_string(AnyBuf(b"abc"))]
    items = read_sequence(write_sequence(parts))
    assert [item.data for item in items] == [part.data for part in parts]
    assert [item.data_type for item in items] == [Tag.INTEGER, Tag.NULL, Tag.BIT_STRING]


def test_sequence_header_matches_body_length():
    parts = [write_integer(1), write_integer(2)]
    encoded = write_sequence(parts)
    body = b"".join(part.data for part in parts)
    assert encoded.data[0] == 0x30
    assert encoded.data[1] == len(body)
    assert encoded.data[2:] == body
    assert encoded.data_type == Tag.SEQUENCE


def test_long_sequence_round_trip():
    parts = [write_integer(n) for n in range(100)]
    encoded = write_sequence(parts)
    assert encoded.data[1] & 0x80
    items = read_sequence(encoded)
    assert [read_integer(item) for item in items] == list(range(100))


def test_read_sequence_wrong_tag():
    with pytest.raises(DerError) as info:
        read_sequence(write_integer(1))
    assert info.value.code == DerError.INVALID_TAG


def test_read_sequence_length_mismatch():
    encoded = write_sequence([write_integer(1)])
    with pytest.raises(DerError) as info:
        read_sequence(AnyBuf(encoded.data + b"\x00"))
    assert info.value.code == DerError.LENGTH_NOT_EQUAL


def test_read_sequence_element_overrun():
    with pytest.raises(DerError) as info:
        read_sequence(AnyBuf(b"\x30\x03\x02\x05\x01"))
    assert info.value.code == DerError.LENGTH