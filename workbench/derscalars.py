"""DER encoding of integers, bit strings, sequences and NULL."""

from __future__ import annotations

from typing import Iterable

from workbench.derbase import (
    HIGH_BIT,
    AnyBuf,
    DerError,
    Tag,
    identifier,
    int_to_bytes,
    length_of_size,
    read_length,
    read_tag,
    read_tag_and_length,
    write_tag_and_length,
)

INTEGER_TAG = 0x02
BIT_STRING_TAG = 0x03
NULL_TAG = 0x05
SEQUENCE_TAG = 0x30

_DER_NULL = bytes([NULL_TAG, 0x00])


def _length_field(length: int) -> bytes:
    size_of = length_of_size(length)
    if size_of == 1:
        return bytes([length])
    return bytes([HIGH_BIT | (size_of - 1)]) + length.to_bytes(size_of - 1, "big")


def _content(data: bytes, start: int, length: int) -> bytes:
    chunk = data[start : start + length]
    if len(chunk) < length:
        raise DerError(DerError.LENGTH, "content shorter than declared length")
    return chunk


def write_integer(value: int) -> AnyBuf:
    """Encode an unsigned 32-bit integer as a DER INTEGER."""
    content = int_to_bytes(value)
    data = bytes([INTEGER_TAG, len(content)]) + content
    return AnyBuf(data, data_type=identifier(INTEGER_TAG))


def read_integer(buf: AnyBuf) -> int:
    """Decode a DER INTEGER produced by :func:`write_integer`."""
    data = bytes(buf.data)
    _, tag_size = read_tag(data)
    length, length_size = read_length(data, tag_size)
    content = _content(data, tag_size + length_size, length)
    if not content:
        raise DerError(DerError.LENGTH, "empty integer content")
    if content[0] == 0 and len(content) > 1:
        content = content[1:]
    return int.from_bytes(content, "big")


def write_bit_string(buf: AnyBuf) -> AnyBuf:
    """Encode ``buf.data`` as a DER BIT STRING carrying ``buf.unused_bits``."""
    return write_tag_and_length(buf, BIT_STRING_TAG)


def read_bit_string(buf: AnyBuf) -> AnyBuf:
    """Decode a DER BIT STRING back into its content bytes."""
    return read_tag_and_length(buf)


def write_sequence(items: Iterable[AnyBuf]) -> AnyBuf:
    """Concatenate encoded items and wrap them in a DER SEQUENCE."""
    body = b"".join(bytes(item.data) for item in items)
    data = bytes([SEQUENCE_TAG]) + _length_field(len(body)) + body
    return AnyBuf(data, data_type=identifier(SEQUENCE_TAG))


def read_sequence(buf: AnyBuf) -> list[AnyBuf]:
    """Split a DER SEQUENCE into the encodings of its elements."""
    data = bytes(buf.data)
    tag, tag_size = read_tag(data)
    if tag & 0xFF != Tag.SEQUENCE:
        raise DerError(DerError.INVALID_TAG, f"expected SEQUENCE, got tag {tag}")
    total, length_size = read_length(data, tag_size)
    if len(data) != tag_size + length_size + total:
        raise DerError(DerError.LENGTH_NOT_EQUAL, "sequence length does not match data")

    items: list[AnyBuf] = []
    pos = tag_size + length_size
    remaining = total
    while remaining > 0:
        item_tag, item_tag_size = read_tag(data, pos)
        item_length, item_length_size = read_length(data, pos + item_tag_size)
        size = item_tag_size + item_length_size + item_length
        if size > remaining:
            raise DerError(DerError.LENGTH, "element overruns sequence")
        items.append(AnyBuf(data[pos : pos + size], data_type=item_tag))
        pos += size
        remaining -= size
    return items


def write_null() -> AnyBuf:
    """Return the DER encoding of NULL."""
    return AnyBuf(_DER_NULL, data_type=identifier(NULL_TAG))


def read_null(buf: AnyBuf) -> int:
    """Check that ``buf`` starts with a DER NULL and return its tag number."""
    if bytes(buf.data[:2]) != _DER_NULL:
        raise DerError(DerError.INVALID_TAG, "not a DER NULL")
    return int(Tag.NULL)