"""Low-level DER primitives: tags, lengths, integers and TLV headers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

PRIMITIVE = 0x00
CONSTRUCTED = 0x20
UNIVERSAL = 0x00
APPLICATION = 0x40
CONTEXT_SPECIFIC = 0x80
PRIVATE = 0xC0

CLASS_MASK = 0xC0
CONSTRUCTED_MASK = 0x20
SHORT_ID_MASK = 0x1F
LOW_SEVEN_MASK = 0x7F
HIGH_BIT = 0x80

MAX_UINT32 = 0xFFFFFFFF


class DerError(Exception):
    """Raised when DER data cannot be encoded or decoded."""

    MEMORY = 200
    LENGTH = 201
    LENGTH_NOT_EQUAL = 202
    DATA_RANGE = 203
    INVALID_TAG = 204

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(f"[{code}] {message}" if message else f"[{code}]")
        self.code = code


class Tag(IntEnum):
    """Universal tag numbers 0-30."""

    RESERVED = 0
    BOOLEAN = 1
    INTEGER = 2
    BIT_STRING = 3
    OCTET_STRING = 4
    NULL = 5
    OBJECT_IDENTIFIER = 6
    OBJECT_DESCRIPTOR = 7
    EXTERNAL = 8
    REAL = 9
    ENUMERATED = 10
    EMBEDDED_PDV = 11
    UTF8_STRING = 12
    ID_13 = 13
    ID_14 = 14
    ID_15 = 15
    SEQUENCE = 16
    SET = 17
    NUMERIC_STRING = 18
    PRINTABLE_STRING = 19
    T61_STRING = 20
    VIDEOTEX_STRING = 21
    IA5_STRING = 22
    UTC_TIME = 23
    GENERALIZED_TIME = 24
    GRAPHIC_STRING = 25
    ISO646_STRING = 26
    GENERAL_STRING = 27
    UNIVERSAL_STRING = 28
    ID_29 = 29
    BMP_STRING = 30


@dataclass
class AnyBuf:
    """A chunk of DER data with its type and, for bit strings, unused bits."""

    data: bytes = b""
    data_type: int = 0
    unused_bits: int = 0

    def __post_init__(self) -> None:
        self.data = bytes(self.data)

    def __len__(self) -> int:
        return len(self.data)


def identifier(tag: int) -> int:
    """Return the tag number held in the low five bits of a tag byte."""
    return tag & SHORT_ID_MASK


def read_tag(data, offset=0):
    """Read a tag at ``offset``; return ``(tag_value, bytes_consumed)``."""
    try:
        first = data[offset]
        if first & SHORT_ID_MASK != SHORT_ID_MASK:
            value = first if first & CONTEXT_SPECIFIC else first & SHORT_ID_MASK
            return value, 1
        value = 0
        pos = offset
        while True:
            pos += 1
            byte = data[pos]
            value = (value | (byte & LOW_SEVEN_MASK)) << 8
            if byte & HIGH_BIT:
                break
        return value | data[pos], pos + 1 - offset
    except IndexError:
        raise DerError(DerError.LENGTH, "truncated tag") from None


def length_of_size(length: int) -> int:
    """Return how many bytes the length field for ``length`` takes."""
    if length < 0:
        raise DerError(DerError.LENGTH, f"negative length {length}")
    if length <= 0x7F:
        return 1
    if length <= 0xFF:
        return 2
    if length < 0xFFFF:
        return 3
    if length <= 0xFFFFFF:
        return 4
    if length <= MAX_UINT32:
        return 5
    raise DerError(DerError.LENGTH, f"length {length} too large")


def read_length(data, offset=0):
    """Read a length field at ``offset``; return ``(length, bytes_consumed)``."""
    try:
        first = data[offset]
    except IndexError:
        raise DerError(DerError.LENGTH, "truncated length") from None
    if not first & HIGH_BIT:
        return first & LOW_SEVEN_MASK, 1
    count = first & LOW_SEVEN_MASK
    if count == 0 or count > 4:
        raise DerError(DerError.LENGTH, f"unsupported length-of-length {count}")
    chunk = bytes(data[offset + 1 : offset + 1 + count])
    if len(chunk) < count:
        raise DerError(DerError.LENGTH, "truncated length")
    return int.from_bytes(chunk, "big"), count + 1


def int_to_bytes(value: int) -> bytes:
    """Encode an unsigned 32-bit value as minimal big-endian DER content."""
    if value < 0 or value > MAX_UINT32:
        raise DerError(DerError.DATA_RANGE, f"integer {value} out of range")
    size = max(1, (value.bit_length() + 7) // 8)
    raw = value.to_bytes(size, "big")
    if raw[0] & HIGH_BIT:
        raw = b"\x00" + raw
    return raw


def bytes_to_int(data) -> int:
    """Decode big-endian integer content, dropping one leading zero byte."""
    data = bytes(data)
    if not data:
        raise DerError(DerError.LENGTH, "empty integer content")
    if data[0] == 0 and len(data) > 1:
        data = data[1:]
    return int.from_bytes(data, "big")


def write_tag_and_length(buf: AnyBuf, tag: int) -> AnyBuf:
    """Wrap ``buf.data`` in a tag and length and return the full encoding.

    Bit strings get their unused-bits byte; integers whose first content
    byte has the high bit set get a leading zero byte.
    """
    if not 0 <= tag <= 0xFF:
        raise DerError(DerError.DATA_RANGE, f"tag {tag} out of range")
    content = bytes(buf.data)
    high_first = bool(content) and bool(content[0] & HIGH_BIT)

    if tag == Tag.INTEGER:
        size = len(content) + (1 if high_first else 0)
    elif tag == Tag.BIT_STRING:
        size = len(content) + 1
    else:
        size = len(content)

    size_of = length_of_size(size)
    ident = tag if tag & CONTEXT_SPECIFIC else identifier(tag)

    header = bytearray([tag])
    if size_of == 1:
        header.append(size)
    else:
        header.append(HIGH_BIT | (size_of - 1))
        header += size.to_bytes(size_of - 1, "big")

    unused = 0
    if ident == Tag.BIT_STRING:
        unused = buf.unused_bits
        header.append(unused & 0xFF)
    if ident == Tag.INTEGER and high_first:
        header.append(0)

    return AnyBuf(bytes(header) + content, data_type=ident, unused_bits=unused)


def read_tag_and_length(buf: AnyBuf) -> AnyBuf:
    """Strip the tag and length from an encoding and return its content.

    The declared length must match the size of ``buf.data`` exactly.
    """
    data = bytes(buf.data)
    tag, tag_size = read_tag(data)
    length, length_size = read_length(data, tag_size)
    if tag_size + length_size + length != len(data):
        raise DerError(DerError.LENGTH_NOT_EQUAL, "declared length does not match data")

    start = tag_size + length_size
    unused = 0
    if buf.data_type == Tag.BIT_STRING:
        if length == 0:
            raise DerError(DerError.LENGTH, "bit string without unused-bits byte")
        unused = buf.unused_bits
        start += 1
        length -= 1
    if (
        tag == Tag.INTEGER
        and length > 1
        and data[start] == 0
        and data[start + 1] & HIGH_BIT
    ):
        start += 1
        length -= 1

    return AnyBuf(data[start : start + length], data_type=tag, unused_bits=unused)