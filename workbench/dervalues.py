"""Helpers that encode and decode byte and character fields in DER."""

from __future__ import annotations

from workbench.derbase import AnyBuf, DerError, Tag
from workbench.derscalars import read_bit_string, write_bit_string, write_null, write_sequence
from workbench.derstrings import read_printable_string, write_printable_string

INPUT_DATA_ERROR = 106


def string_to_anybuf(data) -> AnyBuf:
    """Wrap raw bytes as a PrintableString-typed buffer.

    ``None`` or empty input yields an empty buffer; ``unused_bits`` is the
    data length modulo 8.
    """
    raw = bytes(data) if data else b""
    return AnyBuf(raw, data_type=Tag.PRINTABLE_STRING, unused_bits=len(raw) % 8)


def write_null_sequence() -> AnyBuf:
    """Return a SEQUENCE holding a single NULL, used to encode an absent value."""
    return write_sequence([write_null()])


def _check_input(data) -> bytes:
    if data is None:
        return b""
    if isinstance(data, str):
        data = data.encode("utf-8", "surrogateescape")
    raw = bytes(data)
    if not raw:
        raise DerError(INPUT_DATA_ERROR, "empty data given; pass None for no data")
    return raw


def encode_unsigned_char(data) -> AnyBuf:
    """Encode bytes as a DER BIT STRING; ``None`` encodes an empty one."""
    return write_bit_string(string_to_anybuf(_check_input(data)))


def decode_unsigned_char(buf: AnyBuf) -> bytes:
    """Decode a BIT STRING written by :func:`encode_unsigned_char`."""
    typed = AnyBuf(buf.data, data_type=Tag.BIT_STRING, unused_bits=buf.unused_bits)
    return read_bit_string(typed).data


def encode_char(data) -> AnyBuf:
    """Encode text as a DER PrintableString; ``None`` encodes an empty one."""
    return write_printable_string(string_to_anybuf(_check_input(data)))


def decode_char(buf: AnyBuf) -> str:
    """Decode a string written by :func:`encode_char`."""
    return read_printable_string(buf).data.decode("utf-8", "surrogateescape")