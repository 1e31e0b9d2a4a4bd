"""DER encoding of PrintableString and BMPString values."""

from __future__ import annotations

from workbench.derbase import AnyBuf, Tag, read_tag_and_length, write_tag_and_length

PRINTABLE_STRING_TAG = 0x13
BMP_STRING_TAG = 0x1E


def write_char_string(buf: AnyBuf) -> AnyBuf:
    """Encode ``buf.data`` as a DER PrintableString."""
    return write_tag_and_length(buf, PRINTABLE_STRING_TAG)


def read_char_string(buf: AnyBuf) -> AnyBuf:
    """Decode a DER character string back into its content bytes."""
    return read_tag_and_length(buf)


def write_bmp_string(buf: AnyBuf) -> AnyBuf:
    """Encode ``buf.data`` as a DER BMPString."""
    return write_tag_and_length(buf, BMP_STRING_TAG)


def read_bmp_string(buf: AnyBuf) -> AnyBuf:
    """Decode a DER BMPString back into its content bytes."""
    return read_tag_and_length(buf)


def write_printable_string(buf: AnyBuf) -> AnyBuf:
    """Encode ``buf`` as a BMPString if it is typed so, else as a PrintableString."""
    if buf.data_type == Tag.BMP_STRING:
        return write_bmp_string(buf)
    return write_char_string(buf)


def read_printable_string(buf: AnyBuf) -> AnyBuf:
    """Decode a DER PrintableString or BMPString into its content bytes."""
    return read_tag_and_length(buf)