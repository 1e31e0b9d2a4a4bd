"""A teacher record and its DER encoding."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

from workbench.derbase import AnyBuf, DerError
from workbench.derscalars import read_integer, read_sequence, write_integer, write_sequence
from workbench.derstrings import read_printable_string, write_printable_string
from workbench.dervalues import INPUT_DATA_ERROR, decode_char, encode_char, string_to_anybuf

MAX_FIELD_BYTES = 63
OUTPUT_FILE_NAME = "teacher.ber"
_FIELD_COUNT = 6
_ENCODING = "utf-8"


def _field_bytes(text: str) -> bytes:
    return text.encode(_ENCODING, "surrogateescape")


def _field_text(raw: bytes) -> str:
    return raw.decode(_ENCODING, "surrogateescape")


@dataclass
class Teacher:
    """A teacher: name, age, sex, number of students and a free-text note."""

    name: str
    age: int
    sex: str
    stus: int
    p: str | None = None
    p_len: int | None = None

    def __post_init__(self) -> None:
        for label, value in (("name", self.name), ("sex", self.sex)):
            if len(_field_bytes(value)) > MAX_FIELD_BYTES:
                raise ValueError(f"{label} longer than {MAX_FIELD_BYTES} bytes")
        if self.p_len is None:
            self.p_len = len(_field_bytes(self.p)) if self.p is not None else 0

    def _note_bytes(self) -> bytes:
        return _field_bytes(self.p) if self.p is not None else b""

    def matches(self, other) -> bool:
        """Return True if both records agree, comparing only ``p_len`` bytes of the note."""
        if other is None:
            return False
        return (
            self.name == other.name
            and self.sex == other.sex
            and self.age == other.age
            and self.stus == other.stus
            and self.p_len == other.p_len
            and self._note_bytes()[: self.p_len] == other._note_bytes()[: self.p_len]
        )

    def describe(self) -> str:
        """Return the record as ``key = value`` lines."""
        note = self.p if self.p is not None else "(null)"
        return (
            f"name = {self.name}\n"
            f"age = {self.age}\n"
            f"sex = {self.sex}\n"
            f"stus = {self.stus}\n"
            f"p = {note}\n"
            f"pLen = {self.p_len}\n"
        )


def _encode_text(text: str) -> AnyBuf:
    return write_printable_string(string_to_anybuf(_field_bytes(text)))


def _encode_note(teacher: Teacher) -> AnyBuf:
    if teacher.p is None:
        if teacher.p_len:
            raise DerError(INPUT_DATA_ERROR, "note length given without a note")
        return encode_char(None)
    raw = _field_bytes(teacher.p)
    if teacher.p_len > len(raw):
        raise DerError(INPUT_DATA_ERROR, "note length exceeds the note")
    return encode_char(raw[: teacher.p_len])


def teacher_encode(teacher: Teacher) -> bytes:
    """Encode a teacher as a DER SEQUENCE of its six fields."""
    if teacher is None:
        raise ValueError("no teacher given")
    items = [
        _encode_text(teacher.name),
        write_integer(teacher.age),
        _encode_text(teacher.sex),
        write_integer(teacher.stus),
        _encode_note(teacher),
        write_integer(teacher.p_len),
    ]
    return write_sequence(items).data


def _decode_text(buf: AnyBuf, label: str) -> str:
    raw = read_printable_string(buf).data
    if len(raw) > MAX_FIELD_BYTES:
        raise DerError(DerError.LENGTH, f"{label} longer than {MAX_FIELD_BYTES} bytes")
    return _field_text(raw)


def teacher_decode(data) -> Teacher:
    """Decode bytes written by :func:`teacher_encode` into a :class:`Teacher`."""
    if not data:
        raise ValueError("no data to decode")
    items = read_sequence(AnyBuf(bytes(data)))
    if len(items) < _FIELD_COUNT:
        raise DerError(DerError.LENGTH, f"expected {_FIELD_COUNT} fields, got {len(items)}")
    name_buf, age_buf, sex_buf, stus_buf, note_buf, len_buf = items[:_FIELD_COUNT]
    note = decode_char(note_buf)
    return Teacher(
        name=_decode_text(name_buf, "name"),
        age=read_integer(age_buf),
        sex=_decode_text(sex_buf, "sex"),
        stus=read_integer(stus_buf),
        p=note if note else None,
        p_len=read_integer(len_buf),
    )


def _default_output_path() -> Path:
    if sys.platform == "win32":
        return Path("d:\\keymng\\client\\ber") / OUTPUT_FILE_NAME
    return Path("./ber") / OUTPUT_FILE_NAME


def write_to_file(data, path=None) -> Path:
    """Write encoded bytes to ``path`` (default ``./ber/teacher.ber``) and return the path."""
    if data is None:
        raise ValueError("no data to write")
    target = Path(path) if path is not None else _default_output_path()
    with open(target, "wb") as handle:
        handle.write(bytes(data))
    return target


def main(argv=None) -> int:
    """Encode a sample teacher, save it, decode it and report whether it survived."""
    parser = argparse.ArgumentParser(description="Round-trip a teacher record through DER.")
    parser.add_argument("--output", default=None, help="file to write the encoding to")
    args = parser.parse_args(argv)

    teacher = Teacher(name="bigmax", age=30, sex="man", stus=60, p="hello world")
    encoded = teacher_encode(teacher)
    try:
        write_to_file(encoded, args.output)
    except OSError:
        print("open file error !")
    decoded = teacher_decode(encoded)

    if teacher.matches(decoded):
        print("code sucess!")
    else:
        print("code failure!")
    return 0