# workbench

Two small, independent toolkits in one package:

- **A DER codec** for a handful of ASN.1 types (INTEGER, BIT STRING,
  PrintableString, BMPString, NULL and SEQUENCE), plus a sample record
  format, `Teacher`, built on top of it.
- **A behaviour-tree toolkit** for game AI: sequences, selectors, active
  selectors, parallels, monitors, filters, repeats, conditions and actions,
  with a fluent builder.

The package has no runtime dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## DER encoding

Encoded values travel as `AnyBuf` objects (from `workbench.derbase`): the
bytes in `data`, the tag number in `data_type`, and `unused_bits` for bit
strings.

- `workbench.derbase` — the `Tag` enumeration of universal tag numbers,
  `AnyBuf`, `DerError`, and the low-level helpers `identifier`, `read_tag`,
  `read_length`, `length_of_size`, `int_to_bytes`, `bytes_to_int`,
  `write_tag_and_length` and `read_tag_and_length`.
- `workbench.derscalars` — `write_integer` / `read_integer` (unsigned
  32-bit values), `write_bit_string` / `read_bit_string`,
  `write_sequence` / `read_sequence` (a list of element encodings), and
  `write_null` / `read_null`.
- `workbench.derstrings` — `write_char_string`, `write_bmp_string`,
  `write_printable_string` (a BMPString when the buffer is typed
  `Tag.BMP_STRING`, a PrintableString otherwise) and their `read_*`
  counterparts.
- `workbench.dervalues` — `string_to_anybuf`, `write_null_sequence`, and
  `encode_char` / `decode_char` (text as a PrintableString) and
  `encode_unsigned_char` / `decode_unsigned_char` (bytes as a BIT STRING).
  `None` encodes an empty value; an empty, non-`None` input is rejected.

```python
from workbench.derscalars import read_integer, read_sequence, write_integer, write_sequence
from workbench.dervalues import decode_char, encode_char

encoded = write_integer(30)
assert read_integer(encoded) == 30

seq = write_sequence([encode_char("hello"), write_integer(60)])
text_buf, number_buf = read_sequence(seq)
assert decode_char(text_buf) == "hello"
assert read_integer(number_buf) == 60
```

Errors raise `DerError`, whose `code` attribute tells what went wrong:
`DerError.LENGTH` (a bad or truncated length), `DerError.LENGTH_NOT_EQUAL`
(a declared length that does not match the data), `DerError.DATA_RANGE`
(an integer outside 0 to 2³²−1), `DerError.INVALID_TAG` (for instance a
SEQUENCE or NULL expected and something else found), and 106 for empty
input to the `dervalues` encoders.

### Error log

`workbench.derlog` is a small append-only log writer. `der_log(level,
status, message, file=None, line=None, path=None)` appends a line such as

```
[2024.01.31 12:00:00] [ERROR] [ERRNO is 201] bad length [codec.py] [42]
```

to `path`, or to `default_log_path()` (`$HOME/log/itderlog.log`) when no
path is given, and returns the line. `LogLevel.NOLOG` writes nothing, and a
file that cannot be opened is skipped silently. `format_entry` renders a
line without writing it. The codec modules do not call it themselves; use
it from your own code where you want a record of failures.

## The Teacher record

`workbench.teacher` defines `Teacher` (`name`, `age`, `sex`, `stus`, an
optional note `p` and its length `p_len`). Name and sex are limited to 63
bytes. `teacher_encode` turns a record into DER bytes — a SEQUENCE of the
six fields — and `teacher_decode` reads them back. `Teacher.matches`
compares two records (the note only up to `p_len` bytes) and
`Teacher.describe` renders one as `key = value` lines. `write_to_file`
saves encoded bytes, by default to `./ber/teacher.ber`.

```python
from workbench.teacher import Teacher, teacher_decode, teacher_encode

t = Teacher(name="bigmax", age=30, sex="man", stus=60, p="hello world")
assert teacher_decode(teacher_encode(t)).matches(t)
```

A round-trip self check that encodes a sample record, writes it out,
decodes it and prints `code sucess!` or `code failure!`:

```
workbench-teacher
workbench-teacher --output teacher.ber
```

If the output file cannot be opened (for instance when `./ber` does not
exist) it prints `open file error !` and carries on with the check.

## Behaviour trees

Nodes live in `workbench.behavior`; the builder and the tree in
`workbench.tree`. Every node has a `status` (a `Status`) and the methods
`tick`, `reset`, `abort`, `is_running`, `is_success`, `is_failure` and
`is_terminated`. `Parallel` and `Monitor` take a success and a failure
`Policy` (`REQUIRE_ONE` or `REQUIRE_ALL`).

The builder works in pre-order: each call adds a node as a child of the
current one and descends into it, `back()` climbs one level, and `end()`
returns the finished `BehaviorTree`.

```python
from workbench.tree import ActionMode, BehaviorTreeBuilder, ConditionMode

tree = (
    BehaviorTreeBuilder()
    .active_selector()
        .sequence()
            .condition(ConditionMode.IS_SEE_ENEMY, False).back()
            .action(ActionMode.ATTACK).back()
        .back()
        .action(ActionMode.PATROL)
    .end()
)

for _ in range(10):
    tree.tick()
```

Conditions (`IsSeeEnemy`, `IsHealthLow`, `IsEnemyDead`) roll a die from 1
to 100 on each tick and print what they found; actions (`Attack`,
`Runaway`, `Patrol`) print their name and succeed. To make runs
repeatable, pass a function returning the roll: `BehaviorTreeBuilder(dice)`
hands it to every condition it builds.

`build_demo_tree()` builds a sample guard: when it sees an enemy it runs
away if its health is low and otherwise fights until the enemy is dead,
and it patrols when nothing is in sight. To tick it frame by frame:

```
workbench-bt
workbench-bt --ticks 20 --seed 7
```

## What it does not do

The DER codec handles only the types listed above, and integers only as
unsigned 32-bit values. Encoded records are returned as bytes or written
to a file; the package has no network client or server to send them
anywhere. The behaviour-tree conditions and actions only roll dice and
print — there is no game world behind them.