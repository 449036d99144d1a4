#!/usr/bin/env python3
"""Diff two raw sampler header blocks field by field.

Usage:
    python tools/header_diff.py <program|keygroup|sample|effect|reverb> before.bin after.bin

Reads two header blocks as captured from the sampler, decodes the fields
that differ with the header layout for that record type, and lists bytes
that changed outside any known field.  Useful for checking what a partial
update actually touched.
"""

from __future__ import annotations
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
from midi.codec import HeaderCodecError
from midi.effects import EffectMapperFactory
from midi.fields import HeaderField, HeaderMapper
from midi.keygroup import KeyGroupMapper
from midi.program import ProgramMapper
from midi.reverb import ReverbMapper
from midi.sample import SampleMapper

MAPPERS = {
    "program": ProgramMapper,
    "keygroup": KeyGroupMapper,
    "sample": SampleMapper,
    "reverb": ReverbMapper,
}


def mapper_for(kind: str, block: bytes) -> HeaderMapper:
    if kind == "effect":
        return EffectMapperFactory().for_block(block)
    try:
        return MAPPERS[kind]()
    except KeyError:
        raise ValueError(f"Unknown header kind {kind!r}") from None


def diff_fields(mapper: HeaderMapper, before: bytes, after: bytes) -> list[tuple[HeaderField, object, object]]:
    """Return (field, old_value, new_value) for every field whose bytes differ."""
    before = mapper.check_block(before)
    after = mapper.check_block(after)
    diffs = []
    for f in mapper.fields:
        if before[f.offset:f.end] != after[f.offset:f.end]:
            diffs.append((f, f.read(before), f.read(after)))
    return diffs


def diff_unmapped(mapper: HeaderMapper, before: bytes, after: bytes) -> list[tuple[int, int, int]]:
    """Return (offset, old, new) for changed bytes not covered by any field."""
    covered = {i for f in mapper.fields for i in range(f.offset, f.end)}
    return [
        (i, b, a) for i, (b, a) in enumerate(zip(before, after))
        if b != a and i not in covered
    ]


def main() -> None:
    if len(sys.argv) != 4:
        print(__doc__)
        sys.exit(1)

    kind = sys.argv[1]
    path_before = Path(sys.argv[2])
    path_after = Path(sys.argv[3])
    for path in (path_before, path_after):
        if not path.exists():
            print(f"File not found: {path}")
            sys.exit(1)

    before = path_before.read_bytes()
    after = path_after.read_bytes()
    try:
        mapper = mapper_for(kind, before)
        fields = diff_fields(mapper, before, after)
    except HeaderCodecError as exc:
        print(f"Cannot decode headers: {exc}")
        sys.exit(1)
    except ValueError as exc:
        print(exc)
        sys.exit(1)
    unmapped = diff_unmapped(mapper, before, after)

    print(f"{type(mapper).__name__}: {path_before.name} -> {path_after.name}")
    if not fields and not unmapped:
        print("No differences found.")
        return

    print(f"{'Offset':>6}  {'Field':<45}  {'Before':>14}  {'After':>14}")
    print("-" * 85)
    for f, old, new in fields:
        print(f"{f.offset:>6}  {f.path:<45}  {old!s:>14}  {new!s:>14}")
    for offset, old, new in unmapped:
        print(f"{offset:>6}  {'(unmapped)':<45}  {old:>14}  {new:>14}")


if __name__ == "__main__":
    main()
