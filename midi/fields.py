"""Table-driven header layouts.

Each record type describes its header block as a tuple of ``HeaderField``
entries (offset, attribute path, codec).  ``HeaderMapper`` walks that table
for full decode and encode, and looks entries up by offset for partial
updates, so both paths always produce the same bytes for a field.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from core.logger import AppLogger
from midi.codec import (
    BlockSizeError, FieldIndexError, check_byte, decode_fine_tune,
    decode_loop_length, decode_name, decode_plus_minus_12,
    decode_plus_minus_24, decode_plus_minus_50, decode_plus_minus_999,
    encode_fine_tune, encode_loop_length, encode_name,
    encode_plus_minus_999, encode_signed, pack_le, unpack_le,
)


@dataclass(frozen=True)
class FieldCodec:
    name: str
    width: int
    encode: Callable[[Any], list[int]]
    decode: Callable[[Sequence[int]], Any]


def enum_codec(decode_fn: Callable[[int], Any]) -> FieldCodec:
    """Single-byte codec for an IntEnum; writes the member's integer value."""
    return FieldCodec(
        f"enum:{decode_fn.__name__}", 1,
        lambda v: [check_byte(int(v))],
        lambda d: decode_fn(d[0]),
    )


def flag_codec(true_value: int = 1) -> FieldCodec:
    return FieldCodec(
        f"flag:{true_value}", 1,
        lambda v: [true_value if v else 0],
        lambda d: d[0] != 0,
    )


BYTE = FieldCodec("byte", 1, lambda v: [check_byte(v)], lambda d: d[0])
FLAG = flag_codec()
PLUS_MINUS_50 = FieldCodec("+-50", 1, lambda v: [encode_signed(v)], lambda d: decode_plus_minus_50(d[0]))
PLUS_MINUS_24 = FieldCodec("+-24", 1, lambda v: [encode_signed(v)], lambda d: decode_plus_minus_24(d[0]))
PLUS_MINUS_12 = FieldCodec("+-12", 1, lambda v: [encode_signed(v)], lambda d: decode_plus_minus_12(d[0]))
PLUS_MINUS_999 = FieldCodec("+-999", 2, encode_plus_minus_999, lambda d: decode_plus_minus_999(d[0], d[1]))
FINE_TUNE = FieldCodec("fine tune", 2, encode_fine_tune, lambda d: decode_fine_tune(d[0], d[1]))
UINT16 = FieldCodec("uint16", 2, lambda v: pack_le(v, 2), unpack_le)
UINT32 = FieldCodec("uint32", 4, lambda v: pack_le(v, 4), unpack_le)
LOOP_LENGTH = FieldCodec("loop length", 6, encode_loop_length, decode_loop_length)
NAME = FieldCodec("name", 12, encode_name, decode_name)


# ---------------------------------------------------------------------------
# Attribute paths: dotted attribute names, digits index into lists
# ---------------------------------------------------------------------------

def _step(obj, part: str):
    return obj[int(part)] if part.isdigit() else getattr(obj, part)


def get_path(obj, path: str):
    for part in path.split("."):
        obj = _step(obj, part)
    return obj


def set_path(obj, path: str, value) -> None:
    parent, _, last = path.rpartition(".")
    if parent:
        obj = get_path(obj, parent)
    if last.isdigit():
        obj[int(last)] = value
    else:
        setattr(obj, last, value)


@dataclass(frozen=True)
class HeaderField:
    offset: int
    path: str
    codec: FieldCodec

    @property
    def width(self) -> int:
        return self.codec.width

    @property
    def end(self) -> int:
        return self.offset + self.codec.width

    def read(self, block: Sequence[int]):
        return self.codec.decode(block[self.offset:self.end])

    def write(self, block: bytearray, value) -> None:
        block[self.offset:self.end] = bytes(self.codec.encode(value))


def index_layout(fields: Sequence[HeaderField], block_size: int) -> dict[int, HeaderField]:
    """Map start offsets to fields, rejecting overlapping or out-of-block entries."""
    by_offset: dict[int, HeaderField] = {}
    used: dict[int, str] = {}
    for f in fields:
        if f.offset < 0 or f.end > block_size:
            raise ValueError(f"Field '{f.path}' at {f.offset} exceeds block size {block_size}")
        for i in range(f.offset, f.end):
            if i in used:
                raise ValueError(f"Field '{f.path}' overlaps '{used[i]}' at offset {i}")
            used[i] = f.path
        by_offset[f.offset] = f
    return by_offset


RECORD_BLOCK_SIZE = 192
EFFECT_BLOCK_SIZE = 64


class HeaderMapper:
    """Converts one record type to and from its fixed-size header block.

    Subclasses set ``fields``, ``block_size`` and ``record_factory``.
    """

    block_size = RECORD_BLOCK_SIZE
    fields: tuple[HeaderField, ...] = ()
    record_factory: Callable[[], Any] = dict

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        cls._by_offset = index_layout(cls.fields, cls.block_size)

    def __init__(self, logger: AppLogger | None = None) -> None:
        self._logger = logger

    @property
    def name_offsets(self) -> list[int]:
        return [f.offset for f in self.fields if f.codec is NAME]

    def field_at(self, index: int) -> HeaderField:
        try:
            return self._by_offset[index]
        except KeyError:
            raise FieldIndexError(
                f"{type(self).__name__}: no field starts at offset {index}"
            ) from None

    def check_block(self, block: Sequence[int]) -> bytes:
        data = bytes(block)
        if len(data) != self.block_size:
            raise BlockSizeError(
                f"{type(self).__name__} expects {self.block_size} bytes, got {len(data)}"
            )
        return data

    def decode(self, block: Sequence[int]):
        data = self.check_block(block)
        record = self.record_factory()
        for f in self.fields:
            set_path(record, f.path, f.read(data))
        return record

    def encode(self, record) -> bytes:
        data = bytearray(self.block_size)
        for f in self.fields:
            f.write(data, get_path(record, f.path))
        return bytes(data)

    def encode_partial(self, index: int, value) -> bytes:
        """Return the bytes for the single field starting at ``index``."""
        f = self.field_at(index)
        encoded = bytes(f.codec.encode(value))
        if self._logger is not None:
            self._logger.codec(
                f"{type(self).__name__} {f.path}@{index}: received {value!r}, "
                f"converted to {list(encoded)}"
            )
        return encoded

    def encode_name(self, index: int, text: str) -> bytes:
        f = self.field_at(index)
        if f.codec is not NAME:
            raise FieldIndexError(
                f"{type(self).__name__}: offset {index} is '{f.path}', not a name field"
            )
        return self.encode_partial(index, text)
