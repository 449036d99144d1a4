from __future__ import annotations

from midi.codec import ValueRangeError, as_int
from midi.fields import (
    BYTE, EFFECT_BLOCK_SIZE, NAME, PLUS_MINUS_50, FieldCodec,
    HeaderField as F, HeaderMapper,
)
from model.reverb import Reverb

REVERB_NAME_OFFSET = 0


def encode_pre_delay(value: int) -> list[int]:
    """Pre-delay is split into a 7-bit low part and the remaining high bits."""
    value = as_int(value)
    if value < 0 or value >> 7 > 0xFF:
        raise ValueRangeError(f"Pre-delay {value} is out of range")
    return [value & 0x7F, value >> 7]


def decode_pre_delay(data) -> int:
    return (data[0] & 0x7F) | (data[1] << 7)


PRE_DELAY = FieldCodec("pre-delay", 2, encode_pre_delay, decode_pre_delay)

REVERB_FIELDS: tuple[F, ...] = (
    F(REVERB_NAME_OFFSET, "name", NAME),
    F(13, "type", BYTE),
    F(15, "output_level", BYTE),
    F(16, "output_balance", PLUS_MINUS_50),
    F(17, "stereo_width", BYTE),
    F(21, "pre_delay", PRE_DELAY),
    F(24, "high_frequency_cut", BYTE),
    F(32, "high_frequency_damping", BYTE),
    F(33, "decay_time", BYTE),
    F(35, "diffusion", BYTE),
)


class ReverbMapper(HeaderMapper):
    block_size = EFFECT_BLOCK_SIZE
    fields = REVERB_FIELDS
    record_factory = Reverb
