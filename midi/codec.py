"""Numeric and text codecs for sampler header blocks.

Header blocks are flat sequences of unsigned bytes.  Signed parameters are
stored with a range-specific wraparound, fine tuning is split across a
whole byte and a non-linear fraction byte, loop lengths carry a 16-bit
fraction in front of a 32-bit whole part, and names use the sampler's own
41-symbol alphabet.
"""
from __future__ import annotations
import math
from typing import Sequence


class HeaderCodecError(ValueError):
    """Base class for every header conversion failure."""


class NameEncodingError(HeaderCodecError):
    pass


class FieldIndexError(HeaderCodecError):
    pass


class FractionLookupError(HeaderCodecError):
    pass


class UnknownEffectTypeError(HeaderCodecError):
    pass


class ValueRangeError(HeaderCodecError):
    pass


class BlockSizeError(HeaderCodecError):
    pass


# ---------------------------------------------------------------------------
# Plain bytes
# ---------------------------------------------------------------------------

def js_round(value: float) -> int:
    """Round half up (towards positive infinity), as the sampler tools do."""
    return math.floor(value + 0.5)


def as_int(value) -> int:
    """Coerce an encode input to int, refusing values with a fractional part."""
    if isinstance(value, float) and not value.is_integer():
        raise ValueRangeError(f"Value {value} is not a whole number")
    return int(value)


def check_byte(value: int) -> int:
    value = as_int(value)
    if value < 0 or value > 0xFF:
        raise ValueRangeError(f"Value {value} does not fit in one byte")
    return value


def pack_le(value: int, width: int) -> list[int]:
    """Pack an unsigned integer into ``width`` little-endian bytes."""
    value = as_int(value)
    if value < 0 or value >= 1 << (8 * width):
        raise ValueRangeError(f"Value {value} does not fit in {width} bytes")
    return [(value >> (8 * i)) & 0xFF for i in range(width)]


def unpack_le(data: Sequence[int]) -> int:
    result = 0
    for i, b in enumerate(data):
        result |= (b & 0xFF) << (8 * i)
    return result


# ---------------------------------------------------------------------------
# Sign wraparound
# ---------------------------------------------------------------------------

PLUS_MINUS_50_THRESHOLD = 206
PLUS_MINUS_24_THRESHOLD = 232
PLUS_MINUS_12_THRESHOLD = 244
PLUS_MINUS_999_THRESHOLD = 55537


def decode_signed(value: int, threshold: int) -> int:
    return value - 256 if value >= threshold else value


def encode_signed(value: int) -> int:
    value = as_int(value)
    return check_byte(256 + value if value < 0 else value)


def decode_plus_minus_50(value: int) -> int:
    return decode_signed(value, PLUS_MINUS_50_THRESHOLD)


def decode_plus_minus_24(value: int) -> int:
    return decode_signed(value, PLUS_MINUS_24_THRESHOLD)


def decode_plus_minus_12(value: int) -> int:
    return decode_signed(value, PLUS_MINUS_12_THRESHOLD)


def decode_plus_minus_999(low: int, high: int) -> int:
    raw = low | (high << 8)
    return raw - 65536 if raw >= PLUS_MINUS_999_THRESHOLD else raw


def encode_plus_minus_999(value: int) -> list[int]:
    value = as_int(value)
    raw = 65536 + value if value < 0 else value
    return pack_le(raw, 2)


# ---------------------------------------------------------------------------
# Fine tuning: whole semitones plus hundredths
# ---------------------------------------------------------------------------

# Fraction byte for +0.01 .. +0.99.  The fraction byte for -0.0n is 256
# minus the positive code.
POSITIVE_FRACTION_CODES: tuple[int, ...] = (
    2, 5, 7, 10, 12, 15, 18, 20, 23, 25,
    28, 30, 33, 35, 38, 41, 43, 46, 48, 51,
    53, 56, 59, 61, 64, 66, 69, 71, 74, 76,
    79, 82, 84, 87, 89, 92, 94, 97, 99, 102,
    105, 107, 110, 112, 115, 117, 120, 123, 125, 128,
    130, 133, 135, 138, 140, 143, 146, 148, 151, 153,
    156, 158, 161, 163, 166, 169, 171, 174, 176, 179,
    181, 184, 187, 189, 192, 194, 197, 199, 202, 204,
    207, 210, 212, 215, 217, 220, 222, 225, 227, 230,
    233, 235, 238, 240, 243, 245, 248, 251, 253,
)
NEGATIVE_FRACTION_CODES: tuple[int, ...] = tuple(256 - c for c in POSITIVE_FRACTION_CODES)

_POSITIVE_HUNDREDTHS = {code: i + 1 for i, code in enumerate(POSITIVE_FRACTION_CODES)}
_NEGATIVE_HUNDREDTHS = {code: i + 1 for i, code in enumerate(NEGATIVE_FRACTION_CODES)}


def _hundredths_for(code: int, table: dict[int, int]) -> int:
    if code in table:
        return table[code]
    # Codes the sampler never writes resolve to the closest tabulated one.
    nearest = min(table, key=lambda c: (abs(c - code), c))
    return table[nearest]


def decode_fine_tune(fraction: int, whole: int) -> float:
    """Decode a ``(fraction, whole)`` byte pair into semitones (±50.00)."""
    if whole >= PLUS_MINUS_50_THRESHOLD:
        if fraction == 0:
            return float(whole - 256)
        hundredths = _hundredths_for(fraction, _NEGATIVE_HUNDREDTHS)
        return round(((whole - 255) * 100 - hundredths) / 100, 2)
    if fraction == 0:
        return float(whole)
    hundredths = _hundredths_for(fraction, _POSITIVE_HUNDREDTHS)
    return round((whole * 100 + hundredths) / 100, 2)


def encode_fine_tune(value: float) -> list[int]:
    """Encode semitones into ``[fraction, whole]`` bytes.

    Raises FractionLookupError when the remainder rounds to a full
    semitone (e.g. 0.995), which has no fraction code.
    """
    whole = math.trunc(value)
    hundredths = js_round(math.fmod(value, 1) * 100)
    if abs(hundredths) > len(POSITIVE_FRACTION_CODES):
        raise FractionLookupError(
            f"Fraction of {value} rounds to {hundredths / 100:+.2f}, which has no code"
        )
    if whole < 0 and hundredths == 0:
        return [0, check_byte(256 + whole)]
    if whole < 0 or hundredths < 0:
        return [NEGATIVE_FRACTION_CODES[abs(hundredths) - 1], check_byte(255 + whole)]
    if hundredths == 0:
        return [0, check_byte(whole)]
    return [POSITIVE_FRACTION_CODES[hundredths - 1], check_byte(whole)]


# ---------------------------------------------------------------------------
# Loop length: 16-bit thousandths then 32-bit whole
# ---------------------------------------------------------------------------

_LOOP_FRACTION_STEP = 65535 / 999
_LOOP_FRACTION_SCALE = 65.6
_LOOP_FRACTION_SATURATION = 998.9


def decode_loop_length(data: Sequence[int]) -> float:
    if len(data) != 6:
        raise ValueRangeError(f"Loop length needs 6 bytes, got {len(data)}")
    fraction = data[0] | (data[1] << 8)
    whole = unpack_le(data[2:6])
    return round(whole + js_round(fraction / _LOOP_FRACTION_STEP) / 1000, 3)


def encode_loop_length(value: float) -> list[int]:
    whole = math.trunc(value)
    thousandths = math.fmod(value, 1) * 1000
    if thousandths >= _LOOP_FRACTION_SATURATION:
        fraction = 0xFFFF
    else:
        fraction = js_round(thousandths * _LOOP_FRACTION_SCALE)
    return pack_le(fraction, 2) + pack_le(whole, 4)


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

NAME_LENGTH = 12
ALPHABET = "0123456789 ABCDEFGHIJKLMNOPQRSTUVWXYZ*+-."
_ALPHABET_INDEX = {ch: i for i, ch in enumerate(ALPHABET)}
BLANK_NAME = " " * NAME_LENGTH


def decode_name(data: Sequence[int]) -> str:
    """Decode a 12-byte name; codes outside the alphabet read as spaces."""
    return "".join(
        ALPHABET[b] if 0 <= b < len(ALPHABET) else " "
        for b in data[:NAME_LENGTH]
    )


def encode_name(text: str) -> list[int]:
    if len(text) > NAME_LENGTH:
        raise NameEncodingError(
            f"Name {text!r} is longer than {NAME_LENGTH} characters"
        )
    padded = text.upper().ljust(NAME_LENGTH)
    bad = [ch for ch in padded if ch not in _ALPHABET_INDEX]
    if bad:
        raise NameEncodingError(f"Name {text!r} contains unsupported characters: {''.join(bad)!r}")
    return [_ALPHABET_INDEX[ch] for ch in padded]
