from __future__ import annotations

from midi.enums import decode_playback_type
from midi.fields import (
    BYTE, FINE_TUNE, LOOP_LENGTH, NAME, PLUS_MINUS_50, UINT16, UINT32,
    RECORD_BLOCK_SIZE, HeaderField as F, HeaderMapper, enum_codec, flag_codec,
)
from model.sample import LOOPS_PER_SAMPLE, Sample

SAMPLE_NAME_OFFSET = 3
LOOP_BLOCK_OFFSET = 38
LOOP_BLOCK_STRIDE = 12
LOOP_FACTOR_OFFSET = 86


def _loop_fields(n: int) -> tuple[F, ...]:
    base = LOOP_BLOCK_OFFSET + n * LOOP_BLOCK_STRIDE
    loop = f"loops.{n}"
    return (
        F(base, f"{loop}.loop_start", UINT32),
        F(base + 4, f"{loop}.loop_length", LOOP_LENGTH),
        F(base + 10, f"{loop}.dwell_time", UINT16),
        F(LOOP_FACTOR_OFFSET + n * LOOP_BLOCK_STRIDE, f"{loop}.relative_loop_factors", UINT32),
    )


SAMPLE_FIELDS: tuple[F, ...] = (
    F(1, "bandwidth", BYTE),
    F(2, "original_pitch", BYTE),
    F(SAMPLE_NAME_OFFSET, "name", NAME),
    F(15, "valid", flag_codec(128)),
    F(16, "number_of_loops", BYTE),
    F(19, "playback_type", enum_codec(decode_playback_type)),
    F(20, "tune", FINE_TUNE),
    F(26, "sample_length", UINT32),
    F(30, "start_offset", UINT32),
    F(34, "play_length", UINT32),
    *(f for n in range(LOOPS_PER_SAMPLE) for f in _loop_fields(n)),
    F(138, "sample_rate", UINT16),
    F(140, "tuning_offset", PLUS_MINUS_50),
)


class SampleMapper(HeaderMapper):
    block_size = RECORD_BLOCK_SIZE
    fields = SAMPLE_FIELDS
    record_factory = Sample
