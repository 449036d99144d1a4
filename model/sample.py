from __future__ import annotations
from dataclasses import dataclass, field

from midi.codec import BLANK_NAME
from midi.enums import PlaybackType
from model.records import HeaderRecord

LOOPS_PER_SAMPLE = 4


@dataclass
class Loop(HeaderRecord):
    loop_start: int = 0
    loop_length: float = 0.0  # sample frames, thousandths resolution
    dwell_time: int = 0
    relative_loop_factors: int = 0


def _loops() -> list[Loop]:
    return [Loop() for _ in range(LOOPS_PER_SAMPLE)]


@dataclass
class Sample(HeaderRecord):
    name: str = BLANK_NAME
    valid: bool = False
    bandwidth: int = 0
    original_pitch: int = 0
    number_of_loops: int = 0
    playback_type: PlaybackType = PlaybackType.LOOP_IN_RELEASE
    tune: float = 0.0
    tuning_offset: int = 0
    sample_rate: int = 0
    sample_length: int = 0
    start_offset: int = 0
    play_length: int = 0
    loops: list[Loop] = field(default_factory=_loops)
