from __future__ import annotations
from dataclasses import dataclass

from midi.codec import BLANK_NAME
from model.records import HeaderRecord


@dataclass
class Reverb(HeaderRecord):
    name: str = BLANK_NAME
    type: int = 0  # raw reverb algorithm code
    output_level: int = 0
    output_balance: int = 0
    stereo_width: int = 0
    pre_delay: int = 0
    high_frequency_cut: int = 0
    high_frequency_damping: int = 0
    decay_time: int = 0
    diffusion: int = 0
