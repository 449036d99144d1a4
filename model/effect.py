from __future__ import annotations
from dataclasses import dataclass

from midi.codec import BLANK_NAME
from midi.enums import EffectType
from model.records import HeaderRecord


@dataclass
class Effect(HeaderRecord):
    """Fields shared by every effect variant; ``type`` selects the variant."""
    name: str = BLANK_NAME
    type: EffectType = EffectType.CHORUS
    output_level: int = 0
    output_balance: int = 0
    stereo_width: int = 0
    high_frequency_cut: int = 0


@dataclass
class ChorusEffect(Effect):
    type: EffectType = EffectType.CHORUS
    modulation_speed: int = 0
    modulation_depth: int = 0
    feedback_level: int = 0


@dataclass
class DelayEffect(Effect):
    type: EffectType = EffectType.DELAY
    feedback: int = 0
    delay_time: int = 0
    lfo_depth: int = 0
    lfo_rate: int = 0


@dataclass
class EchoEffect(Effect):
    type: EffectType = EffectType.ECHO
    delay1: int = 0
    delay2: int = 0
    delay3: int = 0
    feedback1_level: int = 0
    feedback2_level: int = 0
    feedback3_level: int = 0
    pan1: int = 0
    pan2: int = 0
    pan3: int = 0
    left_extra_delay: int = 0
    feedback_damping: int = 0


@dataclass
class PitchShiftEffect(Effect):
    type: EffectType = EffectType.PITCH_SHIFT
    left_tune_offset: float = 0.0
    right_tune_offset: float = 0.0
    left_feedback_level: int = 0
    right_feedback_level: int = 0
    left_delay_time: int = 0
    right_delay_time: int = 0
