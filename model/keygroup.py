from __future__ import annotations
from dataclasses import dataclass, field

from midi.codec import BLANK_NAME
from midi.enums import FilterType, Pitch, ZonePlayback
from model.records import HeaderRecord

ZONES_PER_KEYGROUP = 4


@dataclass
class Span(HeaderRecord):
    low_note: int = 0
    high_note: int = 0
    tune: float = 0.0
    beat: int = 0


@dataclass
class Filter1(HeaderRecord):
    frequency: int = 0
    key_follow: int = 0
    resonance: int = 0
    freq_mod_input1_amount: int = 0
    freq_mod_input2_amount: int = 0
    freq_mod_input3_amount: int = 0


@dataclass
class Filter2(HeaderRecord):
    filter_type: FilterType = FilterType.LOW_PASS
    frequency: int = 0
    key_follow: int = 0
    resonance: int = 0
    attenuator: int = 0
    freq_mod_input1_amount: int = 0
    freq_mod_input2_amount: int = 0
    freq_mod_input3_amount: int = 0


@dataclass
class Tone(HeaderRecord):
    center_frequency: int = 0
    slope: int = 0


@dataclass
class Envelope1(HeaderRecord):
    """Amplitude envelope (ADSR)."""
    attack: int = 0
    decay: int = 0
    sustain: int = 0
    release: int = 0
    attack_hold: bool = False
    velocity_mod_of_attack: int = 0
    velocity_mod_of_release: int = 0
    velocity_off_mod_of_release: int = 0
    key_mod_of_decay_and_release: int = 0


@dataclass
class RateLevelEnvelope(HeaderRecord):
    """Four-stage rate/level envelope used for envelopes 2 and 3."""
    rate1: int = 0
    level1: int = 0
    rate2: int = 0
    level2: int = 0
    rate3: int = 0
    level3: int = 0
    rate4: int = 0
    level4: int = 0
    velocity_mod_of_rate1: int = 0
    velocity_mod_of_rate4: int = 0
    velocity_off_mod_of_rate4: int = 0
    key_mod_of_rate2_and_rate4: int = 0
    velocity_mod_of_envelope: int = 0


@dataclass
class Zone(HeaderRecord):
    sample_name: str = BLANK_NAME
    velocity_low: int = 0
    velocity_high: int = 0
    tune: float = 0.0
    loudness: int = 0
    filter_cutoff: int = 0
    pan: int = 0
    playback: ZonePlayback = ZonePlayback.PLAY_TO_SAMPLE_END
    pitch: Pitch = Pitch.TRACK
    output: int = 0
    vel_to_start_pos_adj: int = 0


def _zones() -> list[Zone]:
    return [Zone() for _ in range(ZONES_PER_KEYGROUP)]


@dataclass
class KeyGroup(HeaderRecord):
    span: Span = field(default_factory=Span)
    filter1: Filter1 = field(default_factory=Filter1)
    filter2: Filter2 = field(default_factory=Filter2)
    filter2_tone_enabled: bool = False
    tone: Tone = field(default_factory=Tone)
    envelope1: Envelope1 = field(default_factory=Envelope1)
    envelope2: RateLevelEnvelope = field(default_factory=RateLevelEnvelope)
    envelope3: RateLevelEnvelope = field(default_factory=RateLevelEnvelope)
    zones: list[Zone] = field(default_factory=_zones)
    velocity_cross_fade: bool = False
    mute_group: int = 0
    pitch_mod_by_lfo1: int = 0
    pitch_mod_input_amount: int = 0
    loudness_mod_input_amount: int = 0
