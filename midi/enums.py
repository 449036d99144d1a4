"""Enumerated header parameters.

Member values are the raw byte codes.  Decoding is total: codes the
sampler does not define fall back to a documented default, except for
effect types, which select a mapper and therefore must be known.
"""
from __future__ import annotations
from enum import IntEnum

from midi.codec import UnknownEffectTypeError


class Waveform(IntEnum):
    TRIANGLE = 0
    SAWTOOTH = 1
    SQUARE = 2
    RANDOM = 3


class ZonePlayback(IntEnum):
    AS_SAMPLE = 0
    LOOP_IN_RELEASE = 1
    LOOP_UNTIL_RELEASE = 2
    NO_LOOPS = 3
    # Default for unknown codes; the sampler itself never writes 4.
    PLAY_TO_SAMPLE_END = 4


class PlaybackType(IntEnum):
    LOOP_IN_RELEASE = 0
    LOOP_UNTIL_RELEASE = 1
    NO_LOOPING = 2
    PLAY_TO_SAMPLE_END = 3


class FilterType(IntEnum):
    LOW_PASS = 0
    BAND_PASS = 1
    HIGH_PASS = 2
    EQ = 3


class ModulationSource(IntEnum):
    NO_SOURCE = 0
    MODWHEEL = 1
    BEND = 2
    PRESSURE = 3
    EXTERNAL = 4
    NOTE_ON_VELOCITY = 5
    KEY = 6
    LFO1 = 7
    LFO2 = 8
    ENV1 = 9
    ENV2 = 10
    NOT_MODWHEEL = 11
    NOT_BEND = 12
    NOT_EXTERNAL = 13
    ENV3 = 14


class BendMode(IntEnum):
    NORMAL = 0
    HELD = 1


class Pitch(IntEnum):
    TRACK = 0
    CONST = 1


class Reassignment(IntEnum):
    OLDEST = 0
    QUIETEST = 1


class PortamentoType(IntEnum):
    RATE = 0
    TIME = 1


class EffectType(IntEnum):
    CHORUS = 6
    PITCH_SHIFT = 7
    ECHO = 8
    DELAY = 9


def _lookup(enum_cls, code: int, default):
    try:
        return enum_cls(code)
    except ValueError:
        return default


def decode_waveform(code: int) -> Waveform:
    return _lookup(Waveform, code, Waveform.TRIANGLE)


def decode_zone_playback(code: int) -> ZonePlayback:
    return _lookup(ZonePlayback, code, ZonePlayback.PLAY_TO_SAMPLE_END)


def decode_playback_type(code: int) -> PlaybackType:
    return _lookup(PlaybackType, code, PlaybackType.LOOP_IN_RELEASE)


def decode_filter_type(code: int) -> FilterType:
    return _lookup(FilterType, code, FilterType.LOW_PASS)


def decode_modulation_source(code: int) -> ModulationSource:
    return _lookup(ModulationSource, code, ModulationSource.NO_SOURCE)


# Two-state parameters: zero is the first state, anything else the second.

def decode_bend_mode(code: int) -> BendMode:
    return BendMode.NORMAL if code == 0 else BendMode.HELD


def decode_pitch(code: int) -> Pitch:
    return Pitch.TRACK if code == 0 else Pitch.CONST


def decode_reassignment(code: int) -> Reassignment:
    return Reassignment.OLDEST if code == 0 else Reassignment.QUIETEST


def decode_portamento_type(code: int) -> PortamentoType:
    return PortamentoType.RATE if code == 0 else PortamentoType.TIME


def decode_effect_type(code: int) -> EffectType:
    try:
        return EffectType(code)
    except ValueError:
        raise UnknownEffectTypeError(f"Unknown effect type code {code}") from None
