from __future__ import annotations

from midi.enums import (
    decode_bend_mode, decode_modulation_source, decode_portamento_type,
    decode_reassignment, decode_waveform,
)
from midi.fields import (
    BYTE, FINE_TUNE, FLAG, NAME, PLUS_MINUS_12, PLUS_MINUS_50,
    RECORD_BLOCK_SIZE, HeaderField as F, HeaderMapper, enum_codec,
)
from model.program import Program

PROGRAM_NAME_OFFSET = 3

_MOD_SOURCE = enum_codec(decode_modulation_source)
_WAVEFORM = enum_codec(decode_waveform)

_SEMITONES = (
    "c", "c_sharp", "d", "d_sharp", "e", "f",
    "f_sharp", "g", "g_sharp", "a", "a_sharp", "b",
)

PROGRAM_FIELDS: tuple[F, ...] = (
    F(PROGRAM_NAME_OFFSET, "name", NAME),
    F(15, "midi.program_number", BYTE),
    F(16, "midi.channel", BYTE),
    F(17, "midi.polyphony", BYTE),
    F(18, "midi.priority", BYTE),
    F(19, "midi.play_range_low", BYTE),
    F(20, "midi.play_range_high", BYTE),
    F(22, "master_output.individual_output", BYTE),
    F(23, "master_output.stereo_level", BYTE),
    F(24, "master_pan.stereo_pan", PLUS_MINUS_50),
    F(25, "master_output.loudness", BYTE),
    F(26, "master_output.loudness_mod_input1_amount", PLUS_MINUS_50),
    F(29, "lfo2.speed", BYTE),
    F(30, "lfo2.depth", BYTE),
    F(31, "lfo2.delay", BYTE),
    F(33, "lfo1.speed", BYTE),
    F(34, "lfo1.depth", BYTE),
    F(35, "lfo1.delay", BYTE),
    F(36, "lfo1.extra_depth_by_modwheel", BYTE),
    F(37, "lfo1.extra_depth_by_aftertouch", BYTE),
    F(38, "lfo1.extra_depth_by_velocity", BYTE),
    F(39, "pitch_bend.bend_wheel_up", BYTE),
    F(40, "pitch_bend.pressure_modulation", PLUS_MINUS_12),
    F(41, "modes.key_group_cross_fade", FLAG),
    F(42, "number_of_key_groups", BYTE),
    *(F(44 + i, f"semitone_tuning.{note}", PLUS_MINUS_50) for i, note in enumerate(_SEMITONES)),
    F(59, "lfo1.desync", FLAG),
    F(61, "midi.reassignment", enum_codec(decode_reassignment)),
    F(62, "soft_pedal.loudness_reduction", BYTE),
    F(63, "soft_pedal.attack_stretch", BYTE),
    F(64, "soft_pedal.filter_close", BYTE),
    F(65, "master_tuning.tune", FINE_TUNE),
    F(70, "master_output.individual_level", BYTE),
    F(72, "modes.mono_legato", FLAG),
    F(73, "pitch_bend.bend_wheel_down", BYTE),
    F(74, "pitch_bend.bend_mode", enum_codec(decode_bend_mode)),
    F(75, "midi.transpose", PLUS_MINUS_50),
    F(76, "master_pan.pan_mod_input1_type", _MOD_SOURCE),
    F(77, "master_pan.pan_mod_input2_type", _MOD_SOURCE),
    F(78, "master_pan.pan_mod_input3_type", _MOD_SOURCE),
    F(79, "master_output.loudness_mod_input2_type", _MOD_SOURCE),
    F(80, "master_output.loudness_mod_input3_type", _MOD_SOURCE),
    F(81, "lfo1.speed_mod_input_type", _MOD_SOURCE),
    F(82, "lfo1.depth_mod_input_type", _MOD_SOURCE),
    F(83, "lfo1.delay_mod_input_type", _MOD_SOURCE),
    F(84, "filter1_freq_mod_input1_type", _MOD_SOURCE),
    F(85, "filter1_freq_mod_input2_type", _MOD_SOURCE),
    F(86, "filter1_freq_mod_input3_type", _MOD_SOURCE),
    F(87, "pitch_mod_input_type", _MOD_SOURCE),
    F(88, "loudness_mod_input_type", _MOD_SOURCE),
    F(89, "master_pan.pan_mod_input1_amount", PLUS_MINUS_50),
    F(90, "master_pan.pan_mod_input2_amount", PLUS_MINUS_50),
    F(91, "master_pan.pan_mod_input3_amount", PLUS_MINUS_50),
    F(92, "master_output.loudness_mod_input2_amount", PLUS_MINUS_50),
    F(93, "master_output.loudness_mod_input3_amount", PLUS_MINUS_50),
    F(94, "lfo1.speed_mod_input_amount", PLUS_MINUS_50),
    F(95, "lfo1.depth_mod_input_amount", PLUS_MINUS_50),
    F(96, "lfo1.delay_mod_input_amount", PLUS_MINUS_50),
    F(97, "lfo1.waveform", _WAVEFORM),
    F(98, "lfo2.waveform", _WAVEFORM),
    F(99, "filter2_freq_mod_input1_type", _MOD_SOURCE),
    F(100, "filter2_freq_mod_input2_type", _MOD_SOURCE),
    F(101, "filter2_freq_mod_input3_type", _MOD_SOURCE),
    F(102, "lfo2.retrigger", BYTE),
    F(110, "portamento.rate", BYTE),
    F(111, "portamento.type", enum_codec(decode_portamento_type)),
    F(112, "portamento.enabled", FLAG),
)


class ProgramMapper(HeaderMapper):
    """Program header: 192 bytes, one per program slot."""

    block_size = RECORD_BLOCK_SIZE
    fields = PROGRAM_FIELDS
    record_factory = Program
