from __future__ import annotations

from midi.enums import decode_filter_type, decode_pitch, decode_zone_playback
from midi.fields import (
    BYTE, FINE_TUNE, FLAG, NAME, PLUS_MINUS_24, PLUS_MINUS_50, PLUS_MINUS_999,
    RECORD_BLOCK_SIZE, HeaderField as F, HeaderMapper, enum_codec,
)
from model.keygroup import ZONES_PER_KEYGROUP, KeyGroup

ZONE_BLOCK_OFFSET = 34
ZONE_BLOCK_STRIDE = 24
ZONE_NAME_OFFSETS = tuple(
    ZONE_BLOCK_OFFSET + n * ZONE_BLOCK_STRIDE for n in range(ZONES_PER_KEYGROUP)
)


def _zone_fields(n: int) -> tuple[F, ...]:
    base = ZONE_NAME_OFFSETS[n]
    zone = f"zones.{n}"
    return (
        F(base, f"{zone}.sample_name", NAME),
        F(base + 12, f"{zone}.velocity_low", BYTE),
        F(base + 13, f"{zone}.velocity_high", BYTE),
        F(base + 14, f"{zone}.tune", FINE_TUNE),
        F(base + 16, f"{zone}.loudness", PLUS_MINUS_50),
        F(base + 17, f"{zone}.filter_cutoff", PLUS_MINUS_50),
        F(base + 18, f"{zone}.pan", PLUS_MINUS_50),
        F(base + 19, f"{zone}.playback", enum_codec(decode_zone_playback)),
        # Per-zone parameters stored in parallel arrays after the zone blocks.
        F(132 + n, f"{zone}.pitch", enum_codec(decode_pitch)),
        F(136 + n, f"{zone}.output", BYTE),
        F(140 + 2 * n, f"{zone}.vel_to_start_pos_adj", PLUS_MINUS_999),
    )


def _rate_level_modulation(envelope: str, start: int) -> tuple[F, ...]:
    names = (
        "velocity_mod_of_rate1", "velocity_mod_of_rate4",
        "velocity_off_mod_of_rate4", "key_mod_of_rate2_and_rate4",
        "velocity_mod_of_envelope",
    )
    return tuple(F(start + i, f"{envelope}.{name}", PLUS_MINUS_50) for i, name in enumerate(names))


KEYGROUP_FIELDS: tuple[F, ...] = (
    F(3, "span.low_note", BYTE),
    F(4, "span.high_note", BYTE),
    F(5, "span.tune", FINE_TUNE),
    F(7, "filter1.frequency", BYTE),
    F(8, "filter1.key_follow", PLUS_MINUS_24),
    F(12, "envelope1.attack", BYTE),
    F(13, "envelope1.decay", BYTE),
    F(14, "envelope1.sustain", BYTE),
    F(15, "envelope1.release", BYTE),
    F(16, "envelope1.velocity_mod_of_attack", PLUS_MINUS_50),
    F(17, "envelope1.velocity_mod_of_release", PLUS_MINUS_50),
    F(18, "envelope1.velocity_off_mod_of_release", PLUS_MINUS_50),
    F(19, "envelope1.key_mod_of_decay_and_release", PLUS_MINUS_50),
    F(20, "envelope2.rate1", BYTE),
    F(21, "envelope2.rate3", BYTE),
    F(22, "envelope2.level3", BYTE),
    F(23, "envelope2.rate4", BYTE),
    *_rate_level_modulation("envelope2", 24),
    F(30, "velocity_cross_fade", FLAG),
    *(f for n in range(ZONES_PER_KEYGROUP) for f in _zone_fields(n)),
    F(130, "span.beat", PLUS_MINUS_50),
    F(131, "envelope1.attack_hold", FLAG),
    F(149, "filter1.resonance", BYTE),
    F(150, "pitch_mod_by_lfo1", PLUS_MINUS_50),
    F(151, "filter1.freq_mod_input1_amount", PLUS_MINUS_50),
    F(152, "filter1.freq_mod_input2_amount", PLUS_MINUS_50),
    F(153, "filter1.freq_mod_input3_amount", PLUS_MINUS_50),
    F(154, "pitch_mod_input_amount", PLUS_MINUS_50),
    F(155, "loudness_mod_input_amount", PLUS_MINUS_50),
    F(156, "envelope2.level1", BYTE),
    F(157, "envelope2.rate2", BYTE),
    F(158, "envelope2.level2", BYTE),
    F(159, "envelope2.level4", BYTE),
    F(160, "mute_group", BYTE),
    # 161 (effects bus) and 162 (send level) are not exposed by the sampler UI.
    F(168, "filter2_tone_enabled", FLAG),
    F(169, "filter2.attenuator", BYTE),
    F(170, "filter2.filter_type", enum_codec(decode_filter_type)),
    F(171, "filter2.resonance", BYTE),
    F(172, "tone.center_frequency", BYTE),
    F(173, "tone.slope", PLUS_MINUS_50),
    F(174, "filter2.freq_mod_input1_amount", PLUS_MINUS_50),
    F(175, "filter2.freq_mod_input2_amount", PLUS_MINUS_50),
    F(176, "filter2.freq_mod_input3_amount", PLUS_MINUS_50),
    F(177, "filter2.frequency", BYTE),
    F(178, "filter2.key_follow", PLUS_MINUS_24),
    F(179, "envelope3.rate1", BYTE),
    F(180, "envelope3.level1", BYTE),
    F(181, "envelope3.rate2", BYTE),
    F(182, "envelope3.level2", BYTE),
    F(183, "envelope3.rate3", BYTE),
    F(184, "envelope3.level3", BYTE),
    F(185, "envelope3.rate4", BYTE),
    F(186, "envelope3.level4", BYTE),
    *_rate_level_modulation("envelope3", 187),
)


class KeyGroupMapper(HeaderMapper):
    """Keygroup header: key span, filters, three envelopes and four zones."""

    block_size = RECORD_BLOCK_SIZE
    fields = KEYGROUP_FIELDS
    record_factory = KeyGroup
