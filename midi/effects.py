"""Effect header mappers (chorus, pitch shift, echo, delay) and their registry.

All effect variants share a 64-byte block whose common fields sit at the
same offsets; byte 13 holds the effect type, which selects the mapper for
the variant-specific tail of the block.
"""
from __future__ import annotations
from typing import Sequence

from core.logger import AppLogger
from midi.codec import BlockSizeError, UnknownEffectTypeError
from midi.enums import EffectType, decode_effect_type
from midi.fields import (
    BYTE, EFFECT_BLOCK_SIZE, FINE_TUNE, NAME, PLUS_MINUS_50, UINT16,
    HeaderField as F, HeaderMapper, enum_codec,
)
from model.effect import (
    ChorusEffect, DelayEffect, EchoEffect, Effect, PitchShiftEffect,
)

EFFECT_NAME_OFFSET = 0
EFFECT_TYPE_OFFSET = 13

EFFECT_BASE_FIELDS: tuple[F, ...] = (
    F(EFFECT_NAME_OFFSET, "name", NAME),
    F(EFFECT_TYPE_OFFSET, "type", enum_codec(decode_effect_type)),
    F(15, "output_level", BYTE),
    F(16, "output_balance", PLUS_MINUS_50),
    F(17, "stereo_width", BYTE),
    F(24, "high_frequency_cut", BYTE),
)


class ChorusEffectMapper(HeaderMapper):
    block_size = EFFECT_BLOCK_SIZE
    record_factory = ChorusEffect
    fields = EFFECT_BASE_FIELDS + (
        F(36, "modulation_speed", BYTE),
        F(37, "modulation_depth", BYTE),
        F(38, "feedback_level", BYTE),
    )


class DelayEffectMapper(HeaderMapper):
    block_size = EFFECT_BLOCK_SIZE
    record_factory = DelayEffect
    fields = EFFECT_BASE_FIELDS + (
        F(26, "feedback", BYTE),
        F(27, "delay_time", UINT16),
        F(29, "lfo_depth", UINT16),
        F(31, "lfo_rate", BYTE),
    )


class EchoEffectMapper(HeaderMapper):
    block_size = EFFECT_BLOCK_SIZE
    record_factory = EchoEffect
    fields = EFFECT_BASE_FIELDS + (
        F(49, "delay1", UINT16),
        F(51, "delay2", UINT16),
        F(53, "delay3", UINT16),
        F(55, "feedback1_level", BYTE),
        F(56, "feedback2_level", BYTE),
        F(57, "feedback3_level", BYTE),
        F(58, "pan1", PLUS_MINUS_50),
        F(59, "pan2", PLUS_MINUS_50),
        F(60, "pan3", PLUS_MINUS_50),
        F(61, "left_extra_delay", UINT16),
        F(63, "feedback_damping", BYTE),
    )


class PitchShiftEffectMapper(HeaderMapper):
    block_size = EFFECT_BLOCK_SIZE
    record_factory = PitchShiftEffect
    fields = EFFECT_BASE_FIELDS + (
        # Tune offsets store the fraction byte first, like every other fine tune pair.
        F(39, "left_tune_offset", FINE_TUNE),
        F(41, "right_tune_offset", FINE_TUNE),
        F(43, "left_feedback_level", BYTE),
        F(44, "right_feedback_level", BYTE),
        F(45, "left_delay_time", UINT16),
        F(47, "right_delay_time", UINT16),
    )


EFFECT_MAPPERS: dict[EffectType, type[HeaderMapper]] = {
    EffectType.CHORUS: ChorusEffectMapper,
    EffectType.PITCH_SHIFT: PitchShiftEffectMapper,
    EffectType.ECHO: EchoEffectMapper,
    EffectType.DELAY: DelayEffectMapper,
}


class EffectMapperFactory:
    """Selects the mapper for an effect by its type code."""

    def __init__(self, logger: AppLogger | None = None) -> None:
        self._logger = logger

    def for_type(self, type_code: int) -> HeaderMapper:
        effect_type = decode_effect_type(int(type_code))
        return EFFECT_MAPPERS[effect_type](self._logger)

    def for_block(self, block: Sequence[int]) -> HeaderMapper:
        if len(block) != EFFECT_BLOCK_SIZE:
            raise BlockSizeError(
                f"Effect header expects {EFFECT_BLOCK_SIZE} bytes, got {len(block)}"
            )
        return self.for_type(block[EFFECT_TYPE_OFFSET])

    def for_effect(self, effect: Effect) -> HeaderMapper:
        mapper = self.for_type(effect.type)
        if not isinstance(effect, mapper.record_factory):
            raise UnknownEffectTypeError(
                f"{type(effect).__name__} cannot carry effect type "
                f"{EffectType(effect.type).name} ({int(effect.type)})"
            )
        return mapper


def decode_effect(block: Sequence[int], logger: AppLogger | None = None) -> Effect:
    return EffectMapperFactory(logger).for_block(block).decode(block)


def encode_effect(effect: Effect, logger: AppLogger | None = None) -> bytes:
    return EffectMapperFactory(logger).for_effect(effect).encode(effect)
