"""Header-level operations on a sampler reached through a transport driver.

The driver moves raw header blocks and patches; this service converts them
to and from records with the header mappers.  Driver calls that report
failure return ``False`` and are logged, never retried.
"""
from __future__ import annotations
import math
from typing import Protocol, Sequence

from core.config import AppConfig
from core.logger import AppLogger
from midi.effects import EFFECT_NAME_OFFSET, EffectMapperFactory
from midi.enums import EffectType
from midi.fields import HeaderMapper
from midi.keygroup import KeyGroupMapper
from midi.program import PROGRAM_NAME_OFFSET, ProgramMapper
from midi.reverb import REVERB_NAME_OFFSET, ReverbMapper
from midi.sample import SAMPLE_NAME_OFFSET, SampleMapper
from model.effect import Effect
from model.keygroup import KeyGroup
from model.program import Program
from model.reverb import Reverb
from model.sample import Sample

PROGRAM_MIDI_CHANNEL_OFFSET = 16
NEW_SAMPLE_NAME = "NEW"


class SamplerDriver(Protocol):
    """Byte-block primitives provided by the native MIDI transport."""

    def request_program_header(self, program_number: int) -> Sequence[int]: ...

    def request_keygroup_header(self, program_number: int, keygroup_number: int) -> Sequence[int]: ...

    def request_sample_header(self, sample_number: int) -> Sequence[int]: ...

    def request_effect(self, effect_number: int) -> Sequence[int]: ...

    def request_reverb(self, reverb_number: int) -> Sequence[int]: ...

    def new_program(self, program_number: int, data: bytes) -> bool: ...

    def new_keygroup(self, program_number: int, keygroup_number: int, data: bytes) -> bool: ...

    def new_sample_from_template(self, sample_number: int, template: str, data: bytes) -> bool: ...

    def change_program_header(self, program_number: int, index: int, data: bytes) -> bool: ...

    def change_keygroup_header(
        self, program_number: int, keygroup_number: int, index: int, data: bytes,
    ) -> bool: ...

    def change_sample_header(self, sample_number: int, index: int, data: bytes) -> bool: ...

    def effect_update(self, effect_number: int, data: bytes) -> bool: ...

    def effect_update_part(self, effect_number: int, index: int, data: bytes) -> bool: ...

    def reverb_update(self, reverb_number: int, data: bytes) -> bool: ...

    def reverb_update_part(self, reverb_number: int, index: int, data: bytes) -> bool: ...


class SamplerHeaderService:
    def __init__(
        self,
        driver: SamplerDriver,
        logger: AppLogger | None = None,
        config: AppConfig | None = None,
    ) -> None:
        self._driver = driver
        self._logger = logger or AppLogger()
        self._config = config or AppConfig()
        mapper_logger = self._logger if self._config.log_header_patches else None
        self._programs = ProgramMapper(mapper_logger)
        self._keygroups = KeyGroupMapper(mapper_logger)
        self._samples = SampleMapper(mapper_logger)
        self._reverbs = ReverbMapper(mapper_logger)
        self._effects = EffectMapperFactory(mapper_logger)

    def _result(self, ok: bool, action: str) -> bool:
        if not ok:
            self._logger.midi(f"{action} failed")
        return bool(ok)

    # -- requests --

    def request_program(self, program_number: int) -> Program:
        self._logger.midi(f"Request program header {program_number}")
        return self._programs.decode(self._driver.request_program_header(program_number))

    def request_keygroup(self, program_number: int, keygroup_number: int) -> KeyGroup:
        self._logger.midi(f"Request keygroup header {program_number}/{keygroup_number}")
        data = self._driver.request_keygroup_header(program_number, keygroup_number)
        return self._keygroups.decode(data)

    def request_sample(self, sample_number: int) -> Sample:
        self._logger.midi(f"Request sample header {sample_number}")
        return self._samples.decode(self._driver.request_sample_header(sample_number))

    def request_effect(self, effect_number: int) -> Effect:
        self._logger.midi(f"Request effect {effect_number}")
        data = self._driver.request_effect(effect_number)
        return self._effects.for_block(data).decode(data)

    def request_reverb(self, reverb_number: int) -> Reverb:
        self._logger.midi(f"Request reverb {reverb_number}")
        return self._reverbs.decode(self._driver.request_reverb(reverb_number))

    # -- creation --

    def new_program(self, program_number: int) -> bool:
        """Create a default program plus the first keygroup it needs.

        The keygroup is addressed through a placeholder program number that
        the sampler resolves to the program just created.
        """
        program_ok = self._driver.new_program(program_number, self._programs.encode(Program()))
        keygroup_ok = self._driver.new_keygroup(
            self._config.new_program_keygroup_program_number, 0,
            self._keygroups.encode(KeyGroup()),
        )
        self._logger.midi(f"New program {program_number}: program={program_ok} keygroup={keygroup_ok}")
        return self._result(program_ok and keygroup_ok, f"New program {program_number}")

    def new_keygroup(self, program_number: int, keygroup_number: int) -> bool:
        data = self._keygroups.encode(KeyGroup())
        ok = self._driver.new_keygroup(program_number, keygroup_number, data)
        return self._result(ok, f"New keygroup {program_number}/{keygroup_number}")

    def template_sample(self) -> Sample:
        """Default header for a sample created from a template: one cycle at the root pitch."""
        rate = int(self._config.new_sample_rate)
        frames = math.trunc(rate / self._config.new_sample_root_hz)
        sample = Sample(name=NEW_SAMPLE_NAME.ljust(12), sample_rate=rate)
        sample.sample_length = frames - 1
        sample.play_length = frames - 1
        return sample

    def new_sample_from_template(self, sample_number: int, template: str) -> bool:
        data = self._samples.encode(self.template_sample())
        ok = self._driver.new_sample_from_template(sample_number, template, data)
        return self._result(ok, f"New sample {sample_number} from template {template!r}")

    # -- full updates --

    def update_program(self, program_number: int, program: Program) -> bool:
        data = self._programs.encode(program)
        ok = self._driver.change_program_header(program_number, 0, data)
        return self._result(ok, f"Update program {program_number}")

    def update_keygroup(self, program_number: int, keygroup_number: int, keygroup: KeyGroup) -> bool:
        data = self._keygroups.encode(keygroup)
        ok = self._driver.change_keygroup_header(program_number, keygroup_number, 0, data)
        return self._result(ok, f"Update keygroup {program_number}/{keygroup_number}")

    def update_sample(self, sample_number: int, sample: Sample) -> bool:
        ok = self._driver.change_sample_header(sample_number, 0, self._samples.encode(sample))
        return self._result(ok, f"Update sample {sample_number}")

    def update_effect(self, effect_number: int, effect: Effect) -> bool:
        data = self._effects.for_effect(effect).encode(effect)
        ok = self._driver.effect_update(effect_number, data)
        return self._result(ok, f"Update effect {effect_number}")

    def update_reverb(self, reverb_number: int, reverb: Reverb) -> bool:
        ok = self._driver.reverb_update(reverb_number, self._reverbs.encode(reverb))
        return self._result(ok, f"Update reverb {reverb_number}")

    # -- partial updates --

    def change_program_header(self, program_number: int, index: int, value) -> bool:
        patch = self._programs.encode_partial(index, value)
        self._logger.patch(f"Program {program_number}", index, patch)
        ok = self._driver.change_program_header(program_number, index, patch)
        return self._result(ok, f"Change program {program_number} @{index}")

    def change_program_midi_channel(self, program_number: int, channel: int) -> bool:
        return self.change_program_header(program_number, PROGRAM_MIDI_CHANNEL_OFFSET, channel)

    def change_keygroup_header(
        self, program_number: int, keygroup_number: int, index: int, value,
    ) -> bool:
        patch = self._keygroups.encode_partial(index, value)
        self._logger.patch(f"Keygroup {program_number}/{keygroup_number}", index, patch)
        ok = self._driver.change_keygroup_header(program_number, keygroup_number, index, patch)
        return self._result(ok, f"Change keygroup {program_number}/{keygroup_number} @{index}")

    def change_sample_header(self, sample_number: int, index: int, value) -> bool:
        patch = self._samples.encode_partial(index, value)
        self._logger.patch(f"Sample {sample_number}", index, patch)
        ok = self._driver.change_sample_header(sample_number, index, patch)
        return self._result(ok, f"Change sample {sample_number} @{index}")

    def change_effect_header(
        self, effect_type: int | EffectType, effect_number: int, index: int, value,
    ) -> bool:
        patch = self._effects.for_type(effect_type).encode_partial(index, value)
        self._logger.patch(f"Effect {effect_number}", index, patch)
        ok = self._driver.effect_update_part(effect_number, index, patch)
        return self._result(ok, f"Change effect {effect_number} @{index}")

    def change_reverb_header(self, reverb_number: int, index: int, value) -> bool:
        patch = self._reverbs.encode_partial(index, value)
        self._logger.patch(f"Reverb {reverb_number}", index, patch)
        ok = self._driver.reverb_update_part(reverb_number, index, patch)
        return self._result(ok, f"Change reverb {reverb_number} @{index}")

    # -- names --

    def change_program_name(self, program_number: int, name: str) -> bool:
        index = PROGRAM_NAME_OFFSET
        patch = self._programs.encode_name(index, name)
        ok = self._driver.change_program_header(program_number, index, patch)
        return self._result(ok, f"Rename program {program_number}")

    def change_keygroup_name(
        self, program_number: int, keygroup_number: int, index: int, name: str,
    ) -> bool:
        """Rename the sample assigned to the zone whose name starts at ``index``."""
        patch = self._keygroups.encode_name(index, name)
        ok = self._driver.change_keygroup_header(program_number, keygroup_number, index, patch)
        return self._result(ok, f"Rename keygroup {program_number}/{keygroup_number} zone @{index}")

    def change_sample_name(self, sample_number: int, name: str) -> bool:
        index = SAMPLE_NAME_OFFSET
        patch = self._samples.encode_name(index, name)
        ok = self._driver.change_sample_header(sample_number, index, patch)
        return self._result(ok, f"Rename sample {sample_number}")

    def change_effect_name(self, effect_number: int, name: str) -> bool:
        # The name sits in the shared part of the block; any variant's mapper encodes it.
        mapper: HeaderMapper = self._effects.for_type(EffectType.CHORUS)
        patch = mapper.encode_name(EFFECT_NAME_OFFSET, name)
        ok = self._driver.effect_update_part(effect_number, EFFECT_NAME_OFFSET, patch)
        return self._result(ok, f"Rename effect {effect_number}")

    def change_reverb_name(self, reverb_number: int, name: str) -> bool:
        patch = self._reverbs.encode_name(REVERB_NAME_OFFSET, name)
        ok = self._driver.reverb_update_part(reverb_number, REVERB_NAME_OFFSET, patch)
        return self._result(ok, f"Rename reverb {reverb_number}")
