from __future__ import annotations
from dataclasses import dataclass, field

from midi.codec import BLANK_NAME
from midi.enums import (
    BendMode, ModulationSource, PortamentoType, Reassignment, Waveform,
)
from model.records import HeaderRecord

_NO_SOURCE = ModulationSource.NO_SOURCE


@dataclass
class ProgramMidi(HeaderRecord):
    program_number: int = 0
    channel: int = 0
    polyphony: int = 0
    priority: int = 0
    play_range_low: int = 0
    play_range_high: int = 0
    reassignment: Reassignment = Reassignment.OLDEST
    transpose: int = 0


@dataclass
class MasterOutput(HeaderRecord):
    individual_output: int = 0
    individual_level: int = 0
    stereo_level: int = 0
    loudness: int = 0
    loudness_mod_input1_amount: int = 0
    loudness_mod_input2_type: ModulationSource = _NO_SOURCE
    loudness_mod_input2_amount: int = 0
    loudness_mod_input3_type: ModulationSource = _NO_SOURCE
    loudness_mod_input3_amount: int = 0


@dataclass
class MasterPan(HeaderRecord):
    stereo_pan: int = 0
    pan_mod_input1_type: ModulationSource = _NO_SOURCE
    pan_mod_input1_amount: int = 0
    pan_mod_input2_type: ModulationSource = _NO_SOURCE
    pan_mod_input2_amount: int = 0
    pan_mod_input3_type: ModulationSource = _NO_SOURCE
    pan_mod_input3_amount: int = 0


@dataclass
class Lfo1(HeaderRecord):
    waveform: Waveform = Waveform.TRIANGLE
    speed: int = 0
    depth: int = 0
    delay: int = 0
    desync: bool = False
    extra_depth_by_modwheel: int = 0
    extra_depth_by_aftertouch: int = 0
    extra_depth_by_velocity: int = 0
    speed_mod_input_type: ModulationSource = _NO_SOURCE
    speed_mod_input_amount: int = 0
    depth_mod_input_type: ModulationSource = _NO_SOURCE
    depth_mod_input_amount: int = 0
    delay_mod_input_type: ModulationSource = _NO_SOURCE
    delay_mod_input_amount: int = 0


@dataclass
class Lfo2(HeaderRecord):
    waveform: Waveform = Waveform.TRIANGLE
    speed: int = 0
    depth: int = 0
    delay: int = 0
    retrigger: int = 0


@dataclass
class PitchBend(HeaderRecord):
    bend_wheel_up: int = 0
    bend_wheel_down: int = 0
    bend_mode: BendMode = BendMode.NORMAL
    pressure_modulation: int = 0


@dataclass
class ProgramModes(HeaderRecord):
    key_group_cross_fade: bool = False
    mono_legato: bool = False


@dataclass
class SemitoneTuning(HeaderRecord):
    """Per-note temperament offsets in cents, C through B."""
    c: int = 0
    c_sharp: int = 0
    d: int = 0
    d_sharp: int = 0
    e: int = 0
    f: int = 0
    f_sharp: int = 0
    g: int = 0
    g_sharp: int = 0
    a: int = 0
    a_sharp: int = 0
    b: int = 0


@dataclass
class SoftPedal(HeaderRecord):
    loudness_reduction: int = 0
    attack_stretch: int = 0
    filter_close: int = 0


@dataclass
class MasterTuning(HeaderRecord):
    tune: float = 0.0


@dataclass
class Portamento(HeaderRecord):
    enabled: bool = False
    type: PortamentoType = PortamentoType.RATE
    rate: int = 0


@dataclass
class Program(HeaderRecord):
    name: str = BLANK_NAME
    number_of_key_groups: int = 0
    midi: ProgramMidi = field(default_factory=ProgramMidi)
    master_output: MasterOutput = field(default_factory=MasterOutput)
    master_pan: MasterPan = field(default_factory=MasterPan)
    master_tuning: MasterTuning = field(default_factory=MasterTuning)
    semitone_tuning: SemitoneTuning = field(default_factory=SemitoneTuning)
    lfo1: Lfo1 = field(default_factory=Lfo1)
    lfo2: Lfo2 = field(default_factory=Lfo2)
    pitch_bend: PitchBend = field(default_factory=PitchBend)
    modes: ProgramModes = field(default_factory=ProgramModes)
    soft_pedal: SoftPedal = field(default_factory=SoftPedal)
    portamento: Portamento = field(default_factory=Portamento)
    filter1_freq_mod_input1_type: ModulationSource = _NO_SOURCE
    filter1_freq_mod_input2_type: ModulationSource = _NO_SOURCE
    filter1_freq_mod_input3_type: ModulationSource = _NO_SOURCE
    filter2_freq_mod_input1_type: ModulationSource = _NO_SOURCE
    filter2_freq_mod_input2_type: ModulationSource = _NO_SOURCE
    filter2_freq_mod_input3_type: ModulationSource = _NO_SOURCE
    pitch_mod_input_type: ModulationSource = _NO_SOURCE
    loudness_mod_input_type: ModulationSource = _NO_SOURCE
