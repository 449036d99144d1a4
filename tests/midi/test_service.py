import pytest
from core.config import AppConfig
from core.logger import AppLogger
from midi.codec import FieldIndexError, UnknownEffectTypeError
from midi.effects import encode_effect
from midi.enums import EffectType
from midi.keygroup import KeyGroupMapper
from midi.program import ProgramMapper
from midi.reverb import ReverbMapper
from midi.sample import SampleMapper
from midi.service import SamplerHeaderService
from model.effect import EchoEffect
from model.keygroup import KeyGroup
from model.program import Program
from model.reverb import Reverb
from model.sample import Sample


class FakeDriver:
    def __init__(self, blocks=None, ok=True):
        self.blocks = blocks or {}
        self.calls = []
        self.ok = ok

    def _record(self, name, *args):
        self.calls.append((name, *args))
        return self.ok

    def request_program_header(self, program_number):
        return self.blocks["program"]

    def request_keygroup_header(self, program_number, keygroup_number):
        return self.blocks["keygroup"]

    def request_sample_header(self, sample_number):
        return self.blocks["sample"]

    def request_effect(self, effect_number):
        return self.blocks["effect"]

    def request_reverb(self, reverb_number):
        return self.blocks["reverb"]

    def new_program(self, program_number, data):
        return self._record("new_program", program_number, data)

    def new_keygroup(self, program_number, keygroup_number, data):
        return self._record("new_keygroup", program_number, keygroup_number, data)

    def new_sample_from_template(self, sample_number, template, data):
        return self._record("new_sample_from_template", sample_number, template, data)

    def change_program_header(self, program_number, index, data):
        return self._record("change_program_header", program_number, index, data)

    def change_keygroup_header(self, program_number, keygroup_number, index, data):
        return self._record("change_keygroup_header", program_number, keygroup_number, index, data)

    def change_sample_header(self, sample_number, index, data):
        return self._record("change_sample_header", sample_number, index, data)

    def effect_update(self, effect_number, data):
        return self._record("effect_update", effect_number, data)

    def effect_update_part(self, effect_number, index, data):
        return self._record("effect_update_part", effect_number, index, data)

    def reverb_update(self, reverb_number, data):
        return self._record("reverb_update", reverb_number, data)

    def reverb_update_part(self, reverb_number, index, data):
        return self._record("reverb_update_part", reverb_number, index, data)


@pytest.fixture
def config(tmp_path):
    return AppConfig(path=tmp_path / "config.json")


@pytest.fixture
def logger(qapp):
    return AppLogger()


def _service(driver, logger, config):
    return SamplerHeaderService(driver, logger=logger, config=config)


def test_request_program(logger, config):
    program = Program(name="BRASS       ")
    program.midi.channel = 4
    driver = FakeDriver({"program": list(ProgramMapper().encode(program))})
    assert _service(driver, logger, config).request_program(0) == program


def test_request_keygroup_sample_and_reverb(logger, config):
    kg = KeyGroup()
    kg.zones[1].pan = -9
    sample = Sample(name="SNARE       ", sample_rate=22050)
    reverb = Reverb(name="PLATE       ", pre_delay=129)
    driver = FakeDriver({
        "keygroup": KeyGroupMapper().encode(kg),
        "sample": SampleMapper().encode(sample),
        "reverb": ReverbMapper().encode(reverb),
    })
    service = _service(driver, logger, config)
    assert service.request_keygroup(0, 1) == kg
    assert service.request_sample(3) == sample
    assert service.request_reverb(2) == reverb


def test_request_effect_selects_variant_from_block(logger, config):
    echo = EchoEffect(name="ECHO        ", delay1=250)
    driver = FakeDriver({"effect": encode_effect(echo)})
    decoded = _service(driver, logger, config).request_effect(1)
    assert isinstance(decoded, EchoEffect)
    assert decoded == echo


def test_request_effect_with_unknown_type_raises(logger, config):
    driver = FakeDriver({"effect": bytes(64)})
    with pytest.raises(UnknownEffectTypeError):
        _service(driver, logger, config).request_effect(0)


def test_new_program_creates_program_and_first_keygroup(logger, config):
    driver = FakeDriver()
    assert _service(driver, logger, config).new_program(7)
    assert driver.calls[0] == ("new_program", 7, ProgramMapper().encode(Program()))
    assert driver.calls[1] == ("new_keygroup", 255, 0, KeyGroupMapper().encode(KeyGroup()))


def test_new_program_reports_driver_failure(logger, config):
    driver = FakeDriver(ok=False)
    received = []
    logger.message_logged.connect(lambda cat, msg: received.append((cat, msg)))
    assert _service(driver, logger, config).new_program(7) is False
    assert ("MIDI", "New program 7 failed") in received


def test_new_keygroup(logger, config):
    driver = FakeDriver()
    assert _service(driver, logger, config).new_keygroup(2, 3)
    assert driver.calls == [("new_keygroup", 2, 3, KeyGroupMapper().encode(KeyGroup()))]


def test_template_sample_is_one_cycle_of_root_pitch(logger, config):
    sample = _service(FakeDriver(), logger, config).template_sample()
    assert sample.name == "NEW         "
    assert sample.sample_rate == 44100
    assert sample.sample_length == 99
    assert sample.play_length == 99


def test_new_sample_from_template(logger, config):
    driver = FakeDriver()
    service = _service(driver, logger, config)
    assert service.new_sample_from_template(5, "SINE")
    name, number, template, data = driver.calls[0]
    assert (name, number, template) == ("new_sample_from_template", 5, "SINE")
    assert SampleMapper().decode(data) == service.template_sample()


def test_template_sample_follows_config(tmp_path, logger):
    cfg = AppConfig(path=tmp_path / "config.json")
    cfg.new_sample_rate = 22050
    cfg.new_sample_root_hz = 220.0
    sample = _service(FakeDriver(), logger, cfg).template_sample()
    assert sample.sample_rate == 22050
    assert sample.sample_length == 99


def test_change_program_header_sends_encoded_patch(logger, config):
    driver = FakeDriver()
    service = _service(driver, logger, config)
    assert service.change_program_header(4, 65, -1.54)
    assert driver.calls == [("change_program_header", 4, 65, bytes([118, 254]))]


def test_change_program_midi_channel(logger, config):
    driver = FakeDriver()
    _service(driver, logger, config).change_program_midi_channel(4, 9)
    assert driver.calls == [("change_program_header", 4, 16, b"\x09")]


def test_change_program_header_rejects_unknown_offset(logger, config):
    driver = FakeDriver()
    with pytest.raises(FieldIndexError):
        _service(driver, logger, config).change_program_header(4, 21, 1)
    assert driver.calls == []


def test_change_keygroup_and_sample_header(logger, config):
    driver = FakeDriver()
    service = _service(driver, logger, config)
    service.change_keygroup_header(1, 2, 140, -1)
    service.change_sample_header(6, 138, 32000)
    assert driver.calls == [
        ("change_keygroup_header", 1, 2, 140, bytes([255, 255])),
        ("change_sample_header", 6, 138, bytes([0x00, 0x7D])),
    ]


def test_change_effect_header_uses_type_mapper(logger, config):
    driver = FakeDriver()
    service = _service(driver, logger, config)
    service.change_effect_header(EffectType.ECHO, 3, 58, -2)
    service.change_effect_header(7, 3, 41, 0.01)
    assert driver.calls == [
        ("effect_update_part", 3, 58, b"\xfe"),
        ("effect_update_part", 3, 41, bytes([2, 0])),
    ]


def test_change_reverb_header(logger, config):
    driver = FakeDriver()
    _service(driver, logger, config).change_reverb_header(0, 21, 300)
    assert driver.calls == [("reverb_update_part", 0, 21, bytes([44, 2]))]


def test_name_changes(logger, config):
    driver = FakeDriver()
    service = _service(driver, logger, config)
    service.change_program_name(1, "a")
    service.change_keygroup_name(1, 0, 58, "b")
    service.change_sample_name(2, "c")
    service.change_effect_name(3, "d")
    service.change_reverb_name(4, "e")
    pad = [10] * 11
    assert driver.calls == [
        ("change_program_header", 1, 3, bytes([11] + pad)),
        ("change_keygroup_header", 1, 0, 58, bytes([12] + pad)),
        ("change_sample_header", 2, 3, bytes([13] + pad)),
        ("effect_update_part", 3, 0, bytes([14] + pad)),
        ("reverb_update_part", 4, 0, bytes([15] + pad)),
    ]


def test_keygroup_name_on_non_zone_offset_raises(logger, config):
    with pytest.raises(FieldIndexError):
        _service(FakeDriver(), logger, config).change_keygroup_name(1, 0, 3, "b")


def test_full_updates(logger, config):
    driver = FakeDriver()
    service = _service(driver, logger, config)
    program = Program(name="LEAD        ")
    kg = KeyGroup()
    sample = Sample(valid=True)
    echo = EchoEffect(pan1=-3)
    reverb = Reverb(decay_time=50)
    assert service.update_program(1, program)
    assert service.update_keygroup(1, 0, kg)
    assert service.update_sample(2, sample)
    assert service.update_effect(3, echo)
    assert service.update_reverb(4, reverb)
    assert driver.calls == [
        ("change_program_header", 1, 0, ProgramMapper().encode(program)),
        ("change_keygroup_header", 1, 0, 0, KeyGroupMapper().encode(kg)),
        ("change_sample_header", 2, 0, SampleMapper().encode(sample)),
        ("effect_update", 3, encode_effect(echo)),
        ("reverb_update", 4, ReverbMapper().encode(reverb)),
    ]


def test_patch_logging_follows_config(tmp_path, logger):
    cfg = AppConfig(path=tmp_path / "config.json")
    cfg.log_header_patches = True
    received = []
    logger.message_logged.connect(lambda cat, msg: received.append(cat))
    _service(FakeDriver(), logger, cfg).change_program_header(0, 25, 10)
    assert "CODEC" in received


def test_partial_changes_are_logged_as_hex(logger, config):
    received = []
    logger.message_logged.connect(lambda cat, msg: received.append((cat, msg)))
    _service(FakeDriver(), logger, config).change_sample_header(6, 138, 32000)
    assert ("MIDI", "Sample 6 @138: 00 7D") in received


def test_update_effect_rejects_mismatched_type_without_sending(logger, config):
    driver = FakeDriver()
    echo = EchoEffect(type=EffectType.DELAY)
    with pytest.raises(UnknownEffectTypeError, match="EchoEffect"):
        _service(driver, logger, config).update_effect(3, echo)
    assert driver.calls == []
