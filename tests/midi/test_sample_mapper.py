import pytest
from midi.codec import FieldIndexError
from midi.enums import PlaybackType
from midi.sample import SampleMapper
from model.sample import Sample

LOOP_LENGTHS = (3523.004, 3523.999, 100.5, 0.0)


def _sample() -> Sample:
    s = Sample(name="KICK 808    ")
    s.valid = True
    s.bandwidth = 1
    s.original_pitch = 60
    s.number_of_loops = 2
    s.playback_type = PlaybackType.PLAY_TO_SAMPLE_END
    s.tune = 12.34
    s.tuning_offset = -7
    s.sample_rate = 44100
    s.sample_length = 1_000_000
    s.start_offset = 12
    s.play_length = 999_988
    for n, loop in enumerate(s.loops):
        loop.loop_start = 1000 * (n + 1)
        loop.loop_length = LOOP_LENGTHS[n]
        loop.dwell_time = 9999 - n
        loop.relative_loop_factors = 2 ** (n * 8)
    return s


def test_round_trip():
    mapper = SampleMapper()
    sample = _sample()
    assert mapper.decode(mapper.encode(sample)) == sample


def test_valid_flag_encodes_as_128():
    data = SampleMapper().encode(_sample())
    assert data[15] == 128
    assert SampleMapper().decode(data).valid is True


def test_multibyte_fields_are_little_endian():
    data = SampleMapper().encode(_sample())
    assert list(data[26:30]) == [0x40, 0x42, 0x0F, 0x00]
    assert list(data[138:140]) == [0x44, 0xAC]
    assert list(data[38:42]) == [0xE8, 0x03, 0, 0]
    assert list(data[42:48]) == [6, 1, 195, 13, 0, 0]
    assert list(data[54:60]) == [255, 255, 195, 13, 0, 0]
    assert list(data[48:50]) == [0x0F, 0x27]
    assert list(data[98:102]) == [0, 1, 0, 0]
    assert data[140] == 249


def test_encode_partial_loop_length():
    assert SampleMapper().encode_partial(66, 100.5) == bytes([32, 128, 100, 0, 0, 0])


def test_encode_partial_sample_rate():
    assert SampleMapper().encode_partial(138, 22050) == bytes([0x22, 0x56])


@pytest.mark.parametrize("index", [0, 17, 21, 27, 43, 126])
def test_unknown_offsets_raise(index):
    with pytest.raises(FieldIndexError):
        SampleMapper().encode_partial(index, 1)


def test_encode_name():
    assert SampleMapper().encode_name(3, "NEW") == bytes([24, 15, 33] + [10] * 9)
