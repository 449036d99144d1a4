import sys
import pytest
from midi.effects import EchoEffectMapper, encode_effect
from midi.program import ProgramMapper
from model.effect import EchoEffect
from model.program import Program
from tools.header_diff import diff_fields, diff_unmapped, main, mapper_for


def test_diff_fields_decodes_changed_values():
    mapper = ProgramMapper()
    before = Program()
    after = Program()
    after.master_tuning.tune = -1.54
    after.midi.channel = 5
    diffs = diff_fields(mapper, mapper.encode(before), mapper.encode(after))
    assert [(f.path, old, new) for f, old, new in diffs] == [
        ("midi.channel", 0, 5),
        ("master_tuning.tune", 0.0, -1.54),
    ]


def test_diff_unmapped_reports_reserved_bytes():
    mapper = ProgramMapper()
    before = bytearray(mapper.encode(Program()))
    after = bytearray(before)
    after[21] = 7
    after[25] = 9
    assert diff_unmapped(mapper, bytes(before), bytes(after)) == [(21, 0, 7)]


def test_mapper_for_effect_reads_type_byte():
    block = encode_effect(EchoEffect())
    assert isinstance(mapper_for("effect", block), EchoEffectMapper)


def test_mapper_for_unknown_kind():
    with pytest.raises(ValueError, match="Unknown header kind"):
        mapper_for("drum", bytes(192))


def test_main_prints_changes(tmp_path, monkeypatch, capsys):
    mapper = ProgramMapper()
    after = Program(name="CHANGED     ")
    (tmp_path / "a.bin").write_bytes(mapper.encode(Program()))
    (tmp_path / "b.bin").write_bytes(mapper.encode(after))
    monkeypatch.setattr(sys, "argv", ["header_diff.py", "program",
                                      str(tmp_path / "a.bin"), str(tmp_path / "b.bin")])
    main()
    out = capsys.readouterr().out
    assert "ProgramMapper" in out
    assert "CHANGED" in out


def test_main_rejects_wrong_size(tmp_path, monkeypatch, capsys):
    (tmp_path / "a.bin").write_bytes(bytes(10))
    monkeypatch.setattr(sys, "argv", ["header_diff.py", "program",
                                      str(tmp_path / "a.bin"), str(tmp_path / "a.bin")])
    with pytest.raises(SystemExit):
        main()
    assert "Cannot decode" in capsys.readouterr().out
