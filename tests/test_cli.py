import pytest

from chip8emu.cli import main
from chip8emu.cpu import MAX_ROM_SIZE


@pytest.mark.parametrize("argv", [[], ["a.ch8", "b.ch8"]])
def test_wrong_argument_count(argv, capsys):
    assert main(argv) == 1
    assert "Can only accept rom file as an argument" in capsys.readouterr().err


def test_missing_rom(tmp_path, capsys):
    assert main([str(tmp_path / "missing.ch8")]) == 1
    assert "Failed to open ROM" in capsys.readouterr().err


def test_rom_too_big(tmp_path, capsys):
    rom = tmp_path / "big.ch8"
    rom.write_bytes(b"\x00" * (MAX_ROM_SIZE + 1))
    assert main([str(rom)]) == 1
    assert "too big" in capsys.readouterr().err