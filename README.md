# chip8emu

A CHIP-8 interpreter. It loads a ROM image at address `0x200` and runs it in
a 640×320 window, which is the 64×32 CHIP-8 display scaled up by ten. It runs
ten instructions per frame at up to 60 frames per second, and the delay and
sound timers count down once per frame.

## Installation

```
pip install .
```

This installs pygame as well. To run the tests, install the `test` extra:

```
pip install ".[test]"
pytest
```

## Running a ROM

```
chip8emu path/to/game.ch8
```

The command takes exactly one argument, the ROM file; with any other number of
arguments it prints a message and exits with status 1. If the ROM cannot be
opened, or is larger than the 3584 bytes of memory above `0x200`, it prints the
reason and exits with status 1. It also stops with status 1 when it reaches an
opcode it does not recognise. To quit, close the window.

## Keypad

The sixteen CHIP-8 keys are mapped to the keyboard like this:

| CHIP-8 key | Keyboard | CHIP-8 key | Keyboard |
|-----------:|:--------:|-----------:|:--------:|
| 0 | 0 | 8 | S |
| 1 | 1 | 9 | D |
| 2 | 2 | A | Z |
| 3 | 3 | B | C |
| 4 | Q | C | 4 |
| 5 | W | D | R |
| 6 | E | E | F |
| 7 | A | F | V |

## Using it as a library

```python
import random

from chip8emu.cpu import Chip8

chip8 = Chip8(random.Random(0))
chip8.load_rom("game.ch8")
for _ in range(10):
    chip8.cycle()
beeped = chip8.update_timers()
```

`Chip8(rng)` takes any object with a `randrange` method for the `CXNN`
instruction; without one it uses a fresh `random.Random()`. The machine's
state is held in plain attributes: `memory`, `v` (the sixteen registers),
`index`, `pc`, `stack`, `keys`, `screen` (64×32 bytes, one per pixel),
`delay_timer`, `sound_timer` and `draw_flag`.

- `Chip8.cycle()` runs one instruction. It raises `UnknownOpcodeError` when it
  meets an opcode it does not recognise, and `IndexError` on stack overflow or
  underflow, or when `FX33`, `FX55` or `FX65` would reach past the end of
  memory. `FX0A` leaves the program counter where it is until a key is down.
- `Chip8.load_rom(path)` copies the file into memory at `0x200` and returns its
  size. It raises `RomError` when the file cannot be read or does not fit.
- `Chip8.update_timers()` counts both timers down by one and returns `True`
  when the sound timer has just reached zero.
- `Chip8.reset()` puts the machine back into its power-on state, with the font
  at `0x050`; `Chip8.clear_screen()` blanks the display.

The `chip8emu.display` module connects a machine to pygame.
`process_input(chip8, pressed)` sets the keypad from a key-state lookup such
as `pygame.key.get_pressed()`. `draw_graphics(surface, chip8)` redraws the
screen onto a surface when the machine has marked it as changed, clears the
mark and returns whether it drew.

## What it does not do

There is no sound: when the sound timer runs out the command prints `Beep`
instead of playing a tone. There is no debugger, no save states and no way to
change the speed, scale or key mapping from the command line.