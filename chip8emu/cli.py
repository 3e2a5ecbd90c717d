"""Command-line entry point: run a CHIP-8 ROM in a window."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from chip8emu.cpu import Chip8, RomError, UnknownOpcodeError

CYCLES_PER_FRAME = 10
FRAMES_PER_SECOND = 60


def main(argv: Sequence[str] | None = None) -> int:
    """Load the ROM named on the command line and run it until the window closes."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Can only accept rom file as an argument", file=sys.stderr)
        return 1

    chip = Chip8()
    try:
        chip.load_rom(args[0])
    except RomError as exc:
        print(exc, file=sys.stderr)
        return 1

    import pygame

    from chip8emu.display import WINDOW_HEIGHT, WINDOW_WIDTH, draw_graphics, process_input

    pygame.init()
    try:
        surface = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption("CHIP-8 Emulator")
        clock = pygame.time.Clock()
        while not any(event.type == pygame.QUIT for event in pygame.event.get()):
            process_input(chip, pygame.key.get_pressed())
            for _ in range(CYCLES_PER_FRAME):
                chip.cycle()
            if chip.update_timers():
                print("Beep")
            if draw_graphics(surface, chip):
                pygame.display.flip()
            clock.tick(FRAMES_PER_SECOND)
    except UnknownOpcodeError as exc:
        print(exc, file=sys.stderr)
        return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())