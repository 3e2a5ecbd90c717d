"""The CHIP-8 virtual machine: memory, registers, timers, screen and opcodes."""

from __future__ import annotations

import random
from os import PathLike
from typing import Protocol

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
MEMORY_SIZE = 4096
STACK_SIZE = 16
NUM_REGISTERS = 16
NUM_KEYS = 16
FONT_ADDR = 0x050
PC_START = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - PC_START

FONTSET = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
))


class UnknownOpcodeError(Exception):
    """Raised when the machine meets an opcode it does not implement."""

    def __init__(self, opcode: int) -> None:
        super().__init__(f"Not yet implemented or unknown opcode 0x{opcode:X}")
        self.opcode = opcode


class RomError(Exception):
    """Raised when a ROM cannot be loaded."""


class _RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class Chip8:
    """A CHIP-8 machine. Call :meth:`cycle` to execute one instruction."""

    def __init__(self, rng: _RandomSource | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.memory = bytearray(MEMORY_SIZE)
        self.reset()

    def reset(self) -> None:
        """Put registers, stack, keys, timers and screen back to power-on state."""
        self.pc = PC_START
        self.index = 0
        self.v = bytearray(NUM_REGISTERS)
        self.stack: list[int] = []
        self.keys = [False] * NUM_KEYS
        self.screen = bytearray(SCREEN_WIDTH * SCREEN_HEIGHT)
        self.delay_timer = 0
        self.sound_timer = 0
        self.draw_flag = False
        self.memory[FONT_ADDR:FONT_ADDR + len(FONTSET)] = FONTSET

    def load_rom(self, path: str | PathLike[str]) -> int:
        """Copy a ROM file into memory at the program start; return its size."""
        try:
            with open(path, "rb") as rom:
                data = rom.read()
        except OSError as exc:
            raise RomError(f"Failed to open ROM: {exc}") from exc
        if len(data) > MAX_ROM_SIZE:
            raise RomError(f"ROM too big: {len(data)} bytes, at most {MAX_ROM_SIZE}")
        self.memory[PC_START:PC_START + len(data)] = data
        return len(data)

    def clear_screen(self) -> None:
        """Turn every pixel off."""
        self.screen[:] = bytes(len(self.screen))

    def update_timers(self) -> bool:
        """Count both timers down by one; return True when the sound timer runs out."""
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1
            return self.sound_timer == 0
        return False

    def cycle(self) -> None:
        """Fetch, decode and execute one instruction."""
        opcode = (self.memory[self.pc] << 8) | self.memory[self.pc + 1]
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        nnn = opcode & 0x0FFF
        nn = opcode & 0x00FF
        n = opcode & 0x000F
        v = self.v
        next_pc = self.pc + 2

        match opcode >> 12:
            case 0x0:
                if nn == 0xE0:
                    self.clear_screen()
                    self.draw_flag = True
                elif nn == 0xEE:
                    if not self.stack:
                        raise IndexError("stack underflow")
                    next_pc = self.stack.pop() + 2
                else:
                    raise UnknownOpcodeError(opcode)
            case 0x1:
                next_pc = nnn
            case 0x2:
                if len(self.stack) >= STACK_SIZE:
                    raise IndexError("stack overflow")
                self.stack.append(self.pc)
                next_pc = nnn
            case 0x3:
                if v[x] == nn:
                    next_pc += 2
            case 0x4:
                if v[x] != nn:
                    next_pc += 2
            case 0x5:
                if v[x] == v[y]:
                    next_pc += 2
            case 0x6:
                v[x] = nn
            case 0x7:
                v[x] = (v[x] + nn) & 0xFF
            case 0x8:
                self._arithmetic(opcode, x, y, n)
            case 0x9:
                if v[x] != v[y]:
                    next_pc += 2
            case 0xA:
                self.index = nnn
            case 0xB:
                next_pc = v[0] + nnn
            case 0xC:
                v[x] = self.rng.randrange(256) & nn
            case 0xD:
                self._draw(v[x], v[y], n)
            case 0xE:
                pressed = self.keys[v[x]]
                if nn == 0x9E:
                    if pressed:
                        next_pc += 2
                elif nn == 0xA1:
                    if not pressed:
                        next_pc += 2
                else:
                    raise UnknownOpcodeError(opcode)
            case 0xF:
                if nn == 0x0A:
                    key = next((i for i, down in enumerate(self.keys) if down), None)
                    if key is None:
                        return
                    v[x] = key
                else:
                    self._misc(opcode, x, nn)

        self.pc = next_pc & 0xFFFF

    def _arithmetic(self, opcode: int, x: int, y: int, n: int) -> None:
        v = self.v
        match n:
            case 0x0:
                v[x] = v[y]
            case 0x1:
                v[x] |= v[y]
            case 0x2:
                v[x] &= v[y]
            case 0x3:
                v[x] ^= v[y]
            case 0x4:
                total = v[x] + v[y]
                v[x] = total & 0xFF
                v[0xF] = 1 if total > 0xFF else 0
            case 0x5:
                no_borrow = 1 if v[x] >= v[y] else 0
                v[x] = (v[x] - v[y]) & 0xFF
                v[0xF] = no_borrow
            case 0x6:
                lsb = v[x] & 0x01
                v[x] >>= 1
                v[0xF] = lsb
            case 0x7:
                no_borrow = 1 if v[y] >= v[x] else 0
                v[x] = (v[y] - v[x]) & 0xFF
                v[0xF] = no_borrow
            case 0xE:
                msb = (v[x] & 0x80) >> 7
                v[x] = (v[x] << 1) & 0xFF
                v[0xF] = msb
            case _:
                raise UnknownOpcodeError(opcode)

    def _misc(self, opcode: int, x: int, nn: int) -> None:
        v = self.v
        match nn:
            case 0x07:
                v[x] = self.delay_timer
            case 0x15:
                self.delay_timer = v[x]
            case 0x18:
                self.sound_timer = v[x]
            case 0x1E:
                self.index = (self.index + v[x]) & 0xFFFF
            case 0x29:
                self.index = FONT_ADDR + 5 * v[x]
            case 0x33:
                self._check_range(3)
                value = v[x]
                self.memory[self.index:self.index + 3] = bytes(
                    (value // 100, value // 10 % 10, value % 10)
                )
            case 0x55:
                self._check_range(x + 1)
                self.memory[self.index:self.index + x + 1] = v[:x + 1]
            case 0x65:
                self._check_range(x + 1)
                v[:x + 1] = self.memory[self.index:self.index + x + 1]
            case _:
                raise UnknownOpcodeError(opcode)

    def _check_range(self, length: int) -> None:
        if self.index + length > MEMORY_SIZE:
            raise IndexError(f"memory access past end at 0x{self.index:X}")

    def _draw(self, vx: int, vy: int, height: int) -> None:
        self.v[0xF] = 0
        for row in range(height):
            sprite = self.memory[self.index + row]
            base = ((vy + row) % SCREEN_HEIGHT) * SCREEN_WIDTH
            for col in range(8):
                pixel = (sprite >> (7 - col)) & 1
                pos = base + (vx + col) % SCREEN_WIDTH
                if pixel and self.screen[pos] == 1:
                    self.v[0xF] = 1
                self.screen[pos] ^= pixel
        self.draw_flag = True