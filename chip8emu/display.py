"""Keyboard mapping and screen drawing for a CHIP-8 machine."""

from __future__ import annotations

from typing import Any

import pygame

from chip8emu.cpu import SCREEN_HEIGHT, SCREEN_WIDTH, Chip8

SCALE = 10
WINDOW_WIDTH = SCREEN_WIDTH * SCALE
WINDOW_HEIGHT = SCREEN_HEIGHT * SCALE

# Host key for each hex keypad key 0..F.
KEY_MAP = (
    pygame.K_0,  # 0
    pygame.K_1,  # 1
    pygame.K_2,  # 2
    pygame.K_3,  # 3
    pygame.K_q,  # 4
    pygame.K_w,  # 5
    pygame.K_e,  # 6
    pygame.K_a,  # 7
    pygame.K_s,  # 8
    pygame.K_d,  # 9
    pygame.K_z,  # A
    pygame.K_c,  # B
    pygame.K_4,  # C
    pygame.K_r,  # D
    pygame.K_f,  # E
    pygame.K_v,  # F
)

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def process_input(chip8: Chip8, pressed: Any) -> None:
    """Set the keypad from a key-state lookup such as pygame.key.get_pressed()."""
    chip8.keys = [bool(pressed[key]) for key in KEY_MAP]


def draw_graphics(surface: pygame.Surface, chip8: Chip8) -> bool:
    """Redraw the surface if the screen changed; return whether it was drawn."""
    if not chip8.draw_flag:
        return False
    surface.fill(BLACK)
    for pos, pixel in enumerate(chip8.screen):
        if pixel:
            y, x = divmod(pos, SCREEN_WIDTH)
            surface.fill(WHITE, pygame.Rect(x * SCALE, y * SCALE, SCALE, SCALE))
    chip8.draw_flag = False
    return True