"""A CHIP-8 interpreter: the machine in cpu, pygame drawing and keys in display, the command in cli."""

__version__ = "0.1.0"
__all__ = ["cpu", "display", "cli"]