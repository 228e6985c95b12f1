"""CHIP-8 emulator package."""

from octet8.state import EmulatorState, StackState, create_state, create_framebuffer, create_keypad
from octet8.emulator import (
    fetch, execute, step, run_cycles, update_timers, sound_active, load_rom, load_rom_file
)
from octet8.decode import Instruction, decode, opcode_fields
from octet8.errors import Chip8Error, DecodeError, StackUnderflowError, StackOverflowError
from octet8.constants import *
from octet8.logging import ConsoleLogger, EmulatorLogger, format_state
from octet8.rendering import framebuffer_to_display, framebuffer_to_rgb, create_color_scheme

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "create_framebuffer",
    "create_keypad",
    "fetch",
    "execute",
    "step",
    "run_cycles",
    "update_timers",
    "sound_active",
    "load_rom",
    "load_rom_file",
    "Instruction",
    "decode",
    "opcode_fields",
    "Chip8Error",
    "DecodeError",
    "StackUnderflowError",
    "StackOverflowError",
    "ConsoleLogger",
    "EmulatorLogger",
    "format_state",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "FRAMEBUFFER_SIZE",
    "framebuffer_to_display",
    "framebuffer_to_rgb",
    "create_color_scheme",
]
