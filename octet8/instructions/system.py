"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from octet8.constants import PIXEL_OFF, INSTRUCTION_WIDTH
from octet8.decode import Instruction
from octet8.stack import pop
from octet8.state import EmulatorState


def no_op(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """0NNN - Machine code subroutine, not emulated."""
    return state


def execute_clear_screen(
    state: EmulatorState, instruction: Instruction, framebuffer: jnp.ndarray
) -> tuple[EmulatorState, jnp.ndarray]:
    """00E0 - Clear display."""
    return state, jnp.full_like(framebuffer, PIXEL_OFF)


def execute_return(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address - INSTRUCTION_WIDTH)
