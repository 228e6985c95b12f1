"""CHIP-8 control flow instructions."""

import jax
import jax.lax
import jax.numpy as jnp
from octet8.constants import INSTRUCTION_WIDTH
from octet8.decode import Instruction
from octet8.stack import push
from octet8.state import EmulatorState


def redirect(address: int) -> jnp.ndarray:
    """PC value that lands on `address` after the post-execute increment."""
    return jnp.astype((address - INSTRUCTION_WIDTH) & 0xFFFF, jnp.uint16)


def execute_jump(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=redirect(instruction.address))


def execute_call(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc + INSTRUCTION_WIDTH))
    return execute_jump(state, instruction)


def execute_jump_with_offset(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    base = jnp.astype(state.V[0], jnp.uint16)
    return state.replace(pc=base + redirect(instruction.address))


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: Instruction) -> EmulatorState:
        condition = condition_fn(state, instruction)
        return jax.lax.cond(
            condition,
            lambda s: s.replace(pc=s.pc + INSTRUCTION_WIDTH),
            lambda s: s,
            state
        )
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == inst.value
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != inst.value
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == state.V[inst.y]
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != state.V[inst.y]
)

execute_skip_if_key_down = make_skip_instruction(
    lambda state, inst: state.keypad[state.V[inst.x] & 0xF]
)

execute_skip_if_key_up = make_skip_instruction(
    lambda state, inst: ~state.keypad[state.V[inst.x] & 0xF]
)
