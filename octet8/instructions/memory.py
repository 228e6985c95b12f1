"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from octet8.decode import Instruction
from octet8.state import EmulatorState


def execute_set(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.value))


def execute_add(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """7XNN - Add NN to VX, wrapping at 256. VF is untouched."""
    return state.replace(V=state.V.at[instruction.x].add(instruction.value))


def execute_set_index(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.astype(instruction.address, jnp.uint16))


def execute_random(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.uint8)
    return state.replace(V=state.V.at[instruction.x].set(random_value & instruction.mask), rng=key)
