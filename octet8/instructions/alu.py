"""CHIP-8 ALU operations (8xxx)."""

import jax.numpy as jnp
from octet8.constants import FLAG_REGISTER
from octet8.decode import (
    Instruction, SetRegReg, SetRegOrReg, SetRegAndReg, SetRegXorReg, AddRegReg, SubRegReg, RevSubRegReg
)
from octet8.state import EmulatorState


def alu_set(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, None]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, None]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, None]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, None]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """8XY4 - Add: VX += VY, VF = 1 on carry."""
    result = jnp.astype(vx, jnp.int32) + vy
    carry = jnp.astype(result > 0xFF, jnp.uint8)
    return jnp.astype(result & 0xFF, jnp.uint8), carry


def alu_sub_xy(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when there is no borrow."""
    no_borrow = jnp.astype(vx >= vy, jnp.uint8)
    result = (jnp.astype(vx, jnp.int32) - vy) & 0xFF
    return jnp.astype(result, jnp.uint8), no_borrow


def alu_sub_yx(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when there is no borrow."""
    return alu_sub_xy(vy, vx)


ALU_OPERATIONS = {
    SetRegReg: alu_set,
    SetRegOrReg: alu_or,
    SetRegAndReg: alu_and,
    SetRegXorReg: alu_xor,
    AddRegReg: alu_add,
    SubRegReg: alu_sub_xy,
    RevSubRegReg: alu_sub_yx,
}


def execute_alu_operation(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """8XYN - Register to register arithmetic and logic."""
    operation = ALU_OPERATIONS[type(instruction)]
    result, flag = operation(state.V[instruction.x], state.V[instruction.y])

    # VF is written last so the flag survives when VX is VF
    new_V = state.V.at[instruction.x].set(result)
    if flag is not None:
        new_V = new_V.at[FLAG_REGISTER].set(flag)
    return state.replace(V=new_V)


def execute_shift_right(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """8XY6 - Shift right: VF = LSB of VX, then VX >>= 1. VY is ignored."""
    new_V = state.V.at[FLAG_REGISTER].set(state.V[instruction.x] & 1)
    return state.replace(V=new_V.at[instruction.x].set(new_V[instruction.x] >> 1))


def execute_shift_left(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """8XYE - Shift left: VF = MSB of VX, then VX <<= 1. VY is ignored."""
    new_V = state.V.at[FLAG_REGISTER].set((state.V[instruction.x] & 0x80) >> 7)
    return state.replace(V=new_V.at[instruction.x].set(new_V[instruction.x] << 1))
