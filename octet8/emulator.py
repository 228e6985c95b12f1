"""Main CHIP-8 emulator execution engine."""

from typing import Optional

import jax.numpy as jnp
from octet8.state import EmulatorState
from octet8.decode import (
    decode, Clear, Return, NoOp, Jump, Call, SkipRegEqVal, SkipRegNeqVal, SkipRegEqReg, SetRegVal, AddRegVal,
    SetRegReg, SetRegOrReg, SetRegAndReg, SetRegXorReg, AddRegReg, SubRegReg, ShiftRight, RevSubRegReg, ShiftLeft,
    SkipRegNeqReg, SetI, JumpOffset, SetRegRand, Draw, SkipKeyDown, SkipKeyUp, SetRegDelay, SetRegKey, SetDelayReg,
    SetSoundReg, AddIReg, SetISpriteReg, BCD, Dump, Load
)
from octet8.constants import (
    PROGRAM_START, MAX_ROM_SIZE, ADDRESS_MASK, INSTRUCTION_WIDTH, FRAMEBUFFER_SIZE, NUM_KEYS
)
from octet8.errors import Chip8Error
from octet8.logging import EmulatorLogger, default_logger
from octet8.instructions.system import no_op, execute_clear_screen, execute_return
from octet8.instructions.control_flow import (
    execute_jump, execute_call, execute_jump_with_offset, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register, execute_skip_if_not_equal_register,
    execute_skip_if_key_down, execute_skip_if_key_up
)
from octet8.instructions.alu import execute_alu_operation, execute_shift_right, execute_shift_left
from octet8.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from octet8.instructions.display import execute_display
from octet8.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer, execute_set_sound_timer,
    execute_add_to_index, execute_font_character, execute_bcd_conversion, execute_store_registers,
    execute_load_registers
)

# Handlers taking and returning the framebuffer alongside the state
DISPLAY_HANDLERS = {
    Clear: execute_clear_screen,
    Draw: execute_display,
}

HANDLERS = {
    NoOp: no_op,
    Return: execute_return,
    Jump: execute_jump,
    Call: execute_call,
    SkipRegEqVal: execute_skip_if_equal_immediate,
    SkipRegNeqVal: execute_skip_if_not_equal_immediate,
    SkipRegEqReg: execute_skip_if_equal_register,
    SetRegVal: execute_set,
    AddRegVal: execute_add,
    SetRegReg: execute_alu_operation,
    SetRegOrReg: execute_alu_operation,
    SetRegAndReg: execute_alu_operation,
    SetRegXorReg: execute_alu_operation,
    AddRegReg: execute_alu_operation,
    SubRegReg: execute_alu_operation,
    ShiftRight: execute_shift_right,
    RevSubRegReg: execute_alu_operation,
    ShiftLeft: execute_shift_left,
    SkipRegNeqReg: execute_skip_if_not_equal_register,
    SetI: execute_set_index,
    JumpOffset: execute_jump_with_offset,
    SetRegRand: execute_random,
    SkipKeyDown: execute_skip_if_key_down,
    SkipKeyUp: execute_skip_if_key_up,
    SetRegDelay: execute_get_delay_timer,
    SetRegKey: execute_wait_for_key,
    SetDelayReg: execute_set_delay_timer,
    SetSoundReg: execute_set_sound_timer,
    AddIReg: execute_add_to_index,
    SetISpriteReg: execute_font_character,
    BCD: execute_bcd_conversion,
    Dump: execute_store_registers,
    Load: execute_load_registers,
}


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into a 16-bit opcode."""
    return (int(high) << 8) | int(low)


def fetch(state: EmulatorState) -> int:
    """Read the big-endian opcode at the program counter."""
    address = int(state.pc) & ADDRESS_MASK
    return _pack_u16(state.memory[address], state.memory[(address + 1) & ADDRESS_MASK])


def execute(
    state: EmulatorState,
    opcode: int,
    framebuffer: jnp.ndarray,
    logger: Optional[EmulatorLogger] = None,
) -> tuple[EmulatorState, jnp.ndarray]:
    """Execute a single CHIP-8 instruction and advance the program counter.

    Every instruction finishes with the same ``pc += 2``. Instructions that
    redirect control flow store their target minus 2 beforehand.

    Args:
        state: Current emulator state
        opcode: 16-bit instruction to execute
        framebuffer: RGBA framebuffer of ``FRAMEBUFFER_SIZE`` bytes
        logger: Logger receiving the DEBUG instruction trace

    Returns:
        Tuple of the updated state and framebuffer

    Raises:
        DecodeError: if the opcode is not a CHIP-8 instruction
        StackUnderflowError: on a return with an empty call stack
        StackOverflowError: on a call with a full call stack
    """
    logger = logger or default_logger
    instruction = decode(opcode)
    logger.log_instruction(int(state.pc), opcode, instruction)

    if type(instruction) in DISPLAY_HANDLERS:
        state, framebuffer = DISPLAY_HANDLERS[type(instruction)](state, instruction, framebuffer)
    else:
        state = HANDLERS[type(instruction)](state, instruction)

    return state.replace(pc=state.pc + INSTRUCTION_WIDTH), framebuffer


def _check_host_buffers(framebuffer, keys) -> tuple[jnp.ndarray, jnp.ndarray]:
    """Convert host buffers to arrays, rejecting the wrong sizes."""
    framebuffer = jnp.asarray(framebuffer, dtype=jnp.uint8)
    if framebuffer.shape != (FRAMEBUFFER_SIZE,):
        raise ValueError(
            f"Framebuffer must hold {FRAMEBUFFER_SIZE} bytes, got shape {framebuffer.shape}"
        )

    keys = jnp.asarray(keys, dtype=jnp.bool_)
    if keys.shape != (NUM_KEYS,):
        raise ValueError(f"Key states must hold {NUM_KEYS} entries, got shape {keys.shape}")

    return framebuffer, keys


def step(
    state: EmulatorState,
    framebuffer: jnp.ndarray,
    keys: jnp.ndarray,
    logger: Optional[EmulatorLogger] = None,
) -> tuple[EmulatorState, jnp.ndarray]:
    """Run one CPU cycle: fetch, decode and execute the instruction at PC.

    Args:
        state: Current emulator state
        framebuffer: RGBA framebuffer of ``FRAMEBUFFER_SIZE`` bytes
        keys: 16 booleans, index is the CHIP-8 key value
        logger: Logger for the instruction trace and fault reports

    Returns:
        Tuple of the updated state and framebuffer

    Raises:
        ValueError: if the framebuffer or key array has the wrong size
        Chip8Error: on a machine fault, after it has been logged
    """
    logger = logger or default_logger
    framebuffer, keys = _check_host_buffers(framebuffer, keys)
    state = state.replace(keypad=keys)
    opcode = fetch(state)

    try:
        return execute(state, opcode, framebuffer, logger)
    except Chip8Error as error:
        logger.log_fault(state, opcode, error)
        raise


def run_cycles(
    state: EmulatorState,
    framebuffer: jnp.ndarray,
    keys: jnp.ndarray,
    cycles: int,
    logger: Optional[EmulatorLogger] = None,
) -> tuple[EmulatorState, jnp.ndarray]:
    """Run `cycles` consecutive steps with the same key snapshot."""
    for _ in range(cycles):
        state, framebuffer = step(state, framebuffer, keys, logger)
    return state, framebuffer


def update_timers(state: EmulatorState) -> EmulatorState:
    """Count both timers down by one, stopping at zero. Call at 60 Hz."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def sound_active(state: EmulatorState) -> bool:
    """Whether the beeper should sound for the current timer value."""
    return bool(state.sound_timer > 0)


def load_rom(
    state: EmulatorState,
    rom: bytes,
    logger: Optional[EmulatorLogger] = None,
    source: str = "ROM",
) -> EmulatorState:
    """Copy ROM bytes verbatim into CHIP-8 memory starting at 0x200."""
    if len(rom) > MAX_ROM_SIZE:
        raise ValueError(f"ROM is {len(rom)} bytes, at most {MAX_ROM_SIZE} fit in memory")
    logger = logger or default_logger

    rom_array = jnp.array(list(rom), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom)].set(rom_array)
    logger.log_rom_loaded(source, len(rom))
    return state.replace(memory=new_memory)


def load_rom_file(state: EmulatorState, filename: str, logger: Optional[EmulatorLogger] = None) -> EmulatorState:
    """Load a ROM file from disk into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_rom(state, rom_data, logger, source=filename)
