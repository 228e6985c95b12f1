"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from octet8 import create_state, create_framebuffer, create_keypad, execute, framebuffer_to_display


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def framebuffer():
    """Provide a blank framebuffer."""
    return create_framebuffer()


@pytest.fixture
def released_keys():
    """Provide a key snapshot with nothing pressed."""
    return create_keypad()


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. set_registers(state, V1=0x10)."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def run_opcode(state, opcode):
    """Execute one opcode against a throwaway blank framebuffer."""
    state, _ = execute(state, opcode, create_framebuffer())
    return state


def pixel(framebuffer, x, y):
    """Whether logical pixel (x, y) is on."""
    return bool(framebuffer_to_display(framebuffer)[x, y])
