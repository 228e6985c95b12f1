"""CHIP-8 display operations."""

import jax.numpy as jnp
from octet8.constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH, BYTES_PER_PIXEL, PIXEL_ON, PIXEL_OFF, ADDRESS_MASK, FLAG_REGISTER
)
from octet8.decode import Instruction
from octet8.state import EmulatorState

# Column offsets within a sprite row, MSB first
columns = jnp.arange(SPRITE_WIDTH)


def execute_display(
    state: EmulatorState, instruction: Instruction, framebuffer: jnp.ndarray
) -> tuple[EmulatorState, jnp.ndarray]:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Pixels past the right or bottom edge wrap around to the opposite edge.
    VF is 1 if any lit pixel was switched off by the draw, else 0.
    """
    origin_x = jnp.astype(state.V[instruction.x], jnp.int32)
    origin_y = jnp.astype(state.V[instruction.y], jnp.int32)
    rows = jnp.arange(instruction.height)

    sprite_bytes = state.memory[(state.I + rows) & ADDRESS_MASK]
    sprite = ((sprite_bytes[:, None] >> (7 - columns[None, :])) & 1) == 1

    xs = (origin_x + columns) % SCREEN_WIDTH
    ys = (origin_y + rows) % SCREEN_HEIGHT
    pixel_index = (ys[:, None] * SCREEN_WIDTH + xs[None, :]).ravel()

    # Sprites are at most 15 rows, so no pixel is hit twice within one draw
    lit = jnp.zeros(SCREEN_WIDTH * SCREEN_HEIGHT, dtype=jnp.bool_).at[pixel_index].set(sprite.ravel())
    flip = jnp.where(jnp.repeat(lit, BYTES_PER_PIXEL), PIXEL_ON, PIXEL_OFF).astype(jnp.uint8)

    collision = jnp.any((framebuffer != PIXEL_OFF) & (flip != PIXEL_OFF))
    new_V = state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    return state.replace(V=new_V), framebuffer ^ flip
