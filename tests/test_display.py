"""Tests for display operations (00E0, DXYN)."""

import pytest
import jax.numpy as jnp
from octet8 import execute, framebuffer_to_display, PIXEL_ON, PIXEL_OFF
from conftest import setup_sprite_in_memory, set_registers, pixel


def draw(state, framebuffer, opcode):
    return execute(state, opcode, framebuffer)


class TestBasicSprites:
    """Test basic sprite drawing."""

    def test_basic_sprite_draw(self, fresh_state, framebuffer):
        """Test basic sprite drawing without collision."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xC0, 0xC0])  # 2x2 box
        state = set_registers(state, V0=10, V1=5)
        state = state.replace(I=jnp.astype(0x300, jnp.uint16))

        state, framebuffer = draw(state, framebuffer, 0xD012)

        assert pixel(framebuffer, 10, 5)
        assert pixel(framebuffer, 11, 5)
        assert pixel(framebuffer, 10, 6)
        assert pixel(framebuffer, 11, 6)
        assert not pixel(framebuffer, 12, 5)
        assert framebuffer_to_display(framebuffer).sum() == 4
        assert state.V[15] == 0

    def test_pixel_bytes_are_all_on(self, fresh_state, framebuffer):
        """A lit pixel is four PIXEL_ON bytes at (y * 64 + x) * 4."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0x80])
        state = set_registers(state, V0=3, V1=2)
        state = state.replace(I=jnp.astype(0x300, jnp.uint16))

        state, framebuffer = draw(state, framebuffer, 0xD011)

        offset = (2 * 64 + 3) * 4
        assert [int(b) for b in framebuffer[offset:offset + 4]] == [PIXEL_ON] * 4
        assert int((framebuffer != PIXEL_OFF).sum()) == 4

    def test_msb_is_leftmost(self, fresh_state, framebuffer):
        state = setup_sprite_in_memory(fresh_state, 0x300, [0x01])
        state = state.replace(I=jnp.astype(0x300, jnp.uint16))

        state, framebuffer = draw(state, framebuffer, 0xD011)

        assert pixel(framebuffer, 7, 0)
        assert not pixel(framebuffer, 0, 0)

    def test_zero_height_draws_nothing(self, fresh_state, framebuffer):
        state = set_registers(fresh_state, VF=1)

        state, new_framebuffer = draw(state, framebuffer, 0xD010)

        assert (new_framebuffer == framebuffer).all()
        assert state.V[15] == 0


class TestCollisions:
    """Test XOR composition and VF."""

    def test_draw_twice_restores_framebuffer(self, fresh_state, framebuffer):
        """Drawing the same sprite twice erases it and reports a collision."""
        state = setup_sprite_in_memory(fresh_state, 0x400, [0x3C, 0x42, 0x81, 0xFF])
        state = set_registers(state, V0=20, V1=10)
        state = state.replace(I=jnp.astype(0x400, jnp.uint16))

        state, once = draw(state, framebuffer, 0xD014)
        assert state.V[15] == 0

        state, twice = draw(state, once, 0xD014)
        assert (twice == framebuffer).all()
        assert state.V[15] == 1

    def test_collision_with_single_overlap(self, fresh_state, framebuffer):
        """VF is set for the whole draw when any one pixel is turned off."""
        state = setup_sprite_in_memory(fresh_state, 0x400, [0x80])
        state = setup_sprite_in_memory(state, 0x410, [0x00, 0x00, 0x01])
        state = state.replace(I=jnp.astype(0x400, jnp.uint16))
        state, framebuffer = draw(state, framebuffer, 0xD011)  # pixel (0, 0)

        state = state.replace(I=jnp.astype(0x410, jnp.uint16))
        state = set_registers(state, V2=0xF9, V3=0xFE)  # origin (57, 30) → (0, 0) on row 2
        state, framebuffer = draw(state, framebuffer, 0xD233)

        assert state.V[15] == 1
        assert not pixel(framebuffer, 0, 0)

    def test_no_collision_when_turning_pixels_on(self, fresh_state, framebuffer):
        state = setup_sprite_in_memory(fresh_state, 0x400, [0xF0, 0x0F])
        state = state.replace(I=jnp.astype(0x400, jnp.uint16))
        state, framebuffer = draw(state, framebuffer, 0xD011)

        state = state.replace(I=jnp.astype(0x401, jnp.uint16))
        state, framebuffer = draw(state, framebuffer, 0xD011)

        assert state.V[15] == 0
        assert framebuffer_to_display(framebuffer)[:8, 0].all()


class TestScreenWrapping:
    """Sprites wrap around the screen edges, they are never clipped."""

    def test_right_edge_wraps(self, fresh_state, framebuffer):
        """8x1 sprite at x=60 covers columns 60-63 and 0-3."""
        state = setup_sprite_in_memory(fresh_state, 0x600, [0xFF])
        state = set_registers(state, V0=60, V1=0)
        state = state.replace(I=jnp.astype(0x600, jnp.uint16))

        state, framebuffer = draw(state, framebuffer, 0xD011)

        row = framebuffer_to_display(framebuffer)[:, 0]
        assert [x for x in range(64) if row[x]] == [0, 1, 2, 3, 60, 61, 62, 63]

    def test_bottom_edge_wraps(self, fresh_state, framebuffer):
        """Rows past 31 continue from row 0."""
        state = setup_sprite_in_memory(fresh_state, 0x700, [0x80, 0x80, 0x80])
        state = set_registers(state, V0=0, V1=30)
        state = state.replace(I=jnp.astype(0x700, jnp.uint16))

        state, framebuffer = draw(state, framebuffer, 0xD013)

        assert pixel(framebuffer, 0, 30)
        assert pixel(framebuffer, 0, 31)
        assert pixel(framebuffer, 0, 0)

    def test_sprite_read_through_high_index(self, fresh_state, framebuffer):
        """I=0x1300 reads sprite rows from 0x300."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xF0, 0x90])
        state = set_registers(state, V0=0, V1=0)
        state = state.replace(I=jnp.astype(0x1300, jnp.uint16))

        state, framebuffer = draw(state, framebuffer, 0xD012)

        display = framebuffer_to_display(framebuffer)
        assert [x for x in range(8) if display[x, 0]] == [0, 1, 2, 3]
        assert [x for x in range(8) if display[x, 1]] == [0, 3]
        assert state.I == 0x1300

    def test_sprite_rows_wrap_past_end_of_memory(self, fresh_state, framebuffer):
        """Rows after 0xFFF come from 0x000, the first font glyph."""
        state = setup_sprite_in_memory(fresh_state, 0xFFF, [0x80])
        state = set_registers(state, V0=0, V1=0)
        state = state.replace(I=jnp.astype(0xFFF, jnp.uint16))

        state, framebuffer = draw(state, framebuffer, 0xD012)

        display = framebuffer_to_display(framebuffer)
        assert [x for x in range(8) if display[x, 0]] == [0]
        assert [x for x in range(8) if display[x, 1]] == [0, 1, 2, 3]

    def test_origin_beyond_screen(self, fresh_state, framebuffer):
        """Coordinates larger than the screen are reduced modulo its size."""
        state = setup_sprite_in_memory(fresh_state, 0x800, [0x80])
        state = set_registers(state, V0=70, V1=37)
        state = state.replace(I=jnp.astype(0x800, jnp.uint16))

        state, framebuffer = draw(state, framebuffer, 0xD011)

        assert pixel(framebuffer, 6, 5)


class TestSpriteVariations:
    """Test different sprite configurations."""

    def test_different_sprite_heights(self, fresh_state, framebuffer):
        """Only N rows are drawn."""
        state = setup_sprite_in_memory(fresh_state, 0x900, [0x80, 0x40, 0x20, 0x10, 0x08])
        state = set_registers(state, V0=10, V1=8)
        state = state.replace(I=jnp.astype(0x900, jnp.uint16))

        state, framebuffer = draw(state, framebuffer, 0xD013)

        assert pixel(framebuffer, 10, 8)
        assert pixel(framebuffer, 11, 9)
        assert pixel(framebuffer, 12, 10)
        assert not pixel(framebuffer, 13, 11)

    def test_font_glyph(self, fresh_state, framebuffer):
        """Drawing glyph 0 from the font table gives its outline."""
        state, framebuffer = draw(fresh_state, framebuffer, 0xD005)  # I = 0 → glyph 0

        display = framebuffer_to_display(framebuffer)
        assert display[0:4, 0].all() and display[0:4, 4].all()
        assert display[0, 1:4].all() and display[3, 1:4].all()
        assert not display[1:3, 1:4].any()


class TestClear:
    """Test 00E0."""

    def test_clear_screen(self, fresh_state):
        framebuffer = jnp.full(64 * 32 * 4, PIXEL_ON, dtype=jnp.uint8)

        state, framebuffer = execute(fresh_state, 0x00E0, framebuffer)

        assert int(framebuffer.sum()) == 0
        assert framebuffer.shape == (64 * 32 * 4,)
        assert state.pc == 0x202
