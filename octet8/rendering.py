"""CHIP-8 rendering utilities for visualization."""

import numpy as np
from typing import Tuple

from octet8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, BYTES_PER_PIXEL, FRAMEBUFFER_SIZE, PIXEL_OFF


def framebuffer_to_display(framebuffer) -> np.ndarray:
    """Collapse an RGBA framebuffer into a boolean (64, 32) display indexed [x, y]."""
    pixels = np.asarray(framebuffer, dtype=np.uint8)
    if pixels.size != FRAMEBUFFER_SIZE:
        raise ValueError(f"Framebuffer must hold {FRAMEBUFFER_SIZE} bytes, got {pixels.size}")

    pixels = pixels.reshape(SCREEN_HEIGHT, SCREEN_WIDTH, BYTES_PER_PIXEL)
    return np.any(pixels != PIXEL_OFF, axis=-1).T


def framebuffer_to_rgb(
    framebuffer,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (255, 255, 255),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert a CHIP-8 framebuffer to an RGB array with optional upscaling.

    Args:
        framebuffer: RGBA byte buffer of the 64x32 display
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: white)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    # Display is indexed (x, y); images are (row, column)
    pixels = framebuffer_to_display(framebuffer).T

    rgb_frame = np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Apply upscaling using nearest neighbor interpolation
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "white",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("white", "classic", "amber", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "white": ((255, 255, 255), (0, 0, 0)),  # White on black
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
        "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]
