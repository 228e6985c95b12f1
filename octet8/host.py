"""Pygame front end: window, keypad, beeper and the real-time loop."""

from array import array

import jax
import numpy as np
import pygame

from octet8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, NUM_KEYS
from octet8.emulator import run_cycles, update_timers, sound_active, load_rom_file
from octet8.errors import Chip8Error
from octet8.logging import EmulatorLogger
from octet8.rendering import framebuffer_to_rgb, create_color_scheme
from octet8.state import create_state, create_framebuffer

# The CHIP-8 keypad
#   1 2 3 C
#   4 5 6 D
#   7 8 9 E
#   A 0 B F
# maps onto the left block of a QWERTY keyboard
#   1 2 3 4
#   Q W E R
#   A S D F
#   Z X C V
KEY_MAP = {
    pygame.K_x: 0x0,
    pygame.K_1: 0x1,
    pygame.K_2: 0x2,
    pygame.K_3: 0x3,
    pygame.K_q: 0x4,
    pygame.K_w: 0x5,
    pygame.K_e: 0x6,
    pygame.K_a: 0x7,
    pygame.K_s: 0x8,
    pygame.K_d: 0x9,
    pygame.K_z: 0xA,
    pygame.K_c: 0xB,
    pygame.K_4: 0xC,
    pygame.K_r: 0xD,
    pygame.K_f: 0xE,
    pygame.K_v: 0xF,
}


def build_beep_samples(frequency: int = 440, sample_rate: int = 44100, sample_format: int = -16) -> array:
    """Square wave samples for one period of the beeper tone.

    `sample_rate` and `sample_format` follow `pygame.mixer.get_init()`.
    """
    period = int(round(sample_rate / frequency))
    amplitude = 2 ** (abs(sample_format) - 1) - 1
    samples = array("h", [0] * period)
    for t in range(period):
        samples[t] = amplitude if t < period / 2 else -amplitude
    return samples


def run_frame(state, framebuffer, keys, cycles_per_frame: int, logger: EmulatorLogger):
    """Run one frame worth of CPU cycles, then tick the timers once."""
    state, framebuffer = run_cycles(state, framebuffer, keys, cycles_per_frame, logger)
    return update_timers(state), framebuffer


def update_beeper(beep, beeping: bool, state) -> bool:
    """Start or stop the looping beep to follow the sound timer."""
    if sound_active(state) and not beeping:
        beep.play(-1)
        return True
    if not sound_active(state) and beeping:
        beep.stop()
        return False
    return beeping


def run_emulator(
    rom_filename: str,
    scale: int = 10,
    instruction_frequency: int = 500,
    timer_frequency: int = 60,
    color_scheme: str = "white",
    log_level: str = "INFO",
    seed: int = 0,
):
    """Run a ROM in a pygame window until ESC, window close or a machine fault.

    Args:
        rom_filename: Path to the CHIP-8 ROM file
        scale: Window pixels per CHIP-8 pixel
        instruction_frequency: CPU cycles per second
        timer_frequency: Frames per second; timers tick once per frame
        color_scheme: Name passed to `create_color_scheme`
        log_level: Console log level
        seed: Seed of the random number generator used by CXNN
    """
    logger = EmulatorLogger(log_level=log_level)
    on_color, off_color = create_color_scheme(color_scheme)
    cycles_per_frame = max(1, instruction_frequency // timer_frequency)

    state = create_state(jax.random.PRNGKey(seed))
    state = load_rom_file(state, rom_filename, logger)
    framebuffer = create_framebuffer()
    keys = np.zeros(NUM_KEYS, dtype=np.bool_)

    pygame.mixer.pre_init(44100, -16, 1, 1024)
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
    pygame.display.set_caption(rom_filename)
    clock = pygame.time.Clock()

    sample_rate, sample_format, _ = pygame.mixer.get_init()
    beep = pygame.mixer.Sound(build_beep_samples(sample_rate=sample_rate, sample_format=sample_format))
    beep.set_volume(0.1)
    beeping = False

    logger.info(f"Running at {cycles_per_frame * timer_frequency} Hz, {timer_frequency} frames/s")

    running = True
    while running:
        clock.tick(timer_frequency)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in KEY_MAP:
                    keys[KEY_MAP[event.key]] = True
            elif event.type == pygame.KEYUP:
                if event.key in KEY_MAP:
                    keys[KEY_MAP[event.key]] = False

        try:
            state, framebuffer = run_frame(state, framebuffer, keys, cycles_per_frame, logger)
        except Chip8Error:
            logger.critical("Machine halted")
            break

        beeping = update_beeper(beep, beeping, state)

        rgb = framebuffer_to_rgb(framebuffer, scale, on_color, off_color)
        screen.blit(pygame.surfarray.make_surface(rgb.swapaxes(0, 1)), (0, 0))
        pygame.display.flip()

    pygame.quit()
