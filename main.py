"""Play a CHIP-8 ROM in a pygame window."""

import argparse

from octet8.host import run_emulator


def parse_args():
    parser = argparse.ArgumentParser(description="CHIP-8 emulator")
    parser.add_argument("rom", help="input rom file")
    parser.add_argument("--scale", type=int, default=10, help="window pixels per CHIP-8 pixel")
    parser.add_argument("--frequency", type=int, default=500, help="CPU cycles per second")
    parser.add_argument("--colors", default="white", help="color scheme (white, classic, amber, blue, retro)")
    parser.add_argument("--log-level", default="INFO", help="DEBUG traces every instruction")
    parser.add_argument("--seed", type=int, default=0, help="random number generator seed")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    run_emulator(
        args.rom,
        scale=args.scale,
        instruction_frequency=args.frequency,
        color_scheme=args.colors,
        log_level=args.log_level,
        seed=args.seed,
    )
