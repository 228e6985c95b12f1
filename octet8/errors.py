"""Fatal CHIP-8 machine faults."""


class Chip8Error(Exception):
    """Base class for faults that halt the machine."""


class DecodeError(Chip8Error):
    """Opcode with no matching instruction in the 0x8, 0xE or 0xF families."""

    def __init__(self, opcode: int):
        super().__init__(f"Unknown opcode 0x{opcode:04X}")
        self.opcode = opcode


class StackUnderflowError(Chip8Error):
    """Return executed with an empty call stack."""


class StackOverflowError(Chip8Error):
    """Call executed with every stack frame in use."""
