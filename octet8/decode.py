"""CHIP-8 instruction decoding."""

from chex import dataclass

from octet8.errors import DecodeError


class Instruction:
    """Base class of every decoded CHIP-8 instruction."""


@dataclass(frozen=True)
class Clear(Instruction):
    """00E0 - Clear display."""


@dataclass(frozen=True)
class Return(Instruction):
    """00EE - Return from subroutine."""


@dataclass(frozen=True)
class NoOp(Instruction):
    """0NNN - Machine code subroutine, ignored."""
    address: int


@dataclass(frozen=True)
class Jump(Instruction):
    """1NNN - Jump to NNN."""
    address: int


@dataclass(frozen=True)
class Call(Instruction):
    """2NNN - Call subroutine at NNN."""
    address: int


@dataclass(frozen=True)
class SkipRegEqVal(Instruction):
    """3XNN - Skip if VX == NN."""
    x: int
    value: int


@dataclass(frozen=True)
class SkipRegNeqVal(Instruction):
    """4XNN - Skip if VX != NN."""
    x: int
    value: int


@dataclass(frozen=True)
class SkipRegEqReg(Instruction):
    """5XY0 - Skip if VX == VY."""
    x: int
    y: int


@dataclass(frozen=True)
class SetRegVal(Instruction):
    """6XNN - VX = NN."""
    x: int
    value: int


@dataclass(frozen=True)
class AddRegVal(Instruction):
    """7XNN - VX += NN, no carry."""
    x: int
    value: int


@dataclass(frozen=True)
class SetRegReg(Instruction):
    """8XY0 - VX = VY."""
    x: int
    y: int


@dataclass(frozen=True)
class SetRegOrReg(Instruction):
    """8XY1 - VX |= VY."""
    x: int
    y: int


@dataclass(frozen=True)
class SetRegAndReg(Instruction):
    """8XY2 - VX &= VY."""
    x: int
    y: int


@dataclass(frozen=True)
class SetRegXorReg(Instruction):
    """8XY3 - VX ^= VY."""
    x: int
    y: int


@dataclass(frozen=True)
class AddRegReg(Instruction):
    """8XY4 - VX += VY, VF = carry."""
    x: int
    y: int


@dataclass(frozen=True)
class SubRegReg(Instruction):
    """8XY5 - VX -= VY, VF = no borrow."""
    x: int
    y: int


@dataclass(frozen=True)
class ShiftRight(Instruction):
    """8XY6 - VX >>= 1, VF = shifted out bit."""
    x: int


@dataclass(frozen=True)
class RevSubRegReg(Instruction):
    """8XY7 - VX = VY - VX, VF = no borrow."""
    x: int
    y: int


@dataclass(frozen=True)
class ShiftLeft(Instruction):
    """8XYE - VX <<= 1, VF = shifted out bit."""
    x: int


@dataclass(frozen=True)
class SkipRegNeqReg(Instruction):
    """9XY0 - Skip if VX != VY."""
    x: int
    y: int


@dataclass(frozen=True)
class SetI(Instruction):
    """ANNN - I = NNN."""
    address: int


@dataclass(frozen=True)
class JumpOffset(Instruction):
    """BNNN - Jump to NNN + V0."""
    address: int


@dataclass(frozen=True)
class SetRegRand(Instruction):
    """CXNN - VX = random byte & NN."""
    x: int
    mask: int


@dataclass(frozen=True)
class Draw(Instruction):
    """DXYN - Draw an 8xN sprite from I at (VX, VY)."""
    x: int
    y: int
    height: int


@dataclass(frozen=True)
class SkipKeyDown(Instruction):
    """EX9E - Skip if key VX is pressed."""
    x: int


@dataclass(frozen=True)
class SkipKeyUp(Instruction):
    """EXA1 - Skip if key VX is not pressed."""
    x: int


@dataclass(frozen=True)
class SetRegDelay(Instruction):
    """FX07 - VX = delay timer."""
    x: int


@dataclass(frozen=True)
class SetRegKey(Instruction):
    """FX0A - Wait for a key press, store it in VX."""
    x: int


@dataclass(frozen=True)
class SetDelayReg(Instruction):
    """FX15 - Delay timer = VX."""
    x: int


@dataclass(frozen=True)
class SetSoundReg(Instruction):
    """FX18 - Sound timer = VX."""
    x: int


@dataclass(frozen=True)
class AddIReg(Instruction):
    """FX1E - I += VX."""
    x: int


@dataclass(frozen=True)
class SetISpriteReg(Instruction):
    """FX29 - I = address of font glyph VX."""
    x: int


@dataclass(frozen=True)
class BCD(Instruction):
    """FX33 - Store decimal digits of VX at I, I+1, I+2."""
    x: int


@dataclass(frozen=True)
class Dump(Instruction):
    """FX55 - Store V0..VX at I."""
    x: int


@dataclass(frozen=True)
class Load(Instruction):
    """FX65 - Load V0..VX from I."""
    x: int


@dataclass(frozen=True)
class OpcodeFields:
    """Raw operand fields of a 16-bit opcode."""
    raw: int
    family: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def opcode_fields(opcode: int) -> OpcodeFields:
    """Split a 16-bit opcode into its operand fields."""
    return OpcodeFields(
        raw=opcode,
        family=(opcode & 0xF000) >> 12,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        nn=opcode & 0x00FF,
        nnn=opcode & 0x0FFF
    )


_ALU_OPERATIONS = {
    0x0: SetRegReg,
    0x1: SetRegOrReg,
    0x2: SetRegAndReg,
    0x3: SetRegXorReg,
    0x4: AddRegReg,
    0x5: SubRegReg,
    0x7: RevSubRegReg,
}

_KEY_OPERATIONS = {
    0x9E: SkipKeyDown,
    0xA1: SkipKeyUp,
}

_MISC_OPERATIONS = {
    0x07: SetRegDelay,
    0x0A: SetRegKey,
    0x15: SetDelayReg,
    0x18: SetSoundReg,
    0x1E: AddIReg,
    0x29: SetISpriteReg,
    0x33: BCD,
    0x55: Dump,
    0x65: Load,
}


def _decode_system(f: OpcodeFields) -> Instruction:
    if f.nnn == 0x0E0:
        return Clear()
    if f.nnn == 0x0EE:
        return Return()
    return NoOp(address=f.nnn)


def _decode_alu(f: OpcodeFields) -> Instruction:
    if f.n == 0x6:
        return ShiftRight(x=f.x)
    if f.n == 0xE:
        return ShiftLeft(x=f.x)
    if f.n not in _ALU_OPERATIONS:
        raise DecodeError(f.raw)
    return _ALU_OPERATIONS[f.n](x=f.x, y=f.y)


def _decode_keys(f: OpcodeFields) -> Instruction:
    if f.nn not in _KEY_OPERATIONS:
        raise DecodeError(f.raw)
    return _KEY_OPERATIONS[f.nn](x=f.x)


def _decode_misc(f: OpcodeFields) -> Instruction:
    if f.nn not in _MISC_OPERATIONS:
        raise DecodeError(f.raw)
    return _MISC_OPERATIONS[f.nn](x=f.x)


_FAMILY_DECODERS = [
    _decode_system,
    lambda f: Jump(address=f.nnn),
    lambda f: Call(address=f.nnn),
    lambda f: SkipRegEqVal(x=f.x, value=f.nn),
    lambda f: SkipRegNeqVal(x=f.x, value=f.nn),
    lambda f: SkipRegEqReg(x=f.x, y=f.y),
    lambda f: SetRegVal(x=f.x, value=f.nn),
    lambda f: AddRegVal(x=f.x, value=f.nn),
    _decode_alu,
    lambda f: SkipRegNeqReg(x=f.x, y=f.y),
    lambda f: SetI(address=f.nnn),
    lambda f: JumpOffset(address=f.nnn),
    lambda f: SetRegRand(x=f.x, mask=f.nn),
    lambda f: Draw(x=f.x, y=f.y, height=f.n),
    _decode_keys,
    _decode_misc,
]


def decode(opcode: int) -> Instruction:
    """Decode a 16-bit opcode into an instruction.

    Raises:
        DecodeError: if the opcode belongs to the 0x8, 0xE or 0xF family but
            matches none of its instructions.
    """
    fields = opcode_fields(opcode & 0xFFFF)
    return _FAMILY_DECODERS[fields.family](fields)


INSTRUCTION_TYPES = (
    Clear, Return, NoOp, Jump, Call, SkipRegEqVal, SkipRegNeqVal, SkipRegEqReg,
    SetRegVal, AddRegVal, SetRegReg, SetRegOrReg, SetRegAndReg, SetRegXorReg,
    AddRegReg, SubRegReg, ShiftRight, RevSubRegReg, ShiftLeft, SkipRegNeqReg,
    SetI, JumpOffset, SetRegRand, Draw, SkipKeyDown, SkipKeyUp, SetRegDelay,
    SetRegKey, SetDelayReg, SetSoundReg, AddIReg, SetISpriteReg, BCD, Dump, Load,
)
