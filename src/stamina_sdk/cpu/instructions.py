"""
Stamina VM Instruction Definitions
==================================

This module lists every instruction the Stamina virtual machine accepts,
in the order the instruction set reference documents them. It is plain
data: the assembler derives its lookup tables from it (see
stamina_sdk.assembler.instructions.InstructionTable).

Each entry is either a plain mnemonic, or a compare-family mnemonic paired
with one of its condition codes. Compare instructions are written with the
condition after a slash:

    cmp/eq  r0, r1      ; T = (r0 == r1)
    cmpi/lt r2, 10      ; T = (r2 < 10), signed

Condition Codes
---------------
| Code | Meaning                  |
|------|--------------------------|
| EQ   | equal                    |
| NE   | not equal                |
| LT   | less than, signed        |
| LE   | less or equal, signed    |
| GT   | greater than, signed     |
| GE   | greater or equal, signed |
| LO   | lower, unsigned          |
| LS   | lower or same, unsigned  |
| HI   | higher, unsigned         |
| HS   | higher or same, unsigned |
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class InstructionDef:
    """
    One entry of the instruction definition list.

    Attributes:
        mnemonic: Instruction name as written in the reference (uppercase)
        condition: Condition code for compare-family entries, else None
    """
    mnemonic: str
    condition: Optional[str] = None

    @property
    def is_compare(self) -> bool:
        """True for compare-mnemonic/condition pairs."""
        return self.condition is not None


# Compare-family instructions and the conditions each accepts
COMPARE_MNEMONICS: tuple[str, ...] = ("CMP", "CMPI")

CONDITIONS: tuple[str, ...] = (
    "EQ", "NE",
    "LT", "LE", "GT", "GE",
    "LO", "LS", "HI", "HS",
)


# =============================================================================
# Instruction Definition List
# =============================================================================

INSTRUCTION_DEFINITIONS: tuple[InstructionDef, ...] = (
    # Control
    InstructionDef("NOP"),
    InstructionDef("HALT"),
    InstructionDef("TRAP"),

    # Data movement
    InstructionDef("MOV"),
    InstructionDef("MOVI"),
    InstructionDef("MOVHI"),
    InstructionDef("LDB"),
    InstructionDef("LDH"),
    InstructionDef("LDW"),
    InstructionDef("STB"),
    InstructionDef("STH"),
    InstructionDef("STW"),
    InstructionDef("PUSH"),
    InstructionDef("POP"),

    # Arithmetic
    InstructionDef("ADD"),
    InstructionDef("ADDI"),
    InstructionDef("SUB"),
    InstructionDef("SUBI"),
    InstructionDef("MUL"),
    InstructionDef("DIVS"),
    InstructionDef("DIVU"),
    InstructionDef("MODS"),
    InstructionDef("MODU"),
    InstructionDef("NEG"),

    # Logic and shifts
    InstructionDef("AND"),
    InstructionDef("ANDI"),
    InstructionDef("OR"),
    InstructionDef("ORI"),
    InstructionDef("XOR"),
    InstructionDef("XORI"),
    InstructionDef("NOT"),
    InstructionDef("SHL"),
    InstructionDef("SHLI"),
    InstructionDef("SHR"),
    InstructionDef("SHRI"),
    InstructionDef("SAR"),
    InstructionDef("SARI"),

    # Branches (BT/BF test the T flag set by compares)
    InstructionDef("JMP"),
    InstructionDef("JMPR"),
    InstructionDef("BT"),
    InstructionDef("BF"),
    InstructionDef("CALL"),
    InstructionDef("CALLR"),
    InstructionDef("RET"),

    # Compares
    *(InstructionDef(mnemonic, cond) for mnemonic in COMPARE_MNEMONICS for cond in CONDITIONS),
)
