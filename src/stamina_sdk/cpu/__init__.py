"""
Stamina SDK CPU Package
=======================

Architecture definitions for the Stamina virtual machine that are shared
by the SDK tools.

Modules:
    instructions: The ordered instruction definition list, including the
                  compare-family mnemonic/condition pairs.

Usage:
    from stamina_sdk.cpu import INSTRUCTION_DEFINITIONS, InstructionDef
"""

from stamina_sdk.cpu.instructions import (
    InstructionDef,
    INSTRUCTION_DEFINITIONS,
    COMPARE_MNEMONICS,
    CONDITIONS,
)

__all__ = [
    "InstructionDef",
    "INSTRUCTION_DEFINITIONS",
    "COMPARE_MNEMONICS",
    "CONDITIONS",
]
