"""
Stamina SDK - Assembler Toolchain for the Stamina Virtual Machine
=================================================================

This package provides the front end of smasm, the assembler for the
Stamina virtual machine: a tokenizer that turns assembly source into a
stream of classified, position-annotated tokens for the parser.

Main Components
---------------
- **assembler**: Tokenizer, character sources and instruction lookup
- **cpu**: Instruction set definitions shared by the tools
- **config**: Tokenizer configuration (defaults and environment overrides)

Quick Start
-----------
Tokenize a string:
    >>> from stamina_sdk import tokenize
    >>> for token in tokenize("movi r0, 0x10"):
    ...     print(token)

Tokenize a file without loading it into memory:
    >>> from stamina_sdk import FileSource, Tokenizer
    >>> with FileSource.open("boot.s") as source:
    ...     for token in Tokenizer(source):
    ...         print(token)

Or use the command-line tool:
    $ smtok boot.s
"""

__version__ = "0.1.0"
__author__ = "Stamina Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from stamina_sdk.assembler import (
    CharacterSource,
    FileSource,
    InstructionTable,
    LexErrorKind,
    StringSource,
    Token,
    TokenType,
    Tokenizer,
    get_instruction_table,
    tokenize,
)
from stamina_sdk.config import TokenizerConfig
from stamina_sdk.cpu import InstructionDef, INSTRUCTION_DEFINITIONS
from stamina_sdk.errors import (
    StaminaError,
    AssemblerError,
    AssemblySyntaxError,
    TooManyErrors,
    InvariantViolation,
    ErrorCollector,
    Position,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Tokenizer
    "Tokenizer",
    "Token",
    "TokenType",
    "LexErrorKind",
    "tokenize",
    "CharacterSource",
    "StringSource",
    "FileSource",
    "Position",
    # Instruction set
    "InstructionTable",
    "InstructionDef",
    "INSTRUCTION_DEFINITIONS",
    "get_instruction_table",
    # Configuration
    "TokenizerConfig",
    # Exception hierarchy
    "StaminaError",
    "AssemblerError",
    "AssemblySyntaxError",
    "TooManyErrors",
    "InvariantViolation",
    "ErrorCollector",
]
