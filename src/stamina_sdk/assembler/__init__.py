"""
Stamina Assembler Front End
===========================

This package contains the lexical front end of smasm, the assembler for
the Stamina virtual machine.

Main Components
---------------
- **Tokenizer**: Pull-based scanner producing one Token per call
- **CharacterSource**: One-character lookahead over the input
  (StringSource for strings, FileSource for streamed files)
- **InstructionTable**: Case-insensitive mnemonic and condition lookup

Example Usage
-------------
>>> from stamina_sdk.assembler import Tokenizer, TokenType
>>> tokenizer = Tokenizer.from_string("add r0, r1, 4")
>>> [t.type.name for t in tokenizer.tokenize()]
['Mnemonic', 'Identifier', 'Comma', 'Identifier', 'Comma', 'NumericLit', 'NewLine', 'EndOfFile']
"""

from stamina_sdk.assembler.lexer import (
    LexErrorKind,
    Token,
    TokenType,
    Tokenizer,
    tokenize,
)
from stamina_sdk.assembler.source import CharacterSource, FileSource, StringSource
from stamina_sdk.assembler.instructions import InstructionTable, get_instruction_table

__all__ = [
    # Lexer
    "Tokenizer",
    "Token",
    "TokenType",
    "LexErrorKind",
    "tokenize",
    # Character sources
    "CharacterSource",
    "StringSource",
    "FileSource",
    # Instruction lookup
    "InstructionTable",
    "get_instruction_table",
]
