"""
Instruction Table
=================

Case-insensitive lookup of instruction mnemonics and compare-condition
codes, derived from an instruction definition list.

The table used by default is built once per process from
stamina_sdk.cpu.INSTRUCTION_DEFINITIONS and shared read-only by every
Tokenizer. Tools that carry their own instruction set can build a table
from another list, or from a JSON file:

    [["NOP"], ["ADD"], ["CMP", "EQ"], {"mnemonic": "CMP", "condition": "NE"}]

Example
-------
>>> table = get_instruction_table()
>>> table.is_mnemonic("add")
True
>>> table.is_compare("Cmpi"), table.is_condition("eq")
(True, True)
"""

import functools
import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Union

from stamina_sdk.cpu import INSTRUCTION_DEFINITIONS, InstructionDef

logger = logging.getLogger(__name__)


class InstructionTable:
    """
    Immutable registry of mnemonics and condition codes.

    Attributes:
        mnemonics: Every mnemonic name, plain and compare-family (uppercase)
        compare_mnemonics: Mnemonics that require a "/COND" suffix
        conditions: Condition codes accepted after a compare mnemonic
    """

    __slots__ = ("mnemonics", "compare_mnemonics", "conditions")

    def __init__(self, definitions: Iterable[InstructionDef]):
        mnemonics = set()
        compare_mnemonics = set()
        conditions = set()

        for definition in definitions:
            name = definition.mnemonic.upper()
            mnemonics.add(name)
            if definition.is_compare:
                compare_mnemonics.add(name)
                conditions.add(definition.condition.upper())

        self.mnemonics = frozenset(mnemonics)
        self.compare_mnemonics = frozenset(compare_mnemonics)
        self.conditions = frozenset(conditions)

        logger.debug(
            f"Instruction table: {len(self.mnemonics)} mnemonics "
            f"({len(self.compare_mnemonics)} compare), {len(self.conditions)} conditions"
        )

    def __repr__(self) -> str:
        return (
            f"InstructionTable(mnemonics={len(self.mnemonics)}, "
            f"conditions={len(self.conditions)})"
        )

    def is_mnemonic(self, name: str) -> bool:
        """Return True if name (any case) is a mnemonic."""
        return name.upper() in self.mnemonics

    def is_compare(self, name: str) -> bool:
        """Return True if name (any case) is a compare-family mnemonic."""
        return name.upper() in self.compare_mnemonics

    def is_condition(self, name: str) -> bool:
        """Return True if name (any case) is a compare-condition code."""
        return name.upper() in self.conditions

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "InstructionTable":
        """
        Build a table from a JSON definition list.

        Each entry is either an array ``[mnemonic]`` / ``[mnemonic, condition]``
        or an object with ``mnemonic`` and optional ``condition`` keys.

        Raises:
            ValueError: If an entry has neither shape
            OSError: If the file cannot be read
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            entries = json.load(f)

        if not isinstance(entries, list):
            raise ValueError(f"{path}: expected a list of instruction definitions")

        definitions = []
        for index, entry in enumerate(entries):
            if isinstance(entry, dict) and isinstance(entry.get("mnemonic"), str):
                definitions.append(InstructionDef(entry["mnemonic"], entry.get("condition")))
            elif isinstance(entry, list) and len(entry) in (1, 2) and all(isinstance(e, str) for e in entry):
                definitions.append(InstructionDef(*entry))
            else:
                raise ValueError(f"{path}: invalid instruction definition at index {index}: {entry!r}")

        logger.debug(f"Loaded {len(definitions)} instruction definitions from {path}")
        return cls(definitions)


@functools.lru_cache(maxsize=None)
def get_instruction_table() -> InstructionTable:
    """Return the process-wide table built from INSTRUCTION_DEFINITIONS."""
    return InstructionTable(INSTRUCTION_DEFINITIONS)
