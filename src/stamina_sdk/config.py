"""
Stamina SDK - Tokenizer Configuration
=====================================

Settings that change how source text is presented to the tokenizer.
Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (the smtok tool overrides individual fields)

Environment variables (all optional):
    SMASM_FILENAME: Filename shown in positions for string input
    SMASM_START_LINE: Line number of the first source line
    SMASM_ENCODING: Text encoding for source files
    SMASM_LEGACY_BINARY_PREFIX: "1"/"true"/"yes" to accept only lowercase 0b
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class TokenizerConfig:
    """
    Configuration for a Tokenizer and its character source.

    Attributes:
        default_filename: Name reported in positions when none is given
        start_line: Line number assigned to the first line of input
        encoding: Encoding used when reading source files
        legacy_binary_prefix: Only lowercase "0b" starts a binary literal,
            matching the historical smasm behaviour; "0B" then lexes as
            the number 0 followed by an identifier
    """

    default_filename: str = "(unknown)"
    start_line: int = 1
    encoding: str = "utf-8"
    legacy_binary_prefix: bool = False

    @property
    def binary_prefixes(self) -> str:
        """Characters accepted after a leading 0 to select radix 2."""
        return "b" if self.legacy_binary_prefix else "bB"

    @classmethod
    def from_env(cls) -> "TokenizerConfig":
        """
        Create a TokenizerConfig from environment variables.

        Invalid values are logged and ignored, leaving the default.
        """
        config = cls()

        if filename := os.environ.get("SMASM_FILENAME"):
            config.default_filename = filename

        if start_line := os.environ.get("SMASM_START_LINE"):
            try:
                value = int(start_line)
            except ValueError:
                value = 0
            if value >= 1:
                config.start_line = value
            else:
                logger.warning(f"Ignoring invalid SMASM_START_LINE={start_line!r}")

        if encoding := os.environ.get("SMASM_ENCODING"):
            config.encoding = encoding

        if legacy := os.environ.get("SMASM_LEGACY_BINARY_PREFIX"):
            if legacy.lower() in _TRUE_VALUES:
                config.legacy_binary_prefix = True
            elif legacy.lower() in _FALSE_VALUES:
                config.legacy_binary_prefix = False
            else:
                logger.warning(f"Ignoring invalid SMASM_LEGACY_BINARY_PREFIX={legacy!r}")

        return config
