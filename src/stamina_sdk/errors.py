"""
Stamina SDK Error Hierarchy
===========================

This module defines the exception hierarchy for the Stamina SDK, together
with the Position value type used to locate errors and tokens in source.

Exception Hierarchy
-------------------
StaminaError (base)
├── AssemblerError (assembler-related)
│   ├── AssemblySyntaxError - lexical/syntax errors in source
│   └── TooManyErrors - error limit reached while collecting
└── InvariantViolation - internal bug, never caused by user input

Design Philosophy
-----------------
The tokenizer itself never raises for malformed source: it reports
problems as Error tokens. AssemblySyntaxError exists so that callers
(the CLI in strict mode, a parser) can turn such a token into an
exception carrying the same location.

InvariantViolation is different. It signals that the tokenizer reached a
state that is impossible by construction, so it is never caught inside
the SDK and terminates the calling program unless the caller chooses
otherwise.

Error messages follow this format:
    filename:line:column: error: description
    source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

import logging
from dataclasses import dataclass
from typing import NoReturn, Optional

logger = logging.getLogger(__name__)


# =============================================================================
# Base Exception Class
# =============================================================================

class StaminaError(Exception):
    """
    Base exception for all Stamina SDK errors.

    All exceptions in the SDK inherit from this class, allowing callers
    to catch all SDK-related errors with a single except clause:

        try:
            token.to_exception()
        except StaminaError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Position Tracking
# =============================================================================

@dataclass(frozen=True)
class Position:
    """
    A coordinate in source code.

    Positions are immutable: consuming a character produces a new
    Position rather than mutating the current one.

    Attributes:
        filename: Name of the source file ("(unknown)" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed once the first character is read)
    """
    filename: str = "(unknown)"
    line: int = 1
    column: int = 0

    def next_line(self) -> "Position":
        """Return the position of the first column of the following line."""
        return Position(self.filename, self.line + 1, 1)

    def advance(self, num_chars: int) -> "Position":
        """Return the position num_chars columns further along this line."""
        return Position(self.filename, self.line, self.column + num_chars)

    def __str__(self) -> str:
        """Format as 'filename:line:column' for diagnostics."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(StaminaError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[Position] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            boot.s:3:10: error: number literal overflow
                movi r0, 99999999999999999999
                         ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    Lexical or syntax error in assembly source code.

    The tokenizer produces Error tokens instead of raising; this exception
    is built from such a token (see Token.to_exception) by callers that
    want to stop at the first problem.

    Examples:
        - Unknown character in source
        - Unterminated string literal
        - CMP without a condition code
        - Numeric literal overflow
    """
    pass


class TooManyErrors(AssemblerError):
    """
    Raised when too many errors have been encountered.

    This prevents a tool from flooding the terminal when a binary or
    otherwise non-assembly file is fed to it.
    """

    def __init__(self, message: str = "Too many errors"):
        super().__init__(message)


# =============================================================================
# Internal Invariants
# =============================================================================

class InvariantViolation(StaminaError):
    """
    An internal invariant of the SDK does not hold.

    This indicates a bug in the SDK rather than a problem with the input,
    so it is never reported as an Error token and never caught internally.
    """
    pass


def unreachable(message: str = "Unreachable code!") -> NoReturn:
    """
    Fail fast on a state that cannot occur by construction.

    Raises:
        InvariantViolation: Always
    """
    logger.critical(f"stamina assertion failed: {message}")
    raise InvariantViolation(message)


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The token dump tool uses this to keep scanning after an Error token,
    collecting everything before reporting it together.

    Example:
        collector = ErrorCollector(max_errors=100)

        try:
            for token in tokenizer:
                if token.is_error:
                    collector.add(token.to_exception())
        except TooManyErrors:
            pass  # Already collected max_errors

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before raising TooManyErrors
        """
        self.errors: list[AssemblerError] = []
        self.max_errors = max_errors

    def add(self, error: AssemblerError) -> None:
        """
        Add an error to the collection.

        Raises:
            TooManyErrors: If max_errors has been reached
        """
        self.errors.append(error)
        if len(self.errors) >= self.max_errors:
            raise TooManyErrors(f"Too many errors ({self.max_errors}), stopping")

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def report(self) -> str:
        """Format all errors for display, followed by a summary line."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")  # Blank line between errors

        count = self.error_count()
        error_word = "error" if count == 1 else "errors"
        lines.append(f"{count} {error_word}")

        return "\n".join(lines)
