"""
Stamina Assembly Language Lexer
===============================

This module implements the tokenizer for smasm, the Stamina virtual
machine assembler. It pulls characters from a CharacterSource one at a
time and produces classified tokens for the parser.

Token Types
-----------
- Identifier: Labels and symbol names (original case preserved)
- Mnemonic: Instruction names, uppercased ("ADD", "CMPI/EQ")
- Directive: ".name" or "@name" (payload is the name without prefix)
- StringLit: "escaped string" or `raw string`
- NumericLit: Decimal, 0x hex, 0o octal, 0b binary, 'c' character
- Operators: + - * / % ^ ~ ! & | && || << >> < <= > >= == != @@
- Delimiters: , ( )
- NewLine: End of a statement
- EndOfFile: End of input (repeated forever)
- Error: A lexical problem; the payload is the message

Number Formats
--------------
| Format      | Prefix | Example | Value |
|-------------|--------|---------|-------|
| Decimal     | (none) | 123     | 123   |
| Hexadecimal | 0x     | 0x7F    | 127   |
| Octal       | 0o     | 0o177   | 127   |
| Binary      | 0b     | 0b1010  | 10    |
| Character   | '      | 'A'     | 65    |

Literals must fit in a signed 64-bit integer.

Statement Continuation
----------------------
A newline only ends a statement when the previous token could end an
expression: an identifier, mnemonic, directive, literal or ")". After an
operator, "," or "(" the newline is swallowed, so long operand lists can
be split across lines:

    movi r0, base +
             offset * 4        ; one statement

Blank and comment-only lines never produce NewLine tokens, and input
that does not end in a newline still gets a final NewLine.

Errors
------
The tokenizer never raises for malformed input. Problems become Error
tokens carrying a message and a LexErrorKind, and scanning continues
after the offending text.

Example
-------
>>> from stamina_sdk.assembler.lexer import Tokenizer
>>> for token in Tokenizer.from_string("cmpi/eq r0, 34"):
...     print(token)
(unknown):1:1 - Mnemonic - `CMPI/EQ` - `cmpi/eq`
(unknown):1:9 - Identifier - `r0` - `r0`
(unknown):1:11 - Comma - (empty) - `,`
(unknown):1:13 - NumericLit - 34 - `34`
(unknown):1:15 - NewLine - (empty) - ``
(unknown):1:15 - EndOfFile - (empty) - ``
"""

import logging
import string
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional

from stamina_sdk.assembler.instructions import InstructionTable, get_instruction_table
from stamina_sdk.assembler.source import CharacterSource, StringSource
from stamina_sdk.config import TokenizerConfig
from stamina_sdk.errors import AssemblySyntaxError, Position, unreachable

logger = logging.getLogger(__name__)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for Stamina assembly language.

    Member names are the symbolic names shown in diagnostics.
    """

    # Structural tokens
    Error = auto()          # Lexical error, payload is the message
    EndOfFile = auto()
    NewLine = auto()        # End of statement

    # Names
    Identifier = auto()
    Mnemonic = auto()
    Directive = auto()

    # Literals
    StringLit = auto()
    NumericLit = auto()

    # Delimiters
    Comma = auto()          # ,
    LParen = auto()         # (
    RParen = auto()         # )

    # Arithmetic operators
    Plus = auto()           # +
    Minus = auto()          # -
    Mul = auto()            # *
    Div = auto()            # /
    Mod = auto()            # %
    Xor = auto()            # ^

    # Shift and comparison operators, grouped by first character
    ShLeft = auto()         # <<
    LessEqual = auto()      # <=
    Less = auto()           # <
    ShRight = auto()        # >>
    GreaterEqual = auto()   # >=
    Greater = auto()        # >
    Equal = auto()          # ==
    NotEqual = auto()       # !=

    # Logical and bitwise operators
    LogicNot = auto()       # !
    BitNot = auto()         # ~
    LogicAnd = auto()       # &&
    BitAnd = auto()         # &
    LogicOr = auto()        # ||
    BitOr = auto()          # |

    # Macro token concatenation
    TokCat = auto()         # @@


class LexErrorKind(Enum):
    """Classification of Error tokens."""

    UnterminatedString = auto()
    InvalidEscapeOrCharacter = auto()
    UnterminatedCharLiteral = auto()
    MultiCharLiteral = auto()
    UnterminatedRawString = auto()
    BareEqualsSign = auto()
    MissingCompareSlash = auto()
    InvalidCompareCondition = auto()
    NumericOverflow = auto()
    UnknownCharacter = auto()


# Token types whose payload is text; NumericLit carries an int, the rest None
TEXT_PAYLOAD_TYPES = frozenset({
    TokenType.Identifier,
    TokenType.Mnemonic,
    TokenType.Directive,
    TokenType.StringLit,
    TokenType.Error,
})

_HINTS = {
    LexErrorKind.UnterminatedString: 'add the closing "',
    LexErrorKind.UnterminatedRawString: "add the closing `",
    LexErrorKind.BareEqualsSign: "use == to compare values",
    LexErrorKind.MissingCompareSlash: "write the condition after a slash, e.g. CMP/EQ",
    LexErrorKind.MultiCharLiteral: "use a double-quoted string for more than one character",
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token produced by the Tokenizer.

    Tokens compare equal when position, type and payload match; the raw
    source text and error kind are informational.

    Attributes:
        position: Where the token starts
        type: The TokenType classification
        payload: Text for names, strings and errors; int for NumericLit;
            None otherwise
        source_text: The exact input consumed for this token
        error_kind: Classification of an Error token
    """
    position: Position
    type: TokenType
    payload: str | int | None = None
    source_text: str = field(default="", compare=False)
    error_kind: Optional[LexErrorKind] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.type in TEXT_PAYLOAD_TYPES:
            valid = isinstance(self.payload, str)
        elif self.type is TokenType.NumericLit:
            valid = (
                isinstance(self.payload, int)
                and not isinstance(self.payload, bool)
                and INT64_MIN <= self.payload <= INT64_MAX
            )
        else:
            valid = self.payload is None

        if not valid:
            unreachable(f"{self.type.name} token cannot carry payload {self.payload!r}")
        if self.error_kind is not None and self.type is not TokenType.Error:
            unreachable(f"{self.type.name} token cannot carry an error kind")

    def __str__(self) -> str:
        if self.payload is None:
            payload = "(empty)"
        elif isinstance(self.payload, int):
            payload = str(self.payload)
        else:
            payload = f"`{self.payload}`"
        return f"{self.position} - {self.type.name} - {payload} - `{self.source_text}`"

    def __repr__(self) -> str:
        if self.payload is not None:
            return f"Token({self.type.name}, {self.payload!r}, {self.position})"
        return f"Token({self.type.name}, {self.position})"

    @property
    def is_error(self) -> bool:
        return self.type is TokenType.Error

    def to_exception(self, source_line: Optional[str] = None) -> AssemblySyntaxError:
        """
        Build an AssemblySyntaxError describing this Error token.

        Args:
            source_line: Text of the offending line, for the caret display
        """
        if not self.is_error:
            unreachable(f"to_exception() called on a {self.type.name} token")
        return AssemblySyntaxError(
            self.payload,
            self.position,
            hint=_HINTS.get(self.error_kind),
            source_line=source_line,
        )


# =============================================================================
# Character Helpers
# =============================================================================

DECIMAL_DIGITS = string.digits
OCTAL_DIGITS = string.octdigits
BINARY_DIGITS = "01"
HEX_DIGITS = string.hexdigits


def digit_value(char: str) -> int:
    """
    Value of a hexadecimal digit character.

    Callers only pass characters already checked against a digit set, so
    anything else is an internal error.
    """
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "a" <= char <= "f":
        return ord(char) - ord("a") + 10
    if "A" <= char <= "F":
        return ord(char) - ord("A") + 10
    unreachable(f"digit_value() called with non-digit {char!r}")


# =============================================================================
# Tokenizer Implementation
# =============================================================================

class Tokenizer:
    """
    Pull-based tokenizer for Stamina assembly source.

    Each call to next_token() returns exactly one token. Once the input
    is exhausted (and the closing NewLine has been produced) every call
    returns EndOfFile.

    A Tokenizer holds mutable scanning state; use one instance per token
    stream and do not share it between threads.

    Usage:
        tokenizer = Tokenizer.from_string(source_text, "boot.s")
        tokens = list(tokenizer.tokenize())

    Attributes:
        source: The CharacterSource being consumed
        table: Mnemonic/condition lookup used to classify names
        config: Tokenizer settings
    """

    # Insignificant whitespace; newline is handled separately
    WHITESPACE = " \t\r"

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters + "_"

    # Characters that can continue an identifier or directive
    IDENT_CHARS = string.ascii_letters + string.digits + "._"

    # Single-character tokens that never start a longer operator
    SINGLE_CHAR_TOKENS = {
        ",": TokenType.Comma,
        "(": TokenType.LParen,
        ")": TokenType.RParen,
        "+": TokenType.Plus,
        "-": TokenType.Minus,
        "*": TokenType.Mul,
        "/": TokenType.Div,
        "%": TokenType.Mod,
        "^": TokenType.Xor,
        "~": TokenType.BitNot,
    }

    # First character -> ((second character, token), ...), single-character token.
    # A None fallback means the character is not a token on its own.
    COMPOUND_OPERATORS = {
        "<": ((("<", TokenType.ShLeft), ("=", TokenType.LessEqual)), TokenType.Less),
        ">": (((">", TokenType.ShRight), ("=", TokenType.GreaterEqual)), TokenType.Greater),
        "=": ((("=", TokenType.Equal),), None),
        "!": ((("=", TokenType.NotEqual),), TokenType.LogicNot),
        "&": ((("&", TokenType.LogicAnd),), TokenType.BitAnd),
        "|": ((("|", TokenType.LogicOr),), TokenType.BitOr),
    }

    # Escape sequences in string and character literals (octal handled separately)
    ESCAPE_SEQUENCES = {
        "a": "\x07",    # Bell
        "b": "\x08",    # Backspace
        "f": "\x0c",    # Form feed
        "n": "\x0a",    # Newline
        "r": "\x0d",    # Carriage return
        "t": "\x09",    # Tab
        "v": "\x0b",    # Vertical tab
        "\\": "\\",
        "'": "'",
        '"': '"',
    }

    def __init__(
        self,
        source: CharacterSource,
        table: Optional[InstructionTable] = None,
        config: Optional[TokenizerConfig] = None,
    ):
        """
        Initialize the tokenizer.

        Args:
            source: Where characters come from
            table: Instruction table (default: the shared process-wide table)
            config: Tokenizer settings (default: TokenizerConfig())
        """
        self.source = source
        self.table = table if table is not None else get_instruction_table()
        self.config = config if config is not None else TokenizerConfig()

        # Start position and raw text of the token being scanned
        self._start = source.position
        self._text: list[str] = []

        # True when the previous token can end a statement
        self._can_newline = True

    @classmethod
    def from_string(
        cls,
        text: str,
        filename: Optional[str] = None,
        table: Optional[InstructionTable] = None,
        config: Optional[TokenizerConfig] = None,
    ) -> "Tokenizer":
        """Create a tokenizer over an in-memory string."""
        config = config if config is not None else TokenizerConfig()
        source = StringSource(
            text,
            filename if filename is not None else config.default_filename,
            config.start_line,
        )
        return cls(source, table, config)

    # =========================================================================
    # Public Interface
    # =========================================================================

    def next_token(self) -> Token:
        """Scan and return the next token."""
        while True:
            while self._ch is not None and self._ch in self.WHITESPACE:
                self.source.advance()

            if self._ch == ";":
                while self._ch is not None and self._ch != "\n":
                    self.source.advance()

            self._start = self.source.position
            self._text = []

            if self._ch == "\n":
                self._next_ch()
                if self._can_newline:
                    self._can_newline = False
                    return self._make_token(TokenType.NewLine)
                # Blank line or continuation: keep scanning
                continue

            if self._ch is None:
                if self._can_newline:
                    self._can_newline = False
                    return self._make_token(TokenType.NewLine)
                return self._make_token(TokenType.EndOfFile)

            self._can_newline = False
            char = self._ch
            self._next_ch()
            return self._scan_token(char)

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including the first EndOfFile.

        Yields:
            Token objects in source order
        """
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EndOfFile:
                return

    def __iter__(self) -> Iterator[Token]:
        return self.tokenize()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    @property
    def _ch(self) -> Optional[str]:
        """The lookahead character, None at end of input."""
        return self.source.current

    def _next_ch(self) -> None:
        """Consume the lookahead into the current token's source text."""
        if self._ch is not None:
            self._text.append(self._ch)
        self.source.advance()

    def _maybe_ch(self, chars: str) -> bool:
        """Consume the lookahead if it is one of chars."""
        if self._ch is not None and self._ch in chars:
            self._next_ch()
            return True
        return False

    def _read_run(self, chars: str) -> str:
        """Consume and return the longest run of characters from chars."""
        run = []
        while self._ch is not None and self._ch in chars:
            run.append(self._ch)
            self._next_ch()
        return "".join(run)

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(self, token_type: TokenType, payload: str | int | None = None) -> Token:
        return Token(self._start, token_type, payload, "".join(self._text))

    def _error(self, message: str, kind: LexErrorKind) -> Token:
        token = Token(self._start, TokenType.Error, message, "".join(self._text), kind)
        logger.debug(f"{self._start}: {kind.name}: {message}")
        return token

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self, char: str) -> Token:
        """Classify a token whose first character has just been consumed."""
        if char == '"':
            self._can_newline = True
            return self._scan_string()

        if char == "'":
            self._can_newline = True
            return self._scan_char()

        if char == "`":
            self._can_newline = True
            return self._scan_raw_string()

        if char == "@" and self._maybe_ch("@"):
            return self._make_token(TokenType.TokCat)

        if char in ".@":
            self._can_newline = True
            return self._make_token(TokenType.Directive, self._read_run(self.IDENT_CHARS))

        if char in self.SINGLE_CHAR_TOKENS:
            if char == ")":
                # An expression may end at a closing parenthesis
                self._can_newline = True
            return self._make_token(self.SINGLE_CHAR_TOKENS[char])

        if char in self.COMPOUND_OPERATORS:
            followers, fallback = self.COMPOUND_OPERATORS[char]
            for second, token_type in followers:
                if self._maybe_ch(second):
                    return self._make_token(token_type)
            if fallback is None:
                return self._error(
                    "Single equals sign is not a valid token",
                    LexErrorKind.BareEqualsSign,
                )
            return self._make_token(fallback)

        if char in DECIMAL_DIGITS:
            self._can_newline = True
            return self._scan_number(char)

        if char in self.IDENT_START:
            self._can_newline = True
            return self._scan_identifier(char)

        return self._error("Unknown character", LexErrorKind.UnknownCharacter)

    def _scan_escaped_char(self) -> Optional[str]:
        """
        Consume one possibly-escaped character of a string or char literal.

        Returns:
            The decoded character, or None for a malformed escape or a
            missing character at end of input
        """
        if not self._maybe_ch("\\"):
            char = self._ch
            self._next_ch()
            return char

        if self._ch is None:
            return None

        char = self._ch
        self._next_ch()

        if char in OCTAL_DIGITS:
            value = digit_value(char)
            while self._ch is not None and self._ch in OCTAL_DIGITS:
                value = value * 8 + digit_value(self._ch)
                self._next_ch()
                if value >= 256:
                    return None
            return chr(value)

        return self.ESCAPE_SEQUENCES.get(char)

    def _skip_literal_tail(self, quote: str, stop_at_newline: bool = False) -> None:
        """
        Consume the rest of a malformed literal through its closing quote.

        The skipped text becomes part of the Error token, so scanning
        resumes after the literal instead of inside it.
        """
        while self._ch is not None and self._ch != quote:
            if stop_at_newline and self._ch == "\n":
                return
            if self._ch == "\\":
                self._next_ch()
                if self._ch is None or (stop_at_newline and self._ch == "\n"):
                    return
            self._next_ch()
        self._maybe_ch(quote)

    def _scan_string(self) -> Token:
        """Scan a double-quoted string after the opening quote."""
        chars = []
        while self._ch != '"':
            if self._ch is None:
                return self._error("invalid character in string", LexErrorKind.UnterminatedString)

            char = self._scan_escaped_char()
            if char is None:
                if self._ch is None:
                    return self._error("invalid character in string", LexErrorKind.UnterminatedString)
                self._skip_literal_tail('"')
                return self._error("invalid character in string", LexErrorKind.InvalidEscapeOrCharacter)
            chars.append(char)

        self._next_ch()  # consume closing "
        return self._make_token(TokenType.StringLit, "".join(chars))

    def _scan_char(self) -> Token:
        """
        Scan a character literal after the opening quote.

        Returns the character's byte value as a NumericLit token. A
        character above 0xFF does not fit in one byte and is reported
        like a multi-character literal.
        """
        if self._ch is None:
            return self._error("invalid character", LexErrorKind.UnterminatedCharLiteral)

        char = self._scan_escaped_char()
        if char is None:
            if self._ch is None:
                return self._error("invalid character", LexErrorKind.UnterminatedCharLiteral)
            self._skip_literal_tail("'", stop_at_newline=True)
            return self._error("invalid character", LexErrorKind.InvalidEscapeOrCharacter)

        if self._ch != "'" or ord(char) > 0xFF:
            if self._ch is None or self._ch == "\n":
                kind = LexErrorKind.UnterminatedCharLiteral
            else:
                kind = LexErrorKind.MultiCharLiteral
                self._skip_literal_tail("'", stop_at_newline=True)
            return self._error("character literal can only contain single character", kind)

        self._next_ch()  # consume closing '
        return self._make_token(TokenType.NumericLit, ord(char))

    def _scan_raw_string(self) -> Token:
        """Scan a backtick string verbatim, without escape processing."""
        chars = []
        while self._ch != "`":
            if self._ch is None:
                return self._error(
                    "invalid end-of-file in raw string",
                    LexErrorKind.UnterminatedRawString,
                )
            chars.append(self._ch)
            self._next_ch()

        self._next_ch()  # consume closing `
        return self._make_token(TokenType.StringLit, "".join(chars))

    def _scan_identifier(self, first: str) -> Token:
        """
        Scan an identifier or mnemonic.

        Mnemonics are matched case-insensitively and reported uppercased.
        Compare-family mnemonics must be followed by "/COND".
        """
        ident = first + self._read_run(self.IDENT_CHARS)
        upper_ident = ident.upper()

        if self.table.is_compare(upper_ident):
            if not self._maybe_ch("/"):
                return self._error(
                    f"{ident} must be followed by /",
                    LexErrorKind.MissingCompareSlash,
                )

            cond = self._read_run(string.ascii_letters)
            if not self.table.is_condition(cond):
                return self._error(
                    f"{ident} must be followed by a valid condition, {cond} is not a valid condition",
                    LexErrorKind.InvalidCompareCondition,
                )

            return self._make_token(TokenType.Mnemonic, f"{upper_ident}/{cond.upper()}")

        if self.table.is_mnemonic(upper_ident):
            return self._make_token(TokenType.Mnemonic, upper_ident)

        return self._make_token(TokenType.Identifier, ident)

    def _scan_number(self, first: str) -> Token:
        """
        Scan a numeric literal whose first digit has been consumed.

        A leading 0 followed by b, o or x selects radix 2, 8 or 16.
        """
        radix, digits, value = 10, DECIMAL_DIGITS, digit_value(first)

        if first == "0":
            if self._maybe_ch(self.config.binary_prefixes):
                radix, digits, value = 2, BINARY_DIGITS, 0
            elif self._maybe_ch("oO"):
                radix, digits, value = 8, OCTAL_DIGITS, 0
            elif self._maybe_ch("xX"):
                radix, digits, value = 16, HEX_DIGITS, 0

        while self._ch is not None and self._ch in digits:
            value = value * radix + digit_value(self._ch)
            self._next_ch()
            if value > INT64_MAX:
                self._read_run(digits)
                return self._error("number literal overflow", LexErrorKind.NumericOverflow)

        return self._make_token(TokenType.NumericLit, value)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(
    text: str,
    filename: Optional[str] = None,
    config: Optional[TokenizerConfig] = None,
) -> list[Token]:
    """
    Tokenize a string, returning every token through the first EndOfFile.

    Args:
        text: Assembly source
        filename: Name reported in positions (default from config)
        config: Tokenizer settings
    """
    return list(Tokenizer.from_string(text, filename, config=config).tokenize())
