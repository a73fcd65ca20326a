"""
Character Sources
=================

A character source hands the tokenizer one character of lookahead at a
time, together with that character's Position. The tokenizer only ever
talks to the abstract CharacterSource interface, so input can come from
a string, a file, or anything else that can produce characters.

Position Tracking
-----------------
Sources prime themselves on construction: the first character is already
the lookahead and sits at column 1 of the start line. Each advance()
moves past the lookahead; moving past a newline starts the next line at
column 1, moving past anything else adds one column. Once the input is
exhausted the lookahead is None and further advances change nothing.

Example
-------
>>> src = StringSource("ab\\nc", "demo.s")
>>> src.current, str(src.position)
('a', 'demo.s:1:1')
>>> src.advance(); src.advance(); src.advance()
>>> src.current, str(src.position)
('c', 'demo.s:2:1')
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from stamina_sdk.errors import Position

logger = logging.getLogger(__name__)


# =============================================================================
# Abstract Interface
# =============================================================================

class CharacterSource(ABC):
    """
    One-character lookahead over some input.

    Subclasses implement _read_char(); position bookkeeping lives here.

    Attributes:
        current: The lookahead character, or None at end of input
        position: Position of the lookahead character
    """

    def __init__(self, filename: str = "(unknown)", line: int = 1):
        self.current: Optional[str] = None
        self.position = Position(filename, line, 0)
        self._exhausted = False

    def _prime(self) -> None:
        """Load the first character. Subclasses call this once set up."""
        self.position = self.position.advance(1)
        self._load()

    def _load(self) -> None:
        char = self._read_char()
        if char is None:
            self._exhausted = True
        self.current = char

    @abstractmethod
    def _read_char(self) -> Optional[str]:
        """Return the next character of the underlying input, or None."""
        ...

    @property
    def at_end(self) -> bool:
        """True once every character has been consumed."""
        return self.current is None

    def advance(self) -> None:
        """Discard the lookahead and load the next character."""
        if self._exhausted:
            return

        if self.current == "\n":
            self.position = self.position.next_line()
        else:
            self.position = self.position.advance(1)

        self._load()


# =============================================================================
# Concrete Sources
# =============================================================================

class StringSource(CharacterSource):
    """
    Characters from an in-memory string.

    Args:
        text: The complete source text
        filename: Name reported in positions
        line: Line number of the first line
    """

    def __init__(self, text: str, filename: str = "(unknown)", line: int = 1):
        super().__init__(filename, line)
        self._text = text
        self._index = 0
        self._prime()

    def _read_char(self) -> Optional[str]:
        if self._index >= len(self._text):
            return None
        char = self._text[self._index]
        self._index += 1
        return char


class FileSource(CharacterSource):
    """
    Characters streamed from an open text stream.

    The stream is read in chunks of chunk_size characters, so arbitrarily
    large files are never held in memory. The stream is not closed by the
    source; use FileSource.open() for a managed file.

    Args:
        stream: A text-mode file object (or io.StringIO)
        filename: Name reported in positions (defaults to stream.name)
        line: Line number of the first line
        chunk_size: Characters fetched per read
    """

    DEFAULT_CHUNK_SIZE = 8192

    def __init__(
        self,
        stream: TextIO,
        filename: Optional[str] = None,
        line: int = 1,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        if filename is None:
            filename = str(getattr(stream, "name", "(unknown)"))
        super().__init__(filename, line)
        self._stream = stream
        self._chunk_size = chunk_size
        self._buffer = ""
        self._index = 0
        self._prime()

    def _read_char(self) -> Optional[str]:
        if self._index >= len(self._buffer):
            self._buffer = self._stream.read(self._chunk_size)
            self._index = 0
            if not self._buffer:
                return None
        char = self._buffer[self._index]
        self._index += 1
        return char

    @classmethod
    @contextmanager
    def open(
        cls,
        path: Union[str, Path],
        encoding: str = "utf-8",
        line: int = 1,
        filename: Optional[str] = None,
    ) -> Iterator["FileSource"]:
        """
        Open path and yield a FileSource over it, closing the file on exit.

        Positions use filename if given, else the path as written.
        Newlines are passed through untranslated so that CR characters
        reach the tokenizer as whitespace, as they do for string input.
        """
        path = Path(path)
        logger.debug(f"Opening source file {path} ({encoding})")
        with open(path, encoding=encoding, newline="") as f:
            yield cls(f, filename=filename or str(path), line=line)
