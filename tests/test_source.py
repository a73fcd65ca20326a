# =============================================================================
# test_source.py - Position and Character Source Tests
# =============================================================================
# Tests for source coordinates and the character sources feeding the
# tokenizer.
#
# Test coverage includes:
#   - Position arithmetic and formatting
#   - StringSource lookahead and line/column tracking
#   - FileSource chunked streaming and managed file opening
#   - Tokenizing through a FileSource
# =============================================================================

import dataclasses
import io

import pytest

from stamina_sdk.assembler.lexer import Tokenizer
from stamina_sdk.assembler.source import FileSource, StringSource
from stamina_sdk.errors import Position


def walk(source) -> list:
    """Collect (character, position) pairs until the source is exhausted."""
    steps = []
    while not source.at_end:
        steps.append((source.current, source.position))
        source.advance()
    steps.append((source.current, source.position))
    return steps


# =============================================================================
# Position Tests
# =============================================================================

class TestPosition:
    """Immutable source coordinates."""

    def test_defaults(self):
        position = Position()
        assert position.filename == "(unknown)"
        assert position.line == 1
        assert position.column == 0

    def test_advance(self):
        assert Position("a.s", 3, 4).advance(2) == Position("a.s", 3, 6)

    def test_next_line(self):
        assert Position("a.s", 3, 9).next_line() == Position("a.s", 4, 1)

    def test_operations_return_new_values(self):
        position = Position("a.s", 1, 1)
        position.advance(1)
        position.next_line()
        assert position == Position("a.s", 1, 1)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Position().line = 2

    def test_str(self):
        assert str(Position("boot.s", 12, 7)) == "boot.s:12:7"


# =============================================================================
# StringSource Tests
# =============================================================================

class TestStringSource:
    """In-memory character source."""

    def test_primed_on_construction(self):
        source = StringSource("ab", "x.s")
        assert source.current == "a"
        assert source.position == Position("x.s", 1, 1)

    def test_line_and_column_tracking(self):
        steps = walk(StringSource("ab\nc"))
        assert steps == [
            ("a", Position("(unknown)", 1, 1)),
            ("b", Position("(unknown)", 1, 2)),
            ("\n", Position("(unknown)", 1, 3)),
            ("c", Position("(unknown)", 2, 1)),
            (None, Position("(unknown)", 2, 2)),
        ]

    def test_empty_input(self):
        source = StringSource("")
        assert source.at_end
        assert source.position == Position("(unknown)", 1, 1)

    def test_advance_at_end_is_noop(self):
        source = StringSource("a")
        source.advance()
        end = source.position
        source.advance()
        source.advance()
        assert source.current is None
        assert source.position == end

    def test_start_line(self):
        source = StringSource("x", "inc.s", line=40)
        assert source.position == Position("inc.s", 40, 1)


# =============================================================================
# FileSource Tests
# =============================================================================

class TestFileSource:
    """Streaming character source."""

    TEXT = "movi r0, 1\n\n  ; comment\nadd r0, r0,\n    r1\n"

    @pytest.mark.parametrize("chunk_size", [1, 2, 3, 7, 8192])
    def test_matches_string_source(self, chunk_size):
        from_file = walk(FileSource(io.StringIO(self.TEXT), "t.s", chunk_size=chunk_size))
        from_string = walk(StringSource(self.TEXT, "t.s"))
        assert from_file == from_string

    def test_default_filename(self):
        assert FileSource(io.StringIO("x")).position.filename == "(unknown)"

    def test_open(self, tmp_path):
        path = tmp_path / "boot.s"
        path.write_text("nop\n", encoding="utf-8")
        with FileSource.open(path) as source:
            assert source.current == "n"
            assert source.position == Position(str(path), 1, 1)

    def test_open_with_filename_override(self, tmp_path):
        path = tmp_path / "boot.s"
        path.write_text("nop\n", encoding="utf-8")
        with FileSource.open(path, filename="shown.s") as source:
            assert source.position.filename == "shown.s"

    def test_open_keeps_carriage_returns(self, tmp_path):
        path = tmp_path / "crlf.s"
        path.write_bytes(b"a\r\nb")
        with FileSource.open(path) as source:
            chars = [c for c, _ in walk(source)]
        assert chars == ["a", "\r", "\n", "b", None]

    def test_tokenizer_over_file(self, tmp_path):
        path = tmp_path / "prog.s"
        path.write_text(self.TEXT, encoding="utf-8")
        with FileSource.open(path, filename="prog.s") as source:
            from_file = list(Tokenizer(source).tokenize())
        from_string = list(Tokenizer.from_string(self.TEXT, "prog.s").tokenize())
        assert from_file == from_string
        assert [t.source_text for t in from_file] == [t.source_text for t in from_string]
