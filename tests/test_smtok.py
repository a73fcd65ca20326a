# =============================================================================
# test_smtok.py - smtok Command-Line Tool Tests
# =============================================================================
# Tests for the token dump CLI and the shared CLI error handling.
#
# Test coverage includes:
#   - Dumping files and standard input
#   - Exit codes for clean input, lexical errors and bad arguments
#   - --strict, --skip-newlines, --instructions, --legacy-binary-prefix
# =============================================================================

import json

import pytest
from click.testing import CliRunner

from stamina_sdk import __version__
from stamina_sdk.cli.errors import ExitCode, handle_cli_exception
from stamina_sdk.cli.smtok import main
from stamina_sdk.errors import AssemblySyntaxError, InvariantViolation


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SMASM_FILENAME", "SMASM_START_LINE", "SMASM_ENCODING", "SMASM_LEGACY_BINARY_PREFIX"):
        monkeypatch.delenv(name, raising=False)


def write_source(tmp_path, text: str):
    path = tmp_path / "prog.s"
    path.write_text(text, encoding="utf-8")
    return path


class TestSmtok:
    """Token dump output and exit codes."""

    def test_dump_file(self, runner, tmp_path):
        path = write_source(tmp_path, "cmpi/eq r0, 34")
        result = runner.invoke(main, [str(path), "--filename", "boot.s"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "boot.s:1:1 - Mnemonic - `CMPI/EQ` - `cmpi/eq`",
            "boot.s:1:9 - Identifier - `r0` - `r0`",
            "boot.s:1:11 - Comma - (empty) - `,`",
            "boot.s:1:13 - NumericLit - 34 - `34`",
            "boot.s:1:15 - NewLine - (empty) - ``",
            "boot.s:1:15 - EndOfFile - (empty) - ``",
        ]

    def test_default_filename_is_path(self, runner, tmp_path):
        path = write_source(tmp_path, "nop")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == 0
        assert result.output.startswith(f"{path}:1:1 - Mnemonic - `NOP`")

    def test_stdin(self, runner):
        result = runner.invoke(main, ["-"], input="a b\n")
        assert result.exit_code == 0
        assert "<stdin>:1:1 - Identifier - `a` - `a`" in result.output
        assert "<stdin>:1:3 - Identifier - `b` - `b`" in result.output

    def test_lexical_error_exit_code(self, runner, tmp_path):
        path = write_source(tmp_path, "a = 1\n")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Error - `Single equals sign is not a valid token`" in result.output
        assert "1 error" in result.output

    def test_strict_stops_at_first_error(self, runner, tmp_path):
        path = write_source(tmp_path, "a = 1\n")
        result = runner.invoke(main, [str(path), "--strict", "-f", "boot.s"])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Tokenizer error: boot.s:1:3: error: Single equals sign" in result.output
        assert "NumericLit" not in result.output

    def test_max_errors(self, runner, tmp_path):
        path = write_source(tmp_path, "# # # # #\n")
        result = runner.invoke(main, [str(path), "--max-errors", "2"])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert result.output.count("Unknown character`") == 2

    def test_skip_newlines(self, runner, tmp_path):
        path = write_source(tmp_path, "a\nb\n")
        result = runner.invoke(main, [str(path), "--skip-newlines"])
        assert result.exit_code == 0
        assert "NewLine" not in result.output
        assert "EndOfFile" in result.output

    def test_custom_instructions(self, runner, tmp_path):
        path = write_source(tmp_path, "foo add")
        isa = tmp_path / "isa.json"
        isa.write_text(json.dumps([["FOO"]]))
        result = runner.invoke(main, [str(path), "-i", str(isa)])
        assert result.exit_code == 0
        assert "Mnemonic - `FOO`" in result.output
        assert "Identifier - `add`" in result.output

    def test_bad_instruction_file(self, runner, tmp_path):
        path = write_source(tmp_path, "nop")
        isa = tmp_path / "isa.json"
        isa.write_text("{}")
        result = runner.invoke(main, [str(path), "-i", str(isa)])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_legacy_binary_prefix(self, runner, tmp_path):
        path = write_source(tmp_path, "0B1")
        result = runner.invoke(main, [str(path), "--legacy-binary-prefix"])
        assert "NumericLit - 0 - `0`" in result.output
        assert "Identifier - `B1`" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "missing.s")])
        assert result.exit_code == 2

    def test_unknown_encoding(self, runner, tmp_path):
        path = write_source(tmp_path, "nop")
        result = runner.invoke(main, [str(path), "--encoding", "no-such-codec"])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestHandleCliException:
    """Mapping of exceptions to exit codes."""

    @pytest.mark.parametrize("error,code", [
        (AssemblySyntaxError("bad"), ExitCode.BUILD_ERROR),
        (InvariantViolation("bug"), ExitCode.INTERNAL_ERROR),
        (FileNotFoundError("x.s"), ExitCode.INVALID_ARGS),
        (RuntimeError("boom"), ExitCode.INTERNAL_ERROR),
    ])
    def test_exit_codes(self, error, code):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(error)
        assert exc_info.value.code == code
