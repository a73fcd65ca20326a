"""
smtok - Stamina Assembly Token Dump
===================================

This module implements a command-line tool that runs the smasm tokenizer
over a source file and prints every token in the diagnostic format:

    boot.s:1:1 - Mnemonic - `MOVI` - `movi`

It is meant for checking how the assembler sees a file and for producing
expected-output fixtures for tests.

Usage Examples
--------------
Dump a file:
    $ smtok boot.s

Read from standard input:
    $ echo "cmpi/eq r0, 34" | smtok -

Stop at the first lexical error:
    $ smtok --strict boot.s

Use a different instruction set:
    $ smtok --instructions mytable.json boot.s
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from stamina_sdk import __version__
from stamina_sdk.assembler import (
    CharacterSource,
    FileSource,
    InstructionTable,
    TokenType,
    Tokenizer,
)
from stamina_sdk.cli.errors import ExitCode, handle_cli_exception
from stamina_sdk.config import TokenizerConfig
from stamina_sdk.errors import ErrorCollector, TooManyErrors

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def dump_tokens(
    tokenizer: Tokenizer,
    strict: bool = False,
    skip_newlines: bool = False,
    max_errors: int = 100,
) -> ErrorCollector:
    """
    Print every token from tokenizer, collecting lexical errors.

    Args:
        tokenizer: The tokenizer to drain
        strict: Raise the first Error token as an AssemblySyntaxError
        skip_newlines: Do not print NewLine tokens
        max_errors: Stop scanning after this many errors

    Returns:
        The collected errors
    """
    collector = ErrorCollector(max_errors=max_errors)

    try:
        for token in tokenizer:
            if not (skip_newlines and token.type is TokenType.NewLine):
                click.echo(str(token))

            if token.is_error:
                error = token.to_exception()
                if strict:
                    raise error
                collector.add(error)
    except TooManyErrors as e:
        logger.warning(str(e))

    return collector


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "-f", "--filename",
    help="Filename to show in token positions (default: the input path)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Stop at the first lexical error",
)
@click.option(
    "--skip-newlines",
    is_flag=True,
    help="Do not print NewLine tokens",
)
@click.option(
    "--legacy-binary-prefix",
    is_flag=True,
    help="Only accept lowercase 0b as a binary prefix",
)
@click.option(
    "-e", "--encoding",
    help="Source file encoding (default: utf-8)",
)
@click.option(
    "-i", "--instructions",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON instruction definition list to use instead of the built-in table",
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=1),
    default=100,
    show_default=True,
    help="Stop after this many lexical errors",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="smtok")
def main(
    input_file: Path,
    filename: Optional[str],
    strict: bool,
    skip_newlines: bool,
    legacy_binary_prefix: bool,
    encoding: Optional[str],
    instructions: Optional[Path],
    max_errors: int,
    verbose: bool,
) -> None:
    """
    Print the tokens of a Stamina assembly source file.

    INPUT_FILE is the assembly source to tokenize, or - for standard input.

    \b
    Examples:
        smtok boot.s                 # Dump all tokens
        smtok --strict boot.s        # Fail on the first error
        smtok --skip-newlines boot.s # Hide statement terminators
    """
    setup_logging(verbose)

    config = TokenizerConfig.from_env()
    if encoding:
        config.encoding = encoding
    if legacy_binary_prefix:
        config.legacy_binary_prefix = True

    try:
        table = None
        if instructions:
            try:
                table = InstructionTable.from_json(instructions)
            except ValueError as e:
                raise click.BadParameter(str(e), param_hint="--instructions") from e

        if str(input_file) == "-":
            stream = click.get_text_stream("stdin", encoding=config.encoding)
            source: CharacterSource = FileSource(stream, filename or "<stdin>", config.start_line)
            collector = dump_tokens(Tokenizer(source, table, config), strict, skip_newlines, max_errors)
        else:
            if verbose:
                click.echo(f"Tokenizing {input_file}...", err=True)
            with FileSource.open(input_file, config.encoding, config.start_line, filename) as source:
                collector = dump_tokens(Tokenizer(source, table, config), strict, skip_newlines, max_errors)

        if collector.has_errors():
            click.echo(collector.report(), err=True)
            sys.exit(ExitCode.BUILD_ERROR)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Tokenizer")


if __name__ == "__main__":
    main()
