"""
ucc - unaryc Compiler Command-Line Interface
============================================

Compiles unary-language source into stack-machine pseudo-assembly.

Usage Examples
--------------
Basic compilation (writes program.asm):
    $ ucc program.u

With output file:
    $ ucc program.u -o out.asm

Inline source, assembly on stdout:
    $ ucc -e "42; -7; !0;"

Show the token stream first:
    $ ucc --tokens program.u

Exit Codes
----------
0 - Success
1 - Syntax errors (the assembly of the valid statements is still written)
2 - Invalid arguments
3 - Initialization or internal error (nothing is written)
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from unaryc import __version__
from unaryc.cli.errors import ExitCode, handle_cli_exception
from unaryc.compiler import CompilerOptions, CompilerResult, Token, UnaryCompiler

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def format_token_listing(tokens: list[Token]) -> str:
    """Render one line per token: kind, text and position."""
    lines = ["Tokens found:"]
    for token in tokens:
        lines.append(
            f"  Type: {token.type.name}, Value: '{token.value}'"
            f" (L:{token.line}, C:{token.column})"
        )
    return "\n".join(lines)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-e", "--source",
    "source_text",
    type=str,
    default=None,
    help="Compile this text instead of a file (assembly goes to stdout)",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output assembly file (default: input.asm)",
)
@click.option(
    "--tokens",
    "show_tokens",
    is_flag=True,
    help="Print the token listing before compiling",
)
@click.option(
    "--comments",
    is_flag=True,
    help="Annotate each statement in the generated assembly",
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=1),
    default=100,
    show_default=True,
    help="Stop after this many syntax errors",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="ucc")
def main(
    input_file: Optional[Path],
    source_text: Optional[str],
    output: Optional[Path],
    show_tokens: bool,
    comments: bool,
    max_errors: int,
    verbose: bool,
) -> None:
    """
    Compile unary-language source to stack-machine assembly.

    INPUT_FILE is the source file to compile. Use --source to compile
    text given on the command line instead.

    \b
    Language:
        42;      push a literal
        -42;     negate        (NEG)
        ~42;     complement    (NOT)
        !42;     logical not   (LNOT)

    Statements with syntax errors are reported and skipped; the
    remaining statements are still compiled.
    """
    setup_logging(verbose)

    try:
        if (input_file is None) == (source_text is None):
            raise click.BadParameter("give either INPUT_FILE or --source, not both")

        options = CompilerOptions(
            emit_comments=comments,
            max_errors=max_errors,
        )
        logger.debug("options: %s", options)
        compiler = UnaryCompiler(options)

        if input_file is not None:
            if verbose:
                click.echo(f"Compiling {input_file}...", err=True)
            if output is None:
                output = input_file.with_suffix(".asm")
            result = compiler.compile_file(input_file)
        else:
            result = compiler.compile_source(source_text, "<source>")

        if show_tokens:
            click.echo(format_token_listing(result.tokens))
            click.echo()

        _render(result, output, verbose)

    except Exception as e:
        handle_cli_exception(e, verbose)

    if not result.success:
        sys.exit(ExitCode.BUILD_ERROR)


def _render(result: CompilerResult, output: Optional[Path], verbose: bool) -> None:
    """Print diagnostics, then write or print the assembly."""
    if result.report:
        click.echo(result.report, err=True)

    if verbose:
        click.echo(f"Tokenized: {result.token_count} tokens", err=True)
        click.echo(
            f"Generated: {len(result.program.instructions)} instructions",
            err=True,
        )

    if output is None:
        click.echo(result.assembly, nl=False)
        return

    output.write_text(result.assembly, encoding="utf-8")
    if verbose:
        click.echo(f"Wrote {len(result.assembly)} bytes to {output}", err=True)
    click.echo(f"Compiled {result.filename} -> {output}")


if __name__ == "__main__":
    main()
