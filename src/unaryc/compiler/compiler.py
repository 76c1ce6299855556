"""
unaryc Compiler Main Module
===========================

This module provides the main compiler interface. It runs the pipeline

    Source → Lex → Parse/Generate → Assembly

and gathers the diagnostics of every stage into one result.

Usage
-----
Command line:
    $ ucc program.u -o program.asm

Programmatic:
    >>> from unaryc.compiler import compile_unary
    >>> print(compile_unary("~5;"))
    section .text
    global _start
    _start:
      PUSH 5
      NOT
    <BLANKLINE>
      MOV RAX, 60
      XOR RDI, RDI
      SYSCALL
    <BLANKLINE>

Error Handling
--------------
Unknown characters and syntax errors do not stop compilation: the result
still carries the program built from the valid statements, along with
every diagnostic. A malformed token sequence (InitializationError) or a
parser defect (ConsumptionError) propagates to the caller unchanged.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from unaryc.errors import (
    CompilationFailed,
    CompilerDiagnostic,
    DiagnosticCollector,
    sort_by_location,
)
from unaryc.compiler.codegen import AssemblyProgram
from unaryc.compiler.lexer import Lexer
from unaryc.compiler.parser import Parser
from unaryc.compiler.tokens import Token

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        emit_comments: Precede each statement's instructions with a
                       comment giving its position and source text
        max_errors: Syntax errors tolerated before parsing stops
    """
    emit_comments: bool = False
    max_errors: int = 100

    def __post_init__(self):
        if self.max_errors < 1:
            raise ValueError(f"max_errors must be positive, got {self.max_errors}")


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        success: True if no statement was rejected
        tokens: Token sequence produced by the lexer
        program: Generated program (None only if never produced)
        errors: Syntax errors in source order
        warnings: Lexer warnings in source order
        report: Formatted diagnostics report ("" when there were none)
    """
    filename: str = "<input>"
    success: bool = False
    tokens: list[Token] = field(default_factory=list)
    program: Optional[AssemblyProgram] = None
    errors: list[CompilerDiagnostic] = field(default_factory=list)
    warnings: list[CompilerDiagnostic] = field(default_factory=list)
    report: str = ""

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def assembly(self) -> str:
        """Generated assembly text, or "" when nothing was produced."""
        return self.program.text if self.program is not None else ""


class UnaryCompiler:
    """
    Compiler for the unary statement language.

    Example:
        compiler = UnaryCompiler()
        result = compiler.compile_file("program.u")
        print(result.assembly)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile source text to assembly.

        Args:
            source: Program text
            filename: Source filename for error messages

        Returns:
            CompilerResult with the program and all diagnostics

        Raises:
            InitializationError: If the lexer output is malformed
            ConsumptionError: If the parser misbehaves
        """
        diagnostics = DiagnosticCollector()
        result = CompilerResult(filename=filename)

        # Stage 1: Lexical analysis
        result.tokens = self._lex(source, filename, diagnostics)

        # Stage 2: Parsing and code generation
        result.program = self._parse(result.tokens, source.split("\n"), diagnostics)

        result.errors = sort_by_location(diagnostics.errors)
        result.warnings = sort_by_location(diagnostics.warnings)
        result.success = not diagnostics.has_errors()
        if result.errors or result.warnings:
            result.report = diagnostics.report()

        logger.info(
            "%s: %d tokens, %d errors, %d warnings",
            filename,
            result.token_count,
            len(result.errors),
            len(result.warnings),
        )
        return result

    def compile_file(self, filepath: str | Path) -> CompilerResult:
        """
        Compile a source file to assembly.

        Raises:
            FileNotFoundError: If the source file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))

    def _lex(self, source: str, filename: str, diagnostics: DiagnosticCollector) -> list[Token]:
        lexer = Lexer(source, filename, diagnostics)
        return lexer.tokenize_all()

    def _parse(
        self,
        tokens: list[Token],
        source_lines: list[str],
        diagnostics: DiagnosticCollector,
    ) -> AssemblyProgram:
        parser = Parser(
            tokens,
            source_lines,
            diagnostics,
            emit_comments=self.options.emit_comments,
            max_errors=self.options.max_errors,
        )
        return parser.parse()


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_unary(
    source: str,
    filename: str = "<input>",
    strict: bool = False,
) -> str:
    """
    Compile source text and return the assembly.

    Args:
        source: Program text
        filename: Source filename for error messages
        strict: Raise instead of returning partial output on errors

    Returns:
        Generated assembly text

    Raises:
        CompilationFailed: In strict mode, if any statement was rejected
    """
    result = UnaryCompiler().compile_source(source, filename)
    if strict and not result.success:
        raise CompilationFailed(result.report)
    return result.assembly


def compile_file(
    filepath: str | Path,
    output_path: Optional[str | Path] = None,
    options: Optional[CompilerOptions] = None,
) -> CompilerResult:
    """
    Compile a source file, optionally writing the assembly next to it.

    Example:
        >>> result = compile_file("program.u", "program.asm")
    """
    result = UnaryCompiler(options).compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.assembly, encoding="utf-8")

    return result
