"""
unaryc - Unary Statement Compiler
=================================

This package compiles a tiny language of integer literals and unary
operators into pseudo-assembly for a stack machine.

    42;       PUSH 42
    -123;     PUSH 123 / NEG
    ~5;       PUSH 5   / NOT
    !0;       PUSH 0   / LNOT

Main Components
---------------
- **compiler**: lexer, parser and code generator, plus the UnaryCompiler
  driver that runs them
- **errors**: exception hierarchy and the diagnostics collector
- **cli**: the `ucc` command-line tool

Quick Start
-----------
    >>> from unaryc import UnaryCompiler
    >>> result = UnaryCompiler().compile_source("-7; ~1;")
    >>> result.program.instructions
    ['PUSH 7', 'NEG', 'PUSH 1', 'NOT']

Or from the command line:
    $ ucc program.u -o program.asm
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from unaryc.errors import (
    UnaryCError,
    SourceLocation,
    CompilerDiagnostic,
    LexWarning,
    UnarySyntaxError,
    UnexpectedTokenError,
    MissingTokenError,
    TooManyErrors,
    CompilationFailed,
    InitializationError,
    ConsumptionError,
    DiagnosticCollector,
)
from unaryc.compiler import (
    AssemblyProgram,
    CompilerOptions,
    CompilerResult,
    Lexer,
    Parser,
    Token,
    TokenType,
    UnaryCompiler,
    compile_unary,
)

__all__ = [
    "__version__",
    # Errors
    "UnaryCError",
    "SourceLocation",
    "CompilerDiagnostic",
    "LexWarning",
    "UnarySyntaxError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "TooManyErrors",
    "CompilationFailed",
    "InitializationError",
    "ConsumptionError",
    "DiagnosticCollector",
    # Compiler
    "AssemblyProgram",
    "CompilerOptions",
    "CompilerResult",
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "UnaryCompiler",
    "compile_unary",
]
