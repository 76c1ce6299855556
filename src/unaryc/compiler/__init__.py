"""
unaryc Compiler Pipeline
========================

    Source → Lexer → Tokens → Parser (+ AssemblyWriter) → AssemblyProgram

- tokens: TokenType and Token
- lexer: Lexer, one pass over one source string
- parser: Parser, statement grammar with per-statement error recovery
- codegen: stack-machine instruction buffer and the read-only program view
- compiler: UnaryCompiler, CompilerOptions and CompilerResult
"""

from unaryc.compiler.tokens import Token, TokenType
from unaryc.compiler.lexer import Lexer
from unaryc.compiler.codegen import AssemblyProgram, AssemblyWriter
from unaryc.compiler.parser import Parser, ParserState, parse_source
from unaryc.compiler.compiler import (
    CompilerOptions,
    CompilerResult,
    UnaryCompiler,
    compile_file,
    compile_unary,
)

__all__ = [
    "Token",
    "TokenType",
    "Lexer",
    "AssemblyProgram",
    "AssemblyWriter",
    "Parser",
    "ParserState",
    "parse_source",
    "CompilerOptions",
    "CompilerResult",
    "UnaryCompiler",
    "compile_file",
    "compile_unary",
]
