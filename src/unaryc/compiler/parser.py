"""
unaryc Recursive Descent Parser
===============================

This module validates the token stream from the lexer against the
statement grammar and drives the code generator as statements are
recognized.

Grammar (EBNF)
--------------
program   ::= statement* EOF
statement ::= factor ';'
factor    ::= INTEGER
            | ('-' | '~' | '!') INTEGER

A unary operator must be followed directly by an integer literal, so
operators cannot be stacked: `~-2;` is rejected.

Error Recovery
--------------
A syntax error aborts only the statement it occurs in. The error is
recorded, tokens are discarded up to and including the next ';' (or up to
END_OF_FILE), and parsing resumes with the next statement. Instructions of
a rejected statement never reach the program.

Example Usage
-------------
>>> from unaryc.compiler.lexer import Lexer
>>> from unaryc.compiler.parser import Parser
>>> tokens = Lexer("-123;").tokenize_all()
>>> program = Parser(tokens).parse()
>>> program.instructions
['PUSH 123', 'NEG']
"""

import logging
from enum import Enum, auto
from typing import Optional, Sequence

from unaryc.errors import (
    ConsumptionError,
    DiagnosticCollector,
    InitializationError,
    MissingTokenError,
    TooManyErrors,
    UnarySyntaxError,
    UnexpectedTokenError,
)
from unaryc.compiler.codegen import AssemblyProgram, AssemblyWriter
from unaryc.compiler.lexer import Lexer
from unaryc.compiler.tokens import Token, TokenType

logger = logging.getLogger(__name__)


class ParserState(Enum):
    """Where the parser is in its statement loop."""

    SCANNING_STATEMENT = auto()
    RECOVERING = auto()
    DONE = auto()


class Parser:
    """
    Statement parser and code emitter.

    Each instance parses one token sequence into one AssemblyProgram.
    Calling parse() again returns the program already produced.

    Attributes:
        tokens: Token sequence being parsed (ends with END_OF_FILE)
        diagnostics: Collector receiving syntax errors
        max_errors: Syntax errors tolerated before parsing stops
        state: Current ParserState
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        source_lines: Optional[list[str]] = None,
        diagnostics: Optional[DiagnosticCollector] = None,
        emit_comments: bool = False,
        max_errors: int = 100,
    ):
        """
        Initialize the parser.

        Args:
            tokens: Tokens from the lexer; must end with END_OF_FILE
            source_lines: Original source lines for error context
            diagnostics: Where to record syntax errors
            emit_comments: Annotate each accepted statement in the output
            max_errors: Stop after this many syntax errors

        Raises:
            InitializationError: If the token sequence is malformed
        """
        self.tokens = self._validate_tokens(tokens)
        self.source_lines = source_lines or []
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
        self.max_errors = max_errors
        self.state = ParserState.SCANNING_STATEMENT

        # Current position in token stream
        self._pos = 0

        self._writer = AssemblyWriter(emit_comments=emit_comments)
        self._program: Optional[AssemblyProgram] = None
        self._syntax_errors = 0
        self._statements = 0

    @staticmethod
    def _validate_tokens(tokens: Sequence[Token]) -> list[Token]:
        tokens = list(tokens)
        if not tokens:
            raise InitializationError("token sequence is empty; expected at least END_OF_FILE")
        if tokens[-1].type != TokenType.END_OF_FILE:
            raise InitializationError(
                f"token sequence must end with END_OF_FILE, not {tokens[-1].type.name}"
            )
        for index, token in enumerate(tokens[:-1]):
            if token.type == TokenType.END_OF_FILE:
                raise InitializationError(
                    f"END_OF_FILE at index {index} before the end of the token sequence"
                )
        return tokens

    def parse(self) -> AssemblyProgram:
        """
        Parse every statement and return the generated program.

        Syntax errors are recorded in self.diagnostics; they never
        propagate out of this method.

        Returns:
            AssemblyProgram framed by the fixed prologue and epilogue

        Raises:
            ConsumptionError: If the parser reads past its tokens
        """
        if self._program is not None:
            return self._program

        self._writer.emit_prologue()

        while not self._at_end():
            if self._syntax_errors >= self.max_errors:
                self.diagnostics.add(TooManyErrors(self.max_errors, self._peek().location))
                break

            self.state = ParserState.SCANNING_STATEMENT
            start = self._pos
            try:
                self._parse_statement()
            except UnarySyntaxError as e:
                self._writer.discard()
                self.diagnostics.add(e)
                self._syntax_errors += 1
                self._synchronize()
            else:
                self._writer.commit(self._describe_statement(start))
                self._statements += 1

        self._writer.emit_epilogue()
        self.state = ParserState.DONE
        self._program = self._writer.finish()

        logger.debug(
            "parsed %d statements, %d rejected",
            self._statements,
            self._syntax_errors,
        )
        return self._program

    @property
    def statement_count(self) -> int:
        """Number of statements accepted so far."""
        return self._statements

    @property
    def error_count(self) -> int:
        """Number of statements rejected so far."""
        return self._syntax_errors

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._peek().type == TokenType.END_OF_FILE

    def _peek(self) -> Token:
        """Look at the current token."""
        if self._pos >= len(self.tokens):
            raise ConsumptionError(
                f"read past the end of the token sequence (index {self._pos})"
            )
        return self.tokens[self._pos]

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self._peek()
        if token.type == TokenType.END_OF_FILE:
            raise ConsumptionError(f"attempted to consume END_OF_FILE at {token.location}")
        self._pos += 1
        return token

    def _expect(self, token_type: TokenType) -> Token:
        """
        Expect and consume a specific token type.

        Raises:
            MissingTokenError: If the current token has another type
        """
        current = self._peek()
        if current.type == token_type:
            return self._advance()

        raise MissingTokenError(
            token_type.name,
            current.type.name,
            current.location,
            self._get_source_line(current.line),
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    def _synchronize(self) -> None:
        """
        Discard tokens through the next ';' after a syntax error.

        Stops without consuming when END_OF_FILE is reached. The state
        stays RECOVERING until the next statement starts.
        """
        self.state = ParserState.RECOVERING
        skipped = 0

        while not self._at_end():
            token = self._advance()
            skipped += 1
            if token.type == TokenType.SEMICOLON:
                break

        logger.debug("recovery skipped %d tokens", skipped)

    def _describe_statement(self, start: int) -> str:
        """Annotation for an accepted statement: its position and text."""
        first = self.tokens[start]
        text = "".join(token.value for token in self.tokens[start:self._pos])
        return f"{first.line}:{first.column}: {text}"

    # =========================================================================
    # Grammar Rules
    # =========================================================================

    def _parse_statement(self) -> None:
        """statement ::= factor ';'"""
        self._parse_factor()
        self._expect(TokenType.SEMICOLON)

    def _parse_factor(self) -> None:
        """factor ::= INTEGER | ('-' | '~' | '!') INTEGER"""
        token = self._peek()

        if token.type == TokenType.INTEGER_LITERAL:
            self._advance()
            self._writer.push(token.value)
            return

        if token.is_unary_operator():
            self._advance()
            operand = self._peek()
            if operand.is_unary_operator():
                raise UnexpectedTokenError(
                    operand.type.name,
                    "INTEGER_LITERAL",
                    operand.location,
                    self._get_source_line(operand.line),
                    hint="unary operators cannot be stacked",
                )
            operand = self._expect(TokenType.INTEGER_LITERAL)
            self._writer.push(operand.value)
            self._writer.unary(token.type)
            return

        # SEMICOLON, END_OF_FILE and UNKNOWN cannot start a statement
        raise UnexpectedTokenError(
            token.type.name,
            "INTEGER_LITERAL or unary operator",
            token.location,
            self._get_source_line(token.line),
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: str,
    filename: str = "<input>",
    diagnostics: Optional[DiagnosticCollector] = None,
) -> AssemblyProgram:
    """
    Lex and parse source text in one step.

    Args:
        source: Program text
        filename: Source filename for error messages
        diagnostics: Collector for warnings and syntax errors

    Returns:
        The generated AssemblyProgram
    """
    diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
    tokens = Lexer(source, filename, diagnostics).tokenize_all()
    parser = Parser(tokens, source.split("\n"), diagnostics)
    return parser.parse()
