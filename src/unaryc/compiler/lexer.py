"""
unaryc Lexer (Tokenizer)
========================

This module converts source text into a stream of tokens for the parser.

Token Categories
----------------
- Integer literals: runs of ASCII digits, kept as raw text
- Unary operators: - (negate), ~ (bitwise complement), ! (logical not)
- Statement terminator: ;
- Whitespace: space, tab, newline and carriage return are skipped

Any other character becomes an UNKNOWN token carrying that character. The
lexer records a LexWarning for it and keeps going; deciding what UNKNOWN
means is left to the parser.

Example Usage
-------------
>>> from unaryc.compiler.lexer import Lexer
>>> for token in Lexer("-12;\\n!0;").tokenize():
...     print(token)
Token(OPERATOR_NEG, '-', 1:1)
Token(INTEGER_LITERAL, '12', 1:2)
Token(SEMICOLON, ';', 1:4)
Token(OPERATOR_LOG_NOT, '!', 2:1)
Token(INTEGER_LITERAL, '0', 2:2)
Token(SEMICOLON, ';', 2:3)
Token(END_OF_FILE, 2:4)
"""

import logging
import string
from typing import Iterator, Optional

from unaryc.errors import DiagnosticCollector, LexWarning
from unaryc.compiler.tokens import SINGLE_CHAR_TOKENS, Token, TokenType

logger = logging.getLogger(__name__)


class Lexer:
    """
    Tokenizes unary-language source code.

    Each instance lexes exactly one source string. Position tracking is
    exact: every token records the line and column of its first character.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = lexer.tokenize_all()

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
        diagnostics: Collector receiving unknown-character warnings
    """

    WHITESPACE = " \t\n\r"

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        diagnostics: Optional[DiagnosticCollector] = None,
    ):
        """
        Initialize the lexer with source code.

        Args:
            source: The source code to tokenize
            filename: Name of the source file (for error messages)
            diagnostics: Where to record warnings (a private collector
                         is created when omitted)
        """
        self.source = source
        self.filename = filename
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()

        # Current position in source
        self._pos = 0
        self._line = 1
        self._column = 1

        # Track line start position for error context
        self._line_start_pos = 0

    def next_token(self) -> Token:
        """
        Return the next token and advance past it.

        Once the input is exhausted every call returns a fresh
        END_OF_FILE token at the final position; it never raises.
        """
        self._skip_whitespace()

        if self._at_end():
            return self._make_token(TokenType.END_OF_FILE, "", self._line, self._column)

        start_line = self._line
        start_column = self._column
        char = self._advance()

        if char in string.digits:
            return self._scan_integer(char, start_line, start_column)

        token_type = SINGLE_CHAR_TOKENS.get(char)
        if token_type is not None:
            return self._make_token(token_type, char, start_line, start_column)

        token = self._make_token(TokenType.UNKNOWN, char, start_line, start_column)
        self.diagnostics.add(
            LexWarning(char, token.location, self._current_line_text())
        )
        return token

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including END_OF_FILE.

        Yields:
            Token objects in source order
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.END_OF_FILE:
                return

    def tokenize_all(self) -> list[Token]:
        """Return the full token sequence, ending with END_OF_FILE."""
        tokens = list(self.tokenize())
        logger.debug("%s: lexed %d tokens", self.filename, len(tokens))
        return tokens

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self) -> str:
        """Look at the current character; empty string past the end."""
        if self._at_end():
            return ""
        return self.source[self._pos]

    def _advance(self) -> str:
        """
        Consume and return the current character.

        Updates line and column tracking.
        """
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._peek() in self.WHITESPACE:
            self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_integer(self, first: str, start_line: int, start_column: int) -> Token:
        """Scan the rest of a digit run; the value stays as raw text."""
        digits = [first]
        while self._peek() and self._peek() in string.digits:
            digits.append(self._advance())
        return self._make_token(
            TokenType.INTEGER_LITERAL, "".join(digits), start_line, start_column
        )

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        line: int,
        column: int,
    ) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=line,
            column=column,
            filename=self.filename,
        )

    def _current_line_text(self) -> str:
        """Return the text of the line being scanned, for error context."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]
