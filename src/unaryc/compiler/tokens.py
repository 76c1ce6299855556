"""
Token Model
===========

Token kinds and the immutable token record shared by the lexer and parser.

Token Kinds
-----------
| Kind              | Source text      |
|-------------------|------------------|
| INTEGER_LITERAL   | run of digits    |
| OPERATOR_NEG      | -                |
| OPERATOR_BIT_NOT  | ~                |
| OPERATOR_LOG_NOT  | !                |
| SEMICOLON         | ;                |
| END_OF_FILE       | (synthesized)    |
| UNKNOWN           | any other char   |
"""

from dataclasses import dataclass
from enum import Enum, auto

from unaryc.errors import SourceLocation


class TokenType(Enum):
    """Closed set of token kinds for the unary language."""

    INTEGER_LITERAL = auto()    # 42
    OPERATOR_NEG = auto()       # -
    OPERATOR_BIT_NOT = auto()   # ~
    OPERATOR_LOG_NOT = auto()   # !
    SEMICOLON = auto()          # ;
    END_OF_FILE = auto()        # End of input
    UNKNOWN = auto()            # Unrecognized character


# Single-character tokens
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "-": TokenType.OPERATOR_NEG,
    "~": TokenType.OPERATOR_BIT_NOT,
    "!": TokenType.OPERATOR_LOG_NOT,
    ";": TokenType.SEMICOLON,
}

UNARY_OPERATORS = frozenset({
    TokenType.OPERATOR_NEG,
    TokenType.OPERATOR_BIT_NOT,
    TokenType.OPERATOR_LOG_NOT,
})


@dataclass(frozen=True)
class Token:
    """
    A classified, positioned fragment of source text.

    Attributes:
        type: The TokenType classification
        value: Source slice (digits, operator symbol, the offending
               character for UNKNOWN, "" for END_OF_FILE)
        line: Line of the first character (1-indexed)
        column: Column of the first character (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.value:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_unary_operator(self) -> bool:
        return self.type in UNARY_OPERATORS
