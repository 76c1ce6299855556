# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the unary-language lexer.
#
# Test coverage includes:
#   - Integer literals and the single-character tokens
#   - Whitespace skipping and line/column tracking
#   - END_OF_FILE synthesis and idempotence
#   - Unknown characters and the warnings they produce
# =============================================================================

import pytest

from unaryc.compiler.lexer import Lexer
from unaryc.compiler.tokens import Token, TokenType
from unaryc.errors import DiagnosticCollector, LexWarning, SourceLocation


# =============================================================================
# Helper Function
# =============================================================================

def tokenize(source: str) -> list:
    """Tokenize and drop the trailing END_OF_FILE."""
    tokens = Lexer(source, "<test>").tokenize_all()
    return [t for t in tokens if t.type != TokenType.END_OF_FILE]


def kinds(source: str) -> list:
    return [t.type for t in Lexer(source).tokenize_all()]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test recognition of every token kind."""

    def test_empty_source(self):
        """Empty source produces only END_OF_FILE."""
        tokens = Lexer("").tokenize_all()
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.END_OF_FILE
        assert tokens[0].value == ""

    @pytest.mark.parametrize("source", [" ", "\t", "\n", "\r\n", "  \n\t \r\n  "])
    def test_whitespace_only(self, source):
        """Whitespace-only source produces exactly one token."""
        tokens = Lexer(source).tokenize_all()
        assert [t.type for t in tokens] == [TokenType.END_OF_FILE]

    def test_integer_literal(self):
        tokens = tokenize("42")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.INTEGER_LITERAL
        assert tokens[0].value == "42"

    def test_integer_keeps_raw_text(self):
        """Leading zeros and huge values are kept verbatim."""
        assert tokenize("007")[0].value == "007"
        big = "123456789012345678901234567890"
        assert tokenize(big)[0].value == big

    @pytest.mark.parametrize("char,expected", [
        ("-", TokenType.OPERATOR_NEG),
        ("~", TokenType.OPERATOR_BIT_NOT),
        ("!", TokenType.OPERATOR_LOG_NOT),
        (";", TokenType.SEMICOLON),
    ])
    def test_single_char_tokens(self, char, expected):
        tokens = tokenize(char)
        assert len(tokens) == 1
        assert tokens[0].type == expected
        assert tokens[0].value == char

    def test_statement(self):
        assert kinds("-123;") == [
            TokenType.OPERATOR_NEG,
            TokenType.INTEGER_LITERAL,
            TokenType.SEMICOLON,
            TokenType.END_OF_FILE,
        ]

    def test_minus_is_not_part_of_number(self):
        """A sign is always a separate operator token."""
        tokens = tokenize("-5")
        assert [t.value for t in tokens] == ["-", "5"]

    def test_adjacent_integers_need_separator(self):
        tokens = tokenize("12 34")
        assert [t.value for t in tokens] == ["12", "34"]

    def test_filename_in_location(self):
        token = Lexer("7", "prog.u").tokenize_all()[0]
        assert token.location == SourceLocation("prog.u", 1, 1)


# =============================================================================
# Position Tracking Tests
# =============================================================================

class TestPositions:
    """Test line and column bookkeeping."""

    def test_columns_on_one_line(self):
        tokens = tokenize("~5; !10;")
        assert [(t.value, t.column) for t in tokens] == [
            ("~", 1), ("5", 2), (";", 3), ("!", 5), ("10", 6), (";", 8),
        ]

    def test_integer_column_is_first_digit(self):
        tokens = tokenize("   9876;")
        assert tokens[0].column == 4
        assert tokens[1].column == 8

    def test_newline_advances_line(self):
        """The '-' in "1\\n -2;" is on line 2, column 2."""
        tokens = tokenize("1\n -2;")
        minus = tokens[1]
        assert minus.type == TokenType.OPERATOR_NEG
        assert minus.line == 2
        assert minus.column == 2

    def test_column_resets_after_newline(self):
        tokens = tokenize("12345;\n7;")
        assert (tokens[2].line, tokens[2].column) == (2, 1)

    def test_tabs_count_as_one_column(self):
        tokens = tokenize("\t\t3;")
        assert tokens[0].column == 3

    def test_carriage_return_is_whitespace(self):
        tokens = tokenize("1;\r\n2;")
        assert tokens[2].line == 2
        assert tokens[2].column == 1

    def test_eof_position(self):
        tokens = Lexer("1;\n  ").tokenize_all()
        eof = tokens[-1]
        assert (eof.line, eof.column) == (2, 3)


# =============================================================================
# END_OF_FILE Tests
# =============================================================================

class TestEndOfFile:
    """Test END_OF_FILE synthesis."""

    @pytest.mark.parametrize("source", ["", "42;", "~-2;", "abc", "1\n2\n3", ";;;", "@"])
    def test_exactly_one_trailing_eof(self, source):
        tokens = Lexer(source).tokenize_all()
        assert tokens[-1].type == TokenType.END_OF_FILE
        assert [t.type for t in tokens].count(TokenType.END_OF_FILE) == 1

    def test_next_token_after_exhaustion(self):
        """Repeated calls after the end keep returning END_OF_FILE."""
        lexer = Lexer("5;")
        lexer.tokenize_all()
        for _ in range(5):
            token = lexer.next_token()
            assert token.type == TokenType.END_OF_FILE
            assert (token.line, token.column) == (1, 3)

    def test_next_token_sequence(self):
        lexer = Lexer("!1;")
        assert lexer.next_token().type == TokenType.OPERATOR_LOG_NOT
        assert lexer.next_token().type == TokenType.INTEGER_LITERAL
        assert lexer.next_token().type == TokenType.SEMICOLON
        assert lexer.next_token().type == TokenType.END_OF_FILE
        assert lexer.next_token().type == TokenType.END_OF_FILE

    def test_tokenize_matches_tokenize_all(self):
        source = "42;\n-1; ~x;"
        assert list(Lexer(source).tokenize()) == Lexer(source).tokenize_all()


# =============================================================================
# Unknown Character Tests
# =============================================================================

class TestUnknownCharacters:
    """Test that unknown characters become UNKNOWN tokens with warnings."""

    def test_unknown_token(self):
        tokens = tokenize("a")
        assert tokens[0].type == TokenType.UNKNOWN
        assert tokens[0].value == "a"

    def test_each_unknown_char_is_one_token(self):
        tokens = tokenize("abc;")
        assert [t.type for t in tokens] == [
            TokenType.UNKNOWN,
            TokenType.UNKNOWN,
            TokenType.UNKNOWN,
            TokenType.SEMICOLON,
        ]
        assert [t.value for t in tokens[:3]] == ["a", "b", "c"]
        assert [t.column for t in tokens[:3]] == [1, 2, 3]

    def test_non_ascii_digit_is_unknown(self):
        """Only ASCII digits start integers."""
        tokens = tokenize("٣")  # ARABIC-INDIC DIGIT THREE
        assert tokens[0].type == TokenType.UNKNOWN

    def test_lexing_continues_after_unknown(self):
        tokens = tokenize("$ 42;")
        assert tokens[1].type == TokenType.INTEGER_LITERAL

    def test_warning_recorded(self):
        diagnostics = DiagnosticCollector()
        Lexer("1;\n @;", "prog.u", diagnostics).tokenize_all()

        assert diagnostics.warning_count() == 1
        assert not diagnostics.has_errors()
        warning = diagnostics.warnings[0]
        assert isinstance(warning, LexWarning)
        assert warning.char == "@"
        assert warning.location == SourceLocation("prog.u", 2, 2)
        assert "prog.u:2:2: warning: unknown character '@'" in str(warning)
        assert warning.source_line == " @;"

    def test_lexer_never_raises(self):
        """Arbitrary garbage is tokenized without exceptions."""
        tokens = Lexer("#$%^&*()[]{}<>?/\\|\"'`\x00").tokenize_all()
        assert tokens[-1].type == TokenType.END_OF_FILE
        assert all(t.type == TokenType.UNKNOWN for t in tokens[:-1])


# =============================================================================
# Token Data Class Tests
# =============================================================================

class TestToken:
    """Test the Token record."""

    def test_token_is_immutable(self):
        token = Token(TokenType.SEMICOLON, ";", 1, 1)
        with pytest.raises(AttributeError):
            token.value = ","

    def test_repr(self):
        assert repr(Token(TokenType.INTEGER_LITERAL, "4", 2, 3)) == "Token(INTEGER_LITERAL, '4', 2:3)"
        assert repr(Token(TokenType.END_OF_FILE, "", 1, 1)) == "Token(END_OF_FILE, 1:1)"

    def test_is_unary_operator(self):
        assert Token(TokenType.OPERATOR_NEG, "-", 1, 1).is_unary_operator()
        assert not Token(TokenType.INTEGER_LITERAL, "1", 1, 1).is_unary_operator()
