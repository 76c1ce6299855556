"""
unaryc Error Hierarchy
======================

This module defines the exception hierarchy and the diagnostics channel
for the unaryc compiler. All exceptions inherit from UnaryCError, allowing
callers to catch every compiler-related error with a single except clause.

Exception Hierarchy
-------------------
UnaryCError (base)
├── CompilerDiagnostic - located message with hint and caret context
│   ├── LexWarning - unknown character in source (recoverable)
│   ├── UnarySyntaxError - statement-level syntax error (recoverable)
│   │   ├── UnexpectedTokenError - wrong token kind where one was expected
│   │   └── MissingTokenError - required token absent (e.g. ';')
│   └── TooManyErrors - error limit reached, parsing stopped
├── CompilationFailed - aggregate report of collected diagnostics
├── InitializationError - malformed token sequence handed to the parser
└── ConsumptionError - parser read past the end of its token sequence

Recoverable vs. Fatal
---------------------
LexWarning and UnarySyntaxError are recorded in a DiagnosticCollector and
never stop the pipeline as a whole: an unknown character becomes an UNKNOWN
token, and a syntax error only discards the statement it occurred in.

InitializationError and ConsumptionError indicate a broken contract between
components (or a defect in the parser itself). They always propagate to the
caller and are never collected.

Diagnostic Format
-----------------
    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


# =============================================================================
# Base Exception Class
# =============================================================================

class UnaryCError(Exception):
    """
    Base exception for all unaryc errors.

        try:
            compile_unary(source, strict=True)
        except UnaryCError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Located Diagnostics
# =============================================================================

class CompilerDiagnostic(UnaryCError):
    """
    A located compiler message.

    Provides the common message formatting shared by warnings and syntax
    errors: location prefix, severity, the offending source line with a
    caret under the column, and an optional hint.

    Attributes:
        message: The diagnostic description
        location: Where in the source the problem occurred (optional)
        hint: A suggestion for fixing the problem (optional)
        source_line: The source text of the offending line (optional)
    """

    severity = "error"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def is_warning(self) -> bool:
        return self.severity == "warning"

    def _format_message(self) -> str:
        """
        Format the message with location, source context, and hint.

        Example output:
            prog.u:1:2: error: expected INTEGER_LITERAL, but got OPERATOR_NEG
                ~-2;
                 ^
            hint: unary operators cannot be stacked
        """
        parts = []

        # Location prefix
        if self.location:
            parts.append(f"{self.location}: {self.severity}: {self.message}")
        else:
            parts.append(f"{self.severity}: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class LexWarning(CompilerDiagnostic):
    """
    Unknown character in source.

    Never raised by the lexer: the character becomes an UNKNOWN token and
    this warning is recorded in the diagnostics collector instead.
    """

    severity = "warning"

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unknown character {char!r}",
            location=location,
            source_line=source_line,
        )


class UnarySyntaxError(CompilerDiagnostic):
    """
    Syntax error in a statement.

    Raised inside the parser and caught at the statement boundary, where
    it is recorded and the parser resynchronizes on the next ';'.
    """
    pass


class UnexpectedTokenError(UnarySyntaxError):
    """
    A token of the wrong kind where an integer or unary operator was
    expected.

    Attributes:
        found: Name of the token kind actually present
        expected: Description of what the grammar required
    """

    def __init__(
        self,
        found: str,
        expected: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected
        super().__init__(
            f"expected {expected}, but got {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingTokenError(UnarySyntaxError):
    """
    A required token is missing.

    Raised when the statement terminator (or the integer after a unary
    operator) is not where the grammar requires it.
    """

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        hint = "terminate each statement with ';'" if expected == "SEMICOLON" else None
        super().__init__(
            f"expected {expected}, but got {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class TooManyErrors(CompilerDiagnostic):
    """Recorded once when the parser gives up after max_errors syntax errors."""

    def __init__(self, limit: int, location: Optional[SourceLocation] = None):
        self.limit = limit
        super().__init__(f"too many errors ({limit}), stopping", location=location)


# =============================================================================
# Fatal Errors
# =============================================================================

class CompilationFailed(UnaryCError):
    """
    Aggregate error carrying a pre-formatted diagnostics report.

    Raised by strict helpers once a compilation finished with errors.
    """

    def __init__(self, report: str):
        self.report = report
        super().__init__(report)


class InitializationError(UnaryCError):
    """
    Malformed token sequence handed to the parser.

    The parser requires a non-empty sequence whose only END_OF_FILE token
    is its final element. Raised from the constructor, before any parsing.
    """
    pass


class ConsumptionError(UnaryCError):
    """
    The parser tried to read or consume past the end of its tokens.

    This is a defect in the parser, not a property of the input.
    """
    pass


# =============================================================================
# Diagnostics Collection
# =============================================================================

def sort_by_location(diagnostics: list[CompilerDiagnostic]) -> list[CompilerDiagnostic]:
    """Order diagnostics by line and column; unlocated ones come first."""
    def key(diagnostic: CompilerDiagnostic) -> tuple[int, int]:
        if diagnostic.location is None:
            return (0, 0)
        return (diagnostic.location.line, diagnostic.location.column)

    return sorted(diagnostics, key=key)


class DiagnosticCollector:
    """
    Collects warnings and errors for batch reporting.

    The lexer records unknown characters here and the parser records every
    syntax error before resynchronizing, so one run reports every problem
    in the source.

    Example:
        diagnostics = DiagnosticCollector()
        tokens = Lexer(source, diagnostics=diagnostics).tokenize_all()
        program = Parser(tokens, diagnostics=diagnostics).parse()
        if diagnostics.has_errors():
            print(diagnostics.report())
    """

    def __init__(self):
        self.errors: list[CompilerDiagnostic] = []
        self.warnings: list[CompilerDiagnostic] = []

    def add(self, diagnostic: CompilerDiagnostic) -> None:
        """Record a diagnostic, routed by its severity."""
        if diagnostic.is_warning:
            self.warnings.append(diagnostic)
        else:
            self.errors.append(diagnostic)
        logger.debug("%s", diagnostic)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def error_count(self) -> int:
        return len(self.errors)

    def warning_count(self) -> int:
        return len(self.warnings)

    def __iter__(self):
        """Iterate over all diagnostics in source order."""
        return iter(sort_by_location(self.warnings + self.errors))

    def report(self) -> str:
        """Format all diagnostics followed by a summary line."""
        lines = []

        for diagnostic in self:
            lines.append(str(diagnostic))
            lines.append("")

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)

    def clear(self) -> None:
        self.errors.clear()
        self.warnings.clear()

    def raise_if_errors(self) -> None:
        """Raise CompilationFailed if any errors were collected."""
        if self.has_errors():
            raise CompilationFailed(self.report())
