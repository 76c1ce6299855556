"""
Stack-Machine Code Generator
============================

This module owns the assembly text produced by the parser. The parser
drives an AssemblyWriter while it recognizes statements; once parsing is
done the writer is frozen into an AssemblyProgram, a read-only view of the
generated lines.

Code Generation Strategy
------------------------
Every statement is evaluated on a stack:

1. The integer operand is pushed:            PUSH <value>
2. A unary operator, if present, replaces the top of stack:

| Operator | Opcode | Meaning            |
|----------|--------|--------------------|
| -        | NEG    | arithmetic negate  |
| ~        | NOT    | bitwise complement |
| !        | LNOT   | logical not        |

Program Framing
---------------
The program always starts with the same prologue and ends with the same
exit sequence, however many statements were accepted:

    section .text
    global _start
    _start:
      PUSH 42
      NEG

      MOV RAX, 60
      XOR RDI, RDI
      SYSCALL
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from unaryc.compiler.tokens import TokenType


INDENT = "  "

PROLOGUE: tuple[str, ...] = (
    "section .text",
    "global _start",
    "_start:",
)

# exit(0): syscall 60 with the status in RDI
EPILOGUE: tuple[str, ...] = (
    "",
    f"{INDENT}MOV RAX, 60",
    f"{INDENT}XOR RDI, RDI",
    f"{INDENT}SYSCALL",
)

UNARY_OPCODES: dict[TokenType, str] = {
    TokenType.OPERATOR_NEG: "NEG",
    TokenType.OPERATOR_BIT_NOT: "NOT",
    TokenType.OPERATOR_LOG_NOT: "LNOT",
}


@dataclass(frozen=True)
class AssemblyProgram:
    """
    Read-only view of a generated program.

    Attributes:
        lines: Every output line in order, prologue and epilogue included
    """
    lines: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __getitem__(self, index):
        return self.lines[index]

    @property
    def body(self) -> tuple[str, ...]:
        """Lines between the prologue and the epilogue."""
        return self.lines[len(PROLOGUE):len(self.lines) - len(EPILOGUE)]

    @property
    def instructions(self) -> list[str]:
        """Body instructions with indentation and comments removed."""
        return [
            line.strip() for line in self.body
            if line.strip() and not line.strip().startswith(";")
        ]

    @property
    def text(self) -> str:
        """The program as a single newline-terminated string."""
        return "\n".join(self.lines) + "\n"


class AssemblyWriter:
    """
    Append-only assembly buffer owned by a single parser.

    Instructions for a statement are staged with push() and unary(), then
    either committed to the program or discarded when the statement turns
    out to be malformed.
    """

    def __init__(self, emit_comments: bool = False):
        self._emit_comments = emit_comments
        self._output: list[str] = []
        self._pending: list[str] = []

    # =========================================================================
    # Assembly Output Methods
    # =========================================================================

    def _emit(self, line: str = "") -> None:
        """Emit a line of assembly."""
        self._output.append(line)

    def _emit_instruction(self, mnemonic: str, operand: str = "") -> None:
        """Stage an instruction with optional operand."""
        if operand:
            self._pending.append(f"{INDENT}{mnemonic} {operand}")
        else:
            self._pending.append(f"{INDENT}{mnemonic}")

    def emit_prologue(self) -> None:
        for line in PROLOGUE:
            self._emit(line)

    def emit_epilogue(self) -> None:
        for line in EPILOGUE:
            self._emit(line)

    # =========================================================================
    # Statement Staging
    # =========================================================================

    def push(self, value: str) -> None:
        self._emit_instruction("PUSH", value)

    def unary(self, operator: TokenType) -> None:
        """Stage the opcode for a unary operator token kind."""
        self._emit_instruction(UNARY_OPCODES[operator])

    def commit(self, comment: Optional[str] = None) -> int:
        """
        Move the staged instructions into the program.

        Args:
            comment: Statement annotation, written only when comments
                     are enabled

        Returns:
            Number of instructions committed
        """
        if comment and self._emit_comments:
            self._emit(f"{INDENT}; {comment}")
        count = len(self._pending)
        self._output.extend(self._pending)
        self._pending.clear()
        return count

    def discard(self) -> None:
        """Drop the staged instructions of a rejected statement."""
        self._pending.clear()

    def finish(self) -> AssemblyProgram:
        """Freeze the buffer into a read-only AssemblyProgram."""
        return AssemblyProgram(tuple(self._output))
