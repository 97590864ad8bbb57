from __future__ import annotations

from collections.abc import Sequence


class InstructionError(ValueError):
    """Base class for every failure raised while running an instruction string.

    Nothing below is recovered internally: the first failure aborts the current
    `process` call and reaches the caller unchanged.
    """


class InvalidInstructionFormatException(InstructionError):
    """Malformed statement, parameter list, or conditional expression."""

    def __init__(self, message: str, source: str | Sequence[str] | None = None) -> None:
        self.message = message
        self.source = source
        if source is None:
            super().__init__(message)
        else:
            super().__init__(f"{message}: {_render(source)}")


class InvalidInstructionTypeException(InstructionError):
    def __init__(self, instruction_type: str) -> None:
        self.instruction_type = instruction_type
        super().__init__(f"Unknown instruction type: {instruction_type}")


class UndefinedValueException(InstructionError):
    """An arithmetic operand resolved to nothing usable (absent, falsy, or non-numeric)."""

    def __init__(self, operand: str) -> None:
        self.operand = operand
        super().__init__(f"Undefined value: {operand}")


class InstructionDepthExceededException(InstructionError):
    """Nested IF branches went deeper than the configured limit."""

    def __init__(self, depth: int, max_depth: int) -> None:
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(f"IF nesting depth {depth} exceeds limit {max_depth}")


def _render(source: str | Sequence[str]) -> str:
    if isinstance(source, str):
        return repr(source)
    return repr(" ".join(str(s) for s in source))
