from __future__ import annotations

import math
import operator
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from storyscript.config import DEFAULT_MAX_DEPTH
from storyscript.core.errors import (
    InstructionDepthExceededException,
    InvalidInstructionFormatException,
    UndefinedValueException,
)
from storyscript.core.expressions import evaluate
from storyscript.core.values import ScriptState, ScriptValue, is_truthy, parse_int_literal, to_number

# Key the orchestration layer reads to find the next narrative node.
QUESTION_KEY = "question"

MAX_DICE_SIZE = 1000


@dataclass(frozen=True, slots=True)
class ExecutionContext:
    """Per-call execution settings threaded through handlers.

    - `rng`: source for ROLL; pass a seeded `random.Random` for reproducible runs.
    - `depth`: current IF nesting level (0 for the top-level string).
    """

    rng: random.Random
    depth: int = 0
    max_depth: int = DEFAULT_MAX_DEPTH

    def nested(self) -> ExecutionContext:
        depth = self.depth + 1
        if depth > self.max_depth:
            raise InstructionDepthExceededException(depth=depth, max_depth=self.max_depth)
        return replace(self, depth=depth)


Handler = Callable[[Sequence[str], ScriptState, ExecutionContext], None]


def _write(state: ScriptState, key: str, value: ScriptValue | None, params: Sequence[str]) -> None:
    if not is_truthy(value):
        raise InvalidInstructionFormatException("Invalid parameters", params)
    state[key] = value  # type: ignore[assignment]


def goto(params: Sequence[str], state: ScriptState, ctx: ExecutionContext) -> None:
    _write(state, QUESTION_KEY, params[0], params)


def set_value(params: Sequence[str], state: ScriptState, ctx: ExecutionContext) -> None:
    _write(state, params[0], params[1], params)


def copy_value(params: Sequence[str], state: ScriptState, ctx: ExecutionContext) -> None:
    src, dst = params
    _write(state, dst, state.get(src), params)


def roll(params: Sequence[str], state: ScriptState, ctx: ExecutionContext) -> None:
    dice = parse_int_literal(params[0])
    if dice is None or not 0 < dice <= MAX_DICE_SIZE:
        raise InvalidInstructionFormatException("Invalid dice size", params[0])
    _write(state, params[1], ctx.rng.randint(1, dice), params)


def if_then_else(params: Sequence[str], state: ScriptState, ctx: ExecutionContext) -> None:
    """Evaluate the condition before THEN and run the chosen branch as a nested instruction string.

    THEN and ELSE bind to their first occurrence, so in nested IFs the first
    ELSE belongs to the outermost IF.
    """

    then_at = params.index("THEN")
    else_at = params.index("ELSE") if "ELSE" in params else None

    if evaluate(" ".join(params[:then_at]), state):
        branch = params[then_at + 1 : else_at]
    elif else_at is not None:
        branch = params[else_at + 1 :]
    else:
        return

    from storyscript.instructions.processor import run_instructions

    run_instructions(" ".join(branch), state, ctx=ctx.nested())


def _resolve_operand(token: str, state: ScriptState) -> int | float:
    literal = parse_int_literal(token)
    value = literal if literal is not None else state.get(token)
    if not is_truthy(value):
        raise UndefinedValueException(token)

    number = to_number(value)
    if math.isnan(number):
        raise UndefinedValueException(token)
    return number


def _calculate(op: Callable[[int | float, int | float], int | float], params: Sequence[str], state: ScriptState) -> None:
    a = _resolve_operand(params[0], state)
    b = _resolve_operand(params[1], state)
    state[params[0]] = op(a, b)


def add(params: Sequence[str], state: ScriptState, ctx: ExecutionContext) -> None:
    _calculate(operator.add, params, state)


def subtract(params: Sequence[str], state: ScriptState, ctx: ExecutionContext) -> None:
    _calculate(operator.sub, params, state)


def multiply(params: Sequence[str], state: ScriptState, ctx: ExecutionContext) -> None:
    _calculate(operator.mul, params, state)
