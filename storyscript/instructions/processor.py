"""Top-level entry point: run an instruction string against a state bag.

    STRING := STMT (';' STMT)*
    STMT   := TYPE PARAM+

Statements are parsed and dispatched one at a time, in order. The first failure
aborts the rest of the string; writes made by earlier statements stay applied,
so after a failure the state may be partially updated.
"""
from __future__ import annotations

import logging
import random
from collections.abc import Iterator

from storyscript.api.models import Instruction
from storyscript.config import DEFAULT_MAX_DEPTH, MAX_DEPTH_CEILING
from storyscript.core.errors import InvalidInstructionFormatException
from storyscript.core.values import ScriptState
from storyscript.instructions.dispatcher import handle_instruction
from storyscript.instructions.handlers import ExecutionContext

logger = logging.getLogger(__name__)

STATEMENT_SEPARATOR = ";"


def parse_statement(statement: str) -> Instruction:
    tokens = statement.split()
    if len(tokens) < 2:
        raise InvalidInstructionFormatException("Statement needs a type and at least one parameter", statement)
    return Instruction(type=tokens[0], params=tokens[1:])


def iter_instructions(instructions: str | None) -> Iterator[Instruction]:
    """Yield parsed statements lazily, so a malformed later statement fails only once reached."""

    if not instructions:
        return
    for statement in instructions.split(STATEMENT_SEPARATOR):
        yield parse_statement(statement)


def run_instructions(instructions: str | None, state: ScriptState, *, ctx: ExecutionContext) -> ScriptState:
    for instruction in iter_instructions(instructions):
        logger.debug("depth=%d %s %s", ctx.depth, instruction.type, " ".join(instruction.params))
        handle_instruction(instruction, state, ctx=ctx)
    return state


def process(
    instructions: str | None,
    state: ScriptState,
    *,
    rng: random.Random | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ScriptState:
    """Run `instructions` against `state` in place and return the same mapping.

    Raises an `InstructionError` subclass on the first failing statement, and
    `ValueError` when `max_depth` is outside 1..MAX_DEPTH_CEILING.
    """

    if not 0 < max_depth <= MAX_DEPTH_CEILING:
        raise ValueError(f"max_depth must be between 1 and {MAX_DEPTH_CEILING}, got {max_depth}")
    ctx = ExecutionContext(rng=rng or random.Random(), max_depth=max_depth)
    return run_instructions(instructions, state, ctx=ctx)
