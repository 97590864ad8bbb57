from __future__ import annotations

import random

import pytest

from storyscript.api.models import Instruction, InstructionType
from storyscript.core.errors import InvalidInstructionFormatException, InvalidInstructionTypeException
from storyscript.instructions.dispatcher import INSTRUCTION_HANDLERS, handle_instruction, resolve_instruction_type
from storyscript.instructions.handlers import ExecutionContext
from storyscript.instructions.validators import (
    DEFAULT_PARAM_PIPELINES,
    ParamContext,
    pipeline_for_instruction,
)


@pytest.fixture()
def ctx(rng: random.Random) -> ExecutionContext:
    return ExecutionContext(rng=rng)


def test_every_instruction_type_has_a_handler_and_pipeline() -> None:
    assert set(INSTRUCTION_HANDLERS) == set(InstructionType)
    assert set(DEFAULT_PARAM_PIPELINES) == set(InstructionType)


def test_resolve_instruction_type_is_case_sensitive() -> None:
    assert resolve_instruction_type("SET") is InstructionType.set
    with pytest.raises(InvalidInstructionTypeException) as e:
        resolve_instruction_type("set")
    assert e.value.instruction_type == "set"


def test_unknown_instruction_type_raises(ctx: ExecutionContext) -> None:
    with pytest.raises(InvalidInstructionTypeException) as e:
        handle_instruction(Instruction(type="FOO", params=["a", "b"]), {}, ctx=ctx)
    assert e.value.instruction_type == "FOO"
    assert "FOO" in str(e.value)


def test_dispatch_runs_bound_handler(ctx: ExecutionContext) -> None:
    state: dict = {}
    handle_instruction(Instruction(type="SET", params=["door", "open"]), state, ctx=ctx)
    assert state == {"door": "open"}


@pytest.mark.parametrize(
    ("instruction_type", "params"),
    [
        ("GOTO", ["Q1", "Q2"]),
        ("SET", ["only_key"]),
        ("SET", ["k", "v", "extra"]),
        ("COPY", ["src"]),
        ("ROLL", ["6"]),
        ("ADD", ["a"]),
        ("SUB", ["a", "b", "c"]),
        ("MUL", ["a"]),
    ],
)
def test_wrong_arity_is_a_format_error(ctx: ExecutionContext, instruction_type: str, params: list[str]) -> None:
    state: dict = {"a": 1, "b": 2, "src": "x"}
    before = dict(state)
    with pytest.raises(InvalidInstructionFormatException) as e:
        handle_instruction(Instruction(type=instruction_type, params=params), state, ctx=ctx)
    assert e.value.source == tuple(params)
    assert state == before


def test_if_requires_then_token() -> None:
    ctx = ParamContext(instruction_type=InstructionType.if_, params=("x", "IS", "1", "SET", "y", "2"))
    with pytest.raises(InvalidInstructionFormatException) as e:
        pipeline_for_instruction(InstructionType.if_).validate(ctx=ctx)
    assert "THEN" in str(e.value)


def test_if_rejects_else_before_then() -> None:
    ctx = ParamContext(
        instruction_type=InstructionType.if_,
        params=("x", "IS", "1", "ELSE", "SET", "y", "3", "THEN", "SET", "y", "2"),
    )
    with pytest.raises(InvalidInstructionFormatException) as e:
        pipeline_for_instruction(InstructionType.if_).validate(ctx=ctx)
    assert "ELSE must come after THEN" in str(e.value)


def test_if_pipeline_accepts_well_formed_params() -> None:
    ctx = ParamContext(
        instruction_type=InstructionType.if_,
        params=("x", "IS", "1", "THEN", "SET", "y", "2", "ELSE", "SET", "y", "3"),
    )
    pipeline_for_instruction(InstructionType.if_).validate(ctx=ctx)
