from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


# Same members as storyscript.core.values.ScriptValue; spelled out here so
# pydantic's smart union keeps JSON true/1/"1" as bool/int/str.
ScriptValue = bool | int | float | str


class InstructionType(StrEnum):
    goto = "GOTO"
    set = "SET"
    copy = "COPY"
    roll = "ROLL"
    if_ = "IF"
    add = "ADD"
    sub = "SUB"
    mul = "MUL"


class Instruction(BaseModel):
    """One parsed statement: the raw type token plus its parameters, in order."""

    type: str = Field(..., min_length=1)
    params: list[str] = Field(..., min_length=1)


class RunScriptRequest(BaseModel):
    instructions: str | None = Field(default=None, max_length=4000)
    state: dict[str, ScriptValue] = Field(default_factory=dict)

    # For reproducible ROLLs.
    seed: int | None = None


class RunScriptResponse(BaseModel):
    state: dict[str, ScriptValue]

    # Next narrative node, when the script (or the incoming state) set one.
    question: ScriptValue | None = None


class EvaluateRequest(BaseModel):
    expression: str = Field(..., min_length=1, max_length=4000)
    state: dict[str, ScriptValue] = Field(default_factory=dict)


class EvaluateResponse(BaseModel):
    result: bool


class ScriptErrorDetail(BaseModel):
    error: str
    message: str
