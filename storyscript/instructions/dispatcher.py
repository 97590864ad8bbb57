from __future__ import annotations

from storyscript.api.models import Instruction, InstructionType
from storyscript.core.errors import InvalidInstructionTypeException
from storyscript.core.values import ScriptState
from storyscript.instructions import handlers
from storyscript.instructions.handlers import ExecutionContext, Handler
from storyscript.instructions.validators import ParamContext, pipeline_for_instruction

INSTRUCTION_HANDLERS: dict[InstructionType, Handler] = {
    InstructionType.goto: handlers.goto,
    InstructionType.set: handlers.set_value,
    InstructionType.copy: handlers.copy_value,
    InstructionType.roll: handlers.roll,
    InstructionType.if_: handlers.if_then_else,
    InstructionType.add: handlers.add,
    InstructionType.sub: handlers.subtract,
    InstructionType.mul: handlers.multiply,
}


def resolve_instruction_type(raw: str) -> InstructionType:
    # Case-sensitive: `set` is not SET.
    try:
        return InstructionType(raw)
    except ValueError as e:
        raise InvalidInstructionTypeException(raw) from e


def handle_instruction(instruction: Instruction, state: ScriptState, *, ctx: ExecutionContext) -> None:
    """Validate an instruction's parameters and run its handler against `state`.

    Handler failures propagate unchanged.
    """

    instruction_type = resolve_instruction_type(instruction.type)
    params = tuple(instruction.params)

    pipeline_for_instruction(instruction_type).validate(
        ctx=ParamContext(instruction_type=instruction_type, params=params)
    )
    INSTRUCTION_HANDLERS[instruction_type](params, state, ctx)
