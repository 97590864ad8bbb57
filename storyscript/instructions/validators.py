from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storyscript.api.models import InstructionType
from storyscript.core.errors import InvalidInstructionFormatException


@dataclass(frozen=True, slots=True)
class ParamContext:
    """Inputs available to validators."""

    instruction_type: InstructionType
    params: tuple[str, ...]


class ParamValidator(ABC):
    """A small, composable validation unit for an instruction's parameters."""

    @abstractmethod
    def validate(self, *, ctx: ParamContext) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class ArityValidator(ParamValidator):
    count: int

    def validate(self, *, ctx: ParamContext) -> None:
        if len(ctx.params) != self.count:
            raise InvalidInstructionFormatException(
                f"{ctx.instruction_type.value} expects {self.count} parameter(s), got {len(ctx.params)}",
                ctx.params,
            )


@dataclass(frozen=True, slots=True)
class RequiredTokenValidator(ParamValidator):
    token: str

    def validate(self, *, ctx: ParamContext) -> None:
        if self.token not in ctx.params:
            raise InvalidInstructionFormatException(
                f"{ctx.instruction_type.value} instruction requires a {self.token} token",
                ctx.params,
            )


@dataclass(frozen=True, slots=True)
class TokenOrderValidator(ParamValidator):
    """When both tokens are present, the first occurrence of `first` must come before `then`."""

    first: str
    then: str

    def validate(self, *, ctx: ParamContext) -> None:
        if self.first not in ctx.params or self.then not in ctx.params:
            return
        if ctx.params.index(self.then) < ctx.params.index(self.first):
            raise InvalidInstructionFormatException(
                f"{self.then} must come after {self.first}",
                ctx.params,
            )


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[ParamValidator, ...]

    def validate(self, *, ctx: ParamContext) -> None:
        for v in self.validators:
            v.validate(ctx=ctx)


_TWO_PARAMS = ValidatorPipeline(validators=(ArityValidator(count=2),))

DEFAULT_PARAM_PIPELINES: dict[InstructionType, ValidatorPipeline] = {
    InstructionType.goto: ValidatorPipeline(validators=(ArityValidator(count=1),)),
    InstructionType.set: _TWO_PARAMS,
    InstructionType.copy: _TWO_PARAMS,
    InstructionType.roll: _TWO_PARAMS,
    InstructionType.if_: ValidatorPipeline(
        validators=(
            RequiredTokenValidator(token="THEN"),
            TokenOrderValidator(first="THEN", then="ELSE"),
        )
    ),
    InstructionType.add: _TWO_PARAMS,
    InstructionType.sub: _TWO_PARAMS,
    InstructionType.mul: _TWO_PARAMS,
}


def pipeline_for_instruction(instruction_type: InstructionType) -> ValidatorPipeline:
    return DEFAULT_PARAM_PIPELINES[instruction_type]
