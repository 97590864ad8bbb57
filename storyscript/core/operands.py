from __future__ import annotations

import operator
from collections.abc import Callable, Mapping
from enum import StrEnum
from types import MappingProxyType

from storyscript.core.values import ScriptValue, compare, loose_equals, strict_equals

Predicate = Callable[[ScriptValue | None, ScriptValue | None], bool]


class Operand(StrEnum):
    """Comparison spellings accepted inside an IF condition."""

    loose_eq = "=="
    is_ = "IS"
    is_not = "IS_NOT"
    not_eq = "!="
    gt = ">"
    lt = "<"
    ge = ">="
    le = "<="

    def apply(self, left: ScriptValue | None, right: ScriptValue | None) -> bool:
        return OPERAND_PREDICATES[self](left, right)


OPERAND_PREDICATES: Mapping[Operand, Predicate] = MappingProxyType(
    {
        Operand.loose_eq: loose_equals,
        Operand.is_: strict_equals,
        Operand.is_not: lambda a, b: not strict_equals(a, b),
        # `!=` is the strict negation, same as IS_NOT (not the negation of `==`).
        Operand.not_eq: lambda a, b: not strict_equals(a, b),
        Operand.gt: lambda a, b: compare(a, b, operator.gt),
        Operand.lt: lambda a, b: compare(a, b, operator.lt),
        Operand.ge: lambda a, b: compare(a, b, operator.ge),
        Operand.le: lambda a, b: compare(a, b, operator.le),
    }
)


def lookup_operand(token: str) -> Operand | None:
    try:
        return Operand(token)
    except ValueError:
        return None
