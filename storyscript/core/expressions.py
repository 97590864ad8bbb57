"""Conditional expression evaluator used by IF.

Grammar (whitespace separated tokens):

    EXPR := TERM (('AND' | 'OR') TERM)*
    TERM := LEFT OP RIGHT

Term groups are evaluated independently, then folded pairwise: the connective
at index i combines the raw results of terms i and i + 1, and the last folded
value is the answer. For two or more connectives this is not left-associative
boolean evaluation (`A AND B OR C` evaluates `B OR C`); existing scripts rely on
that order, so it is kept as is.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import StrEnum

from statemachine.exceptions import TransitionNotAllowed

from storyscript.core.errors import InvalidInstructionFormatException
from storyscript.core.operands import Operand, lookup_operand
from storyscript.core.values import ScriptValue, is_truthy
from storyscript.fsm import TermFSM


class Connective(StrEnum):
    and_ = "AND"
    or_ = "OR"

    def combine(self, left: bool, right: bool) -> bool:
        if self is Connective.and_:
            return left and right
        return left or right


def split_terms(tokens: Sequence[str]) -> tuple[list[list[str]], list[Connective]]:
    """Split tokens into term groups and the connectives separating them."""

    groups: list[list[str]] = [[]]
    connectives: list[Connective] = []
    for token in tokens:
        if token in (Connective.and_, Connective.or_):
            connectives.append(Connective(token))
            groups.append([])
        else:
            groups[-1].append(token)
    return groups, connectives


def resolve_token(token: str, state: Mapping[str, ScriptValue]) -> ScriptValue:
    """State value for `token` when it is truthy, otherwise the token itself as a literal."""

    value = state.get(token)
    return value if is_truthy(value) else token


def evaluate_term(tokens: Sequence[str], state: Mapping[str, ScriptValue]) -> bool:
    fsm = TermFSM()
    left: ScriptValue | None = None
    right: ScriptValue | None = None
    operand: Operand | None = None

    try:
        for token in tokens:
            found = lookup_operand(token)
            if found is not None:
                fsm.read_operand()
                operand = found
                continue

            value = resolve_token(token, state)
            fsm.read_value()
            if fsm.current_state == fsm.left_bound:
                left = value
            else:
                right = value
        fsm.end_term()
    except TransitionNotAllowed as e:
        raise InvalidInstructionFormatException("Malformed conditional term", " ".join(tokens)) from e

    if operand is None:
        raise InvalidInstructionFormatException("Conditional term has no operand", " ".join(tokens))

    return operand.apply(left, right)


def evaluate(expression: str, state: Mapping[str, ScriptValue]) -> bool:
    groups, connectives = split_terms(expression.split())
    results = [evaluate_term(group, state) for group in groups]

    for index, connective in enumerate(connectives):
        if index + 1 >= len(results):
            raise InvalidInstructionFormatException("Connective without a following term", expression)
        results.append(connective.combine(results[index], results[index + 1]))

    return results[-1]
