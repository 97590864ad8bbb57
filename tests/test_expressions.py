from __future__ import annotations

import pytest

from storyscript.core.errors import InvalidInstructionFormatException
from storyscript.core.expressions import Connective, evaluate, resolve_token, split_terms


def test_split_terms_records_connectives_in_order() -> None:
    groups, connectives = split_terms("a IS 1 AND b IS 2 OR c IS 3".split())
    assert groups == [["a", "IS", "1"], ["b", "IS", "2"], ["c", "IS", "3"]]
    assert connectives == [Connective.and_, Connective.or_]


def test_resolve_token_falls_back_to_literal_for_falsy_state_values() -> None:
    state = {"hp": 10, "zero": 0, "empty": ""}
    assert resolve_token("hp", state) == 10
    assert resolve_token("zero", state) == "zero"
    assert resolve_token("empty", state) == "empty"
    assert resolve_token("missing", state) == "missing"


def test_simple_comparisons_against_state() -> None:
    state = {"x": 1, "name": "ada", "hp": "10"}
    assert evaluate("x IS 1", state) is True
    assert evaluate("x IS 2", state) is False
    assert evaluate("name == ada", state) is True
    assert evaluate("name IS_NOT bob", state) is True
    assert evaluate("hp > 9", state) is True
    assert evaluate("hp <= 9", state) is False


def test_both_sides_may_be_state_keys() -> None:
    state = {"gold": 30, "price": 25}
    assert evaluate("gold >= price", state) is True
    assert evaluate("price > gold", state) is False


def test_operand_may_follow_both_values() -> None:
    assert evaluate("x 1 IS", {"x": 1}) is True


def test_and_chain_requires_both_terms() -> None:
    assert evaluate("A IS 1 AND B IS 2", {"A": 1, "B": 2}) is True
    assert evaluate("A IS 1 AND B IS 2", {"A": 1, "B": 3}) is False
    assert evaluate("A IS 1 AND B IS 2", {"A": 0, "B": 2}) is False


def test_or_chain_requires_one_term() -> None:
    assert evaluate("A IS 1 OR B IS 2", {"A": 1, "B": 3}) is True
    assert evaluate("A IS 1 OR B IS 2", {"A": 5, "B": 2}) is True
    assert evaluate("A IS 1 OR B IS 2", {"A": 5, "B": 5}) is False


def test_fold_combines_adjacent_raw_results() -> None:
    # Raw results [False, True, False]: AND folds terms 0/1, OR folds terms 1/2
    # and the last fold wins. (A AND B) OR C would be False.
    state = {"A": 0, "B": 2, "C": 0}
    assert evaluate("A IS 1 AND B IS 2 OR C IS 3", state) is True

    # Raw results [True, False, True]: the answer is B AND C.
    # (A OR B) AND C would be True.
    state = {"A": 1, "B": 0, "C": 3}
    assert evaluate("A IS 1 OR B IS 2 AND C IS 3", state) is False


def test_fold_with_three_connectives_uses_last_pair() -> None:
    state = {"A": 1, "B": 1, "C": 0, "D": 1}
    # Raw [True, True, False, True]; the last connective (OR) folds C and D.
    assert evaluate("A IS 1 AND B IS 1 AND C IS 1 OR D IS 1", state) is True
    assert evaluate("A IS 1 AND B IS 1 OR D IS 1 AND C IS 1", state) is False


@pytest.mark.parametrize(
    "expression",
    [
        "IS 1",
        "x y z IS",
        "x IS",
        "x y",
        "",
        "x IS 1 AND",
        "AND x IS 1",
    ],
)
def test_malformed_expressions_raise_format_errors(expression: str) -> None:
    with pytest.raises(InvalidInstructionFormatException):
        evaluate(expression, {"x": 1})


def test_format_error_carries_offending_term() -> None:
    with pytest.raises(InvalidInstructionFormatException) as e:
        evaluate("x IS 1 AND IS 2", {})
    assert e.value.source == "IS 2"
