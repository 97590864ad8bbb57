"""Script values and the coercion rules the operand table relies on.

Every token in an instruction string is text, while the state bag may also hold
numbers (written by ROLL/ADD/SUB/MUL) and booleans (written by the caller).
Comparisons between those kinds follow the explicit rules below rather than
Python's own mixed-type behavior (where `True == 1` and `"1" != 1`).
"""
from __future__ import annotations

import math
import re
from collections.abc import Callable, MutableMapping
from typing import Any, Literal

ScriptValue = str | int | float | bool
ScriptState = MutableMapping[str, ScriptValue]

ValueKind = Literal["undefined", "boolean", "number", "string"]

_INT_LITERAL = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL_LITERAL = re.compile(r"[+-]?\d+(?:\.\d+)?", re.ASCII)
_NUMERIC_TEXT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_PREFIXED_INT = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+", re.ASCII)


def kind_of(value: ScriptValue | None) -> ValueKind:
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return "string"


def is_truthy(value: ScriptValue | None) -> bool:
    # bool(nan) is True in Python; scripts treat NaN as falsy.
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def parse_int_literal(token: str) -> int | None:
    """Return the integer spelled by `token`, or None if it is not a plain integer literal."""

    text = token.strip()
    if not _INT_LITERAL.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        # Past the interpreter's int string conversion digit limit.
        return None


def to_number(value: ScriptValue | None) -> int | float:
    """Numeric reading of a value; NaN when there is none.

    Strings are stripped first; the empty string reads as 0. Decimal and
    exponent literals, 0x/0o/0b prefixed integers and (+/-)Infinity are
    accepted, anything else is NaN.
    """

    kind = kind_of(value)
    if kind == "undefined":
        return math.nan
    if kind == "boolean":
        return int(value)  # type: ignore[arg-type]
    if kind == "number":
        return value  # type: ignore[return-value]

    text = str(value).strip()
    if not text:
        return 0
    if _INT_LITERAL.fullmatch(text):
        try:
            return int(text)
        except ValueError:
            # Too many digits for int(); the float reading is +/-inf.
            return float(text)
    if _NUMERIC_TEXT.fullmatch(text):
        return float(text)
    if _PREFIXED_INT.fullmatch(text):
        return int(text, 0)
    if text in ("Infinity", "+Infinity"):
        return math.inf
    if text == "-Infinity":
        return -math.inf
    return math.nan


def canonical(value: ScriptValue | None) -> ScriptValue | None:
    """Read a string holding a plain decimal literal as the number it spells."""

    if isinstance(value, str) and _DECIMAL_LITERAL.fullmatch(value.strip()):
        return to_number(value)
    return value


def loose_equals(a: ScriptValue | None, b: ScriptValue | None) -> bool:
    ka, kb = kind_of(a), kind_of(b)
    if ka == kb:
        return a == b
    if "undefined" in (ka, kb):
        return False
    if ka == "boolean":
        return loose_equals(int(a), b)  # type: ignore[arg-type]
    if kb == "boolean":
        return loose_equals(a, int(b))  # type: ignore[arg-type]
    # number vs string
    return to_number(a) == to_number(b)


def strict_equals(a: ScriptValue | None, b: ScriptValue | None) -> bool:
    ca, cb = canonical(a), canonical(b)
    return kind_of(ca) == kind_of(cb) and ca == cb


def compare(a: ScriptValue | None, b: ScriptValue | None, relation: Callable[[Any, Any], bool]) -> bool:
    """Ordering comparison: lexicographic for two non-numeric strings, numeric otherwise."""

    ca, cb = canonical(a), canonical(b)
    if kind_of(ca) == "string" and kind_of(cb) == "string":
        return relation(ca, cb)
    # NaN on either side makes every ordering relation False.
    return relation(to_number(a), to_number(b))
