from __future__ import annotations

from statemachine import State, StateMachine


class TermFSM(StateMachine):
    """Guards the token shape of one comparison term: LEFT OP RIGHT.

    - phases: empty -> left bound -> right bound -> closed
    - an operand may appear once a left value is bound (before or after the right value)
    - a third value, an operand before any value, or closing without a right value
      are not allowed; the evaluator turns those into format errors.

    The FSM only guards transitions; the evaluator keeps the resolved values.
    """

    empty = State("empty", value="empty", initial=True)
    left_bound = State("left_bound", value="left_bound")
    right_bound = State("right_bound", value="right_bound")
    closed = State("closed", value="closed", final=True)

    read_value = empty.to(left_bound) | left_bound.to(right_bound)
    read_operand = left_bound.to.itself() | right_bound.to.itself()
    end_term = right_bound.to(closed)
