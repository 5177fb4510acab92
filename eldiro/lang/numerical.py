"""Runtime values for eldiro. Values are only ever produced by evaluation, never parsed directly.

Integers are signed 32-bit. Arithmetic is checked: a result outside [MIN, MAX] raises IntegerOverflow instead of
wrapping, and division truncates toward zero.
"""

from dataclasses import dataclass

from eldiro.lang.error import DivisionByZero, IntegerOverflow


class Value:
    """Superclass of all runtime values. NumericValue is the only kind the grammar produces."""


@dataclass(frozen=True)
class NumericValue(Value):
    number: int

    BITS = 32
    MIN = -2 ** (BITS - 1)
    MAX = 2 ** (BITS - 1) - 1

    def __str__(self):
        return str(self.number)


def checked(number, expr=None):
    """Returns number if it fits in a signed 32-bit integer, else raises IntegerOverflow (expr is used in the message).
    """
    if not NumericValue.MIN <= number <= NumericValue.MAX:
        raise IntegerOverflow(expr or number)
    return number


def truncating_div(lhs, rhs, expr=""):
    """Integer division rounding toward zero, unlike python's floor division."""
    if rhs == 0:
        raise DivisionByZero(expr)

    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient
