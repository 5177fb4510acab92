"""Expression grammar and evaluation for eldiro.

```
<expr>   ::= <number> " "* <op> " "* <number>   ; "operation"
                                                ; - flat: operands are always numbers, never nested exprs
           | <number>                           ; "number"
<number> ::= <digits>                           ; must fit in a signed 32-bit integer
<op>     ::= "+" | "-" | "*" | "/"
```

Parsing is ordered choice with backtracking: each alternative is tried against the same input, so a failed operation
(ex: "12abc", which has no operator) falls back to parsing a bare number from the start of the input.
"""

import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from eldiro.lang.error import IntegerOverflow, Malformed
from eldiro.lang.numerical import NumericValue, checked, truncating_div
from eldiro.pure.lexical import extract_digits, extract_whitespace, tag


@dataclass(frozen=True)
class Number:
    value: int

    @classmethod
    def parse(cls, s):
        digits, s = extract_digits(s)

        # reject before int(): python refuses to convert very long digit strings
        if len(digits.lstrip("0")) > len(str(NumericValue.MAX)):
            raise IntegerOverflow(digits if len(digits) <= 20 else f"{digits[:10]}...{digits[-5:]}")
        return cls(checked(int(digits.lstrip("0") or "0"), digits)), s

    def __str__(self):
        return str(self.value)


class Op(Enum):
    """Binary operators, valued by their symbol. Definition order is the order they are matched in."""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @classmethod
    def parse(cls, s):
        for op in cls:
            try:
                return op, tag(op.value, s)
            except Malformed:
                continue
        raise Malformed("operator", s)

    def apply(self, lhs, rhs, expr=""):
        """Applies self to two ints with checked 32-bit semantics. expr is only used for error messages."""
        if self is Op.DIV:
            result = truncating_div(lhs, rhs, expr)
        else:
            result = _ARITHMETIC[self](lhs, rhs)
        return checked(result, expr)

    def __str__(self):
        return self.value


_ARITHMETIC = {Op.ADD: operator.add, Op.SUB: operator.sub, Op.MUL: operator.mul}


class Expr(ABC):
    """Superclass of all expressions. Expr.parse tries every subclass in definition order."""

    @classmethod
    def parse(cls, s):
        """Returns (expr, remainder) for the first subclass whose grammar matches s. If none match, the last subclass's
        error is raised.
        """
        error = None
        for subclass in Expr.__subclasses__():
            try:
                return subclass.parse(s)
            except Malformed as exc:
                error = exc
        raise error

    @abstractmethod
    def eval(self):
        """Reduces self to a Value."""


@dataclass(frozen=True)
class Operation(Expr):
    lhs: Number
    rhs: Number
    op: Op

    @classmethod
    def parse(cls, s):
        lhs, s = Number.parse(s)
        __, s = extract_whitespace(s)

        op, s = Op.parse(s)
        __, s = extract_whitespace(s)

        rhs, s = Number.parse(s)
        return cls(lhs, rhs, op), s

    def eval(self):
        return NumericValue(self.op.apply(self.lhs.value, self.rhs.value, str(self)))

    def __str__(self):
        return f"{self.lhs} {self.op} {self.rhs}"


@dataclass(frozen=True)
class NumberExpr(Expr):
    number: Number

    @classmethod
    def parse(cls, s):
        number, s = Number.parse(s)
        return cls(number), s

    def eval(self):
        return NumericValue(self.number.value)

    def __str__(self):
        return str(self.number)
