"""Statement grammar for the eldiro language, a thin layer on top of the expression grammar in pure/expr.py. Note that
this module does not read input, but rather parses single-line string statements.

```
<binding>   ::= "let" " "+ <ident> " "* "=" " "* <expr>    ; stores the value of <expr> under <ident>
<expr_stmt> ::= <expr>                                      ; value will be a session result
```
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from eldiro.lang.error import Malformed
from eldiro.pure.expr import Expr
from eldiro.pure.lexical import extract_ident, extract_whitespace, extract_whitespace1, tag


class Stmt(ABC):
    """Superclass representing any single-line statement in eldiro."""

    @staticmethod
    @abstractmethod
    def check_grammar(expr):
        """This method should check whether expr is meant to be this kind of statement. Once a subclass claims expr,
        no other subclass is tried, so errors from its parse are reported as-is.
        """

    @classmethod
    @abstractmethod
    def parse(cls, s):
        """Returns (stmt, remainder)."""

    @abstractmethod
    def eval(self, env):
        """Evaluates self against env."""

    @staticmethod
    def preprocess(expr):
        """Removes trailing spaces and line breaks. Tabs are not whitespace in eldiro, so they are kept."""
        return expr.rstrip(" \r\n")

    @classmethod
    def infer(cls, expr):
        """Infers the type of expr and returns a statement of the correct subclass. The whole of expr (minus trailing
        whitespace) must be consumed.
        """
        expr = Stmt.preprocess(expr)

        for subclass in cls.__subclasses__():
            if subclass.check_grammar(expr):
                stmt, remainder = subclass.parse(expr)
                if remainder:
                    raise Malformed("end of input", remainder)
                return stmt

        raise Malformed("statement", expr)


@dataclass(frozen=True)
class Binding(Stmt):
    """Binding statement: let <NAME> = <expr>."""
    KEYWORD = "let"

    name: str
    val: Expr

    @staticmethod
    def check_grammar(expr):
        return expr.startswith(Binding.KEYWORD)

    @classmethod
    def parse(cls, s):
        s = tag(Binding.KEYWORD, s)
        __, s = extract_whitespace1(s)

        name, s = extract_ident(s)
        __, s = extract_whitespace(s)

        s = tag("=", s)
        __, s = extract_whitespace(s)

        val, s = Expr.parse(s)
        return cls(name, val), s

    def eval(self, env):
        env.store(self.name, self.val.eval())

    def __str__(self):
        return f"{Binding.KEYWORD} {self.name} = {self.val}"


@dataclass(frozen=True)
class ExprStmt(Stmt):
    """Bare expression. Evaluating it leaves env untouched and returns its value."""
    expr: Expr

    @staticmethod
    def check_grammar(expr):
        return True

    @classmethod
    def parse(cls, s):
        expr, s = Expr.parse(s)
        return cls(expr), s

    def eval(self, env):
        return self.expr.eval()

    def __str__(self):
        return str(self.expr)
