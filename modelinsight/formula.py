from .expr import Assign, Binary, Call, Dot, Grouping, Literal, QuotedName, Unary, Variable
from .parser import Parser, ParseError
from .printer import deparse
from .scanner import Scanner, ScanError
from .terms import additive_terms, build_sum
from .token import Token

TILDE = Token("TILDE", "~")
EXPRESSIONS = (Assign, Binary, Call, Dot, Grouping, Literal, QuotedName, Unary, Variable)


def parse_expression(code):
    """Parses a piece of code in the formula language and returns its AST."""
    return Parser(Scanner(code).scan()).parse()


class Formula:
    """A model formula made of an optional left-hand side and a right-hand side.

    Both sides are stored as expressions (see ``modelinsight.expr``). The canonical source code of
    the formula is obtained with ``str()``.

    Parameters
    ----------
    rhs:
        The expression on the right-hand side of ``~``.
    lhs:
        The expression on the left-hand side of ``~``. ``None`` for one-sided formulas.
    """

    def __init__(self, rhs, lhs=None):
        self.rhs = rhs
        self.lhs = lhs

    @classmethod
    def parse(cls, code):
        """Creates a ``Formula`` from its source code.

        Code without a ``~`` is interpreted as the right-hand side of a one-sided formula, so
        ``"1 | g"`` and ``"~ 1 | g"`` give the same result.
        """
        return cls.from_expr(parse_expression(code))

    @classmethod
    def from_expr(cls, expr):
        while isinstance(expr, Grouping) and isinstance(expr.expression, (Binary, Unary)):
            if not _is_tilde(expr.expression):
                break
            expr = expr.expression
        if isinstance(expr, Binary) and expr.operator.kind == "TILDE":
            return cls(expr.right, expr.left)
        if isinstance(expr, Unary) and expr.operator.kind == "TILDE":
            return cls(expr.right)
        return cls(expr)

    @classmethod
    def coerce(cls, value):
        """Returns ``value`` as a ``Formula``. It accepts formulas, source code and expressions."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, EXPRESSIONS):
            return cls.from_expr(value)
        raise TypeError(f"Can't create a formula from an object of class {type(value)}.")

    @property
    def is_one_sided(self):
        return self.lhs is None

    @property
    def is_trivial(self):
        """One-sided intercept-only formulas, ``~ 1`` and ``~ 0``, say nothing about a model."""
        rhs = self.rhs
        while isinstance(rhs, Grouping):
            rhs = rhs.expression
        return (
            self.is_one_sided
            and isinstance(rhs, Literal)
            and not isinstance(rhs.value, str)
            and rhs.value in (0, 1)
        )

    @property
    def response(self):
        """Source code of the left-hand side. ``None`` for one-sided formulas."""
        if self.lhs is None:
            return None
        return deparse(self.lhs)

    @property
    def expr(self):
        if self.lhs is None:
            return Unary(TILDE, self.rhs)
        return Binary(self.lhs, TILDE, self.rhs)

    def terms(self):
        """Signed terms of the right-hand side, see ``modelinsight.terms.additive_terms()``."""
        return additive_terms(self.rhs)

    def update(self, base):
        """Replaces the ``.`` on the right-hand side with the right-hand side of ``base``.

        Terms are then simplified, so subtracting a term that was added removes it. With a base
        formula ``y ~ x + z``, the formula ``~ . - x + w`` becomes ``~ z + w``.
        """
        base = Formula.coerce(base)
        rhs = _replace_dot(self.rhs, base.rhs)
        if rhs is self.rhs:
            return self

        kept = []
        for sign, term in additive_terms(rhs):
            if sign == "+":
                if ("+", term) not in kept:
                    kept.append(("+", term))
            elif ("+", term) in kept:
                kept.remove(("+", term))
            else:
                kept.append((sign, term))
        return Formula(build_sum(kept), self.lhs)

    def __eq__(self, other):
        if isinstance(other, str):
            try:
                other = Formula.parse(other)
            except (ScanError, ParseError):
                return False
        if not isinstance(other, type(self)):
            return False
        return self.lhs == other.lhs and self.rhs == other.rhs

    def __hash__(self):
        return hash((self.lhs, self.rhs))

    def __str__(self):
        return deparse(self.expr)

    def __repr__(self):
        return f"Formula('{self}')"


def _is_tilde(expr):
    return expr.operator.kind == "TILDE"


def _replace_dot(expr, replacement):
    # Only the top-level sum is inspected, '.' does not make sense anywhere else.
    terms = additive_terms(expr)
    if not any(isinstance(term, Dot) for _, term in terms):
        return expr
    replaced = []
    for sign, term in terms:
        if isinstance(term, Dot):
            replaced.append((sign, Grouping(replacement)))
        else:
            replaced.append((sign, term))
    return build_sum(replaced)
