"""Walk formula expressions and extract the pieces other modules work with.

Three views are provided:

* ``additive_terms()`` splits an expression on its top-level ``+`` and ``-`` operators and returns
  the terms together with their sign. Parenthesized sums are flattened, everything else, like
  ``x:z``, ``x * z``, ``log(x)`` or ``(1 | g)``, is a single term.
* ``term_components()`` returns the name of each variable-like component of an expression as it is
  written, e.g. ``"log(x)"`` or ``"I(x^2)"``. Interactions are split into their components and
  group-specific terms contribute the name of their grouping factor.
* ``all_vars()`` returns the bare names of every variable used in an expression, looking into
  function calls.
"""
from .expr import Binary, Grouping, Literal, Unary
from .printer import deparse
from .token import Token
from .utils import flatten_list

PLUS = Token("PLUS", "+")
MINUS = Token("MINUS", "-")


def is_bar(expr):
    """Whether ``expr`` is a group-specific term like ``1 | g``, ``(x | g)`` or ``(x || g)``."""
    return unwrap_bar(expr) is not None


def unwrap_bar(expr):
    """Returns the ``|`` expression within ``expr``, removing surrounding parenthesis.

    Returns ``None`` if ``expr`` is not a group-specific term.
    """
    while isinstance(expr, Grouping):
        expr = expr.expression
    if isinstance(expr, Binary) and expr.operator.kind in ["PIPE", "PIPE_PIPE"]:
        return expr
    return None


def additive_terms(expr):
    """Splits ``expr`` on top-level sums.

    Returns
    -------
    list
        A list of ``(sign, term)`` tuples. ``sign`` is ``"+"`` or ``"-"`` and ``term`` is an
        expression.
    """
    if expr is None:
        return []
    if isinstance(expr, Binary) and expr.operator.kind in ["PLUS", "MINUS"]:
        right = additive_terms(expr.right)
        if expr.operator.kind == "MINUS":
            right = [("-" if sign == "+" else "+", term) for sign, term in right]
        return additive_terms(expr.left) + right
    if isinstance(expr, Grouping) and not is_bar(expr):
        inner = expr.expression
        if isinstance(inner, (Binary, Grouping, Unary)) and _is_sum(inner):
            return additive_terms(inner)
    if isinstance(expr, Unary) and expr.operator.kind in ["PLUS", "MINUS"]:
        terms = additive_terms(expr.right)
        if expr.operator.kind == "MINUS":
            terms = [("-" if sign == "+" else "+", term) for sign, term in terms]
        return terms
    return [("+", expr)]


def _is_sum(expr):
    while isinstance(expr, Grouping):
        expr = expr.expression
    if isinstance(expr, Binary):
        return expr.operator.kind in ["PLUS", "MINUS"]
    return isinstance(expr, Unary) and expr.operator.kind in ["PLUS", "MINUS"]


def build_sum(terms):
    """Inverse of ``additive_terms()``. Builds a left-associative sum out of signed terms.

    An empty list of terms results in an intercept-only expression.
    """
    expr = None
    for sign, term in terms:
        if expr is None:
            expr = term if sign == "+" else Unary(MINUS, term)
        else:
            expr = Binary(expr, PLUS if sign == "+" else MINUS, term)
    if expr is None:
        return Literal(1)
    return expr


def is_intercept(expr):
    """Literal ``0`` and ``1`` in a sum toggle the intercept. They are not variables."""
    return isinstance(expr, Literal) and not isinstance(expr.value, str) and expr.value in (0, 1)


class ComponentExtractor:
    """Visitor that returns the names of the components of a term as written in the formula"""

    def __init__(self, expr):
        self.expr = expr

    def get(self):
        return list(flatten_list(self.expr.accept(self)))

    def visitAssignExpr(self, expr):  # pylint: disable = unused-argument
        return []

    def visitGroupingExpr(self, expr):
        return expr.expression.accept(self)

    def visitBinaryExpr(self, expr):
        otype = expr.operator.kind
        if otype in ["PIPE", "PIPE_PIPE"]:
            # Only the grouping factor is relevant
            return [deparse(expr.right)]
        elif otype in ["PLUS", "STAR", "COLON", "SLASH", "IN"]:
            return [expr.left.accept(self), expr.right.accept(self)]
        elif otype == "MINUS":
            return expr.left.accept(self)
        elif otype == "CARET":
            # '(x + z)^2' has components 'x' and 'z'. The math power is 'I(x^2)'.
            return expr.left.accept(self)
        elif otype == "TILDE":
            return expr.right.accept(self)
        return [deparse(expr)]

    def visitUnaryExpr(self, expr):
        if expr.operator.kind == "MINUS":
            return []
        return expr.right.accept(self)

    def visitCallExpr(self, expr):
        return [deparse(expr)]

    def visitVariableExpr(self, expr):
        return [expr.name.lexeme]

    def visitLiteralExpr(self, expr):  # pylint: disable = unused-argument
        return []

    def visitQuotedNameExpr(self, expr):
        # delete backquotes in 'variable'
        return [expr.expression.lexeme[1:-1]]

    def visitDotExpr(self, expr):  # pylint: disable = unused-argument
        return []


class AllVarsExtractor(ComponentExtractor):
    """Visitor that extracts the names of all the variables present in an expression"""

    def visitBinaryExpr(self, expr):
        return [expr.left.accept(self), expr.right.accept(self)]

    def visitUnaryExpr(self, expr):
        return expr.right.accept(self)

    def visitCallExpr(self, expr):
        return [arg.accept(self) for arg in expr.args]

    def visitAssignExpr(self, expr):
        return expr.value.accept(self)


def term_components(expr):
    """Returns the components of the terms added in ``expr``, duplicates included.

    Terms that are subtracted, like ``x`` in ``y ~ z - x``, and intercepts are not components.
    A subtracted term also removes the same term when it was added, so ``y ~ x + z - x`` has
    the single component ``z``.
    """
    terms = additive_terms(expr)
    removed = [term for sign, term in terms if sign == "-"]
    components = []
    for sign, term in terms:
        if sign == "-" or is_intercept(term) or term in removed:
            continue
        components.extend(ComponentExtractor(term).get())
    return components


def all_vars(expr):
    """Returns the names of all the variables in ``expr``, in order of appearance."""
    if expr is None:
        return []
    return AllVarsExtractor(expr).get()
