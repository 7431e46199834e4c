"""Tools to work with group-specific terms written with the bar syntax, as in ``(1 + x | g)``.

The same conventions as ``lme4`` are used. Nested grouping factors are expanded, so
``(1 | a/b)`` becomes ``(1 | b:a) + (1 | a)``, and double bars are split into uncorrelated terms,
so ``(1 + x || g)`` becomes ``(1 | g) + (0 + x | g)``.
"""
from .expr import Binary, Literal
from .terms import additive_terms, build_sum, is_bar, unwrap_bar, PLUS
from .token import Token

PIPE = Token("PIPE", "|")
COLON = Token("COLON", ":")


def find_bars(expr):
    """Finds the group-specific terms in an expression.

    Parameters
    ----------
    expr: An expression, usually the right-hand side of a formula.

    Returns
    -------
    list
        The ``|`` expressions, without parenthesis, in order of appearance. Empty if there are no
        group-specific terms.
    """
    bars = []
    for sign, term in additive_terms(expr):
        if sign == "+" and is_bar(term):
            bar = unwrap_bar(term)
            for expanded in expand_double_bar(bar):
                bars.extend(expand_slash(expanded))
    return bars


def no_bars(expr):
    """Returns ``expr`` without its group-specific terms.

    When all the terms are group-specific terms the result is an intercept-only expression.
    An expression without group-specific terms is returned as it is.
    """
    terms = additive_terms(expr)
    if not any(is_bar(term) for _, term in terms):
        return expr
    return build_sum([(sign, term) for sign, term in terms if not is_bar(term)])


def expand_slash(bar):
    """Expands ``e | a/b`` into ``e | b:a`` and ``e | a``."""
    factors = _slash_terms(bar.right)
    if len(factors) == 1:
        return [bar]

    groups = []
    current = None
    for factor in factors:
        current = factor if current is None else Binary(factor, COLON, current)
        groups.insert(0, current)
    return [Binary(bar.left, PIPE, group) for group in groups]


def _slash_terms(expr):
    if isinstance(expr, Binary) and expr.operator.kind == "SLASH":
        return _slash_terms(expr.left) + _slash_terms(expr.right)
    return [expr]


def expand_double_bar(bar):
    """Splits ``e || g`` into one uncorrelated term per term in ``e``.

    The intercept, if present, gets its own term. Any other term ``x`` is turned into
    ``0 + x | g``. Single bars are returned unchanged.
    """
    if bar.operator.kind != "PIPE_PIPE":
        return [bar]

    intercept = True
    slopes = []
    for sign, term in additive_terms(bar.left):
        if isinstance(term, Literal) and term.value in (0, 1):
            intercept = (term.value == 1) == (sign == "+")
        elif sign == "+":
            slopes.append(term)

    bars = []
    if intercept:
        bars.append(Binary(Literal(1), PIPE, bar.right))
    for slope in slopes:
        bars.append(Binary(Binary(Literal(0), PLUS, slope), PIPE, bar.right))
    return bars


def has_bars(expr):
    return any(is_bar(term) for _, term in additive_terms(expr))
