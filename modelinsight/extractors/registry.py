import logging

from modelinsight import bars
from modelinsight.expr import Assign, Binary, Call, Grouping, Literal, QuotedName, Variable
from modelinsight.formula import Formula, parse_expression
from modelinsight.formula_set import MalformedFormulaError
from modelinsight.token import Token

_log = logging.getLogger("modelinsight")


class UnsupportedModelKind(Exception):
    pass


class MissingDependencyError(Exception):
    pass


class Extractor:
    """A formula extraction strategy for one or more kinds of models.

    Parameters
    ----------
    function: callable
        Receives the ``FittedModel`` and the ``Capabilities`` and returns a ``FormulaSet`` or a
        ``MultivariateFormulaSet``.
    requires: tuple
        Names of the capabilities ``function`` uses.
    """

    def __init__(self, function, requires=()):
        self.function = function
        self.requires = tuple(requires)
        self.name = function.__name__

    def __call__(self, model, capabilities):
        missing = [name for name in self.requires if name not in capabilities]
        if missing:
            raise MissingDependencyError(
                f"Extracting the formula of a '{model.kind}' model requires the "
                f"{', '.join(repr(name) for name in missing)} capability. "
                "Pass it in the 'capabilities' argument, e.g. "
                "'Capabilities(bars=modelinsight.bars)'."
            )
        return self.function(model, capabilities)

    def __repr__(self):  # pragma: no cover
        return f"{self.__class__.__name__}({self.name}, requires={self.requires})"


EXTRACTORS = {}


def register_extractor(*kinds, requires=()):
    """Decorator that registers a function as the formula extractor of the given model kinds."""

    def decorator(function):
        extractor = Extractor(function, requires)
        for kind in kinds:
            if kind in EXTRACTORS:
                _log.debug("Replacing formula extractor for '%s'", kind)
            EXTRACTORS[kind] = extractor
        return function

    return decorator


def get_extractor(kind):
    try:
        return EXTRACTORS[kind]
    except KeyError:
        raise UnsupportedModelKind(f"No formula extractor for models of kind '{kind}'.") from None


class Capabilities(dict):
    """Parsing tools made available to the extractors.

    By default it contains ``"bars"``, the module used to find group-specific terms in formulas
    (see ``modelinsight.bars``). Any capability can be replaced or removed.
    """

    def __init__(self, **capabilities):
        defaults = {"bars": bars}
        defaults.update(capabilities)
        super().__init__({name: value for name, value in defaults.items() if value is not None})


# Helpers shared by the extractors


def required(value, what):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MalformedFormulaError(f"The model does not have {what}.")
    return value


def as_formula(value):
    if value is None:
        return None
    try:
        return Formula.coerce(value)
    except TypeError as error:
        raise MalformedFormulaError(str(error)) from error


def split_random(formula, bars_tools):
    """Splits a formula with group-specific terms into its fixed part and its random parts.

    Returns
    -------
    tuple
        A ``Formula`` with the fixed part and a list of one-sided ``Formula`` objects, one per
        group-specific term.
    """
    random = [Formula(bar) for bar in bars_tools.find_bars(formula.rhs)]
    fixed = Formula(bars_tools.no_bars(formula.rhs), formula.lhs)
    return fixed, random


def split_parts(formula):
    """Splits the right-hand side of a formula on its top-level ``|`` operators.

    ``y ~ x | z | w`` is split into ``x``, ``z`` and ``w``. Group-specific terms within
    parenthesis, as in ``y ~ x + (1 | g)``, are not split.
    """
    parts = []
    expr = formula.rhs
    while isinstance(expr, Binary) and expr.operator.kind == "PIPE":
        parts.insert(0, expr.right)
        expr = expr.left
    parts.insert(0, expr)
    return parts


def join_parts(parts):
    expr = parts[0]
    for part in parts[1:]:
        expr = Binary(expr, Token("PIPE", "|"), part)
    return expr


def is_zero(expr):
    while isinstance(expr, Grouping):
        expr = expr.expression
    return isinstance(expr, Literal) and expr.value == 0 and not isinstance(expr.value, str)


def call_argument(code, name):
    """Returns the value of the argument ``name`` of the call written in ``code``.

    ``None`` if ``code`` is empty or if the argument was not passed explicitly.
    """
    if code is None or not str(code).strip():
        return None
    expr = parse_expression(code)
    if not isinstance(expr, Call):
        return None
    for arg in expr.args:
        if isinstance(arg, Assign) and _assign_name(arg) == name:
            return arg.value
    return None


def _assign_name(expr):
    if isinstance(expr.name, QuotedName):
        return expr.name.expression.lexeme[1:-1]
    return expr.name.name.lexeme


def id_formula(code):
    """Turns the source code of an identifier argument, like ``id = subject``, into ``~subject``.

    Identifiers given as strings, like ``id = "subject"``, are turned into names.
    """
    expr = parse_expression(required(code, "an 'id' argument"))
    if isinstance(expr, Literal) and isinstance(expr.value, str):
        expr = Variable(Token("IDENTIFIER", expr.value))
    return Formula(expr)
