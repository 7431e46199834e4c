"""Extractors for models that use ``|`` to separate the parts of a formula.

Depending on the model, the part after ``|`` holds instruments (``ivreg``, ``plm``), the
zero-inflation model (``zeroinfl``, ``hurdle``), fixed effects, instruments and clusters
(``felm``), or individual slopes (``feis``).
"""
from modelinsight.formula import Formula
from modelinsight.formula_set import FormulaSet

from .registry import (
    as_formula,
    id_formula,
    is_zero,
    join_parts,
    register_extractor,
    required,
    split_parts,
)


def split_first(formula):
    """Splits a formula on its first top-level ``|``.

    Returns
    -------
    tuple
        The formula with the part before ``|`` and a one-sided formula with the rest. The second
        element is ``None`` when there's no ``|``.
    """
    parts = split_parts(formula)
    first = Formula(parts[0], formula.lhs)
    if len(parts) == 1:
        return first, None
    return first, Formula(join_parts(parts[1:]))


@register_extractor("ivreg", "iv_robust", "plm", "pgmm")
def instruments(model, capabilities):  # pylint: disable = unused-argument
    """``y ~ x + z | w + z``. Instruments can be written relative to the regressors with ``.``,
    as in ``y ~ x + z | . - x + w``."""
    formula = as_formula(required(model.formula, "a formula"))
    conditional, instr = split_first(formula)
    if instr is not None:
        instr = instr.update(conditional)
    return FormulaSet(conditional=conditional, instruments=instr)


@register_extractor("zeroinfl", "hurdle", "zerotrunc")
def zero_inflated(model, capabilities):  # pylint: disable = unused-argument
    """``y ~ x | z``, where ``z`` are the predictors of the zero-inflation model.

    Without ``|`` the same predictors are used in both parts of the model, so
    only the conditional formula is reported.
    """
    formula = as_formula(required(model.formula, "a formula"))
    conditional, zi_formula = split_first(formula)
    return FormulaSet(conditional=conditional, zero_inflated=zi_formula)


@register_extractor("felm")
def felm(model, capabilities):  # pylint: disable = unused-argument
    """``y ~ x | fixed effects | (endogenous ~ instruments) | clusters``.

    Unused parts are written as ``0``, they are not reported.
    """
    formula = as_formula(required(model.formula, "a formula"))
    parts = split_parts(formula)
    optional = [None if is_zero(part) else part for part in parts[1:4]]
    random, instr, cluster = optional + [None] * (3 - len(optional))
    return FormulaSet(
        conditional=Formula(parts[0], formula.lhs),
        random=None if random is None else Formula(random),
        instruments=None if instr is None else Formula.from_expr(instr),
        cluster=None if cluster is None else Formula(cluster),
    )


@register_extractor("feis")
def feis(model, capabilities):  # pylint: disable = unused-argument
    """``y ~ x | slopes`` and the individual identifier in the ``id`` argument."""
    formula = as_formula(required(model.formula, "a formula"))
    conditional, slopes = split_first(formula)
    return FormulaSet(
        conditional=conditional,
        slopes=slopes,
        random=id_formula(model.call.get("id")),
    )
