"""Extractors for Bayesian models, including multivariate models with one formula per response."""
from modelinsight.clean import clean_name
from modelinsight.formula import Formula
from modelinsight.formula_set import FormulaSet, MalformedFormulaError, MultivariateFormulaSet

from .registry import as_formula, register_extractor, required, split_random


def brms_formula(formulas, bars):
    """Decomposes the formula of one response of a ``brmsfit`` model.

    ``formulas`` maps ``"formula"`` to the main formula and, optionally, ``"zi"`` to the formula of
    the zero-inflation parameter. The latter can be written as ``zi ~ z`` or ``~ z``.
    """
    if isinstance(formulas, str):
        formulas = {"formula": formulas}
    formula = as_formula(required(formulas.get("formula"), "a formula"))
    conditional, random = split_random(formula, bars)

    zero_inflated, zi_random = None, None
    zi_formula = as_formula(formulas.get("zi"))
    if zi_formula is not None:
        zero_inflated, zi_random = split_random(Formula(zi_formula.rhs), bars)

    return FormulaSet(
        conditional=conditional,
        random=random,
        zero_inflated=zero_inflated,
        zero_inflated_random=zi_random,
    )


@register_extractor("brmsfit", requires=("bars",))
def brmsfit(model, capabilities):
    bars = capabilities["bars"]
    forms = model.slot("forms")
    if forms is None:
        return brms_formula(required(model.formula, "a formula"), bars)

    # Multivariate model, one set of formulas per response
    if isinstance(forms, dict):
        formula_sets = {
            response: brms_formula(formulas, bars) for response, formulas in forms.items()
        }
    else:
        formula_sets = _by_response([brms_formula(formulas, bars) for formulas in forms])
    return MultivariateFormulaSet(formula_sets)


@register_extractor("stanmvreg", requires=("bars",))
def stanmvreg(model, capabilities):
    bars = capabilities["bars"]
    formulas = required(model.formula, "formulas")
    if isinstance(formulas, dict):
        formulas = list(formulas.values())
    formula_sets = []
    for formula in formulas:
        conditional, random = split_random(as_formula(formula), bars)
        formula_sets.append(FormulaSet(conditional=conditional, random=random))
    return MultivariateFormulaSet(_by_response(formula_sets))


def _by_response(formula_sets):
    result = {}
    for formula_set in formula_sets:
        response = formula_set.conditional.response
        if response is None:
            raise MalformedFormulaError("Multivariate models need a response in every formula.")
        result[clean_name(response)] = formula_set
    return result
