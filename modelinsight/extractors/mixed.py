"""Extractors for models that write group-specific terms within the formula, as in
``y ~ x + (1 | g)``. The group-specific terms are found with the ``"bars"`` capability."""
from modelinsight.formula_set import FormulaSet

from .registry import as_formula, register_extractor, required, split_random

BAR_SCAN_KINDS = (
    "merMod",
    "lmerMod",
    "glmerMod",
    "nlmerMod",
    "lmerModLmerTest",
    "rlmerMod",
    "mixed",
    "clmm",
    "coxme",
    "stanreg",
)


@register_extractor(*BAR_SCAN_KINDS, requires=("bars",))
def bar_scan(model, capabilities):
    formula = as_formula(required(model.formula, "a formula"))
    conditional, random = split_random(formula, capabilities["bars"])
    return FormulaSet(conditional=conditional, random=random)


@register_extractor("glmmTMB", requires=("bars",))
def glmmtmb(model, capabilities):
    """Conditional, zero-inflated and dispersion formulas are stored separately.

    The zero-inflated and dispersion formulas default to ``~0`` or ``~1`` when they are not used,
    these are not reported.
    """
    bars = capabilities["bars"]
    formula = as_formula(required(model.slot("cond", model.formula), "a conditional formula"))
    conditional, random = split_random(formula, bars)

    zi_formula = _non_trivial(model.slot("zi"))
    zero_inflated, zi_random = None, None
    if zi_formula is not None:
        zero_inflated, zi_random = split_random(zi_formula, bars)

    return FormulaSet(
        conditional=conditional,
        random=random,
        zero_inflated=zero_inflated,
        zero_inflated_random=zi_random,
        dispersion=_non_trivial(model.slot("disp")),
    )


def _non_trivial(value):
    formula = as_formula(value)
    if formula is None or formula.is_trivial:
        return None
    return formula
