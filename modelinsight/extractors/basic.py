"""Extractors for models that store their formulas in dedicated fields."""
from modelinsight.formula_set import FormulaSet, MalformedFormulaError

from .registry import as_formula, call_argument, id_formula, register_extractor, required

DIRECT_KINDS = (
    "default",
    "lm",
    "glm",
    "aov",
    "aovlist",
    "betareg",
    "biglm",
    "censReg",
    "clm",
    "coxph",
    "crq",
    "gam",
    "glmrob",
    "htest",
    "lm_robust",
    "lmrob",
    "lrm",
    "multinom",
    "negbin",
    "polr",
    "rq",
    "speedglm",
    "survreg",
    "truncreg",
    "vglm",
)


@register_extractor(*DIRECT_KINDS)
def direct(model, capabilities):  # pylint: disable = unused-argument
    """The model has a single formula for its fixed effects."""
    return FormulaSet(conditional=required(model.formula, "a formula"))


@register_extractor("clm2")
def location_formula(model, capabilities):  # pylint: disable = unused-argument
    return FormulaSet(conditional=required(model.slot("location"), "a location formula"))


@register_extractor("gamm")
def gam_part(model, capabilities):  # pylint: disable = unused-argument
    # The 'lme' part of these models is an implementation detail, the formula is in 'gam'
    return FormulaSet(conditional=required(model.slot("gam"), "a 'gam' formula"))


@register_extractor("tobit")
def call_formula(model, capabilities):  # pylint: disable = unused-argument
    return FormulaSet(conditional=required(model.call.get("formula"), "a 'formula' argument"))


@register_extractor("BFBayesFactor")
def bayes_factor(model, capabilities):  # pylint: disable = unused-argument
    if model.get("model_type") != "linear":
        raise MalformedFormulaError("Only linear Bayes factor models have a formula.")
    return FormulaSet(conditional=required(model.formula, "a formula"))


def correlation_formula(code):
    """The ``form`` argument of a correlation structure, like ``corAR1(form = ~ 1 | Mare)``.

    It's ``None`` when the structure uses its default form, so implicit structures are not
    reported.
    """
    return as_formula(call_argument(code, "form"))


@register_extractor("lme")
def lme(model, capabilities):  # pylint: disable = unused-argument
    fixed = model.call.get("fixed", model.formula)
    return FormulaSet(
        conditional=required(fixed, "a 'fixed' argument"),
        random=model.call.get("random"),
        correlation=correlation_formula(model.call.get("correlation")),
    )


@register_extractor("gls")
def gls(model, capabilities):  # pylint: disable = unused-argument
    conditional = model.formula if model.formula is not None else model.call.get("model")
    return FormulaSet(
        conditional=required(conditional, "a formula"),
        correlation=correlation_formula(model.call.get("correlation")),
    )


@register_extractor("MCMCglmm")
def mcmcglmm(model, capabilities):  # pylint: disable = unused-argument
    return FormulaSet(
        conditional=required(model.slot("fixed"), "a 'fixed' formula"),
        random=model.slot("random"),
    )


@register_extractor("MixMod")
def mixmod(model, capabilities):  # pylint: disable = unused-argument
    return FormulaSet(
        conditional=required(model.slot("fixed"), "a 'fixed' formula"),
        random=model.slot("random"),
        zero_inflated=model.slot("zi_fixed"),
        zero_inflated_random=model.slot("zi_random"),
    )


@register_extractor("gee", "geeglm")
def gee(model, capabilities):  # pylint: disable = unused-argument
    """The grouping factor is passed in the 'id' argument, not in the formula."""
    return FormulaSet(
        conditional=required(model.formula, "a formula"),
        random=id_formula(model.call.get("id")),
    )


@register_extractor("gamlss")
def gamlss(model, capabilities):  # pylint: disable = unused-argument
    sigma = as_formula(model.slot("sigma"))
    if sigma is not None and sigma.is_trivial:
        sigma = None
    return FormulaSet(
        conditional=required(model.slot("mu"), "a 'mu' formula"),
        dispersion=sigma,
    )
