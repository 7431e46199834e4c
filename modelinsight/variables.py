from .clean import clean_name
from .expr import Binary, Call
from .extractors import find_formula
from .filters import COMPONENTS, RANDOM_COMPONENTS, as_filter
from .printer import deparse
from .terms import all_vars, term_components
from .utils import unique

# Responses made of more than one variable
MULTI_RESPONSES = ("cbind", "mvbind", "Surv", "Pair", "Hist")

# The fixed part whose variables are not repeated as grouping factors of a random part
FIXED_PART = {"random": "conditional", "zero_inflated_random": "zero_inflated"}


def formula_variables(formula, include_lhs=False):
    """Returns the variables of a formula as written, duplicates included.

    The left-hand side is only included with ``include_lhs=True``, used for instruments written
    as ``endogenous ~ instruments``.
    """
    names = []
    if include_lhs and formula.lhs is not None:
        names.extend(term_components(formula.lhs))
    names.extend(term_components(formula.rhs))
    return names


def grouping_factors(formulas, split_nested=False):
    """Names of the grouping factors in a list of random effects formulas.

    With ``split_nested=True``, nested grouping factors like ``"a:b"`` or ``"a/b"`` are split into
    ``"a"`` and ``"b"``.
    """
    names = []
    for formula in formulas:
        for name in term_components(formula.rhs):
            name = clean_name(name)
            if split_nested:
                names.extend(_split_nested(name))
            else:
                names.append(name)
    return unique([name for name in names if name])


def _split_nested(name):
    return [part.strip() for part in name.replace("/", ":").split(":") if part.strip()]


def _predictors(formula_set, model_filter, flatten):
    fixed = {}
    result = {}
    for name in COMPONENTS:
        if name not in formula_set or name in RANDOM_COMPONENTS:
            continue
        names = []
        for formula in formula_set.formulas(name):
            variables = formula_variables(formula, include_lhs=(name == "instruments"))
            names.extend(clean_name(variable) for variable in variables)
        fixed[name] = unique([variable for variable in names if variable])

    for name in model_filter.elements:
        if name not in formula_set:
            continue
        if name in RANDOM_COMPONENTS:
            exclude = fixed.get(FIXED_PART[name], [])
            names = grouping_factors(formula_set.formulas(name), split_nested=True)
            names = [variable for variable in names if variable not in exclude]
        else:
            names = fixed[name]
        if names:
            result[name] = names

    if not result:
        return None
    if flatten:
        return unique([variable for names in result.values() for variable in names])
    return result


def find_predictors(model, effects="fixed", component="all", flatten=False):
    """Find names of model predictors

    Returns the names of the predictor variables for the different parts of a model (like fixed
    or random effects, zero-inflated component, ...). Transformations like ``log()`` are removed,
    so each variable is listed once per component.

    Parameters
    ----------
    model: FittedModel
        A fitted model.
    effects: str
        Should variables for fixed effects (``"fixed"``), random effects (``"random"``) or both
        (``"all"``) be returned?
    component: str
        Which type of parameters to return: ``"all"``, ``"conditional"``, ``"zi"`` or
        ``"zero_inflated"``, ``"dispersion"`` or ``"instruments"``. Only applies to models with
        zero-inflated, dispersion or instruments components.
    flatten: bool
        If ``True``, the result is a list of unique variable names.

    Returns
    -------
    dict, list, or None
        A dict mapping model components (``"conditional"``, ``"random"``, ``"zero_inflated"``,
        ...) to lists of names. ``None`` if the model has no predictors of the requested kind.
        Multivariate models return one result per response.
    """
    model_filter = as_filter(effects, component)
    formulas = find_formula(model)
    if formulas is None:
        return None

    if formulas.is_multivariate:
        result = {}
        for response, formula_set in formulas.items():
            predictors = _predictors(formula_set, model_filter, flatten)
            if predictors is not None:
                result[response] = predictors
        if not result:
            return None
        if flatten:
            return unique([name for names in result.values() for name in names])
        return result

    return _predictors(formulas, model_filter, flatten)


def _response(formula, combine):
    if formula.lhs is None:
        return None
    lhs = formula.lhs
    if _is_multi_response(lhs):
        if combine:
            return deparse(lhs)
        return unique([name for name in all_vars(lhs) if name])
    return clean_name(deparse(lhs))


def _is_multi_response(lhs):
    if isinstance(lhs, Call):
        return lhs.name.split("::")[-1] in MULTI_RESPONSES
    # Proportions, as in 'successes/trials'
    return isinstance(lhs, Binary) and lhs.operator.kind == "SLASH"


def find_response(model, combine=True):
    """Find name of the response variable

    Parameters
    ----------
    model: FittedModel
        A fitted model.
    combine: bool
        Should responses made of several variables, like ``cbind(success, failure)``, be combined
        into a single name? If ``False``, the names of the variables are returned.

    Returns
    -------
    str, list, or None
        The name of the response. A list when ``combine=False`` and the response is made of more
        than one variable, and for multivariate models.
    """
    formulas = find_formula(model)
    if formulas is None:
        return None

    if formulas.is_multivariate:
        responses = []
        for formula_set in formulas.values():
            response = _response(formula_set.conditional, combine)
            responses.extend(response if isinstance(response, list) else [response])
        return unique([response for response in responses if response])

    return _response(formulas.conditional, combine)


def find_terms(model, effects="all", component="all", flatten=False):
    """Find names of all model terms

    Returns the names of all model terms, including the response and random effects.

    The difference with ``find_variables()`` is that ``find_terms()`` returns each variable only
    once, without transformations, while ``find_variables()`` may return a variable multiple times
    in case of multiple transformations.

    Parameters
    ----------
    See ``find_predictors()``. By default, both fixed and random effects are included.

    Returns
    -------
    dict, list, or None
        A dict with a ``"response"`` entry followed by the entries of ``find_predictors()``, or
        a list of unique names, response first, when ``flatten=True``.
    """
    model_filter = as_filter(effects, component)
    formulas = find_formula(model)
    if formulas is None:
        return None

    if formulas.is_multivariate:
        result = {}
        for response, formula_set in formulas.items():
            model_terms = _terms(formula_set, model_filter, flatten)
            if model_terms is not None:
                result[response] = model_terms
        if flatten:
            return unique([name for names in result.values() for name in names]) or None
        return result or None

    return _terms(formulas, model_filter, flatten)


def _terms(formula_set, model_filter, flatten):
    response = None
    if model_filter.component in ("all", "conditional"):
        response = _response(formula_set.conditional, combine=False)
        if isinstance(response, str):
            response = [response]

    predictors = _predictors(formula_set, model_filter, flatten)

    if flatten:
        return unique((response or []) + (predictors or [])) or None
    if response is None:
        return predictors
    return {"response": response, **(predictors or {})}


def find_variables(model, effects="all", component="all", flatten=False):
    """Find names of all variables, as written in the formula

    Unlike ``find_terms()``, transformations are kept and a variable is returned once per
    occurrence. For ``log(Reaction) ~ Days + I(Days^2)`` the result is
    ``{"response": ["log(Reaction)"], "conditional": ["Days", "I(Days^2)"]}``.

    Grouping factors of random effects are returned as written, nested factors are not split.
    """
    model_filter = as_filter(effects, component)
    formulas = find_formula(model)
    if formulas is None:
        return None

    if formulas.is_multivariate:
        result = {}
        for response, formula_set in formulas.items():
            variables = _variables(formula_set, model_filter)
            if variables:
                result[response] = variables
        if flatten:
            names = [name for r in result.values() for values in r.values() for name in values]
            return unique(names) or None
        return result or None

    result = _variables(formulas, model_filter)
    if flatten:
        return unique([name for names in result.values() for name in names]) or None
    return result or None


def _variables(formula_set, model_filter):
    result = {}
    response = formula_set.conditional.lhs
    if model_filter.component in ("all", "conditional") and response is not None:
        result["response"] = [deparse(response)]
    for name in model_filter.elements:
        names = []
        for formula in formula_set.formulas(name):
            if name in RANDOM_COMPONENTS:
                names.extend(term_components(formula.rhs))
            else:
                names.extend(formula_variables(formula, include_lhs=(name == "instruments")))
        if names:
            result[name] = names
    return result
