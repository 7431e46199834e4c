import logging

import pandas as pd

from modelinsight.formula_set import MalformedFormulaError
from modelinsight.parser import ParseError
from modelinsight.scanner import ScanError

from . import basic, bayesian, mixed, panel
from .registry import (
    EXTRACTORS,
    Capabilities,
    MissingDependencyError,
    UnsupportedModelKind,
    get_extractor,
    register_extractor,
)

_log = logging.getLogger("modelinsight")

# Errors raised while a formula is read or parsed
MALFORMED = (ScanError, ParseError, MalformedFormulaError, KeyError, TypeError, ValueError)


def find_formula(model, capabilities=None):
    """Find model formula

    Returns the formula(s) for the different parts of a model (like fixed or random effects,
    zero-inflated component, ...).

    Parameters
    ----------
    model: FittedModel
        A fitted model.
    capabilities: Capabilities
        Parsing tools the extractors can use. Defaults to ``Capabilities()``.

    Returns
    -------
    FormulaSet, MultivariateFormulaSet or None
        A dict-like object with the formulas that describe the model. For simple models, only one
        element, ``conditional``, is returned. More complex models may have ``random``,
        ``zero_inflated``, ``zero_inflated_random``, ``dispersion``, ``instruments``, ``cluster``,
        ``slopes`` and ``correlation`` elements. Multivariate models return one set of formulas
        per response. ``None`` when the formula can't be reconstructed.

    Raises
    ------
    MissingDependencyError
        If the extractor for the model needs a capability that is not available.
    """
    if isinstance(model, pd.DataFrame):
        raise TypeError("A data frame is no valid object for this function")

    kind = getattr(model, "kind", None)
    try:
        extractor = get_extractor(kind)
    except UnsupportedModelKind as error:
        _log.debug("%s", error)
        return None

    if capabilities is None:
        capabilities = Capabilities()

    try:
        return extractor(model, capabilities)
    except MALFORMED as error:
        _log.debug("Could not extract the formula of a '%s' model: %s", kind, error)
        return None


__all__ = [
    "EXTRACTORS",
    "Capabilities",
    "MissingDependencyError",
    "UnsupportedModelKind",
    "find_formula",
    "get_extractor",
    "register_extractor",
    "basic",
    "bayesian",
    "mixed",
    "panel",
]
