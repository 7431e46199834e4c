import logging

from .clean import clean_names
from .config import config
from .data import get_data, get_predictors, get_response
from .extractors import Capabilities, find_formula
from .filters import VariableFilter
from .formula import Formula
from .formula_set import FormulaSet, MultivariateFormulaSet
from .model import FittedModel
from .model_info import is_multivariate, link_function, link_inverse, model_info, n_obs
from .parameters import find_parameters, get_parameters
from .random import find_random, get_random
from .variables import find_predictors, find_response, find_terms, find_variables
from .version import __version__

__all__ = [
    "config",
    "clean_names",
    "find_formula",
    "find_predictors",
    "find_response",
    "find_terms",
    "find_variables",
    "find_random",
    "get_random",
    "find_parameters",
    "get_parameters",
    "get_data",
    "get_predictors",
    "get_response",
    "model_info",
    "n_obs",
    "link_function",
    "link_inverse",
    "is_multivariate",
    "Capabilities",
    "FittedModel",
    "Formula",
    "FormulaSet",
    "MultivariateFormulaSet",
    "VariableFilter",
    "__version__",
]

_log = logging.getLogger("modelinsight")

if not logging.root.handlers:
    _log.setLevel(logging.INFO)
    if len(_log.handlers) == 0:
        handler = logging.StreamHandler()
        _log.addHandler(handler)
