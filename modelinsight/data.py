import logging

from .filters import VariableFilter
from .random import find_random
from .utils import unique
from .variables import find_predictors, find_response, find_terms

_log = logging.getLogger("modelinsight")


def _model_data(model):
    data = getattr(model, "data", None)
    if data is None:
        raise ValueError("The model does not carry the data used to fit it.")
    return data


def _select(data, names):
    missing = [name for name in names if name not in data.columns]
    if missing:
        _log.debug("Variables not found in the model data: %s", ", ".join(missing))
    return data.loc[:, [name for name in names if name in data.columns]]


def get_data(model):
    """Get the data used to fit a model

    Only the columns of the variables used in the model are returned, in the order given by
    ``find_terms(model, flatten=True)``. Grouping factors of nested random effects are included.
    """
    data = _model_data(model)
    names = find_terms(model, flatten=True) or []
    names = unique(names + (find_random(model, split_nested=True, flatten=True) or []))
    return _select(data, names)


def get_response(model):
    """Get the values of the response

    Returns a ``pd.Series``, or a ``pd.DataFrame`` for responses made of more than one variable.
    """
    data = _model_data(model)
    response = find_response(model, combine=False)
    if not response:
        raise ValueError("The model does not have a response.")
    if isinstance(response, str):
        return data[response]
    if len(response) == 1:
        return data[response[0]]
    return _select(data, response)


def get_predictors(model):
    """Get the data of the fixed effects predictors"""
    data = _model_data(model)
    names = find_predictors(model, VariableFilter("fixed", "all"), flatten=True) or []
    return _select(data, names)
