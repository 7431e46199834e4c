import numpy as np
import pandas as pd

from .filters import COMPONENTS
from .utils import unique


def _names(values):
    if isinstance(values, pd.Series):
        return [str(name) for name in values.index]
    if isinstance(values, dict):
        return [str(name) for name in values]
    if isinstance(values, str):
        return [values]
    return [str(name) for name in values]


def _estimates(values):
    if isinstance(values, pd.Series):
        return values.to_numpy(dtype=float)
    if isinstance(values, dict):
        return np.asarray(list(values.values()), dtype=float)
    return np.full(len(_names(values)), np.nan)


def _by_component(parameters):
    """Maps component names to their parameters, conditional component for plain collections."""
    if parameters is None:
        return {}
    if isinstance(parameters, dict) and all(
        isinstance(value, (pd.Series, dict, list, tuple, np.ndarray))
        for value in parameters.values()
    ):
        known = [name for name in COMPONENTS if name in parameters]
        others = [name for name in parameters if name not in COMPONENTS]
        return {name: parameters[name] for name in known + others}
    return {"conditional": parameters}


def find_parameters(model, flatten=False):
    """Find names of model parameters

    Returns the names of the model parameters, as named by the modeling library. Names reflect how
    predictors are encoded, e.g. ``"factor(year)82"``, which can't be deduced from the formula.

    Parameters
    ----------
    model: FittedModel
        A fitted model.
    flatten: bool
        If ``True``, the result is a list of unique names.

    Returns
    -------
    dict, list, or None
        A dict that maps model components, like ``"conditional"`` or ``"random"``, to the names of
        their parameters. ``None`` if the model has no information about its parameters.
    """
    result = {}
    for name, values in _by_component(getattr(model, "parameters", None)).items():
        names = _names(values)
        if names:
            result[name] = names

    if not result:
        return None
    if flatten:
        return unique([name for names in result.values() for name in names])
    return result


def get_parameters(model, component="conditional"):
    """Get the model parameters

    Returns
    -------
    pd.DataFrame
        A data frame with the ``"parameter"`` names and their ``"estimate"``. Estimates are
        ``NaN`` when the model only provides names.
    """
    parameters = _by_component(getattr(model, "parameters", None))
    if component == "all":
        frames = [
            pd.DataFrame(
                {
                    "parameter": _names(values),
                    "estimate": _estimates(values),
                    "component": name,
                }
            )
            for name, values in parameters.items()
        ]
        if not frames:
            return pd.DataFrame(columns=["parameter", "estimate", "component"])
        return pd.concat(frames, ignore_index=True)

    values = parameters.get(component)
    if values is None:
        return pd.DataFrame(columns=["parameter", "estimate"])
    return pd.DataFrame({"parameter": _names(values), "estimate": _estimates(values)})
