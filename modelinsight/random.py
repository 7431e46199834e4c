import logging
import warnings

from .config import config
from .extractors import find_formula
from .filters import InvalidFilterArgument
from .utils import unique
from .variables import grouping_factors

_log = logging.getLogger("modelinsight")

EFFECTS = ("random", "all", "fixed")

RANDOM_PARTS = {
    "all": ("random", "zero_inflated_random"),
    "conditional": ("random",),
    "zi": ("zero_inflated_random",),
    "zero_inflated": ("zero_inflated_random",),
}


class NoRandomStructureWarning(UserWarning):
    pass


class NoRandomStructureError(Exception):
    pass


def _random(formula_set, parts, split_nested):
    result = {}
    for name in parts:
        names = grouping_factors(formula_set.formulas(name), split_nested=split_nested)
        if names:
            result[name] = names
    return result


def find_random(model, split_nested=False, effects="random", component="all", flatten=False):
    """Find names of the random effects

    Returns the names of the grouping factors of the random effects of a model.

    Parameters
    ----------
    model: FittedModel
        A fitted model.
    split_nested: bool
        Nested random effects like ``(1 | a:b)`` have ``"a:b"`` as grouping factor. If
        ``split_nested=True`` it is split into ``"a"`` and ``"b"``, and each name is returned
        once.
    effects: str
        ``"random"`` or ``"all"`` return the grouping factors. ``"fixed"`` asks for no random
        effects, so the result is ``None``.
    component: str
        ``"all"``, ``"conditional"`` for the random effects of the conditional model, or
        ``"zi"``/``"zero_inflated"`` for the random effects of the zero-inflation model.
    flatten: bool
        If ``True``, the result is a list of unique names.

    Returns
    -------
    dict, list, or None
        A dict with the ``"random"`` and ``"zero_inflated_random"`` names, or ``None`` if the
        model has no random effects.

    Examples
    --------
    For ``SURENESS ~ PROD + (1 | RESP) + (1 | RESP:PROD)``:

    >>> find_random(model)
    {'random': ['RESP', 'RESP:PROD']}
    >>> find_random(model, split_nested=True)
    {'random': ['RESP', 'PROD']}
    """
    if effects not in EFFECTS:
        raise InvalidFilterArgument(
            f"'{effects}' is not a valid value for 'effects'. "
            f"Valid values are: {', '.join(repr(choice) for choice in EFFECTS)}."
        )
    if component not in RANDOM_PARTS:
        raise InvalidFilterArgument(
            f"'{component}' is not a valid value for 'component'. "
            f"Valid values are: {', '.join(repr(choice) for choice in RANDOM_PARTS)}."
        )
    if effects == "fixed":
        return None

    formulas = find_formula(model)
    if formulas is None:
        return None

    parts = RANDOM_PARTS[component]
    if formulas.is_multivariate:
        result = {}
        for response, formula_set in formulas.items():
            random = _random(formula_set, parts, split_nested)
            if random:
                result[response] = random
    else:
        result = _random(formulas, parts, split_nested)

    if not result:
        return None
    if flatten:
        return unique(list(_flat_names(result)))
    return result


def _flat_names(result):
    for value in result.values():
        if isinstance(value, dict):
            yield from _flat_names(value)
        else:
            yield from value


def get_random(model):
    """Get the data from random effects

    Returns the columns of the model data that hold the grouping factors of the random effects.
    Nested grouping factors are split, so ``(1 | RESP:PROD)`` contributes ``RESP`` and ``PROD``.

    If the model has no random effects the model is returned unchanged. Depending on the
    ``NO_RANDOM_STRUCTURE`` configuration option, a ``NoRandomStructureWarning`` is issued
    (``"warning"``, default), a ``NoRandomStructureError`` is raised (``"error"``), or nothing
    happens (``"silent"``).
    """
    names = find_random(model, split_nested=True, flatten=True)
    if not names:
        message = "No random effects found in model."
        if config.NO_RANDOM_STRUCTURE == "error":
            raise NoRandomStructureError(message)
        if config.NO_RANDOM_STRUCTURE == "warning":
            warnings.warn(message, NoRandomStructureWarning)
        return model

    data = getattr(model, "data", None)
    if data is None:
        raise ValueError("The model does not carry the data used to fit it.")

    missing = [name for name in names if name not in data.columns]
    if missing:
        _log.warning("Grouping factors not found in the model data: %s", ", ".join(missing))
    return data.loc[:, [name for name in names if name in data.columns]]
