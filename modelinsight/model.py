import numpy as np
import pandas as pd


class FittedModel:
    """Read-only description of a model fitted by some modeling library.

    ``modelinsight`` never fits models. It reads the structural metadata a fitted model carries,
    which is passed in through this object. Adapters for a modeling library create a
    ``FittedModel`` filling the fields that library provides.

    Parameters
    ----------
    kind: str
        The model family tag, e.g. ``"lme"``, ``"glmerMod"``, ``"plm"`` or ``"brmsfit"``. It
        selects how the formula is extracted.
    formula: str or dict
        The formula of the model. Models that store several formulas pass a dict that maps the
        name of each formula slot (e.g. ``"cond"``, ``"zi"``, ``"disp"``) to its source code.
    call: dict
        The arguments of the call that created the model, mapped to their source code. For example
        ``{"fixed": "Reaction ~ Days", "random": "~ 1 + Days | Subject"}``.
    data: pd.DataFrame
        The data used to fit the model.
    family: str
        Name of the distribution family, e.g. ``"gaussian"`` or ``"binomial"``.
    link: str
        Name of the link function, e.g. ``"identity"`` or ``"logit"``.
    parameters: dict, pd.Series, or sequence
        Names of the parameters of the model. A dict maps model components to the names of their
        parameters. A ``pd.Series`` (index = names, values = estimates) or a plain sequence of
        names are taken as the parameters of the conditional component.
    n_obs: int
        Number of observations used to fit the model.
    residuals: array-like
        Residuals of the model. Used to count observations when ``n_obs`` is not given.
    **fields:
        Any other model-specific metadata, e.g. ``model_type`` for Bayes factor objects.
    """

    def __init__(
        self,
        kind,
        formula=None,
        call=None,
        data=None,
        family=None,
        link=None,
        parameters=None,
        n_obs=None,
        residuals=None,
        **fields,
    ):
        if not isinstance(kind, str) or not kind:
            raise ValueError("'kind' must be a non-empty string.")
        if data is not None and not isinstance(data, pd.DataFrame):
            raise ValueError(f"'data' must be a pandas DataFrame, not {type(data).__name__}.")

        self.kind = kind
        self.formula = formula
        self.call = {} if call is None else dict(call)
        self.data = data
        self.family = family
        self.link = link
        self.parameters = parameters
        self._n_obs = n_obs
        self.residuals = residuals
        self.fields = fields

    def __repr__(self):  # pragma: no cover
        return f"{self.__class__.__name__}(kind='{self.kind}')"

    def slot(self, name, default=None):
        """Returns one of the formula slots of a model that stores more than one formula."""
        if isinstance(self.formula, dict):
            return self.formula.get(name, default)
        return default

    def get(self, name, default=None):
        """Returns a model-specific field."""
        return self.fields.get(name, default)

    @property
    def n_obs(self):
        """Number of observations.

        Taken from ``n_obs`` when given, otherwise from the number of residuals, and finally from
        the number of rows in the data. ``None`` when none of them is available.
        """
        if self._n_obs is not None:
            return int(self._n_obs)
        if self.residuals is not None:
            return int(np.size(self.residuals))
        if self.data is not None:
            return int(self.data.shape[0])
        return None
