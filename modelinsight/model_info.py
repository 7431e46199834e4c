import logging

import numpy as np

from scipy import special
from scipy.stats import cauchy, norm

from .extractors import find_formula

_log = logging.getLogger("modelinsight")

# Family used when the model does not declare one
KIND_FAMILIES = {
    "betareg": "beta",
    "negbin": "negative binomial",
    "polr": "cumulative",
    "clm": "cumulative",
    "clm2": "cumulative",
    "clmm": "cumulative",
    "multinom": "categorical",
    "lrm": "binomial",
    "coxph": "cox",
    "coxme": "cox",
    "survreg": "weibull",
    "zeroinfl": "poisson",
    "hurdle": "poisson",
    "zerotrunc": "poisson",
    "glm": "gaussian",
    "glmerMod": "gaussian",
}

DEFAULT_LINKS = {
    "gaussian": "identity",
    "binomial": "logit",
    "quasibinomial": "logit",
    "bernoulli": "logit",
    "poisson": "log",
    "quasipoisson": "log",
    "negative binomial": "log",
    "beta": "logit",
    "gamma": "inverse",
    "inverse.gaussian": "1/mu^2",
    "cumulative": "logit",
    "categorical": "logit",
    "cox": "log",
    "weibull": "log",
    "student": "identity",
}

FAMILY_ALIASES = {
    "normal": "gaussian",
    "quasi": "gaussian",
    "negbinomial": "negative binomial",
    "negative_binomial": "negative binomial",
    "nbinom1": "negative binomial",
    "nbinom2": "negative binomial",
    "beta regression": "beta",
    "multinomial": "categorical",
    "ordinal": "cumulative",
    "sratio": "cumulative",
    "cratio": "cumulative",
    "acat": "cumulative",
}

BINOMIAL_FAMILIES = ("binomial", "quasibinomial", "bernoulli")
COUNT_FAMILIES = ("poisson", "quasipoisson", "negative binomial")
ORDINAL_FAMILIES = ("cumulative",)
SURVIVAL_FAMILIES = ("cox", "weibull", "exponential")

BAYESIAN_KINDS = ("brmsfit", "stanreg", "stanmvreg", "MCMCglmm", "BFBayesFactor")
MIXED_KINDS = (
    "merMod",
    "lmerMod",
    "glmerMod",
    "nlmerMod",
    "lmerModLmerTest",
    "rlmerMod",
    "mixed",
    "clmm",
    "coxme",
    "lme",
    "MixMod",
    "MCMCglmm",
    "gamm",
)
ZERO_INFLATED_KINDS = ("zeroinfl", "hurdle")
CENSORED_KINDS = ("censReg", "tobit", "truncreg", "survreg")
SURVIVAL_KINDS = ("coxph", "coxme", "survreg")


def _cloglog(mu):
    return np.log(-np.log(1 - np.asarray(mu)))


def _cloglog_inverse(eta):
    return 1 - np.exp(-np.exp(np.asarray(eta)))


def _inverse(x):
    return 1 / np.asarray(x)


def _inverse_square(mu):
    return 1 / np.asarray(mu) ** 2


def _inverse_square_inverse(eta):
    return 1 / np.sqrt(np.asarray(eta))


def _identity(x):
    return np.asarray(x)


def _square(eta):
    return np.asarray(eta) ** 2


LINKS = {
    "identity": (_identity, _identity),
    "log": (np.log, np.exp),
    "logit": (special.logit, special.expit),
    "probit": (norm.ppf, norm.cdf),
    "cloglog": (_cloglog, _cloglog_inverse),
    "inverse": (_inverse, _inverse),
    "1/mu^2": (_inverse_square, _inverse_square_inverse),
    "sqrt": (np.sqrt, _square),
    "cauchit": (cauchy.ppf, cauchy.cdf),
}

LINK_ALIASES = {"1/mu": "inverse", "mu": "identity"}


class Link:
    """A link function

    Parameters
    ----------
    name: str
        The name of the link, e.g. ``"logit"``.

    Attributes
    ----------
    linkfun: callable or None
        Maps the mean to the linear predictor. ``None`` for unknown links.
    linkinv: callable or None
        Maps the linear predictor to the mean. ``None`` for unknown links.
    """

    def __init__(self, name):
        self.name = name
        key = LINK_ALIASES.get(name, name)
        self.linkfun, self.linkinv = LINKS.get(key, (None, None))

    @property
    def is_known(self):
        return self.linkfun is not None

    def __eq__(self, other):
        if isinstance(other, str):
            return self.name == other
        if not isinstance(other, type(self)):
            return False
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return f"{self.__class__.__name__}('{self.name}')"


class Family:
    """A distribution family and its link"""

    def __init__(self, name, link=None):
        self.name = normalize_family(name)
        if link is None:
            link = DEFAULT_LINKS.get(self.name)
        self.link = None if link is None else Link(link)

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self.name == other.name and self.link == other.link

    def __hash__(self):
        return hash((self.name, self.link))

    def __repr__(self):
        return f"{self.__class__.__name__}('{self.name}', link={self.link!r})"


def normalize_family(name):
    """Returns the canonical name of a family, lowercase and without parameters.

    ``"Negative Binomial(1.4)"`` becomes ``"negative binomial"`` and ``"Gamma"`` becomes
    ``"gamma"``.
    """
    if name is None:
        return None
    name = name.strip().lower().split("(")[0].strip()
    for prefix in ("zero_inflated_", "hurdle_"):
        if name.startswith(prefix):
            name = name[len(prefix) :]
    return FAMILY_ALIASES.get(name, name)


def _is_zero_inflated_family(name):
    return name is not None and name.strip().lower().startswith(("zero_inflated_", "hurdle_"))


class ModelInfo:
    """Structural information about a model

    Flags are available both as attributes and as items, ``info.is_mixed`` or
    ``info["is_mixed"]``.
    """

    FLAGS = (
        "is_linear",
        "is_binomial",
        "is_count",
        "is_poisson",
        "is_negbin",
        "is_beta",
        "is_logit",
        "is_probit",
        "is_ordinal",
        "is_categorical",
        "is_zero_inflated",
        "is_mixed",
        "is_multivariate",
        "is_bayesian",
        "is_survival",
        "is_censored",
    )

    def __init__(self, family=None, link_function=None, n_obs=None, **flags):
        unknown = set(flags) - set(ModelInfo.FLAGS)
        if unknown:
            raise KeyError(f"Unknown model information flags: {sorted(unknown)}")
        for flag in ModelInfo.FLAGS:
            setattr(self, flag, bool(flags.get(flag, False)))
        self.family = family
        self.link_function = link_function
        self.n_obs = n_obs

    def __getitem__(self, key):
        if key in ModelInfo.FLAGS or key in ("family", "link_function", "n_obs"):
            return getattr(self, key)
        raise KeyError(f"'{key}' is not a valid model information field")

    def as_dict(self):
        info = {flag: getattr(self, flag) for flag in ModelInfo.FLAGS}
        info["family"] = self.family
        info["link_function"] = self.link_function
        info["n_obs"] = self.n_obs
        return info

    def __repr__(self):  # pragma: no cover
        flags = [flag for flag in ModelInfo.FLAGS if getattr(self, flag)]
        return (
            f"{self.__class__.__name__}(family={self.family!r}, "
            f"link_function={self.link_function!r}, n_obs={self.n_obs}, flags={flags})"
        )


def model_family(model):
    """Returns the ``Family`` of a model, or ``None`` when it can't be determined."""
    name = getattr(model, "family", None) or KIND_FAMILIES.get(model.kind)
    link = getattr(model, "link", None)
    if name is None:
        if link is None:
            # Most models without a declared family are linear regressions
            return Family("gaussian")
        _log.debug("Model of kind '%s' has a link but no family", model.kind)
        return None
    return Family(name, link)


def model_info(model):
    """Access information from model objects

    Classifies a model with a fixed set of boolean flags, like ``is_linear``, ``is_logit`` or
    ``is_mixed``. Unknown combinations of family and link set every family related flag to
    ``False``.

    Parameters
    ----------
    model: FittedModel
        A fitted model.

    Returns
    -------
    ModelInfo
    """
    family = model_family(model)
    name = None if family is None else family.name
    link = None if family is None or family.link is None else family.link.name

    formulas = find_formula(model)
    is_multivariate = formulas is not None and formulas.is_multivariate
    if formulas is None:
        has_random = has_zero_inflated = False
    else:
        sets = list(formulas.values()) if is_multivariate else [formulas]
        has_random = any("random" in formula_set for formula_set in sets)
        has_zero_inflated = any("zero_inflated" in formula_set for formula_set in sets)

    flags = {
        "is_linear": name in ("gaussian", "student") and link == "identity",
        "is_binomial": name in BINOMIAL_FAMILIES,
        "is_count": name in COUNT_FAMILIES,
        "is_poisson": name in ("poisson", "quasipoisson"),
        "is_negbin": name == "negative binomial",
        "is_beta": name == "beta",
        "is_logit": link == "logit",
        "is_probit": link == "probit",
        "is_ordinal": name in ORDINAL_FAMILIES,
        "is_categorical": name == "categorical",
        "is_zero_inflated": (
            model.kind in ZERO_INFLATED_KINDS
            or has_zero_inflated
            or _is_zero_inflated_family(getattr(model, "family", None))
        ),
        "is_mixed": model.kind in MIXED_KINDS or has_random,
        "is_multivariate": is_multivariate,
        "is_bayesian": model.kind in BAYESIAN_KINDS,
        "is_survival": model.kind in SURVIVAL_KINDS or name in SURVIVAL_FAMILIES,
        "is_censored": model.kind in CENSORED_KINDS,
    }
    return ModelInfo(
        family=family,
        link_function=None if family is None else family.link,
        n_obs=n_obs(model),
        **flags,
    )


def n_obs(model):
    """Number of observations used to fit the model, ``None`` if unknown."""
    return getattr(model, "n_obs", None)


def link_function(model):
    """Returns the link function of a model, the function from the mean to the linear predictor.

    ``None`` if the link is unknown.
    """
    family = model_family(model)
    if family is None or family.link is None:
        return None
    return family.link.linkfun


def link_inverse(model):
    """Returns the inverse link function of a model, from the linear predictor to the mean.

    ``None`` if the link is unknown.
    """
    family = model_family(model)
    if family is None or family.link is None:
        return None
    return family.link.linkinv


def is_multivariate(model):
    """Checks if a model has more than one response"""
    formulas = find_formula(model)
    return formulas is not None and formulas.is_multivariate
