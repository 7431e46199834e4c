import numpy as np
import pandas as pd

from modelinsight.model import FittedModel
from modelinsight.parameters import find_parameters, get_parameters


def test_find_parameters_names():
    model = FittedModel("lm", formula="y ~ x", parameters=["(Intercept)", "x"])
    assert find_parameters(model) == {"conditional": ["(Intercept)", "x"]}
    assert find_parameters(model, flatten=True) == ["(Intercept)", "x"]


def test_find_parameters_series():
    estimates = pd.Series([1.5, -0.2], index=["(Intercept)", "x"])
    model = FittedModel("lm", formula="y ~ x", parameters=estimates)
    assert find_parameters(model) == {"conditional": ["(Intercept)", "x"]}

    parameters = get_parameters(model)
    assert list(parameters.columns) == ["parameter", "estimate"]
    assert list(parameters["parameter"]) == ["(Intercept)", "x"]
    assert np.allclose(parameters["estimate"], [1.5, -0.2])


def test_find_parameters_components():
    model = FittedModel(
        "glmmTMB",
        formula={"cond": "count ~ mined + (1 | site)", "zi": "~ mined"},
        parameters={
            "zero_inflated": ["(Intercept)", "minedno"],
            "sigma": ["sd_site"],
            "random": ["(Intercept)"],
            "conditional": ["(Intercept)", "minedno"],
        },
    )
    result = find_parameters(model)
    assert list(result) == ["conditional", "random", "zero_inflated", "sigma"]
    assert find_parameters(model, flatten=True) == ["(Intercept)", "minedno", "sd_site"]


def test_find_parameters_unknown():
    assert find_parameters(FittedModel("lm", formula="y ~ x")) is None
    assert find_parameters(FittedModel("lm", formula="y ~ x", parameters=[])) is None


def test_get_parameters_names_only():
    model = FittedModel("lm", formula="y ~ x", parameters=["(Intercept)", "x"])
    parameters = get_parameters(model)
    assert parameters.shape == (2, 2)
    assert parameters["estimate"].isna().all()


def test_get_parameters_components():
    model = FittedModel(
        "lme",
        call={"fixed": "y ~ x", "random": "~ 1 | g"},
        parameters={
            "conditional": pd.Series([2.0, 0.5], index=["(Intercept)", "x"]),
            "random": {"(Intercept)": 1.2},
        },
    )
    parameters = get_parameters(model, component="all")
    assert list(parameters["component"]) == ["conditional", "conditional", "random"]
    assert np.allclose(parameters["estimate"], [2.0, 0.5, 1.2])

    assert get_parameters(model, component="dispersion").empty
    assert get_parameters(FittedModel("lm", formula="y ~ x"), component="all").empty
