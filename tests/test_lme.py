import numpy as np
import pytest

from modelinsight import (
    find_formula,
    find_parameters,
    find_predictors,
    find_response,
    find_terms,
    get_data,
    get_parameters,
    link_function,
    link_inverse,
    model_info,
    n_obs,
)
from modelinsight.model import FittedModel


@pytest.fixture(scope="module")
def model(sleepstudy):
    return FittedModel(
        "lme",
        call={"fixed": "Reaction ~ Days", "random": "~1 + Days | Subject"},
        data=sleepstudy,
        parameters={
            "conditional": ["(Intercept)", "Days"],
            "random": ["(Intercept)", "Days"],
        },
    )


def test_model_info(model):
    assert model_info(model).is_linear


def test_find_predictors(model):
    assert find_predictors(model) == {"conditional": ["Days"]}
    assert find_predictors(model, effects="all") == {
        "conditional": ["Days"],
        "random": ["Subject"],
    }
    assert find_predictors(model, flatten=True) == ["Days"]
    assert find_predictors(model, effects="random") == {"random": ["Subject"]}


def test_find_response(model):
    assert find_response(model) == "Reaction"


def test_link_inverse(model):
    assert np.isclose(link_inverse(model)(0.2), 0.2)


def test_get_data(model):
    data = get_data(model)
    assert data.shape[0] == 180
    assert list(data.columns) == ["Reaction", "Days", "Subject"]


def test_find_formula(model):
    formulas = find_formula(model)
    assert len(formulas) == 2
    assert formulas == {"conditional": "Reaction ~ Days", "random": "~1 + Days | Subject"}


def test_find_terms(model):
    assert find_terms(model) == {
        "response": ["Reaction"],
        "conditional": ["Days"],
        "random": ["Subject"],
    }
    assert find_terms(model, flatten=True) == ["Reaction", "Days", "Subject"]


def test_n_obs(model):
    assert n_obs(model) == 180


def test_link_function(model):
    assert link_function(model) is not None


def test_find_parameters(model):
    assert find_parameters(model) == {
        "conditional": ["(Intercept)", "Days"],
        "random": ["(Intercept)", "Days"],
    }
    parameters = get_parameters(model)
    assert parameters.shape[0] == 2
    assert list(parameters["parameter"]) == ["(Intercept)", "Days"]
