import pytest

from modelinsight.filters import InvalidFilterArgument, VariableFilter
from modelinsight.model import FittedModel
from modelinsight.variables import find_predictors, find_response, find_terms, find_variables


@pytest.fixture(scope="module")
def zeroinfl():
    return FittedModel("zeroinfl", formula="art ~ fem + log(mar) | ment + mar")


@pytest.fixture(scope="module")
def multivariate():
    return FittedModel(
        "stanmvreg", formula=["y1 ~ x + (1 | g)", "log(y2) ~ z + poly(x, 2) + (1 | g)"]
    )


def test_find_predictors_interactions():
    model = FittedModel("lm", formula="y ~ a * b + c:d + log(e) - 1")
    assert find_predictors(model) == {"conditional": ["a", "b", "c", "d", "e"]}


def test_find_predictors_subtracted_terms():
    model = FittedModel("lm", formula="y ~ x + z - x")
    assert find_predictors(model) == {"conditional": ["z"]}


def test_find_predictors_components(zeroinfl):
    assert find_predictors(zeroinfl) == {
        "conditional": ["fem", "mar"],
        "zero_inflated": ["ment", "mar"],
    }
    assert find_predictors(zeroinfl, component="zi") == {"zero_inflated": ["ment", "mar"]}
    assert find_predictors(zeroinfl, component="conditional") == {"conditional": ["fem", "mar"]}
    assert find_predictors(zeroinfl, flatten=True) == ["fem", "mar", "ment"]
    assert find_predictors(zeroinfl, component="dispersion") is None
    assert find_predictors(zeroinfl, effects="random") is None


def test_find_predictors_filter_object(zeroinfl):
    assert find_predictors(zeroinfl, VariableFilter("fixed", "zi")) == {
        "zero_inflated": ["ment", "mar"]
    }


def test_find_predictors_invalid_arguments(zeroinfl):
    with pytest.raises(InvalidFilterArgument):
        find_predictors(zeroinfl, effects="both")

    with pytest.raises(InvalidFilterArgument):
        find_predictors(zeroinfl, component="everything")


def test_find_predictors_zero_inflated_random():
    model = FittedModel(
        "glmmTMB",
        formula={"cond": "count ~ mined + (1 | site)", "zi": "~ spp + (1 | site)"},
    )
    assert find_predictors(model, effects="all") == {
        "conditional": ["mined"],
        "random": ["site"],
        "zero_inflated": ["spp"],
        "zero_inflated_random": ["site"],
    }
    assert find_predictors(model, effects="random", component="zi") == {
        "zero_inflated_random": ["site"]
    }


def test_find_predictors_unsupported_model():
    assert find_predictors(FittedModel("unknownModel", formula="y ~ x")) is None


def test_find_predictors_multivariate(multivariate):
    assert find_predictors(multivariate) == {
        "y1": {"conditional": ["x"]},
        "y2": {"conditional": ["z", "x"]},
    }
    assert find_predictors(multivariate, effects="all", flatten=True) == ["x", "g", "z"]


def test_find_response():
    assert find_response(FittedModel("lm", formula="log(mpg) ~ wt")) == "mpg"
    assert find_response(FittedModel("lm", formula="~ wt")) is None


def test_find_response_multiple_variables():
    model = FittedModel("glm", formula="cbind(incidence, size - incidence) ~ period")
    assert find_response(model) == "cbind(incidence, size - incidence)"
    assert find_response(model, combine=False) == ["incidence", "size"]

    model = FittedModel("coxph", formula="Surv(time, status) ~ age + sex")
    assert find_response(model, combine=False) == ["time", "status"]

    model = FittedModel("glm", formula="successes/trials ~ x")
    assert find_response(model) == "successes / trials"
    assert find_response(model, combine=False) == ["successes", "trials"]


def test_find_response_multivariate(multivariate):
    assert find_response(multivariate) == ["y1", "y2"]


def test_find_terms():
    model = FittedModel("lm", formula="log(Reaction) ~ Days + I(Days^2)")
    assert find_terms(model) == {"response": ["Reaction"], "conditional": ["Days"]}
    assert find_terms(model, flatten=True) == ["Reaction", "Days"]


def test_find_terms_without_response():
    model = FittedModel("lm", formula="~ x + z")
    assert find_terms(model) == {"conditional": ["x", "z"]}


def test_find_terms_component(zeroinfl):
    assert find_terms(zeroinfl, component="zi") == {"zero_inflated": ["ment", "mar"]}
    assert find_terms(zeroinfl, flatten=True) == ["art", "fem", "mar", "ment"]


def test_find_terms_multivariate(multivariate):
    assert find_terms(multivariate) == {
        "y1": {"response": ["y1"], "conditional": ["x"], "random": ["g"]},
        "y2": {"response": ["y2"], "conditional": ["z", "x"], "random": ["g"]},
    }
    assert find_terms(multivariate, flatten=True) == ["y1", "x", "g", "y2", "z"]


def test_find_variables():
    model = FittedModel("lm", formula="log(Reaction) ~ Days + I(Days^2)")
    assert find_variables(model) == {
        "response": ["log(Reaction)"],
        "conditional": ["Days", "I(Days^2)"],
    }
    assert find_variables(model, flatten=True) == ["log(Reaction)", "Days", "I(Days^2)"]


def test_find_variables_random():
    model = FittedModel("lmerMod", formula="y ~ x + (1 | a:b) + (1 | a)")
    assert find_variables(model) == {
        "response": ["y"],
        "conditional": ["x"],
        "random": ["a:b", "a"],
    }
    assert find_variables(model, effects="random") == {
        "response": ["y"],
        "random": ["a:b", "a"],
    }


def test_find_variables_multivariate(multivariate):
    assert find_variables(multivariate, effects="fixed") == {
        "y1": {"response": ["y1"], "conditional": ["x"]},
        "y2": {"response": ["log(y2)"], "conditional": ["z", "poly(x, 2)"]},
    }


def test_find_predictors_excludes_response():
    model = FittedModel("lme", call={"fixed": "Reaction ~ Days", "random": "~1 + Days | Subject"})
    assert find_predictors(model) == {"conditional": ["Days"]}
    assert find_predictors(model, flatten=True) == ["Days"]


def test_find_predictors_endogenous_instruments():
    model = FittedModel("felm", formula="y ~ x | firm | (Q ~ W) | 0")
    assert find_predictors(model) == {"conditional": ["x"], "instruments": ["Q", "W"]}
