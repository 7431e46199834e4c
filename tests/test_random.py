import warnings

import pandas as pd
import pytest

from modelinsight.config import config
from modelinsight.filters import InvalidFilterArgument
from modelinsight.model import FittedModel
from modelinsight.random import (
    NoRandomStructureError,
    NoRandomStructureWarning,
    find_random,
    get_random,
)


@pytest.fixture(scope="module")
def data():
    return pd.DataFrame(
        {
            "y": [1.0, 2.0, 3.0, 4.0],
            "x": [0.5, 0.1, 0.3, 0.2],
            "a": ["a1", "a1", "a2", "a2"],
            "b": ["b1", "b2", "b1", "b2"],
        }
    )


def test_find_random_nested():
    model = FittedModel("lmerMod", formula="y ~ x + (1 | a/b)")
    assert find_random(model) == {"random": ["b:a", "a"]}
    assert find_random(model, split_nested=True) == {"random": ["b", "a"]}
    assert find_random(model, split_nested=True, flatten=True) == ["b", "a"]


def test_find_random_zero_inflated():
    model = FittedModel(
        "glmmTMB",
        formula={"cond": "count ~ mined + (1 | site)", "zi": "~ spp + (1 | year)"},
    )
    assert find_random(model) == {"random": ["site"], "zero_inflated_random": ["year"]}
    assert find_random(model, component="conditional") == {"random": ["site"]}
    assert find_random(model, component="zi") == {"zero_inflated_random": ["year"]}
    assert find_random(model, flatten=True) == ["site", "year"]

    with pytest.raises(InvalidFilterArgument):
        find_random(model, component="dispersion")


def test_find_random_effects():
    model = FittedModel("lmerMod", formula="y ~ x + (1 | a)")
    assert find_random(model, effects="random") == {"random": ["a"]}
    assert find_random(model, effects="all") == {"random": ["a"]}
    assert find_random(model, effects="fixed") is None

    with pytest.raises(InvalidFilterArgument):
        find_random(model, effects="both")


def test_find_random_none():
    assert find_random(FittedModel("lm", formula="y ~ x")) is None
    assert find_random(FittedModel("unknownModel", formula="y ~ x")) is None


def test_find_random_multivariate():
    model = FittedModel("stanmvreg", formula=["y1 ~ x + (1 | g)", "y2 ~ x"])
    assert find_random(model) == {"y1": {"random": ["g"]}}
    assert find_random(model, flatten=True) == ["g"]


def test_get_random(data):
    model = FittedModel("lmerMod", formula="y ~ x + (1 | a:b)", data=data)
    pd.testing.assert_frame_equal(get_random(model), data[["a", "b"]])


def test_get_random_without_data():
    model = FittedModel("lmerMod", formula="y ~ x + (1 | a)")
    with pytest.raises(ValueError, match="does not carry the data"):
        get_random(model)


def test_get_random_no_random_structure(data):
    model = FittedModel("lm", formula="y ~ x", data=data)

    with pytest.warns(NoRandomStructureWarning, match="No random effects found"):
        assert get_random(model) is model

    config.NO_RANDOM_STRUCTURE = "error"
    with pytest.raises(NoRandomStructureError, match="No random effects found"):
        get_random(model)

    config.NO_RANDOM_STRUCTURE = "silent"
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert get_random(model) is model
