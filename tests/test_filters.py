import pytest

from modelinsight.filters import COMPONENTS, InvalidFilterArgument, VariableFilter, as_filter


def test_filter_defaults():
    model_filter = VariableFilter()
    assert model_filter.effects == "fixed"
    assert model_filter["component"] == "all"


def test_filter_zi_alias():
    assert VariableFilter("fixed", "zi") == VariableFilter("fixed", "zero_inflated")
    assert VariableFilter("fixed", "zi").component == "zero_inflated"


def test_filter_invalid_values():
    with pytest.raises(InvalidFilterArgument, match="'both' is not a valid value for 'effects'"):
        VariableFilter(effects="both")

    with pytest.raises(ValueError, match="'cond' is not a valid value for 'component'"):
        VariableFilter(component="cond")

    with pytest.raises(KeyError, match="'whatever' is not a valid filter option"):
        VariableFilter().whatever = 1


def test_filter_elements():
    assert VariableFilter("all", "all").elements == list(COMPONENTS)
    assert VariableFilter("random", "all").elements == ["random", "zero_inflated_random"]
    assert VariableFilter("fixed", "conditional").elements == ["conditional"]
    assert VariableFilter("all", "zi").elements == ["zero_inflated", "zero_inflated_random"]
    assert VariableFilter("random", "instruments").elements == []
    assert VariableFilter("fixed", "all").includes("instruments")
    assert not VariableFilter("fixed", "all").includes("random")


def test_as_filter():
    model_filter = VariableFilter("random")
    assert as_filter(model_filter) is model_filter
    assert as_filter("all", "dispersion") == VariableFilter("all", "dispersion")
