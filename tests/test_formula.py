import pytest

from modelinsight.formula import Formula
from modelinsight.parser import ParseError
from modelinsight.printer import deparse
from modelinsight.scanner import ScanError


@pytest.mark.parametrize(
    "code, expected",
    [
        ("y~x+z", "y ~ x + z"),
        ("~ 1 + Days | Subject", "~1 + Days | Subject"),
        ("log(y) ~ I(x ^ 2)", "log(y) ~ I(x^2)"),
        ("y ~ a : b + a %in% b", "y ~ a:b + a %in% b"),
        ("y ~ poly(x,2)", "y ~ poly(x, 2)"),
        ("y ~ x + (1 + x || g)", "y ~ x + (1 + x || g)"),
        ("y ~ s(x, by = 'g')", 'y ~ s(x, by = "g")'),
        ("y ~ x - 1", "y ~ x - 1"),
    ],
)
def test_formula_str(code, expected):
    assert str(Formula.parse(code)) == expected


def test_formula_sides():
    formula = Formula.parse("log(Reaction) ~ Days")
    assert not formula.is_one_sided
    assert formula.response == "log(Reaction)"
    assert deparse(formula.rhs) == "Days"

    formula = Formula.parse("~ Days")
    assert formula.is_one_sided
    assert formula.response is None


def test_formula_without_tilde_is_one_sided():
    assert Formula.parse("1 | g") == Formula.parse("~ 1 | g")


def test_formula_within_parenthesis():
    assert Formula.parse("(Q ~ W)") == Formula.parse("Q ~ W")


def test_formula_is_trivial():
    assert Formula.parse("~1").is_trivial
    assert Formula.parse("~0").is_trivial
    assert not Formula.parse("~x").is_trivial
    assert not Formula.parse("y ~ 1").is_trivial


def test_formula_equality():
    assert Formula.parse("y ~ x + z") == "y~x+z"
    assert Formula.parse("y ~ x + z") != "y ~ z + x"
    assert Formula.parse("y ~ x") != "y ~ ~ x"
    assert Formula.parse("y ~ x") != 1
    assert len({Formula.parse("y ~ x"), Formula.parse("y~x")}) == 1


def test_formula_repr():
    assert repr(Formula.parse("y~x")) == "Formula('y ~ x')"


def test_formula_coerce():
    formula = Formula.parse("y ~ x")
    assert Formula.coerce(formula) is formula
    assert Formula.coerce("y ~ x") == formula
    assert Formula.coerce(formula.expr) == formula

    with pytest.raises(TypeError):
        Formula.coerce(1)


def test_formula_parse_errors():
    with pytest.raises(ScanError):
        Formula.parse("y ~ x ~ z")

    with pytest.raises(ParseError):
        Formula.parse("y ~ (x")


def test_formula_terms():
    signs = [sign for sign, _ in Formula.parse("y ~ a + (b - c) - d").terms()]
    assert signs == ["+", "+", "-", "-"]


def test_formula_update():
    base = Formula.parse("lcrmrte ~ lprbarr + factor(year)")
    assert Formula.parse("~ . - lprbarr + lmix").update(base) == "~factor(year) + lmix"
    assert Formula.parse("~ . + lmix").update(base) == "~lprbarr + factor(year) + lmix"
    # Nothing to update
    formula = Formula.parse("~ w + z")
    assert formula.update(base) is formula


def test_formula_update_keeps_new_subtractions():
    base = Formula.parse("y ~ x + z")
    assert Formula.parse("~ . - w").update(base) == "~x + z - w"
