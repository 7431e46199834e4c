from modelinsight import bars
from modelinsight.formula import parse_expression
from modelinsight.printer import deparse


def find_bars(code):
    return [deparse(bar) for bar in bars.find_bars(parse_expression(code))]


def no_bars(code):
    return deparse(bars.no_bars(parse_expression(code)))


def test_find_bars():
    assert find_bars("x + (1 | g)") == ["1 | g"]
    assert find_bars("x + (1 + x | g) + (1 | h)") == ["1 + x | g", "1 | h"]
    assert find_bars("x + z") == []


def test_find_bars_nested():
    assert find_bars("x + (1 | a/b)") == ["1 | b:a", "1 | a"]
    assert find_bars("(1 | a/b/c)") == ["1 | c:b:a", "1 | b:a", "1 | a"]


def test_find_bars_double_bar():
    assert find_bars("x + (1 + x || g)") == ["1 | g", "0 + x | g"]
    assert find_bars("(0 + x + z || g)") == ["0 + x | g", "0 + z | g"]


def test_find_bars_interaction_grouping_factor():
    assert find_bars("(1 | RESP) + (1 | RESP:PROD)") == ["1 | RESP", "1 | RESP:PROD"]


def test_no_bars():
    assert no_bars("x + z + (1 | g)") == "x + z"
    assert no_bars("(1 | g)") == "1"
    assert no_bars("x - 1 + (x | g)") == "x - 1"
    assert no_bars("x + z") == "x + z"


def test_has_bars():
    assert bars.has_bars(parse_expression("x + (1 | g)"))
    assert not bars.has_bars(parse_expression("x + g"))
