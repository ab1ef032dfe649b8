import math

import pytest

from cssmicro.parser.numbers import (
    INT32_MAX,
    INT32_MIN,
    Ratio,
    is_weight,
    parse_at_least_one,
    parse_binary,
    parse_complete,
    parse_integer,
    parse_natural_integer,
    parse_natural_number,
    parse_number,
    parse_positive_integer,
    parse_ratio,
    parse_weight,
    saturate_int32,
)
from cssmicro.parser.source import StringSource

ALL_RULES = [
    parse_number,
    parse_integer,
    parse_ratio,
    parse_natural_number,
    parse_at_least_one,
    parse_natural_integer,
    parse_positive_integer,
    parse_binary,
    parse_weight,
]


def _run(rule, text: str):
    source = StringSource(text)
    return rule(source), source.index


@pytest.mark.parametrize(
    "text, expected, end",
    [
        ("0", 0.0, 1),
        ("1.5", 1.5, 3),
        ("-.25", -0.25, 4),
        ("+12", 12.0, 3),
        ("3e2", 300.0, 3),
        ("1.5 2", 1.5, 3),
        ("4/3", 4.0, 1),
    ],
)
def test_parse_number(text: str, expected: float, end: int) -> None:
    value, index = _run(parse_number, text)
    assert value == pytest.approx(expected)
    assert index == end


@pytest.mark.parametrize("text", ["", "px", "12px", "50%", "1e999", "-1e999", "auto"])
def test_parse_number_rejects(text: str) -> None:
    assert _run(parse_number, text) == (None, 0)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123", 123),
        ("-42", -42),
        ("+7", 7),
        ("007", 7),
        ("0", 0),
        ("2147483647", INT32_MAX),
        ("-2147483648", INT32_MIN),
        ("2147483648", INT32_MAX),
        ("-2147483649", INT32_MIN),
        ("99999999999999", INT32_MAX),
        ("-99999999999999", INT32_MIN),
        ("0000000000000000000012", 12),
    ],
)
def test_parse_integer(text: str, expected: int) -> None:
    value, index = _run(parse_integer, text)
    assert value == expected
    assert index == len(text)


@pytest.mark.parametrize("text", ["1.5", "1e3", "12px", "3%", "+99999999999999", "abc", ""])
def test_parse_integer_rejects(text: str) -> None:
    assert _run(parse_integer, text) == (None, 0)


def test_parse_integer_limits_only_overflowing_literals(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CSSMICRO_MAX_INTEGER_LITERAL_LENGTH", "5")
    assert _run(parse_integer, "12345") == (12345, 5)
    assert _run(parse_integer, "123456") == (123456, 6)
    assert _run(parse_integer, "0000000042") == (42, 10)
    assert _run(parse_integer, "99999") == (99999, 5)
    assert _run(parse_integer, "99999999999") == (None, 0)
    assert _run(parse_integer, "-99999999999") == (None, 0)


def test_parse_integer_accepts_zero_padded_in_range_literals() -> None:
    assert _run(parse_integer, "0" * 300 + "1") == (1, 301)
    assert _run(parse_integer, "-" + "0" * 300 + "2147483648") == (INT32_MIN, 311)


def test_parse_integer_handles_huge_digit_runs() -> None:
    literal = "9" * 200
    assert _run(parse_integer, literal) == (INT32_MAX, 200)
    assert _run(parse_integer, "-" + literal) == (INT32_MIN, 201)


@pytest.mark.parametrize(
    "literal, expected",
    [
        ("12", 12),
        ("-12", -12),
        ("99999999999999", INT32_MAX),
        ("-99999999999999", INT32_MIN),
        ("+12", None),
        ("1.0", None),
        ("-", None),
        ("", None),
    ],
)
def test_saturate_int32(literal: str, expected: int | None) -> None:
    assert saturate_int32(literal) == expected


def test_parse_ratio_happy_path() -> None:
    source = StringSource("16/9")
    assert parse_ratio(source) == Ratio(16.0, 9.0)
    assert source.index == 4


@pytest.mark.parametrize(
    "text, expected, end",
    [
        ("16 / 9", Ratio(16.0, 9.0), 6),
        ("4/3 auto", Ratio(4.0, 3.0), 3),
        ("1.5/ 1", Ratio(1.5, 1.0), 6),
        ("-1/0", Ratio(-1.0, 0.0), 4),
    ],
)
def test_parse_ratio(text: str, expected: Ratio, end: int) -> None:
    assert _run(parse_ratio, text) == (expected, end)


@pytest.mark.parametrize("text", ["16/", "16", "16 9", "16*9", "16/9px", "16px/9", "/9", "a/9", ""])
def test_parse_ratio_rewinds_whole_attempt(text: str) -> None:
    assert _run(parse_ratio, text) == (None, 0)


def test_parse_ratio_failure_does_not_leak_numerator() -> None:
    source = StringSource("16/")
    assert parse_ratio(source) is None
    assert source.index == 0
    assert parse_number(source) == 16.0
    assert source.index == 2


def test_ratio_helpers() -> None:
    assert Ratio(16.0, 9.0).css_text == "16/9"
    assert str(Ratio(1.5, 1.0)) == "1.5/1"
    assert math.isclose(Ratio(16.0, 9.0).value, 16 / 9)
    assert Ratio(1.0, 0.0).value is None


@pytest.mark.parametrize(
    "rule, text, expected",
    [
        (parse_natural_number, "0", 0.0),
        (parse_natural_number, "2.5", 2.5),
        (parse_natural_number, "-0.001", None),
        (parse_at_least_one, "1.0", 1.0),
        (parse_at_least_one, "1", 1.0),
        (parse_at_least_one, "0.999", None),
        (parse_at_least_one, "0.9999999999", None),
        (parse_natural_integer, "0", 0),
        (parse_natural_integer, "99999999999", INT32_MAX),
        (parse_natural_integer, "-1", None),
        (parse_natural_integer, "-99999999999", None),
        (parse_positive_integer, "1", 1),
        (parse_positive_integer, "0", None),
        (parse_positive_integer, "-3", None),
        (parse_binary, "0", 0),
        (parse_binary, "1", 1),
        (parse_binary, "2", None),
        (parse_binary, "-1", None),
        (parse_binary, "0.5", None),
    ],
)
def test_constrained_rules(rule, text: str, expected) -> None:
    value, index = _run(rule, text)
    if expected is None:
        assert value is None
        assert index == 0
    else:
        assert value == expected
        assert index == len(text)


@pytest.mark.parametrize("text", ["100", "200", "300", "400", "500", "600", "700", "800", "900"])
def test_parse_weight_accepts(text: str) -> None:
    assert _run(parse_weight, text) == (int(text), len(text))


@pytest.mark.parametrize("text", ["0", "50", "150", "1000", "-100", "400.0", "400px", "99999999999"])
def test_parse_weight_rejects(text: str) -> None:
    assert _run(parse_weight, text) == (None, 0)


@pytest.mark.parametrize(
    "value, expected",
    [(100, True), (900, True), (0, False), (1000, False), (-100, False), (150, False)],
)
def test_is_weight(value: int, expected: bool) -> None:
    assert is_weight(value) is expected


@pytest.mark.parametrize("rule", ALL_RULES, ids=lambda rule: rule.__name__)
@pytest.mark.parametrize("text", ["1px", "100%", "1e", "2fr", "0deg", "16px/9"])
def test_rules_reject_dimensions(rule, text: str) -> None:
    assert _run(rule, text) == (None, 0)


def test_rules_restore_mid_input_position() -> None:
    source = StringSource("aspect: 16/ auto")
    for rule in (parse_ratio, parse_binary, parse_weight):
        source.back_to(8)
        assert rule(source) is None
        assert source.index == 8


@pytest.mark.parametrize(
    "text, rule, expected",
    [
        ("  16 / 9  ", parse_ratio, Ratio(16.0, 9.0)),
        ("700", parse_weight, 700),
        ("/* bold */ 700", parse_weight, 700),
        ("700 bold", parse_weight, None),
        ("1", parse_binary, 1),
        ("", parse_number, None),
        ("1.5em", parse_number, None),
    ],
)
def test_parse_complete(text: str, rule, expected) -> None:
    assert parse_complete(text, rule) == expected
