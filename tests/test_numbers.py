import math

import pytest

from services.utils import clamp_non_negative, coerce, format_fixed2, generate_unique_id, parse_number


@pytest.mark.parametrize("value", [None, "", "12", True, math.nan, math.inf, -math.inf, [1]])
def test_coerce_treats_unset_and_non_finite_as_zero(value) -> None:
    assert coerce(value) == 0.0


def test_coerce_keeps_finite_numbers() -> None:
    assert coerce(12) == 12.0
    assert coerce(1.5) == 1.5
    assert coerce(-3.0) == -3.0


def test_format_fixed2() -> None:
    assert format_fixed2(112.5) == "112.50"
    assert format_fixed2(0.456) == "0.46"
    assert format_fixed2(0) == "0.00"
    assert format_fixed2(-0.001) == "0.00"


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, None, "abc"])
def test_format_fixed2_hides_non_finite(value) -> None:
    assert format_fixed2(value) == "0.00"


def test_parse_number_accepts_numbers_and_numeric_strings() -> None:
    assert parse_number(7) == 7.0
    assert parse_number(" 1,5 ") == 1.5
    assert parse_number("200") == 200.0


@pytest.mark.parametrize("raw", [None, "", "  ", "abc", "nan", "inf", True, {}, math.nan])
def test_parse_number_rejects_invalid(raw) -> None:
    assert parse_number(raw) is None


def test_clamp_non_negative() -> None:
    assert clamp_non_negative(None) is None
    assert clamp_non_negative(-4.0) == 0.0
    assert clamp_non_negative(4.0) == 4.0


def test_generate_unique_id_avoids_existing() -> None:
    existing = {generate_unique_id() for _ in range(50)}
    new_id = generate_unique_id(existing)

    assert new_id not in existing
    assert len(new_id) == 12


def test_integers_wider_than_a_double_are_not_numbers() -> None:
    huge = 10 ** 400

    assert coerce(huge) == 0.0
    assert parse_number(huge) is None
    assert format_fixed2(huge) == "0.00"
