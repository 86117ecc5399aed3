"""Unit tests for the formatting helpers."""

import pytest

from deinflation.output.utils import format_money, format_percent, month_name


@pytest.mark.parametrize(
    "value, expected",
    [
        (251.3213, "$251.32"),
        (1234567.891, "$1,234,567.89"),
        (0.005, "$0.01"),
        (2.675, "$2.68"),
        (-204.2459, "-$204.25"),
        (-0.001, "$0.00"),
        (0.0, "$0.00"),
    ],
)
def test_format_money(value, expected):
    assert format_money(value) == expected


def test_format_money_symbol():
    assert format_money(5, symbol="€") == "€5.00"


def test_format_percent():
    assert format_percent(125.6669) == "125.67%"
    assert format_percent(100) == "100.00%"


def test_month_name():
    assert month_name(1) == "January"
    assert month_name(12) == "December"
    with pytest.raises(ValueError):
        month_name(13)


def test_format_money_handles_huge_values():
    assert format_money(1e30) == "$1" + ",000" * 10 + ".00"
    assert format_money(-1e300) == "-$1" + ",000" * 100 + ".00"
