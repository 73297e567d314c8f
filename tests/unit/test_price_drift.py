"""Unit tests for percentage drift from the 52-week extremes."""

from __future__ import annotations

import math

import pytest

from src.application.services.price_drift import pct_drift, pct_from_high, pct_from_low


def test_pct_from_high_below_high_is_negative() -> None:
    assert pct_from_high(1234.56, 1500.0) == pytest.approx(-17.696, abs=1e-3)


def test_pct_from_low_above_low_is_positive() -> None:
    assert pct_from_low(1234.56, 900.0) == pytest.approx(37.173, abs=1e-3)


def test_at_the_extreme_is_zero() -> None:
    assert pct_from_high(100.0, 100.0) == 0.0


def test_zero_reference_yields_nan_not_exception() -> None:
    assert math.isnan(pct_from_high(10.0, 0.0))
    assert math.isnan(pct_from_low(10.0, 0))


@pytest.mark.parametrize(
    "current, reference",
    [
        (float("nan"), 100.0),
        (100.0, float("nan")),
        (float("inf"), 100.0),
        (100.0, float("-inf")),
        (None, 100.0),
        (100.0, None),
    ],
)
def test_non_finite_inputs_yield_nan(current, reference) -> None:
    assert math.isnan(pct_drift(current, reference))
