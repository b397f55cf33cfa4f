"""
Test cases for the least-squares trend analysis, including direction classification and forecasting.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math

import pytest

from config import settings
from engine.enums import TrendDirection
from engine.trend import TrendAnalysis, analyze


def test_linear_increasing_series():
    values = list(range(50))
    t = analyze(values)
    assert t.slope == pytest.approx(1.0)
    assert t.intercept == pytest.approx(0.0, abs=1e-9)
    assert t.r_squared > 0.95
    assert t.direction == TrendDirection.increasing
    assert t.forecast(10) > values[-1]
    assert t.forecast(10) == pytest.approx(59.0)


def test_linear_decreasing_series():
    t = analyze([100.0 - 2 * i for i in range(40)])
    assert t.slope < 0
    assert t.direction == TrendDirection.decreasing


def test_constant_series_is_stable_without_nan():
    t = analyze([100.0] * 30)
    assert t.slope == pytest.approx(0.0)
    assert t.direction == TrendDirection.stable
    assert t.r_squared == 0.0
    assert not math.isnan(t.forecast(5))


def test_small_slope_counts_as_stable(monkeypatch):
    values = [0.005 * i for i in range(40)]
    assert analyze(values).direction == TrendDirection.stable
    monkeypatch.setattr(settings, "trend_stable_slope", 0.001)
    assert analyze(values).direction == TrendDirection.increasing


def test_single_point_has_flat_trend():
    t = analyze([42.0])
    assert t.slope == 0.0
    assert t.intercept == 42.0
    assert t.forecast(3) == 42.0


def test_forecast_is_pure_value_method():
    t = TrendAnalysis(slope=2.0, intercept=1.0, r_squared=1.0, direction=TrendDirection.increasing, n=10)
    assert t.forecast(0) == pytest.approx(19.0)
    assert t.forecast(1) == pytest.approx(21.0)
