"""
Test cases for the realtime single-point check, both the pure evaluation and the provider-backed detector service.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime, timezone

import numpy as np
import pytest

from datasources.exceptions import DataSourceUnavailable
from engine.enums import Severity
from engine.realtime import evaluate, smoothed_expectation
from services.realtime_service import RealtimeDetector

from conftest import FakeProvider


def _baseline(n=50, seed=1):
    rng = np.random.default_rng(seed)
    return list(100.0 + rng.normal(0.0, 0.5, n))


def test_smoothed_expectation_recurrence():
    assert smoothed_expectation([10.0]) == 10.0
    # 0.3 * 20 + 0.7 * 10 = 13, then 0.3 * 20 + 0.7 * 13 = 15.1
    assert smoothed_expectation([10.0, 20.0, 20.0]) == pytest.approx(15.1)
    assert smoothed_expectation([10.0, 20.0], alpha=1.0) == 20.0


def test_extreme_value_is_anomalous():
    result = evaluate(_baseline(), 500.0)
    assert result.is_anomaly is True
    assert result.confidence == 1.0
    assert result.severity == Severity.critical
    assert result.expected_value == pytest.approx(100.0, abs=2.0)
    assert result.deviation_percentage == pytest.approx(400.0, rel=0.05)
    assert "deviates" in result.message
    assert "500.00" in result.message
    assert result.threshold.lower < 100.0 < result.threshold.upper


def test_typical_value_is_normal():
    result = evaluate(_baseline(), 100.0)
    assert result.is_anomaly is False
    assert result.severity == Severity.normal
    assert result.message == "Value is within normal range"
    assert result.z_score < 3.0


def test_insufficient_history_short_circuits():
    for value in (0.0, 100.0, 1e9):
        result = evaluate([100.0] * 29, value)
        assert result.is_anomaly is False
        assert result.confidence == 0.0
        assert "Insufficient" in result.message
        assert result.expected_value is None


def test_flat_history_never_divides_by_zero():
    result = evaluate([100.0] * 40, 500.0)
    assert result.is_anomaly is False
    assert result.z_score == 0.0
    assert result.iqr_score == 0.0


def test_zero_expected_value_reports_zero_percentage():
    result = evaluate([0.0] * 40, 5.0)
    assert result.expected_value == 0.0
    assert result.deviation_percentage == 0.0


def test_negative_baseline_gives_negative_percentage():
    history = [-v for v in _baseline()]
    result = evaluate(history, -500.0)
    assert result.is_anomaly is True
    assert result.expected_value == pytest.approx(-100.0, abs=2.0)
    assert result.deviation == pytest.approx(400.0, abs=2.0)
    assert result.deviation_percentage == pytest.approx(-400.0, rel=0.05)
    assert "% from expected -" in result.message


@pytest.mark.asyncio
async def test_detector_fetches_ninety_days():
    provider = FakeProvider(series={"cpu": _baseline()})
    ts = datetime(2026, 3, 1, tzinfo=timezone.utc)
    result = await RealtimeDetector(provider).detect("cpu", 500.0, ts)
    assert provider.calls == [("fetch", "cpu", 90)]
    assert result.is_anomaly is True
    assert result.timestamp == ts
    assert result.current_value == 500.0


@pytest.mark.asyncio
async def test_detector_reports_insufficient_history():
    provider = FakeProvider(series={"cpu": [100.0] * 10})
    result = await RealtimeDetector(provider).detect("cpu", 500.0)
    assert result.is_anomaly is False
    assert "Insufficient" in result.message
    assert result.timestamp is not None


@pytest.mark.asyncio
async def test_detector_surfaces_provider_errors():
    provider = FakeProvider(errors={"cpu": DataSourceUnavailable("backend down")})
    with pytest.raises(DataSourceUnavailable):
        await RealtimeDetector(provider).detect("cpu", 1.0)
