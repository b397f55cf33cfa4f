"""
Test cases for merging per-method scores into anomaly records: confidence averaging, severity banding, expected values and ordering.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import numpy as np
import pytest

from api.requests import DetectionOptions
from engine.aggregate import expected_value, merge, summarize
from engine.detectors import MethodScore
from engine.enums import DetectionMethod, Severity

from conftest import make_points


def test_expected_value_excludes_the_point_itself():
    values = np.array([1.0] * 5 + [100.0] + [1.0] * 5)
    assert expected_value(values, 5) == pytest.approx(1.0)


def test_expected_value_window_is_clipped_at_edges():
    values = np.arange(20, dtype=float)
    # window of five on the right only: 1..5
    assert expected_value(values, 0) == pytest.approx(3.0)


def test_merge_averages_scores_and_keeps_method_order():
    values = np.array([1.0] * 20)
    data = make_points(values, metadata={"source": "test"})
    method_scores = [
        (DetectionMethod.zscore, [MethodScore(3, 1.0, "z"), MethodScore(7, 0.4, "z7")]),
        (DetectionMethod.iqr, [MethodScore(3, 0.6, "iqr")]),
    ]
    anomalies = merge(data, values, method_scores)

    assert [a.index for a in anomalies] == [3, 7]
    top = anomalies[0]
    assert top.confidence == pytest.approx(0.8)
    assert top.severity == Severity.high
    assert top.methods == ["zscore", "iqr"]
    assert top.reasons == ["z", "iqr"]
    assert top.metadata == {"source": "test"}
    assert top.timestamp == data[3].timestamp
    assert anomalies[1].severity == Severity.low


def test_merge_ties_keep_index_order():
    values = np.array([1.0] * 20)
    data = make_points(values)
    method_scores = [
        (DetectionMethod.zscore, [MethodScore(12, 0.5, "a"), MethodScore(4, 0.5, "b"), MethodScore(9, 0.9, "c")]),
    ]
    anomalies = merge(data, values, method_scores)
    assert [a.index for a in anomalies] == [9, 4, 12]


def test_merge_deviation_is_distance_from_expected():
    values = np.array([10.0] * 10 + [40.0] + [10.0] * 10)
    data = make_points(values)
    anomalies = merge(data, values, [(DetectionMethod.zscore, [MethodScore(10, 1.0, "z")])])
    assert anomalies[0].expected_value == pytest.approx(10.0)
    assert anomalies[0].deviation == pytest.approx(30.0)
    assert anomalies[0].severity == Severity.critical


def test_summarize_counts_by_severity():
    values = np.array([1.0] * 10)
    data = make_points(values)
    anomalies = merge(
        data,
        values,
        [(DetectionMethod.zscore, [MethodScore(1, 0.95, "a"), MethodScore(2, 0.75, "b"), MethodScore(3, 0.1, "c")])],
    )
    options = DetectionOptions(methods=("zscore",), confidence_level=0.9)
    summary = summarize(anomalies, len(data), options)
    assert summary.anomaly_count == 3
    assert summary.anomaly_rate == pytest.approx(0.3)
    assert summary.severity_counts.critical == 1
    assert summary.severity_counts.high == 1
    assert summary.severity_counts.medium == 0
    assert summary.severity_counts.low == 1
    assert summary.confidence_level == 0.9
    assert summary.methods == ["zscore"]
