"""
Test cases for the statistics calculator, covering population moments, interpolated percentiles and the zero-spread guards.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import numpy as np
import pytest

from engine.stats import compute, iqr_score, median, percentile, quartiles, z_score


def test_compute_uses_population_variance():
    stats = compute([2, 4, 4, 4, 5, 5, 7, 9])
    assert stats.mean == pytest.approx(5.0)
    assert stats.variance == pytest.approx(4.0)
    assert stats.std_dev == pytest.approx(2.0)
    assert stats.min == 2.0
    assert stats.max == 9.0
    assert stats.median == pytest.approx(4.5)
    assert stats.count == 8


def test_percentile_interpolates_between_ranks():
    ordered = np.array([1.0, 2.0, 3.0, 4.0])
    # index = 0.25 * 3 = 0.75 -> 1 * 0.25 + 2 * 0.75
    assert percentile(ordered, 25) == pytest.approx(1.75)
    assert percentile(ordered, 0) == 1.0
    assert percentile(ordered, 100) == 4.0
    assert percentile(np.array([7.0]), 50) == 7.0


def test_quartiles_and_median_do_not_mutate_input():
    values = [9.0, 1.0, 5.0, 3.0, 7.0]
    q1, q3 = quartiles(values)
    assert (q1, q3) == (3.0, 7.0)
    assert median(values) == 5.0
    assert values == [9.0, 1.0, 5.0, 3.0, 7.0]


def test_zero_spread_scores_are_zero():
    stats = compute([100.0] * 40)
    assert stats.std_dev == 0.0
    assert z_score(500.0, stats) == 0.0
    assert iqr_score(500.0, [100.0] * 40) == 0.0


def test_iqr_score_distance_outside_quartiles():
    values = [1.0, 2.0, 3.0, 4.0, 5.0]
    # q1 = 2, q3 = 4, iqr = 2
    assert iqr_score(3.0, values) == 0.0
    assert iqr_score(8.0, values) == pytest.approx(2.0)
    assert iqr_score(0.0, values) == pytest.approx(1.0)
