"""
Descriptive statistics shared by the detectors, the realtime check and the aggregation step.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.stats.calculator import (
    Statistics,
    as_array,
    compute,
    iqr_score,
    median,
    percentile,
    quartiles,
    z_score,
)

__all__ = [
    "Statistics",
    "as_array",
    "compute",
    "iqr_score",
    "median",
    "percentile",
    "quartiles",
    "z_score",
]
