"""
Enumerations for Severity, Sensitivity, Detection Methods and Trend Direction

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from config import settings


class Severity(str, Enum):
    normal = "normal"
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"

    @classmethod
    def from_score(cls, score: float) -> Severity:
        if score >= settings.severity_score_critical:
            return cls.critical
        if score >= settings.severity_score_high:
            return cls.high
        if score >= settings.severity_score_medium:
            return cls.medium
        return cls.low


class Sensitivity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class DetectionMethod(str, Enum):
    zscore = "zscore"
    iqr = "iqr"
    mad = "mad"
    local_density = "local_density"
    moving_average = "moving_average"

    @classmethod
    def parse(cls, name: str) -> Optional[DetectionMethod]:
        key = str(name or "").strip().lower()
        key = _METHOD_ALIASES.get(key, key)
        if key in cls._value2member_map_:
            return cls(key)
        return None


_METHOD_ALIASES = {
    "isolation_forest": "local_density",
    "z_score": "zscore",
    "moving_avg": "moving_average",
}


class TrendDirection(str, Enum):
    increasing = "increasing"
    decreasing = "decreasing"
    stable = "stable"
