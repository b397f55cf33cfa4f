"""
Common detector contract: every scoring strategy takes the raw value array plus the detection options and returns one MethodScore per flagged index, so strategies can be swapped or combined freely by the registry.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

import numpy as np

from engine.enums import DetectionMethod, Sensitivity
from config import settings

if TYPE_CHECKING:
    from api.requests import DetectionOptions


@dataclass(frozen=True)
class MethodScore:
    index: int
    score: float
    reason: str


def window_size(n: int) -> int:
    return max(settings.window_min_size, int(np.floor(n * settings.window_fraction)))


def sensitivity_multiplier(sensitivity: Sensitivity) -> float:
    return settings.sensitivity_multipliers[Sensitivity(sensitivity).value]


def zscore_threshold(sensitivity: Sensitivity) -> float:
    return settings.zscore_thresholds[Sensitivity(sensitivity).value]


def iqr_score_threshold(sensitivity: Sensitivity) -> float:
    return settings.iqr_score_thresholds[Sensitivity(sensitivity).value]


class Detector(ABC):
    method: DetectionMethod

    @abstractmethod
    def score(self, values: np.ndarray, options: "DetectionOptions") -> List[MethodScore]: ...
