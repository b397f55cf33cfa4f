"""
Constants and configuration for the anomaly detection engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict, List

from pydantic_settings import BaseSettings


ANOMALY_ENGINE_PROMETHEUS_URL = os.getenv("ANOMALY_ENGINE_PROMETHEUS_URL", "http://mimir:9009").rstrip("/")
ANOMALY_ENGINE_PROMETHEUS_PATH = os.getenv("ANOMALY_ENGINE_PROMETHEUS_PATH", "/prometheus/api/v1/query_range")
ANOMALY_ENGINE_TENANT_ID = os.getenv("ANOMALY_ENGINE_TENANT_ID", "anonymous")
ANOMALY_ENGINE_CONNECTOR_TIMEOUT = int(os.getenv("ANOMALY_ENGINE_CONNECTOR_TIMEOUT", "30"))
ANOMALY_ENGINE_QUERY_STEP = os.getenv("ANOMALY_ENGINE_QUERY_STEP", "1h")

DEFAULT_METHODS: List[str] = ["zscore", "iqr", "local_density"]
DASHBOARD_METHODS: List[str] = ["zscore", "iqr"]


class Settings(BaseSettings):
    prometheus_url: str = ANOMALY_ENGINE_PROMETHEUS_URL
    prometheus_path: str = ANOMALY_ENGINE_PROMETHEUS_PATH
    tenant_id: str = ANOMALY_ENGINE_TENANT_ID
    connector_timeout: int = ANOMALY_ENGINE_CONNECTOR_TIMEOUT
    query_step: str = ANOMALY_ENGINE_QUERY_STEP

    # pipeline defaults
    default_min_data_points: int = 30
    default_confidence_level: float = 0.95

    # sensitivity tables shared by the detectors
    zscore_thresholds: Dict[str, float] = {"low": 3.5, "medium": 3.0, "high": 2.5}
    sensitivity_multipliers: Dict[str, float] = {"low": 3.0, "medium": 2.0, "high": 1.5}
    # iqr-score cutoffs used for single point checks against a baseline
    iqr_score_thresholds: Dict[str, float] = {"low": 2.5, "medium": 1.5, "high": 1.0}

    # detector tuning
    mad_scale: float = 0.6745
    mad_threshold_factor: float = 2.0
    zscore_score_divisor: float = 5.0
    mad_score_divisor: float = 10.0
    density_score_divisor: float = 5.0
    window_fraction: float = 0.1
    window_min_size: int = 5

    # severity score cutoffs applied to merged confidence
    severity_score_critical: float = 0.9
    severity_score_high: float = 0.7
    severity_score_medium: float = 0.5

    # trend
    trend_stable_slope: float = 0.01

    # seasonality
    seasonality_period: int = 7
    seasonality_min_cycles: int = 4
    seasonality_max_lag: int = 30
    seasonality_peak_threshold: float = 0.5
    seasonality_top_peaks: int = 3

    # realtime checks
    realtime_min_history: int = 30
    realtime_history_days: int = 90
    realtime_smoothing_alpha: float = 0.3
    realtime_confidence_divisor: float = 5.0

    # dashboard fan-out
    dashboard_max_parallel_metrics: int = 4

    model_config = {
        "env_prefix": "ANOMALY_ENGINE_",
        "extra": "ignore",
    }


settings = Settings()
