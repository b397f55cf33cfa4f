from __future__ import annotations

from engine.enums import Severity

# severities reported in summaries, most severe first
REPORTED_SEVERITIES: tuple[Severity, ...] = (
    Severity.critical,
    Severity.high,
    Severity.medium,
    Severity.low,
)

INSUFFICIENT_DATA_MESSAGE = "Need at least {required} data points for reliable detection"
INSUFFICIENT_HISTORY_MESSAGE = "Insufficient historical data for reliable detection"
WITHIN_RANGE_MESSAGE = "Value is within normal range"
DEVIATION_MESSAGE = "Value {value:.2f} deviates {pct:.1f}% from expected {expected:.2f}"
