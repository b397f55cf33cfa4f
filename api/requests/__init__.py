from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from config import DEFAULT_METHODS, settings
from engine.enums import DetectionMethod, Sensitivity


class DataPoint(BaseModel):
    model_config = {"frozen": True}

    timestamp: datetime
    value: float
    metadata: Optional[Dict[str, Any]] = None


class TimeRange(BaseModel):
    model_config = {"frozen": True}

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _ordered(self) -> "TimeRange":
        if self.end < self.start:
            raise ValueError("time range end must not precede start")
        return self


class DetectionOptions(BaseModel):
    """Immutable knobs for one detection pass.

    ``methods`` keeps unknown names so callers can see what they asked for;
    they contribute no scores (see :attr:`unknown_methods`).
    """

    model_config = {"frozen": True}

    methods: Tuple[str, ...] = Field(default_factory=lambda: tuple(DEFAULT_METHODS))
    sensitivity: Sensitivity = Sensitivity.medium
    include_seasonality: bool = True
    confidence_level: float = Field(default_factory=lambda: settings.default_confidence_level, ge=0.0, le=1.0)
    min_data_points: int = Field(default_factory=lambda: settings.default_min_data_points, ge=1)

    @field_validator("methods", mode="before")
    @classmethod
    def _normalize_methods(cls, value: Any) -> Tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        names: List[str] = []
        for item in value or ():
            parsed = DetectionMethod.parse(item)
            name = parsed.value if parsed else str(item).strip().lower()
            if name and name not in names:
                names.append(name)
        if not names:
            raise ValueError("at least one detection method is required")
        return tuple(names)

    @property
    def unknown_methods(self) -> List[str]:
        return [n for n in self.methods if DetectionMethod.parse(n) is None]
