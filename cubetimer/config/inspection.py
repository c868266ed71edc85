from __future__ import annotations

"""Inspection settings (competition-style pre-solve countdown) using Pydantic."""

import sys
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, ValidationError

INSPECTION_DURATIONS = (10, 15, 20, 30)
WARNING_THRESHOLDS = (2, 3, 5)


class InspectionConfig(BaseModel):
    """Inspection countdown settings.

    - enabled: whether a start intent begins inspection instead of the solve
    - duration_seconds: inspection allowance; starting later costs +2s
    - show_warnings: flag the last seconds of inspection
    - warning_threshold_seconds: remaining seconds at which the warning shows
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = False
    duration_seconds: int = Field(15, gt=0)
    show_warnings: bool = True
    warning_threshold_seconds: int = Field(3, gt=0)

    @property
    def duration_ms(self) -> int:
        return self.duration_seconds * 1000

    def updated(self, **partial: Any) -> "InspectionConfig":
        """Return a copy with ``partial`` applied, validated as a whole."""
        data = self.model_dump()
        data.update(partial)
        try:
            return InspectionConfig.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid inspection config: {exc}") from exc

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_json(cls, data: Any) -> "InspectionConfig":
        """Parse a stored value, falling back to defaults when unusable."""
        if not isinstance(data, dict):
            return cls()
        known = {k: v for k, v in data.items() if k in cls.model_fields}
        try:
            return cls.model_validate(known)
        except ValidationError:
            print("WARNING: Stored inspection config is invalid, using defaults.", file=sys.stderr)
            return cls()
