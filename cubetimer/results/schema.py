from __future__ import annotations

"""Pydantic models for recorded solves.

Timestamps are stored as ISO-8601 strings and normalized to timezone-aware
UTC datetimes on load. A timestamp that cannot be parsed becomes "now" so the
record itself is kept.
"""

from datetime import datetime, timezone
from typing import Any, List

from pydantic import BaseModel, Field, computed_field, field_validator

CFOP_STEPS = ("Cross", "F2L", "OLL", "PLL")

STEP_LABELS = {
    "Cross": "Cross",
    "F2L": "F2L (First Two Layers)",
    "OLL": "OLL (Orient Last Layer)",
    "PLL": "PLL (Permute Last Layer)",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_timestamp(v: Any) -> datetime:
    if isinstance(v, datetime):
        dt = v
    elif isinstance(v, str):
        try:
            dt = datetime.fromisoformat(v.replace("Z", "+00:00"))
        except ValueError:
            return utcnow()
    else:
        return utcnow()
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class StepTime(BaseModel):
    name: str
    elapsed: int = Field(ge=0)

    @field_validator("name")
    @classmethod
    def _known_step(cls, v: str) -> str:
        if v not in CFOP_STEPS:
            raise ValueError(f"unknown CFOP step: {v}")
        return v


class SolveRecord(BaseModel):
    id: int = Field(default=0, ge=0)
    elapsed: int = Field(ge=0)
    raw_elapsed: int | None = Field(default=None, ge=0)
    penalty: int = Field(default=0, ge=0)
    recorded_at: datetime = Field(default_factory=utcnow)
    is_personal_best: bool = False

    @field_validator("recorded_at", mode="before")
    @classmethod
    def _ensure_utc(cls, v: Any) -> datetime:
        return _coerce_timestamp(v)

    @property
    def value(self) -> int:
        return self.elapsed

    def to_json(self) -> dict:
        return self.model_dump(mode="json")


class StepSolveRecord(BaseModel):
    id: int = Field(default=0, ge=0)
    steps: List[StepTime] = Field(min_length=len(CFOP_STEPS), max_length=len(CFOP_STEPS))
    recorded_at: datetime = Field(default_factory=utcnow)
    is_personal_best: bool = False

    @field_validator("steps")
    @classmethod
    def _cfop_order(cls, v: List[StepTime]) -> List[StepTime]:
        names = tuple(s.name for s in v)
        if names != CFOP_STEPS:
            raise ValueError(f"steps must be {', '.join(CFOP_STEPS)} in order")
        return v

    @field_validator("recorded_at", mode="before")
    @classmethod
    def _ensure_utc(cls, v: Any) -> datetime:
        return _coerce_timestamp(v)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return sum(s.elapsed for s in self.steps)

    @property
    def value(self) -> int:
        return self.total

    def step(self, name: str) -> StepTime:
        for s in self.steps:
            if s.name == name:
                return s
        raise KeyError(name)

    def to_json(self) -> dict:
        return self.model_dump(mode="json")


class IndividualStepRecord(BaseModel):
    step: str
    elapsed: int = Field(ge=0)
    recorded_at: datetime = Field(default_factory=utcnow)

    @field_validator("step")
    @classmethod
    def _known_step(cls, v: str) -> str:
        if v not in CFOP_STEPS:
            raise ValueError(f"unknown CFOP step: {v}")
        return v

    @field_validator("recorded_at", mode="before")
    @classmethod
    def _ensure_utc(cls, v: Any) -> datetime:
        return _coerce_timestamp(v)

    def to_json(self) -> dict:
        return self.model_dump(mode="json")
