from __future__ import annotations

"""Analytics configuration (hyperparameters) using Pydantic."""

from typing import List
from pydantic import BaseModel, Field


class AnalyticsConfig(BaseModel):
    """Hyperparameters for trend computations and smoothing.

    - rolling_windows: average-of-n windows added to the solves frame
    - smoothing_span: EWMA span in solves (>1)
    """

    rolling_windows: List[int] = Field(default_factory=lambda: [5, 12])
    smoothing_span: int = Field(10, gt=1)
