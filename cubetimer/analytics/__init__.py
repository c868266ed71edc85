from .config import AnalyticsConfig
from .metrics import compute_metrics, rolling_average, step_breakdown, step_share
from .prepare import solves_frame, step_solves_frame
from .smoothing import ewma_by_solve
from .plots import plot_trend, plot_step_breakdown

__all__ = [
    "AnalyticsConfig",
    "compute_metrics",
    "rolling_average",
    "step_breakdown",
    "step_share",
    "solves_frame",
    "step_solves_frame",
    "ewma_by_solve",
    "plot_trend",
    "plot_step_breakdown",
]
