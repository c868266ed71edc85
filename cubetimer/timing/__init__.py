from .ticker import Ticker, TickOwner, ticker_factory
from .solve_timer import PENALTY_MS, CompletedSolve, SolvePhase, SolveSnapshot, SolveTimer
from .step_timer import StepSnapshot, StepTimer
from .individual import IndividualSnapshot, IndividualStepTimers, StepLap

__all__ = [
    "Ticker",
    "TickOwner",
    "ticker_factory",
    "PENALTY_MS",
    "CompletedSolve",
    "SolvePhase",
    "SolveSnapshot",
    "SolveTimer",
    "StepSnapshot",
    "StepTimer",
    "IndividualSnapshot",
    "IndividualStepTimers",
    "StepLap",
]
