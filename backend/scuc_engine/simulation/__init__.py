"""24-hour simulation driver and result records."""

from .runner import DailySummary, HourlyResult, run_simulation, simulate_hour, summarize_results

__all__ = [
    "DailySummary",
    "HourlyResult",
    "run_simulation",
    "simulate_hour",
    "summarize_results",
]
