"""Monte Carlo simulation engine."""

from .meter import effective_chance
from .engine import run_trials, run_experiments, simulate_entry, build_experiments

__all__ = [
    "effective_chance",
    "run_trials",
    "run_experiments",
    "simulate_entry",
    "build_experiments",
]
