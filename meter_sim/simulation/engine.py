"""
Monte Carlo trial engine for loot drop rates.

Every statistic comes from one parameterized experiment: each attempt adds a
fixed score to the meter, draws against the meter-boosted chance and, when
rerolls are enabled, draws a second time against the unboosted base chance
after a failure. A drop from either draw resets the meter.

Uniforms are generated in chunks from a per-experiment numpy Generator and
consumed by a numba-compiled loop that carries the meter score between
chunks, so memory stays bounded for any trial count.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Union

import numpy as np
from numba import njit

from ..config import DEFAULT_SIM_CONFIG, DEFAULT_CHUNK_SIZE, SimulationConfig
from ..types import LootEntry, SimulationResult, TrialOutcome
from .meter import effective_chance

logger = logging.getLogger(__name__)


SeedLike = Union[None, int, np.random.SeedSequence]

_NO_DRAWS = np.empty(0, dtype=np.float64)


@dataclass(frozen=True)
class Experiment:
    """One accrual regime: meter score per attempt and whether rerolls apply."""
    name: str
    score_per_attempt: float
    reroll: bool


def build_experiments(config: SimulationConfig = DEFAULT_SIM_CONFIG) -> List[Experiment]:
    """
    Experiments run for every loot entry, in stream-assignment order.

    A zero score per attempt keeps the meter empty, so effective_chance
    returns the base chance unchanged.
    """
    return [
        Experiment("meter_s", config.s_run_score, reroll=False),
        Experiment("meter_s_plus", config.s_plus_run_score, reroll=False),
        Experiment("base_reroll", 0.0, reroll=True),
        Experiment("meter_s_reroll", config.s_run_score, reroll=True),
        Experiment("meter_s_plus_reroll", config.s_plus_run_score, reroll=True),
    ]


@njit(cache=True)
def _run_trial_chunk(
    first_draws,
    reroll_draws,
    base_chance,
    max_score,
    score_per_attempt,
    reroll,
    score
):
    """Run len(first_draws) sequential attempts. Returns (successes, rerolls, score)."""
    successes = 0
    rerolls = 0
    for i in range(first_draws.shape[0]):
        score += score_per_attempt
        if first_draws[i] < effective_chance(base_chance, score, max_score):
            successes += 1
            score = 0.0
        elif reroll:
            rerolls += 1
            # Meter doesn't apply on reroll
            if reroll_draws[i] < base_chance:
                successes += 1
                score = 0.0
    return successes, rerolls, score


def run_trials(
    base_chance: float,
    max_score: float,
    score_per_attempt: float,
    reroll: bool,
    n_trials: int,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    seed: SeedLike = None
) -> TrialOutcome:
    """
    Simulate n_trials consecutive attempts on a single continuous meter.

    Args:
        base_chance: Unboosted drop chance (0-1)
        max_score: Meter score that guarantees the drop (must be > 0)
        score_per_attempt: Meter score added before each attempt
        reroll: Grant an unboosted second draw after a failed attempt
        n_trials: Number of attempts
        chunk_size: Uniforms generated per batch
        seed: Random seed (accepts int or SeedSequence)

    Returns:
        TrialOutcome with success and reroll counters
    """
    if n_trials <= 0:
        raise ValueError(f"n_trials must be positive, got {n_trials}")
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if max_score <= 0:
        raise ValueError(f"max_score must be positive, got {max_score}")

    rng = np.random.default_rng(seed)

    successes = 0
    rerolls = 0
    score = 0.0
    remaining = n_trials
    while remaining > 0:
        size = min(chunk_size, remaining)
        first_draws = rng.random(size)
        reroll_draws = rng.random(size) if reroll else _NO_DRAWS
        chunk_successes, chunk_rerolls, score = _run_trial_chunk(
            first_draws, reroll_draws,
            float(base_chance), float(max_score), float(score_per_attempt),
            bool(reroll), score
        )
        successes += chunk_successes
        rerolls += chunk_rerolls
        remaining -= size

    return TrialOutcome(n_trials=n_trials, successes=int(successes), rerolls=int(rerolls))


def run_experiments(
    entry: LootEntry,
    config: SimulationConfig = DEFAULT_SIM_CONFIG,
    seed: SeedLike = None
) -> Dict[str, TrialOutcome]:
    """
    Run every experiment for one entry on independent random streams.

    Returns:
        Dict mapping experiment name -> TrialOutcome
    """
    if not isinstance(seed, np.random.SeedSequence):
        seed = np.random.SeedSequence(seed)

    experiments = build_experiments(config)
    streams = seed.spawn(len(experiments))

    outcomes = {}
    for experiment, stream in zip(experiments, streams):
        outcome = run_trials(
            entry.base_chance,
            entry.max_score,
            experiment.score_per_attempt,
            experiment.reroll,
            config.n_trials,
            chunk_size=config.chunk_size,
            seed=stream
        )
        if experiment.reroll and outcome.successes == 0:
            logger.warning(
                "%s/%s: no drops in %d trials, rerolls per drop is undefined (NaN)",
                entry.id, experiment.name, outcome.n_trials
            )
        outcomes[experiment.name] = outcome

    return outcomes


def simulate_entry(
    entry: LootEntry,
    config: SimulationConfig = DEFAULT_SIM_CONFIG,
    seed: SeedLike = None
) -> SimulationResult:
    """Simulate all drop statistics for a single loot entry."""
    outcomes = run_experiments(entry, config, seed)

    return SimulationResult(
        display_name=entry.display_name,
        id=entry.id,
        max_score=entry.max_score,
        base_chance=entry.base_chance,
        meter_s_chance=outcomes['meter_s'].chance,
        meter_s_plus_chance=outcomes['meter_s_plus'].chance,
        base_reroll_chance=outcomes['base_reroll'].chance,
        base_reroll_amount_per_drop=outcomes['base_reroll'].rerolls_per_drop,
        meter_s_reroll_chance=outcomes['meter_s_reroll'].chance,
        meter_s_reroll_amount_per_drop=outcomes['meter_s_reroll'].rerolls_per_drop,
        meter_s_plus_reroll_chance=outcomes['meter_s_plus_reroll'].chance,
        meter_s_plus_reroll_amount_per_drop=outcomes['meter_s_plus_reroll'].rerolls_per_drop,
    )
