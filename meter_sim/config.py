"""
Configuration management for the RNG meter drop-rate simulator.

Game-mode constants, run defaults, the SimulationConfig container and
JSON loading utilities.
"""

import json
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Meter Mechanic
# =============================================================================

# Percentage bonus to the drop chance granted by a completely filled meter
# (the boost scales linearly with fill fraction below the threshold).
METER_BONUS_PCT = 2.0

# Score granted to the meter by one full-value run.
BASE_RUN_SCORE = 270.0

# S runs only grant 70% of the run score.
S_SCORE_FACTOR = 0.7

# S+ runs grant a flat, larger score.
S_PLUS_RUN_SCORE = 300.0


# =============================================================================
# Run Defaults
# =============================================================================

DEFAULT_N_TRIALS = 10_000_000

# Uniforms drawn per batch fed to the compiled trial loop. Bounds memory to
# roughly 16 bytes per trial in a chunk (first draw + reroll draw).
DEFAULT_CHUNK_SIZE = 1_000_000

DEFAULT_INPUT_PATH = "dump.json"
DEFAULT_OUTPUT_PATH = "out.json"
DEFAULT_PRETTY_OUTPUT_PATH = "out_pretty.json"


@dataclass(frozen=True)
class SimulationConfig:
    """
    Simulation run parameters.

    Attributes:
        n_trials: Simulated attempts per experiment
        chunk_size: Uniforms drawn per batch inside an experiment
        seed: Root seed for all random streams (None = fresh OS entropy)
        max_workers: Process pool size (None = os.cpu_count(), 1 = inline)
        base_run_score: Meter score of a full-value run
        s_score_factor: Fraction of base_run_score granted by S runs
        s_plus_run_score: Meter score of an S+ run
    """
    n_trials: int = DEFAULT_N_TRIALS
    chunk_size: int = DEFAULT_CHUNK_SIZE
    seed: Optional[int] = None
    max_workers: Optional[int] = None
    base_run_score: float = BASE_RUN_SCORE
    s_score_factor: float = S_SCORE_FACTOR
    s_plus_run_score: float = S_PLUS_RUN_SCORE

    def __post_init__(self) -> None:
        if self.n_trials <= 0:
            raise ValueError("SimulationConfig.n_trials must be a positive integer.")
        if self.chunk_size <= 0:
            raise ValueError("SimulationConfig.chunk_size must be a positive integer.")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError("SimulationConfig.max_workers must be positive when set.")
        if self.base_run_score < 0 or self.s_plus_run_score < 0:
            raise ValueError("Run scores cannot be negative.")
        if not 0.0 <= self.s_score_factor <= 1.0:
            raise ValueError("SimulationConfig.s_score_factor must be within [0, 1].")

    @property
    def s_run_score(self) -> float:
        """Meter score granted per S run."""
        return self.base_run_score * self.s_score_factor


DEFAULT_SIM_CONFIG = SimulationConfig()


# =============================================================================
# JSON Loading Utilities
# =============================================================================

def load_sim_config_from_json(path: str) -> SimulationConfig:
    """
    Load simulation config from JSON file.

    Every key is optional; missing keys fall back to the defaults.

    Expected format:
    {
        "n_trials": 10000000,
        "chunk_size": 1000000,
        "seed": 42,
        "max_workers": 8,
        "base_run_score": 270.0,
        "s_score_factor": 0.7,
        "s_plus_run_score": 300.0
    }

    Raises:
        ValueError: If the document is not an object or a value has the wrong type
    """
    with open(path, 'r') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(
            f"Simulation config must be a JSON object, got {type(data).__name__}"
        )

    try:
        return SimulationConfig(
            n_trials=int(data.get('n_trials', DEFAULT_N_TRIALS)),
            chunk_size=int(data.get('chunk_size', DEFAULT_CHUNK_SIZE)),
            seed=_optional_int(data, 'seed'),
            max_workers=_optional_int(data, 'max_workers'),
            base_run_score=float(data.get('base_run_score', BASE_RUN_SCORE)),
            s_score_factor=float(data.get('s_score_factor', S_SCORE_FACTOR)),
            s_plus_run_score=float(data.get('s_plus_run_score', S_PLUS_RUN_SCORE)),
        )
    except (TypeError, OverflowError) as e:
        raise ValueError(f"Invalid simulation config value: {e}") from e


def _optional_int(data: dict, key: str) -> Optional[int]:
    """Integer setting that may be absent or null; rejects bools, floats and strings."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer or null, got {value!r}")
    return value


def save_sim_config_to_json(config: SimulationConfig, path: str):
    """Save simulation config to JSON file."""
    data = {
        'n_trials': config.n_trials,
        'chunk_size': config.chunk_size,
        'seed': config.seed,
        'max_workers': config.max_workers,
        'base_run_score': config.base_run_score,
        's_score_factor': config.s_score_factor,
        's_plus_run_score': config.s_plus_run_score,
    }

    with open(path, 'w') as f:
        json.dump(data, f, indent=2)
