"""
Core data structures for the RNG meter drop-rate simulator.

Input loot entries, per-experiment counters and the per-entry result record.
"""

import math
from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class LootEntry:
    """
    A loot item that can drop from a floor.

    Attributes:
        display_name: Human-readable item name
        id: Stable item identifier (unique within a floor)
        base_chance: Unboosted drop probability (0-1)
        max_score: Meter score at which the drop is guaranteed
    """
    display_name: str
    id: str
    base_chance: float
    max_score: float


@dataclass(frozen=True)
class TrialOutcome:
    """
    Raw counters from one Monte Carlo experiment.

    Attributes:
        n_trials: Number of simulated attempts
        successes: Attempts that produced a drop (first draw or reroll)
        rerolls: Attempts whose first draw failed and consumed a reroll
    """
    n_trials: int
    successes: int
    rerolls: int = 0

    @property
    def chance(self) -> float:
        """Realized drop rate per attempt."""
        return self.successes / self.n_trials

    @property
    def rerolls_per_drop(self) -> float:
        """Rerolls consumed per successful drop; NaN when nothing dropped."""
        if self.successes == 0:
            return math.nan
        return self.rerolls / self.successes


@dataclass(frozen=True)
class SimulationResult:
    """
    Simulated drop statistics for a single loot entry.

    Chances are successes per attempt. Reroll amounts are rerolls consumed
    per successful drop (NaN when the experiment produced no drops).
    """
    display_name: str
    id: str
    max_score: float
    base_chance: float
    meter_s_chance: float
    meter_s_plus_chance: float
    base_reroll_chance: float
    base_reroll_amount_per_drop: float
    meter_s_reroll_chance: float
    meter_s_reroll_amount_per_drop: float
    meter_s_plus_reroll_chance: float
    meter_s_plus_reroll_amount_per_drop: float

    def to_dict(self) -> Dict:
        """Convert to serializable dict."""
        return {
            'display_name': self.display_name,
            'id': self.id,
            'max_score': self.max_score,
            'base_chance': self.base_chance,
            'meter_s_chance': self.meter_s_chance,
            'meter_s_plus_chance': self.meter_s_plus_chance,
            'base_reroll_chance': self.base_reroll_chance,
            'base_reroll_amount_per_drop': self.base_reroll_amount_per_drop,
            'meter_s_reroll_chance': self.meter_s_reroll_chance,
            'meter_s_reroll_amount_per_drop': self.meter_s_reroll_amount_per_drop,
            'meter_s_plus_reroll_chance': self.meter_s_plus_reroll_chance,
            'meter_s_plus_reroll_amount_per_drop': self.meter_s_plus_reroll_amount_per_drop,
        }


Floor = List[LootEntry]
Catalog = Dict[str, Floor]
ResultCatalog = Dict[str, List[SimulationResult]]


def count_entries(catalog: Dict[str, list]) -> int:
    """Total number of entries across all floors."""
    return sum(len(entries) for entries in catalog.values())
