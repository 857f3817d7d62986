"""
RNG meter drop-rate scaling.

The meter raises an item's drop chance linearly with its fill fraction and
guarantees the drop once the stored score reaches the item's max score.
"""

from numba import njit

from ..config import METER_BONUS_PCT


@njit(cache=True)
def effective_chance(base_chance, accrued_score, max_score):
    """
    Drop chance after applying the meter boost.

    Returns exactly 1.0 once accrued_score reaches max_score. Below the
    threshold the result is not clamped; with the small bonus percentage it
    only exceeds 1.0 for base chances already within ~2% of certainty.

    Compiled with numba so the trial loop and Python callers share the same
    definition. max_score must be positive (validated at load time).
    """
    if accrued_score >= max_score:
        return 1.0
    extra_multiplier = METER_BONUS_PCT * (accrued_score / max_score) / 100.0
    return base_chance * (1.0 + extra_multiplier)
