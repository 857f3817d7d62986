"""
Console summaries of simulated drop statistics.
"""

import math

from .types import ResultCatalog


def _fmt_ratio(value: float) -> str:
    return "n/a" if math.isnan(value) else f"{value:.3f}"


def format_results(results: ResultCatalog) -> str:
    """Format the result catalog into readable console output."""
    lines = []
    lines.append("DROP RATE SIMULATION")
    lines.append("=" * 60)

    for floor, floor_results in results.items():
        lines.append(f"\n  {floor} ({len(floor_results)} entries)")
        for r in floor_results:
            lines.append(
                f"    {r.display_name:<30} base {r.base_chance:.4%} | "
                f"S {r.meter_s_chance:.4%} | S+ {r.meter_s_plus_chance:.4%}"
            )
            lines.append(
                f"    {'':<30} reroll {r.base_reroll_chance:.4%} "
                f"({_fmt_ratio(r.base_reroll_amount_per_drop)}/drop) | "
                f"S reroll {r.meter_s_reroll_chance:.4%} "
                f"({_fmt_ratio(r.meter_s_reroll_amount_per_drop)}/drop) | "
                f"S+ reroll {r.meter_s_plus_reroll_chance:.4%} "
                f"({_fmt_ratio(r.meter_s_plus_reroll_amount_per_drop)}/drop)"
            )

    return "\n".join(lines)
