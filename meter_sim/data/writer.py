"""
Result export for simulated drop statistics.

Writes the per-floor result catalog as compact and indented JSON, and
optionally as a flat CSV table (one row per loot entry).
"""

import json
import logging
import math
import os
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from ..types import ResultCatalog

logger = logging.getLogger(__name__)


RESULT_COLUMNS = [
    'display_name',
    'id',
    'max_score',
    'base_chance',
    'meter_s_chance',
    'meter_s_plus_chance',
    'base_reroll_chance',
    'base_reroll_amount_per_drop',
    'meter_s_reroll_chance',
    'meter_s_reroll_amount_per_drop',
    'meter_s_plus_reroll_chance',
    'meter_s_plus_reroll_amount_per_drop',
]


def results_to_payload(results: ResultCatalog) -> Dict[str, List[Dict]]:
    """
    Convert the result catalog to plain JSON-ready data.

    Non-finite statistics (undefined reroll ratios) become None so both
    documents stay strict JSON.
    """
    payload = {}
    for floor, floor_results in results.items():
        payload[floor] = [
            {
                key: (None if isinstance(value, float) and not math.isfinite(value) else value)
                for key, value in result.to_dict().items()
            }
            for result in floor_results
        ]
    return payload


def write_results(
    results: ResultCatalog,
    output_path: Union[str, Path],
    pretty_output_path: Union[str, Path]
) -> None:
    """
    Write compact and indented JSON documents.

    Both documents are staged to temporary files next to their targets and
    only moved into place once both writes succeed, so a failure never
    leaves one output from this run without the other.
    """
    payload = results_to_payload(results)
    compact = json.dumps(payload, separators=(',', ':'), allow_nan=False)
    pretty = json.dumps(payload, indent=2, allow_nan=False)

    staged = []
    try:
        for target, text in ((Path(output_path), compact), (Path(pretty_output_path), pretty)):
            tmp = target.with_name(target.name + '.tmp')
            staged.append((tmp, target))
            tmp.write_text(text, encoding='utf-8')
    except OSError:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)
        raise

    for tmp, target in staged:
        os.replace(tmp, target)

    logger.info("Results written to %s and %s", output_path, pretty_output_path)


def results_to_frame(results: ResultCatalog) -> pd.DataFrame:
    """Flatten the result catalog into one row per entry with a floor column."""
    rows = []
    for floor, floor_results in results.items():
        for result in floor_results:
            row = {'floor': floor}
            row.update(result.to_dict())
            rows.append(row)

    return pd.DataFrame(rows, columns=['floor'] + RESULT_COLUMNS)


def write_summary_csv(results: ResultCatalog, path: Union[str, Path]) -> pd.DataFrame:
    """Write the flat result table to CSV and return it."""
    df = results_to_frame(results)
    df.to_csv(path, index=False)
    logger.info("Summary table (%d rows) written to %s", len(df), path)
    return df
