"""
Full pipeline orchestration for drop-rate simulation.

Wires loader, engine and writer together for end-to-end execution.
"""

import concurrent.futures
import logging
import time
from typing import Dict, List, Optional, Tuple

import numpy as np

from .config import (
    DEFAULT_INPUT_PATH, DEFAULT_OUTPUT_PATH, DEFAULT_PRETTY_OUTPUT_PATH,
    DEFAULT_SIM_CONFIG, SimulationConfig
)
from .data.loader import load_catalog
from .data.writer import write_results, write_summary_csv
from .simulation.engine import simulate_entry
from .types import Catalog, LootEntry, ResultCatalog, SimulationResult, count_entries

logger = logging.getLogger(__name__)


# (floor, index within floor, entry, random stream)
EntryTask = Tuple[str, int, LootEntry, np.random.SeedSequence]


def build_tasks(catalog: Catalog, seed: Optional[int] = None) -> List[EntryTask]:
    """
    Partition the catalog into per-entry tasks with independent streams.

    Streams are spawned in catalog order before any work is scheduled, so a
    fixed seed gives the same result regardless of worker count.
    """
    root = np.random.SeedSequence(seed)
    streams = root.spawn(count_entries(catalog))

    tasks = []
    stream_idx = 0
    for floor, entries in catalog.items():
        for idx, entry in enumerate(entries):
            tasks.append((floor, idx, entry, streams[stream_idx]))
            stream_idx += 1
    return tasks


def run_simulation(
    catalog: Catalog,
    config: SimulationConfig = DEFAULT_SIM_CONFIG
) -> ResultCatalog:
    """
    Simulate every loot entry in the catalog.

    Entries run on a process pool unless max_workers is 1 or there is at
    most one entry. Any task failure propagates and aborts the run.

    Args:
        catalog: Floor -> loot entries
        config: Trial count, chunking, seed and pool size

    Returns:
        Floor -> results, same keys as the catalog, entries in input order
    """
    tasks = build_tasks(catalog, config.seed)
    n_tasks = len(tasks)

    slots: Dict[str, List[Optional[SimulationResult]]] = {
        floor: [None] * len(entries) for floor, entries in catalog.items()
    }

    logger.info(
        "Simulating %d entries across %d floors (%d trials per experiment)",
        n_tasks, len(catalog), config.n_trials
    )
    start = time.time()

    if config.max_workers == 1 or n_tasks <= 1:
        for completed, (floor, idx, entry, stream) in enumerate(tasks, start=1):
            slots[floor][idx] = simulate_entry(entry, config, stream)
            _log_progress(completed, n_tasks, floor, entry)
    else:
        with concurrent.futures.ProcessPoolExecutor(max_workers=config.max_workers) as executor:
            futures: Dict[concurrent.futures.Future, Tuple[str, int, LootEntry]] = {}
            for floor, idx, entry, stream in tasks:
                future = executor.submit(simulate_entry, entry, config, stream)
                futures[future] = (floor, idx, entry)

            completed = 0
            for future in concurrent.futures.as_completed(futures):
                floor, idx, entry = futures[future]
                slots[floor][idx] = future.result()
                completed += 1
                _log_progress(completed, n_tasks, floor, entry)

    logger.info("Simulation finished in %.1fs", time.time() - start)

    return {floor: list(floor_results) for floor, floor_results in slots.items()}


def _log_progress(completed: int, total: int, floor: str, entry: LootEntry):
    logger.info("[%d/%d] %s: %s (%s)", completed, total, floor, entry.display_name, entry.id)


def run_pipeline(
    input_path: str = DEFAULT_INPUT_PATH,
    output_path: str = DEFAULT_OUTPUT_PATH,
    pretty_output_path: str = DEFAULT_PRETTY_OUTPUT_PATH,
    config: SimulationConfig = DEFAULT_SIM_CONFIG,
    summary_csv_path: Optional[str] = None
) -> ResultCatalog:
    """
    Load the catalog, simulate every entry and write the outputs.

    Steps:
    1. Load and validate the catalog (fatal on any error)
    2. Simulate all entries
    3. Write compact + indented JSON
    4. Optionally write the flat CSV summary

    Returns:
        The result catalog that was written
    """
    logger.info("Loading loot catalog from %s...", input_path)
    catalog = load_catalog(input_path)

    results = run_simulation(catalog, config)

    write_results(results, output_path, pretty_output_path)
    if summary_csv_path is not None:
        write_summary_csv(results, summary_csv_path)

    return results
